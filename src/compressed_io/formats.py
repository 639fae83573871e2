"""
Stream Formats
==============

Format tags and the registry that maps them to codec constructors.

Tags are compared by exact string match; ``".GZ"`` and ``" .gz"`` are unknown.

Supported tags:
- ``""``: passthrough, read and write
- ``".gz"``: gzip, read and write
- ``".bz2"``: bzip2, read only
"""

import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import Callable, Dict, Iterator, Optional, Union

from . import codecs
from .errors import UnknownFormatError

logger = logging.getLogger(__name__)

FORMAT_NONE = ""
FORMAT_GZIP = ".gz"
FORMAT_BZIP2 = ".bz2"

CodecConstructor = Callable[..., object]


@dataclass(frozen=True)
class StreamFormat:
    """A format tag and the constructors available for it."""

    tag: str
    name: str
    reader: Optional[CodecConstructor] = None
    writer: Optional[CodecConstructor] = None

    @property
    def can_read(self) -> bool:
        return self.reader is not None

    @property
    def can_write(self) -> bool:
        return self.writer is not None


class FormatRegistry:
    """Registry of stream formats keyed by tag."""

    def __init__(self):
        self.formats: Dict[str, StreamFormat] = {}

    def register(self, stream_format: StreamFormat) -> None:
        if stream_format.tag in self.formats:
            logger.debug(f"Replacing registered format {stream_format.tag!r}")
        self.formats[stream_format.tag] = stream_format

    def get(self, tag: str) -> StreamFormat:
        """Get the format for ``tag``, raising UnknownFormatError if absent."""
        try:
            return self.formats[tag]
        except (KeyError, TypeError):
            raise UnknownFormatError(
                f"Unknown format: {tag}", {"format": tag}
            ) from None

    def __contains__(self, tag) -> bool:
        return tag in self.formats

    def __iter__(self) -> Iterator[StreamFormat]:
        return iter(self.formats.values())


def create_default_registry() -> FormatRegistry:
    """Create a registry with the passthrough, gzip and bzip2 formats."""
    registry = FormatRegistry()
    registry.register(
        StreamFormat(FORMAT_NONE, "none", codecs.passthrough, codecs.passthrough)
    )
    registry.register(
        StreamFormat(
            FORMAT_GZIP, "gzip", codecs.open_gzip_reader, codecs.open_gzip_writer
        )
    )
    # bz2 writing is deliberately not offered
    registry.register(StreamFormat(FORMAT_BZIP2, "bzip2", codecs.open_bzip2_reader))
    return registry


default_registry = create_default_registry()


def list_available_formats(registry: Optional[FormatRegistry] = None):
    """List registered formats and the directions they support.

    Returns
    -------
    dict
        ``{tag: {"name": str, "read": bool, "write": bool}}``
    """
    if registry is None:
        registry = default_registry
    return {
        fmt.tag: {"name": fmt.name, "read": fmt.can_read, "write": fmt.can_write}
        for fmt in registry
    }


def format_for_path(path: Union[str, PurePath]) -> str:
    """Return the last extension of ``path`` including the dot, or ``""``."""
    return PurePath(path).suffix
