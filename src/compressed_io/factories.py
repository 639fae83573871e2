"""
Stream Factories
================

Wrap an already-opened byte stream with transparent decompression or
compression, selected by a format tag such as a file extension.

Two flavours are provided:

- ``wrap_reader`` / ``wrap_writer`` return a ``StreamResult`` carrying either
  the usable stream or the error, with a machine-readable ``kind``.
- ``make_decompressing_reader`` / ``make_compressing_writer`` collapse a
  failure to ``None``; the reason is only in the log.

Usage:
    from compressed_io import make_decompressing_reader

    try:
        f, err = open(path, "rb"), None
    except OSError as e:
        f, err = None, e
    reader = make_decompressing_reader(f, err, format_for_path(path))
    if reader is not None:
        with reader:
            data = reader.read()

Ownership: a factory never closes a handle it did not wrap. If it returns a
failure for a non-``None`` handle, closing that handle is up to the caller.
Once a stream is wrapped, closing the wrapper closes the handle.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .config import DEFAULT_CONFIG, CompressionConfig
from .errors import (
    CodecConstructionError,
    CompressedIOError,
    FailureKind,
    UnsupportedFormatError,
    UpstreamError,
    with_error_handling,
)
from .formats import FormatRegistry, StreamFormat, default_registry

logger = logging.getLogger(__name__)


@dataclass
class StreamResult:
    """Outcome of wrapping a stream: a stream or an error, never both."""

    stream: Optional[Any] = None
    error: Optional[CompressedIOError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[FailureKind]:
        return None if self.error is None else self.error.kind

    def unwrap(self):
        """Return the stream or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.stream


def _check_upstream(handle, prior_error, operation: str) -> None:
    if prior_error is not None or handle is None:
        raise UpstreamError(
            f"{operation}: {prior_error}",
            {"handle": type(handle).__name__},
        )


def resolve_format(
    format_tag: str, direction: str, registry: Optional[FormatRegistry] = None
) -> StreamFormat:
    """Look up ``format_tag`` and check it supports ``direction``.

    Args:
        format_tag: Exact tag to look up
        direction: ``"read"`` or ``"write"``
        registry: Format registry, defaults to the module registry

    Raises:
        UnknownFormatError: If the tag is not registered
        UnsupportedFormatError: If the format has no codec for ``direction``
    """
    fmt = (default_registry if registry is None else registry).get(format_tag)
    supported = fmt.can_read if direction == "read" else fmt.can_write
    if not supported:
        action = "decompression" if direction == "read" else "compression"
        raise UnsupportedFormatError(
            f"{fmt.name} {action} not supported", {"format": format_tag}
        )
    return fmt


def _build(constructor, handle, format_tag: str, config: Optional[CompressionConfig]):
    # Constructors from custom registries may raise anything
    build = with_error_handling(CodecConstructionError, {"format": format_tag})(
        constructor
    )
    return build(handle, config or DEFAULT_CONFIG)


def wrap_reader(
    input_handle,
    prior_error: Optional[BaseException],
    format_tag: str,
    config: Optional[CompressionConfig] = None,
    registry: Optional[FormatRegistry] = None,
) -> StreamResult:
    """Wrap ``input_handle`` so reads yield decompressed bytes.

    Args:
        input_handle: Readable byte stream, or None if opening it failed
        prior_error: Error from producing the handle, or None
        format_tag: ``""`` (passthrough), ``".gz"`` or ``".bz2"``
        config: Codec settings, defaults to DEFAULT_CONFIG
        registry: Format registry, defaults to the module registry

    Returns:
        StreamResult holding the reader or the error
    """
    try:
        _check_upstream(input_handle, prior_error, "make_decompressing_reader")
        fmt = resolve_format(format_tag, "read", registry)
        stream = _build(fmt.reader, input_handle, format_tag, config)
    except CompressedIOError as e:
        return StreamResult(error=e)

    logger.debug(f"Opened {fmt.name} reader for format {format_tag!r}")
    return StreamResult(stream=stream)


def wrap_writer(
    output_handle,
    prior_error: Optional[BaseException],
    format_tag: str,
    config: Optional[CompressionConfig] = None,
    registry: Optional[FormatRegistry] = None,
) -> StreamResult:
    """Wrap ``output_handle`` so written bytes are compressed.

    Closing the returned writer finalizes the codec trailer before closing
    ``output_handle``. ``".bz2"`` is not supported for writing.
    """
    try:
        _check_upstream(output_handle, prior_error, "make_compressing_writer")
        fmt = resolve_format(format_tag, "write", registry)
        stream = _build(fmt.writer, output_handle, format_tag, config)
    except CompressedIOError as e:
        return StreamResult(error=e)

    logger.debug(f"Opened {fmt.name} writer for format {format_tag!r}")
    return StreamResult(stream=stream)


def make_decompressing_reader(
    input_handle,
    prior_error: Optional[BaseException],
    format_tag: str,
    config: Optional[CompressionConfig] = None,
):
    """Like ``wrap_reader`` but returns the reader or None."""
    return wrap_reader(input_handle, prior_error, format_tag, config).stream


def make_compressing_writer(
    output_handle,
    prior_error: Optional[BaseException],
    format_tag: str,
    config: Optional[CompressionConfig] = None,
):
    """Like ``wrap_writer`` but returns the writer or None."""
    return wrap_writer(output_handle, prior_error, format_tag, config).stream
