"""Open files on disk through the stream factories.

When no format tag is given it comes from the file's last extension, if that
extension is a registered format: ``data.csv.gz`` is read through gzip, while
``data.csv`` and ``notes`` are passed through. An explicit tag is matched
exactly.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .config import CompressionConfig
from .errors import CompressedIOError
from .factories import make_compressing_writer, make_decompressing_reader, resolve_format
from .formats import FORMAT_NONE, default_registry, format_for_path

logger = logging.getLogger(__name__)


def infer_format(path: Union[str, Path]) -> str:
    """Return the registered format for ``path``'s extension, or passthrough."""
    tag = format_for_path(path)
    return tag if tag in default_registry else FORMAT_NONE


def open_reader(
    path: Union[str, Path],
    format_tag: Optional[str] = None,
    config: Optional[CompressionConfig] = None,
):
    """Open ``path`` for reading with decompression, or return None."""
    if format_tag is None:
        format_tag = infer_format(path)

    handle, error = None, None
    try:
        handle = open(path, "rb")
    except OSError as e:
        error = e

    reader = make_decompressing_reader(handle, error, format_tag, config)
    if reader is None and handle is not None:
        # We opened it, so we release it
        handle.close()
    return reader


def open_writer(
    path: Union[str, Path],
    format_tag: Optional[str] = None,
    config: Optional[CompressionConfig] = None,
):
    """Create ``path`` for writing with compression, or return None.

    The format is checked before the file is opened, so an unknown or
    read-only format leaves an existing file untouched.
    """
    if format_tag is None:
        format_tag = infer_format(path)

    try:
        resolve_format(format_tag, "write")
    except CompressedIOError:
        return None

    handle, error = None, None
    try:
        handle = open(path, "wb")
    except OSError as e:
        error = e

    writer = make_compressing_writer(handle, error, format_tag, config)
    if writer is None and handle is not None:
        handle.close()
    return writer
