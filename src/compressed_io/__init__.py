"""
compressed_io - Transparent gzip/bzip2 wrapping for byte streams.

Given an already-opened stream (or the error from opening one) and a format
tag such as a file extension, return a stream that passes bytes through
unchanged or pipes them through a codec from the standard library.

Quick Start:
    >>> import io
    >>> from compressed_io import make_compressing_writer, make_decompressing_reader, nop_closer
    >>>
    >>> sink = io.BytesIO()
    >>> with make_compressing_writer(nop_closer(sink), None, ".gz") as w:
    ...     _ = w.write(b"hello")
    >>> sink.seek(0)
    0
    >>> make_decompressing_reader(sink, None, ".gz").read()
    b'hello'
"""

from .adapters import (
    CompressingWriter,
    DecompressingReader,
    NonClosingStream,
    ReadableStream,
    WritableStream,
    nop_closer,
)
from .config import CompressionConfig
from .errors import (
    CodecConstructionError,
    CompressedIOError,
    FailureKind,
    UnknownFormatError,
    UnsupportedFormatError,
    UpstreamError,
)
from .factories import (
    StreamResult,
    make_compressing_writer,
    make_decompressing_reader,
    resolve_format,
    wrap_reader,
    wrap_writer,
)
from .files import infer_format, open_reader, open_writer
from .formats import (
    FORMAT_BZIP2,
    FORMAT_GZIP,
    FORMAT_NONE,
    FormatRegistry,
    StreamFormat,
    format_for_path,
    list_available_formats,
)

__version__ = "0.1.0"

__all__ = [
    # Factories
    "make_decompressing_reader",
    "make_compressing_writer",
    "wrap_reader",
    "wrap_writer",
    "StreamResult",
    "resolve_format",
    # Files
    "open_reader",
    "open_writer",
    "infer_format",
    # Formats
    "FORMAT_NONE",
    "FORMAT_GZIP",
    "FORMAT_BZIP2",
    "FormatRegistry",
    "StreamFormat",
    "format_for_path",
    "list_available_formats",
    # Adapters
    "ReadableStream",
    "WritableStream",
    "DecompressingReader",
    "CompressingWriter",
    "NonClosingStream",
    "nop_closer",
    # Config
    "CompressionConfig",
    # Errors
    "CompressedIOError",
    "FailureKind",
    "UpstreamError",
    "UnknownFormatError",
    "UnsupportedFormatError",
    "CodecConstructionError",
    # Version info
    "__version__",
]
