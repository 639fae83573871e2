"""Codec constructors for the registered stream formats.

Each constructor takes the caller's handle plus a ``CompressionConfig`` and
returns the stream handed back to the caller. Constructors raise
``CodecConstructionError`` when the codec rejects the handle.
"""

import bz2
import gzip
import logging
import zlib

from .adapters import (
    CompressingWriter,
    DecompressingReader,
    PrefixedReader,
    read_exactly,
)
from .config import CompressionConfig
from .errors import CodecConstructionError, with_error_handling

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"
GZIP_DEFLATE = 8
GZIP_HEADER_SIZE = 10

FHCRC = 0x02
FEXTRA = 0x04
FNAME = 0x08
FCOMMENT = 0x10
FRESERVED = 0xE0


def passthrough(stream, config: CompressionConfig):
    """Hand the stream back untouched."""
    return stream


def _header_error(reason: str, **context) -> CodecConstructionError:
    return CodecConstructionError(
        f"Cannot create gzip reader: {reason}", {"format": ".gz", **context}
    )


def _read_field(stream, size: int, field: str) -> bytes:
    data = read_exactly(stream, size)
    if len(data) < size:
        raise _header_error("truncated header", field=field)
    return data


def _read_zero_terminated(stream, field: str) -> bytes:
    chunks = []
    while True:
        byte = _read_field(stream, 1, field)
        chunks.append(byte)
        if byte == b"\x00":
            return b"".join(chunks)


def read_gzip_header(stream) -> bytes:
    """Read and validate a complete gzip member header, returning its bytes.

    Covers the fixed fields plus the optional FEXTRA, FNAME, FCOMMENT and
    FHCRC fields (RFC 1952).
    """
    header = read_exactly(stream, GZIP_HEADER_SIZE)
    if len(header) < GZIP_HEADER_SIZE:
        raise _header_error("truncated header", header_bytes=len(header))
    if header[:2] != GZIP_MAGIC:
        raise _header_error("invalid header", magic=header[:2].hex())
    if header[2] != GZIP_DEFLATE:
        raise _header_error("unsupported compression method", method=header[2])

    flags = header[3]
    if flags & FRESERVED:
        raise _header_error("reserved flag bits set", flags=hex(flags))

    if flags & FEXTRA:
        xlen_bytes = _read_field(stream, 2, "extra length")
        header += xlen_bytes + _read_field(
            stream, int.from_bytes(xlen_bytes, "little"), "extra"
        )
    if flags & FNAME:
        header += _read_zero_terminated(stream, "name")
    if flags & FCOMMENT:
        header += _read_zero_terminated(stream, "comment")
    if flags & FHCRC:
        crc_bytes = _read_field(stream, 2, "header crc")
        expected = zlib.crc32(header) & 0xFFFF
        if int.from_bytes(crc_bytes, "little") != expected:
            raise _header_error("header checksum mismatch")
        header += crc_bytes
    return header


@with_error_handling(CodecConstructionError, {"format": ".gz"})
def open_gzip_reader(stream, config: CompressionConfig) -> DecompressingReader:
    """Validate the gzip header eagerly, then decode lazily.

    The header bytes consumed by the check are replayed into the decoder, so
    non-seekable streams work too.
    """
    header = read_gzip_header(stream)
    codec = gzip.GzipFile(fileobj=PrefixedReader(header, stream), mode="rb")
    return DecompressingReader(codec, stream)


@with_error_handling(CodecConstructionError, {"format": ".gz"})
def open_gzip_writer(stream, config: CompressionConfig) -> CompressingWriter:
    if getattr(stream, "closed", False):
        raise CodecConstructionError(
            "Cannot create gzip writer: stream is closed", {"format": ".gz"}
        )
    codec = gzip.GzipFile(
        filename=config.gzip_filename,
        fileobj=stream,
        mode="wb",
        compresslevel=config.gzip_compresslevel,
        mtime=config.gzip_mtime,
    )
    return CompressingWriter(codec, stream)


@with_error_handling(CodecConstructionError, {"format": ".bz2"})
def open_bzip2_reader(stream, config: CompressionConfig) -> DecompressingReader:
    # bz2 reports corrupt data on the first read, not here
    return DecompressingReader(bz2.BZ2File(stream, mode="rb"), stream)
