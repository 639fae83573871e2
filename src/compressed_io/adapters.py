"""
Stream Adapters
===============

Adapters that give every wrapped stream the same capabilities: read or write,
plus ``close()`` that releases the caller's original handle.

The codecs from the standard library (``gzip.GzipFile``, ``bz2.BZ2File``)
never close a file object they were handed, so each adapter pairs the codec
with the original handle and delegates ``close()`` to both, codec first.
"""

import io
import logging
from typing import Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class ReadableStream(Protocol):
    """Anything that can read bytes and be closed."""

    def read(self, size: int = -1) -> bytes: ...

    def close(self) -> None: ...


@runtime_checkable
class WritableStream(Protocol):
    """Anything that can accept bytes and be closed."""

    def write(self, data: bytes) -> int: ...

    def close(self) -> None: ...


class DecompressingReader(io.RawIOBase):
    """Reads decompressed bytes from ``codec`` and owns ``inner``'s close."""

    def __init__(self, codec: ReadableStream, inner: ReadableStream):
        super().__init__()
        self._codec = codec
        self._inner = inner

    @property
    def codec(self):
        return self._codec

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        self._checkClosed()
        data = self._codec.read(len(buffer))
        n = len(data)
        buffer[:n] = data
        return n

    def readall(self) -> bytes:
        self._checkClosed()
        return self._codec.read()

    def close(self) -> None:
        if self.closed:
            return
        try:
            self._codec.close()
        finally:
            try:
                self._inner.close()
            finally:
                super().close()
        logger.debug(f"Closed decompressing reader over {type(self._inner).__name__}")


class CompressingWriter(io.RawIOBase):
    """Writes bytes through ``codec``; closing finalizes it, then closes ``inner``."""

    def __init__(self, codec: WritableStream, inner: WritableStream):
        super().__init__()
        self._codec = codec
        self._inner = inner

    @property
    def codec(self):
        return self._codec

    def writable(self) -> bool:
        return True

    def write(self, data) -> int:
        self._checkClosed()
        return self._codec.write(data)

    def flush(self) -> None:
        # io.RawIOBase.close() flushes after the codec is already closed
        if self.closed or getattr(self._codec, "closed", False):
            return
        flush = getattr(self._codec, "flush", None)
        if flush is not None:
            flush()

    def close(self) -> None:
        if self.closed:
            return
        try:
            # The codec writes its trailer into inner on close
            self._codec.close()
            inner_flush = getattr(self._inner, "flush", None)
            if inner_flush is not None:
                inner_flush()
        finally:
            try:
                self._inner.close()
            finally:
                super().close()
        logger.debug(f"Closed compressing writer over {type(self._inner).__name__}")


class PrefixedReader(io.RawIOBase):
    """Replays ``prefix`` before reading the rest of ``inner``.

    Closing it leaves ``inner`` open.
    """

    def __init__(self, prefix: bytes, inner: ReadableStream):
        super().__init__()
        self._prefix = prefix
        self._inner = inner

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        size = len(buffer)
        if self._prefix:
            data = self._prefix[:size]
            self._prefix = self._prefix[size:]
        else:
            data = self._inner.read(size) or b""
        n = len(data)
        buffer[:n] = data
        return n


class NonClosingStream:
    """Delegates everything to ``stream`` except ``close()``.

    Useful for in-memory sinks that must stay readable after a compressing
    writer wrapped around them has been closed.
    """

    def __init__(self, stream):
        self._stream = stream
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    def __getattr__(self, name):
        return getattr(self._stream, name)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def nop_closer(stream) -> NonClosingStream:
    """Wrap ``stream`` so closing the wrapper leaves it open."""
    return NonClosingStream(stream)


def read_exactly(stream: ReadableStream, size: int) -> bytes:
    """Read up to ``size`` bytes, retrying short reads until EOF."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk: Optional[bytes] = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)
