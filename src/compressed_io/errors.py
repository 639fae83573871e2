"""
Error Handling for compressed_io
================================

Failure kinds and the exception hierarchy shared by the stream factories.
Every error logs itself once when it is constructed, so callers that only
look at the ``None`` result still get a diagnostic line.
"""

import enum
import functools
import logging
from typing import Any, Callable, Dict, Optional, Type

logger = logging.getLogger(__name__)


class FailureKind(enum.Enum):
    """Machine-readable reason a stream could not be wrapped."""

    UPSTREAM = "upstream"
    UNKNOWN_FORMAT = "unknown_format"
    UNSUPPORTED = "unsupported"
    CODEC_CONSTRUCTION = "codec_construction"


class CompressedIOError(Exception):
    """Base exception for all stream wrapping errors."""

    kind: Optional[FailureKind] = None

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.context = context or {}
        super().__init__(message)

        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        logger.error(
            f"compressed_io error: {message}"
            + (f" ({context_str})" if context_str else "")
        )


class UpstreamError(CompressedIOError):
    """Raised when the handle-producing step already failed."""

    kind = FailureKind.UPSTREAM


class UnknownFormatError(CompressedIOError):
    """Raised when a format tag matches no known codec."""

    kind = FailureKind.UNKNOWN_FORMAT


class UnsupportedFormatError(CompressedIOError):
    """Raised when a known format has no codec for the requested direction."""

    kind = FailureKind.UNSUPPORTED


class CodecConstructionError(CompressedIOError):
    """Raised when a codec rejects the stream while being built."""

    kind = FailureKind.CODEC_CONSTRUCTION


def with_error_handling(
    error_type: Type[CompressedIOError] = CompressedIOError,
    context: Optional[Dict[str, Any]] = None,
):
    """
    Decorator converting unexpected exceptions into compressed_io errors.

    Args:
        error_type: Type of CompressedIOError to raise
        context: Additional context to include in the error
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except CompressedIOError:
                raise
            except Exception as e:
                name = getattr(func, "__name__", type(func).__name__)
                error_context = (context or {}).copy()
                error_context.update(
                    {
                        "function": name,
                        "original_error": str(e),
                        "original_error_type": type(e).__name__,
                    }
                )
                raise error_type(f"Error in {name}: {e}", error_context) from e

        return wrapper

    return decorator
