"""
Configuration for compressed_io
===============================

Codec settings used when the factories build a compressing writer.
"""

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class CompressionConfig:
    """Configuration for the gzip writer."""

    gzip_compresslevel: int = 6
    gzip_mtime: Optional[float] = None  # None stamps the current time
    gzip_filename: str = ""  # name recorded in the gzip header

    def __post_init__(self):
        """Validate compression configuration."""
        if not (0 <= self.gzip_compresslevel <= 9):
            raise ValueError("gzip_compresslevel must be between 0 and 9")

        if self.gzip_mtime is not None and self.gzip_mtime < 0:
            raise ValueError("gzip_mtime must be non-negative")

        logger.debug(
            f"Compression configured: gzip@{self.gzip_compresslevel}, "
            f"mtime={self.gzip_mtime}"
        )


DEFAULT_CONFIG = CompressionConfig()
