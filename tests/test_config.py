"""Tests for CompressionConfig validation."""

import logging

import pytest

from compressed_io import CompressionConfig
from compressed_io.config import DEFAULT_CONFIG


class TestCompressionConfig:
    def test_defaults(self):
        config = CompressionConfig()
        assert config.gzip_compresslevel == 6
        assert config.gzip_mtime is None
        assert config.gzip_filename == ""
        assert DEFAULT_CONFIG == config

    @pytest.mark.parametrize("level", [0, 1, 9])
    def test_valid_levels(self, level):
        assert CompressionConfig(gzip_compresslevel=level).gzip_compresslevel == level

    @pytest.mark.parametrize("level", [-1, 10, 19])
    def test_invalid_levels(self, level):
        with pytest.raises(ValueError, match="gzip_compresslevel"):
            CompressionConfig(gzip_compresslevel=level)

    def test_negative_mtime_rejected(self):
        with pytest.raises(ValueError, match="gzip_mtime"):
            CompressionConfig(gzip_mtime=-5)

    def test_logs_configuration(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="compressed_io.config"):
            CompressionConfig(gzip_compresslevel=3)
        assert "gzip@3" in caplog.text
