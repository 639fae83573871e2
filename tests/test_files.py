"""Tests for open_reader / open_writer."""

import bz2
import gzip
import logging

import pytest

from compressed_io import CompressionConfig, open_reader, open_writer
from compressed_io.files import infer_format

SAMPLE = "Hello, world or 你好，世界\n".encode("utf-8")


class TestOpenWriter:
    def test_gzip_by_extension(self, tmp_path):
        path = tmp_path / "out.txt.gz"
        with open_writer(path) as writer:
            writer.write(SAMPLE)
        assert gzip.decompress(path.read_bytes()) == SAMPLE

    def test_plain_by_extension(self, tmp_path):
        path = tmp_path / "out.txt"
        with open_writer(path) as writer:
            writer.write(SAMPLE)
        assert path.read_bytes() == SAMPLE

    def test_explicit_tag_overrides_extension(self, tmp_path):
        path = tmp_path / "out.dat"
        with open_writer(path, ".gz") as writer:
            writer.write(SAMPLE)
        assert gzip.decompress(path.read_bytes()) == SAMPLE

    def test_config_passed_through(self, tmp_path):
        path = tmp_path / "out.gz"
        with open_writer(path, config=CompressionConfig(gzip_mtime=0)) as writer:
            writer.write(SAMPLE)
        assert path.read_bytes()[4:8] == b"\x00\x00\x00\x00"

    def test_missing_directory(self, tmp_path):
        assert open_writer(tmp_path / "not_exist_dir" / "file.gz") is None

    def test_bzip2_unsupported(self, tmp_path):
        path = tmp_path / "out.bz2"
        assert open_writer(path) is None
        assert not path.exists()

    @pytest.mark.parametrize("name, tag", [("existing.bz2", None), ("existing.dat", ".xyz")])
    def test_rejected_format_leaves_existing_file(self, tmp_path, caplog, name, tag):
        path = tmp_path / name
        path.write_bytes(b"keep me")
        with caplog.at_level(logging.ERROR):
            assert open_writer(path, tag) is None
        assert path.read_bytes() == b"keep me"
        assert len(caplog.records) == 1

    def test_unregistered_extension_written_plain(self, tmp_path):
        path = tmp_path / "report.csv"
        with open_writer(path) as writer:
            writer.write(SAMPLE)
        assert path.read_bytes() == SAMPLE


class TestOpenReader:
    def test_gzip_file(self, tmp_path):
        path = tmp_path / "in.gz"
        path.write_bytes(gzip.compress(SAMPLE))
        with open_reader(path) as reader:
            assert reader.read() == SAMPLE

    def test_bzip2_file(self, tmp_path):
        path = tmp_path / "in.bz2"
        path.write_bytes(bz2.compress(SAMPLE))
        with open_reader(str(path)) as reader:
            assert reader.read() == SAMPLE

    def test_round_trip(self, tmp_path):
        path = tmp_path / "round.gz"
        with open_writer(path) as writer:
            writer.write(SAMPLE)
        with open_reader(path) as reader:
            assert reader.read() == SAMPLE

    @pytest.mark.parametrize("name", ["data.csv", "notes", "archive.tar"])
    def test_plain_file_passed_through(self, tmp_path, name):
        path = tmp_path / name
        path.write_bytes(SAMPLE)
        with open_reader(path) as reader:
            assert reader.read() == SAMPLE

    def test_explicit_tag_is_exact(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_bytes(SAMPLE)
        assert open_reader(path, ".csv") is None
        assert open_reader(path, ".GZ") is None

    def test_nonexistent_file(self, tmp_path):
        assert open_reader(tmp_path / "a_file_not_there.gz") is None

    @pytest.mark.parametrize("name, tag", [("bad.gz", None), ("bad.dat", ".xyz")])
    def test_failure_closes_opened_file(self, tmp_path, monkeypatch, name, tag):
        path = tmp_path / name
        path.write_bytes(b"not compressed")
        opened = []
        real_open = open

        def tracking_open(*args, **kwargs):
            handle = real_open(*args, **kwargs)
            opened.append(handle)
            return handle

        monkeypatch.setattr("builtins.open", tracking_open)
        assert open_reader(path, tag) is None
        assert len(opened) == 1
        assert opened[0].closed


class TestInferFormat:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("data.csv.gz", ".gz"),
            ("log.bz2", ".bz2"),
            ("data.csv", ""),
            ("notes", ""),
            ("DATA.GZ", ""),
        ],
    )
    def test_only_registered_extensions(self, path, expected):
        assert infer_format(path) == expected
