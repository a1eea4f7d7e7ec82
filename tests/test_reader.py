"""Tests for SourceReader."""

import pytest

from sshdeck.sshconfig import Source, SourceReader


class TestSourceReader:
    def test_string_source(self):
        reader = SourceReader.open(Source.string("Host a\nHost b\n"))
        assert reader.read_line() == "Host a"
        assert reader.read_line() == "Host b"
        assert reader.read_line() is None
        reader.close()

    def test_file_source(self, tmp_path):
        path = tmp_path / "config"
        path.write_text("Host a\r\nHost b")

        with SourceReader.open(Source.file(path)) as reader:
            assert list(reader) == ["Host a", "Host b"]

    def test_close_is_idempotent(self):
        reader = SourceReader.open(Source.string("Host a\n"))
        reader.close()
        reader.close()
        assert reader.read_line() is None

    def test_close_without_stream(self):
        reader = SourceReader(Source.string(""), None)
        reader.close()
        assert reader.read_line() is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SourceReader.open(Source.file(tmp_path / "missing"))

    def test_directory(self, tmp_path):
        with pytest.raises(IsADirectoryError):
            SourceReader.open(Source.file(tmp_path))

    def test_directory_of_source(self, tmp_path):
        assert Source.file(tmp_path / "config").directory == tmp_path
