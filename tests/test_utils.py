"""Tests for ssh_config validation helpers and content sniffing."""

import pytest

from sshdeck.sshconfig.utils import (
    is_text_file,
    is_valid_hostname,
    is_valid_port,
    is_valid_username,
    parse_key_value_line,
    sniff_content_type,
    strip_trailing_comment,
)


class TestUsername:
    @pytest.mark.parametrize("name", ["admin", "user123", "root", "_sshuser", "user-name"])
    def test_valid(self, name):
        assert is_valid_username(name)

    @pytest.mark.parametrize(
        "name",
        ["user.name", "123username", "user@domain", "invalid user", "user!", "", "a" * 33],
    )
    def test_invalid(self, name):
        assert not is_valid_username(name)


class TestHostname:
    @pytest.mark.parametrize("name", ["example.com", "sub.example.com", "localhost", "123.example", "10.0.0.1"])
    def test_valid(self, name):
        assert is_valid_hostname(name)

    @pytest.mark.parametrize(
        "name",
        [
            "-invalid.com",
            "example-.com",
            "ex@mpl$.com",
            "superlonglabelnamethatiswaytoolongtobevalidsuperlonglabelnamethatiswaytoolong.example.com",
            "a." * 127 + "com",
        ],
    )
    def test_invalid(self, name):
        assert not is_valid_hostname(name)


class TestPort:
    @pytest.mark.parametrize("value", ["0", "22", "65535"])
    def test_valid(self, value):
        assert is_valid_port(value)

    @pytest.mark.parametrize("value", ["-1", "65536", "notaport", "22.5", ""])
    def test_invalid(self, value):
        assert not is_valid_port(value)


class TestKeyValueLine:
    def test_two_words(self):
        assert parse_key_value_line("hello world") == ("hello", "world")

    def test_extra_whitespace(self):
        assert parse_key_value_line("  foo   bar  ") == ("foo", "bar")

    def test_value_keeps_inner_spaces(self):
        assert parse_key_value_line("three word test") == ("three", "word test")

    @pytest.mark.parametrize("line", ["oneword", "", "   "])
    def test_invalid(self, line):
        with pytest.raises(ValueError):
            parse_key_value_line(line)

    def test_strip_trailing_comment(self):
        assert strip_trailing_comment("example.com # prod") == "example.com"
        assert strip_trailing_comment("example.com") == "example.com"


class TestSniffing:
    def test_plain_text(self):
        assert sniff_content_type(b"Host web\n  HostName web.example.com\n").startswith("text/plain")

    def test_binary(self):
        assert sniff_content_type(b"\x7fELF\x02\x01\x01\x00") == "application/octet-stream"

    def test_signatures(self):
        assert sniff_content_type(b"%PDF-1.7\n") == "application/pdf"
        assert sniff_content_type(b"\x89PNG\r\n\x1a\n\x00\x00") == "image/png"
        assert sniff_content_type(b"PK\x03\x04rest") == "application/zip"

    def test_html(self):
        assert sniff_content_type(b"  <html><body></body></html>").startswith("text/html")

    def test_utf8_bom(self):
        assert sniff_content_type(b"\xef\xbb\xbfHost web\n").startswith("text/plain")

    def test_only_leading_bytes_count(self):
        data = b"Host web\n" * 100 + b"\x00"
        assert len(data) > 512
        assert sniff_content_type(data).startswith("text/plain")

    def test_is_text_file(self, tmp_path):
        text = tmp_path / "config"
        text.write_text("Host web\n")
        binary = tmp_path / "key.bin"
        binary.write_bytes(b"\x00\x01\x02\x03")
        empty = tmp_path / "empty"
        empty.write_bytes(b"")

        assert is_text_file(text)
        assert not is_text_file(binary)
        assert not is_text_file(empty)
        assert not is_text_file(tmp_path / "missing")
