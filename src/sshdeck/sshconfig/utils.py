"""Validation and file helpers for ssh_config parsing."""

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

# Letters, digits, underscore and dash; cannot start with a digit or dash.
# "admin", "_sshuser", "user-name" are valid; "user.name", "123user", "user@domain" are not.
SSH_USERNAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]{0,31}$")

# RFC 1123 hostname: dot-separated labels, alphanumeric with internal hyphens, <= 63 chars each.
HOSTNAME_RE = re.compile(
    r"^[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?(\.[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?)*$",
    re.IGNORECASE,
)
MAX_HOSTNAME_LENGTH = 253

# First word, then the rest of the line.
KEY_VALUE_RE = re.compile(r"^(\S+)\s+(.+)$")

# Trailing "# comment" after a directive value.
TRAILING_COMMENT_RE = re.compile(r"\s+#.*$")

SNIFF_LENGTH = 512


def parse_key_value_line(line: str) -> tuple[str, str]:
    """Split a line into its first word and the remainder.

    Raises ValueError if the line does not hold at least two words.
    """
    match = KEY_VALUE_RE.match(line.strip())
    if match is None:
        raise ValueError(f"Not a key value line: {line!r}")
    return match.group(1), match.group(2).strip()


def strip_trailing_comment(value: str) -> str:
    return TRAILING_COMMENT_RE.sub("", value).strip()


def is_valid_username(value: str) -> bool:
    return SSH_USERNAME_RE.match(value) is not None


def is_valid_hostname(value: str) -> bool:
    if len(value) > MAX_HOSTNAME_LENGTH:
        return False
    return HOSTNAME_RE.match(value) is not None


def is_valid_port(value: str) -> bool:
    try:
        port = int(value, 10)
    except ValueError:
        return False
    return 0 <= port <= 65535


# Content sniffing, following the WHATWG MIME sniffing rules for the
# signatures that matter when telling config files from everything else.

_HTML_TAGS = (
    b"<!DOCTYPE HTML", b"<HTML", b"<HEAD", b"<SCRIPT", b"<IFRAME", b"<H1", b"<DIV",
    b"<FONT", b"<TABLE", b"<A", b"<STYLE", b"<TITLE", b"<B", b"<BODY", b"<BR", b"<P",
    b"<!--",
)

_MAGIC_SIGNATURES = (
    (b"<?xml", "text/xml; charset=utf-8"),
    (b"%PDF-", "application/pdf"),
    (b"%!PS-Adobe-", "application/postscript"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"BM", "image/bmp"),
    (b"OggS\x00", "application/ogg"),
    (b"PK\x03\x04", "application/zip"),
    (b"\x1f\x8b\x08", "application/x-gzip"),
    (b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    (b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    (b"\x00asm", "application/wasm"),
)

_BINARY_BYTES = frozenset([*range(0x00, 0x09), 0x0B, *range(0x0E, 0x1B), *range(0x1C, 0x20)])


def _is_html(data: bytes) -> bool:
    stripped = data.lstrip(b"\t\n\x0c\r ")
    for tag in _HTML_TAGS:
        if len(stripped) <= len(tag):
            continue
        if stripped[: len(tag)].upper() == tag and stripped[len(tag)] in b" >":
            return True
    return False


def sniff_content_type(data: bytes) -> str:
    """Guess the MIME type of a file from its leading bytes."""
    data = data[:SNIFF_LENGTH]
    if not data:
        return "text/plain; charset=utf-8"

    if _is_html(data):
        return "text/html; charset=utf-8"

    stripped = data.lstrip(b"\t\n\x0c\r ")
    for signature, mime_type in _MAGIC_SIGNATURES:
        source = stripped if signature == b"<?xml" else data
        if source.startswith(signature):
            return mime_type

    if data.startswith(b"\xfe\xff"):
        return "text/plain; charset=utf-16be"
    if data.startswith(b"\xff\xfe"):
        return "text/plain; charset=utf-16le"
    if data.startswith(b"\xef\xbb\xbf"):
        return "text/plain; charset=utf-8"

    if any(byte in _BINARY_BYTES for byte in data):
        return "application/octet-stream"

    return "text/plain; charset=utf-8"


def is_text_file(path: Path) -> bool:
    """Check whether a file looks like plain text. Unreadable and empty files do not."""
    try:
        with open(path, "rb") as f:
            head = f.read(SNIFF_LENGTH)
    except OSError as e:
        logger.error(f"[SSHCONFIG] Cannot read {path}: {e}")
        return False

    if not head:
        return False

    return "text/plain" in sniff_content_type(head)
