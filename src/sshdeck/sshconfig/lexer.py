"""Lexer for the supported subset of the ssh_config dialect."""

import glob
import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from sshdeck.sshconfig.reader import Source, SourceReader
from sshdeck.sshconfig.tokens import UNSUPPORTED, Token, TokenKind
from sshdeck.sshconfig.utils import (
    is_text_file,
    is_valid_hostname,
    is_valid_port,
    is_valid_username,
    parse_key_value_line,
    strip_trailing_comment,
)

MAX_INCLUDE_DEPTH = 16

META_PREFIX = "# GG:"


@dataclass
class _Frame:
    """A source on the include stack."""

    source: Source
    depth: int
    reader: SourceReader | None = None


class Lexer:
    """Turns ssh_config text into tokens, following Include directives.

    The root source is depth 0 and every included file sits one level below the
    file that includes it. Files deeper than ``max_depth`` are skipped, which is
    what stops circular includes.
    """

    def __init__(
        self,
        source: Source,
        logger: logging.Logger | None = None,
        max_depth: int = MAX_INCLUDE_DEPTH,
    ):
        self.source = source
        self.logger = logger or logging.getLogger(__name__)
        self.max_depth = max_depth

        # Checked in order; HostName must come before Host.
        self._directives: list[tuple[str, Callable[[str], Token]]] = [
            ("user", self._user_token),
            ("hostname", self._hostname_token),
            ("host", self._host_token),
            ("port", self._port_token),
            ("include", self._include_token),
            ("identityfile", self._identity_file_token),
        ]
        self._meta: list[tuple[str, TokenKind]] = [
            ("group", TokenKind.GROUP),
            ("description", TokenKind.DESCRIPTION),
        ]

    def tokenize(self) -> list[Token]:
        """Read the source and every file it includes.

        Raises OSError if the root source cannot be opened or read. Problems in
        included files are logged and the offending file is skipped.
        """
        self.logger.debug(f"[LEXER] Tokenize {self.source}")
        root = _Frame(source=self.source, depth=0, reader=SourceReader.open(self.source))
        stack = [root]
        tokens: list[Token] = []

        try:
            while stack:
                frame = stack[-1]
                line = self._next_line(frame)
                if line is None:
                    if frame.reader is not None:
                        frame.reader.close()
                    stack.pop()
                    continue

                token = self.classify(line)
                if token.kind == TokenKind.INCLUDE_FILE:
                    stack.extend(reversed(self._include_frames(token, frame)))
                elif token.kind != TokenKind.UNSUPPORTED:
                    tokens.append(token)
        finally:
            for frame in stack:
                if frame.reader is not None:
                    frame.reader.close()

        self.logger.debug(f"[LEXER] Found {len(tokens)} tokens in {self.source}")
        return tokens

    def _next_line(self, frame: _Frame) -> str | None:
        if frame.depth == 0:
            return frame.reader.read_line()

        try:
            if frame.reader is None:
                frame.reader = SourceReader.open(frame.source)
            return frame.reader.read_line()
        except OSError as e:
            self.logger.error(f"[LEXER] Cannot read included file {frame.source}: {e}")
            return None

    def _include_frames(self, token: Token, parent: _Frame) -> list[_Frame]:
        paths = self._resolve_include(token.value, parent.source.directory)
        if not paths:
            return []

        depth = parent.depth + 1
        if depth > self.max_depth:
            self.logger.error(
                f"[LEXER] Max include depth {self.max_depth} exceeded in {parent.source}, "
                f"skipping: {token.value}"
            )
            return []

        return [_Frame(source=Source.file(path), depth=depth) for path in paths]

    def _resolve_include(self, value: str, base_dir: Path) -> list[Path]:
        """Expand Include patterns into plain-text files, in match order."""
        found = []
        for pattern in value.split():
            pattern = os.path.expanduser(pattern)
            if not os.path.isabs(pattern):
                pattern = str(base_dir / pattern)

            matches = sorted(glob.glob(pattern, include_hidden=True))
            if not matches:
                self.logger.debug(f"[LEXER] Include pattern matched nothing: {pattern}")

            for match in matches:
                try:
                    mode = os.stat(match).st_mode
                except OSError as e:
                    self.logger.debug(f"[LEXER] Cannot stat {match}: {e}")
                    continue

                if stat.S_ISDIR(mode):
                    self.logger.debug(f"[LEXER] Skip directory {match}")
                    continue

                if not is_text_file(Path(match)):
                    self.logger.debug(f"[LEXER] Skip non-text file {match}")
                    continue

                found.append(Path(match))
        return found

    def classify(self, raw_line: str) -> Token:
        """Turn a single line into a token. Lines that fail validation are UNSUPPORTED."""
        line = raw_line.strip()
        if not line:
            return UNSUPPORTED

        lowered = line.lower()
        keyword = lowered.split(maxsplit=1)[0]
        for name, handler in self._directives:
            if keyword == name:
                return handler(line)

        if lowered.startswith(META_PREFIX.lower()):
            meta_key = lowered[len(META_PREFIX):].split(maxsplit=1)
            for name, kind in self._meta:
                if meta_key and meta_key[0] == name:
                    return self._meta_token(kind, line)

        return UNSUPPORTED

    def _key_value_token(self, kind: TokenKind, line: str) -> Token:
        try:
            key, value = parse_key_value_line(line)
        except ValueError:
            return UNSUPPORTED

        value = strip_trailing_comment(value)
        if not value:
            return UNSUPPORTED
        return Token(kind=kind, key=key, value=value)

    def _host_token(self, line: str) -> Token:
        return self._key_value_token(TokenKind.HOST, line)

    def _user_token(self, line: str) -> Token:
        token = self._key_value_token(TokenKind.USER, line)
        if token.kind == TokenKind.USER and not is_valid_username(token.value):
            self.logger.debug(f"[LEXER] Invalid user name: {token.value}")
            return UNSUPPORTED
        return token

    def _hostname_token(self, line: str) -> Token:
        token = self._key_value_token(TokenKind.HOSTNAME, line)
        if token.kind == TokenKind.HOSTNAME and not is_valid_hostname(token.value):
            self.logger.debug(f"[LEXER] Invalid host name: {token.value}")
            return UNSUPPORTED
        return token

    def _port_token(self, line: str) -> Token:
        token = self._key_value_token(TokenKind.NETWORK_PORT, line)
        if token.kind == TokenKind.NETWORK_PORT and not is_valid_port(token.value):
            self.logger.debug(f"[LEXER] Invalid port: {token.value}")
            return UNSUPPORTED
        return token

    def _identity_file_token(self, line: str) -> Token:
        return self._key_value_token(TokenKind.IDENTITY_FILE, line)

    def _include_token(self, line: str) -> Token:
        return self._key_value_token(TokenKind.INCLUDE_FILE, line)

    def _meta_token(self, kind: TokenKind, line: str) -> Token:
        # Meta values are free text, "#" is not a comment here.
        try:
            key, value = parse_key_value_line(line[len(META_PREFIX):])
        except ValueError:
            return UNSUPPORTED
        return Token(kind=kind, key=key, value=value)
