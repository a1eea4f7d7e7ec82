"""Folds lexer tokens into host records."""

import logging
from typing import Protocol

from sshdeck.sshconfig.tokens import Token, TokenKind
from sshdeck.types import Host

# Group assigned to ssh_config hosts without a "# GG:GROUP" annotation.
DEFAULT_GROUP = "ssh_config"

# Token kind -> Host field it overwrites.
_FIELDS = {
    TokenKind.HOSTNAME: "address",
    TokenKind.NETWORK_PORT: "remote_port",
    TokenKind.IDENTITY_FILE: "identity_file_path",
    TokenKind.USER: "login_name",
    TokenKind.GROUP: "group",
    TokenKind.DESCRIPTION: "description",
}


class TokenSource(Protocol):
    """Anything that produces a token sequence."""

    def tokenize(self) -> list[Token]:
        ...


class LexerNotSetError(RuntimeError):
    """Parser was used without a lexer."""


class Parser:
    """Builds Host records from a token stream.

    A ``Host`` token closes the current block and opens a new one. Within a
    block the last occurrence of a directive wins. Directives that appear
    before the first ``Host`` line are ignored.
    """

    def __init__(self, lexer: TokenSource | None, logger: logging.Logger | None = None):
        self.lexer = lexer
        self.logger = logger or logging.getLogger(__name__)

    def parse(self) -> list[Host]:
        if self.lexer is None:
            raise LexerNotSetError("Lexer is not set")

        hosts: list[Host] = []
        current: Host | None = None

        for token in self.lexer.tokenize():
            if token.kind == TokenKind.HOST:
                self._append_if_valid(hosts, current)
                current = Host(title=token.value)
                continue

            field = _FIELDS.get(token.kind)
            if field is None or current is None:
                continue
            setattr(current, field, token.value)

        self._append_if_valid(hosts, current)
        set_defaults(hosts)

        self.logger.debug(f"[PARSER] Parsed {len(hosts)} hosts")
        return hosts

    def _append_if_valid(self, hosts: list[Host], host: Host | None) -> None:
        if host is None:
            return
        if not is_host_valid(host):
            self.logger.debug(f"[PARSER] Skip host '{host.title}'")
            return
        hosts.append(host)


def is_host_valid(host: Host) -> bool:
    """Wildcard titles are patterns, not hosts. A host needs a title or an address."""
    if "*" in host.title:
        return False
    return bool(host.title.strip() or host.address.strip())


def set_defaults(hosts: list[Host]) -> None:
    """Fill in group and address. Safe to apply more than once."""
    for host in hosts:
        if not host.group.strip():
            host.group = DEFAULT_GROUP
        if not host.address.strip():
            # ssh_config allows alias-only stanzas, ssh resolves the alias itself.
            host.address = host.title
