"""Token definitions for the ssh_config lexer."""

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    """Classified kinds of ssh_config lines."""

    HOST = "Host"
    USER = "User"
    HOSTNAME = "HostName"
    NETWORK_PORT = "Port"
    IDENTITY_FILE = "IdentityFile"
    GROUP = "Group"
    DESCRIPTION = "Description"
    INCLUDE_FILE = "Include"
    UNSUPPORTED = "Unsupported"


@dataclass(frozen=True)
class Token:
    """A single classified directive."""

    kind: TokenKind
    key: str = ""
    value: str = ""

    def __str__(self) -> str:
        return f"{self.key}: {self.value}"


UNSUPPORTED = Token(kind=TokenKind.UNSUPPORTED)
