"""ssh_config ingestion: reader, lexer and parser."""

from sshdeck.sshconfig.lexer import MAX_INCLUDE_DEPTH, Lexer
from sshdeck.sshconfig.parser import DEFAULT_GROUP, LexerNotSetError, Parser
from sshdeck.sshconfig.reader import Source, SourceReader
from sshdeck.sshconfig.tokens import Token, TokenKind

__all__ = [
    "DEFAULT_GROUP",
    "Lexer",
    "LexerNotSetError",
    "MAX_INCLUDE_DEPTH",
    "Parser",
    "Source",
    "SourceReader",
    "Token",
    "TokenKind",
]
