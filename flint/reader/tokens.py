"""Token kinds and the fixed lexical tables of the Flint language."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    # Trivia (never reaches the parser)
    WHITESPACE = auto()
    COMMENT = auto()
    END_OF_FILE = auto()

    # Literals and names
    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()
    BOOLEAN = auto()

    # Keywords
    IF = auto()
    ELSEIF = auto()
    ELSE = auto()
    FOR = auto()
    WHILE = auto()
    LET = auto()
    CONST = auto()
    VAR = auto()
    RETURN = auto()
    BREAK = auto()
    FUNC = auto()
    VOID = auto()

    # Symbols
    DOUBLE_PIPE = auto()
    DOUBLE_AMPERSAND = auto()
    ARROW = auto()
    BANG_EQUALS = auto()
    DOUBLE_EQUALS = auto()
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    LEFT_BRACKET = auto()
    RIGHT_BRACKET = auto()
    EQUALS = auto()
    COMMA = auto()
    SEMICOLON = auto()
    COLON = auto()
    LESS_THAN = auto()
    GREATER_THAN = auto()
    PERIOD = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int = 0

    def __str__(self) -> str:
        return f"{self.kind.name}({self.text!r})"


TRIVIA = frozenset({TokenKind.WHITESPACE, TokenKind.COMMENT})

KEYWORDS: dict[str, TokenKind] = {
    "if": TokenKind.IF,
    "for": TokenKind.FOR,
    "while": TokenKind.WHILE,
    "let": TokenKind.LET,
    "return": TokenKind.RETURN,
    "break": TokenKind.BREAK,
    "func": TokenKind.FUNC,
    "const": TokenKind.CONST,
    "void": TokenKind.VOID,
    "var": TokenKind.VAR,
    "elseif": TokenKind.ELSEIF,
    "else": TokenKind.ELSE,
}

BOOLEANS = ("true", "false")

# Scanned in order; a two-character symbol must come before its one-character prefix.
SYMBOLS: tuple[tuple[str, TokenKind], ...] = (
    ("||", TokenKind.DOUBLE_PIPE),
    ("&&", TokenKind.DOUBLE_AMPERSAND),
    ("->", TokenKind.ARROW),
    ("!=", TokenKind.BANG_EQUALS),
    ("==", TokenKind.DOUBLE_EQUALS),
    ("+", TokenKind.PLUS),
    ("-", TokenKind.MINUS),
    ("*", TokenKind.STAR),
    ("/", TokenKind.SLASH),
    ("(", TokenKind.LEFT_PAREN),
    (")", TokenKind.RIGHT_PAREN),
    ("{", TokenKind.LEFT_BRACE),
    ("}", TokenKind.RIGHT_BRACE),
    ("[", TokenKind.LEFT_BRACKET),
    ("]", TokenKind.RIGHT_BRACKET),
    ("=", TokenKind.EQUALS),
    (",", TokenKind.COMMA),
    (";", TokenKind.SEMICOLON),
    (":", TokenKind.COLON),
    ("<", TokenKind.LESS_THAN),
    (">", TokenKind.GREATER_THAN),
    (".", TokenKind.PERIOD),
)

# Binary operator precedence; 0 means "not a binary operator".
PRECEDENCE: dict[TokenKind, int] = {
    TokenKind.DOUBLE_PIPE: 1,
    TokenKind.DOUBLE_AMPERSAND: 2,
    TokenKind.DOUBLE_EQUALS: 3,
    TokenKind.BANG_EQUALS: 3,
    TokenKind.LESS_THAN: 3,
    TokenKind.GREATER_THAN: 3,
    TokenKind.PLUS: 4,
    TokenKind.MINUS: 4,
    TokenKind.STAR: 5,
    TokenKind.SLASH: 5,
}


def precedence(kind: TokenKind) -> int:
    return PRECEDENCE.get(kind, 0)


def line_and_column(source: str, offset: int) -> tuple[int, int]:
    """Return the 0-based (line, column) of `offset` in `source`."""
    line = source.count("\n", 0, offset)
    last_nl = source.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col
