"""
  Flint Lexer

- Hand-written scanner over the source string, one token per `next_token` call
- Recognition order: symbols, names/keywords/booleans, numbers, whitespace,
  strings, comments
- Whitespace and comments are real tokens; `tokenize` filters them out and
  appends the end-of-file token the parser expects
"""

from __future__ import annotations

import logging
from typing import Iterator

from flint.errors import LexError
from flint.reader.tokens import BOOLEANS, KEYWORDS, SYMBOLS, TRIVIA, Token, TokenKind

logger = logging.getLogger(__name__)


def _is_name_char(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.position = 0

    def peek(self, offset: int = 0) -> str:
        index = self.position + offset
        return self.source[index] if index < len(self.source) else "\0"

    @property
    def current(self) -> str:
        return self.peek(0)

    def at_end(self) -> bool:
        return self.position >= len(self.source)

    def next_token(self) -> Token:
        if self.at_end():
            return Token(TokenKind.END_OF_FILE, "", len(self.source))

        start = self.position
        for text, kind in SYMBOLS:
            if self.source.startswith(text, start):
                self.position += len(text)
                return Token(kind, text, start)

        ch = self.current
        if _is_name_char(ch):
            return self._scan_name()
        if ch.isdecimal():
            return self._scan_number()
        if ch.isspace():
            return self._scan_while(str.isspace, TokenKind.WHITESPACE)
        if ch == '"':
            return self._scan_string()
        if ch == "#":
            return self._scan_comment()

        raise LexError(f"Invalid character {ch!r} at {start}", start)

    # ----------------------
    # Scanners
    # ----------------------
    def _scan_while(self, predicate, kind: TokenKind) -> Token:
        start = self.position
        while not self.at_end() and predicate(self.current):
            self.position += 1
        return Token(kind, self.source[start:self.position], start)

    def _scan_name(self) -> Token:
        token = self._scan_while(_is_name_char, TokenKind.IDENTIFIER)
        if token.text in BOOLEANS:
            return Token(TokenKind.BOOLEAN, token.text, token.position)
        kind = KEYWORDS.get(token.text)
        if kind is not None:
            return Token(kind, token.text, token.position)
        return token

    def _scan_number(self) -> Token:
        start = self.position
        self._scan_while(str.isdecimal, TokenKind.NUMBER)
        # fractional part: '.' only belongs to the literal when a digit follows
        if self.current == "." and self.peek(1).isdecimal():
            self.position += 1
            self._scan_while(str.isdecimal, TokenKind.NUMBER)
        return Token(TokenKind.NUMBER, self.source[start:self.position], start)

    def _scan_string(self) -> Token:
        start = self.position
        self.position += 1  # opening quote
        while self.current != '"':
            if self.at_end():
                raise LexError(f"Unterminated string starting at {start}", start)
            self.position += 1
        self.position += 1  # closing quote
        return Token(TokenKind.STRING, self.source[start:self.position], start)

    def _scan_comment(self) -> Token:
        start = self.position
        while not self.at_end() and self.current != "\n":
            self.position += 1
        return Token(TokenKind.COMMENT, self.source[start:self.position], start)


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields every token, trivia included, up to end of input."""
    lexer = Lexer(source)
    while True:
        token = lexer.next_token()
        if token.kind is TokenKind.END_OF_FILE:
            return
        yield token


def tokenize(source: str) -> list[Token]:
    """Return the parser's input: significant tokens followed by one end-of-file token."""
    tokens = [token for token in lex(source) if token.kind not in TRIVIA]
    tokens.append(Token(TokenKind.END_OF_FILE, "", len(source)))
    logger.debug("lexed %d significant tokens", len(tokens) - 1)
    return tokens
