# lexer.py
"""Tokenizer for expression text.

Produces tokens one at a time from a cursor into the input. Text is scanned
as Unicode code points, so single-letter Greek symbols such as ``π`` can be
mixed freely with ASCII operators.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from .errors import UnexpectedCharacter


class TokenType:
    """Enumeration of token types."""
    EOF = 'EOF'
    NUMBER = 'NUMBER'
    SYMBOL = 'SYMBOL'
    PLUS = 'PLUS'
    MINUS = 'MINUS'
    MUL = 'MUL'
    DIV = 'DIV'
    POW = 'POW'
    FAC = 'FAC'
    RND_OPEN = 'RND_OPEN'
    RND_CLOSE = 'RND_CLOSE'
    EQU = 'EQU'
    NOT_EQU = 'NOT_EQU'
    LESS = 'LESS'
    GREATER = 'GREATER'
    LESS_EQU = 'LESS_EQU'
    GREATER_EQU = 'GREATER_EQU'
    EQUIVALENCE = 'EQUIVALENCE'
    DEFINE = 'DEFINE'
    COMMA = 'COMMA'
    COLON = 'COLON'
    RIGHT_ARROW = 'RIGHT_ARROW'


@dataclass(frozen=True)
class Token:
    """Represents a token with type, value, and character position."""
    type: str
    value: Union[float, str, None] = None
    pos: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r}, pos={self.pos})"


_SINGLE_CHAR_TOKENS = {
    '+': TokenType.PLUS,
    '*': TokenType.MUL,
    '/': TokenType.DIV,
    '^': TokenType.POW,
    '!': TokenType.FAC,
    '(': TokenType.RND_OPEN,
    ')': TokenType.RND_CLOSE,
    ',': TokenType.COMMA,
    '=': TokenType.EQU,
}

# Operators that may extend into a longer one; longest match wins.
_COMPOUND_TOKENS = {
    '-': [('->', TokenType.RIGHT_ARROW), ('-', TokenType.MINUS)],
    ':': [(':=', TokenType.DEFINE), (':', TokenType.COLON)],
    '<': [('<=>', TokenType.EQUIVALENCE), ('<=', TokenType.LESS_EQU),
          ('<>', TokenType.NOT_EQU), ('<', TokenType.LESS)],
    '>': [('>=', TokenType.GREATER_EQU), ('>', TokenType.GREATER)],
}

_DIGITS = '0123456789'
_LATIN = 'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ'


def is_greek(ch: str) -> bool:
    """True for capital and small Greek letters and the symbol variants (ϑ, ϕ, ϖ, ...)."""
    code = ord(ch)
    return (0x0391 <= code <= 0x03A9
            or 0x03B1 <= code <= 0x03C9
            or 0x03D0 <= code <= 0x03F5)


def is_latin(ch: str) -> bool:
    return ch != '' and ch in _LATIN


class Tokenizer:
    """Lazily converts expression text into tokens.

    ``next()`` advances to the following token and returns False once the
    input is exhausted, leaving ``current`` at an EOF token.
    """

    def __init__(self, text: Union[str, bytes]):
        if isinstance(text, bytes):
            text = text.decode('utf-8')
        self.text = text
        self.pos = 0
        self.len = len(text)
        self._current = Token(TokenType.EOF, None, 0)

    @property
    def current(self) -> Token:
        return self._current

    def _peek(self, n: int = 0) -> str:
        i = self.pos + n
        return self.text[i] if i < self.len else ''

    def _advance(self, n: int = 1) -> None:
        self.pos += n

    def _skip_whitespace(self) -> None:
        while self._peek() and self._peek().isspace():
            self._advance()

    def _read_number(self) -> Token:
        start = self.pos
        n = 0
        while self._peek() and self._peek() in _DIGITS:
            n = n * 10 + (ord(self._peek()) - ord('0'))
            self._advance()
        # exact integer first, then one correctly rounded conversion
        try:
            value = float(n)
        except OverflowError:
            value = math.inf
        return Token(TokenType.NUMBER, value, start)

    def _read_symbol(self) -> Token:
        start = self.pos
        while is_latin(self._peek()):
            self._advance()
        return Token(TokenType.SYMBOL, self.text[start:self.pos], start)

    def _read_operator(self, ch: str) -> Optional[Token]:
        start = self.pos
        if ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            return Token(_SINGLE_CHAR_TOKENS[ch], ch, start)
        for text, typ in _COMPOUND_TOKENS.get(ch, ()):
            if self.text.startswith(text, self.pos):
                self._advance(len(text))
                return Token(typ, text, start)
        return None

    def _scan(self) -> Token:
        self._skip_whitespace()
        ch = self._peek()
        if ch == '':
            return Token(TokenType.EOF, None, self.pos)
        tok = self._read_operator(ch)
        if tok is not None:
            return tok
        if ch in _DIGITS:
            return self._read_number()
        if is_greek(ch):
            self._advance()
            return Token(TokenType.SYMBOL, ch, self.pos - 1)
        if is_latin(ch):
            return self._read_symbol()
        raise UnexpectedCharacter(ch, self.pos)

    def next(self) -> bool:
        """Advance to the next token; False (with ``current`` at EOF) when input is exhausted."""
        self._current = self._scan()
        return self._current.type != TokenType.EOF

    def __iter__(self) -> Iterator[Token]:
        while self.next():
            yield self._current
        yield self._current


def tokenize(text: Union[str, bytes]) -> List[Token]:
    """Tokenize the whole input, ending with an EOF token."""
    return list(Tokenizer(text))
