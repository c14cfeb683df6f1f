# errors.py
"""Exception taxonomy for tokenizing and parsing expressions.

Evaluation never raises: numerically invalid results are reported as NaN
numbers instead. Everything here is raised while turning text into a tree.
"""

from typing import Optional


class ExprError(Exception):
    """Base class for expression errors."""
    pass


class ParseError(ExprError):
    """Raised when an expression cannot be parsed; carries the input position if known."""

    def __init__(self, message: str, position: Optional[int] = None):
        if position is not None:
            message = f"{message} at pos {position}"
        super().__init__(message)
        self.position = position


class UnexpectedCharacter(ParseError):
    """Raised by the tokenizer for a character that starts no token."""

    def __init__(self, char: str, position: int):
        super().__init__(f"Unexpected character {char!r}", position)
        self.char = char


class UnexpectedToken(ParseError):
    """Raised when the parser finds a token that does not continue the grammar."""
    pass


class UnexpectedEof(UnexpectedToken):
    """Raised when the input ends while the parser still expects a token."""
    pass


class UnknownSymbol(ParseError):
    """Raised in strict mode for an identifier the environment does not define."""

    def __init__(self, name: str, position: Optional[int] = None):
        super().__init__(f"Unknown symbol {name!r}", position)
        self.name = name


class InvalidDefinitionTarget(ParseError):
    """Raised when the left-hand side of ':=' is not a bare symbol."""
    pass
