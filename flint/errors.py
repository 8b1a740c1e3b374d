from __future__ import annotations

from contextlib import contextmanager


class FlintError(Exception):
    """ Base class for all Flint errors"""

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.message = message
        self.position = position

class LexError(FlintError):
    """ Raised on an invalid character or an unterminated string"""

class ParseError(FlintError):
    """ Raised when the parser meets a token it did not expect"""

class TypeMismatch(FlintError):
    """ Raised when a value's type is not assignable to the expected type"""

class DuplicateBinding(FlintError):
    """ Raised when a name is declared twice in the same scope"""

class UnresolvedName(FlintError):
    """ Raised when a name is used that no enclosing scope declares"""

class ConstAssignment(FlintError):
    """ Raised when assigning to a constant binding"""

class ArityMismatch(FlintError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class UnsupportedOperator(FlintError):
    """ Raised when no operator is defined for the operand types"""

class IllegalControlFlow(FlintError):
    """ Raised when return or break escapes the construct that may handle it"""

class IndexOutOfRange(FlintError):
    """ Raised when an array index is outside the array"""

class ScriptError(FlintError):
    """ Raised by the error() builtin with the script's message"""

class RecursionDepthExceeded(FlintError):
    """ Raised when script calls nest deeper than the host stack allows"""


@contextmanager
def located(position: int | None):
    """Attach `position` to a FlintError raised in the block that has none yet."""
    try:
        yield
    except FlintError as e:
        if e.position is None:
            e.position = position
        raise
