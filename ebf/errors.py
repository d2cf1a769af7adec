"""Errors raised by the Brainfuck execution core."""

from typing import Optional


class BrainfuckError(Exception):
    """Base class for every error the interpreter reports."""

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.position = position


class MalformedProgram(BrainfuckError, SyntaxError):
    """Brackets do not balance."""


class InputExhausted(BrainfuckError):
    """A ',' ran with no input byte available."""


class OutOfBounds(BrainfuckError, IndexError):
    """A pointer would leave the tape under the strict bounds policy."""


class Unimplemented(BrainfuckError, NotImplementedError):
    """A reserved opcode ran while reserved opcodes are strict."""


class StepLimitExceeded(BrainfuckError, RuntimeError):
    """Execution used up its step budget."""
