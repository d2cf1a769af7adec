"""Extended Brainfuck interpreter."""

from .config import DEFAULT_TAPE_SIZE, MINIMAL_TAPE_SIZE, InterpreterConfig
from .debugger import BrainfuckDebugger
from .errors import (
    BrainfuckError,
    InputExhausted,
    MalformedProgram,
    OutOfBounds,
    StepLimitExceeded,
    Unimplemented,
)
from .interpreter import BrainfuckInterpreter, ExecutionContext

__version__ = "0.1.0"

__all__ = [
    "BrainfuckDebugger",
    "BrainfuckError",
    "BrainfuckInterpreter",
    "DEFAULT_TAPE_SIZE",
    "ExecutionContext",
    "InputExhausted",
    "InterpreterConfig",
    "MINIMAL_TAPE_SIZE",
    "MalformedProgram",
    "OutOfBounds",
    "StepLimitExceeded",
    "Unimplemented",
]
