#!/usr/bin/env python3
"""
Extended Brainfuck Interpreter

Runs a program against a fixed-size tape of unsigned bytes. The classic
commands are always active:
    >   Move the pointer to the right
    <   Move the pointer to the left
    +   Increment the memory cell at the pointer
    -   Decrement the memory cell at the pointer
    .   Output the byte in the cell at the pointer
    ,   Input a byte and store it in the cell at the pointer
    [   Jump past the matching ] if the cell at the pointer is 0
    ]   Jump back to the matching [ if the cell at the pointer is nonzero

Levels 1-3 switch on the Extended Brainfuck command groups (see
ebf.opcodes). All other characters are treated as comments and ignored.

Pointer moves past either end of the tape are clamped by default; the
"strict" bounds policy raises OutOfBounds instead.
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, Iterator, List, Optional, TextIO, Tuple, Union

import numpy as np

from .config import InterpreterConfig
from .errors import InputExhausted, OutOfBounds, StepLimitExceeded
from .jumps import build_jump_table, scan_backward, scan_forward
from .log import get_logger
from .opcodes import lookup

logger = get_logger("interpreter")

InputData = Union[str, bytes, bytearray, None]


@dataclass
class ExecutionContext:
    """All mutable state of one run. Owned by a single run, never shared."""
    program: Tuple[str, ...]
    tape: np.ndarray
    input_bytes: Optional[bytes] = None
    data_pointer: int = 0
    instruction_pointer: int = 0
    secondary_pointer: int = 0
    storage: int = 0
    input_index: int = 0
    halted: bool = False
    steps: int = 0
    input_reads: int = 0
    output_writes: int = 0
    output: List[int] = field(default_factory=list)
    reserved_hits: List[Tuple[int, str]] = field(default_factory=list)
    jump_table: Optional[Dict[int, int]] = None

    @property
    def finished(self) -> bool:
        return self.halted or self.instruction_pointer >= len(self.program)

    @property
    def current_symbol(self) -> Optional[str]:
        if self.instruction_pointer < len(self.program):
            return self.program[self.instruction_pointer]
        return None

    def output_text(self) -> str:
        # One character per byte, like printing a u8 as a char
        return bytes(self.output).decode("latin-1")


class BrainfuckInterpreter:
    def __init__(
        self,
        config: Optional[InterpreterConfig] = None,
        input_stream: Optional[BinaryIO] = None,
        output_stream: Optional[TextIO] = None,
        **overrides,
    ):
        self.config = (config or InterpreterConfig()).with_overrides(**overrides)
        self.input_stream = input_stream
        self.output_stream = output_stream

    def load(self, code: str, input_data: InputData = None) -> ExecutionContext:
        """Create a fresh execution context for code."""
        program = tuple(code)
        if isinstance(input_data, str):
            input_data = input_data.encode("utf-8")
        elif input_data is not None:
            input_data = bytes(input_data)

        ctx = ExecutionContext(
            program=program,
            tape=np.zeros(self.config.tape_size, dtype=np.uint8),
            input_bytes=input_data,
        )
        if self.config.jump_strategy == "table":
            ctx.jump_table = build_jump_table(program)
        return ctx

    def step(self, ctx: ExecutionContext) -> bool:
        """Execute one instruction. Returns False once the run has finished."""
        if ctx.finished:
            return False

        cfg = self.config
        if cfg.step_limit is not None and ctx.steps >= cfg.step_limit:
            raise StepLimitExceeded(
                f"Program exceeded {cfg.step_limit} steps", position=ctx.instruction_pointer
            )

        symbol = ctx.program[ctx.instruction_pointer]
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Instruction Pointer: %d, Data Pointer: %d, Current Char: %s",
                ctx.instruction_pointer, ctx.data_pointer, symbol,
            )

        op = lookup(symbol, cfg.level, cfg.dialect)
        if op is not None:
            op.handler(self, ctx)
        ctx.steps += 1

        if ctx.halted:
            return False
        ctx.instruction_pointer += 1
        return not ctx.finished

    def iter_steps(self, code: str, input_data: InputData = None) -> Iterator[ExecutionContext]:
        """Yield the context after every executed instruction."""
        ctx = self.load(code, input_data)
        while not ctx.finished:
            self.step(ctx)
            yield ctx

    def run(self, code: str, input_data: InputData = None) -> str:
        """Execute code with optional input data and return everything it emitted."""
        ctx = self.load(code, input_data)
        self.run_context(ctx)
        return ctx.output_text()

    def run_context(self, ctx: ExecutionContext) -> ExecutionContext:
        while self.step(ctx):
            pass
        if ctx.halted:
            logger.info("Halted at position %d after %d steps", ctx.instruction_pointer, ctx.steps)
        return ctx

    # Helpers used by opcode handlers

    def move(self, ctx: ExecutionContext, pointer: int, delta: int) -> int:
        target = pointer + delta
        if 0 <= target < len(ctx.tape):
            return target
        if self.config.bounds == "strict":
            raise OutOfBounds(
                f"Pointer moved to {target}, outside tape of size {len(ctx.tape)}",
                position=ctx.instruction_pointer,
            )
        return pointer

    def match_bracket(self, ctx: ExecutionContext, ip: int) -> int:
        if ctx.jump_table is not None:
            return ctx.jump_table[ip]
        if ctx.program[ip] == '[':
            return scan_forward(ctx.program, ip)
        return scan_backward(ctx.program, ip)

    def emit(self, ctx: ExecutionContext, value: int) -> None:
        ctx.output_writes += 1
        if self.config.one_shot_output:
            ctx.output.append(value)
        else:
            stream = self.output_stream or sys.stdout
            stream.write(chr(value))
            stream.flush()

    def read_byte(self, ctx: ExecutionContext) -> int:
        ip = ctx.instruction_pointer
        if ctx.input_bytes is not None:
            if ctx.input_index >= len(ctx.input_bytes):
                raise InputExhausted(f"No input left for ',' at position {ip}", position=ip)
            value = ctx.input_bytes[ctx.input_index]
            ctx.input_index += 1
        else:
            stream = self.input_stream or sys.stdin.buffer
            # read a single byte, blocking
            data = stream.read(1)
            if not data:
                raise InputExhausted(f"End of input for ',' at position {ip}", position=ip)
            value = data[0]
        ctx.input_reads += 1
        return value
