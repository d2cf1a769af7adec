#!/usr/bin/env python3
"""
Brainfuck Step-by-Step Debugger

Shows the step-by-step execution of a program, displaying the state of the
memory tape, storage register, input stream, and output at each step.
"""

from .interpreter import BrainfuckInterpreter, ExecutionContext, InputData


class BrainfuckDebugger(BrainfuckInterpreter):
    """Interpreter that prints its full state after every step."""

    def __init__(self, config=None, show_memory_range=10, printer=print, **overrides):
        overrides.setdefault("one_shot_output", True)
        super().__init__(config, **overrides)
        self.show_memory_range = show_memory_range
        self.printer = printer

    def debug_run(self, code: str, input_data: InputData = None, max_steps: int = 100) -> str:
        """Execute code, tracing each step, and return its output."""
        out = self.printer
        out("🐛 BRAINFUCK DEBUGGER")
        out(f"Program: {code}")
        if input_data is not None:
            out(f"Input: {input_data!r}")
        out(f"Level: {self.config.level}  Dialect: {self.config.dialect}")
        out("=" * 80)

        ctx = self.load(code, input_data)
        self._show_state(ctx, "INITIAL")

        while not ctx.finished and ctx.steps < max_steps:
            ip = ctx.instruction_pointer
            cmd = ctx.program[ip]
            self.step(ctx)
            out(f"\nStep {ctx.steps}: Execute '{cmd}' at position {ip}")
            self._show_state(ctx, f"AFTER STEP {ctx.steps}")

        if not ctx.finished:
            out(f"\n⚠️ Execution stopped after {max_steps} steps (possible infinite loop)")
        elif ctx.halted:
            out(f"\n⏹ Halted by '@' at position {ctx.instruction_pointer}")

        result = ctx.output_text()
        out("\n🎯 FINAL RESULT:")
        out(f"Output: {result!r} → {list(ctx.output)}")
        return result

    def _show_state(self, ctx: ExecutionContext, label: str) -> None:
        """Show current state of memory, pointer, and program."""
        out = self.printer
        out(f"\n{label}:")

        program_display = ""
        for i, cmd in enumerate(ctx.program):
            program_display += f"[{cmd}]" if i == ctx.instruction_pointer else cmd
        out(f"Program:  {program_display}")

        if ctx.input_bytes is not None:
            consumed = ctx.input_bytes[:ctx.input_index].decode("latin-1")
            pending = ctx.input_bytes[ctx.input_index:].decode("latin-1")
            out(f"Input:    {consumed}[{pending[:1] or 'EOF'}]{pending[1:]}")

        # Memory window focused around the pointer
        size = len(ctx.tape)
        start = max(0, ctx.data_pointer - self.show_memory_range // 2)
        end = min(size, start + self.show_memory_range)
        if end - start < self.show_memory_range:
            start = max(0, end - self.show_memory_range)

        window = ctx.tape[start:end]
        out("Memory:   [" + "|".join(f"{v:3d}" for v in window.tolist()) + "]")
        out("Pointer:   " + " ".join(self._marker(ctx, i) for i in range(start, end)))
        out("Address:   " + " ".join(f"{i:3d}" for i in range(start, end)))

        if self.config.dialect == "classic" and self.config.level >= 1:
            out(f"Storage:  {ctx.storage}")

        if ctx.output:
            out(f"Output:   {ctx.output_text()!r} → {list(ctx.output)}")
        else:
            out("Output:   (empty)")

    def _marker(self, ctx: ExecutionContext, i: int) -> str:
        if self.config.dialect == "two-head" and i == ctx.secondary_pointer:
            return " ^^" if i == ctx.data_pointer else " ^1"
        return " ^ " if i == ctx.data_pointer else "   "
