"""
Bracket matching for loop jumps.

Two strategies resolve the same structural pairing:
    table   one pass up front, every jump is a dict lookup
    scan    walk the program counting depth each time a jump is taken
"""

from typing import Dict, Sequence

from .errors import MalformedProgram


def is_balanced(program: Sequence[str]) -> bool:
    """Check if brackets are balanced."""
    depth = 0
    for c in program:
        if c == '[':
            depth += 1
        elif c == ']':
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def build_jump_table(program: Sequence[str]) -> Dict[int, int]:
    """Build a table mapping bracket positions for efficient jumping."""
    jump_table = {}
    stack = []

    for i, cmd in enumerate(program):
        if cmd == '[':
            stack.append(i)
        elif cmd == ']':
            if not stack:
                raise MalformedProgram(f"Unmatched ']' at position {i}", position=i)
            start = stack.pop()
            jump_table[start] = i
            jump_table[i] = start

    if stack:
        raise MalformedProgram(f"Unmatched '[' at position {stack[-1]}", position=stack[-1])

    return jump_table


def scan_forward(program: Sequence[str], ip: int) -> int:
    """Return the position of the ']' matching the '[' at ip."""
    depth = 1
    pos = ip
    while depth > 0:
        pos += 1
        if pos >= len(program):
            raise MalformedProgram(f"Unmatched '[' at position {ip}", position=ip)
        if program[pos] == '[':
            depth += 1
        elif program[pos] == ']':
            depth -= 1
    return pos


def scan_backward(program: Sequence[str], ip: int) -> int:
    """Return the position of the '[' matching the ']' at ip."""
    depth = 1
    pos = ip
    while depth > 0:
        pos -= 1
        if pos < 0:
            raise MalformedProgram(f"Unmatched ']' at position {ip}", position=ip)
        if program[pos] == ']':
            depth += 1
        elif program[pos] == '[':
            depth -= 1
    return pos
