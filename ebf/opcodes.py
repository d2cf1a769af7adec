"""
Opcode dispatch table.

Every symbol the interpreter understands maps to one Opcode entry tagged
with the minimum capability level it needs:

    Level 0   >  <  +  -  .  ,  [  ]
    Level 1   @  $  !  }  {  ~  ^  &  |     (halt, storage and bitwise)
    Level 2   *  /  =  _  %                 (arithmetic with storage)
              ?  (  )                       (reserved)
    Level 3   X x M m L l : 0-9 A-F #       (reserved)

Symbols without an active entry are comments. Reserved opcodes are
reported when they run instead of silently doing nothing.

The two-head dialect has its own table: '{' and '}' move the second head,
'.' copies head0 to head1 and ',' copies head1 to head0.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .errors import Unimplemented
from .log import get_logger

logger = get_logger("opcodes")

# Cap on recorded reserved-opcode hits per run
MAX_RESERVED_HITS = 100

Handler = Callable[..., None]


@dataclass(frozen=True)
class Opcode:
    symbol: str
    tier: int
    name: str
    handler: Handler


def _cell(ctx) -> int:
    return int(ctx.tape[ctx.data_pointer])


def _set_cell(ctx, value: int) -> None:
    ctx.tape[ctx.data_pointer] = value % 256


# Level 0

def op_right(machine, ctx):
    ctx.data_pointer = machine.move(ctx, ctx.data_pointer, 1)


def op_left(machine, ctx):
    ctx.data_pointer = machine.move(ctx, ctx.data_pointer, -1)


def op_inc(machine, ctx):
    _set_cell(ctx, _cell(ctx) + 1)


def op_dec(machine, ctx):
    _set_cell(ctx, _cell(ctx) - 1)


def op_output(machine, ctx):
    machine.emit(ctx, _cell(ctx))


def op_input(machine, ctx):
    _set_cell(ctx, machine.read_byte(ctx))


def op_loop_start(machine, ctx):
    if _cell(ctx) == 0:
        ctx.instruction_pointer = machine.match_bracket(ctx, ctx.instruction_pointer)


def op_loop_end(machine, ctx):
    if _cell(ctx) != 0:
        ctx.instruction_pointer = machine.match_bracket(ctx, ctx.instruction_pointer)


# Level 1

def op_halt(machine, ctx):
    ctx.halted = True


def op_store(machine, ctx):
    ctx.storage = _cell(ctx)


def op_load(machine, ctx):
    _set_cell(ctx, ctx.storage)


def op_shift_right(machine, ctx):
    _set_cell(ctx, _cell(ctx) >> 1)


def op_shift_left(machine, ctx):
    _set_cell(ctx, (_cell(ctx) << 1) & 0xFF)


def op_not(machine, ctx):
    _set_cell(ctx, _cell(ctx) ^ 0xFF)


def op_xor(machine, ctx):
    _set_cell(ctx, _cell(ctx) ^ ctx.storage)


def op_and(machine, ctx):
    _set_cell(ctx, _cell(ctx) & ctx.storage)


def op_or(machine, ctx):
    _set_cell(ctx, _cell(ctx) | ctx.storage)


# Level 2

def op_mul(machine, ctx):
    _set_cell(ctx, _cell(ctx) * ctx.storage)


def _zero_storage(ctx, symbol: str) -> bool:
    if ctx.storage != 0:
        return False
    logger.error(
        "Division by zero, instruction pointer: %d, current char: %s",
        ctx.instruction_pointer, symbol,
    )
    return True


def op_div(machine, ctx):
    if not _zero_storage(ctx, '/'):
        _set_cell(ctx, _cell(ctx) // ctx.storage)


def op_add_storage(machine, ctx):
    _set_cell(ctx, _cell(ctx) + ctx.storage)


def op_sub_storage(machine, ctx):
    _set_cell(ctx, _cell(ctx) - ctx.storage)


def op_rem(machine, ctx):
    if not _zero_storage(ctx, '%'):
        _set_cell(ctx, _cell(ctx) % ctx.storage)


def op_reserved(machine, ctx):
    symbol = ctx.program[ctx.instruction_pointer]
    ip = ctx.instruction_pointer
    if machine.config.strict_reserved:
        raise Unimplemented(f"Opcode '{symbol}' at position {ip} is reserved and not defined", position=ip)
    logger.warning("Reserved opcode '%s' at position %d is not defined, skipping", symbol, ip)
    if len(ctx.reserved_hits) < MAX_RESERVED_HITS:
        ctx.reserved_hits.append((ip, symbol))


# Two-head dialect

def op_head1_right(machine, ctx):
    ctx.secondary_pointer = machine.move(ctx, ctx.secondary_pointer, 1)


def op_head1_left(machine, ctx):
    ctx.secondary_pointer = machine.move(ctx, ctx.secondary_pointer, -1)


def op_copy_to_head1(machine, ctx):
    ctx.tape[ctx.secondary_pointer] = ctx.tape[ctx.data_pointer]


def op_copy_from_head1(machine, ctx):
    ctx.tape[ctx.data_pointer] = ctx.tape[ctx.secondary_pointer]


def _table(*entries: Opcode) -> Dict[str, Opcode]:
    return {op.symbol: op for op in entries}


_CORE = (
    Opcode('>', 0, "right", op_right),
    Opcode('<', 0, "left", op_left),
    Opcode('+', 0, "inc", op_inc),
    Opcode('-', 0, "dec", op_dec),
    Opcode('[', 0, "loop_start", op_loop_start),
    Opcode(']', 0, "loop_end", op_loop_end),
)

TIER3_SYMBOLS = "XxMmLl:0123456789ABCDEF#"

OPCODES: Dict[str, Opcode] = _table(
    *_CORE,
    Opcode('.', 0, "output", op_output),
    Opcode(',', 0, "input", op_input),
    Opcode('@', 1, "halt", op_halt),
    Opcode('$', 1, "store", op_store),
    Opcode('!', 1, "load", op_load),
    Opcode('}', 1, "shift_right", op_shift_right),
    Opcode('{', 1, "shift_left", op_shift_left),
    Opcode('~', 1, "not", op_not),
    Opcode('^', 1, "xor", op_xor),
    Opcode('&', 1, "and", op_and),
    Opcode('|', 1, "or", op_or),
    Opcode('*', 2, "mul", op_mul),
    Opcode('/', 2, "div", op_div),
    Opcode('=', 2, "add_storage", op_add_storage),
    Opcode('_', 2, "sub_storage", op_sub_storage),
    Opcode('%', 2, "rem", op_rem),
    *(Opcode(s, 2, "reserved", op_reserved) for s in "?()"),
    *(Opcode(s, 3, "reserved", op_reserved) for s in TIER3_SYMBOLS),
)

TWO_HEAD_OPCODES: Dict[str, Opcode] = _table(
    *_CORE,
    Opcode('}', 0, "head1_right", op_head1_right),
    Opcode('{', 0, "head1_left", op_head1_left),
    Opcode('.', 0, "copy_to_head1", op_copy_to_head1),
    Opcode(',', 0, "copy_from_head1", op_copy_from_head1),
)

_DIALECT_TABLES = {"classic": OPCODES, "two-head": TWO_HEAD_OPCODES}


def lookup(symbol: str, level: int, dialect: str = "classic") -> Optional[Opcode]:
    """Return the active opcode for symbol, or None when it is a no-op at this level."""
    op = _DIALECT_TABLES[dialect].get(symbol)
    if op is None or op.tier > level:
        return None
    return op
