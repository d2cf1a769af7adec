"""Command line entry point: `ebf -i program.bf [-s TAPE_LEN] [-l LEVEL]`."""

import argparse
import sys
from typing import List, Optional

from .config import BOUNDS_POLICIES, DIALECTS, JUMP_STRATEGIES, InterpreterConfig
from .debugger import BrainfuckDebugger
from .errors import BrainfuckError
from .interpreter import BrainfuckInterpreter
from .log import get_logger, init_logging
from .suite import load_program_suite, run_suite

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="ebf", description="Extended Brainf*ck interpreter")
    ap.add_argument("-i", "--input", metavar="FILE", help="Sets the input file (the program to run)")
    ap.add_argument("-s", "--size", metavar="TAPE_LEN", type=int, help="Tape length (default 2048)")
    ap.add_argument("-l", "--level", type=int, choices=range(4), help="Extended brainfuck level. 1-3 is extended, 0 is normal bf")
    ap.add_argument("--stdin-data", metavar="TEXT", help="Input bytes for ',' instead of reading stdin")
    ap.add_argument("--one-shot", action="store_true", default=None, help="Print the output all at once at the end of the program")
    ap.add_argument("--bounds", choices=BOUNDS_POLICIES, help="Pointer policy at the tape ends")
    ap.add_argument("--jumps", choices=JUMP_STRATEGIES, help="Bracket matching strategy")
    ap.add_argument("--dialect", choices=DIALECTS, help="Instruction set dialect")
    ap.add_argument("--step-limit", type=int, help="Abort after this many steps")
    ap.add_argument("--strict-reserved", action="store_true", default=None, help="Fail on reserved opcodes instead of skipping them")
    ap.add_argument("--trace", action="store_true", help="Print the machine state after every step")
    ap.add_argument("--trace-steps", type=int, default=100, help="Maximum steps shown by --trace")
    ap.add_argument("--verify", metavar="SUITE", help="Run a YAML suite of programs with expected outputs")
    ap.add_argument("--log-level", help="Log level (default from EBF_LOG, else warning)")
    return ap


def _read_program(path: str) -> str:
    logger.debug("Reading %s", path)
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _verify(path: str, cfg: InterpreterConfig) -> int:
    results = run_suite(load_program_suite(path), cfg)
    failed = 0
    for r in results:
        if r.passed:
            print(f"PASS {r.name}")
        else:
            failed += 1
            detail = r.error or f"got {r.output!r}"
            print(f"FAIL {r.name}: {detail}")
    print(f"{len(results) - failed}/{len(results)} passed")
    return 1 if failed else 0


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    try:
        init_logging(args.log_level)
        cfg = InterpreterConfig.from_env(
            tape_size=args.size,
            level=args.level,
            one_shot_output=args.one_shot,
            bounds=args.bounds,
            jump_strategy=args.jumps,
            dialect=args.dialect,
            step_limit=args.step_limit,
            strict_reserved=args.strict_reserved,
        )
    except ValueError as e:
        ap.error(str(e))
    if not args.input and not args.verify:
        ap.error("an input file is required (-i FILE) unless --verify is given")

    try:
        if args.verify:
            return _verify(args.verify, cfg)

        program = _read_program(args.input)
        if args.trace:
            BrainfuckDebugger(cfg).debug_run(program, args.stdin_data, max_steps=args.trace_steps)
            return 0

        logger.debug("Running program")
        itp = BrainfuckInterpreter(cfg)
        output = itp.run(program, args.stdin_data)
        if cfg.one_shot_output:
            print(output)
    except (BrainfuckError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
