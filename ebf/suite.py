from dataclasses import dataclass
from typing import List, Dict, Any, Optional
import os

import yaml

from .config import DEFAULT_TAPE_SIZE, InterpreterConfig
from .errors import BrainfuckError
from .interpreter import BrainfuckInterpreter


@dataclass
class ProgramCase:
    name: str
    program: str
    expected: str
    input: Optional[str] = None
    level: int = 0
    tape_size: int = DEFAULT_TAPE_SIZE


@dataclass
class CaseResult:
    name: str
    passed: bool
    output: str
    error: Optional[str] = None


def _coerce_case(obj: Dict[str, Any], base_dir: str) -> ProgramCase:
    name = obj.get("name")
    if not name:
        raise ValueError("Each case must have 'name'")
    if obj.get("expected") is None:
        raise ValueError(f"Case '{name}' must have an 'expected' value")

    if "program" in obj:
        program = str(obj["program"])
    elif "file" in obj:
        path = os.path.join(base_dir, obj["file"])
        with open(path, "r", encoding="utf-8") as f:
            program = f.read()
    else:
        raise ValueError(f"Case '{name}' must have 'program' or 'file'")

    inp = obj.get("input")
    return ProgramCase(
        name=str(name),
        program=program,
        expected=str(obj["expected"]),
        input=None if inp is None else str(inp),
        level=int(obj.get("level", 0)),
        tape_size=int(obj.get("tape_size", DEFAULT_TAPE_SIZE)),
    )


def load_program_suite(path: str) -> List[ProgramCase]:
    """Load verification cases from a YAML file.
    Supported formats:
      1) { cases: [ { name, program | file, expected, input?, level?, tape_size? }, ... ] }
      2) Mapping of name -> { program | file, expected, ... }
    'file' paths are resolved relative to the suite file.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    items: List[Dict[str, Any]]
    if isinstance(data, dict) and isinstance(data.get("cases"), list):
        items = data["cases"]
        for i, obj in enumerate(items):
            if not isinstance(obj, dict):
                raise ValueError(f"Case #{i} must be a mapping")
    elif isinstance(data, dict):
        items = []
        for k, v in data.items():
            if not isinstance(v, dict):
                raise ValueError(f"Case '{k}' must be a mapping")
            items.append({"name": k, **v})
    else:
        raise ValueError("Unsupported suite structure; expected a mapping")

    base_dir = os.path.dirname(os.path.abspath(path))
    return [_coerce_case(obj, base_dir) for obj in items]


def run_case(case: ProgramCase, config: Optional[InterpreterConfig] = None) -> CaseResult:
    """Run one case with buffered output and compare against the expectation."""
    cfg = (config or InterpreterConfig()).with_overrides(
        level=case.level, tape_size=case.tape_size, one_shot_output=True,
    )
    itp = BrainfuckInterpreter(cfg)
    ctx = None
    try:
        # verification never waits on stdin
        ctx = itp.load(case.program, case.input or "")
        itp.run_context(ctx)
    except BrainfuckError as e:
        partial = ctx.output_text() if ctx is not None else ""
        return CaseResult(case.name, False, partial, f"{type(e).__name__}: {e}")
    output = ctx.output_text()
    return CaseResult(case.name, output == case.expected, output)


def run_suite(cases: List[ProgramCase], config: Optional[InterpreterConfig] = None) -> List[CaseResult]:
    return [run_case(case, config) for case in cases]
