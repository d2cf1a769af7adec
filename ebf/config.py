from dataclasses import dataclass, fields, replace
from typing import Optional
import os

from dotenv import find_dotenv, load_dotenv

DEFAULT_TAPE_SIZE = 2048
MINIMAL_TAPE_SIZE = 10
MAX_LEVEL = 3

BOUNDS_POLICIES = ("clamp", "strict")
JUMP_STRATEGIES = ("table", "scan")
DIALECTS = ("classic", "two-head")

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class InterpreterConfig:
    tape_size: int = DEFAULT_TAPE_SIZE
    level: int = 0
    # The output is printed all at once at the end of the program
    one_shot_output: bool = False
    bounds: str = "clamp"
    jump_strategy: str = "table"
    dialect: str = "classic"
    step_limit: Optional[int] = None
    strict_reserved: bool = False

    def validate(self) -> "InterpreterConfig":
        if self.tape_size <= 0:
            raise ValueError(f"tape size must be positive, got {self.tape_size}")
        if not 0 <= self.level <= MAX_LEVEL:
            raise ValueError(f"level must be between 0 and {MAX_LEVEL}, got {self.level}")
        if self.bounds not in BOUNDS_POLICIES:
            raise ValueError(f"unknown bounds policy '{self.bounds}' (expected one of {BOUNDS_POLICIES})")
        if self.jump_strategy not in JUMP_STRATEGIES:
            raise ValueError(f"unknown jump strategy '{self.jump_strategy}' (expected one of {JUMP_STRATEGIES})")
        if self.dialect not in DIALECTS:
            raise ValueError(f"unknown dialect '{self.dialect}' (expected one of {DIALECTS})")
        if self.step_limit is not None and self.step_limit <= 0:
            raise ValueError(f"step limit must be positive, got {self.step_limit}")
        return self

    def with_overrides(self, **overrides) -> "InterpreterConfig":
        """Copy with the given fields replaced; None values are ignored."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"unknown config fields: {', '.join(sorted(unknown))}")
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes).validate()

    @classmethod
    def from_env(cls, **overrides) -> "InterpreterConfig":
        """Build a config from EBF_* environment variables (and a .env file)."""
        load_dotenv(find_dotenv(usecwd=True))
        step_limit = os.environ.get("EBF_STEP_LIMIT")
        cfg = cls(
            tape_size=int(os.environ.get("EBF_TAPE_SIZE", str(DEFAULT_TAPE_SIZE))),
            level=int(os.environ.get("EBF_LEVEL", "0")),
            one_shot_output=os.environ.get("EBF_ONE_SHOT", "0").lower() in _TRUTHY,
            bounds=os.environ.get("EBF_BOUNDS", "clamp"),
            jump_strategy=os.environ.get("EBF_JUMPS", "table"),
            dialect=os.environ.get("EBF_DIALECT", "classic"),
            step_limit=int(step_limit) if step_limit else None,
            strict_reserved=os.environ.get("EBF_STRICT_RESERVED", "0").lower() in _TRUTHY,
        )
        return cfg.with_overrides(**overrides)
