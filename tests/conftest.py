import logging
import os

import pytest

from ebf import BrainfuckInterpreter

EXAMPLES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "examples")

HELLO_WORLD = (
    "++++++++++[>+++++++>++++++++++>+++>+<<<<-]>++.>+.+++++++"
    "..+++.>++.<<+++++++++++++++.>.+++.------.--------.>+.>."
)


@pytest.fixture
def examples_dir():
    return EXAMPLES_DIR


@pytest.fixture
def make_interpreter():
    """Factory for buffered interpreters with config overrides."""
    def _make(**overrides):
        overrides.setdefault("one_shot_output", True)
        return BrainfuckInterpreter(**overrides)
    return _make


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("EBF_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("ebf")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
