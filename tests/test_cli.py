import os

import pytest

from ebf.cli import main


def example(examples_dir, name):
    return os.path.join(examples_dir, name)


def test_one_shot_output(examples_dir, capsys):
    assert main(["-i", example(examples_dir, "add_numbers.bf"), "--one-shot"]) == 0
    assert capsys.readouterr().out == "7\n"


def test_streaming_output(examples_dir, capsys):
    assert main(["-i", example(examples_dir, "hello_world.bf")]) == 0
    assert capsys.readouterr().out == "Hello World!\n"


def test_level_and_stdin_data(tmp_path, capsys):
    program = tmp_path / "double.bf"
    program.write_text(",$=.")
    assert main(["-i", str(program), "-l", "2", "--stdin-data", "!", "--one-shot"]) == 0
    assert capsys.readouterr().out == "B\n"


def test_engine_error_exit_status(tmp_path, capsys):
    program = tmp_path / "bad.bf"
    program.write_text("+[")
    assert main(["-i", str(program)]) == 1
    assert "Unmatched '['" in capsys.readouterr().err


def test_strict_bounds_from_cli(tmp_path, capsys):
    program = tmp_path / "walk.bf"
    program.write_text(">" * 5)
    assert main(["-i", str(program), "-s", "3"]) == 0
    assert main(["-i", str(program), "-s", "3", "--bounds", "strict"]) == 1
    assert "outside tape" in capsys.readouterr().err


def test_missing_file(capsys):
    assert main(["-i", "does-not-exist.bf"]) == 1
    assert "Error" in capsys.readouterr().err


def test_usage_errors(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2
    with pytest.raises(SystemExit) as exc:
        main(["-i", "x.bf", "-l", "7"])
    assert exc.value.code == 2
    with pytest.raises(SystemExit) as exc:
        main(["-i", "x.bf", "-s", "0"])
    assert exc.value.code == 2


def test_verify_suite(examples_dir, capsys):
    assert main(["--verify", example(examples_dir, "suite.yaml")]) == 0
    out = capsys.readouterr().out
    assert "PASS add_numbers" in out
    assert "6/6 passed" in out


def test_verify_failure(tmp_path, capsys):
    suite = tmp_path / "suite.yaml"
    suite.write_text("cases:\n  - name: nope\n    program: '+.'\n    expected: x\n")
    assert main(["--verify", str(suite)]) == 1
    assert "FAIL nope" in capsys.readouterr().out


def test_trace(examples_dir, capsys):
    assert main(["-i", example(examples_dir, "add_numbers.bf"), "--trace", "--trace-steps", "3"]) == 0
    out = capsys.readouterr().out
    assert "BRAINFUCK DEBUGGER" in out
    assert "Step 3:" in out
    assert "Step 4:" not in out


def test_verify_rejects_malformed_case(tmp_path, capsys):
    suite = tmp_path / "suite.yaml"
    suite.write_text("cases:\n  - 1\n")
    assert main(["--verify", str(suite)]) == 1
    assert "Case #0 must be a mapping" in capsys.readouterr().err
