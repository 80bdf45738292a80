#!/usr/bin/env python3
"""
Test the command-line front end in-process.
"""

import io
import os
import sys
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from brief.cli import main

HELLO = '++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---.+++++++..+++.'


@pytest.fixture
def source(tmp_path):
    def _write(code, name='prog.b'):
        path = tmp_path / name
        path.write_text(code)
        return str(path)
    return _write


def run_cli(argv, input_data=b''):
    out = io.BytesIO()
    code = main(argv, stdin=io.BytesIO(input_data), stdout=out)
    return code, out.getvalue()


def test_runs_program_from_positional_path(source):
    code, out = run_cli([source(HELLO)])
    assert code == 0
    assert out == b'Hello'


def test_runs_program_from_file_option(source):
    code, out = run_cli(['-f', source(',+.')], b'A')
    assert code == 0
    assert out == b'B'


def test_dump_mode(source):
    code, out = run_cli(['-m', 'd', source('+++.')])
    assert code == 0
    assert out == b'+ 3\t. 1\t\n'


def test_pointer_error_exit_status(source, capsys):
    code, out = run_cli([source('<')])
    assert code == 1
    err = capsys.readouterr().err
    assert err.startswith('brief: error: cell index underflow')


def test_pointer_policies_from_flags(source):
    assert run_cli(['-w', 'i', source('<')])[0] == 0
    assert run_cli(['-w', 'w', '-c', '10', source('<+.')]) == (0, b'\x01')


def test_value_options(source, capsys):
    code, _ = run_cli(['-v', 'e', '-b', '2', source('+++', 'value.b')])
    assert code == 1
    assert 'value overflow' in capsys.readouterr().err

    code, out = run_cli(['-a', '-1', '-e', 'a', source(',+.')])
    assert (code, out) == (0, b'\x00')


def test_eof_option(source):
    assert run_cli(['-e', 'b', source(',.')]) == (0, b'\xff')
    assert run_cli(['--eof', 'n', source(',.')]) == (0, b'\xff')


def test_unmatched_bracket(source, capsys):
    code, out = run_cli([source('+[')])
    assert code == 1
    assert out == b''
    assert "unmatched '['" in capsys.readouterr().err


def test_invalid_policy(source, capsys):
    code, _ = run_cli(['-v', 'q', source('+')])
    assert code == 1
    assert 'invalid overflow behaviour' in capsys.readouterr().err


def test_invalid_mode(source, capsys):
    assert run_cli(['-m', 'z', source('+')])[0] == 1
    assert 'invalid mode' in capsys.readouterr().err


def test_invalid_range(source, capsys):
    assert run_cli(['-a', '5', '-b', '1', source('+')])[0] == 1
    assert 'greater than maximum' in capsys.readouterr().err


def test_missing_source_option(capsys):
    assert run_cli(['-m', 'r'])[0] == 1
    assert 'no source file specified; use -f' in capsys.readouterr().err


def test_unreadable_source(tmp_path, capsys):
    missing = str(tmp_path / 'nope.b')
    assert run_cli([missing])[0] == 1
    assert f'brief: error: {missing}: ' in capsys.readouterr().err


def test_no_arguments_prints_help(capsys):
    assert run_cli([])[0] == 1
    assert 'flexible brainfuck interpreter' in capsys.readouterr().err


def test_timing_report(source, capsys):
    code, out = run_cli(['-t', source('+.')])
    assert (code, out) == (0, b'\x01')
    err = capsys.readouterr().err
    assert 'Compilation took' in err
    assert 'Execution took' in err


def test_diagnostics_are_a_single_line(source, capsys):
    cases = [
        ([source('+[', 'open.b')], "unmatched '[' (line 1, column 2)"),
        (['-v', 'e', '-b', '2', source('+++', 'value.b')],
         "value overflow at instruction 0 ('+'): 3 is past the maximum of 2"),
        ([source('<', 'ptr.b')], "cell index underflow at instruction 0 ('<'): -1 is past the minimum of 0"),
    ]
    for argv, message in cases:
        assert run_cli(argv)[0] == 1
        err = capsys.readouterr().err
        assert err == f'brief: error: {message}\n'
        assert err.count('\n') == 1


def test_oversized_cell_count(source, capsys):
    code, out = run_cli(['-c', str(10 ** 20), source('+.')])
    assert (code, out) == (1, b'')
    assert capsys.readouterr().err == f'brief: error: cannot allocate {10 ** 20} cells\n'


def test_help_flag_prints_help_and_fails(capsys):
    assert run_cli(['-h'])[0] == 1
    assert 'flexible brainfuck interpreter' in capsys.readouterr().err
    assert run_cli(['--help'])[0] == 1
