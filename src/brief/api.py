from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .compiler import compile_source
from .config import Configuration
from .executor import execute
from .instructions import Program
from .state import Machine


@dataclass(frozen=True)
class RunResult:
    output: bytes
    machine: Machine
    program: Program


def run_string(source: str, *, config: Optional[Configuration] = None, stdin: bytes = b"") -> RunResult:
    program = compile_source(source)
    out = io.BytesIO()
    machine = execute(program, config, stdin=io.BytesIO(stdin), stdout=out)
    return RunResult(output=out.getvalue(), machine=machine, program=program)


def run_file(path: str | Path, *, config: Optional[Configuration] = None, stdin: bytes = b"",
             encoding: str = "utf-8") -> RunResult:
    p = Path(path)
    return run_string(p.read_text(encoding=encoding, errors="replace"), config=config, stdin=stdin)


def dump_string(source: str) -> str:
    return compile_source(source).render()
