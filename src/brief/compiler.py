from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Iterable, List, Tuple

from .errors import UnmatchedCloseError, UnmatchedOpenError, make_compile_error
from .instructions import OPCODE_BY_SYMBOL, Instruction, Opcode, Program


def compile_source(source: Iterable[str]) -> Program:
    """
    Compile brainfuck source into a run-length folded Program.

    Single pass over the source:
    - non-operator characters are comments and are skipped
    - runs of the same foldable operator collapse into one instruction
      whose count is the run length
    - each '[' and its matching ']' get each other's index as target

    Raises UnmatchedCloseError / UnmatchedOpenError on unbalanced brackets.
    """
    text = source if isinstance(source, str) else ''.join(source)

    instructions: List[Instruction] = []
    # (instruction index, source offset) of each pending '['
    open_loops: List[Tuple[int, int]] = []

    for offset, ch in enumerate(text):
        op = OPCODE_BY_SYMBOL.get(ch)
        if op is None:
            continue

        if op.foldable:
            if instructions and instructions[-1].opcode is op:
                last = instructions[-1]
                instructions[-1] = replace(last, count=last.count + 1)
            else:
                instructions.append(Instruction(op))
        elif op is Opcode.LOOP_OPEN:
            open_loops.append((len(instructions), offset))
            instructions.append(Instruction(op))
        else:
            if not open_loops:
                raise make_compile_error(UnmatchedCloseError, message="unmatched ']'",
                                         source=text, offset=offset)
            start, _ = open_loops.pop()
            here = len(instructions)
            instructions[start] = replace(instructions[start], target=here)
            instructions.append(Instruction(op, target=start))

    if open_loops:
        _, offset = open_loops[-1]
        raise make_compile_error(UnmatchedOpenError, message="unmatched '['",
                                 source=text, offset=offset)

    return Program(instructions)


def compile_file(path: str | Path, *, encoding: str = "utf-8") -> Program:
    p = Path(path)
    return compile_source(p.read_text(encoding=encoding, errors="replace"))
