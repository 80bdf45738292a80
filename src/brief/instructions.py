from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple


class Opcode(Enum):
    INC_VALUE = '+'
    DEC_VALUE = '-'
    INC_POINTER = '>'
    DEC_POINTER = '<'
    READ = ','
    WRITE = '.'
    LOOP_OPEN = '['
    LOOP_CLOSE = ']'

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def foldable(self) -> bool:
        return self not in (Opcode.LOOP_OPEN, Opcode.LOOP_CLOSE)


OPCODE_BY_SYMBOL = {op.value: op for op in Opcode}


@dataclass(frozen=True)
class Instruction:
    opcode: Opcode
    count: int = 1
    target: Optional[int] = None  # partner index for loop brackets

    def __str__(self) -> str:
        return f"{self.opcode.symbol} {self.count}"


class Program(Sequence[Instruction]):
    """Compiled instruction stream. Immutable once built."""

    __slots__ = ('_instructions',)

    def __init__(self, instructions: Sequence[Instruction] = ()):
        self._instructions: Tuple[Instruction, ...] = tuple(instructions)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Program(self._instructions[index])
        return self._instructions[index]

    def __len__(self) -> int:
        return len(self._instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._instructions)

    def __eq__(self, other) -> bool:
        if isinstance(other, Program):
            return self._instructions == other._instructions
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._instructions)

    def __repr__(self) -> str:
        return f"Program({list(self._instructions)!r})"

    def pairs(self) -> List[Tuple[Opcode, int]]:
        return [(ins.opcode, ins.count) for ins in self._instructions]

    def render(self, per_line: int = 8) -> str:
        """Dump layout: tab-separated ``symbol count`` entries, ``per_line`` to a row."""
        out: List[str] = []
        for n, ins in enumerate(self._instructions, 1):
            out.append(str(ins))
            out.append('\t' if n % per_line else '\n')
        out.append('\n')
        return ''.join(out)
