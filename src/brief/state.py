from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .config import CELL_DTYPE
from .errors import ConfigurationError


@dataclass
class Machine:
    """Tape state for one run: cells, cell pointer and instruction cursor."""

    cells: np.ndarray
    pointer: int = 0
    cursor: int = 0
    steps: int = 0

    @classmethod
    def blank(cls, cell_count: int) -> "Machine":
        try:
            cells = np.zeros(cell_count, dtype=CELL_DTYPE)
        except (ValueError, OverflowError, MemoryError) as e:
            raise ConfigurationError(message=f"cannot allocate {cell_count} cells") from e
        return cls(cells=cells)

    @property
    def current(self) -> int:
        return int(self.cells[self.pointer])

    @current.setter
    def current(self, value: int) -> None:
        self.cells[self.pointer] = value

    def reset(self) -> None:
        self.cells.fill(0)
        self.pointer = 0
        self.cursor = 0
        self.steps = 0

    def dump(self, count: int = 16) -> str:
        shown = [int(v) for v in self.cells[:count]]
        return f"ptr={self.pointer} cells[:{len(shown)}]={shown}"
