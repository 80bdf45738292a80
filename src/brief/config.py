from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from .errors import ConfigurationError

CELL_DTYPE = np.int64
CELL_MIN = int(np.iinfo(CELL_DTYPE).min)
CELL_MAX = int(np.iinfo(CELL_DTYPE).max)


class _ParsableEnum(Enum):
    """Enum parsed from a command-line code or a spelled-out name.

    Subclasses provide ``_aliases()`` (lower-cased spelling -> member value)
    and ``_label()`` for diagnostics.
    """

    @classmethod
    def parse(cls, text):
        if isinstance(text, cls):
            return text
        key = str(text).strip().lower()
        value = cls._aliases().get(key)
        if value is None:
            choices = ', '.join(sorted(cls._aliases()))
            raise ConfigurationError(message=f"invalid {cls._label()} '{text}' (expected one of: {choices})")
        return cls(value)


class BoundaryPolicy(_ParsableEnum):
    ERROR = 'e'
    SATURATE = 'i'
    WRAP = 'w'

    @staticmethod
    def _aliases():
        return {
            'e': 'e', 'error': 'e',
            'i': 'i', 'ignore': 'i', 'saturate': 'i', 'clamp': 'i',
            'w': 'w', 'wrap': 'w',
        }

    @staticmethod
    def _label():
        return 'overflow behaviour'


class EofPolicy(_ParsableEnum):
    ZERO = '0'
    MIN_VALUE = 'a'
    MAX_VALUE = 'b'
    NEGATIVE_ONE = 'n'
    NO_CHANGE = 'x'

    @staticmethod
    def _aliases():
        return {
            '0': '0', 'zero': '0',
            'a': 'a', 'min': 'a',
            'b': 'b', 'max': 'b',
            'n': 'n', '-1': 'n', 'negative-one': 'n',
            'x': 'x', 'no-change': 'x', 'unchanged': 'x',
        }

    @staticmethod
    def _label():
        return 'EOF behaviour'


class RunMode(_ParsableEnum):
    DUMP = 'd'
    RUN = 'r'

    @staticmethod
    def _aliases():
        return {'d': 'd', 'dump': 'd', 'r': 'r', 'run': 'r'}

    @staticmethod
    def _label():
        return 'mode'


@dataclass(frozen=True)
class Configuration:
    value_min: int = 0
    value_max: int = 255
    cell_count: int = 30000
    eof_policy: EofPolicy = EofPolicy.ZERO
    value_policy: BoundaryPolicy = BoundaryPolicy.WRAP
    pointer_policy: BoundaryPolicy = BoundaryPolicy.ERROR

    def __post_init__(self) -> None:
        if not isinstance(self.value_policy, BoundaryPolicy):
            raise ConfigurationError(message=f"invalid value-end behaviour: {self.value_policy!r}")
        if not isinstance(self.pointer_policy, BoundaryPolicy):
            raise ConfigurationError(message=f"invalid cell-end behaviour: {self.pointer_policy!r}")
        if not isinstance(self.eof_policy, EofPolicy):
            raise ConfigurationError(message=f"invalid EOF behaviour: {self.eof_policy!r}")
        for name in ('value_min', 'value_max'):
            v = getattr(self, name)
            if not CELL_MIN <= v <= CELL_MAX:
                raise ConfigurationError(message=f"{name} {v} does not fit a 64-bit cell")
        if self.value_min > self.value_max:
            raise ConfigurationError(
                message=f"minimum cell value {self.value_min} is greater than maximum {self.value_max}")
        if self.cell_count < 1:
            raise ConfigurationError(message=f"cell count must be positive, got {self.cell_count}")

    @property
    def pointer_max(self) -> int:
        return self.cell_count - 1
