from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


def _locate(source: str, offset: int) -> Tuple[int, int]:
    """Return the 1-based (line, column) of ``offset`` within ``source``."""
    line = source.count('\n', 0, offset) + 1
    line_start = source.rfind('\n', 0, offset) + 1
    return line, offset - line_start + 1


def _build_context(lines: List[str], line_no_1: int, column: int, *, context: int = 1) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"       | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(what: str) -> Optional[str]:
    if what == 'value':
        return 'Pass -v w to wrap or -v i to saturate cell values instead of failing.'
    if what == 'cell index':
        return 'Pass -w w to wrap or -w i to saturate the cell pointer, or raise -c.'
    return None


@dataclass
class BriefError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ConfigurationError(BriefError):
    pass


@dataclass
class CompileError(BriefError):
    line: int
    column: int
    context: str


@dataclass
class UnmatchedOpenError(CompileError):
    pass


@dataclass
class UnmatchedCloseError(CompileError):
    pass


@dataclass
class ExecutionError(BriefError):
    index: int
    opcode: str


@dataclass
class BoundaryError(ExecutionError):
    candidate: int
    bound: int
    hint: Optional[str] = None


@dataclass
class ValueRangeError(BoundaryError):
    pass


@dataclass
class PointerRangeError(BoundaryError):
    pass


def make_compile_error(cls, *, message: str, source: str, offset: int) -> CompileError:
    line, column = _locate(source, offset)
    ctx = _build_context(source.split('\n'), line, column)
    return cls(
        message=f"{message} (line {line}, column {column})",
        line=line,
        column=column,
        context=ctx,
    )


def make_boundary_error(cls, *, what: str, overflow: bool, candidate: int, bound: int,
                        index: int, opcode: str) -> BoundaryError:
    direction = 'overflow' if overflow else 'underflow'
    limit = 'maximum' if overflow else 'minimum'
    msg = f"{what} {direction} at instruction {index} ('{opcode}'): {candidate} is past the {limit} of {bound}"
    return cls(message=msg, index=index, opcode=opcode, candidate=candidate, bound=bound,
               hint=_hint_for(what))
