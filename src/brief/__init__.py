
from .api import RunResult, dump_string, run_file, run_string
from .boundary import apply_policy, wrap
from .compiler import compile_file, compile_source
from .config import BoundaryPolicy, Configuration, EofPolicy, RunMode
from .errors import (
    BriefError,
    CompileError,
    ConfigurationError,
    ExecutionError,
    PointerRangeError,
    UnmatchedCloseError,
    UnmatchedOpenError,
    ValueRangeError,
)
from .executor import Executor, execute
from .instructions import Instruction, Opcode, Program
from .state import Machine

__all__ = [
    'Opcode',
    'Instruction',
    'Program',
    'BoundaryPolicy',
    'EofPolicy',
    'RunMode',
    'Configuration',
    'Machine',
    'compile_source',
    'compile_file',
    'apply_policy',
    'wrap',
    'Executor',
    'execute',
    'RunResult',
    'run_string',
    'run_file',
    'dump_string',
    'BriefError',
    'ConfigurationError',
    'CompileError',
    'UnmatchedOpenError',
    'UnmatchedCloseError',
    'ExecutionError',
    'ValueRangeError',
    'PointerRangeError',
]
