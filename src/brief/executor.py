from __future__ import annotations

from typing import BinaryIO, Optional

from .boundary import apply_policy
from .config import Configuration, EofPolicy
from .errors import ConfigurationError, PointerRangeError, ValueRangeError, make_boundary_error
from .instructions import Instruction, Opcode, Program
from .state import Machine


class Executor:
    """
    Runs a compiled Program against a fixed-size tape.

    Cell arithmetic is done on the full integer value; the configured
    boundary policies decide what happens when a value or the pointer
    leaves its range. Input is pulled one byte at a time from ``stdin``
    (``read(1)`` returning b'' signals EOF) and output bytes are written
    to ``stdout``, which is flushed after every write instruction.
    """

    def __init__(self, program: Program, config: Optional[Configuration] = None,
                 stdin: Optional[BinaryIO] = None, stdout: Optional[BinaryIO] = None):
        self.program = program
        self.config = config if config is not None else Configuration()
        self.stdin = stdin
        self.stdout = stdout
        self.machine = Machine.blank(self.config.cell_count)

    # ===== Main loop =====

    def run(self) -> Machine:
        m = self.machine
        m.reset()
        program = self.program
        end = len(program)

        while m.cursor < end:
            ins = program[m.cursor]
            op = ins.opcode
            m.steps += 1

            if op is Opcode.INC_VALUE:
                self._set_value(m.current + ins.count, ins, overflow=True)
            elif op is Opcode.DEC_VALUE:
                self._set_value(m.current - ins.count, ins, overflow=False)
            elif op is Opcode.INC_POINTER:
                self._set_pointer(m.pointer + ins.count, ins, overflow=True)
            elif op is Opcode.DEC_POINTER:
                self._set_pointer(m.pointer - ins.count, ins, overflow=False)
            elif op is Opcode.READ:
                self._read(ins.count)
            elif op is Opcode.WRITE:
                self._write(ins.count)
            elif op is Opcode.LOOP_OPEN:
                if m.current == 0:
                    m.cursor = ins.target
            elif op is Opcode.LOOP_CLOSE:
                if m.current != 0:
                    m.cursor = ins.target
            else:
                raise ConfigurationError(message=f"invalid instruction: {op!r}")
            m.cursor += 1

        return m

    # ===== Boundary handling =====

    def _set_value(self, candidate: int, ins: Instruction, *, overflow: bool) -> None:
        cfg = self.config
        value = apply_policy(candidate, cfg.value_min, cfg.value_max, cfg.value_policy)
        if value is None:
            raise make_boundary_error(
                ValueRangeError, what='value', overflow=overflow, candidate=candidate,
                bound=cfg.value_max if overflow else cfg.value_min,
                index=self.machine.cursor, opcode=ins.opcode.symbol)
        self.machine.current = value

    def _set_pointer(self, candidate: int, ins: Instruction, *, overflow: bool) -> None:
        cfg = self.config
        pointer = apply_policy(candidate, 0, cfg.pointer_max, cfg.pointer_policy)
        if pointer is None:
            raise make_boundary_error(
                PointerRangeError, what='cell index', overflow=overflow, candidate=candidate,
                bound=cfg.pointer_max if overflow else 0,
                index=self.machine.cursor, opcode=ins.opcode.symbol)
        self.machine.pointer = pointer

    # ===== I/O =====

    def _eof_value(self) -> Optional[int]:
        policy = self.config.eof_policy
        if policy is EofPolicy.ZERO:
            return 0
        if policy is EofPolicy.MIN_VALUE:
            return self.config.value_min
        if policy is EofPolicy.MAX_VALUE:
            return self.config.value_max
        if policy is EofPolicy.NEGATIVE_ONE:
            # stored as-is even when -1 lies outside the value range
            return -1
        if policy is EofPolicy.NO_CHANGE:
            return None
        raise ConfigurationError(message=f"invalid EOF behaviour: {policy!r}")

    def _read(self, count: int) -> None:
        m = self.machine
        for _ in range(count):
            data = self.stdin.read(1) if self.stdin is not None else b''
            if data:
                m.current = data[0]
                continue
            value = self._eof_value()
            if value is not None:
                m.current = value

    def _write(self, count: int) -> None:
        if self.stdout is None:
            return
        byte = bytes((self.machine.current & 0xFF,))
        self.stdout.write(byte * count)
        self.stdout.flush()


def execute(program: Program, config: Optional[Configuration] = None,
            stdin: Optional[BinaryIO] = None, stdout: Optional[BinaryIO] = None) -> Machine:
    """Run ``program`` once and return the final machine state."""
    return Executor(program, config, stdin=stdin, stdout=stdout).run()
