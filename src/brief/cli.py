from __future__ import annotations

import argparse
import sys
import time
from typing import BinaryIO, List, Optional

from .compiler import compile_source
from .config import BoundaryPolicy, Configuration, EofPolicy, RunMode
from .errors import BriefError
from .executor import Executor

PROG = "brief"

EPILOG = """\
EOF behaviours (-e):
  0  store a zero in the cell (default)
  a  store the minimum cell value in the cell
  b  store the maximum cell value in the cell
  n  store a negative one in the cell
  x  do not change the cell's contents

Runtime modes (-m):
  d  dump parsed code
  r  run normally (default)

Overflow/underflow behaviours (-v, -w):
  e  throw an error and quit upon over/underflow (pointer default)
  i  saturate at the limit when attempting to over/underflow
  w  wrap-around to other end upon over/underflow (value default)

Cells are signed 64-bit integers, so -a and -b must fit that range.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="brief: a flexible brainfuck interpreter",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("source", nargs="?", help="source file name")
    parser.add_argument("-h", "--help", action="store_true", help="this help output")
    parser.add_argument("-f", "--file", dest="file", help="source file name (alternative to the positional)")
    parser.add_argument("-a", "--min", dest="value_min", type=int, default=0, help="minimum cell value (default: 0)")
    parser.add_argument("-b", "--max", dest="value_max", type=int, default=255, help="maximum cell value (default: 255)")
    parser.add_argument("-c", "--cells", dest="cell_count", type=int, default=30000,
                        help="number of cells to allocate (default: 30000)")
    parser.add_argument("-e", "--eof", default="0", help="value to store upon EOF (default: 0)")
    parser.add_argument("-m", "--mode", default="r", help="runtime mode (default: r)")
    parser.add_argument("-v", "--value-policy", default="w", help="value overflow/underflow behaviour (default: w)")
    parser.add_argument("-w", "--pointer-policy", default="e",
                        help="cell pointer overflow/underflow behaviour (default: e)")
    parser.add_argument("-t", "--timing", action="store_true", help="report compile/run times on stderr")
    return parser


def die(message: str) -> int:
    print(f"{PROG}: error: {message}", file=sys.stderr)
    return 1


def config_from_args(args: argparse.Namespace) -> Configuration:
    return Configuration(
        value_min=args.value_min,
        value_max=args.value_max,
        cell_count=args.cell_count,
        eof_policy=EofPolicy.parse(args.eof),
        value_policy=BoundaryPolicy.parse(args.value_policy),
        pointer_policy=BoundaryPolicy.parse(args.pointer_policy),
    )


def main(argv: Optional[List[str]] = None, *, stdin: Optional[BinaryIO] = None,
         stdout: Optional[BinaryIO] = None) -> int:
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        parser.print_help(sys.stderr)
        return 1
    args = parser.parse_args(argv)
    if args.help:
        parser.print_help(sys.stderr)
        return 1

    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout.buffer

    path = args.file or args.source
    if not path:
        return die("no source file specified; use -f")

    try:
        mode = RunMode.parse(args.mode)
        config = config_from_args(args)

        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                code = f.read()
        except OSError as e:
            return die(f"{path}: {e.strerror or e}")

        start = time.time()
        program = compile_source(code)
        end = time.time()
        if args.timing:
            print(f"Compilation took {(end - start) * 1000:.2f} ms ({len(program)} instructions)", file=sys.stderr)

        if mode is RunMode.DUMP:
            stdout.write(program.render().encode("ascii"))
            stdout.flush()
            return 0

        executor = Executor(program, config, stdin=stdin, stdout=stdout)
        start = time.time()
        machine = executor.run()
        end = time.time()
        if args.timing:
            print(f"Execution took {(end - start) * 1000:.2f} ms ({machine.steps} steps)", file=sys.stderr)
            print(machine.dump(), file=sys.stderr)
    except BriefError as e:
        return die(str(e))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
