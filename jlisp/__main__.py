from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from jlisp.config import configure_logging
from jlisp.errors import JLispError
from jlisp.interpreter import run

logger = logging.getLogger("jlisp")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jlisp", description="Run jlisp programs.")
    commands = parser.add_subparsers(dest="command", required=True)
    run_cmd = commands.add_parser("run", help="run a program file and print its result")
    run_cmd.add_argument("path", type=Path, help="program file")
    return parser


def run_file(path: Path) -> int:
    if not path.is_file():
        print(f"jlisp: file not found: {path}", file=sys.stderr)
        return 1
    program = path.read_text(encoding="utf-8")
    if not program.strip():
        print(f"jlisp: program is empty: {path}", file=sys.stderr)
        return 1
    logger.debug("running %s", path)
    try:
        result = run(program)
    except JLispError as ex:
        print(f"jlisp: {ex}", file=sys.stderr)
        return 1
    print(result)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    return run_file(args.path)


if __name__ == "__main__":
    sys.exit(main())
