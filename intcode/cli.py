#!/usr/bin/env python3
"""
Command line front end for the Intcode machine.

Runs the "1202 program alarm" workflow on a program read from a file or
stdin: a direct run with a fixed noun and verb (part 1), then a search for
the inputs that produce a target value (part 2).
"""

import argparse
import os
import sys
from typing import List, Optional

import structlog

from .core.instruction import disassemble
from .core.interpreter import IntcodeMachine
from .core.memory import Memory
from .errors import IntcodeError
from .loader import load_program
from .logging_config import configure_logging
from .search import (
    DEFAULT_NOUN,
    DEFAULT_TARGET,
    DEFAULT_VERB,
    NOUN_ADDRESS,
    RESULT_ADDRESS,
    VERB_ADDRESS,
    encode_answer,
    search,
)

logger = structlog.get_logger(__name__)

DEFAULT_MAX_VALUE = 99
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="intcode",
        description="Run an Intcode program and search for the inputs that produce a target output.",
    )
    parser.add_argument("input", nargs="?", default=None, help="Path to the program file (default: stdin)")
    parser.add_argument("--noun", type=int, default=DEFAULT_NOUN, help=f"Value patched into address 1 for part 1 (default: {DEFAULT_NOUN})")
    parser.add_argument("--verb", type=int, default=DEFAULT_VERB, help=f"Value patched into address 2 for part 1 (default: {DEFAULT_VERB})")
    parser.add_argument("--target", type=int, default=DEFAULT_TARGET, help=f"Output value to search for in part 2 (default: {DEFAULT_TARGET})")
    parser.add_argument("--max-value", type=int, default=DEFAULT_MAX_VALUE, help=f"Inclusive upper bound for noun and verb in part 2 (default: {DEFAULT_MAX_VALUE})")
    parser.add_argument("--workers", type=int, default=int(os.environ.get("INTCODE_WORKERS", 1)), help="Worker processes for the part 2 search (default: 1)")
    parser.add_argument("--part", choices=["1", "2", "all"], default="all", help="Which part to run (default: all)")
    parser.add_argument("--dump", action="store_true", help="Print the final memory of the part 1 run")
    parser.add_argument("--disassemble", action="store_true", help="Print a listing of the program and exit")
    parser.add_argument("--trace", action="store_true", help="Log every executed instruction of the part 1 run (implies --log-level DEBUG)")
    parser.add_argument("--log-level", default=os.environ.get("INTCODE_LOG_LEVEL", "WARNING").upper(), choices=LOG_LEVELS, help="Logging level (default: WARNING)")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    args = parser.parse_args(argv)

    if args.max_value < 0:
        parser.error("--max-value must not be negative")
    if args.workers < 1:
        parser.error("--workers must be at least 1")
    return args


def run_part_one(program: List[int], noun: int, verb: int, trace: bool = False) -> IntcodeMachine:
    """Run the program once with the given noun and verb and return the halted machine."""
    memory = Memory(program)
    memory.write(NOUN_ADDRESS, noun)
    memory.write(VERB_ADDRESS, verb)
    machine = IntcodeMachine(memory, trace=trace)
    return machine.run_to_completion()


def print_listing(program: List[int]) -> None:
    for entry in disassemble(Memory(program)):
        if isinstance(entry, tuple):
            address, value = entry
            print(f"{address:>4}: DATA {value}")
        else:
            print(entry)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging("DEBUG" if args.trace else args.log_level, json_logs=args.json_logs, force=True)

    try:
        program = load_program(args.input)
    except OSError as e:
        logger.error("Failed to open input", path=args.input, error=str(e))
        print(f"Failed to open {args.input}", file=sys.stderr)
        return 1

    if not program:
        logger.error("Input contains no program", path=args.input or "stdin")
        return 1

    if args.disassemble:
        print_listing(program)
        return 0

    exit_code = 0

    if args.part in ("1", "all"):
        print("Part 1")
        try:
            machine = run_part_one(program, args.noun, args.verb, trace=args.trace)
        except IntcodeError as e:
            logger.error("Part 1 run faulted", noun=args.noun, verb=args.verb, error=str(e))
            return 1
        print(f"Answer (Part 1): {machine.peek(RESULT_ADDRESS)}")
        if args.dump:
            print(machine.dump())

    if args.part in ("2", "all"):
        print("Part 2")
        values = range(0, args.max_value + 1)
        found = search(program, args.target, values, values, workers=args.workers)
        if found is None:
            print("Answer (Part 2): not found")
            exit_code = 1
        else:
            noun, verb = found
            print(f"Answer (Part 2): {encode_answer(noun, verb)}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
