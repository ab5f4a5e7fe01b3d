"""
Reading Intcode programs from text.
"""

import re
import sys
from typing import List, Optional

import structlog

logger = structlog.get_logger(__name__)

_TOKEN_SEPARATOR = re.compile(r"[,\s]+")
_INTEGER = re.compile(r"^[+-]?\d+$")


def parse_program(text: str) -> List[int]:
    """
    Parse comma- and/or whitespace-separated integers.

    Tokens that are not integers are skipped.
    """
    program = []
    for token in _TOKEN_SEPARATOR.split(text.strip()):
        if not token:
            continue
        if _INTEGER.match(token):
            program.append(int(token))
        else:
            logger.debug("Ignoring non-numeric token", token=token)
    return program


def load_program(path: Optional[str] = None) -> List[int]:
    """
    Load a program from ``path``, or from stdin when path is None or "-".

    Raises:
        OSError: if the file cannot be opened
    """
    if path is None or path == "-":
        logger.debug("Reading program from stdin")
        text = sys.stdin.read()
    else:
        logger.debug("Reading program from file", path=path)
        with open(path, "r") as f:
            text = f.read()

    program = parse_program(text)
    logger.info("Loaded program", cells=len(program), source=path or "stdin")
    return program
