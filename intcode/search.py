"""
Direct evaluation and brute-force input search over the Intcode machine.

The machine is treated as a black box: patch the noun and verb into
addresses 1 and 2 of a fresh copy of the program, run it, read address 0.
"""

import multiprocessing
from functools import partial
from typing import Optional, Sequence, Tuple

import structlog

from .core.interpreter import IntcodeMachine
from .core.memory import Memory
from .errors import IntcodeError

logger = structlog.get_logger(__name__)

# Configuration constants
DEFAULT_NOUN = 12
DEFAULT_VERB = 2
DEFAULT_TARGET = 19690720
DEFAULT_RANGE = range(0, 100)

NOUN_ADDRESS = 1
VERB_ADDRESS = 2
RESULT_ADDRESS = 0


def evaluate_direct(program: Sequence[int], noun: int, verb: int) -> int:
    """
    Run ``program`` with the given noun and verb and return the value at address 0.

    The program sequence itself is never modified; every call works on its own
    copy, so repeated calls with the same arguments return the same value.

    Raises:
        IntcodeError: if the run faults (including a program too short to patch)
    """
    memory = Memory(program)
    memory.write(NOUN_ADDRESS, noun)
    memory.write(VERB_ADDRESS, verb)

    machine = IntcodeMachine(memory)
    machine.run_to_completion()
    return machine.peek(RESULT_ADDRESS)


def _scan_verbs(
    program: Sequence[int], target: int, verb_range: Sequence[int], noun: int
) -> Optional[int]:
    """Return the first verb in ``verb_range`` that hits ``target`` for ``noun``."""
    for verb in verb_range:
        try:
            result = evaluate_direct(program, noun, verb)
        except IntcodeError as e:
            # Arbitrary noun/verb pairs are not expected to be valid programs
            logger.debug("Skipping faulting candidate", noun=noun, verb=verb, error=str(e))
            continue
        if result == target:
            return verb
    return None


def search(
    program: Sequence[int],
    target: int = DEFAULT_TARGET,
    noun_range: Sequence[int] = DEFAULT_RANGE,
    verb_range: Sequence[int] = DEFAULT_RANGE,
    workers: int = 1,
) -> Optional[Tuple[int, int]]:
    """
    Find the first (noun, verb) pair whose run leaves ``target`` at address 0.

    Pairs are scanned noun-major, verb-minor and the first hit in that order is
    returned. Candidates that fault are skipped. With ``workers > 1`` the noun
    rows are evaluated in a process pool; results are consumed in submission
    order so the reported pair is the same as for the sequential scan.

    Returns:
        The matching (noun, verb) tuple, or None if no pair in range matches.
    """
    program = list(program)
    noun_range = list(noun_range)
    verb_range = list(verb_range)
    logger.info(
        "Starting input search",
        target=target,
        nouns=len(noun_range),
        verbs=len(verb_range),
        workers=workers,
    )

    scan = partial(_scan_verbs, program, target, verb_range)

    if workers > 1 and len(noun_range) > 1:
        with multiprocessing.Pool(processes=workers) as pool:
            # imap yields in submission order, keeping the noun-major contract
            for noun, verb in zip(noun_range, pool.imap(scan, noun_range)):
                if verb is not None:
                    logger.info("Found matching inputs", noun=noun, verb=verb)
                    return noun, verb
    else:
        for noun in noun_range:
            verb = scan(noun)
            if verb is not None:
                logger.info("Found matching inputs", noun=noun, verb=verb)
                return noun, verb

    logger.info("No inputs produced the target", target=target)
    return None


def encode_answer(noun: int, verb: int) -> int:
    """Combine a noun and verb into the puzzle answer ``100 * noun + verb``."""
    return noun * 100 + verb
