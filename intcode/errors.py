"""
Fault types raised by the Intcode machine.

A fault ends the single run it happens in. Callers that brute-force inputs
catch ``IntcodeError`` per trial; everything else lets it propagate.
"""

from typing import Optional


class IntcodeError(Exception):
    """Base class for every machine fault."""


class OutOfBoundsError(IntcodeError, IndexError):
    """A read or write addressed a cell outside the memory tape."""

    def __init__(self, address: int, size: int, pc: Optional[int] = None):
        self.address = address
        self.size = size
        self.pc = pc
        location = f" (pc={pc})" if pc is not None else ""
        super().__init__(
            f"Address {address} is outside memory of size {size}{location}"
        )


class UnknownOpcodeError(IntcodeError, ValueError):
    """The cell at the program counter is not a known opcode."""

    def __init__(self, opcode: int, pc: int):
        self.opcode = opcode
        self.pc = pc
        super().__init__(f"Unknown opcode {opcode} at pc={pc}")


class MachineFaultedError(IntcodeError):
    """step() was called on a machine that already faulted."""


class StepLimitExceededError(IntcodeError):
    def __init__(self, max_steps: int, pc: int):
        self.max_steps = max_steps
        self.pc = pc
        super().__init__(f"Program did not halt within {max_steps} steps (pc={pc})")
