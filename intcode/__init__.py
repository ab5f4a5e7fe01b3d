"""
Intcode virtual machine with a brute-force input search driver.
"""

from .core import (
    Memory,
    Opcode,
    Instruction,
    IntcodeMachine,
    MachineState,
    decode,
    disassemble,
)
from .errors import (
    IntcodeError,
    OutOfBoundsError,
    UnknownOpcodeError,
    MachineFaultedError,
    StepLimitExceededError,
)
from .search import evaluate_direct, search, encode_answer
from .loader import parse_program, load_program

__version__ = "0.1.0"

__all__ = [
    # Machine
    "Memory",
    "Opcode",
    "Instruction",
    "IntcodeMachine",
    "MachineState",
    "decode",
    "disassemble",
    # Errors
    "IntcodeError",
    "OutOfBoundsError",
    "UnknownOpcodeError",
    "MachineFaultedError",
    "StepLimitExceededError",
    # Driver
    "evaluate_direct",
    "search",
    "encode_answer",
    "parse_program",
    "load_program",
]
