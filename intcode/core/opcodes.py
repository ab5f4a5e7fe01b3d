"""
Intcode opcode definitions.
"""

from enum import IntEnum


class Opcode(IntEnum):
    """Intcode opcodes"""

    ADD = 1
    MUL = 2
    HALT = 99


# Opcode cell plus two source addresses and one destination address
INSTRUCTION_WIDTH = 4

OPCODE_NAMES = {op.value: op.name for op in Opcode}

# Number of address operands following each opcode
OPERAND_COUNTS = {
    Opcode.ADD: 3,
    Opcode.MUL: 3,
    Opcode.HALT: 0,
}


def get_opcode_name(value: int) -> str:
    return OPCODE_NAMES.get(value, f"UNKNOWN_{value}")


def is_known_opcode(value: int) -> bool:
    return value in OPCODE_NAMES
