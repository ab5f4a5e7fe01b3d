"""
Intcode machine core: memory tape, opcode table, decoder and interpreter.
"""

from .memory import Memory
from .opcodes import Opcode, INSTRUCTION_WIDTH, get_opcode_name
from .instruction import Instruction, decode, disassemble
from .interpreter import IntcodeMachine, MachineState


__all__ = [
    "Memory",
    "Opcode",
    "INSTRUCTION_WIDTH",
    "get_opcode_name",
    "Instruction",
    "decode",
    "disassemble",
    "IntcodeMachine",
    "MachineState",
]
