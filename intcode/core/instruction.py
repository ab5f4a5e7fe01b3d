"""
Instruction decoding for Intcode programs.

An instruction is not stored anywhere: it is read by value out of memory at
the program counter each time it is needed. The opcode cell is read first and
validated before any operand cell is touched.
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

from ..errors import IntcodeError, UnknownOpcodeError
from .memory import Memory
from .opcodes import INSTRUCTION_WIDTH, OPERAND_COUNTS, Opcode, is_known_opcode


@dataclass(frozen=True)
class Instruction:
    """A decoded instruction: the opcode plus its address operands."""

    pc: int
    opcode: Opcode
    operands: Tuple[int, ...] = ()

    @property
    def width(self) -> int:
        return INSTRUCTION_WIDTH

    def __str__(self) -> str:
        if self.opcode == Opcode.HALT:
            return f"{self.pc:>4}: HALT"
        src_a, src_b, dest = self.operands
        return f"{self.pc:>4}: {self.opcode.name} [{src_a}] [{src_b}] -> [{dest}]"


def decode(memory: Memory, pc: int) -> Instruction:
    """
    Decode the instruction starting at ``pc``.

    Raises:
        OutOfBoundsError: if ``pc`` or one of the operand cells lies outside memory
        UnknownOpcodeError: if the cell at ``pc`` is not a known opcode
    """
    value = memory.read(pc)
    if not is_known_opcode(value):
        raise UnknownOpcodeError(value, pc)

    opcode = Opcode(value)
    operands = tuple(memory.read(pc + 1 + i) for i in range(OPERAND_COUNTS[opcode]))
    return Instruction(pc=pc, opcode=opcode, operands=operands)


def disassemble(memory: Memory) -> List[Union[Instruction, Tuple[int, int]]]:
    """
    Produce a static listing of the program in ``memory``.

    Walks the tape in steps of four from address 0 until the first HALT.
    Cells that cannot be decoded as an instruction are reported as
    ``(address, value)`` data tuples, one per remaining cell.
    """
    listing: List[Union[Instruction, Tuple[int, int]]] = []
    pc = 0
    while pc < len(memory):
        try:
            instruction = decode(memory, pc)
        except IntcodeError:
            listing.extend((addr, memory.read(addr)) for addr in range(pc, len(memory)))
            break

        listing.append(instruction)
        if instruction.opcode == Opcode.HALT:
            # Everything after the halt is data
            listing.extend(
                (addr, memory.read(addr)) for addr in range(pc + 1, len(memory))
            )
            break
        pc += instruction.width

    return listing
