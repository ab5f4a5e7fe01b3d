"""
Fetch-decode-execute loop for Intcode programs.

The machine owns one Memory and one program counter. Each call to ``step``
performs at most one instruction; ``run_to_completion`` loops until the
program halts or faults.
"""

from enum import Enum
from typing import Iterable, Optional, Union

import structlog

from ..errors import IntcodeError, MachineFaultedError, StepLimitExceededError
from .instruction import Instruction, decode
from .memory import Memory
from .opcodes import Opcode

logger = structlog.get_logger(__name__)


class MachineState(Enum):
    RUNNING = "running"
    HALTED = "halted"
    FAULTED = "faulted"


class IntcodeMachine:
    """Executes one Intcode program to completion or failure."""

    def __init__(self, memory: Union[Memory, Iterable[int]], trace: bool = False):
        """
        Args:
            memory: the program tape; a plain iterable is copied into a new Memory,
                a Memory instance is owned (and mutated) by this machine
            trace: emit a debug log event for every executed instruction
        """
        self._memory = memory if isinstance(memory, Memory) else Memory(memory)
        self.pc = 0
        self.state = MachineState.RUNNING
        self.steps = 0
        self.fault: Optional[IntcodeError] = None
        self.trace = trace

    @property
    def memory(self) -> Memory:
        return self._memory

    def is_finished(self) -> bool:
        """True when the pc addresses a HALT opcode or has run off the end of memory."""
        if self.pc >= len(self._memory):
            return True
        return self._memory.read(self.pc) == Opcode.HALT

    def step(self) -> bool:
        """
        Execute the instruction at the program counter.

        Returns:
            True if there is more work to do after this step, False once the
            program has halted (calling again is a no-op that returns False).

        Raises:
            UnknownOpcodeError: the pc addresses an unknown opcode
            OutOfBoundsError: an operand or destination address is outside memory
            MachineFaultedError: the machine already faulted on an earlier step
        """
        if self.state == MachineState.FAULTED:
            raise MachineFaultedError(
                f"Machine faulted at pc={self.pc}; create a new machine to run again"
            ) from self.fault

        if self.is_finished():
            if self.state != MachineState.HALTED:
                self.state = MachineState.HALTED
                logger.debug("Program halted", pc=self.pc, steps=self.steps)
            return False

        try:
            instruction = decode(self._memory, self.pc)
            self._execute(instruction)
        except IntcodeError as e:
            self.state = MachineState.FAULTED
            self.fault = e
            logger.debug(
                "Machine faulted",
                pc=self.pc,
                steps=self.steps,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        self.pc += instruction.width
        self.steps += 1
        return not self.is_finished()

    def _execute(self, instruction: Instruction) -> None:
        # Addresses are captured at decode time; both reads happen before the
        # single write, so a destination aliasing a source sees the old value.
        src_a, src_b, dest = instruction.operands
        a = self._memory.read(src_a)
        b = self._memory.read(src_b)

        result = a + b if instruction.opcode == Opcode.ADD else a * b
        self._memory.write(dest, result)

        if self.trace:
            logger.debug(
                "Executed instruction",
                pc=instruction.pc,
                opcode=instruction.opcode.name,
                a=a,
                b=b,
                dest=dest,
                result=result,
            )

    def run_to_completion(self, max_steps: Optional[int] = None) -> "IntcodeMachine":
        """
        Step until the program halts. Faults propagate to the caller.

        Args:
            max_steps: optional budget; StepLimitExceededError is raised when the
                program is still running after this many instructions
        """
        while not self.is_finished():
            if max_steps is not None and self.steps >= max_steps:
                raise StepLimitExceededError(max_steps, self.pc)
            self.step()
        # Settle the state for programs that were finished before any step
        self.step()
        return self

    def peek(self, address: int) -> int:
        """Read a memory cell without affecting execution."""
        return self._memory.read(address)

    def dump(self) -> str:
        return self._memory.dump()

    def __repr__(self) -> str:
        return (
            f"IntcodeMachine(pc={self.pc}, state={self.state.value}, "
            f"steps={self.steps}, size={len(self._memory)})"
        )
