"""
Linear, position-addressed memory tape for the Intcode machine.

Program and data share the same cells, and instructions may overwrite
themselves. The tape is sized once at construction and never grows.
"""

from typing import Iterable, List

from ..errors import OutOfBoundsError


class Memory:
    """Fixed-size sequence of signed integer cells, indexed from 0."""

    def __init__(self, cells: Iterable[int] = ()):
        self._cells: List[int] = [int(c) for c in cells]

    def _check(self, address: int) -> None:
        if not 0 <= address < len(self._cells):
            raise OutOfBoundsError(address, len(self._cells))

    def read(self, address: int) -> int:
        """Return the value at ``address``, raising OutOfBoundsError if invalid."""
        self._check(address)
        return self._cells[address]

    def write(self, address: int, value: int) -> None:
        """Overwrite the cell at ``address``, raising OutOfBoundsError if invalid."""
        self._check(address)
        self._cells[address] = value

    def length(self) -> int:
        return len(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def snapshot(self) -> List[int]:
        """Return a copy of all cells."""
        return list(self._cells)

    def clone(self) -> "Memory":
        return Memory(self._cells)

    def dump(self) -> str:
        """Render the tape in program source form, e.g. ``2,0,0,0,99``."""
        return ",".join(str(c) for c in self._cells)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Memory):
            return self._cells == other._cells
        if isinstance(other, (list, tuple)):
            return self._cells == list(other)
        return NotImplemented

    def __str__(self) -> str:
        return self.dump()

    def __repr__(self) -> str:
        return f"Memory({self._cells!r})"
