"""
Clocked storage primitives.

A :class:`Register` is the only place time advances in the model. Each tick is
two-phase: stages first assign ``d`` from the ``q`` values of the previous
tick, then every register commits at once. Because no stage reads ``d``, the
order in which stages are driven inside one tick does not matter.
"""

from typing import Iterable, Iterator, List, Tuple

from .fixed import wrap

__all__ = ["Register", "RegisterBank"]


class Register:
    """N-bit register with asynchronous clear."""

    __slots__ = ("name", "width", "d", "q")

    def __init__(self, width: int, name: str = ""):
        if width <= 0:
            raise ValueError(f"register width must be positive, got {width}")
        self.name = name
        self.width = width
        self.d = 0
        self.q = 0

    def tick(self) -> None:
        """Rising edge: capture the input, dropping bits above the width."""
        self.q = wrap(self.d, self.width)

    def clear(self) -> None:
        """Asynchronous clear. Takes effect immediately, ignoring the clock."""
        self.q = 0
        self.d = 0

    def __repr__(self) -> str:
        return f"Register({self.name!r}, width={self.width}, q={self.q})"


class RegisterBank:
    """Fixed-size vector of identical registers, indexed 0..count-1."""

    def __init__(self, count: int, width: int, name: str = ""):
        self.name = name
        self.width = width
        self._regs = [Register(width, f"{name}[{i}]") for i in range(count)]

    def __len__(self) -> int:
        return len(self._regs)

    def __getitem__(self, idx: int) -> Register:
        return self._regs[idx]

    def __iter__(self) -> Iterator[Register]:
        return iter(self._regs)

    @property
    def values(self) -> Tuple[int, ...]:
        """Registered outputs (``q``) of every register."""
        return tuple(r.q for r in self._regs)

    @property
    def inputs(self) -> Tuple[int, ...]:
        """Pending inputs (``d``), before any wraparound."""
        return tuple(r.d for r in self._regs)

    def load(self, values: Iterable[int]) -> None:
        vals: List[int] = list(values)
        if len(vals) != len(self._regs):
            raise ValueError(
                f"{self.name}: expected {len(self._regs)} values, got {len(vals)}"
            )
        for r, v in zip(self._regs, vals):
            r.d = v

    def tick(self) -> None:
        for r in self._regs:
            r.tick()

    def clear(self) -> None:
        for r in self._regs:
            r.clear()
