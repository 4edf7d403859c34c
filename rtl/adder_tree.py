"""
Four-level registered adder tree reducing the partial products to one sum.

Level A folds the center product in with the last paired product:

    A: (p0,p1) (p2,p3) (p4,p5) (p6,p7) (p8,p9) (p10,center)
    B: (A0,A1) (A2,A3) (A4,A5)
    C: (B0,B1)  B2 passes through
    D: (C0,C1)

Every level is held at the full accumulator width; nothing is narrowed
before the output formatter.
"""

from typing import List, Sequence, Tuple

from .register import Register, RegisterBank

__all__ = ["AdderTree"]


def _pairwise(values: Sequence[int]) -> List[int]:
    """Add neighbours; an odd trailing value passes through unchanged."""
    out = [values[i] + values[i + 1] for i in range(0, len(values) - 1, 2)]
    if len(values) % 2:
        out.append(values[-1])
    return out


class AdderTree:
    def __init__(self, products: int = 12, acc_width: int = 35):
        self.levels: List[RegisterBank] = []
        n = products
        for name in ("adder_a", "adder_b", "adder_c", "adder_d"):
            n = (n + 1) // 2
            self.levels.append(RegisterBank(n, acc_width, name))
        if n != 1:
            raise ValueError(f"{products} products do not reduce to one sum in four levels")

    @property
    def result(self) -> int:
        return self.levels[-1][0].q

    @property
    def registers(self) -> List[Register]:
        return [r for level in self.levels for r in level]

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        return tuple(level.values for level in self.levels)

    def drive(self, partials: Sequence[int], center: int) -> None:
        operands = list(partials) + [center]
        self.levels[0].load(_pairwise(operands))
        for prev, level in zip(self.levels, self.levels[1:]):
            level.load(_pairwise(prev.values))
