"""Pre-adder stage: sums the history samples that share a coefficient."""

from typing import List, Sequence, Tuple

from .register import Register, RegisterBank

__all__ = ["SymmetricSummer"]


class SymmetricSummer:
    """sum[k] = x[k] + x[taps-1-k] for every tap pair, plus the center sample.

    Operands are signed ints, so the add is already sign-extended; the sum
    register is one bit wider than a sample, which makes overflow impossible.
    The center sample gets its own register to stay in step with the sums.
    """

    def __init__(self, taps: int = 23, sample_width: int = 16, sum_width: int = 17):
        if taps % 2 == 0:
            raise ValueError(f"symmetric FIR needs an odd tap count, got {taps}")
        self.taps = taps
        self.sums = RegisterBank(taps // 2, sum_width, "sum")
        self.center = Register(sample_width, "center_sample")

    @property
    def values(self) -> Tuple[int, ...]:
        return self.sums.values

    @property
    def registers(self) -> List[Register]:
        return list(self.sums) + [self.center]

    def drive(self, window: Sequence[int]) -> None:
        last = self.taps - 1
        self.sums.load(window[k] + window[last - k] for k in range(len(self.sums)))
        self.center.d = window[last // 2]
