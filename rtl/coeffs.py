"""Coefficient path and helpers for even-symmetric tap sequences."""

from typing import List, Sequence, Tuple

from .register import Register, RegisterBank

__all__ = ["CoefficientPath", "expand_symmetric", "fold_symmetric"]


def expand_symmetric(distinct: Sequence[int]) -> Tuple[int, ...]:
    """Mirror ``n`` distinct values into the ``2n - 1`` tap palindrome.

    The last distinct value is the unpaired center tap.
    """
    half = tuple(distinct[:-1])
    return half + (distinct[-1],) + tuple(reversed(half))


def fold_symmetric(taps: Sequence[int]) -> Tuple[int, ...]:
    """Inverse of :func:`expand_symmetric`; rejects non-palindromic taps."""
    n = len(taps)
    if n % 2 == 0:
        raise ValueError(f"symmetric FIR needs an odd tap count, got {n}")
    for k in range(n // 2):
        if taps[k] != taps[n - 1 - k]:
            raise ValueError(
                f"taps are not even-symmetric: tap {k}={taps[k]} vs "
                f"tap {n - 1 - k}={taps[n - 1 - k]}"
            )
    return tuple(taps[: n // 2 + 1])


class CoefficientPath:
    """Registers the distinct coefficients once.

    The delay only aligns the coefficients with the registered symmetric
    sums so both multiplier operands belong to the same tick.
    """

    def __init__(self, count: int = 12, width: int = 16):
        self.bank = RegisterBank(count, width, "coeff")

    @property
    def values(self) -> Tuple[int, ...]:
        return self.bank.values

    @property
    def registers(self) -> List[Register]:
        return list(self.bank)

    def drive(self, coefficients: Sequence[int]) -> None:
        self.bank.load(coefficients)
