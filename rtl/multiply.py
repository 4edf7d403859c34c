"""Multiply stage: one exact product per coefficient."""

from typing import List, Sequence, Tuple

from .register import Register, RegisterBank

__all__ = ["MultiplyStage"]


class MultiplyStage:
    """partial[k] = coeff[k] * sum[k]; center = coeff[center] * center sample.

    Products are kept at full precision. Low bits are only discarded by the
    output formatter.
    """

    def __init__(self, pairs: int = 11, product_width: int = 32):
        self.partials = RegisterBank(pairs, product_width, "product")
        self.center = Register(product_width, "center_product")

    @property
    def values(self) -> Tuple[int, ...]:
        return self.partials.values

    @property
    def registers(self) -> List[Register]:
        return list(self.partials) + [self.center]

    def drive(self, coefficients: Sequence[int], sums: Sequence[int], center_sample: int) -> None:
        pairs = len(self.partials)
        self.partials.load(coefficients[k] * sums[k] for k in range(pairs))
        self.center.d = coefficients[pairs] * center_sample
