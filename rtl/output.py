"""Output formatter: fixed bit-window truncation of the accumulator."""

from typing import List

from .fixed import bit_window
from .register import Register

__all__ = ["OutputFormatter"]


class OutputFormatter:
    """Registers accumulator bits [shift + width - 1 : shift].

    The low ``shift`` bits are dropped without rounding and the bits above
    the window are dropped without a range check. For the SRRC coefficient
    set the dropped top bits are copies of the sign bit.
    """

    def __init__(self, shift: int = 17, width: int = 16):
        self.shift = shift
        self.reg = Register(width, "out")

    @property
    def value(self) -> int:
        return self.reg.q

    @property
    def registers(self) -> List[Register]:
        return [self.reg]

    def drive(self, acc: int) -> None:
        self.reg.d = bit_window(acc, self.shift, self.reg.width)
