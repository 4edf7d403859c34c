"""
Two's-complement and Q-format helpers shared by the datapath and its models.

Values travel through the model as plain signed Python ints that are already
inside their declared width. Python ints never overflow, so every place the
hardware would drop bits must call :func:`wrap` (or :func:`bit_window`)
explicitly. Saturation and rounding are never applied inside the datapath.

Q-format convention: Qm.n has 1 sign bit, m integer bits and n fractional
bits, total width 1 + m + n.

This module is import-side-effect free.
"""

from dataclasses import dataclass

__all__ = [
    "Q1_14",
    "Q8_7",
    "Q9_7",
    "Q11_4",
    "QFormat",
    "bit_window",
    "fits",
    "wrap",
]


def wrap(value: int, width: int) -> int:
    """Wrap an integer to a signed ``width``-bit value using two's complement."""
    mask = (1 << width) - 1
    value &= mask
    if value & (1 << (width - 1)):
        value -= 1 << width
    return value


def fits(value: int, width: int) -> bool:
    """True when ``value`` is representable as a signed ``width``-bit word."""
    limit = 1 << (width - 1)
    return -limit <= value < limit


def bit_window(value: int, lo: int, width: int) -> int:
    """Extract bits [lo + width - 1 : lo] of ``value`` as a signed word.

    The arithmetic shift truncates toward negative infinity, which is what
    dropping low bits of a two's-complement word does. Bits above the window
    are discarded, so a value outside the window's range aliases.
    """
    return wrap(value >> lo, width)


@dataclass(frozen=True)
class QFormat:
    """Signed fixed-point format with ``int_bits`` integer and ``frac_bits`` fractional bits."""

    int_bits: int
    frac_bits: int

    @property
    def width(self) -> int:
        return 1 + self.int_bits + self.frac_bits

    @property
    def scale(self) -> int:
        return 1 << self.frac_bits

    @property
    def lsb(self) -> float:
        return 1.0 / self.scale

    @property
    def min_raw(self) -> int:
        return -(1 << (self.width - 1))

    @property
    def max_raw(self) -> int:
        return (1 << (self.width - 1)) - 1

    @property
    def min_real(self) -> float:
        return self.min_raw / self.scale

    @property
    def max_real(self) -> float:
        return self.max_raw / self.scale

    def to_raw(self, x: float) -> int:
        """Quantize a real value, round half away from zero, then wrap.

        Only used to build stimulus; the datapath itself never rounds.
        """
        scaled = x * self.scale
        raw = int(scaled + 0.5) if scaled >= 0 else -int(-scaled + 0.5)
        return wrap(raw, self.width)

    def to_real(self, raw: int) -> float:
        return wrap(raw, self.width) / self.scale

    def __str__(self) -> str:
        return f"Q{self.int_bits}.{self.frac_bits}"


Q8_7 = QFormat(8, 7)    # input sample, 16 bits
Q1_14 = QFormat(1, 14)  # coefficient, 16 bits
Q9_7 = QFormat(9, 7)    # symmetric sum, 17 bits
Q11_4 = QFormat(11, 4)  # output sample, 16 bits
