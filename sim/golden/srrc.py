"""
Square-root-raised-cosine tap design and Q1.14 quantization.

The datapath's fixed coefficient table is this design with beta=0.5 and
4 samples per symbol, sampled at t = k/4 symbols for k = -11..11, to within
the quantization of the original table (at most 2 LSB per tap).
"""

from typing import Sequence, Tuple

import numpy as np

__all__ = ["design_coefficients", "quantize_taps", "srrc_taps"]


def srrc_taps(beta: float = 0.5, sps: int = 4, ntaps: int = 23) -> np.ndarray:
    """Unnormalized SRRC impulse response, peak 1 - beta + 4*beta/pi.

    Handles the two removable singularities, t = 0 and |t| = 1/(4*beta).
    """
    if not 0.0 <= beta <= 1.0:
        raise ValueError(f"beta must be within [0, 1], got {beta}")
    if sps <= 0 or ntaps <= 0:
        raise ValueError("sps and ntaps must be positive")

    t = (np.arange(ntaps) - (ntaps - 1) / 2.0) / sps
    h = np.empty(ntaps, dtype=float)
    for i, ti in enumerate(t):
        if np.isclose(ti, 0.0):
            h[i] = 1.0 - beta + 4.0 * beta / np.pi
        elif beta > 0 and np.isclose(abs(ti), 1.0 / (4.0 * beta)):
            a = np.pi / (4.0 * beta)
            h[i] = (beta / np.sqrt(2.0)) * (
                (1.0 + 2.0 / np.pi) * np.sin(a) + (1.0 - 2.0 / np.pi) * np.cos(a)
            )
        else:
            num = np.sin(np.pi * ti * (1.0 - beta)) + 4.0 * beta * ti * np.cos(
                np.pi * ti * (1.0 + beta)
            )
            den = np.pi * ti * (1.0 - (4.0 * beta * ti) ** 2)
            h[i] = num / den
    return h


def quantize_taps(taps: Sequence[float], frac_bits: int = 14, width: int = 16) -> Tuple[int, ...]:
    """Round to nearest at ``frac_bits``; refuse values outside the signed width."""
    q = np.round(np.asarray(taps, dtype=float) * (1 << frac_bits)).astype(np.int64)
    lo = -(1 << (width - 1))
    hi = (1 << (width - 1)) - 1
    bad = [int(v) for v in q if v < lo or v > hi]
    if bad:
        raise ValueError(f"taps {bad} do not fit {width}-bit Q1.{frac_bits}")
    return tuple(int(v) for v in q)


def design_coefficients(
    beta: float = 0.5, sps: int = 4, ntaps: int = 23, frac_bits: int = 14, width: int = 16
) -> Tuple[int, ...]:
    """The distinct half of a quantized SRRC design, center tap last."""
    if ntaps % 2 == 0:
        raise ValueError(f"symmetric design needs an odd tap count, got {ntaps}")
    q = quantize_taps(srrc_taps(beta, sps, ntaps), frac_bits, width)
    return q[: ntaps // 2 + 1]
