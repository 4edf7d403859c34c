"""
Golden models for the 23-tap symmetric SRRC FIR.

Public API:
- fir_direct(samples, taps=None, cfg=None, delay=None) -> list[int]
- impulse_response(cfg=None, length=48, amplitude=128) -> list[int]
- fir_ideal(samples, taps) -> numpy.ndarray

Behavior:
- fir_direct is an independent direct-form computation: all 23 mirrored taps
  are multiplied and accumulated in Python ints (arbitrary precision), with
  no pre-adder and no intermediate widths. Only the output keeps the
  datapath's format: accumulator bits [32:17], truncated, wrapped to 16 bits.
- Inputs are wrapped to 16-bit two's complement just like the input port.

Latency:
- fir_direct delays its output by the arithmetic pipeline depth (7 ticks)
  so its stream lines up tick-for-tick with the cycle model. The remaining
  11 ticks of the 18-tick impulse latency come from the tap position itself.

This module is import-side-effect free.
"""

from typing import Iterable, List, Optional, Sequence

import numpy as np

from common.config import FilterConfig

__all__ = ["fir_direct", "fir_ideal", "impulse_response"]


def _wrap(v: int, width: int) -> int:
    mask = (1 << width) - 1
    v &= mask
    if v & (1 << (width - 1)):
        v -= 1 << width
    return v


def fir_direct(
    samples: Iterable[int],
    taps: Optional[Sequence[int]] = None,
    cfg: Optional[FilterConfig] = None,
    delay: Optional[int] = None,
) -> List[int]:
    """Direct-form 23-term multiply-accumulate over Q8.7 samples.

    Args:
      samples: iterable of Q8.7 integers.
      taps: full tap sequence in Q1.14; defaults to cfg.mirrored().
      cfg: filter configuration (widths, output window, default taps).
      delay: output delay in ticks; defaults to cfg.pipeline_depth.

    Returns:
      One Q11.4 integer per input sample; the first ``delay`` are zero.
    """
    cfg = cfg or FilterConfig()
    taps = tuple(cfg.mirrored() if taps is None else taps)
    delay = cfg.pipeline_depth if delay is None else delay

    window: List[int] = [0] * len(taps)
    outs: List[int] = []
    for x in samples:
        window.insert(0, _wrap(int(x), cfg.sample_width))
        window.pop()
        acc = 0
        for s, c in zip(window, taps):
            acc += s * c  # Q.21 accumulate, exact
        outs.append(_wrap(acc >> cfg.out_shift, cfg.out_width))

    if delay <= 0:
        return outs
    if delay >= len(outs):
        return [0] * len(outs)
    return [0] * delay + outs[:-delay]


def impulse_response(
    cfg: Optional[FilterConfig] = None, length: int = 48, amplitude: int = 128
) -> List[int]:
    """Response to one sample of ``amplitude`` (128 is 1.0 in Q8.7).

    No pipeline delay is included: the peak sits at the center tap index.
    """
    if length <= 0:
        return []
    impulse = [amplitude] + [0] * (length - 1)
    return fir_direct(impulse, cfg=cfg, delay=0)


def fir_ideal(samples: Sequence[float], taps: Sequence[float]) -> np.ndarray:
    """Floating-point FIR, same length as the input, no delay."""
    x = np.asarray(samples, dtype=float)
    h = np.asarray(taps, dtype=float)
    return np.convolve(x, h)[: len(x)]
