"""
Stimulus sequences for the filter, as raw Q8.7 integers.

Every generator is deterministic for a given seed so failing runs can be
reproduced from the log line that names the stimulus.
"""

import random
from typing import Callable, Dict, List, Optional, Sequence

from rtl.fixed import Q8_7

__all__ = [
    "STIMULUS_KINDS",
    "alternating",
    "extremes",
    "impulse",
    "make",
    "ramp",
    "random_samples",
    "step",
    "symbols",
    "worst_case",
]

ONE = Q8_7.scale  # 1.0 in Q8.7
S_MIN = Q8_7.min_raw
S_MAX = Q8_7.max_raw


def impulse(length: int, amplitude: int = ONE, at: int = 0) -> List[int]:
    seq = [0] * length
    if 0 <= at < length:
        seq[at] = amplitude
    return seq


def step(length: int, value: int = ONE // 2) -> List[int]:
    return [value] * length


def random_samples(length: int, seed: int = 0xC0C0, lo: int = S_MIN, hi: int = S_MAX) -> List[int]:
    rnd = random.Random(seed)
    return [rnd.randint(lo, hi) for _ in range(length)]


def alternating(length: int, value: int = S_MAX) -> List[int]:
    return [value if i % 2 == 0 else -value for i in range(length)]


def ramp(length: int) -> List[int]:
    """Full-scale ramp from the most negative to the most positive sample."""
    if length <= 1:
        return [0] * length
    span = S_MAX - S_MIN
    return [S_MIN + (span * i) // (length - 1) for i in range(length)]


def worst_case(taps: Sequence[int], sign: int = 1) -> List[int]:
    """Samples that drive the accumulator to its extreme.

    Each sample takes the full-scale value whose sign matches its tap (times
    ``sign``). Symmetric taps read the same in both directions, so the
    sequence lines up with the history window once all of it is inside.
    """
    out = []
    for c in taps:
        positive = (c >= 0) == (sign >= 0)
        out.append(S_MAX if positive else S_MIN)
    return out


def extremes(length: int, taps: Sequence[int]) -> List[int]:
    """Both accumulator extremes, full-scale runs and alternating extremes."""
    n = len(taps)
    core = (
        worst_case(taps, 1) + worst_case(taps, -1)
        + [S_MIN] * (2 * n) + [S_MAX] * (2 * n) + [S_MIN, S_MAX] * n
    )
    return (core * ((length + len(core) - 1) // len(core)))[:length]


def symbols(values: Sequence[int], sps: int = 4, amplitude: int = ONE) -> List[int]:
    """One sample per symbol at ``amplitude * value``, zero-filled to ``sps``."""
    out: List[int] = []
    for v in values:
        out.append(v * amplitude)
        out.extend([0] * (sps - 1))
    return out


def _random_symbols(length: int, seed: int, sps: int = 4) -> List[int]:
    rnd = random.Random(seed)
    return symbols([rnd.choice((-1, 1)) for _ in range((length + sps - 1) // sps)], sps)[:length]


STIMULUS_KINDS = ("impulse", "step", "random", "alt", "ramp", "edge", "symbols")


def make(kind: str, length: int, seed: int = 0xC0C0, taps: Optional[Sequence[int]] = None) -> List[int]:
    """Build a named stimulus; ``taps`` is only used by ``edge``."""
    builders: Dict[str, Callable[[], List[int]]] = {
        "impulse": lambda: impulse(length),
        "step": lambda: step(length),
        "random": lambda: random_samples(length, seed),
        "alt": lambda: alternating(length),
        "ramp": lambda: ramp(length),
        "edge": lambda: extremes(length, taps or [1]),
        "symbols": lambda: _random_symbols(length, seed),
    }
    if kind not in builders:
        raise ValueError(f"unknown stimulus {kind!r}; choose from {', '.join(STIMULUS_KINDS)}")
    return builders[kind]()
