"""
Fixed-coefficient facade: one sample in, one sample out per clock.

    from rtl.top import SrrcFir

    fir = SrrcFir()
    ys = fir.run([128] + [0] * 40)   # ys[18] is the center-tap peak
"""

from typing import Iterable, List, Optional

from common.config import FilterConfig

from .core import PipelineState, SymmetricFirCore

__all__ = ["SrrcFir"]


class SrrcFir:
    """23-tap SRRC filter with its coefficients bound at construction.

    Ports of the modelled block: clock (one :meth:`step` call per rising
    edge), ``rst_n`` (asynchronous, active low), a Q8.7 input sample and a
    Q11.4 output sample.
    """

    def __init__(self, config: Optional[FilterConfig] = None):
        self.config = config or FilterConfig()
        self.core = SymmetricFirCore(self.config)
        self._coefficients = tuple(self.config.coefficients)

    @property
    def latency(self) -> int:
        return self.core.latency

    @property
    def state(self) -> PipelineState:
        return self.core.state

    @property
    def value(self) -> int:
        return self.core.value

    def reset(self) -> None:
        self.core.reset()

    def step(self, sample: int, rst_n: int = 1) -> int:
        return self.core.step(sample, self._coefficients, rst_n)

    def run(self, samples: Iterable[int]) -> List[int]:
        """Clock every sample through and return one output per tick."""
        return [self.step(x) for x in samples]
