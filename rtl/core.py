"""
Cycle-accurate model of the symmetric FIR datapath with runtime coefficients.

Register stages, all clocked together:

    history (23) ─┬─> sum (11) + center ─> product (12) ─> A (6) ─> B (3) ─> C (2) ─> D (1) ─> out
    coeff (12) ───┘ (re-registered once to meet the sums at the multipliers)

One call to :meth:`SymmetricFirCore.step` is one rising clock edge. A sample
presented on tick n reaches the center history position after 11 ticks and
the output register 7 ticks later, so an impulse peaks at tick n + 18.
"""

import enum
from typing import Dict, List, Optional, Sequence

from common.config import FilterConfig
from common.logging import TRACE, get_logger

from .adder_tree import AdderTree
from .coeffs import CoefficientPath
from .fixed import wrap
from .history import HistoryBuffer
from .multiply import MultiplyStage
from .output import OutputFormatter
from .probe import WidthMonitor
from .register import Register
from .symsum import SymmetricSummer

__all__ = ["PipelineState", "SymmetricFirCore"]

log = get_logger(__name__)


class PipelineState(enum.Enum):
    RESET = "reset"
    RUNNING = "running"


class SymmetricFirCore:
    """The datapath with the distinct coefficients as a per-tick input."""

    def __init__(self, config: Optional[FilterConfig] = None):
        self.config = cfg = config or FilterConfig()
        self.history = HistoryBuffer(cfg.taps, cfg.sample_width)
        self.coeffs = CoefficientPath(cfg.pairs + 1, cfg.coeff_width)
        self.symsum = SymmetricSummer(cfg.taps, cfg.sample_width, cfg.sum_width)
        self.multiply = MultiplyStage(cfg.pairs, cfg.product_width)
        self.tree = AdderTree(cfg.pairs + 1, cfg.acc_width)
        self.output = OutputFormatter(cfg.out_shift, cfg.out_width)

        self._stages: Dict[str, List[Register]] = {
            "history": self.history.registers,
            "coeff": self.coeffs.registers,
            "sum": self.symsum.registers,
            "product": self.multiply.registers,
        }
        for level in self.tree.levels:
            self._stages[level.name] = list(level)
        self._stages["out"] = self.output.registers
        self._registers = [r for regs in self._stages.values() for r in regs]

        self._monitors: List[WidthMonitor] = []
        self.cycle = 0
        self.state = PipelineState.RESET

    @property
    def latency(self) -> int:
        return self.config.latency

    @property
    def registers(self) -> List[Register]:
        return list(self._registers)

    @property
    def value(self) -> int:
        """Current registered output sample (Q11.4)."""
        return self.output.value

    def attach(self, monitor: WidthMonitor) -> None:
        """Attach a width monitor; its ``observe(cycle, stages)`` runs before each commit."""
        self._monitors.append(monitor)

    def reset(self) -> None:
        """Asynchronous clear of every register; in-flight samples are lost."""
        for r in self._registers:
            r.clear()
        if self.state is not PipelineState.RESET:
            log.debug("reset asserted at cycle %d", self.cycle)
        self.state = PipelineState.RESET

    def step(self, sample: int, coefficients: Sequence[int], rst_n: int = 1) -> int:
        """Advance one clock edge and return the registered output.

        ``rst_n`` is active low; while it is 0 the clear overrides the clock
        and the pipeline stays at zero.
        """
        if not rst_n:
            self.reset()
            self.cycle += 1
            return self.output.value
        if self.state is PipelineState.RESET:
            log.debug("reset released at cycle %d", self.cycle)
            self.state = PipelineState.RUNNING

        # Next-state inputs for every stage, all from the previous tick's outputs.
        self.output.drive(self.tree.result)
        self.tree.drive(self.multiply.values, self.multiply.center.q)
        self.multiply.drive(self.coeffs.values, self.symsum.values, self.symsum.center.q)
        self.symsum.drive(self.history.window)
        self.coeffs.drive(coefficients)
        self.history.drive(wrap(sample, self.config.sample_width))

        for m in self._monitors:
            m.observe(self.cycle, self._stages)
        for r in self._registers:
            r.tick()

        if log.isEnabledFor(TRACE):
            log.log(TRACE, "cycle %d: %s", self.cycle, self.snapshot())
        self.cycle += 1
        return self.output.value

    def snapshot(self) -> Dict[str, tuple]:
        """Registered contents of every stage."""
        return {name: tuple(r.q for r in regs) for name, regs in self._stages.items()}
