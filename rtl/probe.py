"""
Width monitor for the datapath.

The datapath never checks ranges: a register silently wraps whatever it is
given. The monitor looks at every register's raw input just before the
commit, so it can tell a value that fit from one that was wrapped.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .fixed import fits

__all__ = ["StageRange", "Violation", "WidthMonitor"]


@dataclass
class StageRange:
    width: int
    lo: int = 0
    hi: int = 0

    @property
    def required_width(self) -> int:
        """Smallest signed width that holds every value seen so far."""
        return max(self.lo.bit_length(), (-self.lo - 1).bit_length(), self.hi.bit_length()) + 1

    def update(self, value: int) -> None:
        if value < self.lo:
            self.lo = value
        if value > self.hi:
            self.hi = value


@dataclass(frozen=True)
class Violation:
    cycle: int
    register: str
    width: int
    value: int


@dataclass
class WidthMonitor:
    """Tracks value ranges per stage and records any value that would wrap."""

    ranges: Dict[str, StageRange] = field(default_factory=dict)
    violations: List[Violation] = field(default_factory=list)
    max_violations: int = 100

    def observe(self, cycle: int, stages: Dict[str, list]) -> None:
        for stage, regs in stages.items():
            for reg in regs:
                rng = self.ranges.get(stage)
                if rng is None:
                    rng = self.ranges[stage] = StageRange(reg.width)
                rng.update(reg.d)
                if not fits(reg.d, reg.width) and len(self.violations) < self.max_violations:
                    self.violations.append(Violation(cycle, reg.name, reg.width, reg.d))

    @property
    def ok(self) -> bool:
        return not self.violations

    def summary(self) -> Dict[str, Tuple[int, int, int]]:
        """stage -> (min, max, declared width)."""
        return {name: (r.lo, r.hi, r.width) for name, r in self.ranges.items()}
