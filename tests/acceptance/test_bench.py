# Stimulus bench for the 23-tap symmetric SRRC datapath
# - Drives every built-in stimulus through the cycle model, with and without a
#   mid-run reset pulse, and checks each tick against the direct-form golden model
# - Functional coverage via cocotb-coverage: stimulus kind x reset, 100% required
#
# Latency model:
#   - Golden model output is delayed by the 7 arithmetic pipeline stages
#   - The 11-tick tap offset is part of both models, so no further shift applies
#
# Artifacts:
#   - Coverage YAML written to the pytest temporary directory

import random
from typing import Dict, List

import pytest
from cocotb_coverage.coverage import CoverPoint, CoverCross, coverage_db

from common.config import FilterConfig
from rtl.core import SymmetricFirCore
from rtl.probe import WidthMonitor
from sim import stimulus
from sim.golden.fir_model import fir_direct

CFG = FilterConfig()
STIM_TYPES = stimulus.STIMULUS_KINDS
LENGTH = max(4 * CFG.taps, 128)


# Coverage definitions
@CoverPoint("bench.stimulus", xf=lambda kind, reset: kind, bins=list(STIM_TYPES))
@CoverPoint("bench.reset", xf=lambda kind, reset: reset, bins=[False, True])
@CoverCross("bench.stimulus_x_reset", items=["bench.stimulus", "bench.reset"])
def sample_coverage(kind: str, reset: bool) -> None:
    """Coverage sampler. Decorators define bins and crosses."""
    return None


def drive_and_check(kind: str, reset: bool) -> Dict[str, object]:
    """Drive one stimulus and compare every tick against the golden stream.

    With ``reset`` the pipeline is cleared at a random tick; the expected
    stream then restarts from zero history at the tick after the pulse.
    """
    sample_coverage(kind, reset)

    seq = stimulus.make(kind, LENGTH, seed=0xBEEF, taps=CFG.mirrored())
    core = SymmetricFirCore(CFG)
    monitor = WidthMonitor()
    core.attach(monitor)

    pulse = random.Random(STIM_TYPES.index(kind)).randint(CFG.taps, LENGTH - CFG.taps) if reset else None
    got: List[int] = []
    for i, x in enumerate(seq):
        got.append(core.step(x, CFG.coefficients, rst_n=0 if i == pulse else 1))

    if pulse is None:
        expected = fir_direct(seq, cfg=CFG)
    else:
        expected = fir_direct(seq[:pulse], cfg=CFG) + [0] + fir_direct(seq[pulse + 1:], cfg=CFG)

    mismatches = [i for i, (g, e) in enumerate(zip(got, expected)) if g != e]
    return {"mismatches": mismatches, "violations": monitor.violations, "pulse": pulse}


@pytest.fixture(scope="module")
def bench_results():
    return {
        (kind, reset): drive_and_check(kind, reset)
        for kind in STIM_TYPES
        for reset in (False, True)
    }


@pytest.mark.parametrize("reset", [False, True])
@pytest.mark.parametrize("kind", STIM_TYPES)
def test_stimulus_matches_golden(bench_results, kind, reset):
    res = bench_results[(kind, reset)]
    assert res["mismatches"] == [], f"[{kind}] mismatches at ticks {res['mismatches'][:10]}"
    assert res["violations"] == [], f"[{kind}] width violations {res['violations'][:5]}"


def test_coverage_complete_and_exported(bench_results, tmp_path):
    """Finalize and export coverage, assert threshold."""
    assert len(bench_results) == 2 * len(STIM_TYPES)
    cov_path = tmp_path / "coverage_bench.yml"
    coverage_db.export_to_yaml(str(cov_path))
    assert cov_path.exists()

    for name in ("bench.stimulus", "bench.reset", "bench.stimulus_x_reset"):
        pct = coverage_db[name].cover_percentage
        assert pct >= 100.0, f"{name} coverage {pct:.2f}% < 100%"
