#!/usr/bin/env python3
"""
Simulation agent: clock a stimulus through the cycle model and cross-check it.

This tool runs the 23-tap datapath ([rtl/core.py](rtl/core.py)) tick by tick on a
named stimulus or an input vector file, compares every output against the
direct-form golden model ([sim/golden/fir_model.py](sim/golden/fir_model.py)),
and verifies with a width monitor that no register had to wrap. The
coefficient set comes from a named filter in
[configs/filters.yaml](configs/filters.yaml).

Input vectors (--input) are a JSON list of Q8.7 integers or an object with a
"samples" list. Results (--output) are JSON; --csv writes tick,input,output,expected.

Exit codes:
    0  success
    2  file not found or YAML/JSON parse error
    3  validation/config error (e.g., missing filter, bad stimulus)
    4  verification failure (mismatch or width violation)
    1  unexpected error
"""

from __future__ import annotations

import argparse
import csv
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml  # for catching yaml.YAMLError transparently

from common.config import ConfigError, FilterConfig, load_config
from common.logging import add_logging_args, get_logger, init_cli_logging
from rtl.core import SymmetricFirCore
from rtl.probe import WidthMonitor
from sim import stimulus
from sim.golden.fir_model import fir_direct


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="agents.sim",
        description="Run the cycle-accurate filter model and cross-check against the golden model",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=Path("configs/filters.yaml"),
        help="Path to filters YAML (default: configs/filters.yaml)",
    )
    parser.add_argument(
        "--filter",
        default="srrc23",
        help="Filter name to load from the config (default: srrc23)",
    )
    parser.add_argument(
        "--stimulus",
        choices=stimulus.STIMULUS_KINDS,
        default="random",
        help="Built-in stimulus (ignored with --input) (default: random)",
    )
    parser.add_argument("--length", type=int, default=256, help="Stimulus length in ticks (default: 256)")
    parser.add_argument("--seed", type=int, default=0xC0C0, help="Stimulus seed (default: 0xC0C0)")
    parser.add_argument("-i", "--input", type=Path, default=None, help="JSON input vector file")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Write JSON results here")
    parser.add_argument("--csv", type=Path, default=None, help="Write per-tick CSV here")
    add_logging_args(parser)
    return parser.parse_args(argv)


def _load_vector(path: Path) -> List[int]:
    if not path.exists():
        raise FileNotFoundError(f"Input vector not found: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("samples")
    if not isinstance(data, list) or not all(isinstance(x, int) and not isinstance(x, bool) for x in data):
        raise ConfigError(f"{path}: expected a list of integers or {{\"samples\": [...]}}")
    return data


def simulate(cfg: FilterConfig, samples: List[int]) -> Dict[str, Any]:
    """Run the cycle model and the golden model side by side.

    Returns a result mapping with outputs, expected outputs, mismatching
    ticks, width violations and per-stage ranges.
    """
    log = get_logger(__name__)
    core = SymmetricFirCore(cfg)
    monitor = WidthMonitor()
    core.attach(monitor)

    outs = [core.step(x, cfg.coefficients) for x in samples]
    expected = fir_direct(samples, cfg=cfg)

    mismatches = [i for i, (got, exp) in enumerate(zip(outs, expected)) if got != exp]
    for i in mismatches[:10]:
        log.error("Mismatch at tick %d: got %d, exp %d", i, outs[i], expected[i])
    for v in monitor.violations[:10]:
        log.error("Width violation at tick %d: %s=%d does not fit %d bits", v.cycle, v.register, v.value, v.width)

    return {
        "filter": cfg.name,
        "ticks": len(samples),
        "latency": core.latency,
        "inputs": list(samples),
        "outputs": outs,
        "expected": expected,
        "mismatches": mismatches,
        "violations": [asdict(v) for v in monitor.violations],
        "ranges": {k: {"min": lo, "max": hi, "width": w} for k, (lo, hi, w) in monitor.summary().items()},
    }


def _write_csv(path: Path, result: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["tick", "input", "output", "expected"])
        for i, (x, y, e) in enumerate(zip(result["inputs"], result["outputs"], result["expected"])):
            w.writerow([i, x, y, e])


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    init_cli_logging(args)
    log = get_logger(__name__)

    try:
        cfg = load_config(args.config).get(args.filter)

        if args.input is not None:
            samples = _load_vector(args.input)
            source = str(args.input)
        else:
            if args.length <= 0:
                raise ConfigError("--length must be a positive integer")
            samples = stimulus.make(args.stimulus, args.length, seed=args.seed, taps=cfg.mirrored())
            source = f"{args.stimulus} (seed={args.seed:#x})"

        log.info("Simulating %s on %s, %d ticks", cfg.name, source, len(samples))
        result = simulate(cfg, samples)

        if args.output is not None:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(json.dumps(result, indent=2), encoding="utf-8")
            log.info("Wrote results to %s", args.output)
        if args.csv is not None:
            _write_csv(args.csv, result)
            log.info("Wrote per-tick CSV to %s", args.csv)

        if result["mismatches"] or result["violations"]:
            log.error(
                "Verification failed: %d mismatches, %d width violations",
                len(result["mismatches"]), len(result["violations"]),
            )
            return 4
        log.info("Cycle model matches golden model on all %d ticks", len(samples))
        return 0

    except FileNotFoundError as e:
        log.error("%s", e)
        return 2
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        log.error("Parse error: %s", e)
        return 2
    except (ConfigError, ValueError) as e:
        log.error("Configuration error: %s", e)
        return 3
    except Exception as e:  # pragma: no cover
        log.exception("Unexpected error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
