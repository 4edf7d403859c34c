"""
Designer agent: design an SRRC coefficient set and emit a validated config.

This tool samples a square-root-raised-cosine pulse, quantizes it to Q1.14,
checks the result against the fixed datapath widths using
[common/config.py](common/config.py), and writes a filters YAML (or the
normalized JSON form with --json). With --input, an existing configuration is
loaded and the designed set is added to it (replacing a set of the same name).

Example:
    python -m agents.designer --beta 0.5 --sps 4 --name srrc23 -o artifacts/filters.yaml -v

Exit codes:
    0  success
    2  file not found or YAML parse error
    3  design or configuration validation error
    4  output write/permission error
    1  unexpected error
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import yaml  # for catching yaml.YAMLError from common.config.load_config

from common.config import TAPS, Config, ConfigError, load_config, validate_config
from common.logging import add_logging_args, get_logger, init_cli_logging
from sim.golden.srrc import design_coefficients


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the designer agent."""
    parser = argparse.ArgumentParser(
        prog="agents.designer",
        description="Design a quantized SRRC coefficient set and emit a validated config",
    )
    parser.add_argument("--beta", type=float, default=0.5, help="Roll-off factor (default: 0.5)")
    parser.add_argument("--sps", type=int, default=4, help="Samples per symbol (default: 4)")
    parser.add_argument("--name", default="srrc23", help="Filter name (default: srrc23)")
    parser.add_argument(
        "-i", "--input",
        type=Path,
        default=None,
        help="Existing filters YAML to extend (default: start empty)",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=Path("artifacts/filters.yaml"),
        help="Path to output file (default: artifacts/filters.yaml)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Write normalized JSON instead of YAML",
    )
    add_logging_args(parser)
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Design the coefficient set and merge it into the input config, if any."""
    log = get_logger(__name__)
    try:
        coeffs = design_coefficients(beta=args.beta, sps=args.sps, ntaps=TAPS)
    except ValueError as e:
        raise ConfigError(str(e)) from e
    log.info("Designed %s: beta=%g sps=%d -> %s", args.name, args.beta, args.sps, list(coeffs))

    entries = []
    if args.input is not None:
        base = load_config(args.input)
        entries = [
            {"name": f.name, "description": f.description, "coefficients": list(f.coefficients)}
            for f in base.filters
            if f.name != args.name
        ]
    entries.append(
        {
            "name": args.name,
            "description": f"SRRC, beta={args.beta:g}, {args.sps} samples/symbol",
            "coefficients": list(coeffs),
        }
    )
    # Same validation path as a hand-written YAML file
    return validate_config({"filters": entries})


def main(argv: Optional[List[str]] = None) -> int:
    """Program entrypoint. Returns an exit code per the module docstring."""
    args = parse_args(argv)

    init_cli_logging(args)
    log = get_logger(__name__)

    try:
        cfg = build_config(args)

        out_path: Path = args.output
        if args.json:
            cfg.dump_json(out_path)
        else:
            cfg.dump_yaml(out_path)
        log.info("Wrote %d filter(s) to %s", len(cfg.filters), out_path)
        return 0

    except FileNotFoundError as e:
        log.error("%s", e)
        return 2
    except yaml.YAMLError as e:
        log.error("YAML parse error: %s", e)
        return 2
    except ConfigError as e:
        log.error("Configuration validation error: %s", e)
        return 3
    except PermissionError as e:
        log.error("Write permission error: %s", e)
        return 4
    except Exception as e:  # pragma: no cover - unexpected
        log.exception("Unexpected error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
