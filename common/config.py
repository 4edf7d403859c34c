# common/config.py
"""
YAML configuration loader and validator for filter coefficient sets.

The datapath widths are fixed; a configuration names one or more
coefficient sets that are run through that datapath. Every set is checked
against the worst-case input so that the product and accumulator widths are
known to hold before a simulation starts.

Expected top-level structure (see [configs/filters.yaml](configs/filters.yaml)):

    filters:
      - name: srrc23
        description: "SRRC, beta=0.5, 4 samples/symbol"   # optional (str)
        coefficients: [-270, -245, 253, 694, 253, -1228,
                       -2569, -1738, 2569, 9479, 15966, 18622]
        widths:                                           # optional, must match
          sample: 16
          acc: 35

"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml

log = logging.getLogger(__name__)

# Q1.14 square-root-raised-cosine taps, beta=0.5, 4 samples/symbol.
# Index i pairs with tap (22 - i); index 11 is the unpaired center tap.
SRRC23_COEFFICIENTS: Tuple[int, ...] = (
    -270, -245, 253, 694, 253, -1228, -2569, -1738, 2569, 9479, 15966, 18622,
)

TAPS = 23


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""


@dataclass(frozen=True)
class FilterConfig:
    """Immutable description of one coefficient set and the datapath widths."""

    name: str = "srrc23"
    coefficients: Tuple[int, ...] = SRRC23_COEFFICIENTS
    description: str = ""
    taps: int = TAPS
    sample_width: int = 16
    sample_frac: int = 7
    coeff_width: int = 16
    coeff_frac: int = 14
    sum_width: int = 17
    product_width: int = 32
    acc_width: int = 35
    out_width: int = 16
    out_shift: int = 17
    # Registered stages after the history buffer: sum, multiply, four
    # adder-tree levels, output.
    pipeline_depth: int = 7

    @property
    def pairs(self) -> int:
        return self.taps // 2

    @property
    def center(self) -> int:
        return (self.taps - 1) // 2

    @property
    def latency(self) -> int:
        """Ticks from a sample entering to its center-tap output."""
        return self.pipeline_depth + self.center

    @property
    def out_frac(self) -> int:
        return self.sample_frac + self.coeff_frac - self.out_shift

    def mirrored(self) -> Tuple[int, ...]:
        """The full palindromic tap sequence, tap 0 first."""
        half = self.coefficients[: self.pairs]
        return tuple(half) + (self.coefficients[self.pairs],) + tuple(reversed(half))

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["coefficients"] = list(self.coefficients)
        return d


@dataclass
class Config:
    """Typed wrapper for the loaded and validated configuration."""

    filters: List[FilterConfig] = field(default_factory=list)

    def get(self, name: str) -> FilterConfig:
        for f in self.filters:
            if f.name == name:
                return f
        raise ConfigError(f"Filter not found: {name}")

    @property
    def names(self) -> List[str]:
        return [f.name for f in self.filters]

    def to_json(self) -> str:
        """Serialize the config to a JSON string (UTF-8)."""
        return json.dumps(
            {"filters": [f.to_dict() for f in self.filters]}, indent=2, sort_keys=True
        )

    def dump_json(self, path: Union[str, Path]) -> None:
        """Write the config JSON to a file path."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(self.to_json(), encoding="utf-8")

    def to_yaml(self) -> str:
        data = {
            "filters": [
                {
                    "name": f.name,
                    "description": f.description,
                    "coefficients": list(f.coefficients),
                }
                for f in self.filters
            ]
        }
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=None)

    def dump_yaml(self, path: Union[str, Path]) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(self.to_yaml(), encoding="utf-8")


def default_config() -> Config:
    """The built-in configuration: the fixed SRRC coefficient set only."""
    return Config(filters=[FilterConfig(description="SRRC, beta=0.5, 4 samples/symbol")])


def headroom(cfg: FilterConfig) -> Dict[str, int]:
    """Worst-case magnitudes reached by each stage for any Q8.7 input.

    The worst case of a sum of products is every sample at full negative
    scale with the sign of its coefficient, so the bound is the sum of
    absolute coefficient values times the largest sample magnitude.
    """
    x_max = 1 << (cfg.sample_width - 1)
    c_max = max(abs(c) for c in cfg.coefficients)
    pair_max = 2 * x_max
    acc_max = sum(abs(c) for c in cfg.mirrored()) * x_max
    return {
        "sum": pair_max,
        "product": c_max * pair_max,
        "acc": acc_max,
        "out": acc_max >> cfg.out_shift,
    }


def _signed_limit(width: int) -> int:
    return 1 << (width - 1)


def check_headroom(cfg: FilterConfig) -> List[str]:
    """Return warnings for a coefficient set; raise for a broken width proof.

    Products and accumulator overflow would corrupt every output, so those
    are errors. The output window only aliases for inputs near full scale,
    which is reported as a warning.
    """
    h = headroom(cfg)
    # A product of -2^15 by -2^16 is the one case reaching +2^31; the
    # Q1.14 range check in _validate_filter keeps it out of reach.
    if h["product"] >= _signed_limit(cfg.product_width):
        raise ConfigError(
            f"{cfg.name}: worst-case product {h['product']} exceeds "
            f"{cfg.product_width}-bit partial product"
        )
    if h["acc"] >= _signed_limit(cfg.acc_width):
        raise ConfigError(
            f"{cfg.name}: worst-case accumulator {h['acc']} exceeds "
            f"{cfg.acc_width}-bit accumulator"
        )
    warnings: List[str] = []
    if h["out"] >= _signed_limit(cfg.out_width):
        warnings.append(
            f"{cfg.name}: output window bits [{cfg.out_shift + cfg.out_width - 1}:"
            f"{cfg.out_shift}] may alias for full-scale inputs "
            f"(worst case {h['out']})"
        )
    return warnings


_DESIGN_WIDTHS = {
    "sample": "sample_width",
    "coeff": "coeff_width",
    "sum": "sum_width",
    "product": "product_width",
    "acc": "acc_width",
    "out": "out_width",
}


def _validate_filter(idx: int, v: Dict[str, Any]) -> FilterConfig:
    if not isinstance(v, dict):
        raise ConfigError(f"filters[{idx}] must be a mapping, got {type(v).__name__}")

    # Required keys
    if "name" not in v or not isinstance(v["name"], str) or not v["name"].strip():
        raise ConfigError(f"filters[{idx}].name must be a non-empty string")
    coeffs = v.get("coefficients")
    if not isinstance(coeffs, list) or not all(
        isinstance(c, int) and not isinstance(c, bool) for c in coeffs
    ):
        raise ConfigError(f"filters[{idx}].coefficients must be a list of integers")

    base = FilterConfig()
    distinct = base.pairs + 1
    if len(coeffs) != distinct:
        raise ConfigError(
            f"filters[{idx}].coefficients must hold {distinct} values, got {len(coeffs)}"
        )
    lo = -_signed_limit(base.coeff_width) + 1
    hi = _signed_limit(base.coeff_width) - 1
    for i, c in enumerate(coeffs):
        if not lo <= c <= hi:
            raise ConfigError(
                f"filters[{idx}].coefficients[{i}]={c} outside Q1.14 range [{lo}, {hi}]"
            )

    # Optional known keys (validate type if present)
    if "description" in v and not isinstance(v["description"], str):
        raise ConfigError(f"filters[{idx}].description must be a string when present")
    widths = v.get("widths", {})
    if not isinstance(widths, dict):
        raise ConfigError(f"filters[{idx}].widths must be a mapping when present")
    for key, value in widths.items():
        if key not in _DESIGN_WIDTHS:
            raise ConfigError(f"filters[{idx}].widths.{key} is not a datapath width")
        fixed = getattr(base, _DESIGN_WIDTHS[key])
        if value != fixed:
            raise ConfigError(
                f"filters[{idx}].widths.{key}={value} differs from the fixed "
                f"datapath width {fixed}"
            )

    cfg = FilterConfig(
        name=v["name"],
        coefficients=tuple(coeffs),
        description=v.get("description", ""),
    )
    for w in check_headroom(cfg):
        log.warning("%s", w)
    return cfg


def validate_config(data: Dict[str, Any]) -> Config:
    """Validate an already-parsed mapping (YAML or built in code)."""
    if not isinstance(data, dict) or "filters" not in data:
        raise ConfigError('Missing top-level "filters" key')
    filters = data["filters"]
    if not isinstance(filters, list) or not filters:
        raise ConfigError('"filters" must be a non-empty list')
    parsed = [_validate_filter(i, v) for i, v in enumerate(filters)]
    names = [f.name for f in parsed]
    dupes = sorted({n for n in names if names.count(n) > 1})
    if dupes:
        raise ConfigError(f"Duplicate filter names: {', '.join(dupes)}")
    return Config(filters=parsed)


def load_config(path: Union[str, Path]) -> Config:
    """Load and validate a configuration file from YAML.

    Raises:
        ConfigError for structural, type, or headroom problems.
        FileNotFoundError if path does not exist.
        yaml.YAMLError for YAML syntax problems.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:  # pragma: no cover - unexpected I/O errors
        raise ConfigError(f"Failed to read config: {e}") from e
    data = yaml.safe_load(text) or {}

    cfg = validate_config(data)
    log.debug("Loaded %d filter(s) from %s: %s", len(cfg.filters), p, ", ".join(cfg.names))
    return cfg
