"""Unit tests for the golden models and the SRRC design."""

import numpy as np
import pytest

from common.config import SRRC23_COEFFICIENTS, FilterConfig
from sim.golden.fir_model import fir_direct, fir_ideal, impulse_response
from sim.golden.srrc import design_coefficients, quantize_taps, srrc_taps


def test_impulse_response_is_taps_truncated():
    taps = FilterConfig().mirrored()
    resp = impulse_response(length=30)
    # 1.0 in Q8.7 times a Q1.14 tap, bits [32:17] kept: tap >> 10
    assert resp[:23] == [c >> 10 for c in taps]
    assert resp[23:] == [0] * 7
    assert resp[11] == 18


def test_direct_model_applies_pipeline_delay():
    x = [128] + [0] * 40
    delayed = fir_direct(x)
    assert delayed[:7] == [0] * 7
    assert delayed[7:30] == impulse_response(length=23)
    assert fir_direct(x, delay=0)[:23] == impulse_response(length=23)


def test_direct_model_delay_longer_than_input():
    assert fir_direct([128, 128], delay=7) == [0, 0]
    assert impulse_response(length=0) == []


def test_direct_model_wraps_inputs():
    assert fir_direct([40000] * 30) == fir_direct([40000 - 65536] * 30)


def test_direct_model_custom_taps():
    taps = [0] * 11 + [16384] + [0] * 11
    x = [800, -800, 5, -5]
    # Unity center tap at offset 11; Q8.7 -> Q11.4 is a 3-bit shift
    assert fir_direct(x + [0] * 11, taps=taps, delay=0)[11:15] == [100, -100, 0, -1]


def test_fir_ideal_matches_convolution():
    h = [0.5, 0.25]
    y = fir_ideal([1.0, 0.0, 2.0], h)
    assert np.allclose(y, [0.5, 0.25, 1.0])


def test_srrc_taps_symmetric_with_known_peak():
    h = srrc_taps(0.5, 4, 23)
    assert np.allclose(h, h[::-1])
    assert h[11] == pytest.approx(1 - 0.5 + 2 / np.pi)
    assert np.argmax(h) == 11


def test_srrc_singular_points_are_finite():
    h = srrc_taps(0.5, 4, 23)
    assert np.all(np.isfinite(h))
    # |t| = 1/(4*beta) = 0.5 symbol is two samples from the center
    assert h[9] == pytest.approx(0.5786, abs=1e-4)


def test_srrc_beta_zero_is_sinc():
    h = srrc_taps(0.0, 4, 23)
    assert h[11] == pytest.approx(1.0)
    assert h[15] == pytest.approx(0.0, abs=1e-12)


def test_design_reproduces_fixed_table():
    designed = design_coefficients(0.5, 4, 23)
    assert len(designed) == 12
    diffs = [abs(a - b) for a, b in zip(designed, SRRC23_COEFFICIENTS)]
    assert max(diffs) <= 2
    assert designed[-1] == SRRC23_COEFFICIENTS[-1]


def test_quantize_rejects_out_of_range():
    with pytest.raises(ValueError, match="do not fit"):
        quantize_taps([3.0])
    assert quantize_taps([0.5, -0.25]) == (8192, -4096)


def test_design_argument_checks():
    with pytest.raises(ValueError):
        srrc_taps(beta=1.5)
    with pytest.raises(ValueError):
        design_coefficients(ntaps=22)
