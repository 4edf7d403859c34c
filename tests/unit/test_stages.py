"""Unit tests for the pipeline stages between the history buffer and the output."""

import pytest

from common.config import SRRC23_COEFFICIENTS
from rtl.adder_tree import AdderTree
from rtl.coeffs import CoefficientPath, expand_symmetric, fold_symmetric
from rtl.multiply import MultiplyStage
from rtl.output import OutputFormatter
from rtl.symsum import SymmetricSummer


def _tick(stage):
    for r in stage.registers:
        r.tick()


def test_expand_symmetric_palindrome():
    taps = expand_symmetric(SRRC23_COEFFICIENTS)
    assert len(taps) == 23
    assert taps == tuple(reversed(taps))
    assert taps[11] == 18622
    assert taps[0] == taps[22] == -270


def test_fold_is_inverse_of_expand():
    assert fold_symmetric(expand_symmetric(SRRC23_COEFFICIENTS)) == SRRC23_COEFFICIENTS


def test_fold_rejects_asymmetric_and_even():
    with pytest.raises(ValueError, match="not even-symmetric"):
        fold_symmetric([1, 2, 3])
    with pytest.raises(ValueError, match="odd tap count"):
        fold_symmetric([1, 1])


def test_coefficient_path_delays_one_tick():
    path = CoefficientPath()
    path.drive(SRRC23_COEFFICIENTS)
    assert path.values == (0,) * 12
    _tick(path)
    assert path.values == SRRC23_COEFFICIENTS


def test_symmetric_sums_pairs_and_center():
    s = SymmetricSummer()
    window = [100 * k for k in range(23)]
    s.drive(window)
    _tick(s)
    assert s.values == (2200,) * 11
    assert s.center.q == 1100


def test_symmetric_sum_never_overflows():
    s = SymmetricSummer()
    s.drive([-32768] * 23)
    _tick(s)
    assert s.values == (-65536,) * 11
    s.drive([32767] * 23)
    _tick(s)
    assert s.values == (65534,) * 11


def test_multiply_exact_products():
    m = MultiplyStage()
    sums = [-65536] * 11
    m.drive(SRRC23_COEFFICIENTS, sums, -32768)
    _tick(m)
    assert m.values == tuple(c * -65536 for c in SRRC23_COEFFICIENTS[:11])
    assert m.center.q == 18622 * -32768


def test_adder_tree_pairing_and_timing():
    tree = AdderTree()
    partials = [1 << k for k in range(11)]
    center = 1 << 11
    for tick in range(1, 5):
        tree.drive(partials, center)
        _tick(tree)
        if tick < 4:
            assert tree.result == 0
    a, b, c, d = tree.snapshot()
    assert a == (3, 12, 48, 192, 768, 3072)  # center folded in with product 10
    assert b == (15, 240, 3840)
    assert c == (255, 3840)  # third stage-B value passes through
    assert d == (4095,)
    assert tree.result == 4095


def test_adder_tree_keeps_full_width():
    tree = AdderTree()
    big = (1 << 31) - 1
    tree.drive([big] * 11, big)
    _tick(tree)
    # Two 32-bit products added at 35 bits: no wrap
    assert tree.levels[0].values[0] == 2 * big


def test_adder_tree_rejects_wrong_product_count():
    with pytest.raises(ValueError):
        AdderTree(products=40)


def test_output_window_truncates():
    out = OutputFormatter()
    out.drive(18622 << 7)  # center tap, unit impulse
    _tick(out)
    assert out.value == 18
    out.drive(-270 << 7)
    _tick(out)
    assert out.value == -1
