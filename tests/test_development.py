import pytest

from core.development import (
    apply_development,
    apply_technical_debt,
    calculate_development_allocation,
    clean_up_fraction,
    current_development_allocation,
)
from core.tuning import DEFAULT_TUNING

DIVIDER = DEFAULT_TUNING.productivity_divider


def test_no_cleanup_when_debt_below_target(state):
    state.technical_debt = 0.1
    state.technical_debt_target = 0.3
    alloc = calculate_development_allocation(state, 10)
    assert alloc.clean_up_output == 0
    assert alloc.feature_output == 10 / DIVIDER


def test_cleanup_when_debt_above_target(state):
    state.technical_debt = 0.4
    state.technical_debt_target = 0.3
    alloc = calculate_development_allocation(state, 10)
    assert alloc.clean_up_fraction == pytest.approx(0.2)
    assert alloc.clean_up_output == pytest.approx(10 * 0.2)
    assert alloc.feature_output == pytest.approx(10 * 0.8 / DIVIDER)


def test_cleanup_caps_at_half(state):
    state.technical_debt = 0.5
    state.technical_debt_target = 0.1
    alloc = calculate_development_allocation(state, 10)
    assert alloc.clean_up_fraction == 0.5
    assert alloc.clean_up_output == 10 * 0.5
    assert alloc.feature_output == (10 * 0.5) / DIVIDER


@pytest.mark.parametrize("target", [-3.0, 0.0])
def test_out_of_range_target_clamped_at_use(target):
    assert clean_up_fraction(0.1, target) == pytest.approx(0.2)


def test_debt_grows_from_feature_work(state):
    state.technical_debt = 0.1
    state.product_maturity = 0
    apply_technical_debt(state, 1.0, 0)
    assert state.technical_debt == pytest.approx(0.11)


def test_debt_grows_faster_on_mature_product(state):
    state.technical_debt = 0.1
    state.product_maturity = 0.4
    apply_technical_debt(state, 1.0, 0)
    assert state.technical_debt == pytest.approx(0.1 + 0.01 * 3)


def test_debt_shrinks_from_cleanup(state):
    state.technical_debt = 0.3
    apply_technical_debt(state, 0, 2.0)
    assert state.technical_debt == pytest.approx(0.1)


def test_debt_clamps_at_zero(state):
    state.technical_debt = 0.05
    apply_technical_debt(state, 0, 10.0)
    assert state.technical_debt == 0


def test_debt_clamps_at_max(state):
    state.technical_debt = 0.48
    state.product_maturity = 0
    apply_technical_debt(state, 10.0, 0)
    assert state.technical_debt == 0.5


@pytest.mark.parametrize("feature, cleanup", [(1e12, 0), (0, 1e12), (1e12, 1e12)])
def test_debt_stays_in_range_for_degenerate_inputs(state, feature, cleanup):
    state.technical_debt = 0.25
    apply_technical_debt(state, feature, cleanup)
    assert 0.0 <= state.technical_debt <= 0.5


def test_apply_development_increases_maturity(state):
    state.technical_debt = 0.0
    state.technical_debt_target = 0.5
    alloc = apply_development(state, 3.33)
    assert state.product_maturity == pytest.approx(0.01)
    assert alloc.feature_output == pytest.approx(0.01)
    assert state.technical_debt == pytest.approx(0.0333)


def test_current_allocation_has_no_side_effects(state, add_employees):
    add_employees(state, 3, 1.0, 2)
    state.technical_debt = 0.4
    state.technical_debt_target = 0.1
    alloc = current_development_allocation(state)
    assert alloc.clean_up_fraction == 0.5
    assert state.technical_debt == 0.4
    assert state.product_maturity == 0
