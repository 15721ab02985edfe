"""
core.development
Feature work vs. debt clean-up:
- split raw output by how far debt sits above the caller's target
- debt grows with feature work (faster on a mature codebase), shrinks with clean-up
- maturity only ever increases
"""

from __future__ import annotations

from dataclasses import dataclass

from .state import GameState, clamp
from .team import calculate_output
from .tuning import DEFAULT_TUNING, Tuning


@dataclass(frozen=True)
class DevelopmentAllocation:
    raw_output: float
    clean_up_fraction: float
    raw_feature_effort: float
    feature_output: float      # maturity gained this month
    clean_up_output: float


def clean_up_fraction(technical_debt: float, target: float, tuning: Tuning = DEFAULT_TUNING) -> float:
    target = clamp(float(target), 0.0, 1.0)
    excess = max(0.0, (float(technical_debt) - target) * tuning.cleanup_gain)
    return clamp(excess, 0.0, tuning.max_cleanup_fraction)


def calculate_development_allocation(
    state: GameState,
    raw_output: float,
    tuning: Tuning = DEFAULT_TUNING,
) -> DevelopmentAllocation:
    raw = max(0.0, float(raw_output))
    frac = clean_up_fraction(state.technical_debt, state.technical_debt_target, tuning)
    feature_effort = raw * (1.0 - frac)
    return DevelopmentAllocation(
        raw_output=raw,
        clean_up_fraction=frac,
        raw_feature_effort=feature_effort,
        feature_output=feature_effort / tuning.productivity_divider,
        clean_up_output=raw * frac,
    )


def apply_technical_debt(
    state: GameState,
    raw_feature_effort: float,
    clean_up_output: float,
    tuning: Tuning = DEFAULT_TUNING,
) -> float:
    """Update debt in place; returns the net change actually applied."""
    growth = float(raw_feature_effort) * tuning.debt_growth_rate * (
        1.0 + float(state.product_maturity) * tuning.debt_maturity_multiplier
    )
    reduction = float(clean_up_output) * tuning.debt_reduction_rate
    before = float(state.technical_debt)
    state.technical_debt = clamp(before - reduction + growth, 0.0, tuning.max_technical_debt)
    return state.technical_debt - before


def apply_development(
    state: GameState,
    raw_output: float,
    tuning: Tuning = DEFAULT_TUNING,
) -> DevelopmentAllocation:
    alloc = calculate_development_allocation(state, raw_output, tuning)
    # debt growth is priced against the maturity the work started from
    apply_technical_debt(state, alloc.raw_feature_effort, alloc.clean_up_output, tuning)
    state.product_maturity = float(state.product_maturity) + alloc.feature_output
    return alloc


def current_development_allocation(state: GameState, tuning: Tuning = DEFAULT_TUNING) -> DevelopmentAllocation:
    """Split the team would produce if a tick ran now (no side effects)."""
    return calculate_development_allocation(state, calculate_output(state, tuning), tuning)
