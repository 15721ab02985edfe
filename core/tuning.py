"""
core.tuning
Simulation tuning constants (balancing lives in one place).

Every model reads its coefficients from a Tuning instance instead of module
globals, so several calibrations can coexist (tests, scenarios, experiments).
DEFAULT_TUNING is the canonical calibration: a fully onboarded 7-person team
with aggressive debt clean-up reaches maturity 0.5..1.0 in 60 months.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Tuple


@dataclass(frozen=True)
class Tuning:
    # onboarding: multiplier by months employed (0, 1); fully productive afterwards
    onboarding_steps: Tuple[float, ...] = (0.33, 0.66)

    # development
    productivity_divider: float = 333.0
    overhead_per_line: float = 0.01
    cleanup_gain: float = 2.0
    max_cleanup_fraction: float = 0.5
    debt_growth_rate: float = 0.01
    debt_maturity_multiplier: float = 5.0
    debt_reduction_rate: float = 0.1
    max_technical_debt: float = 0.5

    # product-market fit
    pmf_floor: float = 0.1
    pmf_ceiling: float = 1.0
    initial_pmf_span: float = 0.4            # PMF seeded in [floor, floor + span]
    pivot_improve_probability: float = 0.75
    pivot_user_loss: float = 0.8
    pivot_reputation_penalty: float = 0.15
    lifecycle_min_months: int = 60
    lifecycle_span_months: int = 121
    market_delay_min: int = 2
    market_delay_span: int = 4

    # launch
    launch_maturity_min: float = 0.01
    launch_maturity_span: float = 0.003

    # market
    reference_price: float = 100.0
    organic_rate: float = 0.01
    base_churn: float = 0.03
    churn_per_debt: float = 0.06
    churn_per_reputation: float = 0.02

    # drift
    drift_debt_threshold: float = 0.3
    drift_team_size_threshold: int = 10
    drift_tenure_threshold: int = 12
    motivation_debt_penalty: float = 0.02
    motivation_team_penalty: float = 0.01
    motivation_tenure_penalty: float = 0.01
    min_motivation: float = 0.2
    max_motivation: float = 1.5
    reputation_maturity_threshold: float = 0.5
    reputation_maturity_bonus: float = 0.01
    reputation_debt_penalty: float = 0.02
    reputation_churn_threshold: float = 0.08
    reputation_churn_penalty: float = 0.01
    reputation_organic_bonus: float = 0.005

    # hiring
    developer_salary: float = 3000.0
    developer_productivity_min: float = 0.8
    developer_productivity_span: float = 0.4

    def __post_init__(self) -> None:
        if self.productivity_divider <= 0:
            raise ValueError("productivity_divider must be > 0")
        if not 0.0 < self.pmf_floor < self.pmf_ceiling:
            raise ValueError("pmf bounds must satisfy 0 < floor < ceiling")
        if self.min_motivation > self.max_motivation:
            raise ValueError("min_motivation must be <= max_motivation")
        if not 0.0 <= self.max_cleanup_fraction <= 1.0:
            raise ValueError("max_cleanup_fraction must be within 0..1")
        if self.lifecycle_min_months < 1:
            raise ValueError("lifecycle_min_months must be >= 1")

    def with_overrides(self, **overrides: Any) -> "Tuning":
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown tuning fields: {unknown}")
        return replace(self, **overrides)


DEFAULT_TUNING = Tuning()
