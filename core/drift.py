"""
core.drift
Slow monthly adjustments: team motivation, company reputation, tenure.
"""

from __future__ import annotations

from .state import GameState, clamp
from .tuning import DEFAULT_TUNING, Tuning


def apply_motivation_drift(state: GameState, tuning: Tuning = DEFAULT_TUNING) -> None:
    high_debt = float(state.technical_debt) > tuning.drift_debt_threshold
    big_team = len(state.employees) > tuning.drift_team_size_threshold
    for e in state.employees:
        delta = 0.0
        if high_debt:
            delta -= tuning.motivation_debt_penalty
        if big_team:
            delta -= tuning.motivation_team_penalty
        if int(e.months_employed) > tuning.drift_tenure_threshold:
            delta -= tuning.motivation_tenure_penalty
        e.motivation = clamp(float(e.motivation) + delta, tuning.min_motivation, tuning.max_motivation)


def apply_reputation_drift(
    state: GameState,
    churn_rate: float,
    organic_users: int,
    tuning: Tuning = DEFAULT_TUNING,
) -> float:
    delta = 0.0
    if float(state.product_maturity) > tuning.reputation_maturity_threshold:
        delta += tuning.reputation_maturity_bonus
    if float(state.technical_debt) > tuning.drift_debt_threshold:
        delta -= tuning.reputation_debt_penalty
    if float(churn_rate) > tuning.reputation_churn_threshold:
        delta -= tuning.reputation_churn_penalty
    if int(organic_users) > 0:
        delta += tuning.reputation_organic_bonus
    state.reputation = clamp(float(state.reputation) + delta, 0.0, 1.0)
    return state.reputation


def advance_tenure(state: GameState) -> None:
    for e in state.employees:
        e.months_employed = int(e.months_employed) + 1
