"""
core.selfcheck
Minimal "it runs" proof: a long seeded run under hostile knobs with the
state invariants asserted after every month.

Run:
  python -m core.selfcheck
"""

from __future__ import annotations

from dataclasses import asdict

from .development import apply_development
from .drift import advance_tenure, apply_motivation_drift, apply_reputation_drift
from .finance import apply_finance
from .market import add_users, calculate_churn, calculate_churn_rate, calculate_new_users, calculate_organic_users, get_user_count, remove_users
from .pmf import apply_pmf_degradation, pivot
from .rng import seeded_source
from .scenarios import get_scenario
from .state import GameState, create_state
from .team import add_random_developer, calculate_output
from .tuning import DEFAULT_TUNING, Tuning


def check_invariants(state: GameState, tuning: Tuning = DEFAULT_TUNING) -> None:
    assert 0.0 <= state.technical_debt <= tuning.max_technical_debt, state.technical_debt
    assert 0.0 <= state.reputation <= 1.0, state.reputation
    assert tuning.pmf_floor <= state.product_market_fit <= tuning.pmf_ceiling, state.product_market_fit
    for e in state.employees:
        assert tuning.min_motivation <= e.motivation <= tuning.max_motivation, e.motivation
    for c in state.user_cohorts:
        assert c.count > 0, c
    assert get_user_count(state) >= 0


def run_smoke(months: int = 240, base_seed: int = 42) -> GameState:
    """Month loop built from the bare models (no engine), so core is checked on its own."""
    tuning = DEFAULT_TUNING
    random = seeded_source("selfcheck", base_seed=base_seed)
    state = create_state(random, tuning, get_scenario("series_a"))
    for _ in range(4):
        add_random_developer(state, random, tuning)
    state.sales_spend = 40_000.0
    state.technical_debt_target = 0.9

    for m in range(1, months + 1):
        state.month_number += 1
        apply_development(state, calculate_output(state, tuning), tuning)
        if state.launched and state.market_ready_month is None:
            state.market_ready_month = state.month_number + 2
        apply_pmf_degradation(state, tuning)
        organic = calculate_organic_users(state, tuning)
        add_users(state, calculate_new_users(state, tuning) + organic, state.product_price)
        churn_rate = calculate_churn_rate(state, tuning)
        remove_users(state, calculate_churn(state, tuning))
        apply_finance(state)
        apply_motivation_drift(state, tuning)
        apply_reputation_drift(state, churn_rate, organic, tuning)
        advance_tenure(state)
        if m % 36 == 0:
            pivot(state, random, tuning)
            state.product_price += 25.0
        check_invariants(state, tuning)
    return state


if __name__ == "__main__":
    final = run_smoke()
    print("OK: core smoke run passed.")
    print("Final state:", {k: v for k, v in asdict(final).items() if k not in ("employees", "user_cohorts")})
    print("Users:", get_user_count(final), "Bankrupt:", final.bankrupt)
