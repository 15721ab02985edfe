"""
core.market
User acquisition and churn over price-locked cohorts.

Acquisition is gated twice: nothing before launch maturity, and nothing
before the market-ready month once one is set. Paid acquisition cost is
inflated by low product-market fit; organic growth scales with reputation;
churn grows with debt and shrinks with reputation.
"""

from __future__ import annotations

import math
from typing import List

from .state import Cohort, GameState
from .tuning import DEFAULT_TUNING, Tuning


# -------------------------
# Cohorts
# -------------------------


def get_user_count(state: GameState) -> int:
    return int(sum(int(c.count) for c in state.user_cohorts))


def get_mrr(state: GameState) -> float:
    return float(sum(int(c.count) * float(c.signup_price) for c in state.user_cohorts))


def add_users(state: GameState, count: int, signup_price: float) -> None:
    """Add users at a locked-in price, merging into an existing cohort at that price."""
    n = int(count)
    if n <= 0:
        return
    price = float(signup_price)
    for c in state.user_cohorts:
        if c.signup_price == price:
            c.count += n
            return
    state.user_cohorts.append(Cohort(count=n, signup_price=price))


def remove_users(state: GameState, count: int) -> int:
    """Remove users proportionally across cohorts; returns how many were removed.

    Pass 1 takes floor(target * share) from each cohort. Pass 2 sweeps the
    rounding remainder over cohorts in list order. Empty cohorts are pruned.
    """
    total = get_user_count(state)
    target = min(max(0, int(count)), total)
    if target <= 0 or total <= 0:
        return 0

    removed = 0
    for c in state.user_cohorts:
        take = min(c.count, (target * c.count) // total)
        c.count -= take
        removed += take

    for c in state.user_cohorts:
        if removed >= target:
            break
        take = min(c.count, target - removed)
        c.count -= take
        removed += take

    state.user_cohorts[:] = [c for c in state.user_cohorts if c.count > 0]
    return removed


# -------------------------
# Acquisition
# -------------------------


def is_market_open(state: GameState) -> bool:
    if state.product_maturity < state.launch_maturity:
        return False
    if state.market_ready_month is not None and state.month_number < int(state.market_ready_month):
        return False
    return True


def effective_acquisition_cost(state: GameState, tuning: Tuning = DEFAULT_TUNING) -> float:
    """Per-user cost the market actually charges; the caller only sees the base CAC."""
    cac = max(0.0, float(state.customer_acquisition_cost))
    price = max(0.0, float(state.product_price))
    pmf = max(tuning.pmf_floor, float(state.product_market_fit))
    return cac * (price / tuning.reference_price) / pmf


def calculate_new_users(state: GameState, tuning: Tuning = DEFAULT_TUNING) -> int:
    if not is_market_open(state):
        return 0
    spend = max(0.0, float(state.sales_spend))
    cost = effective_acquisition_cost(state, tuning)
    if spend <= 0 or cost <= 0:
        return 0
    return int(math.floor(spend / cost))


def calculate_organic_users(state: GameState, tuning: Tuning = DEFAULT_TUNING) -> int:
    if not is_market_open(state):
        return 0
    rate = tuning.organic_rate * max(0.0, float(state.reputation))
    return int(math.floor(get_user_count(state) * rate))


# -------------------------
# Churn
# -------------------------


def calculate_churn_rate(state: GameState, tuning: Tuning = DEFAULT_TUNING) -> float:
    rate = (
        tuning.base_churn
        + float(state.technical_debt) * tuning.churn_per_debt
        - float(state.reputation) * tuning.churn_per_reputation
    )
    return max(0.0, rate)


def calculate_churn(state: GameState, tuning: Tuning = DEFAULT_TUNING) -> int:
    return int(math.floor(get_user_count(state) * calculate_churn_rate(state, tuning)))


def cohort_summary(state: GameState) -> List[dict]:
    return [{"count": int(c.count), "signup_price": float(c.signup_price)} for c in state.user_cohorts]
