"""engine.pipeline

Core month flow (headless).

One tick advances the state by one month, in place, in a fixed phase order:
1) development  2) launch transition  3) market  4) finance  5) drift

This layer is UI-agnostic. `tick` returns a JSON-serialisable month log;
TickEngine adds single-writer locking around a caller-owned state.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

from core.development import apply_development
from core.drift import advance_tenure, apply_motivation_drift, apply_reputation_drift
from core.finance import apply_finance
from core.market import (
    add_users,
    calculate_churn,
    calculate_churn_rate,
    calculate_new_users,
    calculate_organic_users,
    cohort_summary,
    get_user_count,
    remove_users,
)
from core.pmf import apply_pmf_degradation
from core.pmf import pivot as pmf_pivot
from core.rng import RandomSource
from core.scenarios import ScenarioSpec
from core.state import Employee, EmployeeSpec, GameState, create_state, state_to_dict
from core.team import add_employee, add_random_developer, calculate_output, remove_employee
from core.tuning import DEFAULT_TUNING, Tuning

logger = logging.getLogger(__name__)


def _summary(state: GameState) -> Dict[str, Any]:
    return {
        "cash": float(state.cash),
        "users": get_user_count(state),
        "product_maturity": float(state.product_maturity),
        "technical_debt": float(state.technical_debt),
        "reputation": float(state.reputation),
        "product_market_fit": float(state.product_market_fit),
        "team_size": len(state.employees),
        "bankrupt": bool(state.bankrupt),
    }


def start_market_warmup(state: GameState, random: RandomSource, tuning: Tuning = DEFAULT_TUNING) -> bool:
    """Set the market-ready month the first time the product is launch-ready.

    Consumes one draw only when the warm-up is actually set.
    """
    if not state.launched or state.market_ready_month is not None:
        return False
    delay = int(random() * tuning.market_delay_span) + tuning.market_delay_min
    state.market_ready_month = int(state.month_number) + delay
    logger.info("launch in month %s, market ready in month %s", state.month_number, state.market_ready_month)
    return True


def tick(state: GameState, random: RandomSource, tuning: Tuning = DEFAULT_TUNING) -> Dict[str, Any]:
    """Advance one month in place. Returns the month log."""
    state.month_number = int(state.month_number) + 1
    month = int(state.month_number)
    before = _summary(state)
    was_bankrupt = bool(state.bankrupt)

    # 1) development
    raw = calculate_output(state, tuning)
    alloc = apply_development(state, raw, tuning)

    # 2) launch transition
    launched_now = start_market_warmup(state, random, tuning)

    # 3) market; both acquisition channels see pre-acquisition totals
    pmf = apply_pmf_degradation(state, tuning)
    paid = calculate_new_users(state, tuning)
    organic = calculate_organic_users(state, tuning)
    add_users(state, paid + organic, max(0.0, float(state.product_price)))
    churn_rate = calculate_churn_rate(state, tuning)
    churned = remove_users(state, calculate_churn(state, tuning))

    # 4) finance
    flow = apply_finance(state)
    if state.bankrupt and not was_bankrupt:
        logger.warning("bankrupt in month %s (cash %.2f)", month, state.cash)

    # 5) drift
    apply_motivation_drift(state, tuning)
    apply_reputation_drift(state, churn_rate, organic, tuning)
    advance_tenure(state)

    return {
        "month": month,
        "before": before,
        "after": _summary(state),
        "development": {
            "raw_output": alloc.raw_output,
            "clean_up_fraction": alloc.clean_up_fraction,
            "feature_output": alloc.feature_output,
            "clean_up_output": alloc.clean_up_output,
        },
        "launched_now": bool(launched_now),
        "market": {
            "product_market_fit": float(pmf),
            "paid_users": int(paid),
            "organic_users": int(organic),
            "churn_rate": float(churn_rate),
            "churned_users": int(churned),
            "cohorts": cohort_summary(state),
        },
        "finance": {
            "income": flow.income,
            "payroll": flow.payroll,
            "sales_spend": flow.sales_spend,
            "net": flow.net,
        },
    }


def pivot(state: GameState, random: RandomSource, tuning: Tuning = DEFAULT_TUNING) -> Dict[str, Any]:
    return pmf_pivot(state, random, tuning)


class TickEngine:
    """Owns tuning + random source and serialises every mutation of one state.

    The state itself stays caller-owned; readers may look at it between calls,
    but nothing else may write to it while a tick runs.
    """

    def __init__(self, state: GameState, random: RandomSource, tuning: Tuning = DEFAULT_TUNING) -> None:
        self.state = state
        self.random = random
        self.tuning = tuning
        self._lock = threading.Lock()

    @classmethod
    def new_game(
        cls,
        random: RandomSource,
        tuning: Tuning = DEFAULT_TUNING,
        scenario: Optional[ScenarioSpec] = None,
    ) -> "TickEngine":
        return cls(create_state(random, tuning, scenario), random, tuning)

    def tick(self) -> Dict[str, Any]:
        with self._lock:
            return tick(self.state, self.random, self.tuning)

    def pivot(self) -> Dict[str, Any]:
        with self._lock:
            return pivot(self.state, self.random, self.tuning)

    def add_employee(self, spec: EmployeeSpec) -> Employee:
        with self._lock:
            return add_employee(self.state, spec)

    def add_random_developer(self, name: str = "") -> Employee:
        with self._lock:
            return add_random_developer(self.state, self.random, self.tuning, name=name)

    def remove_employee(self, index: int) -> Employee:
        with self._lock:
            return remove_employee(self.state, index)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return state_to_dict(self.state)
