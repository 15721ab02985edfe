"""
core.pmf
Product-market fit lifecycle.

PMF is hidden from the player: it only shows up through the effective cost
of acquiring users. It decays linearly from its peak toward the floor over
the current lifecycle, and a pivot re-rolls it at a price.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict

from .market import get_user_count, remove_users
from .rng import RandomSource
from .state import GameState, clamp
from .tuning import DEFAULT_TUNING, Tuning

logger = logging.getLogger(__name__)


def pmf_decay_rate(state: GameState, tuning: Tuning = DEFAULT_TUNING) -> float:
    months = max(1, int(state.pmf_lifecycle_months))
    return max(0.0, (float(state.pmf_peak_value) - tuning.pmf_floor) / months)


def apply_pmf_degradation(state: GameState, tuning: Tuning = DEFAULT_TUNING) -> float:
    state.product_market_fit = clamp(
        float(state.product_market_fit) - pmf_decay_rate(state, tuning),
        tuning.pmf_floor,
        tuning.pmf_ceiling,
    )
    return state.product_market_fit


def sample_pivot_pmf(current: float, branch_draw: float, sample_draw: float, tuning: Tuning = DEFAULT_TUNING) -> float:
    if branch_draw < tuning.pivot_improve_probability:
        span = tuning.pmf_ceiling - current
        if span <= 0:
            return tuning.pmf_ceiling
        return clamp(current + sample_draw * span, tuning.pmf_floor, tuning.pmf_ceiling)
    span = current - tuning.pmf_floor
    if span <= 0:
        return tuning.pmf_floor
    return clamp(tuning.pmf_floor + sample_draw * span, tuning.pmf_floor, tuning.pmf_ceiling)


def pivot(state: GameState, random: RandomSource, tuning: Tuning = DEFAULT_TUNING) -> Dict[str, Any]:
    """Re-roll PMF, shed most users, dent reputation, restart the market warm-up.

    Draw order: branch, PMF sample, warm-up delay, lifecycle months.
    """
    branch_draw = random()
    sample_draw = random()
    delay_draw = random()
    lifecycle_draw = random()

    old_pmf = float(state.product_market_fit)
    new_pmf = sample_pivot_pmf(old_pmf, branch_draw, sample_draw, tuning)

    users_before = get_user_count(state)
    removed = remove_users(state, int(math.floor(users_before * tuning.pivot_user_loss)))

    delay = int(delay_draw * tuning.market_delay_span) + tuning.market_delay_min

    state.product_market_fit = new_pmf
    state.pmf_peak_value = new_pmf
    state.pmf_lifecycle_months = tuning.lifecycle_min_months + int(lifecycle_draw * tuning.lifecycle_span_months)
    state.reputation = clamp(float(state.reputation) - tuning.pivot_reputation_penalty, 0.0, 1.0)
    state.market_ready_month = int(state.month_number) + delay

    logger.info(
        "pivot in month %s: removed %s of %s users, market ready in month %s",
        state.month_number,
        removed,
        users_before,
        state.market_ready_month,
    )
    return {
        "month": int(state.month_number),
        "improved": bool(branch_draw < tuning.pivot_improve_probability),
        "pmf_before": old_pmf,
        "pmf_after": float(new_pmf),
        "users_removed": int(removed),
        "users_remaining": get_user_count(state),
        "market_ready_month": int(state.market_ready_month),
        "pmf_lifecycle_months": int(state.pmf_lifecycle_months),
    }
