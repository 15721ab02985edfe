"""
core.finance
Monthly cash flow: cohort revenue in, payroll and sales spend out.
"""

from __future__ import annotations

from dataclasses import dataclass

from .market import get_mrr
from .state import GameState


@dataclass(frozen=True)
class CashFlow:
    income: float
    payroll: float
    sales_spend: float
    net: float


def calculate_income(state: GameState) -> float:
    # cohort-locked prices, not the current product_price
    return get_mrr(state)


def calculate_payroll(state: GameState) -> float:
    return float(sum(float(e.salary) for e in state.employees))


def calculate_expenses(state: GameState) -> float:
    """Payroll plus sales spend; the sales budget is not spent before launch."""
    spend = max(0.0, float(state.sales_spend)) if state.launched else 0.0
    return calculate_payroll(state) + spend


def calculate_burn(state: GameState) -> float:
    return calculate_expenses(state) - calculate_income(state)


def runway_months(state: GameState) -> float:
    burn = calculate_burn(state)
    if burn <= 1:
        return 99.0
    return max(0.0, float(state.cash) / burn)


def apply_finance(state: GameState) -> CashFlow:
    income = calculate_income(state)
    payroll = calculate_payroll(state)
    spend = calculate_expenses(state) - payroll
    net = income - payroll - spend
    state.cash = float(state.cash) + net
    if state.cash <= 0:
        state.bankrupt = True
    return CashFlow(income=income, payroll=payroll, sales_spend=spend, net=net)
