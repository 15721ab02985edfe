"""
core.scenarios
Starting-condition presets (runway / team / pricing).

Kept in core so balancing lives in one place, but UI can still display labels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class ScenarioSpec:
    key: str
    desc: str
    starting_cash: float
    founders: int
    product_price: float
    customer_acquisition_cost: float
    reputation: float = 0.5


DEFAULT_SCENARIOS: Dict[str, ScenarioSpec] = {
    "bootstrapped": ScenarioSpec(
        key="bootstrapped",
        desc="Solo founder, savings only. Every month of payroll counts.",
        starting_cash=100_000.0,
        founders=1,
        product_price=100.0,
        customer_acquisition_cost=100.0,
    ),
    "seed": ScenarioSpec(
        key="seed",
        desc="Two founders with a seed round. Room to hire before launch.",
        starting_cash=500_000.0,
        founders=2,
        product_price=100.0,
        customer_acquisition_cost=100.0,
    ),
    "series_a": ScenarioSpec(
        key="series_a",
        desc="Funded team, expensive market. Growth must pay for itself eventually.",
        starting_cash=2_000_000.0,
        founders=3,
        product_price=150.0,
        customer_acquisition_cost=180.0,
        reputation=0.6,
    ),
}

DEFAULT_SCENARIO_KEY = "bootstrapped"


def get_scenario(key: str) -> ScenarioSpec:
    return DEFAULT_SCENARIOS.get(key, DEFAULT_SCENARIOS[DEFAULT_SCENARIO_KEY])
