"""
core.state
Core domain data models (UI independent).

GameState is the single mutable aggregate of a run. The caller owns it and
the engine mutates it in place; no alias may be mutated while a tick runs.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from .rng import RandomSource
from .scenarios import ScenarioSpec, get_scenario
from .tuning import DEFAULT_TUNING, Tuning


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


ROLES = ("developer", "qa", "pm", "designer", "sales")


@dataclass
class Employee:
    salary: float
    base_productivity: float
    motivation: float = 1.0          # 0.2..1.5
    months_employed: int = 0
    # cosmetic, never read by the simulation
    name: str = ""
    role: str = "developer"


@dataclass(frozen=True)
class EmployeeSpec:
    """What a caller provides when hiring; tenure always starts at zero."""

    salary: float
    base_productivity: float
    motivation: float = 1.0
    name: str = ""
    role: str = "developer"

    def __post_init__(self) -> None:
        if self.salary < 0:
            raise ValueError("salary must be >= 0")
        if self.base_productivity < 0:
            raise ValueError("base_productivity must be >= 0")
        if self.role not in ROLES:
            raise ValueError(f"unknown role: {self.role!r}")


@dataclass
class Cohort:
    """Users who signed up at the same locked-in price."""

    count: int
    signup_price: float


@dataclass
class GameState:
    """Everything a run needs between ticks.

    Knobs written directly by the caller between ticks: sales_spend,
    product_price, technical_debt_target. The core only reads them and
    clamps at the point of use.
    """

    cash: float
    launch_maturity: float
    product_market_fit: float        # 0.1..1.0
    pmf_peak_value: float
    pmf_lifecycle_months: int
    month_number: int = 0
    sales_spend: float = 0.0
    product_price: float = 100.0
    customer_acquisition_cost: float = 100.0
    product_maturity: float = 0.0
    market_ready_month: Optional[int] = None
    technical_debt: float = 0.0      # 0..0.5
    technical_debt_target: float = 0.1
    reputation: float = 0.5          # 0..1
    user_cohorts: List[Cohort] = field(default_factory=list)
    employees: List[Employee] = field(default_factory=list)
    bankrupt: bool = False

    @property
    def launched(self) -> bool:
        return self.product_maturity >= self.launch_maturity


def state_to_dict(s: GameState) -> Dict[str, Any]:
    """Plain snapshot for logs and exports."""
    d = asdict(s)
    d["user_count"] = int(sum(int(c.count) for c in s.user_cohorts))
    d["mrr"] = float(sum(int(c.count) * float(c.signup_price) for c in s.user_cohorts))
    return d


def create_state(
    random: RandomSource,
    tuning: Tuning = DEFAULT_TUNING,
    scenario: Optional[ScenarioSpec] = None,
) -> GameState:
    """Fresh run state.

    Draw order: PMF, PMF lifecycle months, launch maturity.
    """
    sc = scenario or get_scenario("")
    pmf = tuning.pmf_floor + random() * tuning.initial_pmf_span
    lifecycle = tuning.lifecycle_min_months + int(random() * tuning.lifecycle_span_months)
    launch = tuning.launch_maturity_min + random() * tuning.launch_maturity_span

    founders = [
        Employee(
            salary=float(tuning.developer_salary),
            base_productivity=1.0,
            motivation=1.0,
            months_employed=0,
            name=f"Founder {i + 1}" if sc.founders > 1 else "Founder",
        )
        for i in range(max(0, int(sc.founders)))
    ]

    return GameState(
        cash=float(sc.starting_cash),
        launch_maturity=float(launch),
        product_market_fit=float(clamp(pmf, tuning.pmf_floor, tuning.pmf_ceiling)),
        pmf_peak_value=float(clamp(pmf, tuning.pmf_floor, tuning.pmf_ceiling)),
        pmf_lifecycle_months=int(lifecycle),
        product_price=float(sc.product_price),
        customer_acquisition_cost=float(sc.customer_acquisition_cost),
        reputation=float(clamp(sc.reputation, 0.0, 1.0)),
        employees=founders,
    )
