"""
core.team
Team output rules:
- per-employee productivity with a stepped onboarding ramp
- communication overhead (pairwise lines)
- hiring / firing operations
"""

from __future__ import annotations

from .rng import RandomSource
from .state import Employee, EmployeeSpec, GameState
from .tuning import DEFAULT_TUNING, Tuning


def onboarding_multiplier(months_employed: int, tuning: Tuning = DEFAULT_TUNING) -> float:
    steps = tuning.onboarding_steps
    m = max(0, int(months_employed))
    if m < len(steps):
        return float(steps[m])
    return 1.0


def calculate_employee_productivity(employee: Employee, tuning: Tuning = DEFAULT_TUNING) -> float:
    return (
        float(employee.base_productivity)
        * float(employee.motivation)
        * onboarding_multiplier(employee.months_employed, tuning)
    )


def communication_lines(n: int) -> int:
    n = max(0, int(n))
    return n * (n - 1) // 2


def communication_overhead(n: int, tuning: Tuning = DEFAULT_TUNING) -> float:
    """Output multiplier lost to coordination; 1.0 for a solo team."""
    return max(0.0, 1.0 - communication_lines(n) * tuning.overhead_per_line)


def calculate_output(state: GameState, tuning: Tuning = DEFAULT_TUNING) -> float:
    """Raw collective output this month, before the feature/clean-up split."""
    collective = sum(calculate_employee_productivity(e, tuning) for e in state.employees)
    debt_penalty = (1.0 - float(state.technical_debt)) ** 2
    return collective * communication_overhead(len(state.employees), tuning) * debt_penalty


def add_employee(state: GameState, spec: EmployeeSpec) -> Employee:
    emp = Employee(
        salary=float(spec.salary),
        base_productivity=float(spec.base_productivity),
        motivation=float(spec.motivation),
        months_employed=0,
        name=str(spec.name),
        role=str(spec.role),
    )
    state.employees.append(emp)
    return emp


def add_random_developer(
    state: GameState,
    random: RandomSource,
    tuning: Tuning = DEFAULT_TUNING,
    name: str = "",
) -> Employee:
    """Hire a developer at the standard salary (one draw for productivity)."""
    productivity = tuning.developer_productivity_min + random() * tuning.developer_productivity_span
    spec = EmployeeSpec(
        salary=float(tuning.developer_salary),
        base_productivity=float(productivity),
        name=name or f"Developer {len(state.employees) + 1}",
    )
    return add_employee(state, spec)


def remove_employee(state: GameState, index: int) -> Employee:
    if not 0 <= int(index) < len(state.employees):
        raise IndexError(f"No employee at index {index} (team size {len(state.employees)})")
    return state.employees.pop(int(index))
