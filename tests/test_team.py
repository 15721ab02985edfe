import pytest

from core.rng import constant_source
from core.state import EmployeeSpec
from core.team import (
    add_employee,
    add_random_developer,
    calculate_employee_productivity,
    calculate_output,
    communication_lines,
    communication_overhead,
    onboarding_multiplier,
    remove_employee,
)
from core.tuning import DEFAULT_TUNING


@pytest.mark.parametrize(
    "months_employed, expected",
    [(0, 0.33), (1, 0.66), (2, 1.0), (24, 1.0)],
)
def test_onboarding_multiplier(state, add_employees, months_employed, expected):
    add_employees(state, 1, 1.0, months_employed)
    assert calculate_employee_productivity(state.employees[0]) == expected


def test_productivity_scales_with_base_and_motivation(state, add_employees):
    add_employees(state, 1, 0.8, 5)
    emp = state.employees[0]
    emp.motivation = 1.5
    assert calculate_employee_productivity(emp) == pytest.approx(1.2)


def test_custom_onboarding_schedule():
    tuning = DEFAULT_TUNING.with_overrides(onboarding_steps=(0.25, 0.5, 0.75))
    assert [onboarding_multiplier(m, tuning) for m in range(5)] == [0.25, 0.5, 0.75, 1.0, 1.0]


def test_output_zero_without_employees(state):
    assert calculate_output(state) == 0


def test_output_positive_for_onboarded_team(state, add_employees):
    add_employees(state, 7, 1.0, 2)
    assert calculate_output(state) > 0


@pytest.mark.parametrize("n, lines", [(0, 0), (1, 0), (2, 1), (7, 21), (11, 55)])
def test_communication_lines(n, lines):
    assert communication_lines(n) == lines


def test_communication_overhead_never_negative():
    assert communication_overhead(1) == 1.0
    assert communication_overhead(7) == pytest.approx(0.79)
    assert communication_overhead(20) == 0.0


def test_output_discounted_by_overhead_and_debt(state, add_employees):
    add_employees(state, 7, 1.0, 2)
    state.technical_debt = 0.2
    assert calculate_output(state) == pytest.approx(7 * 0.79 * 0.8 ** 2)


def test_add_employee_starts_at_zero_tenure(state):
    emp = add_employee(state, EmployeeSpec(salary=4000, base_productivity=1.1, motivation=0.9, name="Ada"))
    assert state.employees == [emp]
    assert emp.months_employed == 0
    assert emp.salary == 4000
    assert emp.name == "Ada"


def test_employee_spec_rejects_bad_values():
    with pytest.raises(ValueError):
        EmployeeSpec(salary=-1, base_productivity=1)
    with pytest.raises(ValueError):
        EmployeeSpec(salary=1000, base_productivity=1, role="astronaut")


def test_add_random_developer_uses_one_draw(state):
    emp = add_random_developer(state, constant_source(0.5))
    assert emp.base_productivity == pytest.approx(1.0)
    assert emp.salary == DEFAULT_TUNING.developer_salary
    assert emp.motivation == 1.0
    assert emp.months_employed == 0
    assert emp.name == "Developer 1"


def test_remove_employee(state, add_employees):
    add_employees(state, 3, 1.0, 2)
    state.employees[1].salary = 9999
    removed = remove_employee(state, 1)
    assert removed.salary == 9999
    assert len(state.employees) == 2
    with pytest.raises(IndexError):
        remove_employee(state, 5)
