from typing import Callable

import pytest

from core.rng import seeded_source
from core.state import Employee, GameState, create_state


@pytest.fixture
def random():
    return seeded_source("tests", base_seed=7)


@pytest.fixture
def state(random) -> GameState:
    """Fresh run with the founder removed, so each test builds its own team."""
    s = create_state(random)
    s.employees = []
    return s


@pytest.fixture
def add_employees() -> Callable[..., None]:
    def _add(state: GameState, count: int, productivity: float, months_employed: int = 0) -> None:
        for _ in range(count):
            state.employees.append(
                Employee(salary=3000.0, base_productivity=productivity, motivation=1.0, months_employed=months_employed)
            )

    return _add
