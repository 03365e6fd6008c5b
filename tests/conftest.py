import pytest

from game.codespace import generate_code_space
from game.ruleset import DEFAULT_RULES, make_rules
from solver.solver_manager import MinimaxConfig, MinimaxSolver


@pytest.fixture
def classic_rules():
    return DEFAULT_RULES


@pytest.fixture(params=[(2, 3), (3, 3), (2, 4)], ids=lambda p: f"{p[0]}x{p[1]}")
def small_rules(request):
    return make_rules(*request.param)


@pytest.fixture
def small_space(small_rules):
    return generate_code_space(small_rules)


@pytest.fixture
def small_solver(small_rules):
    return MinimaxSolver(small_rules, config=MinimaxConfig(max_workers=1))


@pytest.fixture(scope="session")
def classic_solver():
    return MinimaxSolver(DEFAULT_RULES, config=MinimaxConfig(max_workers=1))
