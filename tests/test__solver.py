import pytest

from tailstat._solver import BrentSolver
from tailstat._utils import NoBracketingError, SolverError


@pytest.fixture
def solver():
    return BrentSolver(1e-14, 1e-12, 1e-15)


class TestBrentSolverFindRoot:
    """Test bracketed root finding with an initial guess."""

    def test_root_in_lower_bracket(self, solver):
        root = solver.find_root(lambda x: x ** 3 - 2, 0.0, 3.0, 4.0)
        assert root == pytest.approx(2 ** (1 / 3), abs=1e-10)

    def test_root_in_upper_bracket(self, solver):
        root = solver.find_root(lambda x: x - 3, 0.0, 1.0, 4.0)
        assert root == pytest.approx(3.0, abs=1e-10)

    def test_initial_guess_is_root(self, solver):
        assert solver.find_root(lambda x: x - 1, 0.0, 1.0, 2.0) == 1.0

    def test_bracket_end_is_root(self, solver):
        assert solver.find_root(lambda x: x - 2, 0.0, 1.0, 2.0) == 2.0

    def test_no_bracketing(self, solver):
        with pytest.raises(NoBracketingError):
            solver.find_root(lambda x: x * x + 1, -1.0, 0.5, 2.0)

    def test_values_not_in_sequence(self, solver):
        with pytest.raises(SolverError):
            solver.find_root(lambda x: x, 2.0, 1.0, 3.0)

    def test_wide_bracket(self, solver):
        """Bisection steps must fit in the iteration limit for very wide brackets."""
        root = solver.find_root(lambda x: x - 1e-3, 0.0, 1e300, 1e301)
        assert root == pytest.approx(1e-3, abs=1e-10)
