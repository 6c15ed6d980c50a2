"""Bracketed root finding for the generic inverse probability functions."""

from typing import Callable

from scipy.optimize import brentq

from ._utils import ConvergenceError, NoBracketingError, SolverError

__all__ = ["BrentSolver"]

class BrentSolver(object):
    """
    Brent's method over a bracket with an initial guess.

    Parameters
    ----------
    relative_accuracy: float
        Relative tolerance on the root. Must be at least 4 machine epsilons.
    absolute_accuracy: float
        Absolute tolerance on the root.
    function_value_accuracy: float
        A point whose function value is within this of zero is accepted without a search.
        Only the bracket ends and the initial guess are tested.
    max_iterations: int, default=10000
        Iteration limit handed to `scipy.optimize.brentq`.
    """

    def __init__(self, relative_accuracy: float, absolute_accuracy: float, function_value_accuracy: float, max_iterations: int=10000) -> None:
        self.relative_accuracy = relative_accuracy
        self.absolute_accuracy = absolute_accuracy
        self.function_value_accuracy = function_value_accuracy
        self.max_iterations = max_iterations

    def find_root(self, func: Callable[[float], float], lower: float, initial: float, upper: float) -> float:
        """
        Find x in [lower, upper] such that func(x) is zero.

        Raises
        ------
        NoBracketingError
            If neither [lower, initial] nor [initial, upper] brackets a sign change.
        ConvergenceError
            If the iteration limit is reached.
        """
        if not lower <= initial <= upper:
            raise SolverError(f"Values are not in sequence: {lower}, {initial}, {upper}")

        f_initial = func(initial)
        if abs(f_initial) <= self.function_value_accuracy:
            return initial

        f_lower = func(lower)
        if abs(f_lower) <= self.function_value_accuracy:
            return lower
        if _opposite_signs(f_lower, f_initial):
            return self._brent(func, lower, initial)

        f_upper = func(upper)
        if abs(f_upper) <= self.function_value_accuracy:
            return upper
        if _opposite_signs(f_initial, f_upper):
            return self._brent(func, initial, upper)

        raise NoBracketingError(lower, upper, f_lower, f_upper)

    def _brent(self, func: Callable[[float], float], a: float, b: float) -> float:
        try:
            root, result = brentq(
                func, a, b,
                xtol=self.absolute_accuracy,
                rtol=self.relative_accuracy,
                maxiter=self.max_iterations,
                full_output=True,
                disp=False,
            )
        except ValueError as e:
            raise SolverError(str(e)) from e
        if not result.converged:
            raise ConvergenceError(result.iterations, result.flag)
        return float(root)

def _opposite_signs(a: float, b: float) -> bool:
    # Compare signs directly: the product of two tiny values can underflow to zero
    return (a < 0 < b) or (b < 0 < a)
