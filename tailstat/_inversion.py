"""
Generic inverse probability and range probability algorithms.

These functions only use the public probability functions, moments and support bounds of a
distribution, so any `ContinuousDistribution` or `DiscreteDistribution` can rely on them when it has
no closed form.

The one-sided Chebyshev inequality P(X - mu >= k * sig) <= 1 / (1 + k^2) gives
F(mu + k * sig) >= k^2 / (1 + k^2). With k = sqrt(p / (1 - p)) the point mu + k * sig is an upper bound
for the root of F(x) = p. Applying the same argument to Y = -X, with k = sqrt((1 - p) / p),
mu - k * sig is a lower bound. Where the inequality does not apply the geometric progressions
1, 2, 4, ... and -1, -2, -4, ... bracket the root. The survival direction uses the same bounds
with p = 1 - q.
"""

from __future__ import annotations

import math
import sys
from typing import TYPE_CHECKING, Callable

import numpy as np

from ._solver import BrentSolver
from ._utils import INT_MIN, DistributionError, InvalidRangeError, is_finite_strictly_positive

if TYPE_CHECKING:
    from ._tdist_base import ContinuousDistribution, DiscreteDistribution

__all__ = [
    "range_probability", "inverse_probability", "search_plateau",
    "discrete_range_probability", "discrete_inverse_probability",
    "SOLVER_RELATIVE_ACCURACY", "SOLVER_ABSOLUTE_ACCURACY", "SOLVER_FUNCTION_VALUE_ACCURACY",
]

# Small CDF values need a small absolute accuracy or the search stops before reaching tiny roots.
# The function value accuracy is only tested at the bracket ends and the initial guess.
SOLVER_RELATIVE_ACCURACY = 1e-14
SOLVER_ABSOLUTE_ACCURACY = 1e-9
SOLVER_FUNCTION_VALUE_ACCURACY = 1e-15

MAX_VALUE = sys.float_info.max

def range_probability(dist: ContinuousDistribution, x0: float, x1: float) -> float:
    """
    Compute P(x0 <= X <= x1) choosing the cumulative or survival function by the median.

    In the upper domain the cumulative probabilities are close to 1 and their difference cancels;
    the survival probabilities keep their precision there.
    """
    if x0 > x1:
        raise InvalidRangeError(x0, x1)
    if x0 >= dist.median:
        return dist.survival_probability(x0) - dist.survival_probability(x1)
    return dist.cumulative_probability(x1) - dist.cumulative_probability(x0)

def inverse_probability(dist: ContinuousDistribution, p: float, q: float, complement: bool) -> float:
    """
    Find x such that cdf(x) = p, or sf(x) = q when `complement` is set.

    Parameters
    ----------
    dist: ContinuousDistribution
        The distribution to invert.
    p: float
        Cumulative probability, already validated.
    q: float
        Survival probability, 1 - p.
    complement: bool
        Set to invert the survival probability.

    Returns
    -------
    float
        The inverse. For a disconnected support this is the infimum of the plateau containing the root.
    """
    lower_bound = dist.support_lower_bound
    if p == 0:
        return lower_bound
    upper_bound = dist.support_upper_bound
    if q == 0:
        return upper_bound

    mu = dist.mean
    sig = math.sqrt(dist.variance) if dist.variance >= 0 else np.nan
    chebyshev_applies = math.isfinite(mu) and is_finite_strictly_positive(sig)

    if lower_bound == -np.inf:
        lower_bound = _finite_lower_bound(dist, p, q, complement, upper_bound, mu, sig, chebyshev_applies)
    if upper_bound == np.inf:
        upper_bound = _finite_upper_bound(dist, p, q, complement, lower_bound, mu, sig, chebyshev_applies)

    # The finite bracket may truncate an infinite support so the target can lie outside it
    if upper_bound == MAX_VALUE:
        if complement:
            if dist.survival_probability(upper_bound) > q:
                return dist.support_upper_bound
        elif dist.cumulative_probability(upper_bound) < p:
            return dist.support_upper_bound
    if lower_bound == -MAX_VALUE:
        if complement:
            if dist.survival_probability(lower_bound) < q:
                return dist.support_lower_bound
        elif dist.cumulative_probability(lower_bound) > p:
            return dist.support_lower_bound

    if complement:
        fun = lambda x: dist.survival_probability(x) - q
    else:
        fun = lambda x: dist.cumulative_probability(x) - p

    solver = BrentSolver(SOLVER_RELATIVE_ACCURACY, SOLVER_ABSOLUTE_ACCURACY, SOLVER_FUNCTION_VALUE_ACCURACY)
    # Do not use 0.5 * (lower_bound + upper_bound): it overflows for large bounds
    x = solver.find_root(fun, lower_bound, lower_bound + 0.5 * (upper_bound - lower_bound), upper_bound)

    if not dist.is_support_connected:
        return search_plateau(dist, complement, lower_bound, x)
    return x

def _finite_lower_bound(dist: ContinuousDistribution, p: float, q: float, complement: bool, upper_bound: float, mu: float, sig: float, chebyshev_applies: bool) -> float:
    lower_bound = mu - sig * math.sqrt(q / p) if chebyshev_applies else -np.inf
    if lower_bound == -np.inf:
        lower_bound = min(-1.0, upper_bound)
        if complement:
            while dist.survival_probability(lower_bound) < q:
                lower_bound *= 2
        else:
            while dist.cumulative_probability(lower_bound) >= p:
                lower_bound *= 2
        lower_bound = max(lower_bound, -MAX_VALUE)
    return lower_bound

def _finite_upper_bound(dist: ContinuousDistribution, p: float, q: float, complement: bool, lower_bound: float, mu: float, sig: float, chebyshev_applies: bool) -> float:
    upper_bound = mu + sig * math.sqrt(p / q) if chebyshev_applies else np.inf
    if upper_bound == np.inf:
        upper_bound = max(1.0, lower_bound)
        if complement:
            while dist.survival_probability(upper_bound) >= q:
                upper_bound *= 2
        else:
            while dist.cumulative_probability(upper_bound) < p:
                upper_bound *= 2
        upper_bound = min(upper_bound, MAX_VALUE)
    return upper_bound

def search_plateau(dist: ContinuousDistribution, complement: bool, lower: float, x: float) -> float:
    """
    Return the infimum y >= lower with the same cumulative (or survival) probability as x.

    A plateau narrower than the solver absolute accuracy is not searched.
    """
    # dx must not be below 1 ulp of x or the bisection cannot terminate
    dx = max(SOLVER_ABSOLUTE_ACCURACY, math.ulp(x))
    if x - dx < lower:
        return x
    fun = dist.survival_probability if complement else dist.cumulative_probability
    px = fun(x)
    if fun(x - dx) != px:
        return x
    # Move the lower end to the midpoint only while still below the plateau:
    # cdf(mid) < px, or sf(mid) > px
    if complement:
        below = lambda value: value > px
    else:
        below = lambda value: value < px
    upper_bound = x
    lower_bound = lower
    while upper_bound - lower_bound > dx:
        mid_point = 0.5 * (lower_bound + upper_bound)
        if below(fun(mid_point)):
            lower_bound = mid_point
        else:
            upper_bound = mid_point
    return upper_bound

def discrete_range_probability(dist: DiscreteDistribution, x0: int, x1: int) -> float:
    """Compute P(x0 < X <= x1) choosing the cumulative or survival function by the median."""
    if x0 > x1:
        raise InvalidRangeError(x0, x1)
    if x0 + 1 >= x1:
        return 0.0 if x0 == x1 else dist.probability_mass(x1)
    if x0 >= dist.median:
        return dist.survival_probability(x0) - dist.survival_probability(x1)
    return dist.cumulative_probability(x1) - dist.cumulative_probability(x0)

def discrete_inverse_probability(dist: DiscreteDistribution, p: float, q: float, complement: bool) -> int:
    """
    Find the smallest integer x with cdf(x) >= p, or sf(x) <= q when `complement` is set.

    The bracket (lower, upper] is narrowed with the Chebyshev inequality and then searched by
    bisection, or by summing probability mass when `dist.summation_search` is set.
    """
    lower = dist.support_lower_bound
    if p == 0:
        return lower
    upper = dist.support_upper_bound
    if q == 0:
        return upper

    # fun(x) >= 0 where the upper end of the bracket may be lowered to x
    if complement:
        fun = lambda x: _compare(q, _checked(dist.survival_probability(x)))
    else:
        fun = lambda x: _compare(_checked(dist.cumulative_probability(x)), p)

    if lower == INT_MIN:
        if fun(lower) >= 0:
            return lower
    else:
        # Ensures cdf(lower) < p and sf(lower) > q
        lower -= 1

    mu = dist.mean
    sig = math.sqrt(dist.variance) if dist.variance >= 0 else np.nan
    if math.isfinite(mu) and is_finite_strictly_positive(sig):
        tmp = mu - sig * math.sqrt(q / p)
        if tmp > lower:
            lower = math.ceil(tmp) - 1
        tmp = mu + sig * math.sqrt(p / q)
        if tmp < upper:
            # cdf(floor(tmp)) == cdf(tmp) >= p
            upper = math.floor(tmp)

    if dist.summation_search:
        return _sum_inverse_probability(dist, p, q, complement, lower, upper)
    return _bisect_inverse_probability(fun, lower, upper)

def _bisect_inverse_probability(fun: Callable[[int], int], lower: int, upper: int) -> int:
    # Assumes fun(lower) < 0 and fun(upper) >= 0
    while lower + 1 < upper:
        middle = (lower + upper) // 2
        if fun(middle) < 0:
            lower = middle
        else:
            upper = middle
    return upper

def _sum_inverse_probability(dist: DiscreteDistribution, p: float, q: float, complement: bool, lower: int, upper: int) -> int:
    # Choose the cheaper side of the bracket midpoint, then accumulate mass from that end:
    # the cdf upwards from lower, or the sf downwards from upper
    middle = lower + (upper - lower) // 2
    if complement:
        target_below_middle = _checked(dist.survival_probability(middle)) <= q
    else:
        target_below_middle = _checked(dist.cumulative_probability(middle)) >= p

    if target_below_middle:
        x = lower
        cdf = dist.cumulative_probability(x)
        while x < middle:
            x += 1
            cdf += dist.probability_mass(x)
            if cdf >= p:
                return x
        return middle

    x = upper
    sf = dist.survival_probability(x)
    while x > middle + 1:
        sf_below = sf + dist.probability_mass(x)
        if sf_below > q:
            return x
        sf = sf_below
        x -= 1
    return x

def _compare(a: float, b: float) -> int:
    return -1 if a < b else (1 if a > b else 0)

def _checked(probability: float) -> float:
    if math.isnan(probability):
        raise DistributionError("Probability function returned NaN during inversion")
    return probability
