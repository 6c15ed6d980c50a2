import warnings
from enum import Enum
from typing import Any, List, Literal, Optional, Union

import numpy as np

ProbabilityFunction = Union[Literal["pdf", "pmf", "logpdf", "logpmf", "cdf", "sf", "ppf", "isf"], Enum]

# Integer lattice limits for discrete supports
INT_MAX = int(np.iinfo(np.int32).max)
INT_MIN = int(np.iinfo(np.int32).min)

DEFAULTS = {
    "infinity_approximation": 1e6,
    "ratio": 200,
    "buffer": 0.2,
    "default_color": "C0",
    "local_seed": None,
    "global_seed": None,
    "warnings": "default",
}

def update_defaults(**kwargs: Any) -> None:
    """
    Update the global defaults.

    Parameters
    ----------
    infinity_approximation: float
        Large enough to be considered a finite infinity when plotting, defaults to `1e6`
    ratio: int
        The ratio of points plotted to distance between endpoints when displaying, defaults to `200`
    buffer: float
        The additional percent of the width to be plotted to both the right and left.
    default_color: str
        default matplotlib color to be used when plotting, defaults to `"C0"`
    local_seed: int
        The numeric value of the seed used by every new sampler or None if no local seed, defaults to `None`
    global_seed: int
        The numeric value of the seed of a generator shared by every new sampler or None if no global seed, defaults to `None`
    warnings: str
        The warning level to be displayed according to Python's `warning` module, defaults to `default`

    Returns
    -------
    None

    Notes
    -----
    As an example for the seeds, setting local seed will mean that every call to `generate_random_values` on a distribution returns the same sequence of values. Setting global seed will mean that calls to `generate_random_values` start from the same sequence of values but keep progressing through the shared generator.
    Using an invalid keyword will not raise an error; it is ignored with a warning.
    """

    for key in list(kwargs):
        if key not in DEFAULTS:
            warnings.warn(f"Ignoring unknown default {key!r}.")
            del kwargs[key]
    DEFAULTS.update(kwargs)
    if "global_seed" in kwargs and kwargs["global_seed"] is not None:
        DEFAULTS["global_seed"] = np.random.default_rng(kwargs["global_seed"])
    if "warnings" in kwargs:
        warnings.filterwarnings(DEFAULTS["warnings"])

class PFUNC(Enum):
    """Acceptable probability functions."""

    PDF: str = "pdf"
    PROBABILITY_DENSITY_FUNCTION: str = "pdf"
    DENSITY_FUNCTION: str = "pdf"

    LOGPDF: str = "logpdf"
    LOG_DENSITY_FUNCTION: str = "logpdf"

    PMF: str = "pmf"
    PROBABILITY_MASS_FUNCTION: str = "pmf"
    MASS_FUNCTION: str = "pmf"

    LOGPMF: str = "logpmf"
    LOG_MASS_FUNCTION: str = "logpmf"

    CDF: str = "cdf"
    CUMULATIVE_DISTRIBUTION_FUNCTION: str = "cdf"
    DISTRIBUTION_FUNCTION: str = "cdf"

    SF : str = "sf"
    SURVIVAL_FUNCTION: str = "sf"
    SURVIVOR_FUNCTION: str = "sf"
    RELIABILITY_FUNCTION: str = "sf"

    PPF: str = "ppf"
    PERCENT_POINT_FUNCTION: str = "ppf"
    PERCENTILE_FUNCTION: str = "ppf"
    QUANTILE_FUNCTION: str = "ppf"
    INVERSE_CUMULATIVE_DISTRIBUTION_FUNCTION: str = "ppf"
    INVERSE_DISTRIBUTION_FUNCTION: str = "ppf"

    ISF: str = "isf"
    INVERSE_SURVIVAL_FUNCTION: str = "isf"
    INVERSE_SURVIVOR_FUNCTION: str = "isf"
    INVERSE_RELIABILITY_FUNCTION: str = "isf"

class DistributionError(ValueError):
    """Base class for errors raised by a `Distribution`."""

class ParameterValidationError(DistributionError):
    """Raised when an invalid set of parameters are used to instantiate a `Distribution`."""

    def __init__(self, given: List[str], options: Optional[List[List[str]]]=None) -> None:
        """Create the error with the given parameters and optional parameters."""
        message = f"Failed to validate parameters. Given: {given}."
        if options is not None:
            message += f" Options: {options}."
        super().__init__(message)

class InvalidParameterError(DistributionError):
    """Raised when a parameter value violates its constraint."""

class NotStrictlyPositiveError(InvalidParameterError):

    def __init__(self, value: float) -> None:
        super().__init__(f"Number {value} is not greater than 0")

class NotStrictlyPositiveFiniteError(InvalidParameterError):

    def __init__(self, value: float) -> None:
        super().__init__(f"Number {value} is not greater than 0 and finite")

class NegativeError(InvalidParameterError):

    def __init__(self, value: float) -> None:
        super().__init__(f"Number {value} is negative")

class TooSmallError(InvalidParameterError):

    def __init__(self, value: float, minimum: float) -> None:
        super().__init__(f"{value} < {minimum}")

class TooLargeError(InvalidParameterError):

    def __init__(self, value: float, maximum: float) -> None:
        super().__init__(f"{value} > {maximum}")

class OutOfRangeError(InvalidParameterError):

    def __init__(self, value: float, lower: float, upper: float, open_lower: bool=False) -> None:
        left = "(" if open_lower else "["
        super().__init__(f"Number {value} is out of range {left}{lower}, {upper}]")

class InvalidRangeError(InvalidParameterError):
    """Raised when a lower bound exceeds an upper bound."""

    def __init__(self, lower: float, upper: float, strict: bool=False) -> None:
        relation = ">=" if strict else ">"
        super().__init__(f"Lower bound {lower} {relation} upper bound {upper}")
        self.lower = lower
        self.upper = upper

class InvalidProbabilityError(DistributionError):
    """Raised when a probability argument is outside [0, 1] or NaN."""

    def __init__(self, p: float) -> None:
        super().__init__(f"Not a probability: {p} is out of range [0, 1]")
        self.p = p

class SolverError(DistributionError):
    """Raised when the root solver cannot produce a root."""

class NoBracketingError(SolverError):

    def __init__(self, lower: float, upper: float, f_lower: float, f_upper: float) -> None:
        super().__init__(f"Function values at endpoints do not have different signs: f({lower})={f_lower}, f({upper})={f_upper}")

class ConvergenceError(SolverError):

    def __init__(self, iterations: int, flag: str) -> None:
        super().__init__(f"Failed to converge after {iterations} iterations: {flag}")

def check_probability(p: float) -> None:
    """Raise `InvalidProbabilityError` unless 0 <= p <= 1."""
    if 0 <= p <= 1:
        return
    # Out-of-range or NaN
    raise InvalidProbabilityError(p)

def is_finite_strictly_positive(x: float) -> bool:
    return 0 < x < np.inf
