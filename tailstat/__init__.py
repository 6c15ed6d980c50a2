"""
Name
----
tailstat

Description
-----------
tailstat is a univariate probability distribution module with accurate tails. Every distribution exposes its
probability functions, moments, inverse cumulative and survival functions and samplers. Distributions without
a closed-form inverse share a generic bracketed root search, written in Python on top of numpy and scipy.

Documentation
-------------
See the docstrings in the source code and `demo.py` for examples.
"""

from ._tdist_base import (
    ContinuousDistribution,
    DiscreteDistribution,
    Alias,
    Event,
    probability_of,
    P,
)
from ._tdist_continuous import __all__ as continuous_tdist
from ._tdist_continuous import *
from ._tdist_discrete import __all__ as discrete_tdist
from ._tdist_discrete import *
from ._sampling import Sampler
from ._utils import (
    PFUNC,
    update_defaults,
    DistributionError,
    ParameterValidationError,
    InvalidParameterError,
    InvalidRangeError,
    InvalidProbabilityError,
    SolverError,
)

__all__ = [
    # global
    "PFUNC", "update_defaults",
    # base classes
    "DiscreteDistribution", "ContinuousDistribution", "Sampler",
    # events and probability
    "Event", "probability_of", "P",
    # errors
    "DistributionError", "ParameterValidationError", "InvalidParameterError",
    "InvalidRangeError", "InvalidProbabilityError", "SolverError",
    # miscellaneous
    "Alias",
] + continuous_tdist + discrete_tdist
