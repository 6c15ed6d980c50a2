from __future__ import annotations

import abc
import math
import sys
import warnings
from enum import Enum
from types import FrameType
from typing import Any, Callable, Dict, List, Optional, Type, Union

import matplotlib.pyplot as plt
import numpy as np

import portion
from ._inversion import (
    discrete_inverse_probability,
    discrete_range_probability,
    inverse_probability,
    range_probability,
)
from ._sampling import InverseTransformSampler, RandomState, Sampler, resolve_random_state
from ._utils import DEFAULTS, INT_MAX, ParameterValidationError, ProbabilityFunction, check_probability

__all__ = [
    "Distribution",
    "DiscreteDistribution",
    "ContinuousDistribution",
    "Alias", "Event", "probability_of", "P",
]

class Distribution(abc.ABC):
    """The base class for a distribution. Do not instantiate this class."""

    options: Optional[List[List[str]]]
    # Maps a probability function abbreviation to a method name
    _pfuncs: Dict[str, str]

    def __init__(self, **parameters: float) -> None:
        """Create an independent random variable given the parameters as named keyword arguments."""
        given = list(parameters.keys())
        try:
            self.interpret_parameterization(parameters)
        except UnboundLocalError:
            raise ParameterValidationError(given, self.options)
        if len(parameters) > 0:
            raise ParameterValidationError(given, self.options)

    @abc.abstractmethod
    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        """Pop the recognized parameters, validate them and store them on the instance."""

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in vars(self).items() if not k.startswith("_"))
        return f"{type(self).__name__}({fields})"

    @property
    @abc.abstractmethod
    def support_lower_bound(self) -> float:
        pass

    @property
    @abc.abstractmethod
    def support_upper_bound(self) -> float:
        pass

    @property
    def is_support_connected(self) -> bool:
        """
        Whether all values between the support bounds are in the support.

        If False the generic inverse searches for the lowest point of a plateau in the
        cumulative (survival) probability.
        """
        return True

    @property
    def support(self) -> portion.interval.Interval:
        if not hasattr(self, "_cached_support"):
            self._cached_support = portion.closed(self.support_lower_bound, self.support_upper_bound)
        return self._cached_support

    @property
    def median(self) -> float:
        if not hasattr(self, "_cached_median"):
            self._cached_median = self.inverse_cumulative_probability(0.5)
        return self._cached_median

    @property
    @abc.abstractmethod
    def mean(self) -> float:
        pass

    @property
    @abc.abstractmethod
    def variance(self) -> float:
        pass

    @property
    def standard_deviation(self) -> float:
        return math.sqrt(self.variance)

    @abc.abstractmethod
    def cumulative_probability(self, x: float) -> float:
        pass

    def survival_probability(self, x: float) -> float:
        return 1.0 - self.cumulative_probability(x)

    @abc.abstractmethod
    def inverse_cumulative_probability(self, p: float) -> float:
        pass

    @abc.abstractmethod
    def inverse_survival_probability(self, p: float) -> float:
        pass

    @abc.abstractmethod
    def probability(self, x0: float, x1: float) -> float:
        pass

    @abc.abstractmethod
    def create_sampler(self, rng: RandomState=None) -> Sampler:
        pass

    def generate_random_values(self, n: int) -> np.ndarray:
        """Generate n random values."""
        return self.create_sampler().samples(n)

    def evaluate(self, pfunc: ProbabilityFunction, at: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """
        Evaluate a probability function at some value.

        Parameters
        ----------
        pfunc: ProbabilityFunction
            One of the supported probability function abbreviations. See `tailstat.PFUNC`.
        at: float or np.ndarray
            The value or values to evaluate at.

        Returns
        -------
        float or np.ndarray
            pfunc(at)
        """
        if isinstance(pfunc, Enum):
            pfunc = pfunc.value
        try:
            func = getattr(self, self._pfuncs[pfunc])
        except KeyError:
            msg = "Invalid pfunc abbreviation. See PFUNC."
            if pfunc in ("pmf", "logpmf"):
                msg += " Did you mean pdf instead of pmf?"
            elif pfunc in ("pdf", "logpdf"):
                msg += " Did you mean pmf instead of pdf?"
            raise ValueError(msg)
        if np.ndim(at) > 0:
            return np.vectorize(func, otypes=[float])(at)
        return func(at)

    @classmethod
    def to_alias(cls, *characterization: str) -> Alias:
        return Alias(cls, *characterization)

    @abc.abstractmethod
    def probability_between(self, a: float, b: float) -> float:
        pass

    @abc.abstractmethod
    def probability_at(self, a: float) -> float:
        pass

    @abc.abstractmethod
    def display(self, pfunc: ProbabilityFunction, add: bool=False, color: Optional[str]=None, **kwargs: Any) -> None:
        pass

    def _display_range(self) -> tuple:
        a, b = self.support_lower_bound, self.support_upper_bound
        if a == -np.inf:
            a = self.inverse_cumulative_probability(1 / DEFAULTS["infinity_approximation"])
        if b == np.inf or b == INT_MAX:
            b = self.inverse_survival_probability(1 / DEFAULTS["infinity_approximation"])
        return a, b

    def _event(self, other: Any, interval: Callable[[float], portion.interval.Interval]) -> Event:
        last, Event._last = Event._last, None
        if not isinstance(other, (int, float)):
            raise TypeError(f"Cannot compare objects of types {type(self)} and {type(other)}.")
        # Called from a comparison operator, so the comparing frame is two levels up
        site = _ComparisonSite(sys._getframe(2))
        event_interval = interval(other)
        if last is not None and last._tdist is self and last._site is not None and last._site.chains_to(site):
            event_interval = event_interval & last._interval
        event = Event(self, event_interval)
        event._site = site
        return event

    def __lt__(self, other: float) -> Event:
        return self._event(other, lambda x: portion.open(-np.inf, x))

    def __le__(self, other: float) -> Event:
        return self._event(other, lambda x: portion.openclosed(-np.inf, x))

    def __gt__(self, other: float) -> Event:
        return self._event(other, lambda x: portion.open(x, np.inf))

    def __ge__(self, other: float) -> Event:
        return self._event(other, lambda x: portion.closedopen(x, np.inf))

    def __ne__(self, other: float) -> Event:
        return self._event(other, lambda x: portion.open(-np.inf, x) | portion.open(x, np.inf))

    def __eq__(self, other: float) -> Event:
        return self._event(other, portion.singleton)

    __hash__ = object.__hash__

class DiscreteDistribution(Distribution):
    """The base class for discrete distributions. Do not instantiate this class."""

    _pfuncs = {
        "pmf": "probability_mass",
        "logpmf": "log_probability_mass",
        "cdf": "cumulative_probability",
        "sf": "survival_probability",
        "ppf": "inverse_cumulative_probability",
        "isf": "inverse_survival_probability",
    }

    # Invert by summing mass outwards from the bracket midpoint instead of bisecting
    summation_search = False

    @abc.abstractmethod
    def probability_mass(self, x: int) -> float:
        pass

    def log_probability_mass(self, x: int) -> float:
        p = self.probability_mass(x)
        return math.log(p) if p > 0 else -np.inf

    def probability(self, x0: int, x1: int) -> float:
        """Calculate the probability P(x0 < X <= x1)."""
        return discrete_range_probability(self, x0, x1)

    def inverse_cumulative_probability(self, p: float) -> int:
        """Return the smallest x such that P(X <= x) >= p."""
        check_probability(p)
        return discrete_inverse_probability(self, p, 1 - p, False)

    def inverse_survival_probability(self, p: float) -> int:
        """Return the smallest x such that P(X > x) <= p."""
        check_probability(p)
        return discrete_inverse_probability(self, 1 - p, p, True)

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return InverseTransformSampler(resolve_random_state(rng), self.inverse_cumulative_probability, discrete=True)

    def probability_between(self, a: float, b: float) -> float:
        """Calculate the probability P(a <= X <= b), including both a and b."""
        a = max(a, self.support_lower_bound)
        b = min(b, self.support_upper_bound)
        if a > b:
            return 0.0
        return self.probability(math.ceil(a) - 1, math.floor(b))

    def probability_at(self, k: float) -> float:
        """Calculate the probability P(X == k)."""
        if not float(k).is_integer():
            return 0.0
        return self.probability_mass(int(k))

    def display(self, pfunc: ProbabilityFunction, add: bool=False, color: Optional[str]=None, **kwargs: Any) -> None:
        """
        Display a probability function.

        Parameters
        ----------
        pfunc: ProbabilityFunction
            One of the supported probability function abbreviations. See `tailstat.PFUNC`.
        add: bool, default=False
            Whether or not to start or add to an existing plot. `plt.show()` must be called later.
        color: Optional[str], default=None
            What color to use. Defaults to matplotlib's default blue color.
        **kwargs
            Additional keyword arguments to pass to `plt.stem`.

        Returns
        -------
        None
        """
        a, b = self._display_range()
        x = np.arange(a, b + 1)
        y = self.evaluate(pfunc, x)
        markerline, stemlines, baseline = plt.stem(x, y, basefmt=" ", **kwargs)
        if color is None:
            color = DEFAULTS["default_color"]
        markerline.set_color(color)
        stemlines.set_color(color)
        if not add:
            plt.show()

class ContinuousDistribution(Distribution):
    """The base class for continuous distributions. Do not instantiate this class."""

    _pfuncs = {
        "pdf": "density",
        "logpdf": "log_density",
        "cdf": "cumulative_probability",
        "sf": "survival_probability",
        "ppf": "inverse_cumulative_probability",
        "isf": "inverse_survival_probability",
    }

    @abc.abstractmethod
    def density(self, x: float) -> float:
        pass

    def log_density(self, x: float) -> float:
        d = self.density(x)
        return math.log(d) if d > 0 else -np.inf

    def probability(self, x0: float, x1: float) -> float:
        """Calculate the probability P(x0 <= X <= x1)."""
        return range_probability(self, x0, x1)

    def inverse_cumulative_probability(self, p: float) -> float:
        """
        Return x such that P(X <= x) = p.

        The support lower bound is returned for p = 0 and the upper bound for p = 1. Otherwise the
        root of cdf(x) - p is searched between the support bounds, bracketed for efficiency.
        """
        check_probability(p)
        return inverse_probability(self, p, 1 - p, False)

    def inverse_survival_probability(self, p: float) -> float:
        """
        Return x such that P(X > x) = p.

        The support lower bound is returned for p = 1 and the upper bound for p = 0. Otherwise the
        root of sf(x) - p is searched between the support bounds, bracketed for efficiency.
        """
        check_probability(p)
        return inverse_probability(self, 1 - p, p, True)

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return InverseTransformSampler(resolve_random_state(rng), self.inverse_cumulative_probability)

    def probability_between(self, a: float, b: float) -> float:
        """Calculate the probability P(a <= X <= b), including both a and b."""
        return self.probability(a, b)

    def probability_at(self, x: float) -> float:
        """Calculate the probability P(X == x). Always returns 0."""
        warnings.warn("Trying to calculate the point probability of a continuous distribution.")
        return 0

    def display(self, pfunc: ProbabilityFunction, add: bool=False, color: Optional[str]=None, **kwargs: Any) -> None:
        """
        Display a probability function.

        Parameters
        ----------
        pfunc: ProbabilityFunction
            One of the supported probability function abbreviations. See `tailstat.PFUNC`.
        add: bool, default=False
            Whether or not to start or add to an existing plot. `plt.show()` must be called later.
        color: Optional[str], default=None
            What color to use. Defaults to matplotlib's default blue color.
        **kwargs
            Additional keyword arguments to pass to `plt.plot`.

        Returns
        -------
        None
        """
        if isinstance(pfunc, Enum):
            pfunc = pfunc.value
        if pfunc in ("ppf", "isf"):
            x = np.linspace(0, 1, DEFAULTS["ratio"] + 2)[1:-1]
        else:
            a, b = self._display_range()
            diff = b - a
            x = np.linspace(a - diff * DEFAULTS["buffer"], b + diff * DEFAULTS["buffer"], max(int(diff * DEFAULTS["ratio"]), 2))
        y = self.evaluate(pfunc, x)
        if color is None:
            color = DEFAULTS["default_color"]
        plt.plot(x, y, color=color, **kwargs)
        if not add:
            plt.show()

class Alias(object):
    """An alias for a distribution given the parameter convention."""

    def __init__(self, tdist: Type[Distribution], *characterization: str) -> None:
        """Create an alias given the class of distribution and parameter names in the order they will be passed."""
        self._tdist = tdist
        self._characterization = characterization

    def __call__(self, *parameters: float) -> Distribution:
        """Return a distribution interpreted by the alias."""
        return self._tdist(**dict(zip(self._characterization, parameters)))

class Event(object):
    """An event described by a distribution and interval."""

    # The event most recently tested for truth, pending a chained comparison
    _last: Optional[Event] = None
    # Where the comparison that built this event ran, None when constructed directly
    _site: Optional[_ComparisonSite] = None

    def __init__(self, tdist: Distribution, interval: portion.interval.Interval) -> None:
        """Create an event object."""
        self._tdist = tdist
        self._interval = interval

    def __bool__(self) -> bool:
        # A chained comparison a <= X <= b evaluates bool(a <= X) before building X <= b
        Event._last = self
        return True

class _ComparisonSite(object):
    """
    The frame, bytecode offset and source position of a comparison operator call.

    Both comparisons of a chain such as a <= X <= b carry the source position of the whole chain,
    and the right one runs at a later offset of the same frame. A truth test such as `if X > 1:`
    followed by an unrelated `X < 0` fails this check, so it never narrows the later event.
    """

    def __init__(self, frame: FrameType) -> None:
        self.frame = frame
        self.offset = frame.f_lasti
        positions = getattr(frame.f_code, "co_positions", None)
        if positions is None:
            # Columns are recorded from Python 3.11
            self.position = frame.f_lineno
        else:
            self.position = list(positions())[self.offset // 2]

    def chains_to(self, other: _ComparisonSite) -> bool:
        return other.frame is self.frame and other.position == self.position and other.offset > self.offset

def probability_of(evt: Event) -> float:
    """Return the probability of an event."""
    Event._last = None
    probability = 0

    for atomic in evt._interval._intervals:
        if atomic.lower > atomic.upper:
            continue
        elif atomic.lower == atomic.upper:
            probability += evt._tdist.probability_at(atomic.lower)
            continue
        lower = atomic.lower
        upper = atomic.upper
        if isinstance(evt._tdist, DiscreteDistribution):
            if atomic.left == portion.OPEN and float(lower).is_integer():
                lower += 1
            if atomic.right == portion.OPEN and float(upper).is_integer():
                upper -= 1
            if lower > upper:
                continue
        probability += evt._tdist.probability_between(lower, upper)
    return probability

def P(evt: Event) -> float:
    """Return the probability of an event."""
    return probability_of(evt)
