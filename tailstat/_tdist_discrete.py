from __future__ import annotations

import math
from typing import Dict

import numpy as np
from scipy import special

from ._sampling import RandomState, Sampler, resolve_random_state
from ._special import generalized_harmonic, log_binomial_coefficient
from ._tdist_base import *
from ._utils import (
    INT_MAX,
    InvalidRangeError,
    NegativeError,
    NotStrictlyPositiveError,
    OutOfRangeError,
    TooLargeError,
    check_probability,
)

__all__ = [
    "BinomialDistribution", "GeometricDistribution", "HypergeometricDistribution",
    "NegativeBinomialDistribution", "PascalDistribution", "PoissonDistribution",
    "UniformDiscreteDistribution", "ZipfDistribution",
]

def _probability_parameter(p: float, open_lower: bool=False) -> float:
    if not (0 < p <= 1 if open_lower else 0 <= p <= 1):
        raise OutOfRangeError(p, 0, 1, open_lower=open_lower)
    return p

def _count(n: int) -> int:
    if n < 0:
        raise NegativeError(n)
    return int(n)

class BinomialDistribution(DiscreteDistribution):
    """A binomial discrete random variable."""

    options = [
        ["n", "p"],
        ["n", "q"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "n" in parameters:
            n = parameters.pop("n")
        if "p" in parameters:
            p = parameters.pop("p")
        elif "q" in parameters:
            p = 1 - _probability_parameter(parameters.pop("q"))
        self.n = _count(n)
        self.p = _probability_parameter(p)

    def probability_mass(self, x: int) -> float:
        return np.exp(self.log_probability_mass(x))

    def log_probability_mass(self, x: int) -> float:
        if x < 0 or x > self.n:
            return -np.inf
        if self.p == 0:
            return 0.0 if x == 0 else -np.inf
        if self.p == 1:
            return 0.0 if x == self.n else -np.inf
        return (log_binomial_coefficient(self.n, x)
                + x * np.log(self.p) + (self.n - x) * np.log1p(-self.p))

    def cumulative_probability(self, x: int) -> float:
        if x < 0:
            return 0.0
        if x >= self.n:
            return 1.0
        return special.betaincc(x + 1, self.n - x, self.p)

    def survival_probability(self, x: int) -> float:
        if x < 0:
            return 1.0
        if x >= self.n:
            return 0.0
        return special.betainc(x + 1, self.n - x, self.p)

    @property
    def mean(self) -> float:
        return self.n * self.p

    @property
    def variance(self) -> float:
        return self.n * self.p * (1 - self.p)

    @property
    def support_lower_bound(self) -> int:
        return 0 if self.p < 1 else self.n

    @property
    def support_upper_bound(self) -> int:
        return self.n if self.p > 0 else 0

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.binomial(self.n, self.p, size), discrete=True)

class GeometricDistribution(DiscreteDistribution):
    """The number of failures before the first success."""

    options = [
        ["p"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "p" in parameters:
            p = parameters.pop("p")
        self.p = _probability_parameter(p, open_lower=True)
        # log(1 - p), -inf when p == 1
        self._log1mp = np.log1p(-p) if p < 1 else -np.inf

    def probability_mass(self, x: int) -> float:
        if x < 0:
            return 0.0
        if self.p == 1:
            return 1.0 if x == 0 else 0.0
        return np.exp(x * self._log1mp) * self.p

    def log_probability_mass(self, x: int) -> float:
        if x < 0:
            return -np.inf
        if self.p == 1:
            return 0.0 if x == 0 else -np.inf
        return x * self._log1mp + np.log(self.p)

    def cumulative_probability(self, x: int) -> float:
        if x < 0:
            return 0.0
        if self.p == 1:
            return 1.0
        return -np.expm1((x + 1) * self._log1mp)

    def survival_probability(self, x: int) -> float:
        if x < 0:
            return 1.0
        if self.p == 1:
            return 0.0
        return np.exp((x + 1) * self._log1mp)

    def inverse_cumulative_probability(self, p: float) -> int:
        check_probability(p)
        if p == 0:
            return 0
        if p == 1:
            return self.support_upper_bound
        if self.p == 1:
            return 0
        x = self._clamp(math.ceil(np.log1p(-p) / self._log1mp - 1))
        # Correct for rounding in the closed form
        if x > 0 and self.cumulative_probability(x - 1) >= p:
            x -= 1
        elif self.cumulative_probability(x) < p:
            x += 1
        return x

    def inverse_survival_probability(self, p: float) -> int:
        check_probability(p)
        if p == 1:
            return 0
        if p == 0:
            return self.support_upper_bound
        if self.p == 1:
            return 0
        x = self._clamp(math.ceil(np.log(p) / self._log1mp - 1))
        if x > 0 and self.survival_probability(x - 1) <= p:
            x -= 1
        elif self.survival_probability(x) > p:
            x += 1
        return x

    def _clamp(self, x: int) -> int:
        return min(max(x, 0), INT_MAX)

    @property
    def mean(self) -> float:
        return (1 - self.p) / self.p

    @property
    def variance(self) -> float:
        return (1 - self.p) / (self.p * self.p)

    @property
    def support_lower_bound(self) -> int:
        return 0

    @property
    def support_upper_bound(self) -> int:
        return INT_MAX if self.p < 1 else 0

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        # numpy counts the trials including the success
        return Sampler(resolve_random_state(rng), lambda g, size: g.geometric(self.p, size) - 1, discrete=True)

class HypergeometricDistribution(DiscreteDistribution):
    """
    The number of successes in n draws without replacement from a population of N
    containing K successes.
    """

    options = [
        ["N", "K", "n"],
        ["population_size", "number_of_successes", "sample_size"],
    ]

    summation_search = True

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "N" in parameters and "K" in parameters and "n" in parameters:
            N = parameters.pop("N")
            K = parameters.pop("K")
            n = parameters.pop("n")
        elif "population_size" in parameters and "number_of_successes" in parameters and "sample_size" in parameters:
            N = parameters.pop("population_size")
            K = parameters.pop("number_of_successes")
            n = parameters.pop("sample_size")
        if N <= 0:
            raise NotStrictlyPositiveError(N)
        if K > N:
            raise TooLargeError(K, N)
        if n > N:
            raise TooLargeError(n, N)
        self.N = int(N)
        self.K = _count(K)
        self.n = _count(n)
        self._lower = max(0, self.n + self.K - self.N)
        self._upper = min(self.K, self.n)
        self._log_total = log_binomial_coefficient(self.N, self.n)

    def probability_mass(self, x: int) -> float:
        return np.exp(self.log_probability_mass(x))

    def log_probability_mass(self, x: int) -> float:
        if x < self._lower or x > self._upper:
            return -np.inf
        return (log_binomial_coefficient(self.K, x)
                + log_binomial_coefficient(self.N - self.K, self.n - x)
                - self._log_total)

    def _mass_between(self, x0: int, x1: int) -> float:
        # Sum of pmf over [x0, x1]
        return float(sum(self.probability_mass(x) for x in range(int(x0), int(x1) + 1)))

    def cumulative_probability(self, x: int) -> float:
        if x < self._lower:
            return 0.0
        if x >= self._upper:
            return 1.0
        return self._mass_between(self._lower, x)

    def survival_probability(self, x: int) -> float:
        if x < self._lower:
            return 1.0
        if x >= self._upper:
            return 0.0
        return self._mass_between(x + 1, self._upper)

    @property
    def mean(self) -> float:
        return self.n * self.K / self.N

    @property
    def variance(self) -> float:
        N = self.N
        if N == 1:
            return 0.0
        return (self.n * self.K * (N - self.K) * (N - self.n)) / (N * N * (N - 1.0))

    @property
    def support_lower_bound(self) -> int:
        return self._lower

    @property
    def support_upper_bound(self) -> int:
        return self._upper

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        if self.n == 0:
            return super().create_sampler(rng)
        return Sampler(
            resolve_random_state(rng),
            lambda g, size: g.hypergeometric(self.K, self.N - self.K, self.n, size),
            discrete=True,
        )

class NegativeBinomialDistribution(DiscreteDistribution):
    """The number of failures before the r-th success in Bernoulli trials with success probability p."""

    options = [
        ["r", "p"],
        ["n", "p"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "r" in parameters:
            r = parameters.pop("r")
        elif "n" in parameters:
            r = parameters.pop("n")
        if "p" in parameters:
            p = parameters.pop("p")
        if r <= 0:
            raise NotStrictlyPositiveError(r)
        self.r = int(r)
        self.p = _probability_parameter(p, open_lower=True)
        self._log_p_r = self.r * np.log(self.p)
        self._log1mp = np.log1p(-self.p) if self.p < 1 else -np.inf

    def probability_mass(self, x: int) -> float:
        return np.exp(self.log_probability_mass(x))

    def log_probability_mass(self, x: int) -> float:
        if x < 0:
            return -np.inf
        if x == 0:
            return self._log_p_r
        if self.p == 1:
            return -np.inf
        return log_binomial_coefficient(x + self.r - 1, self.r - 1) + self._log_p_r + x * self._log1mp

    def cumulative_probability(self, x: int) -> float:
        if x < 0:
            return 0.0
        return special.betainc(self.r, x + 1.0, self.p)

    def survival_probability(self, x: int) -> float:
        if x < 0:
            return 1.0
        return special.betaincc(self.r, x + 1.0, self.p)

    @property
    def mean(self) -> float:
        return self.r * (1 - self.p) / self.p

    @property
    def variance(self) -> float:
        return self.r * (1 - self.p) / (self.p * self.p)

    @property
    def support_lower_bound(self) -> int:
        return 0

    @property
    def support_upper_bound(self) -> int:
        return INT_MAX if self.p < 1 else 0

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.negative_binomial(self.r, self.p, size), discrete=True)

PascalDistribution = NegativeBinomialDistribution

class PoissonDistribution(DiscreteDistribution):
    """A Poisson discrete random variable"""

    options = [
        ["mu"],
        ["lambda_"],
        ["r", "t"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "mu" in parameters:
            mu = parameters.pop("mu")
        elif "lambda_" in parameters:
            mu = parameters.pop("lambda_")
        elif "r" in parameters and "t" in parameters:
            mu = parameters.pop("r") * parameters.pop("t")
        if not mu > 0:
            raise NotStrictlyPositiveError(mu)
        self.mu = mu

    def probability_mass(self, x: int) -> float:
        return np.exp(self.log_probability_mass(x))

    def log_probability_mass(self, x: int) -> float:
        if x < 0:
            return -np.inf
        return special.xlogy(x, self.mu) - self.mu - special.gammaln(x + 1.0)

    def cumulative_probability(self, x: int) -> float:
        if x < 0:
            return 0.0
        return special.gammaincc(x + 1.0, self.mu)

    def survival_probability(self, x: int) -> float:
        if x < 0:
            return 1.0
        return special.gammainc(x + 1.0, self.mu)

    @property
    def mean(self) -> float:
        return self.mu

    @property
    def variance(self) -> float:
        return self.mu

    @property
    def support_lower_bound(self) -> int:
        return 0

    @property
    def support_upper_bound(self) -> int:
        return INT_MAX

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.poisson(self.mu, size), discrete=True)

class UniformDiscreteDistribution(DiscreteDistribution):
    """A uniform discrete random variable on the integers a, a + 1, ..., b."""

    options = [
        ["a", "b"],
        ["low", "high"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "a" in parameters and "b" in parameters:
            a = parameters.pop("a")
            b = parameters.pop("b")
        elif "low" in parameters and "high" in parameters:
            # high is exclusive
            a = parameters.pop("low")
            b = parameters.pop("high") - 1
        if a > b:
            raise InvalidRangeError(a, b)
        self.a = int(a)
        self.b = int(b)
        self._n = self.b - self.a + 1

    def probability_mass(self, x: int) -> float:
        if x < self.a or x > self.b:
            return 0.0
        return 1 / self._n

    def log_probability_mass(self, x: int) -> float:
        if x < self.a or x > self.b:
            return -np.inf
        return -np.log(self._n)

    def cumulative_probability(self, x: int) -> float:
        if x < self.a:
            return 0.0
        if x >= self.b:
            return 1.0
        return (x - self.a + 1) / self._n

    def survival_probability(self, x: int) -> float:
        if x < self.a:
            return 1.0
        if x >= self.b:
            return 0.0
        return (self.b - x) / self._n

    def inverse_cumulative_probability(self, p: float) -> int:
        check_probability(p)
        if p == 0:
            return self.a
        x = self._clamp(self.a + math.ceil(p * self._n) - 1)
        # Correct for rounding in p * n
        if x > self.a and self.cumulative_probability(x - 1) >= p:
            x -= 1
        elif self.cumulative_probability(x) < p:
            x += 1
        return x

    def inverse_survival_probability(self, p: float) -> int:
        check_probability(p)
        if p == 1:
            return self.a
        x = self._clamp(self.b - math.floor(p * self._n))
        if x > self.a and self.survival_probability(x - 1) <= p:
            x -= 1
        elif self.survival_probability(x) > p:
            x += 1
        return x

    def _clamp(self, x: int) -> int:
        return min(max(x, self.a), self.b)

    @property
    def mean(self) -> float:
        return 0.5 * (self.a + self.b)

    @property
    def variance(self) -> float:
        return (self._n * self._n - 1) / 12

    @property
    def support_lower_bound(self) -> int:
        return self.a

    @property
    def support_upper_bound(self) -> int:
        return self.b

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.integers(self.a, self.b, size, endpoint=True), discrete=True)

class ZipfDistribution(DiscreteDistribution):
    """A Zipf distribution over the ranks 1, ..., n with exponent s."""

    options = [
        ["n", "s"],
        ["number_of_elements", "exponent"],
    ]

    summation_search = True

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "n" in parameters and "s" in parameters:
            n = parameters.pop("n")
            s = parameters.pop("s")
        elif "number_of_elements" in parameters and "exponent" in parameters:
            n = parameters.pop("number_of_elements")
            s = parameters.pop("exponent")
        if n <= 0:
            raise NotStrictlyPositiveError(n)
        if s < 0:
            raise NegativeError(s)
        self.n = int(n)
        self.s = s
        self._harmonic = generalized_harmonic(self.n, s)
        self._log_harmonic = np.log(self._harmonic)

    def probability_mass(self, x: int) -> float:
        if x <= 0 or x > self.n:
            return 0.0
        return np.exp(-self.s * np.log(x)) / self._harmonic

    def log_probability_mass(self, x: int) -> float:
        if x <= 0 or x > self.n:
            return -np.inf
        return -self.s * np.log(x) - self._log_harmonic

    def cumulative_probability(self, x: int) -> float:
        if x <= 0:
            return 0.0
        if x >= self.n:
            return 1.0
        return generalized_harmonic(x, self.s) / self._harmonic

    def survival_probability(self, x: int) -> float:
        if x <= 0:
            return 1.0
        if x >= self.n:
            return 0.0
        # Sum the upper ranks directly rather than 1 - cdf
        k = np.arange(self.n, x, -1, dtype=float)
        return float(np.sum(k ** -self.s)) / self._harmonic

    @property
    def mean(self) -> float:
        return generalized_harmonic(self.n, self.s - 1) / self._harmonic

    @property
    def variance(self) -> float:
        hs1 = generalized_harmonic(self.n, self.s - 1)
        hs2 = generalized_harmonic(self.n, self.s - 2)
        return (hs2 / self._harmonic) - (hs1 * hs1) / (self._harmonic * self._harmonic)

    @property
    def support_lower_bound(self) -> int:
        return 1

    @property
    def support_upper_bound(self) -> int:
        return self.n
