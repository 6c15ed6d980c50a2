from __future__ import annotations

from typing import Dict, Union

import numpy as np
from scipy import special

from ._sampling import RandomState, Sampler, resolve_random_state
from ._special import HALF_LOG_TWO_PI, LN_TWO, ROOT_TWO_DIV_PI, SQRT2, erf_difference
from ._tdist_base import *
from ._utils import (
    InvalidParameterError,
    InvalidRangeError,
    NotStrictlyPositiveError,
    NotStrictlyPositiveFiniteError,
    TooLargeError,
    TooSmallError,
    check_probability,
)

__all__ = [
    "BetaDistribution", "CauchyDistribution", "ChiSquaredDistribution", "ConstantContinuousDistribution",
    "ExponentialDistribution", "FDistribution", "FoldedNormalDistribution", "GammaDistribution",
    "GumbelDistribution", "HalfNormalDistribution", "LaplaceDistribution", "LevyDistribution",
    "LogCauchyDistribution", "LogNormalDistribution", "LogUniformDistribution", "LogisticDistribution",
    "NakagamiDistribution", "NormalDistribution", "ParetoDistribution", "TDistribution",
    "TrapezoidalDistribution", "TriangularDistribution", "TruncatedNormalDistribution",
    "UniformContinuousDistribution", "WeibullDistribution",
]

def _strictly_positive(value: float) -> float:
    # Also rejects NaN
    if not value > 0:
        raise NotStrictlyPositiveError(value)
    return value

class BetaDistribution(ContinuousDistribution):
    """A beta distribution."""

    options = [
        ["alpha", "beta"],
        ["a", "b"],
        ["mu", "nu"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "alpha" in parameters and "beta" in parameters:
            a = parameters.pop("alpha")
            b = parameters.pop("beta")
        elif "a" in parameters and "b" in parameters:
            a = parameters.pop("a")
            b = parameters.pop("b")
        elif "mu" in parameters and "nu" in parameters:
            mu = parameters.pop("mu")
            nu = parameters.pop("nu")
            a = mu * nu
            b = (1 - mu) * nu
        self.alpha = _strictly_positive(a)
        self.beta = _strictly_positive(b)
        self._log_beta = special.betaln(self.alpha, self.beta)

    def density(self, x: float) -> float:
        return np.exp(self.log_density(x))

    def log_density(self, x: float) -> float:
        if x < 0 or x > 1:
            return -np.inf
        if x == 0:
            # Return the limit rather than dividing by zero
            if self.alpha < 1:
                return np.inf
            return -self._log_beta if self.alpha == 1 else -np.inf
        if x == 1:
            if self.beta < 1:
                return np.inf
            return -self._log_beta if self.beta == 1 else -np.inf
        return (self.alpha - 1) * np.log(x) + (self.beta - 1) * np.log1p(-x) - self._log_beta

    def cumulative_probability(self, x: float) -> float:
        if x <= 0:
            return 0.0
        if x >= 1:
            return 1.0
        return special.betainc(self.alpha, self.beta, x)

    def survival_probability(self, x: float) -> float:
        if x <= 0:
            return 1.0
        if x >= 1:
            return 0.0
        return special.betaincc(self.alpha, self.beta, x)

    @property
    def mean(self) -> float:
        return self.alpha / (self.alpha + self.beta)

    @property
    def variance(self) -> float:
        s = self.alpha + self.beta
        return (self.alpha * self.beta) / (s * s * (s + 1))

    @property
    def support_lower_bound(self) -> float:
        return 0.0

    @property
    def support_upper_bound(self) -> float:
        return 1.0

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.beta(self.alpha, self.beta, size))

class CauchyDistribution(ContinuousDistribution):
    """A Cauchy distribution."""

    options = [
        ["x0", "gamma"],
        ["loc", "scale"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "x0" in parameters and "gamma" in parameters:
            loc = parameters.pop("x0")
            scale = parameters.pop("gamma")
        elif "loc" in parameters and "scale" in parameters:
            loc = parameters.pop("loc")
            scale = parameters.pop("scale")
        self.x0 = loc
        self.gamma = _strictly_positive(scale)

    def density(self, x: float) -> float:
        z = (x - self.x0) / self.gamma
        return 1 / (np.pi * self.gamma * (1 + z * z))

    def cumulative_probability(self, x: float) -> float:
        # atan2 keeps precision in the lower tail
        return np.arctan2(self.gamma, self.x0 - x) / np.pi

    def survival_probability(self, x: float) -> float:
        return np.arctan2(self.gamma, x - self.x0) / np.pi

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        if p == 0:
            return -np.inf
        if p == 1:
            return np.inf
        return self.x0 - self.gamma / np.tan(np.pi * p)

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        if p == 1:
            return -np.inf
        if p == 0:
            return np.inf
        return self.x0 + self.gamma / np.tan(np.pi * p)

    @property
    def median(self) -> float:
        return self.x0

    @property
    def mean(self) -> float:
        return np.nan

    @property
    def variance(self) -> float:
        return np.nan

    @property
    def support_lower_bound(self) -> float:
        return -np.inf

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: self.x0 + self.gamma * g.standard_cauchy(size))

class ChiSquaredDistribution(ContinuousDistribution):
    """A chi-squared distribution."""

    options = [
        ["k"],
        ["df"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "df" in parameters:
            df = parameters.pop("df")
        elif "k" in parameters:
            df = parameters.pop("k")
        self.df = _strictly_positive(df)
        self._half_df = 0.5 * self.df
        self._log_norm = self._half_df * LN_TWO + special.gammaln(self._half_df)

    def density(self, x: float) -> float:
        return np.exp(self.log_density(x))

    def log_density(self, x: float) -> float:
        if x < 0 or x == np.inf:
            return -np.inf
        if x == 0:
            if self.df < 2:
                return np.inf
            return -LN_TWO if self.df == 2 else -np.inf
        return (self._half_df - 1) * np.log(x) - 0.5 * x - self._log_norm

    def cumulative_probability(self, x: float) -> float:
        if x <= 0:
            return 0.0
        return special.gammainc(self._half_df, 0.5 * x)

    def survival_probability(self, x: float) -> float:
        if x <= 0:
            return 1.0
        return special.gammaincc(self._half_df, 0.5 * x)

    @property
    def mean(self) -> float:
        return self.df

    @property
    def variance(self) -> float:
        return 2 * self.df

    @property
    def support_lower_bound(self) -> float:
        return 0.0

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.chisquare(self.df, size))

class ConstantContinuousDistribution(ContinuousDistribution):
    """A degenerate distribution with all mass at a single value."""

    options = [
        ["value"],
        ["c"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "value" in parameters:
            value = parameters.pop("value")
        elif "c" in parameters:
            value = parameters.pop("c")
        if not np.isfinite(value):
            raise InvalidParameterError(f"Value {value} is not finite")
        self.value = value

    def density(self, x: float) -> float:
        return np.inf if x == self.value else 0.0

    def log_density(self, x: float) -> float:
        return np.inf if x == self.value else -np.inf

    def cumulative_probability(self, x: float) -> float:
        return 0.0 if x < self.value else 1.0

    def survival_probability(self, x: float) -> float:
        return 1.0 if x < self.value else 0.0

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        return self.value

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        return self.value

    @property
    def median(self) -> float:
        return self.value

    @property
    def mean(self) -> float:
        return self.value

    @property
    def variance(self) -> float:
        return 0.0

    @property
    def support_lower_bound(self) -> float:
        return self.value

    @property
    def support_upper_bound(self) -> float:
        return self.value

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: self.value if size is None else np.full(size, self.value))

class ExponentialDistribution(ContinuousDistribution):
    """An exponential continuous random variable."""

    options = [
        ["lambda_"],
        ["beta"],
        ["scale"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "lambda_" in parameters:
            scale = 1 / _strictly_positive(parameters.pop("lambda_"))
        elif "beta" in parameters:
            scale = parameters.pop("beta")
        elif "scale" in parameters:
            scale = parameters.pop("scale")
        self.scale = _strictly_positive(scale)
        self._log_scale = np.log(self.scale)

    def density(self, x: float) -> float:
        if x < 0:
            return 0.0
        return np.exp(-x / self.scale) / self.scale

    def log_density(self, x: float) -> float:
        if x < 0:
            return -np.inf
        return -x / self.scale - self._log_scale

    def cumulative_probability(self, x: float) -> float:
        if x <= 0:
            return 0.0
        return -np.expm1(-x / self.scale)

    def survival_probability(self, x: float) -> float:
        if x <= 0:
            return 1.0
        return np.exp(-x / self.scale)

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        if p == 1:
            return np.inf
        return -self.scale * np.log1p(-p)

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        if p == 0:
            return np.inf
        return -self.scale * np.log(p)

    @property
    def median(self) -> float:
        return self.scale * LN_TWO

    @property
    def mean(self) -> float:
        return self.scale

    @property
    def variance(self) -> float:
        return self.scale * self.scale

    @property
    def support_lower_bound(self) -> float:
        return 0.0

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.exponential(self.scale, size))

class FDistribution(ContinuousDistribution):
    """An F continuous random variable"""

    options = [
        ["dfn", "dfd"],
        ["df1", "df2"],
        ["d1", "d2"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "dfn" in parameters and "dfd" in parameters:
            dfn = parameters.pop("dfn")
            dfd = parameters.pop("dfd")
        elif "df1" in parameters and "df2" in parameters:
            dfn = parameters.pop("df1")
            dfd = parameters.pop("df2")
        elif "d1" in parameters and "d2" in parameters:
            dfn = parameters.pop("d1")
            dfd = parameters.pop("d2")
        self.dfn = _strictly_positive(dfn)
        self.dfd = _strictly_positive(dfd)
        self._log_norm = (0.5 * self.dfn * np.log(self.dfn) + 0.5 * self.dfd * np.log(self.dfd)
                          - special.betaln(0.5 * self.dfn, 0.5 * self.dfd))

    def density(self, x: float) -> float:
        return np.exp(self.log_density(x))

    def log_density(self, x: float) -> float:
        if x < 0 or x == np.inf:
            return -np.inf
        if x == 0:
            if self.dfn < 2:
                return np.inf
            return 0.0 if self.dfn == 2 else -np.inf
        n, m = self.dfn, self.dfd
        return self._log_norm + (0.5 * n - 1) * np.log(x) - 0.5 * (n + m) * np.log(m + n * x)

    def cumulative_probability(self, x: float) -> float:
        if x <= 0:
            return 0.0
        if x == np.inf:
            return 1.0
        n, m = self.dfn, self.dfd
        nx = n * x
        # Keep the incomplete beta argument below 0.5 to avoid cancellation in 1 - y
        if nx > m:
            return special.betaincc(0.5 * m, 0.5 * n, m / (m + nx))
        return special.betainc(0.5 * n, 0.5 * m, nx / (m + nx))

    def survival_probability(self, x: float) -> float:
        if x <= 0:
            return 1.0
        if x == np.inf:
            return 0.0
        n, m = self.dfn, self.dfd
        nx = n * x
        if nx > m:
            return special.betainc(0.5 * m, 0.5 * n, m / (m + nx))
        return special.betaincc(0.5 * n, 0.5 * m, nx / (m + nx))

    @property
    def mean(self) -> float:
        if self.dfd > 2:
            return self.dfd / (self.dfd - 2)
        return np.nan

    @property
    def variance(self) -> float:
        n, m = self.dfn, self.dfd
        if m > 4:
            m2 = m - 2
            return (2 * m * m * (n + m2)) / (n * m2 * m2 * (m - 4))
        return np.nan

    @property
    def support_lower_bound(self) -> float:
        return 0.0

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.f(self.dfn, self.dfd, size))

class FoldedNormalDistribution(ContinuousDistribution):
    """The distribution of |X| for a normal X with mean mu and standard deviation sigma."""

    options = [
        ["mu", "sigma"],
    ]

    @classmethod
    def of(cls, mu: float, sigma: float) -> FoldedNormalDistribution:
        """Create a folded normal distribution, using the half-normal form when mu is zero."""
        if mu == 0:
            return HalfNormalDistribution(sigma=sigma)
        return FoldedNormalDistribution(mu=mu, sigma=sigma)

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "mu" in parameters and "sigma" in parameters:
            mu = parameters.pop("mu")
            sigma = parameters.pop("sigma")
        self._set_parameters(mu, sigma)
        a = self.mu / self._sigma_sqrt2
        self._mean = self.sigma * ROOT_TWO_DIV_PI * np.exp(-a * a) + self.mu * special.erf(a)
        self._variance = self.mu * self.mu + self.sigma * self.sigma - self._mean * self._mean

    def _set_parameters(self, mu: float, sigma: float) -> None:
        self.mu = mu
        self.sigma = _strictly_positive(sigma)
        self._sigma_sqrt2 = self.sigma * SQRT2
        self._log_sigma_plus_half_log_2pi = np.log(self.sigma) + HALF_LOG_TWO_PI

    def density(self, x: float) -> float:
        if x < 0:
            return 0.0
        vm = (x - self.mu) / self.sigma
        vp = (x + self.mu) / self.sigma
        return (np.exp(-0.5 * vm * vm) + np.exp(-0.5 * vp * vp)) * np.exp(-self._log_sigma_plus_half_log_2pi)

    def probability(self, x0: float, x1: float) -> float:
        if x0 > x1:
            raise InvalidRangeError(x0, x1)
        if x0 <= 0:
            return self.cumulative_probability(x1)
        s = self._sigma_sqrt2
        return 0.5 * (erf_difference((x0 - self.mu) / s, (x1 - self.mu) / s)
                      + erf_difference((x0 + self.mu) / s, (x1 + self.mu) / s))

    def cumulative_probability(self, x: float) -> float:
        if x <= 0:
            return 0.0
        s = self._sigma_sqrt2
        return 0.5 * (special.erf((x - self.mu) / s) + special.erf((x + self.mu) / s))

    def survival_probability(self, x: float) -> float:
        if x <= 0:
            return 1.0
        s = self._sigma_sqrt2
        return 0.5 * (special.erfc((x - self.mu) / s) + special.erfc((x + self.mu) / s))

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def variance(self) -> float:
        return self._variance

    @property
    def support_lower_bound(self) -> float:
        return 0.0

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: np.abs(g.normal(self.mu, self.sigma, size)))

class HalfNormalDistribution(FoldedNormalDistribution):
    """A folded normal distribution with mu = 0."""

    options = [
        ["sigma"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "sigma" in parameters:
            sigma = parameters.pop("sigma")
        self._set_parameters(0.0, sigma)

    def density(self, x: float) -> float:
        return np.exp(self.log_density(x))

    def log_density(self, x: float) -> float:
        if x < 0:
            return -np.inf
        z = x / self.sigma
        return LN_TWO - 0.5 * z * z - self._log_sigma_plus_half_log_2pi

    def probability(self, x0: float, x1: float) -> float:
        if x0 > x1:
            raise InvalidRangeError(x0, x1)
        if x0 <= 0:
            return self.cumulative_probability(x1)
        return erf_difference(x0 / self._sigma_sqrt2, x1 / self._sigma_sqrt2)

    def cumulative_probability(self, x: float) -> float:
        if x <= 0:
            return 0.0
        return special.erf(x / self._sigma_sqrt2)

    def survival_probability(self, x: float) -> float:
        if x <= 0:
            return 1.0
        return special.erfc(x / self._sigma_sqrt2)

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        return self._sigma_sqrt2 * special.erfinv(p)

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        return self._sigma_sqrt2 * special.erfcinv(p)

    @property
    def mean(self) -> float:
        return self.sigma * ROOT_TWO_DIV_PI

    @property
    def variance(self) -> float:
        return self.sigma * self.sigma * (1 - 2 / np.pi)

class GammaDistribution(ContinuousDistribution):
    """A gamma distribution."""

    options = [
        ["alpha", "beta"],
        ["alpha", "theta"],
        ["k", "beta"],
        ["k", "theta"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "alpha" in parameters:
            k = parameters.pop("alpha")
        elif "k" in parameters:
            k = parameters.pop("k")
        if "beta" in parameters:
            theta = 1 / _strictly_positive(parameters.pop("beta"))
        elif "theta" in parameters:
            theta = parameters.pop("theta")
        self.k = _strictly_positive(k)
        self.theta = _strictly_positive(theta)
        self._log_norm = special.gammaln(self.k) + np.log(self.theta)

    def density(self, x: float) -> float:
        return np.exp(self.log_density(x))

    def log_density(self, x: float) -> float:
        if x < 0 or x == np.inf:
            return -np.inf
        if x == 0:
            if self.k < 1:
                return np.inf
            return -np.log(self.theta) if self.k == 1 else -np.inf
        y = x / self.theta
        return (self.k - 1) * np.log(y) - y - self._log_norm

    def cumulative_probability(self, x: float) -> float:
        if x <= 0:
            return 0.0
        return special.gammainc(self.k, x / self.theta)

    def survival_probability(self, x: float) -> float:
        if x <= 0:
            return 1.0
        return special.gammaincc(self.k, x / self.theta)

    @property
    def mean(self) -> float:
        return self.k * self.theta

    @property
    def variance(self) -> float:
        return self.k * self.theta * self.theta

    @property
    def support_lower_bound(self) -> float:
        return 0.0

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.gamma(self.k, self.theta, size))

class GumbelDistribution(ContinuousDistribution):
    """A Gumbel (maximum) distribution."""

    options = [
        ["mu", "beta"],
        ["loc", "scale"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "mu" in parameters and "beta" in parameters:
            mu = parameters.pop("mu")
            beta = parameters.pop("beta")
        elif "loc" in parameters and "scale" in parameters:
            mu = parameters.pop("loc")
            beta = parameters.pop("scale")
        self.mu = mu
        self.beta = _strictly_positive(beta)

    def density(self, x: float) -> float:
        return np.exp(self.log_density(x))

    def log_density(self, x: float) -> float:
        z = (x - self.mu) / self.beta
        return -(z + np.exp(-z)) - np.log(self.beta)

    def cumulative_probability(self, x: float) -> float:
        z = (x - self.mu) / self.beta
        return np.exp(-np.exp(-z))

    def survival_probability(self, x: float) -> float:
        z = (x - self.mu) / self.beta
        return -np.expm1(-np.exp(-z))

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        if p == 0:
            return -np.inf
        if p == 1:
            return np.inf
        return self.mu - self.beta * np.log(-np.log(p))

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        if p == 1:
            return -np.inf
        if p == 0:
            return np.inf
        return self.mu - self.beta * np.log(-np.log1p(-p))

    @property
    def median(self) -> float:
        return self.mu - self.beta * np.log(LN_TWO)

    @property
    def mean(self) -> float:
        return self.mu + np.euler_gamma * self.beta

    @property
    def variance(self) -> float:
        return (np.pi * np.pi / 6) * self.beta * self.beta

    @property
    def support_lower_bound(self) -> float:
        return -np.inf

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.gumbel(self.mu, self.beta, size))

class LaplaceDistribution(ContinuousDistribution):
    """A Laplace distribution."""

    options = [
        ["mu", "b"],
        ["loc", "scale"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "loc" in parameters and "scale" in parameters:
            mu = parameters.pop("loc")
            b = parameters.pop("scale")
        elif "mu" in parameters and "b" in parameters:
            mu = parameters.pop("mu")
            b = parameters.pop("b")
        self.mu = mu
        self.b = _strictly_positive(b)

    def density(self, x: float) -> float:
        return np.exp(-np.abs(x - self.mu) / self.b) / (2 * self.b)

    def log_density(self, x: float) -> float:
        return -np.abs(x - self.mu) / self.b - np.log(2 * self.b)

    def cumulative_probability(self, x: float) -> float:
        if x <= self.mu:
            return 0.5 * np.exp((x - self.mu) / self.b)
        return 1.0 - 0.5 * np.exp((self.mu - x) / self.b)

    def survival_probability(self, x: float) -> float:
        if x <= self.mu:
            return 1.0 - 0.5 * np.exp((x - self.mu) / self.b)
        return 0.5 * np.exp((self.mu - x) / self.b)

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        if p == 0:
            return -np.inf
        if p == 1:
            return np.inf
        if p <= 0.5:
            return self.mu + self.b * np.log(2 * p)
        return self.mu - self.b * np.log(2 * (1 - p))

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        if p == 1:
            return -np.inf
        if p == 0:
            return np.inf
        if p <= 0.5:
            return self.mu - self.b * np.log(2 * p)
        return self.mu + self.b * np.log(2 * (1 - p))

    @property
    def median(self) -> float:
        return self.mu

    @property
    def mean(self) -> float:
        return self.mu

    @property
    def variance(self) -> float:
        return 2 * self.b * self.b

    @property
    def support_lower_bound(self) -> float:
        return -np.inf

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.laplace(self.mu, self.b, size))

class LevyDistribution(ContinuousDistribution):
    """A Levy distribution."""

    options = [
        ["mu", "c"],
        ["loc", "scale"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "mu" in parameters and "c" in parameters:
            mu = parameters.pop("mu")
            c = parameters.pop("c")
        elif "loc" in parameters and "scale" in parameters:
            mu = parameters.pop("loc")
            c = parameters.pop("scale")
        self.mu = mu
        self.c = _strictly_positive(c)
        self._half_c = 0.5 * self.c

    def density(self, x: float) -> float:
        # x == mu is the limit 0 * inf; return 0
        if x <= self.mu or x == np.inf:
            return 0.0
        delta = x - self.mu
        f = self._half_c / delta
        return np.sqrt(f / np.pi) * np.exp(-f) / delta

    def log_density(self, x: float) -> float:
        if x <= self.mu or x == np.inf:
            return -np.inf
        delta = x - self.mu
        f = self._half_c / delta
        return 0.5 * np.log(f / np.pi) - f - np.log(delta)

    def cumulative_probability(self, x: float) -> float:
        if x <= self.mu:
            return 0.0
        return special.erfc(np.sqrt(self._half_c / (x - self.mu)))

    def survival_probability(self, x: float) -> float:
        if x <= self.mu:
            return 1.0
        return special.erf(np.sqrt(self._half_c / (x - self.mu)))

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        if p == 0:
            return self.mu
        if p == 1:
            return np.inf
        t = special.erfcinv(p)
        return self.mu + self._half_c / (t * t)

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        if p == 1:
            return self.mu
        if p == 0:
            return np.inf
        t = special.erfinv(p)
        return self.mu + self._half_c / (t * t)

    @property
    def mean(self) -> float:
        return np.inf

    @property
    def variance(self) -> float:
        return np.inf

    @property
    def support_lower_bound(self) -> float:
        return self.mu

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        def draw(g: np.random.Generator, size: Union[int, None]) -> Union[float, np.ndarray]:
            z = g.standard_normal(size)
            return self.mu + self.c / (z * z)
        return Sampler(resolve_random_state(rng), draw)

class LogCauchyDistribution(ContinuousDistribution):
    """A log-Cauchy distribution: exp(X) for a Cauchy X."""

    options = [
        ["mu", "sigma"],
        ["location", "scale"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "mu" in parameters and "sigma" in parameters:
            mu = parameters.pop("mu")
            sigma = parameters.pop("sigma")
        elif "location" in parameters and "scale" in parameters:
            mu = parameters.pop("location")
            sigma = parameters.pop("scale")
        self.mu = mu
        self.sigma = _strictly_positive(sigma)

    def density(self, x: float) -> float:
        if x <= 0 or x == np.inf:
            return 0.0
        d = np.log(x) - self.mu
        return self.sigma / (np.pi * x * (d * d + self.sigma * self.sigma))

    def cumulative_probability(self, x: float) -> float:
        if x <= 0:
            return 0.0
        return np.arctan2(self.sigma, self.mu - np.log(x)) / np.pi

    def survival_probability(self, x: float) -> float:
        if x <= 0:
            return 1.0
        return np.arctan2(self.sigma, np.log(x) - self.mu) / np.pi

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        if p == 0:
            return 0.0
        if p == 1:
            return np.inf
        return np.exp(self.mu - self.sigma / np.tan(np.pi * p))

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        if p == 1:
            return 0.0
        if p == 0:
            return np.inf
        return np.exp(self.mu + self.sigma / np.tan(np.pi * p))

    @property
    def median(self) -> float:
        return np.exp(self.mu)

    @property
    def mean(self) -> float:
        return np.inf

    @property
    def variance(self) -> float:
        return np.inf

    @property
    def support_lower_bound(self) -> float:
        return 0.0

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: np.exp(self.mu + self.sigma * g.standard_cauchy(size)))

class LogNormalDistribution(ContinuousDistribution):
    """A log-normal distribution: exp(X) for a normal X with mean mu and standard deviation sigma."""

    options = [
        ["mu", "sigma"],
        ["scale", "shape"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "mu" in parameters and "sigma" in parameters:
            mu = parameters.pop("mu")
            sigma = parameters.pop("sigma")
        elif "scale" in parameters and "shape" in parameters:
            mu = parameters.pop("scale")
            sigma = parameters.pop("shape")
        self.mu = mu
        self.sigma = _strictly_positive(sigma)
        self._log_sigma_plus_half_log_2pi = np.log(self.sigma) + HALF_LOG_TWO_PI

    def density(self, x: float) -> float:
        if x <= 0 or x == np.inf:
            return 0.0
        return np.exp(self.log_density(x))

    def log_density(self, x: float) -> float:
        if x <= 0 or x == np.inf:
            return -np.inf
        log_x = np.log(x)
        z = (log_x - self.mu) / self.sigma
        return -0.5 * z * z - (self._log_sigma_plus_half_log_2pi + log_x)

    def cumulative_probability(self, x: float) -> float:
        if x <= 0:
            return 0.0
        return 0.5 * special.erfc(-(np.log(x) - self.mu) / (self.sigma * SQRT2))

    def survival_probability(self, x: float) -> float:
        if x <= 0:
            return 1.0
        return 0.5 * special.erfc((np.log(x) - self.mu) / (self.sigma * SQRT2))

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        return np.exp(self.mu + self.sigma * special.ndtri(p))

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        return np.exp(self.mu - self.sigma * special.ndtri(p))

    @property
    def median(self) -> float:
        return np.exp(self.mu)

    @property
    def mean(self) -> float:
        return np.exp(self.mu + 0.5 * self.sigma * self.sigma)

    @property
    def variance(self) -> float:
        ss = self.sigma * self.sigma
        return np.expm1(ss) * np.exp(2 * self.mu + ss)

    @property
    def support_lower_bound(self) -> float:
        return 0.0

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.lognormal(self.mu, self.sigma, size))

class LogUniformDistribution(ContinuousDistribution):
    """A log-uniform (reciprocal) distribution on [a, b]."""

    options = [
        ["a", "b"],
        ["lower", "upper"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "a" in parameters and "b" in parameters:
            a = parameters.pop("a")
            b = parameters.pop("b")
        elif "lower" in parameters and "upper" in parameters:
            a = parameters.pop("lower")
            b = parameters.pop("upper")
        if not a < b:
            raise InvalidRangeError(a, b, strict=True)
        if not np.isfinite(b - a):
            raise InvalidParameterError(f"Range {b - a} is not finite")
        self.a = _strictly_positive(a)
        self.b = b
        self._log_a = np.log(a)
        self._log_b = np.log(b)
        self._log_b_minus_log_a = self._log_b - self._log_a

    def density(self, x: float) -> float:
        if x < self.a or x > self.b:
            return 0.0
        return 1 / (x * self._log_b_minus_log_a)

    def log_density(self, x: float) -> float:
        if x < self.a or x > self.b:
            return -np.inf
        return -np.log(x) - np.log(self._log_b_minus_log_a)

    def cumulative_probability(self, x: float) -> float:
        if x <= self.a:
            return 0.0
        if x >= self.b:
            return 1.0
        return (np.log(x) - self._log_a) / self._log_b_minus_log_a

    def survival_probability(self, x: float) -> float:
        if x <= self.a:
            return 1.0
        if x >= self.b:
            return 0.0
        return (self._log_b - np.log(x)) / self._log_b_minus_log_a

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        return self._clip(np.exp(self._log_a + p * self._log_b_minus_log_a))

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        return self._clip(np.exp(self._log_b - p * self._log_b_minus_log_a))

    def _clip(self, x: float) -> float:
        return min(max(x, self.a), self.b)

    @property
    def mean(self) -> float:
        return (self.b - self.a) / self._log_b_minus_log_a

    @property
    def variance(self) -> float:
        a, b = self.a, self.b
        d = -self._log_b_minus_log_a
        return (a - b) * (a * (d - 2) + b * (d + 2)) / (2 * d * d)

    @property
    def support_lower_bound(self) -> float:
        return self.a

    @property
    def support_upper_bound(self) -> float:
        return self.b

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: np.exp(g.uniform(self._log_a, self._log_b, size)))

class LogisticDistribution(ContinuousDistribution):
    """A logistic distribution."""

    options = [
        ["loc", "scale"],
        ["mu", "s"],
        ["mu", "sigma"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "loc" in parameters and "scale" in parameters:
            loc = parameters.pop("loc")
            scale = parameters.pop("scale")
        elif "mu" in parameters:
            loc = parameters.pop("mu")
            if "s" in parameters:
                scale = parameters.pop("s")
            elif "sigma" in parameters:
                scale = np.sqrt(3) / np.pi * parameters.pop("sigma")
        self.mu = loc
        self.s = _strictly_positive(scale)

    def density(self, x: float) -> float:
        e = np.exp(-np.abs(x - self.mu) / self.s)
        return e / (self.s * (1 + e) * (1 + e))

    def cumulative_probability(self, x: float) -> float:
        return special.expit((x - self.mu) / self.s)

    def survival_probability(self, x: float) -> float:
        return special.expit((self.mu - x) / self.s)

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        return self.mu + self.s * special.logit(p)

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        return self.mu - self.s * special.logit(p)

    @property
    def median(self) -> float:
        return self.mu

    @property
    def mean(self) -> float:
        return self.mu

    @property
    def variance(self) -> float:
        return (np.pi * self.s) ** 2 / 3

    @property
    def support_lower_bound(self) -> float:
        return -np.inf

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.logistic(self.mu, self.s, size))

class NakagamiDistribution(ContinuousDistribution):
    """A Nakagami distribution with shape mu and spread omega."""

    options = [
        ["mu", "omega"],
        ["m", "omega"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "mu" in parameters and "omega" in parameters:
            mu = parameters.pop("mu")
            omega = parameters.pop("omega")
        elif "m" in parameters and "omega" in parameters:
            mu = parameters.pop("m")
            omega = parameters.pop("omega")
        self.mu = _strictly_positive(mu)
        self.omega = _strictly_positive(omega)
        self._log_prefactor = LN_TWO + np.log(mu) * mu - special.gammaln(mu) - np.log(omega) * mu
        ratio = np.exp(special.gammaln(mu + 0.5) - special.gammaln(mu))
        self._mean = ratio * np.sqrt(omega / mu)
        self._variance = omega - self._mean * self._mean

    def density(self, x: float) -> float:
        return np.exp(self.log_density(x))

    def log_density(self, x: float) -> float:
        if x < 0 or x == np.inf:
            return -np.inf
        if x == 0:
            exponent = 2 * self.mu - 1
            if exponent < 0:
                return np.inf
            return self._log_prefactor if exponent == 0 else -np.inf
        return self._log_prefactor + np.log(x) * (2 * self.mu - 1) - (self.mu * x * x / self.omega)

    def cumulative_probability(self, x: float) -> float:
        if x <= 0:
            return 0.0
        return special.gammainc(self.mu, self.mu * x * x / self.omega)

    def survival_probability(self, x: float) -> float:
        if x <= 0:
            return 1.0
        return special.gammaincc(self.mu, self.mu * x * x / self.omega)

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def variance(self) -> float:
        return self._variance

    @property
    def support_lower_bound(self) -> float:
        return 0.0

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: np.sqrt(g.gamma(self.mu, self.omega / self.mu, size)))

class NormalDistribution(ContinuousDistribution):
    """A normal continuous random variable"""

    options = [
        ["loc", "scale"],
        ["mu", "sigma"],
        ["mean", "variance"],
        ["mu", "tau"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "loc" in parameters and "scale" in parameters:
            loc = parameters.pop("loc")
            scale = parameters.pop("scale")
        elif "mu" in parameters:
            loc = parameters.pop("mu")
            if "sigma" in parameters:
                scale = parameters.pop("sigma")
            elif "tau" in parameters:
                scale = 1 / np.sqrt(_strictly_positive(parameters.pop("tau")))
        elif "mean" in parameters and "variance" in parameters:
            loc = parameters.pop("mean")
            scale = np.sqrt(_strictly_positive(parameters.pop("variance")))
        self.mu = loc
        self.sigma = _strictly_positive(scale)
        self._sigma_sqrt2 = self.sigma * SQRT2
        self._log_sigma_plus_half_log_2pi = np.log(self.sigma) + HALF_LOG_TWO_PI

    def density(self, x: float) -> float:
        return np.exp(self.log_density(x))

    def log_density(self, x: float) -> float:
        z = (x - self.mu) / self.sigma
        return -0.5 * z * z - self._log_sigma_plus_half_log_2pi

    def probability(self, x0: float, x1: float) -> float:
        if x0 > x1:
            raise InvalidRangeError(x0, x1)
        return 0.5 * erf_difference((x0 - self.mu) / self._sigma_sqrt2, (x1 - self.mu) / self._sigma_sqrt2)

    def cumulative_probability(self, x: float) -> float:
        dev = x - self.mu
        if np.abs(dev) > 40 * self.sigma:
            return 0.0 if dev < 0 else 1.0
        return 0.5 * special.erfc(-dev / self._sigma_sqrt2)

    def survival_probability(self, x: float) -> float:
        dev = x - self.mu
        if np.abs(dev) > 40 * self.sigma:
            return 1.0 if dev < 0 else 0.0
        return 0.5 * special.erfc(dev / self._sigma_sqrt2)

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        return self.mu + self.sigma * special.ndtri(p)

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        return self.mu - self.sigma * special.ndtri(p)

    @property
    def median(self) -> float:
        return self.mu

    @property
    def mean(self) -> float:
        return self.mu

    @property
    def variance(self) -> float:
        return self.sigma * self.sigma

    @property
    def support_lower_bound(self) -> float:
        return -np.inf

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.normal(self.mu, self.sigma, size))

class ParetoDistribution(ContinuousDistribution):
    """A Pareto (type I) distribution with scale x_m and shape alpha."""

    options = [
        ["x_m", "alpha"],
        ["scale", "shape"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "x_m" in parameters and "alpha" in parameters:
            scale = parameters.pop("x_m")
            shape = parameters.pop("alpha")
        elif "scale" in parameters and "shape" in parameters:
            scale = parameters.pop("scale")
            shape = parameters.pop("shape")
        if not 0 < scale < np.inf:
            raise NotStrictlyPositiveFiniteError(scale)
        self.scale = scale
        self.shape = _strictly_positive(shape)
        if self.shape == np.inf:
            self._log_shape_plus_shape_by_log_scale = np.inf
        else:
            with np.errstate(over="ignore"):
                self._log_shape_plus_shape_by_log_scale = np.log(self.shape) + np.log(scale) * self.shape
        # A non-finite log normalization means the shape is large enough to be a Dirac delta at the scale
        self._dirac = not np.isfinite(self._log_shape_plus_shape_by_log_scale)

    def density(self, x: float) -> float:
        if x < self.scale:
            return 0.0
        if self._dirac:
            return np.inf if x == self.scale else 0.0
        return np.exp(self.log_density(x))

    def log_density(self, x: float) -> float:
        if x < self.scale:
            return -np.inf
        if self._dirac:
            return np.inf if x == self.scale else -np.inf
        return self._log_shape_plus_shape_by_log_scale - np.log(x) * (self.shape + 1)

    def cumulative_probability(self, x: float) -> float:
        if x <= self.scale:
            return 0.0
        return -np.expm1(self.shape * np.log(self.scale / x))

    def survival_probability(self, x: float) -> float:
        if x <= self.scale:
            return 1.0
        return np.exp(self.shape * np.log(self.scale / x))

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        if p == 0:
            return self.scale
        if p == 1:
            return np.inf
        return self.scale * np.exp(-np.log1p(-p) / self.shape)

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        if p == 1:
            return self.scale
        if p == 0:
            return np.inf
        return self.scale * np.exp(-np.log(p) / self.shape)

    @property
    def mean(self) -> float:
        if self.shape <= 1:
            return np.inf
        if self.shape == np.inf:
            return self.scale
        return self.scale * (self.shape / (self.shape - 1))

    @property
    def variance(self) -> float:
        if self.shape <= 2:
            return np.inf
        if self.shape == np.inf:
            return 0.0
        s = self.shape - 1
        z = self.shape / s / s / (self.shape - 2)
        # Avoid intermediate overflow of scale^2 when z is small
        return z * self.scale * self.scale if z < 1 else self.scale * self.scale * z

    @property
    def support_lower_bound(self) -> float:
        return self.scale

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        if self.shape == np.inf:
            return super().create_sampler(rng)
        # numpy draws the Lomax (Pareto II) distribution
        return Sampler(resolve_random_state(rng), lambda g, size: self.scale * (1 + g.pareto(self.shape, size)))

class TDistribution(ContinuousDistribution):
    """A Student's continuous t random variable"""

    options = [
        ["nu"],
        ["df"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "df" in parameters:
            df = parameters.pop("df")
        elif "nu" in parameters:
            df = parameters.pop("nu")
        if not 0 < df < np.inf:
            raise NotStrictlyPositiveFiniteError(df)
        self.df = df
        self._log_norm = (special.gammaln(0.5 * (df + 1)) - special.gammaln(0.5 * df)
                          - 0.5 * np.log(df * np.pi))

    def density(self, x: float) -> float:
        return np.exp(self.log_density(x))

    def log_density(self, x: float) -> float:
        if np.abs(x) == np.inf:
            return -np.inf
        return self._log_norm - 0.5 * (self.df + 1) * np.log1p(x * x / self.df)

    def _tail(self, x: float) -> float:
        # P(T > |x|)
        t = x * x
        if t < self.df:
            return 0.5 * special.betaincc(0.5, 0.5 * self.df, t / (self.df + t))
        return 0.5 * special.betainc(0.5 * self.df, 0.5, self.df / (self.df + t))

    def cumulative_probability(self, x: float) -> float:
        if x == 0:
            return 0.5
        tail = self._tail(x)
        return tail if x < 0 else 1 - tail

    def survival_probability(self, x: float) -> float:
        if x == 0:
            return 0.5
        tail = self._tail(x)
        return 1 - tail if x < 0 else tail

    @property
    def median(self) -> float:
        return 0.0

    @property
    def mean(self) -> float:
        return 0.0 if self.df > 1 else np.nan

    @property
    def variance(self) -> float:
        if self.df > 2:
            return self.df / (self.df - 2)
        if self.df > 1:
            return np.inf
        return np.nan

    @property
    def support_lower_bound(self) -> float:
        return -np.inf

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.standard_t(self.df, size))

class TrapezoidalDistribution(ContinuousDistribution):
    """A trapezoidal distribution rising on [a, b], flat on [b, c] and falling on [c, d]."""

    options = [
        ["a", "b", "c", "d"],
    ]

    @classmethod
    def of(cls, a: float, b: float, c: float, d: float) -> ContinuousDistribution:
        """
        Create a trapezoidal distribution, or the simpler distribution it reduces to.

        Returns a `TriangularDistribution` when b == c and a `UniformContinuousDistribution`
        when the flat region spans the support. Both have the same probability functions as the
        trapezoid with the same parameters.
        """
        _validate_trapezoid(a, b, c, d)
        # Floating-point equality is intended
        if b == c:
            return TriangularDistribution(a=a, b=d, c=b)
        if d - a == c - b:
            return UniformContinuousDistribution(a=a, b=d)
        return TrapezoidalDistribution(a=a, b=b, c=c, d=d)

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "a" in parameters and "b" in parameters and "c" in parameters and "d" in parameters:
            a = parameters.pop("a")
            b = parameters.pop("b")
            c = parameters.pop("c")
            d = parameters.pop("d")
        _validate_trapezoid(a, b, c, d)
        self.a, self.b, self.c, self.d = a, b, c, d
        self._divisor = (d - a) + (c - b)
        self._bma = b - a
        self._dmc = d - c
        self._cdf_b = self._bma / self._divisor
        self._sf_b = 1 - self._cdf_b
        self._sf_c = self._dmc / self._divisor
        self._cdf_c = 1 - self._sf_c

    def density(self, x: float) -> float:
        # x < a gives the correct density when a == b
        if x < self.a:
            return 0.0
        if x < self.b:
            return 2 * ((x - self.a) / self._bma / self._divisor)
        if x < self.c:
            return 2 / self._divisor
        if x < self.d:
            return 2 * ((self.d - x) / self._dmc / self._divisor)
        return 0.0

    def cumulative_probability(self, x: float) -> float:
        if x <= self.a:
            return 0.0
        if x < self.b:
            return (x - self.a) * (x - self.a) / self._bma / self._divisor
        if x < self.c:
            return (2 * x - self.b - self.a) / self._divisor
        if x < self.d:
            return 1 - (self.d - x) * (self.d - x) / self._dmc / self._divisor
        return 1.0

    def survival_probability(self, x: float) -> float:
        if x <= self.a:
            return 1.0
        if x < self.b:
            return 1 - (x - self.a) * (x - self.a) / self._bma / self._divisor
        if x < self.c:
            return 1 - (2 * x - self.b - self.a) / self._divisor
        if x < self.d:
            return (self.d - x) * (self.d - x) / self._dmc / self._divisor
        return 0.0

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        if p == 0:
            return self.a
        if p == 1:
            return self.d
        if p < self._cdf_b:
            return self.a + np.sqrt(p * self._divisor * self._bma)
        if p < self._cdf_c:
            return 0.5 * ((p * self._divisor) + self.a + self.b)
        return self.d - np.sqrt((1 - p) * self._divisor * self._dmc)

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        if p == 1:
            return self.a
        if p == 0:
            return self.d
        if p > self._sf_b:
            return self.a + np.sqrt((1 - p) * self._divisor * self._bma)
        if p > self._sf_c:
            return 0.5 * (((1 - p) * self._divisor) + self.a + self.b)
        return self.d - np.sqrt(p * self._divisor * self._dmc)

    def _non_central_moment(self, k: int, b: float, c: float) -> float:
        # Moment of the trapezoid standardized to [0, 1]; (1 - c^(k+2)) / (1 - c) -> k + 2 as c -> 1
        term1 = k + 2 if c == 1 else np.expm1((k + 2) * np.log(c)) / (c - 1)
        term2 = b ** (k + 1)
        return 2 * ((term1 - term2) / (c - b + 1) / ((k + 1) * (k + 2)))

    @property
    def mean(self) -> float:
        scale = self.d - self.a
        bp = self._bma / scale
        cp = (self.c - self.a) / scale
        return self._non_central_moment(1, bp, cp) * scale + self.a

    @property
    def variance(self) -> float:
        scale = self.d - self.a
        bp = self._bma / scale
        cp = (self.c - self.a) / scale
        mu = self._non_central_moment(1, bp, cp)
        return (self._non_central_moment(2, bp, cp) - mu * mu) * scale * scale

    @property
    def support_lower_bound(self) -> float:
        return self.a

    @property
    def support_upper_bound(self) -> float:
        return self.d

def _validate_trapezoid(a: float, b: float, c: float, d: float) -> None:
    if not a < d:
        raise InvalidRangeError(a, d, strict=True)
    if b < a:
        raise TooSmallError(b, a)
    if c < b:
        raise TooSmallError(c, b)
    if c > d:
        raise TooLargeError(c, d)

class TriangularDistribution(ContinuousDistribution):
    """A triangular continuous random variable with lower limit a, upper limit b and mode c."""

    options = [
        ["a", "b", "c"],
        ["lower", "upper", "mode"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "a" in parameters and "b" in parameters and "c" in parameters:
            a = parameters.pop("a")
            b = parameters.pop("b")
            c = parameters.pop("c")
        elif "lower" in parameters and "upper" in parameters and "mode" in parameters:
            a = parameters.pop("lower")
            b = parameters.pop("upper")
            c = parameters.pop("mode")
        if not a < b:
            raise InvalidRangeError(a, b, strict=True)
        if c < a:
            raise TooSmallError(c, a)
        if c > b:
            raise TooLargeError(c, b)
        self.a, self.b, self.c = a, b, c
        self._width = b - a
        self._cdf_mode = (c - a) / self._width
        self._sf_mode = (b - c) / self._width

    def density(self, x: float) -> float:
        if x < self.a or x > self.b:
            return 0.0
        if x < self.c:
            return 2 * (x - self.a) / (self._width * (self.c - self.a))
        if x == self.c:
            return 2 / self._width
        return 2 * (self.b - x) / (self._width * (self.b - self.c))

    def cumulative_probability(self, x: float) -> float:
        if x <= self.a:
            return 0.0
        if x < self.c:
            return (x - self.a) * (x - self.a) / (self._width * (self.c - self.a))
        if x == self.c:
            return self._cdf_mode
        if x < self.b:
            return 1 - (self.b - x) * (self.b - x) / (self._width * (self.b - self.c))
        return 1.0

    def survival_probability(self, x: float) -> float:
        if x <= self.a:
            return 1.0
        if x < self.c:
            return 1 - (x - self.a) * (x - self.a) / (self._width * (self.c - self.a))
        if x == self.c:
            return self._sf_mode
        if x < self.b:
            return (self.b - x) * (self.b - x) / (self._width * (self.b - self.c))
        return 0.0

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        if p == 0:
            return self.a
        if p == 1:
            return self.b
        if p < self._cdf_mode:
            return self.a + np.sqrt(p * self._width * (self.c - self.a))
        return self.b - np.sqrt((1 - p) * self._width * (self.b - self.c))

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        if p == 1:
            return self.a
        if p == 0:
            return self.b
        if p > self._sf_mode:
            return self.a + np.sqrt((1 - p) * self._width * (self.c - self.a))
        return self.b - np.sqrt(p * self._width * (self.b - self.c))

    @property
    def mean(self) -> float:
        return (self.a + self.b + self.c) / 3

    @property
    def variance(self) -> float:
        a, b, c = self.a, self.b, self.c
        return (a * a + b * b + c * c - a * b - a * c - b * c) / 18

    @property
    def support_lower_bound(self) -> float:
        return self.a

    @property
    def support_upper_bound(self) -> float:
        return self.b

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.triangular(self.a, self.c, self.b, size))

def _standard_normal_probability(z0: float, z1: float) -> float:
    # P(z0 <= Z <= z1) for a standard normal Z
    return 0.5 * erf_difference(z0 / SQRT2, z1 / SQRT2)

def _standard_normal_density(z: float) -> float:
    return np.exp(-0.5 * z * z - HALF_LOG_TWO_PI)

class TruncatedNormalDistribution(ContinuousDistribution):
    """A normal distribution with mean mu and standard deviation sigma truncated to [lower, upper]."""

    options = [
        ["mu", "sigma", "lower", "upper"],
        ["mu", "sigma", "a", "b"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "mu" in parameters and "sigma" in parameters:
            mu = parameters.pop("mu")
            sigma = parameters.pop("sigma")
            if "lower" in parameters and "upper" in parameters:
                lower = parameters.pop("lower")
                upper = parameters.pop("upper")
            elif "a" in parameters and "b" in parameters:
                lower = parameters.pop("a")
                upper = parameters.pop("b")
        self.mu = mu
        self.sigma = _strictly_positive(sigma)
        if not lower < upper:
            raise InvalidRangeError(lower, upper, strict=True)
        self.lower = lower
        self.upper = upper
        self._alpha = (lower - mu) / sigma
        self._beta = (upper - mu) / sigma
        self._delta = _standard_normal_probability(self._alpha, self._beta)
        self._log_norm = np.log(self.sigma * self._delta) + HALF_LOG_TWO_PI

        pdf_alpha = _standard_normal_density(self._alpha)
        pdf_beta = _standard_normal_density(self._beta)
        # z * pdf(z) -> 0 as z -> +/-inf
        alpha_pdf = self._alpha * pdf_alpha if np.isfinite(self._alpha) else 0.0
        beta_pdf = self._beta * pdf_beta if np.isfinite(self._beta) else 0.0
        pdf_ratio = (pdf_alpha - pdf_beta) / self._delta
        self._mean = mu + sigma * pdf_ratio
        self._variance = sigma * sigma * (1 + (alpha_pdf - beta_pdf) / self._delta - pdf_ratio * pdf_ratio)

    def density(self, x: float) -> float:
        return np.exp(self.log_density(x))

    def log_density(self, x: float) -> float:
        if x < self.lower or x > self.upper or np.abs(x) == np.inf:
            return -np.inf
        z = (x - self.mu) / self.sigma
        return -0.5 * z * z - self._log_norm

    def cumulative_probability(self, x: float) -> float:
        if x <= self.lower:
            return 0.0
        if x >= self.upper:
            return 1.0
        return min(_standard_normal_probability(self._alpha, (x - self.mu) / self.sigma) / self._delta, 1.0)

    def survival_probability(self, x: float) -> float:
        if x <= self.lower:
            return 1.0
        if x >= self.upper:
            return 0.0
        return min(_standard_normal_probability((x - self.mu) / self.sigma, self._beta) / self._delta, 1.0)

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def variance(self) -> float:
        return self._variance

    @property
    def support_lower_bound(self) -> float:
        return self.lower

    @property
    def support_upper_bound(self) -> float:
        return self.upper

class UniformContinuousDistribution(ContinuousDistribution):
    """A uniform continuous distribution."""

    options = [
        ["a", "b"],
        ["loc", "scale"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "a" in parameters and "b" in parameters:
            a = parameters.pop("a")
            b = parameters.pop("b")
        elif "loc" in parameters and "scale" in parameters:
            a = parameters.pop("loc")
            b = a + _strictly_positive(parameters.pop("scale"))
        if not a < b:
            raise InvalidRangeError(a, b, strict=True)
        if not np.isfinite(b - a):
            raise InvalidParameterError(f"Range {b - a} is not finite")
        self.a = a
        self.b = b
        self._width = b - a

    def density(self, x: float) -> float:
        if x < self.a or x > self.b:
            return 0.0
        return 1 / self._width

    def log_density(self, x: float) -> float:
        if x < self.a or x > self.b:
            return -np.inf
        return -np.log(self._width)

    def cumulative_probability(self, x: float) -> float:
        if x <= self.a:
            return 0.0
        if x >= self.b:
            return 1.0
        return (x - self.a) / self._width

    def survival_probability(self, x: float) -> float:
        if x <= self.a:
            return 1.0
        if x >= self.b:
            return 0.0
        return (self.b - x) / self._width

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        return min(self.a + p * self._width, self.b)

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        return max(self.b - p * self._width, self.a)

    @property
    def median(self) -> float:
        return self.a + 0.5 * self._width

    @property
    def mean(self) -> float:
        return self.a + 0.5 * self._width

    @property
    def variance(self) -> float:
        return self._width * self._width / 12

    @property
    def support_lower_bound(self) -> float:
        return self.a

    @property
    def support_upper_bound(self) -> float:
        return self.b

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: g.uniform(self.a, self.b, size))

class WeibullDistribution(ContinuousDistribution):
    """A Weibull distribution."""

    options = [
        ["k", "lambda_"],
        ["c"],
    ]

    def interpret_parameterization(self, parameters: Dict[str, float]) -> None:
        if "c" in parameters:
            k = parameters.pop("c")
            scale = 1.0
        elif "k" in parameters and "lambda_" in parameters:
            k = parameters.pop("k")
            scale = parameters.pop("lambda_")
        self.k = _strictly_positive(k)
        self.lambda_ = _strictly_positive(scale)

    def density(self, x: float) -> float:
        return np.exp(self.log_density(x))

    def log_density(self, x: float) -> float:
        if x < 0 or x == np.inf:
            return -np.inf
        if x == 0:
            if self.k < 1:
                return np.inf
            return -np.log(self.lambda_) if self.k == 1 else -np.inf
        y = x / self.lambda_
        return np.log(self.k / self.lambda_) + (self.k - 1) * np.log(y) - y ** self.k

    def cumulative_probability(self, x: float) -> float:
        if x <= 0:
            return 0.0
        return -np.expm1(-((x / self.lambda_) ** self.k))

    def survival_probability(self, x: float) -> float:
        if x <= 0:
            return 1.0
        return np.exp(-((x / self.lambda_) ** self.k))

    def inverse_cumulative_probability(self, p: float) -> float:
        check_probability(p)
        if p == 0:
            return 0.0
        if p == 1:
            return np.inf
        return self.lambda_ * (-np.log1p(-p)) ** (1 / self.k)

    def inverse_survival_probability(self, p: float) -> float:
        check_probability(p)
        if p == 1:
            return 0.0
        if p == 0:
            return np.inf
        return self.lambda_ * (-np.log(p)) ** (1 / self.k)

    @property
    def mean(self) -> float:
        return self.lambda_ * special.gamma(1 + 1 / self.k)

    @property
    def variance(self) -> float:
        mean = self.mean
        return self.lambda_ * self.lambda_ * special.gamma(1 + 2 / self.k) - mean * mean

    @property
    def support_lower_bound(self) -> float:
        return 0.0

    @property
    def support_upper_bound(self) -> float:
        return np.inf

    def create_sampler(self, rng: RandomState=None) -> Sampler:
        return Sampler(resolve_random_state(rng), lambda g, size: self.lambda_ * g.weibull(self.k, size))
