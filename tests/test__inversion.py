import numpy as np
import pytest
import scipy.stats

from tailstat import (
    BinomialDistribution,
    ContinuousDistribution,
    FDistribution,
    GammaDistribution,
    HypergeometricDistribution,
    NormalDistribution,
    PoissonDistribution,
    TDistribution,
    ZipfDistribution,
)
from tailstat._inversion import discrete_range_probability, range_probability, search_plateau
from tailstat._utils import InvalidProbabilityError, InvalidRangeError


class TwoBlockDistribution(ContinuousDistribution):
    """Uniform mass 1/2 on [0, 1] and 1/2 on [2, 3], so the cdf is flat on [1, 2]."""

    options = [[]]

    def interpret_parameterization(self, parameters):
        pass

    def density(self, x):
        return 0.5 if 0 <= x <= 1 or 2 <= x <= 3 else 0.0

    def cumulative_probability(self, x):
        if x <= 0:
            return 0.0
        if x <= 1:
            return 0.5 * x
        if x <= 2:
            return 0.5
        if x <= 3:
            return 0.5 + 0.5 * (x - 2)
        return 1.0

    @property
    def is_support_connected(self):
        return False

    @property
    def mean(self):
        return 1.5

    @property
    def variance(self):
        return 10 / 3 - 2.25

    @property
    def support_lower_bound(self):
        return 0.0

    @property
    def support_upper_bound(self):
        return 3.0


class HeavyTailDistribution(ContinuousDistribution):
    """A defective cdf that stays at 1/2 for every finite x, with no moments."""

    options = [[]]

    def interpret_parameterization(self, parameters):
        pass

    def density(self, x):
        return 0.0

    def cumulative_probability(self, x):
        if x < 0:
            return 0.0
        if x == np.inf:
            return 1.0
        return 0.5 * x / (1 + x)

    @property
    def mean(self):
        return np.inf

    @property
    def variance(self):
        return np.inf

    @property
    def support_lower_bound(self):
        return 0.0

    @property
    def support_upper_bound(self):
        return np.inf


class LowerHeavyTailDistribution(ContinuousDistribution):
    """The mirror image of HeavyTailDistribution: the cdf stays above 1/2 for every finite x."""

    options = [[]]

    def interpret_parameterization(self, parameters):
        pass

    def density(self, x):
        return 0.0

    def cumulative_probability(self, x):
        if x > 0:
            return 1.0
        if x == -np.inf:
            return 0.0
        return 1 - 0.5 * -x / (1 - x)

    @property
    def mean(self):
        return -np.inf

    @property
    def variance(self):
        return np.inf

    @property
    def support_lower_bound(self):
        return -np.inf

    @property
    def support_upper_bound(self):
        return 0.0


class TestSpecificScenarios:
    """Basic properties of the standard normal."""

    def test_cdf_at_zero(self):
        assert NormalDistribution(mu=0, sigma=1).cumulative_probability(0) == pytest.approx(0.5)

    def test_median(self):
        assert NormalDistribution(mu=0, sigma=1).inverse_cumulative_probability(0.5) == pytest.approx(0.0, abs=1e-15)

    def test_cdf_quantile(self):
        assert NormalDistribution(mu=0, sigma=1).cumulative_probability(1.959964) == pytest.approx(0.975, abs=1e-6)

    def test_invalid_probability(self):
        with pytest.raises(InvalidProbabilityError):
            NormalDistribution(mu=0, sigma=1).inverse_cumulative_probability(-0.1)

    def test_nan_probability(self):
        with pytest.raises(InvalidProbabilityError):
            GammaDistribution(k=2, theta=1).inverse_survival_probability(np.nan)

    def test_reversed_range(self):
        with pytest.raises(InvalidRangeError):
            NormalDistribution(mu=0, sigma=1).probability(5, 2)


class TestInverseProbability:
    """Test the generic inverse against scipy."""

    @pytest.mark.parametrize("p", [1e-10, 0.001, 0.25, 0.5, 0.75, 0.999])
    def test_chebyshev_bracket(self, p):
        dist = GammaDistribution(k=2.5, theta=3)
        expected = scipy.stats.gamma.ppf(p, 2.5, scale=3)
        assert dist.inverse_cumulative_probability(p) == pytest.approx(expected, rel=1e-8, abs=1e-8)

    @pytest.mark.parametrize("p", [1e-6, 0.01, 0.5, 0.99, 1 - 1e-6])
    def test_geometric_expansion_infinite_variance(self, p):
        """With df = 1.5 the variance is infinite and the bracket grows by doubling."""
        dist = TDistribution(df=1.5)
        expected = scipy.stats.t.ppf(p, 1.5)
        assert dist.inverse_cumulative_probability(p) == pytest.approx(expected, rel=1e-8, abs=1e-8)

    @pytest.mark.parametrize("p", [0.01, 0.5, 0.99])
    def test_geometric_expansion_undefined_variance(self, p):
        dist = FDistribution(dfn=3, dfd=3)
        expected = scipy.stats.f.ppf(p, 3, 3)
        assert dist.inverse_cumulative_probability(p) == pytest.approx(expected, rel=1e-8, abs=1e-8)

    @pytest.mark.parametrize("q", [1e-10, 0.01, 0.5, 0.99])
    def test_survival_direction(self, q):
        dist = TDistribution(df=4)
        expected = scipy.stats.t.isf(q, 4)
        assert dist.inverse_survival_probability(q) == pytest.approx(expected, rel=1e-8, abs=1e-8)

    def test_support_bounds_at_extremes(self):
        dist = GammaDistribution(k=2, theta=1)
        assert dist.inverse_cumulative_probability(0) == 0
        assert dist.inverse_cumulative_probability(1) == np.inf
        assert dist.inverse_survival_probability(1) == 0
        assert dist.inverse_survival_probability(0) == np.inf

    def test_infinite_lower_bound(self):
        assert TDistribution(df=3).inverse_cumulative_probability(0) == -np.inf

    def test_target_beyond_largest_float(self):
        """A cdf that never reaches p on the finite line returns the support upper bound."""
        assert HeavyTailDistribution().inverse_cumulative_probability(0.75) == np.inf

    def test_target_below_largest_negative_float(self):
        """A cdf that stays above p on the finite line returns the support lower bound."""
        dist = LowerHeavyTailDistribution()
        assert dist.inverse_cumulative_probability(0.25) == -np.inf
        assert dist.inverse_survival_probability(0.75) == -np.inf

    def test_plateau_returns_infimum(self):
        dist = TwoBlockDistribution()
        assert dist.inverse_cumulative_probability(0.5) == pytest.approx(1.0, abs=1e-8)
        assert dist.inverse_survival_probability(0.5) == pytest.approx(1.0, abs=1e-8)

    def test_plateau_search_stops_on_slope(self):
        dist = TwoBlockDistribution()
        assert search_plateau(dist, False, 0.0, 0.5) == 0.5


class TestRangeProbability:
    """Test P(x0 <= X <= x1) choosing the cdf or sf by the median."""

    def test_lower_domain(self):
        dist = NormalDistribution(mu=0, sigma=1)
        expected = scipy.stats.norm.cdf(0.5) - scipy.stats.norm.cdf(-1)
        assert range_probability(dist, -1, 0.5) == pytest.approx(expected, rel=1e-12)

    def test_upper_tail_keeps_precision(self):
        dist = GammaDistribution(k=2, theta=1)
        expected = scipy.stats.gamma.sf(40, 2) - scipy.stats.gamma.sf(41, 2)
        assert dist.probability(40, 41) == pytest.approx(expected, rel=1e-10)

    def test_normal_tail_difference(self):
        dist = NormalDistribution(mu=0, sigma=1)
        expected = scipy.stats.norm.sf(10) - scipy.stats.norm.sf(11)
        assert dist.probability(10, 11) == pytest.approx(expected, rel=1e-10)

    def test_empty_range(self):
        assert GammaDistribution(k=2, theta=1).probability(1, 1) == 0


class TestDiscreteRangeProbability:
    """Test P(x0 < X <= x1)."""

    def test_equal_ends(self):
        assert discrete_range_probability(BinomialDistribution(n=10, p=0.3), 4, 4) == 0

    def test_adjacent_ends(self):
        dist = BinomialDistribution(n=10, p=0.3)
        assert dist.probability(3, 4) == pytest.approx(scipy.stats.binom.pmf(4, 10, 0.3), rel=1e-12)

    def test_lower_domain(self):
        dist = BinomialDistribution(n=10, p=0.3)
        expected = scipy.stats.binom.cdf(5, 10, 0.3) - scipy.stats.binom.cdf(1, 10, 0.3)
        assert dist.probability(1, 5) == pytest.approx(expected, rel=1e-12)

    def test_upper_domain(self):
        dist = PoissonDistribution(mu=3)
        expected = scipy.stats.poisson.sf(20, 3) - scipy.stats.poisson.sf(30, 3)
        assert dist.probability(20, 30) == pytest.approx(expected, rel=1e-10)

    def test_reversed_range(self):
        with pytest.raises(InvalidRangeError):
            PoissonDistribution(mu=3).probability(5, 2)


class TestDiscreteInverseProbability:
    """Test the discrete inverse: the smallest x with cdf(x) >= p."""

    @pytest.mark.parametrize("p", [1e-9, 0.001, 0.1, 0.37, 0.5, 0.9, 0.999])
    def test_bisection(self, p):
        dist = PoissonDistribution(mu=45.5)
        assert dist.inverse_cumulative_probability(p) == scipy.stats.poisson.ppf(p, 45.5)

    @pytest.mark.parametrize("p", [0.001, 0.1, 0.5, 0.9, 0.999])
    def test_summation(self, p):
        dist = HypergeometricDistribution(N=60, K=25, n=20)
        assert dist.inverse_cumulative_probability(p) == scipy.stats.hypergeom.ppf(p, 60, 25, 20)

    @pytest.mark.parametrize("q", [0.001, 0.1, 0.5, 0.9, 0.999])
    def test_summation_survival(self, q):
        dist = HypergeometricDistribution(N=60, K=25, n=20)
        x = dist.inverse_survival_probability(q)
        assert dist.survival_probability(x) <= q
        assert dist.survival_probability(x - 1) > q

    @pytest.mark.parametrize("q", [1e-12, 0.01, 0.5, 0.99])
    def test_bisection_survival(self, q):
        dist = BinomialDistribution(n=200, p=0.3)
        x = dist.inverse_survival_probability(q)
        assert dist.survival_probability(x) <= q
        assert dist.survival_probability(x - 1) > q

    @pytest.mark.parametrize("p", [0.05, 0.5, 0.95])
    def test_summation_finite_support(self, p):
        dist = ZipfDistribution(n=50, s=1.1)
        x = dist.inverse_cumulative_probability(p)
        assert dist.cumulative_probability(x) >= p
        assert dist.cumulative_probability(x - 1) < p

    def test_extremes(self):
        dist = PoissonDistribution(mu=2)
        assert dist.inverse_cumulative_probability(0) == 0
        assert dist.inverse_cumulative_probability(1) == 2 ** 31 - 1
        assert dist.inverse_survival_probability(1) == 0


class TestInversionProperties:
    """Monotonicity, round trips and the complement law."""

    @pytest.mark.parametrize(
        "dist",
        [GammaDistribution(k=0.7, theta=2), TDistribution(df=3), FDistribution(dfn=4, dfd=9)],
        ids=["gamma", "t", "f"],
    )
    def test_monotone(self, dist):
        p = np.linspace(0.001, 0.999, 60)
        x = dist.evaluate("ppf", p)
        assert np.all(np.diff(x) >= 0)

    @pytest.mark.parametrize("x", [0.05, 0.5, 2.0, 7.5, 20.0])
    def test_round_trip(self, x):
        dist = GammaDistribution(k=2, theta=1.5)
        assert dist.inverse_cumulative_probability(dist.cumulative_probability(x)) == pytest.approx(x, rel=1e-8, abs=1e-8)
        assert dist.inverse_survival_probability(dist.survival_probability(x)) == pytest.approx(x, rel=1e-8, abs=1e-8)

    @pytest.mark.parametrize("x", [-30.0, -5.0, 0.0, 5.0, 30.0])
    def test_complement_law(self, x):
        dist = TDistribution(df=2.5)
        assert dist.cumulative_probability(x) + dist.survival_probability(x) == pytest.approx(1, rel=1e-10)
