import numpy as np
import pytest
import scipy.stats

from tailstat import (
    BinomialDistribution,
    GeometricDistribution,
    HypergeometricDistribution,
    NegativeBinomialDistribution,
    PascalDistribution,
    PoissonDistribution,
    UniformDiscreteDistribution,
    ZipfDistribution,
)
from tailstat._utils import (
    InvalidRangeError,
    NegativeError,
    NotStrictlyPositiveError,
    OutOfRangeError,
    TooLargeError,
)

CASES = {
    "binomial": (lambda: BinomialDistribution(n=20, p=0.3), scipy.stats.binom(20, 0.3)),
    "geometric": (lambda: GeometricDistribution(p=0.2), scipy.stats.geom(0.2, loc=-1)),
    "hypergeometric": (lambda: HypergeometricDistribution(N=60, K=25, n=20), scipy.stats.hypergeom(60, 25, 20)),
    "negative_binomial": (lambda: NegativeBinomialDistribution(r=4, p=0.35), scipy.stats.nbinom(4, 0.35)),
    "poisson": (lambda: PoissonDistribution(mu=6.5), scipy.stats.poisson(6.5)),
    "uniform": (lambda: UniformDiscreteDistribution(a=-3, b=7), scipy.stats.randint(-3, 8)),
    "zipf": (lambda: ZipfDistribution(n=30, s=1.3), scipy.stats.zipfian(1.3, 30)),
}

PROBABILITIES = np.array([0.003, 0.05, 0.21, 0.47, 0.66, 0.87, 0.993])


@pytest.fixture(params=sorted(CASES), ids=sorted(CASES))
def case(request):
    make, frozen = CASES[request.param]
    return make(), frozen


def support_points(frozen):
    lower, upper = frozen.support()
    lower = int(lower)
    upper = int(min(upper, lower + 60))
    return np.arange(lower - 2, upper + 3)


class TestDiscreteAgainstScipy:
    """Compare the probability functions and moments against scipy.stats."""

    def test_probability_mass(self, case):
        dist, frozen = case
        x = support_points(frozen)
        np.testing.assert_allclose(dist.evaluate("pmf", x), frozen.pmf(x), rtol=1e-9, atol=1e-300)

    def test_log_probability_mass(self, case):
        dist, frozen = case
        lower = int(frozen.support()[0])
        x = np.arange(lower, lower + 10)
        np.testing.assert_allclose(dist.evaluate("logpmf", x), frozen.logpmf(x), rtol=1e-9)

    def test_cumulative_probability(self, case):
        dist, frozen = case
        x = support_points(frozen)
        np.testing.assert_allclose(dist.evaluate("cdf", x), frozen.cdf(x), rtol=1e-9, atol=1e-15)

    def test_survival_probability(self, case):
        dist, frozen = case
        x = support_points(frozen)
        np.testing.assert_allclose(dist.evaluate("sf", x), frozen.sf(x), rtol=1e-9, atol=1e-15)

    def test_inverse_cumulative_probability(self, case):
        dist, frozen = case
        np.testing.assert_array_equal(dist.evaluate("ppf", PROBABILITIES), frozen.ppf(PROBABILITIES))

    def test_inverse_survival_probability(self, case):
        dist, frozen = case
        for q in PROBABILITIES:
            x = dist.inverse_survival_probability(q)
            assert dist.survival_probability(x) <= q
            assert x == dist.support_lower_bound or dist.survival_probability(x - 1) > q

    def test_moments(self, case):
        dist, frozen = case
        assert dist.mean == pytest.approx(frozen.mean(), rel=1e-10)
        assert dist.variance == pytest.approx(frozen.var(), rel=1e-10)

    def test_median(self, case):
        dist, frozen = case
        assert dist.median == frozen.median()


class TestDiscreteDistributions:
    """Test parameterizations, validation and edge cases."""

    def test_binomial_certain_success(self):
        dist = BinomialDistribution(n=5, p=1)
        assert dist.support_lower_bound == 5
        assert dist.probability_mass(5) == 1
        assert dist.inverse_cumulative_probability(0.3) == 5

    def test_binomial_certain_failure(self):
        dist = BinomialDistribution(n=5, p=0)
        assert dist.support_upper_bound == 0
        assert dist.cumulative_probability(0) == 1
        assert dist.inverse_survival_probability(0.3) == 0

    def test_binomial_q(self):
        assert BinomialDistribution(n=10, q=0.25).p == 0.75

    def test_binomial_out_of_range(self):
        with pytest.raises(OutOfRangeError):
            BinomialDistribution(n=10, p=1.5)

    def test_binomial_negative_trials(self):
        with pytest.raises(NegativeError):
            BinomialDistribution(n=-1, p=0.5)

    def test_geometric_certain(self):
        dist = GeometricDistribution(p=1)
        assert dist.probability_mass(0) == 1
        assert dist.survival_probability(0) == 0
        assert dist.inverse_cumulative_probability(0.9) == 0
        assert dist.support_upper_bound == 0

    def test_geometric_zero(self):
        with pytest.raises(OutOfRangeError):
            GeometricDistribution(p=0)

    def test_geometric_upper_bound(self):
        assert GeometricDistribution(p=0.5).inverse_cumulative_probability(1) == 2 ** 31 - 1

    def test_hypergeometric_validation(self):
        with pytest.raises(TooLargeError):
            HypergeometricDistribution(N=10, K=11, n=2)
        with pytest.raises(TooLargeError):
            HypergeometricDistribution(N=10, K=2, n=11)
        with pytest.raises(NotStrictlyPositiveError):
            HypergeometricDistribution(N=0, K=0, n=0)

    def test_hypergeometric_support(self):
        dist = HypergeometricDistribution(population_size=10, number_of_successes=7, sample_size=5)
        assert (dist.support_lower_bound, dist.support_upper_bound) == (2, 5)
        assert dist.cumulative_probability(1) == 0
        assert dist.survival_probability(5) == 0

    def test_pascal_is_negative_binomial(self):
        assert PascalDistribution is NegativeBinomialDistribution

    def test_negative_binomial_validation(self):
        with pytest.raises(NotStrictlyPositiveError):
            NegativeBinomialDistribution(r=0, p=0.5)

    def test_poisson_rate_and_time(self):
        assert PoissonDistribution(r=2, t=3).mean == 6

    def test_poisson_validation(self):
        with pytest.raises(NotStrictlyPositiveError):
            PoissonDistribution(mu=0)

    def test_poisson_far_tail(self):
        dist = PoissonDistribution(mu=4)
        assert dist.survival_probability(60) == pytest.approx(scipy.stats.poisson.sf(60, 4), rel=1e-10)

    def test_uniform_exclusive_high(self):
        dist = UniformDiscreteDistribution(low=0, high=6)
        assert (dist.a, dist.b) == (0, 5)

    def test_uniform_reversed(self):
        with pytest.raises(InvalidRangeError):
            UniformDiscreteDistribution(a=3, b=2)

    def test_uniform_single_point(self):
        dist = UniformDiscreteDistribution(a=4, b=4)
        assert dist.probability_mass(4) == 1
        assert dist.inverse_cumulative_probability(0.5) == 4
        assert dist.variance == 0

    def test_zipf_validation(self):
        with pytest.raises(NotStrictlyPositiveError):
            ZipfDistribution(n=0, s=1)
        with pytest.raises(NegativeError):
            ZipfDistribution(n=5, s=-1)

    def test_zipf_zero_exponent_is_uniform(self):
        dist = ZipfDistribution(n=4, s=0)
        assert dist.probability_mass(3) == pytest.approx(0.25)
        assert dist.cumulative_probability(2) == pytest.approx(0.5)
        assert dist.mean == pytest.approx(2.5)

    def test_probability_at(self):
        dist = PoissonDistribution(mu=3)
        assert dist.probability_at(2) == pytest.approx(scipy.stats.poisson.pmf(2, 3))
        assert dist.probability_at(2.5) == 0

    def test_probability_between_includes_ends(self):
        dist = BinomialDistribution(n=10, p=0.4)
        expected = scipy.stats.binom.cdf(6, 10, 0.4) - scipy.stats.binom.cdf(2, 10, 0.4)
        assert dist.probability_between(3, 6) == pytest.approx(expected)
        assert dist.probability_between(2.5, 6.5) == pytest.approx(expected)
        assert dist.probability_between(-5, 20) == pytest.approx(1)
