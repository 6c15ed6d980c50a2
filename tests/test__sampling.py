import itertools

import numpy as np
import pytest

from tailstat import (
    BinomialDistribution,
    ExponentialDistribution,
    GammaDistribution,
    GeometricDistribution,
    HypergeometricDistribution,
    LevyDistribution,
    NormalDistribution,
    ParetoDistribution,
    PoissonDistribution,
    TrapezoidalDistribution,
    TruncatedNormalDistribution,
    UniformDiscreteDistribution,
    ZipfDistribution,
    update_defaults,
)


class TestSampler:
    """Test samplers built from numpy generators and by inverse transform."""

    def test_single_sample_types(self):
        assert isinstance(NormalDistribution(mu=0, sigma=1).create_sampler(rng=1).sample(), float)
        assert isinstance(BinomialDistribution(n=10, p=0.5).create_sampler(rng=1).sample(), int)

    def test_samples_types(self):
        values = PoissonDistribution(mu=4).create_sampler(rng=1).samples(10)
        assert values.dtype == np.int64
        assert values.shape == (10,)

    def test_reproducible_with_seed(self):
        dist = GammaDistribution(k=2, theta=3)
        a = dist.create_sampler(rng=42).samples(50)
        b = dist.create_sampler(rng=42).samples(50)
        np.testing.assert_array_equal(a, b)

    def test_accepts_generator(self):
        rng = np.random.default_rng(3)
        values = NormalDistribution(mu=0, sigma=1).create_sampler(rng=rng).samples(5)
        assert values.shape == (5,)

    def test_iterator(self):
        sampler = ExponentialDistribution(scale=2).create_sampler(rng=0)
        values = list(itertools.islice(sampler, 5))
        assert len(values) == 5
        assert all(v >= 0 for v in values)

    @pytest.mark.parametrize(
        "dist",
        [
            NormalDistribution(mu=3, sigma=2),
            GammaDistribution(k=2, theta=1.5),
            TrapezoidalDistribution(a=0, b=1, c=3, d=4),
            TruncatedNormalDistribution(mu=0, sigma=1, lower=-1, upper=2),
            ParetoDistribution(scale=1, shape=5),
        ],
        ids=["normal", "gamma", "trapezoidal", "truncated_normal", "pareto"],
    )
    def test_sample_moments(self, dist):
        values = dist.create_sampler(rng=2024).samples(5000)
        assert np.mean(values) == pytest.approx(dist.mean, abs=5 * dist.standard_deviation / np.sqrt(5000))
        assert np.all(values >= dist.support_lower_bound)
        assert np.all(values <= dist.support_upper_bound)

    @pytest.mark.parametrize(
        "dist",
        [
            BinomialDistribution(n=20, p=0.3),
            GeometricDistribution(p=0.25),
            HypergeometricDistribution(N=50, K=20, n=10),
            UniformDiscreteDistribution(a=-2, b=5),
            ZipfDistribution(n=20, s=1.5),
        ],
        ids=["binomial", "geometric", "hypergeometric", "uniform", "zipf"],
    )
    def test_discrete_sample_moments(self, dist):
        values = dist.create_sampler(rng=7).samples(5000)
        assert values.dtype == np.int64
        assert np.mean(values) == pytest.approx(dist.mean, abs=5 * dist.standard_deviation / np.sqrt(5000))
        assert values.min() >= dist.support_lower_bound
        assert values.max() <= dist.support_upper_bound

    def test_levy_support(self):
        values = LevyDistribution(mu=1, c=0.5).create_sampler(rng=5).samples(1000)
        assert np.all(values >= 1)

    def test_empty_hypergeometric_draw(self):
        values = HypergeometricDistribution(N=5, K=2, n=0).create_sampler(rng=1).samples(5)
        np.testing.assert_array_equal(values, np.zeros(5))


class TestGenerateRandomValues:
    """Test the seeds configured through `update_defaults`."""

    def test_local_seed_repeats(self):
        update_defaults(local_seed=11)
        dist = NormalDistribution(mu=0, sigma=1)
        np.testing.assert_array_equal(dist.generate_random_values(5), dist.generate_random_values(5))

    def test_global_seed_progresses(self):
        dist = NormalDistribution(mu=0, sigma=1)
        update_defaults(global_seed=11)
        a = dist.generate_random_values(5)
        b = dist.generate_random_values(5)
        update_defaults(global_seed=11)
        c = dist.generate_random_values(5)
        assert not np.array_equal(a, b)
        np.testing.assert_array_equal(a, c)

    def test_unseeded(self):
        assert NormalDistribution(mu=0, sigma=1).generate_random_values(3).shape == (3,)
