import numpy as np

from tailstat import *

update_defaults(warnings="ignore", infinity_approximation=1e3)

Die = UniformDiscreteDistribution.to_alias("a", "b")
die = Die(1, 6)
print(die.mean)
print(die.generate_random_values(10))
print(P(2 <= die <= 4))
print(P(die == 6))
die.display("pmf")

B = BinomialDistribution.to_alias("n", "p")
C = B(10, 0.2)
C.display("pmf")

M = CauchyDistribution(x0=0, gamma=1)
M.display("pdf")

N = BinomialDistribution(n=10, p=0.2)
print(P(N == 3))
print(P(N != 3))
N.display("cdf")

O = UniformContinuousDistribution(a=0, b=1)
print(P(0.25 < O))
print(P(O > 0.5))
print(P(0.25 < O < 0.5))

# Quantiles far in the tails
Z = NormalDistribution(mu=0, sigma=1)
print(Z.inverse_survival_probability(1e-300))
print(Z.probability(30, 31))

# No closed-form inverse: bracketed by the Chebyshev inequality
G = GammaDistribution(k=2.5, theta=3)
print(G.inverse_cumulative_probability(1e-12))
print(G.inverse_survival_probability(1e-12))

# Infinite variance: bracketed by doubling
T = TDistribution(df=1.5)
print(T.inverse_cumulative_probability(0.999))
T.display(PFUNC.QUANTILE_FUNCTION)

Q = TrapezoidalDistribution.of(0, 1, 1, 4)
print(Q)
print(FoldedNormalDistribution.of(0, 2))

H = HypergeometricDistribution(N=60, K=25, n=20)
print(H.median)
print(H.inverse_survival_probability(0.01))

sampler = LevyDistribution(mu=0, c=1).create_sampler(rng=2024)
print(sampler.sample())
print(np.median(sampler.samples(1000)))

V = PoissonDistribution(mu=4)
print(V.evaluate("logpmf", np.arange(5)))
V.display("pmf")
