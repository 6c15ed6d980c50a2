from __future__ import annotations

from typing import Any, Callable, Optional, Union

import numpy as np
from typing_extensions import Self

from ._utils import DEFAULTS

__all__ = ["Sampler", "InverseTransformSampler", "resolve_random_state"]

RandomState = Union[None, int, np.random.SeedSequence, np.random.BitGenerator, np.random.Generator]
# draw(rng, size) returns a scalar when size is None, else an array of that size
Draw = Callable[[np.random.Generator, Optional[int]], Any]

def resolve_random_state(rng: RandomState=None) -> np.random.Generator:
    """Return the generator to sample from, falling back to the configured seeds."""
    if rng is not None:
        return np.random.default_rng(rng)
    if DEFAULTS["local_seed"] is not None:
        return np.random.default_rng(DEFAULTS["local_seed"])
    if DEFAULTS["global_seed"] is not None:
        return DEFAULTS["global_seed"]
    return np.random.default_rng()

class Sampler(object):
    """Draws values from a distribution using a random generator."""

    def __init__(self, rng: np.random.Generator, draw: Draw, discrete: bool=False) -> None:
        self._rng = rng
        self._draw = draw
        self._discrete = discrete

    def sample(self) -> Union[float, int]:
        """Draw a single value."""
        value = self._draw(self._rng, None)
        return int(value) if self._discrete else float(value)

    def samples(self, n: int) -> np.ndarray:
        """Draw n values."""
        values = np.asarray(self._draw(self._rng, n))
        return values.astype(np.int64) if self._discrete else values.astype(float)

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> Union[float, int]:
        return self.sample()

class InverseTransformSampler(Sampler):
    """Samples by evaluating an inverse cumulative probability function at uniform deviates."""

    def __init__(self, rng: np.random.Generator, inverse_cumulative_probability: Callable[[float], Union[float, int]], discrete: bool=False) -> None:
        inverse = np.vectorize(inverse_cumulative_probability, otypes=[np.int64 if discrete else float])

        def draw(rng: np.random.Generator, size: Optional[int]) -> Any:
            if size is None:
                return inverse_cumulative_probability(rng.random())
            return inverse(rng.random(size))

        super().__init__(rng, draw, discrete)
