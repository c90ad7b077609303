from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from ._utils import _as_generator
from .config import SamplerConfig
from .continuous import Normal1D

__all__ = [
    "generate_observations",
    "observations_from_config",
]


def generate_observations(
    sample_size: int,
    true_mean: float,
    true_stdev: float,
    rng: Optional[Union[np.random.Generator, int]] = None,
) -> NDArray[np.floating]:
    """Draws a synthetic observation sample from N(true_mean, true_stdev²).

    Args:
        sample_size: Number of observations.
        true_mean: Population mean.
        true_stdev: Population standard deviation (must be > 0).
        rng: Generator or seed. Passing the generator that will drive the
            chain keeps a whole run on one random stream.

    Returns:
        Read-only array of shape (sample_size,).

    Raises:
        ValueError: If ``sample_size`` is not positive or ``true_stdev`` is
            not positive.
    """
    if int(sample_size) <= 0:
        raise ValueError(f"sample_size must be > 0; got {sample_size}")
    population = Normal1D(true_mean, true_stdev, rng=_as_generator(rng))
    xs = population.sample(int(sample_size))[:, 0]
    xs.setflags(write=False)
    return xs


def observations_from_config(
    config: SamplerConfig,
    rng: Optional[Union[np.random.Generator, int]] = None,
) -> NDArray[np.floating]:
    """Generates the observation sample described by ``config``.

    When ``rng`` is ``None`` the generator is seeded from ``config.seed``.
    """
    if rng is None:
        rng = config.seed
    return generate_observations(config.sample_size, config.true_mean, config.true_stdev, rng)
