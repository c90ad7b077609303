from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .chain import ChainHistory
from .distributions import EmpiricalDistribution

__all__ = [
    "PosteriorEstimate",
    "summarize_posterior",
    "retained_draws",
]


@dataclass(frozen=True)
class PosteriorEstimate:
    """Posterior point estimates of the population mean and stdev.

    Attributes:
        mean: Average of the retained chain means.
        stdev: Average of the retained chain standard deviations.
        burnin: Index of the first retained history entry.
        n_retained: Number of history entries averaged.
    """

    mean: float
    stdev: float
    burnin: int
    n_retained: int


def _check_burnin(history: ChainHistory, burnin: int) -> int:
    burnin = int(burnin)
    n_generations = history.num_generations
    if burnin < 0:
        raise ValueError(f"burnin must be >= 0; got {burnin}")
    if burnin >= n_generations:
        raise ValueError(
            f"burnin ({burnin}) must be less than the number of recorded generations ({n_generations})"
        )
    return burnin


def retained_draws(history: ChainHistory, burnin: int) -> EmpiricalDistribution:
    """Wraps history entries ``burnin`` .. ``num_generations`` as ``(mean, stdev)`` draws.

    Raises:
        ValueError: If ``burnin`` is negative or not less than the number of
            recorded generations.
    """
    burnin = _check_burnin(history, burnin)
    draws = np.column_stack([history.means[burnin:], history.stdevs[burnin:]])
    return EmpiricalDistribution(draws)


def summarize_posterior(history: ChainHistory, burnin: int) -> PosteriorEstimate:
    """Averages the chain over history indices ``burnin`` .. ``num_generations``.

    Both endpoints are included, so ``num_generations - burnin + 1`` entries
    are averaged.

    Raises:
        ValueError: If ``burnin`` is negative or not less than the number of
            recorded generations.
    """
    draws = retained_draws(history, burnin)
    mean, stdev = draws.mean()
    return PosteriorEstimate(
        mean=float(mean),
        stdev=float(stdev),
        burnin=int(burnin),
        n_retained=draws.n,
    )
