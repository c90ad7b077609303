"""Random-walk Metropolis-Hastings chain over the ``(mean, stdev)`` of a Normal.

The chain engine is written as plain functions around two small containers:
:class:`ChainState`, the current ``(mean, stdev, log_likelihood)`` triple, and
:class:`ChainHistory`, the pre-allocated record of every generation. A run
owns its history and its generator; nothing is kept at module level between
runs.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Iterator, NamedTuple, Optional, Union

import numpy as np
from numpy.typing import NDArray

from ._utils import _as_generator, _as_observations
from .config import PriorBounds, SamplerConfig
from .continuous import Uniform1D
from .likelihood import normal_log_likelihood

__all__ = [
    "ChainState",
    "StepResult",
    "ChainHistory",
    "prior_ratio",
    "accept_move",
    "propose",
    "initialize_chain",
    "metropolis_hastings_step",
    "run_chain",
]

logger = logging.getLogger(__name__)

LogLikelihoodFn = Callable[[NDArray, float, float], float]


class ChainState(NamedTuple):
    """One generation of the chain."""

    mean: float
    stdev: float
    log_likelihood: float


class StepResult(NamedTuple):
    """Outcome of a single Metropolis-Hastings step.

    ``state`` is what gets recorded: the proposal when ``accepted``, the
    previous state otherwise.
    """

    state: ChainState
    proposed_mean: float
    proposed_stdev: float
    prior_ratio: float
    accepted: bool


class ChainHistory:
    """Aligned record of means, standard deviations and log-likelihoods.

    Storage is allocated up front for ``capacity`` entries (the seed plus one
    entry per generation). Index 0 holds the seed draw. The column
    accessors return read-only views over the filled prefix, so a summary
    step can read the history but never modify it.

    Attributes:
        capacity: Maximum number of entries.
        n_accepted: Number of appended entries that were accepted moves.
    """

    def __init__(self, capacity: int):
        capacity = int(capacity)
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1; got {capacity}")
        self._means = np.empty(capacity, dtype=float)
        self._stdevs = np.empty(capacity, dtype=float)
        self._log_likelihoods = np.empty(capacity, dtype=float)
        self._size = 0
        self._n_accepted = 0

    @classmethod
    def from_arrays(cls, means: NDArray, stdevs: NDArray, log_likelihoods: NDArray) -> "ChainHistory":
        """Builds a full history from three aligned 1-D arrays.

        Raises:
            ValueError: If the arrays are empty, not 1-D, or differ in length.
        """
        m = np.asarray(means, dtype=float)
        s = np.asarray(stdevs, dtype=float)
        ll = np.asarray(log_likelihoods, dtype=float)
        if m.ndim != 1 or s.ndim != 1 or ll.ndim != 1:
            raise ValueError("history columns must be 1-D.")
        if not (m.shape == s.shape == ll.shape):
            raise ValueError(
                f"history columns must have equal length; got {m.shape[0]}, {s.shape[0]}, {ll.shape[0]}"
            )
        history = cls(m.shape[0])
        history._means[:] = m
        history._stdevs[:] = s
        history._log_likelihoods[:] = ll
        history._size = m.shape[0]
        return history

    # ------------------------------------------------------------------ writes

    def append(self, state: ChainState, *, accepted: bool = False) -> None:
        """Records ``state`` as the next generation.

        Raises:
            RuntimeError: If the history is already full.
        """
        if self._size >= self.capacity:
            raise RuntimeError(f"ChainHistory is full ({self.capacity} entries).")
        i = self._size
        self._means[i] = state.mean
        self._stdevs[i] = state.stdev
        self._log_likelihoods[i] = state.log_likelihood
        self._size += 1
        if accepted:
            self._n_accepted += 1

    # ------------------------------------------------------------------- reads

    @property
    def capacity(self) -> int:
        return self._means.shape[0]

    @property
    def is_full(self) -> bool:
        return self._size == self.capacity

    @property
    def num_generations(self) -> int:
        """Number of generations recorded after the seed."""
        return max(self._size - 1, 0)

    @property
    def n_accepted(self) -> int:
        return self._n_accepted

    @property
    def acceptance_rate(self) -> float:
        """Fraction of generations whose proposal was accepted."""
        if self.num_generations == 0:
            return 0.0
        return self._n_accepted / self.num_generations

    @property
    def latest(self) -> ChainState:
        if self._size == 0:
            raise IndexError("ChainHistory is empty.")
        return self[self._size - 1]

    @property
    def means(self) -> NDArray[np.floating]:
        return self._read_only(self._means)

    @property
    def stdevs(self) -> NDArray[np.floating]:
        return self._read_only(self._stdevs)

    @property
    def log_likelihoods(self) -> NDArray[np.floating]:
        return self._read_only(self._log_likelihoods)

    def as_array(self) -> NDArray[np.floating]:
        """Copy of the filled history as an (n, 3) array of (mean, stdev, log_likelihood)."""
        return np.column_stack([self.means, self.stdevs, self.log_likelihoods])

    def _read_only(self, column: NDArray) -> NDArray:
        view = column[:self._size].view()
        view.setflags(write=False)
        return view

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, index: int) -> ChainState:
        index = int(index)
        if index < 0:
            index += self._size
        if not 0 <= index < self._size:
            raise IndexError(f"history index out of range: {index}")
        return ChainState(
            float(self._means[index]),
            float(self._stdevs[index]),
            float(self._log_likelihoods[index]),
        )

    def __iter__(self) -> Iterator[ChainState]:
        for i in range(self._size):
            yield self[i]

    def __repr__(self) -> str:
        return f"ChainHistory(len={self._size}, capacity={self.capacity}, n_accepted={self._n_accepted})"


# ----------------------------------------------------------------- algorithm


def prior_ratio(bounds: PriorBounds, mean: float, stdev: float, mode: str = "uniform") -> float:
    """Prior factor of the acceptance ratio for a proposed ``(mean, stdev)``.

    Outside the prior support the factor is 0. Inside it, ``"uniform"``
    gives 1 (the two uniform densities cancel) and ``"reference"`` gives
    ``1 / (mean_high - mean_low)``.

    Raises:
        ValueError: If ``mode`` is unknown.
    """
    if mode not in ("uniform", "reference"):
        raise ValueError(f"unknown prior ratio mode: {mode!r}")
    if not bounds.contains(mean, stdev):
        return 0.0
    if mode == "reference":
        return 1.0 / bounds.mean_width
    return 1.0


def accept_move(log_likelihood_ratio: float, prior_ratio: float, u: float) -> bool:
    """Metropolis acceptance rule for a symmetric proposal.

    Accepts when ``exp(log_likelihood_ratio) * prior_ratio`` exceeds 1, or
    else exceeds ``u``. The comparison is done in log space so an overflowing
    ratio accepts and a NaN ratio rejects. A zero prior ratio always rejects.
    """
    if prior_ratio <= 0.0:
        return False
    log_ratio = log_likelihood_ratio + math.log(prior_ratio)
    if math.isnan(log_ratio):
        return False
    if log_ratio > 0.0:
        return True
    if u <= 0.0:
        return log_ratio > -math.inf
    return log_ratio > math.log(u)


def propose(state: ChainState, proposal_scale: float, rng: np.random.Generator) -> tuple:
    """Draws ``(mean', stdev')`` from Normal random walks centred on ``state``."""
    proposed_mean = float(rng.normal(state.mean, proposal_scale))
    proposed_stdev = float(rng.normal(state.stdev, proposal_scale))
    return proposed_mean, proposed_stdev


def metropolis_hastings_step(
    state: ChainState,
    data: NDArray,
    bounds: PriorBounds,
    proposal_scale: float,
    rng: np.random.Generator,
    *,
    prior_ratio_mode: str = "uniform",
    log_likelihood: LogLikelihoodFn = normal_log_likelihood,
) -> StepResult:
    """Runs one Metropolis-Hastings step from ``state``.

    The likelihood is only evaluated for proposals inside the prior support.
    The uniform draw is taken on every step, so the random stream does not
    depend on which branch a step takes.

    Args:
        state: Current chain state.
        data: Observation sample.
        bounds: Support of the uniform prior.
        proposal_scale: Standard deviation of the random-walk proposal.
        rng: Generator supplying every draw.
        prior_ratio_mode: See :func:`prior_ratio`.
        log_likelihood: Callable ``(data, mean, stdev) -> float``.

    Returns:
        The step outcome; ``result.state`` is the state to record.
    """
    proposed_mean, proposed_stdev = propose(state, proposal_scale, rng)
    ratio = prior_ratio(bounds, proposed_mean, proposed_stdev, prior_ratio_mode)
    if ratio > 0.0:
        proposed_log_likelihood = float(log_likelihood(data, proposed_mean, proposed_stdev))
    else:
        proposed_log_likelihood = -math.inf
    u = float(rng.uniform(0.0, 1.0))

    accepted = accept_move(proposed_log_likelihood - state.log_likelihood, ratio, u)
    if accepted:
        new_state = ChainState(proposed_mean, proposed_stdev, proposed_log_likelihood)
    else:
        new_state = state
    return StepResult(new_state, proposed_mean, proposed_stdev, ratio, accepted)


def initialize_chain(
    data: NDArray,
    config: SamplerConfig,
    rng: np.random.Generator,
    *,
    log_likelihood: LogLikelihoodFn = normal_log_likelihood,
) -> ChainHistory:
    """Seeds a history with a uniform draw from the prior box.

    Returns:
        A history with capacity ``num_generations + 1`` holding the seed
        state at index 0.
    """
    mean = float(Uniform1D(config.mean_low, config.mean_high, rng=rng).sample(1)[0, 0])
    stdev = float(Uniform1D(config.stdev_low, config.stdev_high, rng=rng).sample(1)[0, 0])
    seed_state = ChainState(mean, stdev, float(log_likelihood(data, mean, stdev)))

    history = ChainHistory(config.num_generations + 1)
    history.append(seed_state)
    logger.debug("Seeded chain at mean=%.6g stdev=%.6g log_likelihood=%.6g", *seed_state)
    return history


def run_chain(
    data: NDArray,
    config: SamplerConfig,
    rng: Optional[Union[np.random.Generator, int]] = None,
    *,
    log_likelihood: LogLikelihoodFn = normal_log_likelihood,
) -> ChainHistory:
    """Runs a full chain of ``config.num_generations`` steps.

    Args:
        data: Observation sample, scalar or array-like of shape (n,) / (n, 1).
        config: Validated sampler configuration.
        rng: Generator or seed. ``None`` seeds a new generator from
            ``config.seed``.
        log_likelihood: Callable ``(data, mean, stdev) -> float``.

    Returns:
        The completed history with ``num_generations + 1`` entries.

    Raises:
        ValueError: If ``data`` is empty, malformed or non-finite.
    """
    data = _as_observations(data)
    rng = _as_generator(config.seed if rng is None else rng)
    bounds = config.bounds

    logger.info(
        "Running Metropolis-Hastings for %d generations on %d observations (proposal_scale=%g)",
        config.num_generations, data.shape[0], config.proposal_scale,
    )
    history = initialize_chain(data, config, rng, log_likelihood=log_likelihood)

    for generation in range(1, config.num_generations + 1):
        result = metropolis_hastings_step(
            history.latest,
            data,
            bounds,
            config.proposal_scale,
            rng,
            prior_ratio_mode=config.prior_ratio_mode,
            log_likelihood=log_likelihood,
        )
        history.append(result.state, accepted=result.accepted)

        if config.progress_interval and generation % config.progress_interval == 0:
            logger.info(
                "generation %d/%d: mean=%.4f stdev=%.4f log_likelihood=%.4f",
                generation, config.num_generations, *result.state,
            )

    logger.info("Chain finished; acceptance rate %.3f", history.acceptance_rate)
    return history
