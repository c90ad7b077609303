from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import ClassVar, Dict, Optional, Type, Union

import numpy as np
from numpy.typing import NDArray

from .chain import ChainHistory, run_chain
from .config import SamplerConfig
from .distributions import EmpiricalDistribution
from .likelihood import normal_log_likelihood
from .module import Module, InputSpec
from .posterior import PosteriorEstimate, retained_draws, summarize_posterior


__all__ = [
    "InferenceResult",
    "NormalLikelihood",
    "MetropolisHastings",
    "MCMC",
    "run_inference",
]


@dataclass(frozen=True)
class InferenceResult:
    """Completed chain together with its posterior summary.

    Attributes:
        history: Every recorded generation, seed included.
        posterior: Burn-in-discarded point estimates.
    """

    history: ChainHistory
    posterior: PosteriorEstimate

    @property
    def means(self) -> NDArray[np.floating]:
        return self.history.means

    @property
    def stdevs(self) -> NDArray[np.floating]:
        return self.history.stdevs

    @property
    def log_likelihoods(self) -> NDArray[np.floating]:
        return self.history.log_likelihoods

    def to_empirical(self) -> EmpiricalDistribution:
        """Retained ``(mean, stdev)`` draws as an :class:`EmpiricalDistribution`."""
        return retained_draws(self.history, self.posterior.burnin)


def run_inference(
    data: NDArray,
    config: SamplerConfig,
    rng: Optional[Union[np.random.Generator, int]] = None,
) -> InferenceResult:
    """Runs the sampler on ``data`` and summarizes the chain.

    Args:
        data: Observation sample.
        config: Validated sampler configuration; ``config.burnin`` selects
            the retained part of the chain.
        rng: Generator or seed. ``None`` seeds from ``config.seed``.

    Returns:
        The completed history and its posterior estimate.
    """
    history = run_chain(data, config, rng)
    return InferenceResult(history, summarize_posterior(history, config.burnin))


class NormalLikelihood(Module):
    """Log-likelihood of an observation sample under i.i.d. N(mean, stdev²)."""

    DEPENDENCIES = MappingProxyType({})

    def __init__(self):
        super().__init__()

        self.set_input(
            data=InputSpec(type=np.ndarray, required=True),
            mean=InputSpec(type=float, required=True),
            stdev=InputSpec(type=float, required=True),
        )

        self.run_func(self._log_likelihood_task, name="log_likelihood")

    def _log_likelihood_func(self, data, mean, stdev):
        return normal_log_likelihood(data, mean, stdev)

    def _log_likelihood_task(self, *, data, mean, stdev):
        return self._log_likelihood_func(data, mean, stdev)


class MetropolisHastings(Module):
    """Random-walk Metropolis-Hastings sampler over ``(mean, stdev)``.

    Seeds the chain with a uniform draw from the prior box and runs
    ``config.num_generations`` steps, recording every generation. The
    likelihood is provided by the ``likelihood`` dependency.

    Attributes:
        DEPENDENCIES: ``'likelihood'`` (a :class:`NormalLikelihood`).
    """

    DEPENDENCIES: ClassVar[Dict[str, Type[Module]]] = MappingProxyType({
        'likelihood': NormalLikelihood,
    })

    def __init__(self, likelihood: NormalLikelihood):
        """Initializes the sampler.

        Args:
            likelihood: Module evaluating the log-likelihood.
        """
        super().__init__(likelihood=likelihood)
        self.set_input(
            data=InputSpec(type=np.ndarray, required=True),
            config=InputSpec(type=SamplerConfig, required=True),
            rng=InputSpec(required=False, default=None),
        )
        self.run_func(self._sample_chain, name="sample_chain")

    def _sample_chain(self, *, data, config, rng=None) -> ChainHistory:
        """Draws a chain approximating p(mean, stdev | data).

        The likelihood dependency is called through ``_log_likelihood_func``
        inside the chain loop. Going through its Prefect task would create
        one task run per generation.

        Args:
            data: Observation sample.
            config: Sampler configuration.
            rng: Generator or seed; ``None`` seeds from ``config.seed``.

        Returns:
            History with ``config.num_generations + 1`` entries.
        """
        likelihood = self.dependencies['likelihood']
        return run_chain(data, config, rng, log_likelihood=likelihood._log_likelihood_func)


class MCMC(Module):
    """Posterior estimation of a Normal population's mean and stdev.

    Runs the ``sampler`` dependency and summarizes the resulting chain by
    averaging it after ``config.burnin``.

    Attributes:
        DEPENDENCIES: ``'sampler'`` (a :class:`MetropolisHastings`).
    """

    DEPENDENCIES: ClassVar[Dict[str, Type[Module]]] = MappingProxyType({
        'sampler': MetropolisHastings,
    })

    def __init__(self, sampler: MetropolisHastings):
        super().__init__(sampler=sampler)

        self.set_input(
            data=InputSpec(type=np.ndarray, required=True),
            config=InputSpec(type=SamplerConfig, required=True),
            rng=InputSpec(required=False, default=None),
        )

        self.run_func(self._calculate_posterior, name="calculate_posterior")

    @classmethod
    def default(cls) -> "MCMC":
        """MCMC wired to a Metropolis-Hastings sampler and Normal likelihood."""
        return cls(sampler=MetropolisHastings(likelihood=NormalLikelihood()))

    def _calculate_posterior(self, *, data, config, rng=None) -> InferenceResult:
        """Estimates the posterior via Metropolis-Hastings sampling.

        Args:
            data: Observation sample.
            config: Sampler configuration.
            rng: Generator or seed; ``None`` seeds from ``config.seed``.

        Returns:
            The completed history and its posterior estimate.
        """
        sampler = self.dependencies["sampler"]

        history = sampler._sample_chain(data=data, config=config, rng=rng)
        return InferenceResult(history, summarize_posterior(history, config.burnin))
