import logging
from typing import Optional

from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from ._utils import _as_generator
from .config import SamplerConfig
from .data import observations_from_config
from .mcmc import MCMC, InferenceResult

__all__ = [
    "normal_inference_flow",
]

logger = logging.getLogger(__name__)


@task(name="generate_observations", cache_policy=NO_CACHE)
def _generate_observations_task(config: SamplerConfig, rng):
    return observations_from_config(config, rng)


@flow(name="normal_mean_stdev_inference", validate_parameters=False)
def normal_inference_flow(
    config: Optional[SamplerConfig] = None,
    mcmc: Optional[MCMC] = None,
) -> InferenceResult:
    """Generates a synthetic sample and infers its mean and stdev.

    One generator, seeded from ``config.seed``, drives both the data
    generation and the chain so a seeded flow run is reproducible.

    Args:
        config: Sampler configuration. Defaults to ``SamplerConfig()``.
        mcmc: Inference module. Defaults to :meth:`MCMC.default`.

    Returns:
        The completed history and its posterior estimate.
    """
    config = config or SamplerConfig()
    mcmc = mcmc or MCMC.default()
    rng = _as_generator(config.seed)

    data = _generate_observations_task(config, rng)
    result = mcmc.calculate_posterior(data=data, config=config, rng=rng)

    logger.info(
        "Posterior mean %.4f (true %.4f), posterior stdev %.4f (true %.4f)",
        result.posterior.mean, config.true_mean, result.posterior.stdev, config.true_stdev,
    )
    return result
