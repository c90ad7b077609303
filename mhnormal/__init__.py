"""Metropolis-Hastings inference of the mean and standard deviation of a Normal population."""

from mhnormal.core.errors import ConfigurationError
from mhnormal.core.config import PriorBounds, SamplerConfig
from mhnormal.core.distributions import Distribution, EmpiricalDistribution
from mhnormal.core.continuous import Normal1D, Uniform1D
from mhnormal.core.data import generate_observations, observations_from_config
from mhnormal.core.likelihood import normal_log_likelihood
from mhnormal.core.chain import ChainState, ChainHistory, run_chain
from mhnormal.core.posterior import PosteriorEstimate, summarize_posterior
from mhnormal.core.module import Module, InputSpec
from mhnormal.core.mcmc import InferenceResult, NormalLikelihood, MetropolisHastings, MCMC, run_inference
from mhnormal.core.workflow import normal_inference_flow

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "PriorBounds",
    "SamplerConfig",
    "Distribution",
    "EmpiricalDistribution",
    "Normal1D",
    "Uniform1D",
    "generate_observations",
    "observations_from_config",
    "normal_log_likelihood",
    "ChainState",
    "ChainHistory",
    "run_chain",
    "PosteriorEstimate",
    "summarize_posterior",
    "Module",
    "InputSpec",
    "InferenceResult",
    "NormalLikelihood",
    "MetropolisHastings",
    "MCMC",
    "run_inference",
    "normal_inference_flow",
]
