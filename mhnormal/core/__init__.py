from .errors import ConfigurationError
from .config import PriorBounds, SamplerConfig
from .distributions import Distribution, EmpiricalDistribution
from .continuous import Normal1D, Uniform1D
from .data import generate_observations, observations_from_config
from .likelihood import normal_log_likelihood
from .chain import (
    ChainState,
    StepResult,
    ChainHistory,
    prior_ratio,
    accept_move,
    propose,
    initialize_chain,
    metropolis_hastings_step,
    run_chain,
)
from .posterior import PosteriorEstimate, summarize_posterior, retained_draws
from .module import Module, InputSpec
from .mcmc import InferenceResult, NormalLikelihood, MetropolisHastings, MCMC, run_inference
from .workflow import normal_inference_flow
