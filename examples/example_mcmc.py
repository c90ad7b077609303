"""
Example: posterior of a Normal population's mean and stdev
----------------------------------------------------------

Model:
    y_i   ~ Normal(mean, stdev^2),  i = 1..10
    mean  ~ Uniform(0, 50)
    stdev ~ Uniform(0, 10)

We draw ten observations from N(10, 1) and recover (mean, stdev) with a
random-walk Metropolis-Hastings sampler, logging progress every 500
generations.
"""

import logging

import numpy as np
from mhnormal import (
    MCMC,
    MetropolisHastings,
    NormalLikelihood,
    SamplerConfig,
    observations_from_config,
)
from mhnormal.core.chain import initialize_chain, metropolis_hastings_step

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

config = SamplerConfig(
    sample_size=10,
    true_mean=10.0,
    true_stdev=1.0,
    num_generations=3000,
    burnin=1000,
    seed=2024,
)
rng = np.random.default_rng(config.seed)
observed_data = observations_from_config(config, rng)
print("Observations:", np.round(observed_data, 3))
print("Sample mean / stdev:", observed_data.mean(), observed_data.std(ddof=1))

# A few steps by hand, to see proposals being accepted or rejected
history = initialize_chain(observed_data, config, rng)
state = history.latest
print("Seed state:", state)
for _ in range(5):
    step = metropolis_hastings_step(state, observed_data, config.bounds, config.proposal_scale, rng)
    verdict = "accepted" if step.accepted else "rejected"
    print(f"proposed mean={step.proposed_mean:.3f} stdev={step.proposed_stdev:.3f} -> {verdict}")
    state = step.state

# The full run
mcmc = MCMC(sampler=MetropolisHastings(likelihood=NormalLikelihood()))
result = mcmc.calculate_posterior(data=observed_data, config=config)

print("Chain length:", len(result.history))
print("Acceptance rate:", result.history.acceptance_rate)
print("Posterior mean:", result.posterior.mean)
print("Posterior stdev:", result.posterior.stdev)
print("Retained draws:", result.to_empirical())
