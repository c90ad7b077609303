import numpy as np
import pytest

from mhnormal.core.chain import ChainHistory, run_chain
from mhnormal.core.likelihood import normal_log_likelihood
from mhnormal.core.mcmc import (
    MCMC,
    InferenceResult,
    MetropolisHastings,
    NormalLikelihood,
    run_inference,
)
from mhnormal.core.module import Module
from mhnormal.core.posterior import summarize_posterior


def test_sampler_requires_a_likelihood():
    with pytest.raises(TypeError):
        MetropolisHastings()
    with pytest.raises(RuntimeError):
        Module.__init__(MetropolisHastings.__new__(MetropolisHastings))
    with pytest.raises(TypeError):
        MCMC(sampler=NormalLikelihood())


def test_default_wiring():
    mcmc = MCMC.default()
    sampler = mcmc.dependencies['sampler']
    assert isinstance(sampler, MetropolisHastings)
    assert isinstance(sampler.dependencies['likelihood'], NormalLikelihood)


def test_run_inference_matches_chain_and_summary(small_sample, config):
    result = run_inference(small_sample, config)
    history = run_chain(small_sample, config)

    assert isinstance(result, InferenceResult)
    np.testing.assert_array_equal(result.history.as_array(), history.as_array())
    assert result.posterior == summarize_posterior(history, config.burnin)
    np.testing.assert_array_equal(result.means, history.means)
    np.testing.assert_array_equal(result.stdevs, history.stdevs)
    np.testing.assert_array_equal(result.log_likelihoods, history.log_likelihoods)


def test_to_empirical(small_sample, config):
    result = run_inference(small_sample, config)
    emp = result.to_empirical()
    assert emp.n == config.num_generations - config.burnin + 1
    np.testing.assert_allclose(emp.mean(), [result.posterior.mean, result.posterior.stdev])


@pytest.mark.usefixtures("prefect_harness")
class TestModules:

    def test_likelihood_task(self, small_sample):
        lik = NormalLikelihood()
        value = lik.log_likelihood(data=small_sample, mean=10, stdev=1.0)
        assert value == pytest.approx(normal_log_likelihood(small_sample, 10.0, 1.0))

    def test_likelihood_task_rejects_bad_inputs(self, small_sample):
        lik = NormalLikelihood()
        with pytest.raises(TypeError):
            lik.log_likelihood(data=small_sample, mean=10.0)
        with pytest.raises(TypeError):
            lik.log_likelihood(data=[9.0, 10.0], mean=10.0, stdev=1.0)

    def test_sample_chain_task(self, small_sample, config):
        sampler = MetropolisHastings(likelihood=NormalLikelihood())
        history = sampler.sample_chain(data=small_sample, config=config)

        assert isinstance(history, ChainHistory)
        assert len(history) == config.num_generations + 1
        np.testing.assert_array_equal(history.as_array(), run_chain(small_sample, config).as_array())

    def test_sample_chain_requires_config(self, small_sample):
        sampler = MetropolisHastings(likelihood=NormalLikelihood())
        with pytest.raises(TypeError):
            sampler.sample_chain(data=small_sample)
        with pytest.raises(TypeError):
            sampler.sample_chain(data=small_sample, config={"num_generations": 10})

    def test_calculate_posterior_task(self, small_sample, config):
        mcmc = MCMC.default()
        result = mcmc.calculate_posterior(data=small_sample, config=config, rng=np.random.default_rng(4))
        expected = run_inference(small_sample, config, np.random.default_rng(4))

        assert isinstance(result, InferenceResult)
        np.testing.assert_array_equal(result.history.as_array(), expected.history.as_array())
        assert result.posterior == expected.posterior
