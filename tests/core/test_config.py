import numpy as np
import pytest

from mhnormal.core.config import PriorBounds, SamplerConfig
from mhnormal.core.errors import ConfigurationError


def test_defaults_are_valid():
    cfg = SamplerConfig()
    assert cfg.num_generations == 3000
    assert cfg.burnin == 1000
    assert cfg.proposal_scale == 1.0
    assert cfg.prior_ratio_mode == "uniform"
    assert cfg.bounds == PriorBounds(0.0, 50.0, 0.0, 10.0)


@pytest.mark.parametrize("changes", [
    dict(num_generations=0),
    dict(num_generations=-5, burnin=0),
    dict(num_generations=100, burnin=100),
    dict(num_generations=100, burnin=150),
    dict(burnin=-1),
    dict(mean_low=5.0, mean_high=5.0),
    dict(mean_low=10.0, mean_high=0.0),
    dict(stdev_low=3.0, stdev_high=2.0),
    dict(stdev_low=-1.0),
    dict(sample_size=0),
    dict(true_stdev=0.0),
    dict(proposal_scale=-0.1),
    dict(progress_interval=-1),
    dict(prior_ratio_mode="symmetric"),
    dict(mean_high=float("inf")),
    dict(true_mean=float("nan")),
])
def test_invalid_configuration_fails_fast(changes):
    with pytest.raises(ConfigurationError):
        SamplerConfig(**changes)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        SamplerConfig(burnin=5000)


@pytest.mark.parametrize("changes", [
    dict(sample_size=10.5),
    dict(num_generations="3000"),
    dict(burnin=True),
    dict(mean_low="0"),
    dict(seed=1.5),
])
def test_wrong_types_rejected(changes):
    with pytest.raises(ConfigurationError):
        SamplerConfig(**changes)


def test_numpy_scalars_are_normalised():
    cfg = SamplerConfig(num_generations=np.int64(10), burnin=np.int64(2), mean_low=np.float32(1.0))
    assert type(cfg.num_generations) is int
    assert type(cfg.mean_low) is float


def test_with_updates_validates():
    cfg = SamplerConfig()
    short = cfg.with_updates(num_generations=10, burnin=2)
    assert short.num_generations == 10
    assert cfg.num_generations == 3000

    with pytest.raises(ConfigurationError):
        cfg.with_updates(burnin=3000)
    with pytest.raises(ConfigurationError):
        cfg.with_updates(not_a_field=1)


def test_from_mapping_round_trips_and_rejects_unknown_keys():
    cfg = SamplerConfig(seed=3, num_generations=20, burnin=5)
    assert SamplerConfig.from_mapping(cfg.to_dict()) == cfg

    with pytest.raises(ConfigurationError, match="Unknown configuration keys"):
        SamplerConfig.from_mapping({"num_generations": 10, "burn_in": 2})


class TestPriorBounds:

    bounds = PriorBounds(0.0, 50.0, 0.0, 10.0)

    def test_inside(self):
        assert self.bounds.contains(10.0, 1.0)

    def test_edges_are_inclusive(self):
        assert self.bounds.contains(0.0, 10.0)
        assert self.bounds.contains(50.0, 0.5)

    @pytest.mark.parametrize("mean,stdev", [
        (-0.01, 1.0),
        (50.01, 1.0),
        (10.0, 10.01),
        (10.0, -0.5),
        (10.0, 0.0),
        (float("nan"), 1.0),
        (10.0, float("inf")),
    ])
    def test_outside(self, mean, stdev):
        assert not self.bounds.contains(mean, stdev)

    def test_widths(self):
        assert self.bounds.mean_width == 50.0
        assert self.bounds.stdev_width == 10.0
