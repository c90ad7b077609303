import pytest
import numpy as np

from mhnormal.core.config import SamplerConfig


@pytest.fixture
def rng():
    return np.random.default_rng(42)

@pytest.fixture
def small_sample():
    return np.array([9.0, 10.0, 11.0])

@pytest.fixture
def config():
    # short chain; statistical checks use their own configuration
    return SamplerConfig(num_generations=200, burnin=50, seed=7, progress_interval=0)

@pytest.fixture(scope="session")
def prefect_harness():
    from prefect.testing.utilities import prefect_test_harness

    with prefect_test_harness():
        yield
