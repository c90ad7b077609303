import math

import numpy as np
import pytest
from scipy.stats import norm

from mhnormal.core.likelihood import normal_log_likelihood


def test_matches_sum_of_pointwise_log_densities(small_sample):
    expected = sum(math.log(norm.pdf(x, loc=9.5, scale=1.3)) for x in small_sample)
    assert normal_log_likelihood(small_sample, 9.5, 1.3) == pytest.approx(expected, rel=1e-12)


def test_returns_python_float(small_sample):
    assert isinstance(normal_log_likelihood(small_sample, 10.0, 1.0), float)


@pytest.mark.parametrize("stdev", [0.0, -1.0, float("nan"), float("inf")])
def test_degenerate_stdev_has_no_density(small_sample, stdev):
    assert normal_log_likelihood(small_sample, 10.0, stdev) == -math.inf


def test_non_finite_mean_has_no_density(small_sample):
    assert normal_log_likelihood(small_sample, float("inf"), 1.0) == -math.inf


def test_grid_peak_is_at_sample_mean_and_mle_stdev(small_sample):
    means = np.linspace(5.0, 15.0, 201)
    stdevs = np.linspace(0.1, 5.0, 99)
    grid = np.array([[normal_log_likelihood(small_sample, m, s) for s in stdevs] for m in means])

    i, j = np.unravel_index(np.argmax(grid), grid.shape)
    # the maximum likelihood stdev of [9, 10, 11] is sqrt(2/3)
    assert means[i] == pytest.approx(10.0, abs=0.05)
    assert stdevs[j] == pytest.approx(math.sqrt(2.0 / 3.0), abs=0.05)


def test_likelihood_decreases_away_from_sample_mean(small_sample):
    values = [normal_log_likelihood(small_sample, m, 1.0) for m in (10.0, 11.0, 12.0, 13.0)]
    assert values == sorted(values, reverse=True)
    values = [normal_log_likelihood(small_sample, m, 1.0) for m in (10.0, 9.0, 8.0, 7.0)]
    assert values == sorted(values, reverse=True)
