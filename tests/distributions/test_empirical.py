import numpy as np
import pytest

from mhnormal.core.distributions import EmpiricalDistribution


def test_init_rejects_empty_samples():
    with pytest.raises(ValueError):
        EmpiricalDistribution(np.empty((0, 2)))


def test_univariate_draws_become_a_column():
    emp = EmpiricalDistribution(np.array([1.0, 3.0, 5.0]))
    assert emp.n == 3
    assert emp.d == 1
    assert emp.samples.shape == (3, 1)
    assert np.allclose(emp.mean(), [3.0])


def test_chain_columns_mean():
    X = np.array([[9.0, 1.0],
                  [10.0, 1.5],
                  [11.0, 0.5]])
    emp = EmpiricalDistribution(X)

    assert emp.d == 2
    assert np.allclose(emp.mean(), [10.0, 1.0], atol=1e-12)


def test_constant_columns_average_exactly():
    X = np.tile([0.1 + 0.2, 1.0 / 3.0], (1001, 1))
    emp = EmpiricalDistribution(X)
    assert emp.mean()[0] == X[0, 0]
    assert emp.mean()[1] == X[0, 1]


def test_samples_are_a_read_only_copy():
    X = np.array([[1.0, 2.0], [3.0, 4.0]])
    emp = EmpiricalDistribution(X)
    X[0, 0] = 100.0

    assert emp.samples[0, 0] == 1.0
    with pytest.raises(ValueError):
        emp.samples[0, 0] = 5.0


def test_repr():
    assert repr(EmpiricalDistribution(np.zeros((4, 2)))) == "EmpiricalDistribution(n=4, d=2)"
