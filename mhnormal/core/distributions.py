from typing import Generic, TypeVar
from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray

from ._utils import _as_2d

__all__ = [
    "Distribution",
    "EmpiricalDistribution",
]

T = TypeVar("T", bound=np.number)


# -------------------------- Abstract Classes ----------------------------


class Distribution(Generic[T], ABC):
    """
    Abstract base class for probability distributions.

    Shared by the parametric distributions that generate observations and
    seed the chain, and by the empirical container that holds retained
    chain draws.

    Type Variables:
        T: Numeric data type (e.g., float or np.floating).
    """

    def sample(self, n_samples: int) -> NDArray[T]:
        """
        Samples data points from the distribution.

        Args:
            n_samples: The number of samples to generate.

        Returns:
            NDArray[T]: An array containing `n_samples` draws.

        Raises:
            NotImplementedError: If the subclass does not implement this method.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    @abstractmethod
    def mean(self) -> NDArray[np.floating]:
        """Returns the mean vector of shape (d,)."""


class EmpiricalDistribution(Distribution):
    """
    Equally weighted draws in ℝᵈ, one column per parameter.

    Holds the post-burn-in part of a Markov chain. The stored draws are
    read-only.

    Attributes:
        n (int): Number of stored draws.
        d (int): Number of parameters.
        samples (NDArray): Stored draws of shape (n, d).
    """

    def __init__(self, samples: NDArray):
        """Initializes an EmpiricalDistribution.

        Args:
            samples (NDArray): Draws with shape (n, d), or (n,) for a single
                parameter.

        Raises:
            ValueError: If there are no draws.
        """

        X = np.array(_as_2d(samples), dtype=float, copy=True)
        n, d = X.shape
        if n < 1:
            raise ValueError("Empirical requires at least one sample.")
        X.setflags(write=False)

        self._X = X
        self._n = int(n)
        self._d = int(d)

        # shifted by the first draw so a constant column averages to exactly that value
        ref = X[0]
        self._mean = ref + (X - ref).sum(axis=0) / n

    @property
    def n(self) -> int:
        return self._n

    @property
    def d(self) -> int:
        return self._d

    @property
    def samples(self) -> NDArray:
        return self._X

    def mean(self) -> NDArray:
        """Mean vector of shape (d,)."""
        return self._mean

    def __repr__(self) -> str:
        return f"EmpiricalDistribution(n={self._n}, d={self._d})"
