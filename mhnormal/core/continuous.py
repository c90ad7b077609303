from typing import Optional

import numpy as np
from numpy.typing import NDArray
from scipy.stats import norm

from .distributions import Distribution

__all__ = [
    "Normal1D",
    "Uniform1D",
]


class Normal1D(Distribution[np.floating]):
    """Univariate Normal distribution N(μ, σ²).

    Draws the synthetic observation sample. ``sample(n)`` returns shape (n, 1).

    Attributes:
        mu: Mean of the distribution.
        sigma: Standard deviation (must be > 0).
        _rng: Random number generator used for sampling.
    """

    def __init__(self, mu: float, sigma: float, *, rng: Optional[np.random.Generator] = None):
        """Initializes a Normal1D distribution.

        Args:
            mu: Mean of the distribution.
            sigma: Standard deviation (must be > 0).
            rng: Random number generator.
                If ``None``, a default generator is created.

        Raises:
            ValueError: If ``sigma`` is not positive.
        """

        if sigma <= 0:
            raise ValueError("sigma must be > 0")
        self.mu = float(mu)
        self.sigma = float(sigma)
        self._rng = rng or np.random.default_rng()

        self._norm = norm(loc=self.mu, scale=self.sigma)

    def sample(self, n_samples: int) -> NDArray[np.floating]:
        """Draws samples of shape (n_samples, 1)."""
        xs = self._norm.rvs(size=(int(n_samples), 1), random_state=self._rng)
        return np.asarray(xs, dtype=float)  # (n, 1)

    def mean(self) -> NDArray[np.floating]:
        return np.array([self.mu], dtype=float)  # (1,)

    def __repr__(self) -> str:
        return f"Normal1D(mu={self.mu}, sigma={self.sigma})"


class Uniform1D(Distribution[np.floating]):
    """Univariate uniform distribution U[low, high].

    Draws one coordinate of the chain seed inside the prior box.
    ``sample(n)`` returns shape (n, 1) like :class:`Normal1D`.
    """

    def __init__(self, low: float, high: float, *, rng: Optional[np.random.Generator] = None):
        if not high > low:
            raise ValueError("high must be greater than low")
        self.low = float(low)
        self.high = float(high)
        self._rng = rng or np.random.default_rng()

    def sample(self, n_samples: int) -> NDArray[np.floating]:
        """Draws samples of shape (n_samples, 1)."""
        xs = self._rng.uniform(self.low, self.high, size=(int(n_samples), 1))
        return np.asarray(xs, dtype=float)

    def mean(self) -> NDArray[np.floating]:
        return np.array([0.5 * (self.low + self.high)], dtype=float)

    def __repr__(self) -> str:
        return f"Uniform1D(low={self.low}, high={self.high})"
