from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from ..custom_types import Array, ArrayLike, PRNG


def _as_2d(x: NDArray) -> NDArray:
    """Converts input to a 2-D float array of column draws.

    A 1-D array of n draws is reshaped to (n, 1). 2-D arrays are kept
    unchanged except for dtype casting to float.

    Args:
        x (NDArray): Input array of shape (n,) or (n, d).

    Returns:
        NDArray: Float array of shape (n, d).
    """
    x = np.asarray(x, dtype=float)
    return x.reshape(-1, 1) if x.ndim <= 1 else x


def _to_1d_vector(values: NDArray) -> NDArray[np.floating]:
    """Normalizes input to a 1-D float vector of shape (n,).

    Accepts scalars, 1-D arrays, or 2-D column vectors and converts them
    to a standardized 1-D float array.

    Args:
        values (NDArray): Input values as scalar, (n,), or (n, 1).

    Returns:
        NDArray[np.floating]: Flattened 1-D array.

    Raises:
        ValueError: If the input is not scalar, (n,), or (n, 1).
    """
    arr = np.asarray(values, dtype=float)
    if arr.ndim == 0:
        return arr.reshape(1)
    if arr.ndim == 1:
        return arr
    if arr.ndim == 2 and arr.shape[1] == 1:
        return arr[:, 0]
    raise ValueError("values must be scalar, (n,), or (n,1).")


def _as_observations(data: ArrayLike) -> Array:
    """Returns a read-only 1-D float copy of an observation sample.

    Raises:
        ValueError: If the sample is empty or contains non-finite values.
    """
    x = np.array(_to_1d_vector(data), dtype=float, copy=True)
    if x.size == 0:
        raise ValueError("observation sample must contain at least one value.")
    if not np.all(np.isfinite(x)):
        raise ValueError("observation sample must contain only finite values.")
    x.setflags(write=False)
    return x


def _as_generator(
    rng: Optional[Union[PRNG, int]] = None,
) -> PRNG:
    """Coerces a seed or generator into a ``np.random.Generator``.

    ``None`` gives a freshly seeded generator, an int is used as the seed and
    an existing generator is returned unchanged so its stream is shared.
    """
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)
