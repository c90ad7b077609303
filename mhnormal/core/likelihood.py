import math

import numpy as np
from scipy.stats import norm

from ..custom_types import ArrayLike

__all__ = [
    "normal_log_likelihood",
]


def normal_log_likelihood(data: ArrayLike, mean: float, stdev: float) -> float:
    """Total log-likelihood of ``data`` under i.i.d. N(mean, stdev²).

    Non-positive or non-finite parameters have no density; they give
    ``-inf`` instead of evaluating the Normal with an invalid scale.

    Args:
        data: 1-D observation sample.
        mean: Candidate population mean.
        stdev: Candidate population standard deviation.

    Returns:
        Sum of the pointwise Normal log-densities.
    """
    mean = float(mean)
    stdev = float(stdev)
    if not (math.isfinite(mean) and math.isfinite(stdev)) or stdev <= 0.0:
        return -math.inf
    return float(np.sum(norm.logpdf(data, loc=mean, scale=stdev)))
