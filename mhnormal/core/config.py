from __future__ import annotations

import dataclasses
import math
import numbers
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .errors import ConfigurationError

__all__ = [
    "PriorBounds",
    "SamplerConfig",
    "PRIOR_RATIO_MODES",
]

PRIOR_RATIO_MODES = ("uniform", "reference")


@dataclass(frozen=True)
class PriorBounds:
    """Support of the uniform box prior over ``(mean, stdev)``.

    Attributes:
        mean_low: Lower bound of the mean prior.
        mean_high: Upper bound of the mean prior.
        stdev_low: Lower bound of the standard deviation prior.
        stdev_high: Upper bound of the standard deviation prior.
    """

    mean_low: float
    mean_high: float
    stdev_low: float
    stdev_high: float

    def contains(self, mean: float, stdev: float) -> bool:
        """Whether ``(mean, stdev)`` has positive prior mass.

        Bounds are inclusive. A non-positive ``stdev`` is never in the
        support, even when ``stdev_low`` is zero.
        """
        if not (math.isfinite(mean) and math.isfinite(stdev)):
            return False
        if stdev <= 0.0:
            return False
        if stdev < self.stdev_low or stdev > self.stdev_high:
            return False
        if mean < self.mean_low or mean > self.mean_high:
            return False
        return True

    @property
    def mean_width(self) -> float:
        return self.mean_high - self.mean_low

    @property
    def stdev_width(self) -> float:
        return self.stdev_high - self.stdev_low


@dataclass(frozen=True)
class SamplerConfig:
    """Configuration of one Metropolis-Hastings run.

    The first three fields describe the synthetic observation sample, the
    four bounds define the uniform prior, and the rest drive the chain.
    All fields are validated on construction.

    Attributes:
        sample_size: Number of observations to generate.
        true_mean: Mean of the population the observations are drawn from.
        true_stdev: Standard deviation of that population.
        mean_low: Lower bound of the mean prior.
        mean_high: Upper bound of the mean prior.
        stdev_low: Lower bound of the standard deviation prior.
        stdev_high: Upper bound of the standard deviation prior.
        proposal_scale: Standard deviation of the random-walk proposal,
            shared by both parameters.
        num_generations: Number of Metropolis-Hastings iterations.
        burnin: Index of the first history entry kept by the summary.
        seed: Seed of the generator created when none is injected.
        prior_ratio_mode: ``"uniform"`` uses a prior ratio of 1 inside the
            support, ``"reference"`` uses ``1 / (mean_high - mean_low)``.
        progress_interval: Log progress every this many generations;
            0 disables progress logging.
    """

    sample_size: int = 10
    true_mean: float = 10.0
    true_stdev: float = 1.0
    mean_low: float = 0.0
    mean_high: float = 50.0
    stdev_low: float = 0.0
    stdev_high: float = 10.0
    proposal_scale: float = 1.0
    num_generations: int = 3000
    burnin: int = 1000
    seed: Optional[int] = None
    prior_ratio_mode: str = "uniform"
    progress_interval: int = 500

    def __post_init__(self):
        floats = ("true_mean", "true_stdev", "mean_low", "mean_high",
                  "stdev_low", "stdev_high", "proposal_scale")
        for name in floats:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ConfigurationError(f"{name} must be a real number; got {type(value).__name__}")
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be finite; got {value!r}")
            object.__setattr__(self, name, float(value))

        for name in ("sample_size", "num_generations", "burnin", "progress_interval"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(f"{name} must be an int; got {type(value).__name__}")
            object.__setattr__(self, name, int(value))

        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, numbers.Integral)):
            raise ConfigurationError(f"seed must be an int or None; got {type(self.seed).__name__}")
        if self.seed is not None:
            object.__setattr__(self, "seed", int(self.seed))

        if self.sample_size <= 0:
            raise ConfigurationError(f"sample_size must be > 0; got {self.sample_size}")
        if self.true_stdev <= 0:
            raise ConfigurationError(f"true_stdev must be > 0; got {self.true_stdev}")
        if self.mean_high <= self.mean_low:
            raise ConfigurationError(
                f"mean_high ({self.mean_high}) must be greater than mean_low ({self.mean_low})"
            )
        if self.stdev_low < 0:
            raise ConfigurationError(f"stdev_low must be >= 0; got {self.stdev_low}")
        if self.stdev_high <= self.stdev_low:
            raise ConfigurationError(
                f"stdev_high ({self.stdev_high}) must be greater than stdev_low ({self.stdev_low})"
            )
        if self.proposal_scale < 0:
            raise ConfigurationError(f"proposal_scale must be >= 0; got {self.proposal_scale}")
        if self.num_generations <= 0:
            raise ConfigurationError(f"num_generations must be > 0; got {self.num_generations}")
        if self.burnin < 0:
            raise ConfigurationError(f"burnin must be >= 0; got {self.burnin}")
        if self.burnin >= self.num_generations:
            raise ConfigurationError(
                f"burnin ({self.burnin}) must be less than num_generations ({self.num_generations})"
            )
        if self.prior_ratio_mode not in PRIOR_RATIO_MODES:
            raise ConfigurationError(
                f"prior_ratio_mode must be one of {PRIOR_RATIO_MODES}; got {self.prior_ratio_mode!r}"
            )
        if self.progress_interval < 0:
            raise ConfigurationError(f"progress_interval must be >= 0; got {self.progress_interval}")

    @property
    def bounds(self) -> PriorBounds:
        return PriorBounds(self.mean_low, self.mean_high, self.stdev_low, self.stdev_high)

    def with_updates(self, **changes: Any) -> "SamplerConfig":
        """Returns a validated copy with ``changes`` applied."""
        try:
            return dataclasses.replace(self, **changes)
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "SamplerConfig":
        """Builds a configuration from a plain mapping, e.g. parsed JSON.

        Raises:
            ConfigurationError: If the mapping has keys that are not fields,
                or any value fails validation.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(k for k in mapping if k not in known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}. Known keys are: {sorted(known)}")
        return cls(**dict(mapping))

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)
