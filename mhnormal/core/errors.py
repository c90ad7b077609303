__all__ = ["ConfigurationError"]


class ConfigurationError(ValueError):
    """Raised when a sampler configuration cannot produce a meaningful run."""
