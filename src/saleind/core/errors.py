from __future__ import annotations


class MalformedEventError(ValueError):
    """Raised when an event payload does not have the shape its kind requires."""


class ConfigError(ValueError):
    """Raised when the environment does not provide a usable indexer configuration."""
