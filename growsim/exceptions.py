"""Grow simulation exception hierarchy.

Gameplay refusals are ``Err`` results (see ``growsim.result``); these
exceptions are for broken setup and corrupt data only.
"""


class GrowSimError(Exception):
    """Root of all grow-simulation exceptions."""


class SimulationError(GrowSimError):
    """Errors during tick or command execution."""


class CatalogError(GrowSimError):
    """Inconsistent static catalog data (duplicate ids, dangling references)."""


class PersistenceError(GrowSimError):
    """Errors during save / load / snapshot operations."""


class ConfigurationError(GrowSimError):
    """Invalid or missing configuration."""
