"""Versioned snapshot serialization."""

from growsim.persistence.migrations import SCHEMA_VERSION, migrate
from growsim.persistence.snapshot_codec import snapshot_from_dict, snapshot_to_dict

__all__ = ["SCHEMA_VERSION", "migrate", "snapshot_from_dict", "snapshot_to_dict"]
