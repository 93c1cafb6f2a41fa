"""Version Identity — composite key (feature value + version number) for every Version.

Invariants:
    - (feature_value_id, version) addresses exactly one Version, for all time
    - version is a positive integer; it is assigned by the value-update workflow,
      never computed here
    - Immutable and hashable: safe as a dict key or set member

Design Decisions:
    - Frozen dataclass with order=True: equality/hash over both fields, and history
      listings can sort identities without a key function
"""

from dataclasses import dataclass

from feature_history.core.domain_types import FeatureValueId


@dataclass(frozen=True, order=True)
class VersionIdentity:
    """Key of a FeatureValueVersion."""
    feature_value_id: FeatureValueId
    version: int

    def __post_init__(self):
        if isinstance(self.version, bool) or not isinstance(self.version, int):
            raise ValueError(f"version must be an int, got {self.version!r}")
        if self.version < 1:
            raise ValueError(f"version must be >= 1, got {self.version}")

    def __str__(self) -> str:
        return f"{self.feature_value_id}@{self.version}"
