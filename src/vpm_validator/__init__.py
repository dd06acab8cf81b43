"""vpm-validator core package.

Version ordering and range evaluation for VPM dependency constraints, plus
manifest validation against a catalog of released versions. The scanning
logic in :mod:`vpm_validator.core` is shared by the CLI and CI workflows.
"""

__all__ = [
    "core",
]
