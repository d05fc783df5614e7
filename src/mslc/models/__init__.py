"""Model package for mslc."""

from mslc.models.launch_config import LaunchConfig

__all__ = [
    "LaunchConfig",
]
