"""Plugin repository release sources."""

from .base import ReleaseSource
from .bukkit import BukkitReleaseSource

__all__ = [
    "ReleaseSource",
    "BukkitReleaseSource",
]
