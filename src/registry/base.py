"""Release source capability interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List

from versioning.models import ReleaseEntry


class ReleaseSource(ABC):
    """A plugin repository that can list the releases of a package.

    Implementations turn a site's documents into plain (label, link) pairs so
    version extraction and matching never see markup.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier used in logs (e.g. "bukkit")."""

    @abstractmethod
    def list_releases(self, package_name: str) -> List[ReleaseEntry]:
        """Return the package's releases in the order the site presents them.

        The order is assumed to be newest first.

        Raises:
            SourceUnavailableError: if the listing cannot be fetched.
        """

    @abstractmethod
    def search(self, query: str) -> Dict[str, str]:
        """Return a mapping of plugin display names to project page URLs.

        Raises:
            SourceUnavailableError: if the search page cannot be fetched.
        """
