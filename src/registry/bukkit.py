"""dev.bukkit.org release source.

Scrapes the search results page and a project's files listing. The site has
no API, so both pages are parsed as HTML:

* search results: ``<div class="results-name"><a href="/projects/slug">Name</a></div>``
* files listing: ``<a data-action="file-link" href="/projects/slug/files/123">Label</a>``
"""
from __future__ import annotations

import logging
from html.parser import HTMLParser
from typing import Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote, urljoin

from common.http_client import get_text
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from constants import Constants
from versioning.errors import SourceUnavailableError
from versioning.models import ReleaseEntry

from .base import ReleaseSource

logger = logging.getLogger(__name__)


class _AnchorCollector(HTMLParser):
    """Collect (href, text) of anchors accepted by ``_wants``."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.anchors: List[Tuple[str, str]] = []
        self._href: Optional[str] = None
        self._chunks: List[str] = []

    def _wants(self, attrs: Dict[str, Optional[str]]) -> bool:
        raise NotImplementedError

    def handle_starttag(self, tag, attrs):
        if tag == "a" and self._href is None:
            attr_map = dict(attrs)
            if attr_map.get("href") and self._wants(attr_map):
                self._href = attr_map["href"]
                self._chunks = []

    def handle_endtag(self, tag):
        if tag == "a" and self._href is not None:
            text = " ".join(" ".join(self._chunks).split())
            self.anchors.append((self._href, text))
            self._href = None

    def handle_data(self, data):
        if self._href is not None:
            self._chunks.append(data)


class _SearchResultsParser(_AnchorCollector):
    """Anchors nested in ``div.results-name``."""

    def __init__(self) -> None:
        super().__init__()
        self._div_depth = 0
        self._results_depth: Optional[int] = None

    def handle_starttag(self, tag, attrs):
        if tag == "div":
            self._div_depth += 1
            classes = (dict(attrs).get("class") or "").split()
            if self._results_depth is None and "results-name" in classes:
                self._results_depth = self._div_depth
        super().handle_starttag(tag, attrs)

    def handle_endtag(self, tag):
        super().handle_endtag(tag)
        if tag == "div":
            if self._results_depth == self._div_depth:
                self._results_depth = None
            self._div_depth -= 1

    def _wants(self, attrs):
        return self._results_depth is not None


class _FileListParser(_AnchorCollector):
    """Anchors marked ``data-action="file-link"``."""

    def _wants(self, attrs):
        return attrs.get("data-action") == "file-link"


class BukkitReleaseSource(ReleaseSource):
    """Release source for dev.bukkit.org project pages."""

    def __init__(
        self,
        search_url: str = Constants.BUKKIT_SEARCH_URL,
        files_url: str = Constants.BUKKIT_FILES_URL,
        game_versions: Optional[Mapping[str, str]] = None,
        game_version: Optional[str] = None,
    ):
        """Initialize the source.

        Args:
            search_url: Search page URL with ``{}`` where the query goes.
            files_url: Files listing URL with ``{}`` where the project slug goes.
            game_versions: Game version -> site filter id lookup table.
            game_version: Optional game version to filter releases by; must
                be a key of ``game_versions``.

        Raises:
            ValueError: if ``game_version`` is not in the lookup table.
        """
        self.search_url = search_url
        self.files_url = files_url
        self.game_versions = dict(game_versions or {})
        self.game_filter: Optional[str] = None
        if game_version:
            if game_version not in self.game_versions:
                known = ", ".join(sorted(self.game_versions)) or "none configured"
                raise ValueError(
                    f"Unknown game version '{game_version}' (known: {known})"
                )
            self.game_filter = self.game_versions[game_version]

    @property
    def name(self) -> str:
        return "bukkit"

    @staticmethod
    def project_slug(package_name: str) -> str:
        """Project slug used in dev.bukkit.org URLs."""
        return package_name.lower()

    def _files_page_url(self, package_name: str) -> str:
        url = self.files_url.replace("{}", quote(self.project_slug(package_name)))
        if self.game_filter:
            sep = "&" if "?" in url else "?"
            url = f"{url}{sep}filter-game-version={quote(self.game_filter)}"
        return url

    def search(self, query: str) -> Dict[str, str]:
        url = self.search_url.replace("{}", quote(query))
        status, html = get_text(url, context=self.name)
        if html is None:
            raise SourceUnavailableError(self.name, safe_url(url), status)
        parser = _SearchResultsParser()
        parser.feed(html)
        parser.close()
        results = {}
        for href, text in parser.anchors:
            results.setdefault(text, urljoin(url, href))
        logger.info("Search for '%s' returned %d plugin(s).", query, len(results))
        return results

    def list_releases(self, package_name: str) -> List[ReleaseEntry]:
        url = self._files_page_url(package_name)
        status, html = get_text(url, context=self.name)
        if html is None:
            raise SourceUnavailableError(self.name, safe_url(url), status)
        parser = _FileListParser()
        parser.feed(html)
        parser.close()
        entries = [
            ReleaseEntry(label=text, link=urljoin(url, href).rstrip("/") + "/download")
            for href, text in parser.anchors
        ]
        if is_debug_enabled(logger):
            logger.debug(
                "Parsed release listing",
                extra=extra_context(
                    event="parse",
                    component="bukkit",
                    action="list_releases",
                    target=package_name,
                    count=len(entries),
                )
            )
        return entries
