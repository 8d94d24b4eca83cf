"""Release resolution service: specifier -> release listing -> chosen release."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

from common.logging_utils import extra_context, is_debug_enabled
from registry.base import ReleaseSource

from .errors import DropperError
from .extractor import ColumnSelector, extract_versions
from .matcher import resolve
from .models import PackageSpecifier, ResolvedRelease
from .parser import parse_specifier

logger = logging.getLogger(__name__)


@dataclass
class ResolutionResult:
    """Outcome of resolving one specifier, for reporting and export."""
    raw: str
    specifier: Optional[PackageSpecifier]
    release: Optional[ResolvedRelease]
    error: Optional[DropperError] = None

    @property
    def found(self) -> bool:
        return self.release is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "specifier": self.raw,
            "name": self.specifier.name if self.specifier else None,
            "constraint": str(self.specifier.constraint) if self.specifier else None,
            "version": self.release.version if self.release else None,
            "link": self.release.link if self.release else None,
            "error": str(self.error) if self.error else None,
        }


class ReleaseResolutionService:
    """Resolve package specifiers against a release source."""

    def __init__(self, source: ReleaseSource, column_selector: Optional[ColumnSelector] = None):
        self.source = source
        self.column_selector = column_selector

    def resolve(self, specifier: Union[str, PackageSpecifier]) -> Optional[ResolvedRelease]:
        """Resolve a single specifier.

        Args:
            specifier: Raw specifier string or an already parsed one.

        Returns:
            The selected release, or None when no release satisfies it.

        Raises:
            SpecifierError: for a malformed specifier string.
            ExtractionError: when the release labels cannot be interpreted.
        """
        if isinstance(specifier, str):
            specifier = parse_specifier(specifier)

        entries = self.source.list_releases(specifier.name)
        labels = [e.label for e in entries]
        links = [e.link for e in entries]
        versions = extract_versions(labels, self.column_selector)
        release = resolve(specifier.constraint, versions, links)

        if is_debug_enabled(logger):
            logger.debug(
                "Resolved specifier",
                extra=extra_context(
                    event="decision",
                    component="resolution_service",
                    action="resolve",
                    target=str(specifier),
                    outcome="found" if release else "not_found",
                    candidate_count=len(entries),
                    resolved_version=release.version if release else None,
                )
            )
        return release

    def resolve_all(self, specifiers: Iterable[str]) -> List[ResolutionResult]:
        """Resolve many raw specifiers, recording errors per item."""
        results = []
        for raw in specifiers:
            parsed = None
            try:
                parsed = parse_specifier(raw)
                release = self.resolve(parsed)
            except DropperError as exc:
                logger.error("%s: %s", raw, exc)
                results.append(ResolutionResult(raw=raw, specifier=parsed, release=None, error=exc))
                continue
            results.append(ResolutionResult(raw=raw, specifier=parsed, release=release))
        return results
