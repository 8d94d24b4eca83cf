"""Tests for the release resolution service."""

import pytest

from registry.base import ReleaseSource
from versioning.errors import SourceUnavailableError, SpecifierError, UnparseableLabelError
from versioning.models import ReleaseEntry, ResolvedRelease
from versioning.parser import parse_specifier
from versioning.service import ReleaseResolutionService


class FakeSource(ReleaseSource):
    """In-memory release source keyed by package name."""

    def __init__(self, listings):
        self.listings = listings
        self.calls = []

    @property
    def name(self):
        return "fake"

    def list_releases(self, package_name):
        self.calls.append(package_name)
        if package_name == "Offline":
            raise SourceUnavailableError("fake", f"https://example/{package_name}", 0)
        return [ReleaseEntry(label, link) for label, link in self.listings.get(package_name, [])]

    def search(self, query):
        return {n: f"https://example/{n}" for n in self.listings if query.lower() in n.lower()}


@pytest.fixture
def source():
    return FakeSource({
        "WorldEdit": [
            ("WorldEdit 6.2.0 for MC 1.12", "dl/620"),
            ("WorldEdit 6.1.11 for MC 1.12", "dl/6111"),
            ("WorldEdit 6.1.9 for MC 1.12", "dl/619"),
            ("WorldEdit 5.9 for MC 1.12", "dl/59"),
        ],
        "Broken": [
            ("Release one", "dl/1"),
        ],
    })


class TestResolve:
    """Single-specifier resolution."""

    def test_newest(self, source):
        svc = ReleaseResolutionService(source)
        assert svc.resolve("WorldEdit") == ResolvedRelease("6.2.0", "dl/620")

    def test_patch_wildcard(self, source):
        svc = ReleaseResolutionService(source)
        assert svc.resolve("WorldEdit@6.1.*") == ResolvedRelease("6.1.11", "dl/6111")

    def test_minor_wildcard(self, source):
        svc = ReleaseResolutionService(source)
        assert svc.resolve("WorldEdit@5.*") == ResolvedRelease("5.9", "dl/59")

    def test_accepts_parsed_specifier(self, source):
        svc = ReleaseResolutionService(source)
        assert svc.resolve(parse_specifier("WorldEdit@6.1.9")).link == "dl/619"

    def test_not_found(self, source):
        svc = ReleaseResolutionService(source)
        assert svc.resolve("WorldEdit@9.9.9") is None

    def test_unknown_package_is_not_found(self, source):
        svc = ReleaseResolutionService(source)
        assert svc.resolve("Nothing") is None

    def test_malformed_raises_before_fetch(self, source):
        svc = ReleaseResolutionService(source)
        with pytest.raises(SpecifierError):
            svc.resolve("World Edit@1.0")
        assert source.calls == []

    def test_unparseable_labels_raise(self, source):
        svc = ReleaseResolutionService(source)
        with pytest.raises(UnparseableLabelError):
            svc.resolve("Broken")


class TestResolveAll:
    """Batch resolution records per-item outcomes."""

    def test_mixed_outcomes(self, source):
        svc = ReleaseResolutionService(source)
        results = svc.resolve_all(["WorldEdit@6.1.*", "WorldEdit@1.0", "a@@1", "Broken"])

        assert results[0].release == ResolvedRelease("6.1.11", "dl/6111")
        assert results[1].release is None and results[1].error is None
        assert isinstance(results[2].error, SpecifierError)
        assert results[2].specifier is None
        assert isinstance(results[3].error, UnparseableLabelError)
        assert results[3].specifier.name == "Broken"

    def test_to_dict(self, source):
        svc = ReleaseResolutionService(source)
        (result,) = svc.resolve_all(["WorldEdit@6.1.*"])
        assert result.to_dict() == {
            "specifier": "WorldEdit@6.1.*",
            "name": "WorldEdit",
            "constraint": "6.1.*",
            "version": "6.1.11",
            "link": "dl/6111",
            "error": None,
        }

    def test_unavailable_source_is_an_error_not_a_miss(self, source):
        svc = ReleaseResolutionService(source)
        results = svc.resolve_all(["Offline@1.0", "WorldEdit"])

        assert isinstance(results[0].error, SourceUnavailableError)
        assert results[0].release is None
        assert results[0].to_dict()["error"] == "fake request to https://example/Offline failed (no response)"
        assert results[1].release == ResolvedRelease("6.2.0", "dl/620")
