"""Data models for package specifiers and release resolution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

# Numeric version fields are unsigned 32-bit values.
U32_MAX = 2**32 - 1


@dataclass(frozen=True)
class VersionTuple:
    """Numeric version with two mandatory and two optional trailing fields."""
    major: int
    minor: int
    patch: Optional[int] = None
    build: Optional[int] = None

    def __post_init__(self) -> None:
        if self.patch is None and self.build is not None:
            raise ValueError("build cannot be set without patch")
        for value in self.fields():
            if value < 0 or value > U32_MAX:
                raise ValueError(f"version field out of range: {value}")

    def fields(self) -> tuple:
        """Return the present fields in order."""
        return tuple(v for v in (self.major, self.minor, self.patch, self.build) if v is not None)

    def patch_key(self) -> int:
        """Patch number for ordering; an absent patch sorts below any present one."""
        return self.patch if self.patch is not None else -1

    def __str__(self) -> str:
        return ".".join(str(v) for v in self.fields())


class ConstraintKind(Enum):
    """Shape of the version half of a specifier."""
    EXACT = "exact"
    PATCH_WILDCARD = "patch_wildcard"
    MINOR_WILDCARD = "minor_wildcard"
    NEWEST = "newest"


@dataclass(frozen=True)
class VersionConstraint:
    """Version request derived from a specifier.

    Only the fields relevant to ``kind`` are populated: ``version`` for EXACT,
    ``major``/``minor`` for PATCH_WILDCARD, ``major`` for MINOR_WILDCARD.
    """
    kind: ConstraintKind
    version: Optional[VersionTuple] = None
    major: Optional[int] = None
    minor: Optional[int] = None

    @classmethod
    def exact(cls, version: VersionTuple) -> "VersionConstraint":
        return cls(ConstraintKind.EXACT, version=version)

    @classmethod
    def patch_wildcard(cls, major: int, minor: int) -> "VersionConstraint":
        return cls(ConstraintKind.PATCH_WILDCARD, major=major, minor=minor)

    @classmethod
    def minor_wildcard(cls, major: int) -> "VersionConstraint":
        return cls(ConstraintKind.MINOR_WILDCARD, major=major)

    @classmethod
    def newest(cls) -> "VersionConstraint":
        return cls(ConstraintKind.NEWEST)

    def __str__(self) -> str:
        if self.kind == ConstraintKind.EXACT:
            return str(self.version)
        if self.kind == ConstraintKind.PATCH_WILDCARD:
            return f"{self.major}.{self.minor}.*"
        if self.kind == ConstraintKind.MINOR_WILDCARD:
            return f"{self.major}.*"
        return "*"


@dataclass(frozen=True)
class PackageSpecifier:
    """A plugin name plus the version constraint requested for it."""
    name: str
    constraint: VersionConstraint

    def __str__(self) -> str:
        if self.constraint.kind == ConstraintKind.NEWEST:
            return self.name
        return f"{self.name}@{self.constraint}"


@dataclass(frozen=True)
class ReleaseEntry:
    """One downloadable release as listed by a repository site."""
    label: str
    link: str


@dataclass(frozen=True)
class ResolvedRelease:
    """Release selected for download."""
    version: str
    link: str

    def to_dict(self) -> Dict[str, Any]:
        return {"version": self.version, "link": self.link}
