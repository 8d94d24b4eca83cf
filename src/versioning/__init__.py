"""Package specifier parsing and release version resolution."""

from .errors import (
    DropperError,
    ExtractionError,
    InconsistentColumnsError,
    SourceUnavailableError,
    SpecifierError,
    UnparseableLabelError,
)
from .extractor import extract_versions, select_version_column
from .matcher import resolve
from .models import (
    ConstraintKind,
    PackageSpecifier,
    ReleaseEntry,
    ResolvedRelease,
    VersionConstraint,
    VersionTuple,
)
from .parser import parse_specifier

__all__ = [
    "ConstraintKind",
    "DropperError",
    "ExtractionError",
    "InconsistentColumnsError",
    "PackageSpecifier",
    "ReleaseEntry",
    "ResolvedRelease",
    "SourceUnavailableError",
    "SpecifierError",
    "UnparseableLabelError",
    "VersionConstraint",
    "VersionTuple",
    "extract_versions",
    "parse_specifier",
    "resolve",
    "select_version_column",
]
