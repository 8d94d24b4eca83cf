"""Package specifier parsing.

Accepted forms (the CLI spelling of a plugin requirement):

* ``WorldEdit``        newest release
* ``WorldEdit@*``      newest release
* ``WorldEdit@6.*``    newest minor(.patch) under major 6
* ``WorldEdit@6.1.*``  newest patch under 6.1
* ``WorldEdit@6.1.9``  exactly 6.1.9 (two to four numeric fields)
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from constants import Constants
from .errors import SpecifierError
from .models import U32_MAX, PackageSpecifier, VersionConstraint, VersionTuple

_NAME_RE = re.compile(r"\w+")
_MINOR_WILDCARD_RE = re.compile(r"(\d+)\.\*", re.ASCII)
_PATCH_WILDCARD_RE = re.compile(r"(\d+)\.(\d+)\.\*", re.ASCII)
_EXACT_RE = re.compile(r"(\d+)\.(\d+)(?:\.(\d+))?(?:\.(\d+))?", re.ASCII)


def split_specifier(raw: str) -> Tuple[str, Optional[str]]:
    """Return (name, version part or None) split on the separator.

    Raises:
        SpecifierError: if the separator occurs more than once.
    """
    sep = Constants.SPECIFIER_SEPARATOR
    count = raw.count(sep)
    if count == 0:
        return raw, None
    if count > 1:
        raise SpecifierError(raw, f"more than one '{sep}' separator")
    name, version = raw.split(sep, 1)
    return name, version


def _to_u32(raw: str, text: Optional[str]) -> Optional[int]:
    if text is None:
        return None
    value = int(text)
    if value > U32_MAX:
        raise SpecifierError(raw, f"numeric field {text} is too large")
    return value


def _parse_constraint(raw: str, version: str) -> VersionConstraint:
    if version == "*":
        return VersionConstraint.newest()

    m = _MINOR_WILDCARD_RE.fullmatch(version)
    if m:
        return VersionConstraint.minor_wildcard(_to_u32(raw, m.group(1)))

    m = _PATCH_WILDCARD_RE.fullmatch(version)
    if m:
        return VersionConstraint.patch_wildcard(
            _to_u32(raw, m.group(1)), _to_u32(raw, m.group(2))
        )

    m = _EXACT_RE.fullmatch(version)
    if m:
        major, minor, patch, build = (_to_u32(raw, g) for g in m.groups())
        return VersionConstraint.exact(VersionTuple(major, minor, patch, build))

    raise SpecifierError(raw, f"unrecognized version '{version}'")


def parse_specifier(raw: str) -> PackageSpecifier:
    """Parse a raw specifier string into a PackageSpecifier.

    Args:
        raw: Specifier such as ``"WorldEdit@6.1.*"``.

    Returns:
        PackageSpecifier with the parsed name and constraint.

    Raises:
        SpecifierError: if the string matches no recognized form.
    """
    name, version = split_specifier(raw)
    if not _NAME_RE.fullmatch(name):
        raise SpecifierError(raw, f"invalid package name '{name}'")
    if version is None:
        return PackageSpecifier(name=name, constraint=VersionConstraint.newest())
    return PackageSpecifier(name=name, constraint=_parse_constraint(raw, version))
