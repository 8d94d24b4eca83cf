"""Select the release satisfying a version constraint.

Releases are given as parallel version/link sequences in site order, which
is taken to be newest first. Wildcard requests pick the numerically greatest
match; equal versions resolve to the earliest (most recent) entry.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from .models import ConstraintKind, ResolvedRelease, VersionConstraint, VersionTuple


def _release(versions: Sequence[VersionTuple], links: Sequence[str], index: int) -> ResolvedRelease:
    return ResolvedRelease(version=str(versions[index]), link=links[index])


def _pick_max(
    versions: Sequence[VersionTuple],
    links: Sequence[str],
    accept: Callable[[VersionTuple], bool],
    key: Callable[[VersionTuple], tuple],
) -> Optional[ResolvedRelease]:
    best = None
    best_key = None
    for index, version in enumerate(versions):
        if not accept(version):
            continue
        k = key(version)
        # strict comparison keeps the earliest entry on ties
        if best_key is None or k > best_key:
            best, best_key = index, k
    if best is None:
        return None
    return _release(versions, links, best)


def resolve(
    constraint: VersionConstraint,
    versions: Sequence[VersionTuple],
    links: Sequence[str],
) -> Optional[ResolvedRelease]:
    """Return the release matching ``constraint`` or None when nothing matches.

    Args:
        constraint: Parsed version constraint.
        versions: Extracted versions, newest first.
        links: Download links parallel to ``versions``.

    Raises:
        AssertionError: if the sequences differ in length.
    """
    if len(versions) != len(links):
        raise AssertionError(
            f"versions and links must be parallel ({len(versions)} != {len(links)})"
        )

    if constraint.kind == ConstraintKind.NEWEST:
        if not versions:
            return None
        return _release(versions, links, 0)

    if constraint.kind == ConstraintKind.EXACT:
        for index, version in enumerate(versions):
            if version == constraint.version:
                return _release(versions, links, index)
        return None

    if constraint.kind == ConstraintKind.PATCH_WILDCARD:
        return _pick_max(
            versions,
            links,
            accept=lambda v: v.major == constraint.major and v.minor == constraint.minor,
            key=lambda v: (v.patch_key(),),
        )

    if constraint.kind == ConstraintKind.MINOR_WILDCARD:
        return _pick_max(
            versions,
            links,
            accept=lambda v: v.major == constraint.major,
            key=lambda v: (v.minor, v.patch_key()),
        )

    raise ValueError(f"Unsupported constraint kind: {constraint.kind}")
