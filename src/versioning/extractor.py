"""Recover canonical version numbers from free-text release labels.

Release titles on plugin sites are written by hand and often carry more than
one dotted number, e.g. ``"WorldEdit 6.1.9 for MC 1.12"``. Every dotted run in
a label is a candidate; when some label has several, the candidates are lined
up as columns and the column whose value changes most from release to release
(and is least often missing) is taken as the plugin version. Auxiliary numbers
such as game-version tags tend to repeat or disappear between releases.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Sequence

from .errors import InconsistentColumnsError, UnparseableLabelError
from .models import U32_MAX, VersionTuple

# Two to four dot-separated digit runs; the first two are mandatory.
_CANDIDATE_RE = re.compile(r"(\d+)\.(\d+)(?:\.(\d+))?(?:\.(\d+))?", re.ASCII)

ColumnSelector = Callable[[Sequence[Sequence[VersionTuple]]], int]


def find_candidates(label: str) -> List[VersionTuple]:
    """Return every version-like run in ``label``, left to right."""
    found = []
    for m in _CANDIDATE_RE.finditer(label):
        values = [int(g) if g is not None else None for g in m.groups()]
        if any(v is not None and v > U32_MAX for v in values):
            continue
        found.append(VersionTuple(*values))
    return found


def non_variation_scores(columns_per_label: Sequence[Sequence[VersionTuple]]) -> List[int]:
    """Score each candidate column by how often it is missing or repeated.

    Walking the labels in order, column ``i`` gains a point for every label
    where it is absent, or where it equals the previous label's column ``i``.
    """
    width = max((len(c) for c in columns_per_label), default=0)
    scores = [0] * width
    previous: Optional[Sequence[VersionTuple]] = None
    for candidates in columns_per_label:
        for i in range(width):
            if i >= len(candidates):
                scores[i] += 1
            elif previous is not None and i < len(previous) and previous[i] == candidates[i]:
                scores[i] += 1
        previous = candidates
    return scores


def select_version_column(columns_per_label: Sequence[Sequence[VersionTuple]]) -> int:
    """Pick the column with the lowest non-variation score (lowest index on ties)."""
    scores = non_variation_scores(columns_per_label)
    if not scores:
        return 0
    return min(range(len(scores)), key=lambda i: (scores[i], i))


def extract_versions(
    labels: Sequence[str],
    column_selector: Optional[ColumnSelector] = None,
) -> List[VersionTuple]:
    """Derive one version per label, preserving order.

    Args:
        labels: Release labels in site order.
        column_selector: Heuristic choosing the version column when labels
            are ambiguous. Defaults to :func:`select_version_column`.

    Returns:
        List of VersionTuple, same length as ``labels``.

    Raises:
        UnparseableLabelError: if a label has no version-like run.
        InconsistentColumnsError: if the chosen column is missing for a label.
    """
    columns_per_label = []
    for label in labels:
        candidates = find_candidates(label)
        if not candidates:
            raise UnparseableLabelError(label)
        columns_per_label.append(candidates)

    if all(len(c) == 1 for c in columns_per_label):
        return [c[0] for c in columns_per_label]

    selector = column_selector or select_version_column
    column = selector(columns_per_label)

    versions = []
    for index, candidates in enumerate(columns_per_label):
        if column >= len(candidates):
            raise InconsistentColumnsError(column, index)
        versions.append(candidates[column])
    return versions
