"""Clinical-significance ranking and display labels.

Ranking and labeling are two independent classification tables evaluated
over the lowercased raw significance text. They agree on the first two
rules only:

===========================  ====  ==========================
matches                      rank  label
===========================  ====  ==========================
pathogenic, not "likely"     1     Pathogenic
likely_pathogenic            2     Likely_pathogenic
uncertain                    3     Uncertain_significance
conflicting                  4     Conflicting
benign                       5     Benign
anything else                5     Uncertain_significance
===========================  ====  ==========================

For ranking and labeling "pathogenic" only counts as a whole word:
``pathogenicity`` (as in ``Conflicting_interpretations_of_pathogenicity``)
does not make a variant pathogenic. The gene-level counters use
:func:`mentions_pathogenic`, a plain substring test, so that value counts
as both pathogenic and conflicting there.
"""

from __future__ import annotations

import re

PATHOGENIC = "Pathogenic"
LIKELY_PATHOGENIC = "Likely_pathogenic"
UNCERTAIN_SIGNIFICANCE = "Uncertain_significance"
CONFLICTING = "Conflicting"
BENIGN = "Benign"

DEFAULT_RANK = 5

_PATHOGENIC_RE = re.compile(r"pathogenic(?![a-z])")


def _normalize(raw: str | None) -> str:
    return (raw or "").lower()


def is_pathogenic(raw: str | None) -> bool:
    sig = _normalize(raw)
    return bool(_PATHOGENIC_RE.search(sig)) and "likely" not in sig


def mentions_pathogenic(raw: str | None) -> bool:
    sig = _normalize(raw)
    return "pathogenic" in sig and "likely" not in sig


def is_likely_pathogenic(raw: str | None) -> bool:
    return "likely_pathogenic" in _normalize(raw)


def is_uncertain(raw: str | None) -> bool:
    return "uncertain" in _normalize(raw)


def is_conflicting(raw: str | None) -> bool:
    return "conflicting" in _normalize(raw)


def is_benign(raw: str | None) -> bool:
    return "benign" in _normalize(raw)


def significance_rank(raw: str | None) -> int:
    """Return the sort rank for a raw significance string (lower = more significant)."""

    if is_pathogenic(raw):
        return 1
    if is_likely_pathogenic(raw):
        return 2
    if is_uncertain(raw):
        return 3
    if is_conflicting(raw):
        return 4
    return DEFAULT_RANK


def significance_label(raw: str | None) -> str:
    """Return the canonical display label for a raw significance string."""

    if is_pathogenic(raw):
        return PATHOGENIC
    if is_likely_pathogenic(raw):
        return LIKELY_PATHOGENIC
    if is_uncertain(raw):
        return UNCERTAIN_SIGNIFICANCE
    if is_conflicting(raw):
        return CONFLICTING
    if is_benign(raw):
        return BENIGN
    return UNCERTAIN_SIGNIFICANCE


def rank_and_label(raw: str | None) -> tuple[int, str]:
    return significance_rank(raw), significance_label(raw)
