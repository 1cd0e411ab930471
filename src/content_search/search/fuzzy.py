"""Bounded edit-distance matching for "did you mean" corrections.

The edit budget grows with the length of the misspelled term: terms of one
or two characters are never corrected, 3-5 characters allow one edit and
longer terms two.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator


def levenshtein_distance(source: str, target: str, max_distance: int | None = None) -> int:
    """Edit distance with unit-cost insertions, deletions and substitutions.

    With ``max_distance`` the scan stops once a whole row exceeds the bound
    and reports ``max_distance + 1``.

        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("bitcoin", "bitconi")
        2
    """
    if len(source) < len(target):
        source, target = target, source
    if max_distance is not None and len(source) - len(target) > max_distance:
        return max_distance + 1

    # Single row over the shorter string
    row = list(range(len(target) + 1))
    for i, source_char in enumerate(source, start=1):
        diagonal, row[0] = row[0], i
        for j, target_char in enumerate(target, start=1):
            above = row[j]
            row[j] = min(above + 1, row[j - 1] + 1, diagonal + (source_char != target_char))
            diagonal = above
        if max_distance is not None and min(row) > max_distance:
            return max_distance + 1
    return row[-1]


def get_max_edit_distance(term_length: int) -> int:
    """Edits tolerated for a term of ``term_length`` characters."""
    if term_length >= 6:
        return 2
    return 1 if term_length >= 3 else 0


def _candidates(needle: str, vocabulary: Iterable[str], budget: int) -> Iterator[tuple[int, str, str]]:
    for candidate in vocabulary:
        folded = candidate.lower()
        if folded == needle or abs(len(folded) - len(needle)) > budget:
            continue
        distance = levenshtein_distance(needle, folded, budget)
        if distance <= budget:
            yield distance, folded, candidate


def find_closest_term(term: str, vocabulary: Iterable[str], max_distance: int | None = None) -> str | None:
    """Closest vocabulary term within the edit budget, never ``term`` itself.

    Matching ignores case and the vocabulary's casing is returned. Equal
    distances are settled alphabetically, lowercase form first, so the answer
    does not depend on vocabulary order.
    """
    needle = term.lower()
    budget = get_max_edit_distance(len(needle)) if max_distance is None else max_distance
    if not needle or budget <= 0:
        return None
    best = min(_candidates(needle, vocabulary, budget), default=None)
    return best[2] if best else None
