"""Merge independently scanned block and inline matches into one match set.

Block matches are authoritative.  An inline match that touches a retained
block match in any way (starts inside it, ends inside it, contains it or is
contained by it) is dropped whole; it is never truncated.
"""

from typing import Iterable

from clipmath.matches import DelimiterMatch


def _first_wins(matches: Iterable[DelimiterMatch]) -> list[DelimiterMatch]:
    """Drop matches that collide with an earlier-starting match of the same list."""
    kept: list[DelimiterMatch] = []
    for match in sorted(matches, key=lambda m: (m.start, m.end)):
        if not any(match.overlaps(k) for k in kept):
            kept.append(match)
    return kept


def resolve(
    blocks: Iterable[DelimiterMatch],
    inlines: Iterable[DelimiterMatch],
) -> list[DelimiterMatch]:
    """Return the non-overlapping union of *blocks* and *inlines*, sorted by start."""
    retained = _first_wins(blocks)
    survivors = [
        inline
        for inline in _first_wins(inlines)
        if not any(inline.overlaps(block) for block in retained)
    ]
    return sorted(retained + survivors, key=lambda m: m.start)
