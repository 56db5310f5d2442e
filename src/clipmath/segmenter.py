"""Lexical scanning of a text run for ``$$ ... $$`` and ``$ ... $`` regions.

Delimiter syntax
----------------
``$$ ... $$``  block math.  Shortest match from one ``$$`` to the next; the
               content may span several lines and may be empty.
``$ ... $``    inline math.  Neither ``$`` may touch another ``$`` (so a
               ``$$`` is never read as two inline delimiters) and the content
               must not contain a line break.  A candidate that would cross a
               newline is abandoned and scanning resumes right after the
               opening ``$``.

This is delimiter matching only: nothing here looks at the LaTeX between the
delimiters.  Escaped delimiters, nested math and regions split across several
text nodes are not recognised.
"""

import re

from clipmath.matches import DelimiterMatch, MathKind
from clipmath.overlap import resolve


# ── Patterns ───────────────────────────────────────────────────────────────────

_BLOCK = re.compile(r"\$\$(.*?)\$\$", re.DOTALL)

# Content excludes "$", so the closing "$" is never preceded by another "$".
_INLINE = re.compile(r"(?<!\$)\$(?!\$)([^$\n]+?)\$(?!\$)")

_PATTERNS = {
    MathKind.BLOCK: _BLOCK,
    MathKind.INLINE: _INLINE,
}


# ── Public API ─────────────────────────────────────────────────────────────────


def scan(text: str, kind: MathKind) -> list[DelimiterMatch]:
    """Return every occurrence of one delimiter class in *text*, left to right."""
    return [
        DelimiterMatch(
            kind=kind,
            start=m.start(),
            end=m.end(),
            inner=m.group(1).strip(),
            source=m.group(0),
        )
        for m in _PATTERNS[kind].finditer(text)
    ]


def segment(text: str) -> list[DelimiterMatch]:
    """Return the resolved match set for *text*.

    Both delimiter classes are scanned independently and merged by
    :func:`clipmath.overlap.resolve`; the result is sorted by offset and free
    of overlaps.
    """
    if "$" not in text:
        return []
    return resolve(scan(text, MathKind.BLOCK), scan(text, MathKind.INLINE))
