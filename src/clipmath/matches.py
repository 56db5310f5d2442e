"""Value types shared by the segmentation and rewriting pipeline.

Everything here is transient: created and consumed within a single pass over
one document, never persisted and never compared by identity.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class MathKind(str, Enum):
    BLOCK = "block"
    INLINE = "inline"

    @property
    def display(self) -> bool:
        """Block math renders in display (centered) mode, inline math does not."""
        return self is MathKind.BLOCK


class RunState(str, Enum):
    """What the rewriter did with one text run."""

    SPLICED = "spliced"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class DelimiterMatch:
    """One delimited region of a text run.

    ``start`` and ``end`` are offsets into the run (``end`` exclusive), so
    ``text[start:end] == source``.  ``inner`` is the trimmed content between
    the delimiters.
    """

    kind: MathKind
    start: int
    end: int
    inner: str
    source: str

    def overlaps(self, other: "DelimiterMatch") -> bool:
        return (
            (other.start <= self.start < other.end)
            or (other.start < self.end <= other.end)
            or (self.start <= other.start and self.end >= other.end)
        )


@dataclass(frozen=True)
class TextFragment:
    text: str


@dataclass(frozen=True)
class MathFragment:
    markup: str
    display: bool
    source: str


Fragment = Union[TextFragment, MathFragment]


def fragment_source(fragment: Fragment) -> str:
    """Return the slice of the original run that *fragment* stands for."""
    if isinstance(fragment, MathFragment):
        return fragment.source
    return fragment.text
