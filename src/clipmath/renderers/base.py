"""Abstract base for math-typesetting engines."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    markup: Optional[str]
    display: bool
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BaseRenderer(ABC):
    """Turn a LaTeX expression into markup without ever raising.

    Subclasses implement :meth:`typeset`, which may raise on malformed input;
    :meth:`render` captures any such failure as a ``RenderResult`` so one bad
    expression cannot abort the rest of a document.
    """

    def render(self, expression: str, display: bool) -> RenderResult:
        try:
            markup = self.typeset(expression, display)
        except Exception as e:
            logger.debug("Could not render %r: %s", expression[:50], e)
            return RenderResult(markup=None, display=display, error=str(e) or type(e).__name__)
        return RenderResult(markup=markup, display=display)

    @abstractmethod
    def typeset(self, expression: str, display: bool) -> str:
        """Return markup for *expression*; raise on failure."""
        ...
