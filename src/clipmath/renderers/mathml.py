"""LaTeX to MathML rendering via latex2mathml."""

from latex2mathml.converter import convert as latex_to_mathml

from clipmath.renderers.base import BaseRenderer


def _check_braces(expression: str) -> None:
    """Raise ``ValueError`` unless unescaped ``{`` and ``}`` pair up.

    latex2mathml accepts ``\\frac{a`` and ``a}`` and emits broken MathML, so
    the check happens here.  ``\\{`` and ``\\}`` are literal braces.
    """
    depth = 0
    escaped = False
    for char in expression:
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth < 0:
                raise ValueError("unbalanced braces: unexpected '}'")
    if depth:
        raise ValueError(f"unbalanced braces: {depth} unclosed '{{'")


class MathMLRenderer(BaseRenderer):
    """Default engine.

    With ``strict=True`` an empty expression (``$$ $$``) counts as a failure
    instead of producing an empty ``<math>`` element.
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict

    def typeset(self, expression: str, display: bool) -> str:
        if self.strict and not expression:
            raise ValueError("empty math expression")
        _check_braces(expression)
        return latex_to_mathml(expression, display="block" if display else "inline")
