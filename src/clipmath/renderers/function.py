"""Adapter for plain ``render(expression, display) -> str`` callables."""

from typing import Callable

from clipmath.renderers.base import BaseRenderer


class FunctionRenderer(BaseRenderer):
    def __init__(self, func: Callable[[str, bool], str]) -> None:
        self.func = func

    def typeset(self, expression: str, display: bool) -> str:
        return self.func(expression, display)
