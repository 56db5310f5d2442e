"""Configuration loading from environment variables and CLI flags."""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from clipmath.rewriter import DEFAULT_SKIP_TAGS


class Parser(str, Enum):
    HTML_PARSER = "html.parser"
    LXML = "lxml"
    HTML5LIB = "html5lib"


DEFAULT_PARSER = Parser.HTML_PARSER

ENV_KEYS = {
    "parser": "CLIPMATH_PARSER",
    "skip_tags": "CLIPMATH_SKIP_TAGS",
    "strict": "CLIPMATH_STRICT",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise RuntimeError(f"Invalid value {value!r} for {name}. Use true/false, yes/no or 1/0.")


@dataclass
class Config:
    parser: Parser = DEFAULT_PARSER
    skip_tags: frozenset = field(default_factory=lambda: DEFAULT_SKIP_TAGS)
    strict: bool = False

    @classmethod
    def from_env(
        cls,
        parser_override: Optional[str] = None,
        strict_override: Optional[bool] = None,
    ) -> "Config":
        raw_parser = parser_override or os.environ.get(ENV_KEYS["parser"], "") or DEFAULT_PARSER.value
        try:
            parser = Parser(raw_parser)
        except ValueError:
            choices = ", ".join(p.value for p in Parser)
            raise RuntimeError(
                f"Unknown HTML parser {raw_parser!r}. "
                f"Set {ENV_KEYS['parser']} to one of: {choices}."
            ) from None

        raw_tags = os.environ.get(ENV_KEYS["skip_tags"])
        if raw_tags is None:
            skip_tags = DEFAULT_SKIP_TAGS
        else:
            skip_tags = frozenset(t.strip().lower() for t in raw_tags.split(",") if t.strip())

        if strict_override is not None:
            strict = strict_override
        else:
            strict = _parse_bool(ENV_KEYS["strict"], os.environ.get(ENV_KEYS["strict"], ""))

        return cls(parser=parser, skip_tags=skip_tags, strict=strict)
