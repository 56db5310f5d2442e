"""Entry points that take serialized HTML in and give serialized HTML back."""

import logging
import re
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup, FeatureNotFound

from clipmath.config import Config, Parser
from clipmath.renderers.base import BaseRenderer
from clipmath.renderers.mathml import MathMLRenderer
from clipmath.rewriter import rewrite_tree

logger = logging.getLogger(__name__)


_DOCUMENT_MARKERS = re.compile(r"<\s*(?:html|head|body)[\s>/]", re.IGNORECASE)


def parse_html(html: str, parser: Parser = Parser.HTML_PARSER) -> BeautifulSoup:
    """Parse *html*, falling back to the bundled parser if *parser* is not installed."""
    try:
        return BeautifulSoup(html, parser.value)
    except FeatureNotFound:
        logger.warning("HTML parser %r is not installed; using html.parser", parser.value)
        return BeautifulSoup(html, Parser.HTML_PARSER.value)


def serialize(soup: BeautifulSoup, source: str) -> str:
    """Serialize *soup* in the shape *source* had.

    lxml and html5lib wrap a fragment in ``<html><body>`` (moving leading
    ``<style>`` or ``<title>`` into a ``<head>``); for input that had none of
    ``<html>``, ``<head>`` or ``<body>`` only the contents of those wrappers are written
    back.
    """
    if soup.body is not None and not _DOCUMENT_MARKERS.search(source):
        head = soup.head.decode_contents() if soup.head is not None else ""
        return head + soup.body.decode_contents()
    return str(soup)


def process_html(
    html: Optional[str],
    renderer: Optional[BaseRenderer] = None,
    config: Optional[Config] = None,
) -> Optional[str]:
    """Return *html* with every ``$...$`` and ``$$...$$`` region rendered.

    Empty input is returned as is.  Content without math comes back as the
    parser serializes it, which for well-formed markup is the input itself.
    A fragment stays a fragment whichever parser backend is configured.
    """
    if not html:
        return html
    config = config or Config()
    renderer = renderer or MathMLRenderer(strict=config.strict)

    soup = parse_html(html, config.parser)
    rewrite_tree(soup, renderer, skip_tags=config.skip_tags)
    return serialize(soup, html)


def process_file(
    path: Path,
    renderer: Optional[BaseRenderer] = None,
    config: Optional[Config] = None,
) -> str:
    return process_html(path.read_text(encoding="utf-8"), renderer=renderer, config=config) or ""
