"""Plain-text companion for an HTML clip.

When a clip is copied, the clipboard receives both ``text/html`` and a
``text/plain`` rendition.  The plain rendition keeps the visible structure:

* ``<ol>`` items are numbered ``1. ``, ``2. `` …; ``<ul>`` items get ``• ``.
* Block elements start and end a line; paragraphs and headings are set off
  by a blank line.  Adjacent boundaries collapse, so two sibling ``<div>``
  elements are one line break apart, not two.
* ``<br>`` is a hard line break.
* Whitespace from the HTML source collapses the way a browser collapses it;
  line breaks inside ``<pre>`` and ``<textarea>`` survive.
* ``<script>`` and ``<style>`` content is dropped.

Math is not touched: ``$...$`` stays exactly as typed.
"""

import re

from bs4 import BeautifulSoup, NavigableString
from bs4.element import PreformattedString

_DROPPED_TAGS = ["script", "style", "template", "head"]

_PARAGRAPH_TAGS = {"p", "h1", "h2", "h3", "h4", "h5", "h6"}
_LINE_TAGS = {
    "address", "article", "aside", "blockquote", "dd", "div", "dl", "dt",
    "figcaption", "figure", "footer", "header", "hr", "li", "main", "nav",
    "ol", "pre", "section", "table", "tr", "ul",
}
_PRESERVE_WHITESPACE = {"pre", "textarea"}

# Boundary markers, resolved to newlines once the text is flattened.
_LINE = "\x1e"
_PARAGRAPH = "\x1d"
_BOUNDARY_RUN = re.compile(r"[ \t]*[\x1d\x1e](?:[ \t]*[\x1d\x1e])*[ \t]*")


def _collapse_source_whitespace(soup: BeautifulSoup) -> None:
    for node in list(soup.find_all(string=True)):
        if isinstance(node, PreformattedString):
            node.extract()
            continue
        if any(p.name in _PRESERVE_WHITESPACE for p in node.parents):
            continue
        collapsed = re.sub(r"\s+", " ", str(node))
        if collapsed != node:
            node.replace_with(NavigableString(collapsed))


def _number_list_items(soup: BeautifulSoup) -> None:
    for lst in soup.find_all(["ol", "ul"]):
        ordered = lst.name == "ol"
        for index, item in enumerate(lst.find_all("li", recursive=False), start=1):
            prefix = f"{index}. " if ordered else "• "
            item.insert(0, NavigableString(prefix))


def _mark_boundaries(soup: BeautifulSoup) -> None:
    for br in soup.find_all("br"):
        br.replace_with(NavigableString("\n"))
    for tag in soup.find_all(sorted(_PARAGRAPH_TAGS | _LINE_TAGS)):
        marker = _PARAGRAPH if tag.name in _PARAGRAPH_TAGS else _LINE
        tag.insert(0, NavigableString(marker))
        tag.append(NavigableString(marker))


def _resolve_boundary(match: re.Match) -> str:
    return "\n\n" if _PARAGRAPH in match.group(0) else "\n"


def html_to_plain_text(html: str) -> str:
    """Derive the plain-text rendition of *html*."""
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(_DROPPED_TAGS):
        tag.decompose()

    _collapse_source_whitespace(soup)
    _number_list_items(soup)
    _mark_boundaries(soup)

    text = _BOUNDARY_RUN.sub(_resolve_boundary, soup.get_text())
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"[ \t]*\n[ \t]*", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()
