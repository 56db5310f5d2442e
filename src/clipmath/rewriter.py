"""Replace delimited math in the text nodes of a parsed HTML tree.

Traversal
---------
The text nodes under the root are collected into a list *before* anything is
mutated, and replacements are applied to that list in reverse document order.
A replacement therefore never disturbs a node that is still waiting to be
processed, and no node is visited twice.

Skipped text
------------
* Comments, CDATA sections, doctypes and other preformatted strings.
* Text whose parent element is a non-renderable container (``script`` and
  ``style`` by default) so embedded code and stylesheets are never corrupted.
* Text inside already rendered math (``<math>``, ``.latex-block``,
  ``.latex-inline``), so running the rewriter on its own output is a no-op.

Failure
-------
An expression the engine rejects stays in the document as the text the user
typed, delimiters included.  A node that cannot be replaced because it is
detached from the tree raises :class:`TreeMutationError`; this is checked for
every node before the first mutation, so a failing call leaves the tree as it
was.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PageElement, PreformattedString

from clipmath.matches import Fragment, MathFragment, RunState, TextFragment
from clipmath.renderers.base import BaseRenderer
from clipmath.segmenter import segment

logger = logging.getLogger(__name__)

DEFAULT_SKIP_TAGS = frozenset({"script", "style"})

BLOCK_CLASS = "latex-block"
INLINE_CLASS = "latex-inline"
_RENDERED_CLASSES = {BLOCK_CLASS, INLINE_CLASS}


class TreeMutationError(RuntimeError):
    """The tree handed to the rewriter is inconsistent (e.g. a detached node)."""


@dataclass
class RewriteStats:
    nodes_scanned: int = 0
    nodes_spliced: int = 0
    rendered: int = 0
    failed: int = 0


@dataclass
class _RunPlan:
    node: NavigableString
    fragments: list[Fragment]


# ── Fragments ──────────────────────────────────────────────────────────────────


def _coalesce(fragments: list[Fragment]) -> list[Fragment]:
    """Join neighbouring text fragments (a failed render sits between two gaps)."""
    merged: list[Fragment] = []
    for fragment in fragments:
        if isinstance(fragment, TextFragment) and merged and isinstance(merged[-1], TextFragment):
            merged[-1] = TextFragment(merged[-1].text + fragment.text)
        else:
            merged.append(fragment)
    return merged


def _render_run(text: str, renderer: BaseRenderer) -> tuple[list[Fragment], int]:
    matches = segment(text)
    if not matches:
        return [TextFragment(text)], 0

    fragments: list[Fragment] = []
    cursor = 0
    for match in matches:
        if match.start > cursor:
            fragments.append(TextFragment(text[cursor:match.start]))
        result = renderer.render(match.inner, match.kind.display)
        if result.ok:
            fragments.append(MathFragment(result.markup, result.display, match.source))
        else:
            fragments.append(TextFragment(match.source))
        cursor = match.end
    if cursor < len(text):
        fragments.append(TextFragment(text[cursor:]))
    return _coalesce(fragments), len(matches)


def build_fragments(text: str, renderer: BaseRenderer) -> list[Fragment]:
    """Split *text* into verbatim text and rendered math, in order.

    Joining :func:`clipmath.matches.fragment_source` over the result gives
    back *text* exactly.  A run without math yields a single
    ``TextFragment`` holding the whole run.
    """
    fragments, _ = _render_run(text, renderer)
    return fragments


# ── Tree helpers ───────────────────────────────────────────────────────────────


def _classes(tag: Tag) -> list[str]:
    value = tag.get("class") or []
    if isinstance(value, str):
        return value.split()
    return list(value)


def _inside_rendered_math(node: PageElement) -> bool:
    for ancestor in node.parents:
        if ancestor.name == "math" or _RENDERED_CLASSES.intersection(_classes(ancestor)):
            return True
    return False


def _is_candidate(node: PageElement, skip_tags: frozenset) -> bool:
    if isinstance(node, PreformattedString):
        return False
    parent = node.parent
    if parent is not None and parent.name in skip_tags:
        return False
    return not _inside_rendered_math(node)


def _factory(root: Tag) -> BeautifulSoup:
    """Return the soup owning *root*, used to create new tags."""
    top = root
    while top.parent is not None:
        top = top.parent
    if isinstance(top, BeautifulSoup):
        return top
    return BeautifulSoup("", "html.parser")


def _to_node(fragment: Fragment, factory: BeautifulSoup) -> PageElement:
    if isinstance(fragment, TextFragment):
        return NavigableString(fragment.text)
    if fragment.display:
        wrapper = factory.new_tag("div", attrs={"class": BLOCK_CLASS})
    else:
        wrapper = factory.new_tag("span", attrs={"class": INLINE_CLASS})
    parsed = BeautifulSoup(fragment.markup, "html.parser")
    for child in list(parsed.contents):
        wrapper.append(child.extract())
    return wrapper


def splice(node: NavigableString, fragments: list[Fragment], factory: Optional[BeautifulSoup] = None) -> None:
    """Replace *node* in its parent by one node per fragment, in order."""
    if node.parent is None:
        raise TreeMutationError(f"Cannot replace detached text node {str(node)[:40]!r}")
    if factory is None:
        factory = _factory(node.parent)
    node.replace_with(*(_to_node(f, factory) for f in fragments))


# ── Public API ─────────────────────────────────────────────────────────────────


def text_nodes(root: Tag, skip_tags: Iterable[str] = DEFAULT_SKIP_TAGS) -> list[NavigableString]:
    """Snapshot the text nodes of *root* that may contain math, in document order."""
    skip = frozenset(t.lower() for t in skip_tags)
    return [node for node in root.find_all(string=True) if _is_candidate(node, skip)]


def rewrite_tree(
    root: Tag,
    renderer: BaseRenderer,
    skip_tags: Iterable[str] = DEFAULT_SKIP_TAGS,
) -> RewriteStats:
    """Render every math region under *root* in place.

    Returns counts of scanned and spliced nodes and of rendered and failed
    expressions.  Raises :class:`TreeMutationError` without touching the
    tree if any node that needs replacing is detached.
    """
    stats = RewriteStats()
    plans: list[_RunPlan] = []

    for node in text_nodes(root, skip_tags):
        stats.nodes_scanned += 1
        fragments, found = _render_run(str(node), renderer)
        rendered = sum(isinstance(f, MathFragment) for f in fragments)
        stats.rendered += rendered
        stats.failed += found - rendered
        if len(fragments) == 1 and isinstance(fragments[0], TextFragment):
            state = RunState.UNCHANGED
        else:
            state = RunState.SPLICED
            # find_all() only yields attached nodes; this catches a caller that
            # detached one mid-call, before splice() would fail half-way.
            if node.parent is None:
                raise TreeMutationError(f"Cannot replace detached text node {str(node)[:40]!r}")
            plans.append(_RunPlan(node=node, fragments=fragments))
        logger.debug("Text run of %d chars: %s", len(node), state.value)

    factory = _factory(root)
    for plan in reversed(plans):
        splice(plan.node, plan.fragments, factory)
        stats.nodes_spliced += 1

    logger.info(
        "Rewrote %d of %d text node(s): %d expression(s) rendered, %d left as source",
        stats.nodes_spliced, stats.nodes_scanned, stats.rendered, stats.failed,
    )
    return stats
