"""Tests for clipmath.segmenter — scan() and segment()."""

import pytest

from clipmath.matches import MathKind
from clipmath.segmenter import scan, segment


def _inners(matches) -> list[str]:
    return [m.inner for m in matches]


# ── Block math: $$ ... $$ ─────────────────────────────────────────────────────


class TestScanBlock:
    def test_simple_block(self):
        [m] = scan("$$E = mc^2$$", MathKind.BLOCK)
        assert m.kind is MathKind.BLOCK
        assert m.inner == "E = mc^2"
        assert (m.start, m.end) == (0, 12)

    def test_inner_is_trimmed(self):
        [m] = scan("$$   x + y \n$$", MathKind.BLOCK)
        assert m.inner == "x + y"

    def test_source_includes_delimiters(self):
        text = "before $$ a $$ after"
        [m] = scan(text, MathKind.BLOCK)
        assert m.source == "$$ a $$"
        assert text[m.start:m.end] == m.source

    def test_block_may_span_lines(self):
        [m] = scan("$$\na \\\\\nb\n$$", MathKind.BLOCK)
        assert m.inner == "a \\\\\nb"

    def test_shortest_match_wins(self):
        matches = scan("$$a$$ and $$b$$", MathKind.BLOCK)
        assert _inners(matches) == ["a", "b"]

    def test_empty_block(self):
        [m] = scan("$$$$", MathKind.BLOCK)
        assert m.inner == ""
        assert m.end > m.start

    def test_lone_opening_is_not_a_match(self):
        assert scan("price: $$ 100", MathKind.BLOCK) == []

    def test_third_marker_left_unmatched(self):
        matches = scan("$$a$$ $$", MathKind.BLOCK)
        assert _inners(matches) == ["a"]


# ── Inline math: $ ... $ ──────────────────────────────────────────────────────


class TestScanInline:
    def test_simple_inline(self):
        [m] = scan("$x$", MathKind.INLINE)
        assert m.kind is MathKind.INLINE
        assert m.inner == "x"
        assert (m.start, m.end) == (0, 3)

    def test_two_adjacent_expressions(self):
        matches = scan("$x$ and $y$", MathKind.INLINE)
        assert _inners(matches) == ["x", "y"]
        assert [(m.start, m.end) for m in matches] == [(0, 3), (8, 11)]

    def test_inner_is_trimmed(self):
        [m] = scan("$ \\alpha + \\beta $", MathKind.INLINE)
        assert m.inner == "\\alpha + \\beta"

    def test_newline_inside_is_never_matched(self):
        assert scan("$a\nb$", MathKind.INLINE) == []

    def test_scan_resumes_after_abandoned_opening(self):
        matches = scan("$a\nb $c$", MathKind.INLINE)
        assert _inners(matches) == ["c"]

    def test_double_dollar_is_not_two_inline_delimiters(self):
        assert scan("$$x$$", MathKind.INLINE) == []

    def test_closing_dollar_followed_by_dollar_is_not_a_match(self):
        assert scan("$a$$b$", MathKind.INLINE) == []

    def test_lone_dollar_is_literal(self):
        assert scan("it costs $5", MathKind.INLINE) == []

    def test_matching_is_lexical(self):
        """Two currency amounts on one line read as an expression."""
        [m] = scan("between $5 and $10", MathKind.INLINE)
        assert m.inner == "5 and"

    def test_empty_inline_is_not_a_match(self):
        assert scan("a $$ b", MathKind.INLINE) == []


# ── segment(): both classes, resolved ────────────────────────────────────────


class TestSegment:
    def test_no_dollar_returns_empty(self):
        assert segment("plain text, no math at all") == []

    def test_block_takes_precedence(self):
        [m] = segment("$$ a $ b $$")
        assert m.kind is MathKind.BLOCK
        assert m.inner == "a $ b"

    def test_mixed_classes_sorted_by_position(self):
        matches = segment("$y$ then $$x$$ then $z$")
        assert [(m.kind, m.inner) for m in matches] == [
            (MathKind.INLINE, "y"),
            (MathKind.BLOCK, "x"),
            (MathKind.INLINE, "z"),
        ]

    @pytest.mark.parametrize(
        "text",
        [
            "$x$ and $y$",
            "$$a$$ $b$ $$c$$",
            "$$ a $ b $$ and $c$",
            "$a\nb$ $$\nc\n$$",
        ],
    )
    def test_result_is_sorted_and_non_overlapping(self, text):
        matches = segment(text)
        for earlier, later in zip(matches, matches[1:]):
            assert earlier.end <= later.start

    def test_newline_crossing_inline_yields_nothing(self):
        assert segment("$a\nb$") == []
