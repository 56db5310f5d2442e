"""Shared fixtures for the test suite.

Most tests render through a small stub engine so assertions can name the
exact markup produced; the latex2mathml engine itself is exercised in
test_renderers.py and test_processor.py.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from clipmath.renderers.function import FunctionRenderer


def stub_typeset(expression: str, display: bool) -> str:
    """Tiny stand-in engine: rejects unbalanced braces, wraps everything else."""
    if expression.count("{") != expression.count("}"):
        raise ValueError("unbalanced braces")
    mode = "block" if display else "inline"
    return f'<math display="{mode}"><mi>{expression}</mi></math>'


# ── CLI runner ─────────────────────────────────────────────────────────────


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


# ── Renderers ──────────────────────────────────────────────────────────────


@pytest.fixture
def stub_renderer() -> FunctionRenderer:
    return FunctionRenderer(stub_typeset)


@pytest.fixture
def recording_renderer():
    """A stub renderer that also records every (expression, display) call."""
    calls: list[tuple[str, bool]] = []

    def typeset(expression: str, display: bool) -> str:
        calls.append((expression, display))
        return stub_typeset(expression, display)

    renderer = FunctionRenderer(typeset)
    renderer.calls = calls
    return renderer


# ── HTML fixtures ──────────────────────────────────────────────────────────


@pytest.fixture
def clip_html() -> str:
    return (
        "<h1>Notes</h1>"
        "<p>The area is $\\pi r^2$ for radius $r$.</p>"
        "<p>$$\nE = mc^2\n$$</p>"
        "<ul><li>costs $5</li><li>plain item</li></ul>"
    )


@pytest.fixture
def html_file(tmp_path: Path, clip_html: str) -> Path:
    path = tmp_path / "clip.html"
    path.write_text(clip_html, encoding="utf-8")
    return path
