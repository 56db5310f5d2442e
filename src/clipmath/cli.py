"""Main CLI entry point."""

import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from clipmath.config import Config, Parser
from clipmath.plaintext import html_to_plain_text
from clipmath.processor import process_file
from clipmath.renderers.mathml import MathMLRenderer
from clipmath.rewriter import TreeMutationError

console = Console(stderr=True)
load_dotenv()

HTML_EXTENSIONS = {".html", ".htm", ".xhtml"}


@click.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file path. Defaults to stdout.",
)
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice(["html", "text"], case_sensitive=False),
    default="html",
    show_default=True,
    help="html renders the math; text writes the plain-text rendition of the input.",
)
@click.option(
    "--parser", "-p",
    type=click.Choice([p.value for p in Parser], case_sensitive=False),
    default=None,
    help="BeautifulSoup parser backend (defaults to CLIPMATH_PARSER or html.parser).",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Treat empty expressions as render failures (defaults to CLIPMATH_STRICT).",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Log per-document statistics and render failures to stderr.",
)
@click.version_option()
def main(input_path, output, output_format, parser, strict, verbose):
    """Render $...$ and $$...$$ math in an HTML document as MathML.

    INPUT_PATH can be a .html, .htm or .xhtml file.
    Results are written to stdout unless --output is specified.
    """
    _configure_logging(verbose)

    try:
        config = Config.from_env(parser_override=parser, strict_override=strict)
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    suffix = input_path.suffix.lower()
    if suffix not in HTML_EXTENSIONS:
        console.print(f"[red]Unsupported file type:[/red] {suffix}")
        sys.exit(1)

    if output_format == "text":
        result = html_to_plain_text(input_path.read_text(encoding="utf-8"))
    else:
        renderer = _build_renderer(config)
        try:
            with console.status("[cyan]Rendering math..."):
                result = process_file(input_path, renderer=renderer, config=config)
        except TreeMutationError as e:
            console.print(f"[red]Error:[/red] {e}")
            sys.exit(1)

    if output:
        output.write_text(result, encoding="utf-8")
        console.print(f"[green]Written to {output}[/green]")
    else:
        click.echo(result)


def _build_renderer(config: Config):
    return MathMLRenderer(strict=config.strict)


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
