"""
CLI entry point: build and query navigation metadata from the shell.

    book-nav build path/to/toc.json -o path/to/meta.json
    book-nav lookup path/to/toc.json 1234      # which node owns reference 1234
    book-nav link path/to/toc.json 1234        # short link to that reference
    book-nav slug "PART ONE: THE PROFESSION OF FAITH"
"""

import json
import logging
from pathlib import Path

import typer
from pydantic import ValidationError

from book_nav.anchors import make_ref_link
from book_nav.config import load_build_config
from book_nav.core import load_toc, meta_to_dict, write_meta
from book_nav.meta import make_book_meta
from book_nav.models import BookMeta, BuildConfig, TocStructureError
from book_nav.slug import parse_to_short_link_text

app = typer.Typer(
    name="book-nav",
    help="Build page navigation, short links and reference lookup from a book TOC.",
)


def _build(toc: Path, config: BuildConfig) -> BookMeta:
    """Load and build, turning bad input into an error message and exit code 1."""
    if not toc.is_file():
        typer.echo(f"Error: TOC file not found: {toc}", err=True)
        raise typer.Exit(1)
    try:
        store = load_toc(toc)
    except (json.JSONDecodeError, ValidationError) as e:
        typer.echo(f"Error: invalid TOC file {toc}: {e}", err=True)
        raise typer.Exit(1)
    try:
        return make_book_meta(store, config)
    except TocStructureError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("build")
def build_cmd(
    toc: Path = typer.Argument(..., help="Path to the TOC JSON file", path_type=Path),
    output: Path | None = typer.Option(
        None,
        "-o",
        "--output",
        help="Write metadata JSON here (default: print to stdout)",
        path_type=Path,
    ),
    max_words: int | None = typer.Option(None, "--max-words", min=1, help="Words kept in URL slugs"),
    delimiter: str | None = typer.Option(None, "--delimiter", help="Separator between path and slug"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Print diagnostic info"),
) -> None:
    """Build page metadata, URL map, breadcrumbs and reference range tree."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    config = load_build_config(slug_max_words=max_words, url_delimiter=delimiter)
    meta = _build(toc, config)

    if output is None:
        typer.echo(json.dumps(meta_to_dict(meta), indent=2))
        return

    write_meta(meta, output)
    typer.echo(f"Wrote {output}")
    typer.echo(f"  Nodes:  {len(meta.breadcrumbs_map)}")
    typer.echo(f"  Pages:  {len(meta.page_meta_map)}")
    typer.echo(f"  Ranges: {sum(1 for _ in meta.ref_range_tree.leaves())}")


@app.command("lookup")
def lookup_cmd(
    toc: Path = typer.Argument(..., help="Path to the TOC JSON file", path_type=Path),
    ref: int = typer.Argument(..., help="Cross-reference number"),
) -> None:
    """Find the TOC node owning a reference number."""
    meta = _build(toc, load_build_config())
    leaf = meta.ref_range_tree.lookup(ref)
    if leaf is None:
        typer.echo(f"Reference {ref} not found.", err=True)
        raise typer.Exit(1)
    typer.echo(f"{leaf.toc_id} [{leaf.min}-{leaf.max}]")


@app.command("link")
def link_cmd(
    toc: Path = typer.Argument(..., help="Path to the TOC JSON file", path_type=Path),
    ref: int = typer.Argument(..., help="Cross-reference number"),
) -> None:
    """Print the short link to the page containing a reference number."""
    meta = _build(toc, load_build_config())
    link = make_ref_link(meta, ref)
    if link is None:
        typer.echo(f"No page contains reference {ref}.", err=True)
        raise typer.Exit(1)
    typer.echo(link)


@app.command("slug")
def slug_cmd(
    title: str = typer.Argument(..., help="Section title"),
    max_words: int | None = typer.Option(None, "--max-words", min=1, help="Words kept in the slug"),
) -> None:
    """Show the URL slug for a title."""
    config = load_build_config(slug_max_words=max_words)
    typer.echo(
        parse_to_short_link_text(
            title, max_words=config.slug_max_words, label_words=config.label_words
        )
    )


def main() -> None:
    """Entry point for the book-nav console script."""
    app()


if __name__ == "__main__":
    main()
