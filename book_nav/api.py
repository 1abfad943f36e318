"""
Public API: build navigation metadata from a TOC file.

    from book_nav import build_meta_from_file
    meta = build_meta_from_file("books/ccc/toc.json", out_path="books/ccc/meta.json")
"""

from pathlib import Path

from book_nav.config import load_build_config
from book_nav.core import load_toc, write_meta
from book_nav.meta import make_book_meta
from book_nav.models import BookMeta, BuildConfig


def build_meta_from_file(
    toc_path: str | Path,
    out_path: str | Path | None = None,
    *,
    config: BuildConfig | None = None,
) -> BookMeta:
    """
    Load a TOC, build its metadata and optionally write it to JSON.

    Args:
        toc_path: Path to the TOC JSON file.
        out_path: Where to write the bundle; nothing is written when None.
        config: Build options; default from .book_nav.json (or built-in defaults).

    Returns:
        The BookMeta bundle.
    """
    store = load_toc(Path(toc_path))
    meta = make_book_meta(store, config or load_build_config())
    if out_path is not None:
        write_meta(meta, Path(out_path))
    return meta
