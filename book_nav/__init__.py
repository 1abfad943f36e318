"""
Book Nav: page navigation, short links and cross-reference lookup for a book TOC.

Use as a library:

    from book_nav import TocStore, make_book_meta
    meta = make_book_meta(TocStore.model_validate(toc_json))
    meta.url_map["0.1"]                     # node id behind a short link
    meta.ref_range_tree.find_toc_id(1234)   # node owning reference 1234

Or run the CLI:

    book-nav build path/to/toc.json -o path/to/meta.json
"""

from book_nav.api import build_meta_from_file
from book_nav.map_utils import merge_objects_properties
from book_nav.meta import make_book_meta, make_toc_to_url_map
from book_nav.models import (
    BookMeta,
    BreadcrumbNode,
    BuildConfig,
    PageMetaNode,
    RefRange,
    TocNode,
    TocStore,
    TocStructureError,
)
from book_nav.range_tree import RangeTree, RangeTreeNode, make_ref_range_tree
from book_nav.slug import parse_to_short_link_text

__all__ = [
    "build_meta_from_file",
    "make_book_meta",
    "make_toc_to_url_map",
    "make_ref_range_tree",
    "merge_objects_properties",
    "parse_to_short_link_text",
    "BookMeta",
    "BreadcrumbNode",
    "BuildConfig",
    "PageMetaNode",
    "RangeTree",
    "RangeTreeNode",
    "RefRange",
    "TocNode",
    "TocStore",
    "TocStructureError",
]
