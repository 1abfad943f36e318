"""
Assemble the navigation bundle for a TOC snapshot.

    from book_nav import make_book_meta
    meta = make_book_meta(store)
    meta.page_meta_map["toc-3"].next      # id of the following page
    meta.ref_range_tree.find_toc_id(42)  # node owning reference 42, or None
"""

import logging
from typing import Mapping, Sequence

from book_nav.models import BookMeta, BuildConfig, PageMetaNode, TocStore
from book_nav.range_tree import make_ref_range_tree
from book_nav.traverse import walk_toc

log = logging.getLogger(__name__)


def link_pages(page_ids: Sequence[str], urls: Mapping[str, str]) -> dict[str, PageMetaNode]:
    """Chain pages in the given order: each gets the previous and next id ("" at the ends)."""
    last = len(page_ids) - 1
    return {
        page_id: PageMetaNode(
            id=page_id,
            url=urls[page_id],
            prev=page_ids[i - 1] if i > 0 else "",
            next=page_ids[i + 1] if i < last else "",
        )
        for i, page_id in enumerate(page_ids)
    }


def make_book_meta(store: TocStore, config: BuildConfig | None = None) -> BookMeta:
    """
    Build page metadata, the URL map, breadcrumbs and the reference range tree.

    Raises TocStructureError if the TOC has a cycle, a dangling id, or two
    nodes owning the same reference number.
    """
    walk = walk_toc(store, config)
    page_meta_map = link_pages(walk.page_ids, walk.urls)
    tree = make_ref_range_tree(walk.owned_ranges)
    log.info(
        "Built metadata: %d nodes, %d pages, %d reference ranges",
        len(walk.breadcrumbs),
        len(page_meta_map),
        len(walk.owned_ranges),
    )
    return BookMeta(
        page_meta_map=page_meta_map,
        url_map=walk.url_map,
        breadcrumbs_map=walk.breadcrumbs,
        ref_range_map=walk.ref_ranges,
        ref_range_tree=tree,
    )


def make_toc_to_url_map(store: TocStore, config: BuildConfig | None = None) -> dict[str, str]:
    """Node id -> URL for every page-bearing node."""
    return walk_toc(store, config).urls
