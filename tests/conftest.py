"""Shared fixtures: a small TOC with nested pages, page-less nodes and reference ranges."""

import json

import pytest

from book_nav.models import RefRange, TocNode, TocStore


def make_mock_store() -> TocStore:
    """
    toc-1 (page)                  -> "0"
      toc-2 (page, refs 1-3)      -> "0.1"
      toc-3 (page, refs 4-6)      -> "0.2"
      toc-no-page-1
        toc-doesnt-exist-1
    toc-10 (page, refs 7-8)       -> "1"
    toc-no-page-2
      toc-doesnt-exist-2
    """
    nodes = [
        TocNode(
            id="toc-1",
            title="Link Text 1",
            has_page=True,
            children=["toc-2", "toc-3", "toc-no-page-1"],
        ),
        TocNode(id="toc-2", title="Link Text 2", has_page=True, parent_id="toc-1",
                ref_range=RefRange(min=1, max=3)),
        TocNode(id="toc-3", title="Link Text 3", has_page=True, parent_id="toc-1",
                ref_range=RefRange(min=4, max=6)),
        TocNode(id="toc-no-page-1", title="No Page 1", parent_id="toc-1",
                children=["toc-doesnt-exist-1"]),
        TocNode(id="toc-doesnt-exist-1", title="Missing 1", parent_id="toc-no-page-1"),
        TocNode(id="toc-10", title="Link Text 10", has_page=True,
                ref_range=RefRange(min=7, max=8)),
        TocNode(id="toc-no-page-2", title="No Page 2", children=["toc-doesnt-exist-2"]),
        TocNode(id="toc-doesnt-exist-2", title="Missing 2", parent_id="toc-no-page-2"),
    ]
    return TocStore.from_nodes(nodes, roots=["toc-1", "toc-10", "toc-no-page-2"])


@pytest.fixture
def mock_store() -> TocStore:
    return make_mock_store()


@pytest.fixture
def toc_json(tmp_path):
    """The mock TOC written as JSON, using the camelCase keys of exported TOCs."""
    path = tmp_path / "toc.json"
    store = make_mock_store()
    nodes = [n.model_dump(mode="json", by_alias=True) for n in store.nodes.values()]
    path.write_text(
        json.dumps({"roots": store.roots, "nodes": nodes}),
        encoding="utf-8",
    )
    return path
