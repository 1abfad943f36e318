"""
Depth-first walk of a TOC snapshot.

One pre-order pass over the roots (children in declared order) gives, per node:
  - its URL and numeric path, if it has a page
  - its breadcrumb parent
  - its position in the page sequence
  - the reference range covering it and all its descendants (post-order fold)

Numeric paths: top-level pages are numbered from 0, pages below a page P are
numbered from 1 under P's path ("0", "0.1", "0.2", "1", ...). Page-less nodes
do not take a number; their page-bearing descendants are numbered in the
enclosing scope.
"""

import itertools
import logging
from dataclasses import dataclass, field

from book_nav.map_utils import merge_objects_properties
from book_nav.models import (
    BreadcrumbNode,
    BuildConfig,
    RefRange,
    TocNode,
    TocStore,
    TocStructureError,
)
from book_nav.slug import parse_to_short_link_text

log = logging.getLogger(__name__)


@dataclass
class TocWalk:
    """Partial maps produced by walking a TOC (or one subtree of it)."""
    page_ids: list[str] = field(default_factory=list)
    urls: dict[str, str] = field(default_factory=dict)
    url_map: dict[str, str] = field(default_factory=dict)
    breadcrumbs: dict[str, BreadcrumbNode] = field(default_factory=dict)
    ref_ranges: dict[str, RefRange] = field(default_factory=dict)
    owned_ranges: list[tuple[RefRange, str]] = field(default_factory=list)


class _PathScope:
    """Hands out consecutive numeric paths under one prefix."""

    def __init__(self, prefix: str, start: int):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def next_path(self) -> str:
        return f"{self.prefix}{next(self._counter)}"


def _combine(parts: list[TocWalk]) -> TocWalk:
    return TocWalk(
        page_ids=[pid for part in parts for pid in part.page_ids],
        urls=merge_objects_properties(p.urls for p in parts),
        url_map=merge_objects_properties(p.url_map for p in parts),
        breadcrumbs=merge_objects_properties(p.breadcrumbs for p in parts),
        ref_ranges=merge_objects_properties(p.ref_ranges for p in parts),
        owned_ranges=[entry for part in parts for entry in part.owned_ranges],
    )


def _sorted_owned_ranges(entries: list[tuple[RefRange, str]]) -> list[tuple[RefRange, str]]:
    """Sort explicit ranges by min; two nodes owning the same number is a structural error."""
    ordered = sorted(entries, key=lambda e: (e[0].min, e[0].max))
    for (prev, prev_id), (cur, cur_id) in zip(ordered, ordered[1:]):
        if cur.min <= prev.max:
            raise TocStructureError(
                f"reference range of {cur_id!r} [{cur.min}, {cur.max}] overlaps "
                f"{prev_id!r} [{prev.min}, {prev.max}]",
                node_id=cur_id,
            )
    return ordered


class _TocWalker:
    def __init__(self, store: TocStore, config: BuildConfig):
        self.store = store
        self.config = config
        self._visited: set[str] = set()
        self._on_path: set[str] = set()

    def _node(self, node_id: str, parent_id: str | None) -> TocNode:
        node = self.store.nodes.get(node_id)
        if node is None:
            if parent_id is None:
                raise TocStructureError(f"root {node_id!r} is not in the TOC", node_id=node_id)
            raise TocStructureError(
                f"node {parent_id!r} lists unknown child {node_id!r}", node_id=node_id
            )
        return node

    def _check_parent(self, node: TocNode, parent_id: str | None) -> None:
        if node.parent_id is None or node.parent_id == parent_id:
            return
        if node.parent_id not in self.store.nodes:
            raise TocStructureError(
                f"node {node.id!r} references unknown parent {node.parent_id!r}", node_id=node.id
            )
        where = f"under {parent_id!r}" if parent_id else "as a root"
        raise TocStructureError(
            f"node {node.id!r} declares parent {node.parent_id!r} but is listed {where}",
            node_id=node.id,
        )

    def _visit(self, node_id: str, parent_id: str | None, scope: _PathScope) -> tuple[TocWalk, RefRange | None]:
        node = self._node(node_id, parent_id)
        if node_id in self._on_path:
            raise TocStructureError(f"cycle in TOC through {node_id!r}", node_id=node_id)
        if node_id in self._visited:
            raise TocStructureError(f"node {node_id!r} appears more than once in the TOC", node_id=node_id)
        self._check_parent(node, parent_id)
        self._visited.add(node_id)
        self._on_path.add(node_id)

        own = TocWalk(breadcrumbs={node_id: BreadcrumbNode(id=node_id, parent=parent_id or "")})
        child_scope = scope
        if node.has_page:
            path = scope.next_path()
            slug = parse_to_short_link_text(
                node.title,
                max_words=self.config.slug_max_words,
                label_words=self.config.label_words,
            )
            own.page_ids = [node_id]
            own.urls = {node_id: f"{path}{self.config.url_delimiter}{slug}"}
            own.url_map = {path: node_id}
            child_scope = _PathScope(path + ".", 1)
            log.debug("page %s -> %s", node_id, own.urls[node_id])
        if node.ref_range is not None:
            own.owned_ranges = [(node.ref_range, node_id)]

        visited_children = [self._visit(child, node_id, child_scope) for child in node.children]
        walk = _combine([own] + [w for w, _ in visited_children])

        covered = node.ref_range
        for _, child_range in visited_children:
            if child_range is None:
                continue
            covered = child_range if covered is None else covered.union(child_range)
        if covered is not None:
            walk.ref_ranges[node_id] = covered

        self._on_path.discard(node_id)
        return walk, covered

    def walk(self) -> TocWalk:
        scope = _PathScope("", 0)
        parts = [self._visit(root, None, scope)[0] for root in self.store.roots]

        for node_id, node in self.store.nodes.items():
            if node_id in self._visited or node.parent_id is not None:
                continue
            log.warning("Orphan TOC node %r treated as a root", node_id)
            parts.append(self._visit(node_id, None, scope)[0])

        for node_id, node in self.store.nodes.items():
            if node_id not in self._visited:
                raise TocStructureError(
                    f"node {node_id!r} is unreachable from the roots (parent {node.parent_id!r} "
                    f"does not list it, or it sits on a cycle)",
                    node_id=node_id,
                )

        walk = _combine(parts)
        walk.owned_ranges = _sorted_owned_ranges(walk.owned_ranges)
        return walk


def walk_toc(store: TocStore, config: BuildConfig | None = None) -> TocWalk:
    """Walk the whole TOC once. Raises TocStructureError naming the offending node."""
    return _TocWalker(store, config or BuildConfig()).walk()
