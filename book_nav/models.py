"""Data models for the TOC snapshot, build options and the metadata bundle."""

from typing import Any, Sequence

from pydantic import BaseModel, Field, model_validator

from book_nav.range_tree import RangeTree

DEFAULT_SLUG_MAX_WORDS = 5
DEFAULT_URL_DELIMITER = "+"
DEFAULT_LABEL_WORDS = ("chapter", "section", "article", "paragraph", "part")


class TocStructureError(Exception):
    """Raised when the TOC cannot be walked (cycle, dangling id, overlapping ranges)."""

    def __init__(self, message: str, node_id: str | None = None):
        super().__init__(message)
        self.node_id = node_id


class RefRange(BaseModel):
    """Inclusive range of cross-reference numbers."""

    min: int
    max: int

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_order(self) -> "RefRange":
        if self.min > self.max:
            raise ValueError(f"range min {self.min} is greater than max {self.max}")
        return self

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def union(self, other: "RefRange") -> "RefRange":
        return RefRange(min=min(self.min, other.min), max=max(self.max, other.max))


class TocNode(BaseModel):
    """One entry of the table of contents."""

    id: str = Field(description="Stable unique identifier")
    title: str = Field(default="", description="Raw display title")
    children: list[str] = Field(default_factory=list, description="Ordered child node ids")
    parent_id: str | None = Field(
        default=None,
        alias="parentId",
        description="Back-reference to the containing node (None for roots)",
    )
    has_page: bool = Field(
        default=False,
        alias="hasPage",
        description="Only nodes with a page get a URL and join the prev/next chain",
    )
    ref_range: RefRange | None = Field(
        default=None,
        alias="refRange",
        description="Cross-reference numbers owned directly by this node",
    )

    model_config = {"frozen": True, "populate_by_name": True}


def _default_roots(nodes) -> list[str]:
    """Ids of nodes with no parent_id that no other node lists as a child, in input order."""
    nodes = list(nodes)
    listed = {child for n in nodes for child in n.children}
    return [n.id for n in nodes if n.parent_id is None and n.id not in listed]


class TocStore(BaseModel):
    """Arena of TOC nodes keyed by id, plus the ordered list of top-level ids."""

    nodes: dict[str, TocNode] = Field(default_factory=dict)
    roots: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _nodes_from_list(cls, data: Any) -> Any:
        # JSON input may list nodes as an array instead of an id-keyed object
        if not isinstance(data, dict):
            return data
        raw_nodes = data.get("nodes", {})
        if isinstance(raw_nodes, dict):
            raw_nodes = list(raw_nodes.values())
        if not isinstance(raw_nodes, list):
            return data
        nodes = {}
        for raw in raw_nodes:
            node = raw if isinstance(raw, TocNode) else TocNode.model_validate(raw)
            nodes[node.id] = node
        data = dict(data)
        data["nodes"] = nodes
        if "roots" not in data:
            data["roots"] = _default_roots(nodes.values())
        return data

    @classmethod
    def from_nodes(cls, nodes: Sequence[TocNode], roots: Sequence[str] | None = None) -> "TocStore":
        """Build a store from a node sequence. Without roots, top-level nodes become roots in order."""
        table = {n.id: n for n in nodes}
        if roots is None:
            roots = _default_roots(nodes)
        return cls(nodes=table, roots=list(roots))

    def __len__(self) -> int:
        return len(self.nodes)


class BuildConfig(BaseModel):
    """Options for a metadata build."""

    slug_max_words: int = Field(
        default=DEFAULT_SLUG_MAX_WORDS,
        gt=0,
        description="Number of title words kept in a URL slug",
    )
    url_delimiter: str = Field(
        default=DEFAULT_URL_DELIMITER,
        description="Separator between the numeric path and the slug",
    )
    label_words: tuple[str, ...] = Field(
        default=DEFAULT_LABEL_WORDS,
        description="Leading structural labels stripped from titles (case-insensitive)",
    )

    model_config = {"frozen": True}


class PageMetaNode(BaseModel):
    """Navigation record for a page-bearing node."""

    id: str
    url: str
    prev: str = Field(default="", description="Previous page id, empty for the first page")
    next: str = Field(default="", description="Next page id, empty for the last page")

    model_config = {"frozen": True}


class BreadcrumbNode(BaseModel):
    """Link from a node to its nearest ancestor."""

    id: str
    parent: str = Field(default="", description="Nearest ancestor id, empty for roots")

    model_config = {"frozen": True}


class BookMeta(BaseModel):
    """Everything one build produces."""

    page_meta_map: dict[str, PageMetaNode] = Field(default_factory=dict)
    url_map: dict[str, str] = Field(
        default_factory=dict,
        description="Truncated numeric path (e.g. '0.1') -> node id",
    )
    breadcrumbs_map: dict[str, BreadcrumbNode] = Field(default_factory=dict)
    ref_range_map: dict[str, RefRange] = Field(
        default_factory=dict,
        description="Node id -> range covering the node and its descendants",
    )
    ref_range_tree: RangeTree = Field(default_factory=RangeTree)

    model_config = {"frozen": True}
