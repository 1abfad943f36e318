"""
Balanced range tree over non-overlapping cross-reference ranges.

Built once from ranges sorted by their lower bound; answers "which TOC node
owns reference number N" in O(log n). Leaves carry the owning node id,
internal nodes carry the union of their children's ranges.
"""

from typing import Iterator, Protocol, Sequence

from pydantic import BaseModel, Field


class _Bounded(Protocol):
    min: int
    max: int


class RangeTreeNode(BaseModel):
    """One node of the range tree. `toc_id` is set on leaves only."""

    min: int
    max: int
    left: "RangeTreeNode | None" = None
    right: "RangeTreeNode | None" = None
    toc_id: str | None = None

    model_config = {"frozen": True}

    @property
    def is_leaf(self) -> bool:
        return self.toc_id is not None

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max


RangeTreeNode.model_rebuild()


class RangeTree(BaseModel):
    """Range lookup structure. An empty tree has no root and finds nothing."""

    root: RangeTreeNode | None = Field(default=None)

    model_config = {"frozen": True}

    def lookup(self, value: int) -> RangeTreeNode | None:
        """Return the leaf whose range contains value, or None if no range does."""
        node = self.root
        while node is not None:
            if not node.contains(value):
                return None
            if node.is_leaf:
                return node
            if node.left is not None and node.left.contains(value):
                node = node.left
            elif node.right is not None and node.right.contains(value):
                node = node.right
            else:
                # Gap between the two children
                return None
        return None

    def find_toc_id(self, value: int) -> str | None:
        leaf = self.lookup(value)
        return leaf.toc_id if leaf is not None else None

    def leaves(self) -> Iterator[RangeTreeNode]:
        """Yield leaves left to right."""
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            if node.is_leaf:
                yield node
                continue
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def depth(self) -> int:
        def _depth(node: RangeTreeNode | None) -> int:
            if node is None or node.is_leaf:
                return 0
            return 1 + max(_depth(node.left), _depth(node.right))

        return _depth(self.root)


def _build(entries: Sequence[tuple[_Bounded, str]]) -> RangeTreeNode:
    if len(entries) == 1:
        rng, toc_id = entries[0]
        return RangeTreeNode(min=rng.min, max=rng.max, toc_id=toc_id)
    mid = (len(entries) + 1) // 2
    left = _build(entries[:mid])
    right = _build(entries[mid:])
    return RangeTreeNode(
        min=min(left.min, right.min),
        max=max(left.max, right.max),
        left=left,
        right=right,
    )


def make_ref_range_tree(entries: Sequence[tuple[_Bounded, str]]) -> RangeTree:
    """
    Build a range tree from (range, toc_id) pairs.

    Pairs must be sorted ascending by range min and must not overlap; anything
    else raises ValueError. An empty sequence gives an empty tree.
    """
    entries = list(entries)
    for (prev, prev_id), (cur, cur_id) in zip(entries, entries[1:]):
        if cur.min <= prev.max:
            raise ValueError(
                f"ranges must be sorted and disjoint: {prev_id} [{prev.min}, {prev.max}] "
                f"precedes {cur_id} [{cur.min}, {cur.max}]"
            )
    if not entries:
        return RangeTree()
    return RangeTree(root=_build(entries))
