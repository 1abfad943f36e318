"""Mapping helpers shared by the traverser and the assembler."""

from typing import Iterable, Mapping, TypeVar

K = TypeVar("K")
V = TypeVar("V")


def merge_objects_properties(mappings: Iterable[Mapping[K, V]]) -> dict[K, V]:
    """Fold mappings into a new dict, left to right. Later keys overwrite earlier ones."""
    merged: dict[K, V] = {}
    for mapping in mappings:
        merged.update(mapping)
    return merged
