"""
project: Delve
module: partition.py
License: MIT

Binary space partitioning of the square logical grid.

Partitions are plain records owning their two children by value; the tree is
discarded once rooms have been carved from its leaves.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional, Tuple

from .rng import SeededRandom

MIN_SPLIT = 4  # a side shorter than this is never split
MIN_LEAF = 2  # smallest side a split may leave behind


class Rect(NamedTuple):
    x: int
    y: int
    w: int
    h: int


@dataclass
class Partition:
    x: int
    y: int
    width: int
    height: int
    children: Optional[Tuple["Partition", "Partition"]] = None

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


def _cut(extent: int, rng: SeededRandom) -> int:
    """Split offset: half the extent with -1/0 jitter, kept inside [MIN_LEAF, extent - MIN_LEAF]."""
    offset = extent // 2 + math.floor((rng.random() - 0.5) * 2)
    return max(MIN_LEAF, min(extent - MIN_LEAF, offset))


def split_partition(part: Partition, depth: int, max_depth: int, rng: SeededRandom) -> None:
    if depth >= max_depth or part.width < MIN_SPLIT or part.height < MIN_SPLIT:
        return
    horizontal = rng.random() > 0.5
    # No fallback to the other axis: a refused axis leaves a leaf.
    if horizontal and part.height >= MIN_SPLIT:
        cut = _cut(part.height, rng)
        part.children = (
            Partition(part.x, part.y, part.width, cut),
            Partition(part.x, part.y + cut, part.width, part.height - cut),
        )
    elif not horizontal and part.width >= MIN_SPLIT:
        cut = _cut(part.width, rng)
        part.children = (
            Partition(part.x, part.y, cut, part.height),
            Partition(part.x + cut, part.y, part.width - cut, part.height),
        )
    if part.children is not None:
        left, right = part.children
        split_partition(left, depth + 1, max_depth, rng)
        split_partition(right, depth + 1, max_depth, rng)


def build_partition_tree(grid_size: int, max_depth: int, rng: SeededRandom) -> Partition:
    root = Partition(0, 0, grid_size, grid_size)
    split_partition(root, 0, max_depth, rng)
    return root


def iter_leaves(part: Partition) -> Iterator[Partition]:
    """Yield leaves depth-first, first child before second."""
    if part.children is None:
        yield part
        return
    for child in part.children:
        yield from iter_leaves(child)


__all__ = ["MIN_SPLIT", "MIN_LEAF", "Rect", "Partition", "split_partition", "build_partition_tree", "iter_leaves"]
