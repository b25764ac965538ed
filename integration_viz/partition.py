"""Split an ordered sample sequence into contiguous, edge-sharing partitions.

Every internal boundary sample belongs to both neighbouring partitions, so the
conceptual sequence length is ``count + (parts - 1)``. Partition ``i``
(1-indexed) ends at the cumulative target ``total * i / parts`` rounded half
up; sizes therefore differ by at most one and rounding error never accumulates
past half a sample.

>>> partition_sizes(5, 2)
[3, 3]
>>> partition_bounds(5, 2)
[(0, 3), (2, 5)]
"""

from __future__ import annotations

from typing import List, Sequence, Tuple, TypeVar

__all__ = ["partition_sizes", "partition_bounds", "partition"]

T = TypeVar("T")


def _rounded_target(total: int, index: int, parts: int) -> int:
    # floor(total * index / parts + 1/2) in exact integer arithmetic.
    return (2 * total * index + parts) // (2 * parts)


def partition_sizes(count: int, parts: int) -> List[int]:
    """Return the size of each partition, shared boundary samples included.

    Raises
    ------
    ValueError
        If ``parts < 1`` or ``count < 0``.
    """
    if parts < 1:
        raise ValueError(f"parts must be >= 1, got {parts}")
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if count == 0:
        return []

    total = count + parts - 1
    sizes: List[int] = []
    previous = 0
    for index in range(1, parts + 1):
        target = _rounded_target(total, index, parts)
        sizes.append(target - previous)
        previous = target
    return sizes


def partition_bounds(count: int, parts: int) -> List[Tuple[int, int]]:
    """Return ``(start, stop)`` slice bounds of each partition in the input sequence."""
    bounds: List[Tuple[int, int]] = []
    start = 0
    for size in partition_sizes(count, parts):
        bounds.append((start, start + size))
        start += size - 1
    return bounds


def partition(points: Sequence[T], parts: int) -> List[Sequence[T]]:
    """Slice ``points`` into ``parts`` partitions sharing their boundary samples.

    Works for lists and numpy arrays (array slices are views).
    """
    return [points[start:stop] for start, stop in partition_bounds(len(points), parts)]
