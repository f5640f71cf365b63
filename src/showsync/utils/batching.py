"""Batching helpers for the sync pipeline."""

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def chunk(items: Sequence[T], size: int) -> list[list[T]]:
    """
    Split a sequence into contiguous batches.

    Args:
        items: Ordered items to split
        size: Maximum batch length, must be positive

    Returns:
        Batches in original order; the last one may be shorter

    Raises:
        ValueError: If size is not positive
    """
    if size <= 0:
        raise ValueError(f"Batch size must be positive, got {size}")
    return [list(items[start : start + size]) for start in range(0, len(items), size)]
