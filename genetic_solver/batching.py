"""Helpers for splitting sequences into fixed-size chunks."""

from typing import Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")


def in_sets_of(
    source: Iterable[T],
    size: int,
    fill: bool = False,
    fill_value: Optional[T] = None,
) -> Iterator[List[T]]:
    """
    Yield consecutive chunks of ``size`` items from ``source``.

    Args:
        source: Items to split
        size: Maximum chunk size
        fill: Pad the last chunk up to ``size`` with ``fill_value``
        fill_value: Value used for padding

    Yields:
        Lists of at most ``size`` items (exactly ``size`` when ``fill`` is set)
    """
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")

    chunk: List[T] = []
    for item in source:
        chunk.append(item)
        if len(chunk) == size:
            yield chunk
            chunk = []

    if chunk:
        if fill:
            chunk.extend([fill_value] * (size - len(chunk)))
        yield chunk


def unit_bounds(number_of_genes: int, unit_size: int, start: int = 0) -> List[int]:
    """Return the start index of every unit of meaning at or after ``start``."""
    return [
        index
        for index in range(0, number_of_genes, unit_size)
        if index >= start
    ]
