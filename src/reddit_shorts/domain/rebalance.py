"""Merging an undersized final chunk into its predecessor after a duration split."""

from typing import Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")


def should_merge_tail(
    durations: Sequence[float],
    min_tail_seconds: float = 30.0,
    max_merged_seconds: Optional[float] = None,
) -> bool:
    """
    True when the last of several chunks is shorter than `min_tail_seconds`
    and, if `max_merged_seconds` is given, the merged chunk would not exceed it.
    """
    if len(durations) < 2 or durations[-1] >= min_tail_seconds:
        return False
    if max_merged_seconds is not None and durations[-2] + durations[-1] > max_merged_seconds:
        return False
    return True


def rebalance_durations(
    durations: Sequence[float],
    min_tail_seconds: float = 30.0,
    max_merged_seconds: Optional[float] = None,
) -> List[float]:
    """[60, 60, 60, 25] -> [60, 60, 85]; anything else is returned unchanged."""
    result = list(durations)
    if should_merge_tail(result, min_tail_seconds, max_merged_seconds):
        tail = result.pop()
        result[-1] += tail
    return result


def rebalance_chunks(
    chunks: Sequence[T],
    durations: Sequence[float],
    concat: Callable[[T, T], T],
    min_tail_seconds: float = 30.0,
    max_merged_seconds: Optional[float] = None,
) -> List[T]:
    """
    Replace the last two chunks by `concat(previous, last)` when the last one
    is shorter than `min_tail_seconds`. Order of the remaining chunks is kept.
    """
    if len(chunks) != len(durations):
        raise ValueError("chunks and durations must have the same length")
    result = list(chunks)
    if should_merge_tail(durations, min_tail_seconds, max_merged_seconds):
        last = result.pop()
        result[-1] = concat(result[-1], last)
    return result
