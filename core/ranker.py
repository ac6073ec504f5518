"""Leaderboard ranking: sort by a numeric key, descending, and truncate."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Optional, TypeVar, Union

T = TypeVar("T")

#: Default number of entries shown on a leaderboard.
DEFAULT_LIMIT = 5


def _key_fn(key: Union[str, Callable[[Any], float]]) -> Callable[[Any], float]:
    if callable(key):
        return key
    return lambda item: getattr(item, key)


def rank(
    items: Iterable[T],
    key: Union[str, Callable[[T], float]] = "total_count",
    limit: Optional[int] = DEFAULT_LIMIT,
) -> list[T]:
    """Sort *items* by *key* descending and keep the first *limit*.

    Equal keys keep their input order (``sorted`` is stable with
    ``reverse=True``), so ranking an already ranked list changes nothing.

    Args:
        items: Aggregated topics, or any caller-filtered subset of them.
        key: Attribute name or callable returning the sort value.
        limit: Maximum entries to return; ``None`` keeps all of them.

    Returns:
        The ranked list. Fewer than *limit* items are returned as-is.

    Raises:
        ValueError: If *limit* is negative.

    Examples:
        >>> [t.topic for t in rank(aggregate(observations), limit=1)]
        ['AI']
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    ranked = sorted(items, key=_key_fn(key), reverse=True)
    return ranked if limit is None else ranked[:limit]
