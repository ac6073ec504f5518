"""Topic aggregation and deduplication.

Responsibilities:
- Sum observation counts per topic into ``AggregatedTopic`` values
- Keep the first-seen ``type`` tag for every topic (never overwritten)
- Deduplicate observations by topic, keeping the first occurrence
- Build the secondary cross-platform total used by the classifier

The first-write-wins rule is the core of the aggregator: a topic first seen
as ``"rising"`` stays ``"rising"`` even if a later source tags it
``"trending"``. Later observations only add to the count.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Iterable, Mapping

from core.models import AggregatedTopic, TopicObservation

logger = logging.getLogger(__name__)


# ── Aggregation ────────────────────────────────────────────────────────────────


def aggregate(observations: Iterable[TopicObservation]) -> dict[str, AggregatedTopic]:
    """Group observations by topic and sum their counts.

    Args:
        observations: Normalised observations, in dataset order.

    Returns:
        Dict mapping topic → ``AggregatedTopic`` in first-seen order. An
        empty input yields an empty dict.

    Examples:
        >>> aggregate([
        ...     TopicObservation(topic="AI", count=5, type="rising"),
        ...     TopicObservation(topic="AI", count=3, type="trending"),
        ... ])["AI"]
        AggregatedTopic(topic='AI', total_count=8, type='rising')
    """
    totals: dict[str, int] = {}
    types: dict[str, str | None] = {}

    for observation in observations:
        if observation.topic not in totals:
            totals[observation.topic] = observation.count
            types[observation.topic] = observation.type
        else:
            totals[observation.topic] += observation.count

    return {
        topic: AggregatedTopic(topic=topic, total_count=total, type=types[topic])
        for topic, total in totals.items()
    }


# ── Deduplication ──────────────────────────────────────────────────────────────


def deduplicate(observations: Iterable[TopicObservation]) -> list[TopicObservation]:
    """Keep only the first observation seen for each topic.

    Topic names are compared exactly (case-sensitive, no trimming).

    Returns:
        Deduplicated list in original order.
    """
    seen: set[str] = set()
    unique: list[TopicObservation] = []

    for observation in observations:
        if observation.topic not in seen:
            seen.add(observation.topic)
            unique.append(observation)

    return unique


# ── Cross-platform totals ──────────────────────────────────────────────────────


def total_count_index(
    feeds: Mapping[str, Iterable[TopicObservation]],
) -> dict[str, int]:
    """Sum every platform's counts per exact topic string.

    Args:
        feeds: Dict mapping platform → its trending topic observations.

    Returns:
        Dict mapping topic → summed count across all platforms.
    """
    index: dict[str, int] = defaultdict(int)
    for observations in feeds.values():
        for observation in observations:
            index[observation.topic] += observation.count
    return dict(index)


def make_total_count_fn(
    feeds: Mapping[str, Iterable[TopicObservation]],
) -> Callable[[str], int]:
    """Return a ``topic -> cross-platform total`` lookup over *feeds*.

    Topics absent from every platform total to 0.
    """
    index = total_count_index(feeds)
    logger.debug("Cross-platform index built for %d topics", len(index))

    def total_count(topic: str) -> int:
        return index.get(topic, 0)

    return total_count
