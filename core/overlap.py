"""Overlap ("influence") between a platform's topics and a reference set.

``overlap`` is a one-sided containment ratio: the share of the platform's
entries whose topic also appears among the reference names. Matching is
exact and case-sensitive. A platform with no topics has 0% overlap.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping, Sequence
from typing import Any

from core.models import OverlapResult
from core.normalizer import DatasetLike, find_graph

logger = logging.getLogger(__name__)

#: Graph whose ``data`` keys name the topics other newsrooms cover.
NEWSROOM_GRAPH_TITLE = "News Topic Counts of Articles"


def _topic_name(entry: Any) -> str:
    """Return the topic string of a model, ``{"topic": ...}`` mapping or str."""
    if isinstance(entry, str):
        return entry
    if isinstance(entry, Mapping):
        return entry.get("topic", "") or ""
    return getattr(entry, "topic", "") or ""


def overlap(platform_topics: Sequence[Any], reference_topic_names: Collection[str]) -> float:
    """Percentage of *platform_topics* whose topic is in the reference set.

    Every entry counts, so a topic listed twice on a platform counts twice.

    Args:
        platform_topics: Entries carrying a ``topic`` (models, mappings or
            bare strings).
        reference_topic_names: Known topic names.

    Returns:
        A float in ``[0, 100]``; ``0.0`` when *platform_topics* is empty.

    Examples:
        >>> overlap([{"topic": "X"}, {"topic": "Y"}], {"X"})
        50.0
    """
    if not platform_topics:
        return 0.0

    reference = set(reference_topic_names)
    matched = sum(1 for entry in platform_topics if _topic_name(entry) in reference)
    return 100.0 * matched / len(platform_topics)


def overlap_by_source(
    groups: Mapping[str, Sequence[Any]],
    reference_topic_names: Collection[str],
) -> list[OverlapResult]:
    """Compute ``overlap`` for each source, in the mapping's order."""
    reference = set(reference_topic_names)
    results = [
        OverlapResult(source=source, percentage=overlap(topics, reference))
        for source, topics in groups.items()
    ]
    logger.debug("Computed overlap for %d sources", len(results))
    return results


def reference_topic_names(
    dataset: DatasetLike,
    title: str = NEWSROOM_GRAPH_TITLE,
) -> list[str]:
    """Return the topic names keyed in the titled graph's ``data`` mapping."""
    graph = find_graph(dataset, title)
    if graph is None:
        return []
    return list(graph.data.keys())

