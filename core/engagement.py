"""Platform engagement and newsroom coverage views.

Both read a titled graph's ``data`` mapping:

- "Trending Conversations" maps platform → month label → count
- "News Topic Counts of Articles" maps topic → ``{"count": n}``
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date
from typing import Optional, Union

from core.models import PlatformEngagement, TopicCount
from core.normalizer import DatasetLike, find_graph
from core.overlap import NEWSROOM_GRAPH_TITLE
from core.ranker import rank

logger = logging.getLogger(__name__)

ENGAGEMENT_GRAPH_TITLE = "Trending Conversations"

#: Month keys used by the engagement graph, independent of the locale.
MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

#: Month shown when the caller does not pick one.
DEFAULT_MONTH = "Jan"


def month_label(value: Union[date, str, None]) -> str:
    """Return a three-letter month label such as ``"Jan"``.

    Dates (and datetimes) are formatted; strings pass through unchanged;
    ``None`` gives ``DEFAULT_MONTH``.
    """
    if value is None:
        return DEFAULT_MONTH
    if isinstance(value, date):
        return MONTH_LABELS[value.month - 1]
    return value


def platform_engagement(
    dataset: DatasetLike,
    month: Union[date, str, None] = None,
    title: str = ENGAGEMENT_GRAPH_TITLE,
    platforms: Optional[Sequence[str]] = None,
) -> list[PlatformEngagement]:
    """Per-platform activity for *month*, busiest platform first.

    Args:
        dataset: The dataset snapshot.
        month: Month label or date; defaults to January.
        title: Title of the engagement graph.
        platforms: Platforms to report; defaults to every platform in the
            graph, in dataset order. Missing platforms or months count as 0.

    Returns:
        List of ``PlatformEngagement`` sorted by count, descending (stable).
        Empty if the graph is absent.
    """
    graph = find_graph(dataset, title)
    if graph is None:
        logger.info("Engagement graph %r not present in dataset", title)
        return []

    label = month_label(month)
    names = list(platforms) if platforms is not None else list(graph.data.keys())
    rows = [
        PlatformEngagement(platform=name, count=graph.data.get(name, {}).get(label, 0))
        for name in names
    ]
    return rank(rows, key="count", limit=None)


def newsroom_topic_counts(
    dataset: DatasetLike,
    title: str = NEWSROOM_GRAPH_TITLE,
) -> list[TopicCount]:
    """Topic counts reported by other newsrooms, in dataset order."""
    graph = find_graph(dataset, title)
    if graph is None:
        return []
    return [
        TopicCount(topic=topic, count=values.get("count", 0))
        for topic, values in graph.data.items()
    ]
