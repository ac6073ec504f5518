"""Dashboard pipeline: one dataset snapshot in, one ``DashboardReport`` out.

    normalize ─► aggregate ─► rank               → top_topics
        │
        └──────► deduplicate ─► classify          → classification
    platform feeds ─► total_count_fn ─┘
    platform feeds ─► overlap vs newsroom topics  → overlap
    engagement graph                              → engagement
    newsroom graph                                → newsroom

The topic set being classified and the totals it is classified by come from
different parts of the dataset (graph sources vs. platform feeds).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from core.aggregator import aggregate, deduplicate, make_total_count_fn
from core.classifier import classify
from core.engagement import newsroom_topic_counts, platform_engagement
from core.models import (
    AggregatedTopic,
    Classification,
    DashboardReport,
    OverlapResult,
    TopicObservation,
)
from core.normalizer import (
    DatasetLike,
    as_dataset,
    group_by_source,
    normalize,
    normalize_graph,
    platform_topics,
)
from core.overlap import overlap_by_source, reference_topic_names
from core.ranker import rank

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)


def top_topics(observations: list[TopicObservation], limit: int) -> list[AggregatedTopic]:
    """Aggregate *observations* and return the *limit* largest totals."""
    return rank(aggregate(observations).values(), limit=limit)


def classification(
    dataset: DatasetLike,
    observations: list[TopicObservation],
    settings: Settings,
) -> Classification:
    """Classify the deduplicated topics by their cross-platform totals."""
    total_count_fn = make_total_count_fn(platform_topics(dataset))
    return classify(
        deduplicate(observations),
        total_count_fn,
        high_demand_threshold=settings.high_demand_threshold,
        untapped_threshold=settings.untapped_threshold,
        polarity=settings.high_demand_polarity,
    )


def influence(dataset: DatasetLike, settings: Settings) -> list[OverlapResult]:
    """Overlap of each platform's topics with the newsroom topic set.

    Datasets without platform feeds are measured per source of the social
    media graph instead.
    """
    reference = reference_topic_names(dataset, settings.newsroom_graph_title)
    groups = platform_topics(dataset)
    if not groups:
        groups = group_by_source(normalize_graph(dataset, settings.social_graph_title))
    return overlap_by_source(groups, reference)


def build_report(
    dataset: DatasetLike,
    settings: Settings,
    month: Optional[str] = None,
) -> DashboardReport:
    """Full dashboard pipeline for one dataset snapshot.

    This is the single entry point used by ``web/app.py``.

    Args:
        dataset: The dataset snapshot (model or raw mapping).
        settings: Thresholds, polarity, leaderboard size and graph titles.
        month: Month label for the engagement view; defaults to January.

    Returns:
        A ``DashboardReport`` of plain, render-ready data.
    """
    ds = as_dataset(dataset)
    observations = normalize(ds)

    report = DashboardReport(
        top_topics=top_topics(observations, settings.top_n),
        classification=classification(ds, observations, settings),
        overlap=influence(ds, settings),
        engagement=platform_engagement(ds, month, title=settings.engagement_graph_title),
        newsroom=newsroom_topic_counts(ds, title=settings.newsroom_graph_title),
    )

    logger.info(
        "Report built: %d observations, %d top topics, %d high-demand, %d untapped",
        len(observations),
        len(report.top_topics),
        len(report.classification.high_demand),
        len(report.classification.untapped),
    )
    return report
