"""Demand classification.

Partitions the deduplicated topic set into two actionable buckets:

- HIGH DEMAND  📈  topics tagged ``trending`` whose cross-platform total
                   satisfies the configured threshold comparison
- UNTAPPED     🌱  topics tagged ``rising`` whose cross-platform total is at
                   or below a low-activity threshold

The metric comes from ``total_count_fn`` (see
``core.aggregator.make_total_count_fn``), which is computed from the
platform feeds rather than from the graphs the topic set was taken from.
Topics matching neither rule are left out; the buckets are not a full
partition.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Optional, Union

from core.models import Classification, ClassifiedTopic, TopicObservation
from core.ranker import rank

logger = logging.getLogger(__name__)


# ── Enums ──────────────────────────────────────────────────────────────────────


class TopicType(str, Enum):
    """Type tags the classifier reacts to."""

    TRENDING = "trending"
    RISING = "rising"


class ThresholdPolarity(str, Enum):
    """Direction of the high-demand threshold comparison."""

    BELOW = "below"    # total_count < threshold
    ABOVE = "above"    # total_count > threshold


#: Polarity used when the caller does not choose one. Matches the dashboard
#: as shipped: trending topics that have not yet crossed the threshold.
DEFAULT_POLARITY = ThresholdPolarity.BELOW

#: Default thresholds used by the dashboard.
DEFAULT_HIGH_DEMAND_THRESHOLD = 100
DEFAULT_UNTAPPED_THRESHOLD = 50


def parse_polarity(value: Union[str, ThresholdPolarity]) -> ThresholdPolarity:
    """Parse a polarity name (case-insensitive).

    Raises:
        ValueError: If *value* is not ``"below"`` or ``"above"``.
    """
    try:
        return ThresholdPolarity(str(getattr(value, "value", value)).strip().lower())
    except ValueError:
        raise ValueError(
            f"Unknown threshold polarity {value!r}; expected 'below' or 'above'."
        ) from None


# ── Predicates ─────────────────────────────────────────────────────────────────


def meets_high_demand(
    total: int,
    threshold: int,
    polarity: ThresholdPolarity = DEFAULT_POLARITY,
) -> bool:
    """Apply the high-demand comparison for *polarity* (both strict)."""
    if polarity is ThresholdPolarity.ABOVE:
        return total > threshold
    return total < threshold


def meets_untapped(total: int, threshold: int) -> bool:
    """A rising topic is untapped while its total is at most *threshold*."""
    return total <= threshold


# ── Public interface ───────────────────────────────────────────────────────────


def classify(
    unique_topics: Iterable[TopicObservation],
    total_count_fn: Callable[[str], Optional[int]],
    high_demand_threshold: int = DEFAULT_HIGH_DEMAND_THRESHOLD,
    untapped_threshold: int = DEFAULT_UNTAPPED_THRESHOLD,
    polarity: Union[str, ThresholdPolarity] = DEFAULT_POLARITY,
) -> Classification:
    """Sort deduplicated topics into high-demand and untapped buckets.

    Args:
        unique_topics: First-seen-deduplicated observations (see
            ``core.aggregator.deduplicate``).
        total_count_fn: Returns the cross-platform total for a topic name;
            ``None`` is treated as 0.
        high_demand_threshold: Threshold for trending topics.
        untapped_threshold: Inclusive ceiling for rising topics.
        polarity: ``"below"`` or ``"above"`` for the high-demand comparison.

    Returns:
        A ``Classification`` with both buckets sorted by total, descending.
        Ties keep the order of *unique_topics*.

    Examples:
        >>> classify([TopicObservation(topic="Elections", count=1, type="trending")],
        ...          lambda topic: 40, high_demand_threshold=100).high_demand
        [ClassifiedTopic(topic='Elections', type='trending', total_count=40)]
    """
    polarity = parse_polarity(polarity)

    high_demand: list[ClassifiedTopic] = []
    untapped: list[ClassifiedTopic] = []

    for observation in unique_topics:
        total = total_count_fn(observation.topic) or 0
        classified = ClassifiedTopic(
            topic=observation.topic, type=observation.type, total_count=total
        )

        if observation.type == TopicType.TRENDING.value:
            if meets_high_demand(total, high_demand_threshold, polarity):
                high_demand.append(classified)
        elif observation.type == TopicType.RISING.value:
            if meets_untapped(total, untapped_threshold):
                untapped.append(classified)

    logger.debug(
        "Classified %d high-demand and %d untapped topics (polarity=%s)",
        len(high_demand), len(untapped), polarity.value,
    )
    return Classification(
        high_demand=rank(high_demand, limit=None),
        untapped=rank(untapped, limit=None),
    )
