"""Record normalisation.

Flattens the nested dataset (graph → source → topic) into a flat, ordered
list of ``TopicObservation`` values. Encounter order is preserved because
both the aggregator's first-seen ``type`` rule and the ranker's tie-break
depend on it.

Missing ``sources`` or ``topics`` lists simply contribute nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Union

from pydantic import ValidationError

from core.models import Dataset, Graph, TopicEntry, TopicObservation

logger = logging.getLogger(__name__)

DatasetLike = Union[Dataset, Mapping[str, Any]]


def as_dataset(dataset: DatasetLike) -> Dataset:
    """Return *dataset* as a validated ``Dataset`` model.

    Raises:
        pydantic.ValidationError: If the structure is not a dataset at all
            (e.g. a count that is not a number).
    """
    if isinstance(dataset, Dataset):
        return dataset
    return Dataset.model_validate(dict(dataset))


def _observe(entries: Iterable[TopicEntry], source: str) -> list[TopicObservation]:
    observations: list[TopicObservation] = []
    for entry in entries:
        try:
            observations.append(
                TopicObservation(
                    topic=entry.topic,
                    count=entry.count,
                    source=source,
                    type=entry.type,
                )
            )
        except ValidationError as exc:
            logger.warning(
                "Skipping invalid topic entry %r from source=%r: %s",
                entry.topic, source, exc.errors()[0]["msg"],
            )
    return observations


def _flatten_graph(graph: Graph) -> list[TopicObservation]:
    observations: list[TopicObservation] = []
    for block in graph.sources:
        observations.extend(_observe(block.topics, block.source))
    return observations


def normalize(dataset: DatasetLike) -> list[TopicObservation]:
    """Flatten every graph's sources into topic observations.

    Args:
        dataset: A ``Dataset`` or the equivalent raw mapping.

    Returns:
        Observations in graph, then source, then topic order.

    Examples:
        >>> normalize({"graphs": [{"title": "T"}]})
        []
    """
    ds = as_dataset(dataset)
    observations: list[TopicObservation] = []
    for graph in ds.graphs:
        observations.extend(_flatten_graph(graph))

    logger.debug(
        "Normalised %d observations from %d graphs", len(observations), len(ds.graphs)
    )
    return observations


def find_graph(dataset: DatasetLike, title: str) -> Graph | None:
    """Return the first graph whose title equals *title*, or ``None``."""
    for graph in as_dataset(dataset).graphs:
        if graph.title == title:
            return graph
    return None


def normalize_graph(dataset: DatasetLike, title: str) -> list[TopicObservation]:
    """Flatten a single titled graph; an unknown title yields ``[]``."""
    graph = find_graph(dataset, title)
    if graph is None:
        logger.info("Graph %r not present in dataset", title)
        return []
    return _flatten_graph(graph)


def group_by_source(
    observations: Iterable[TopicObservation],
) -> dict[str, list[TopicObservation]]:
    """Group observations by source, keeping first-seen source order."""
    groups: dict[str, list[TopicObservation]] = {}
    for observation in observations:
        groups.setdefault(observation.source, []).append(observation)
    return groups


def platform_topics(dataset: DatasetLike) -> dict[str, list[TopicObservation]]:
    """Return each platform's trending topics as observations.

    The platform name becomes the observation's ``source``. Platforms
    without a ``trending_topics`` list map to an empty list.
    """
    ds = as_dataset(dataset)
    return {
        name: _observe(feed.trending_topics, name)
        for name, feed in ds.platforms.items()
    }
