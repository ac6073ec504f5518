"""
Pydantic models shared across the Trend Radar core.

Two layers live here:

- the raw dataset shape (``Dataset`` → ``Graph`` → ``SourceBlock`` →
  ``TopicEntry``), tolerant of every optional field being absent or null;
- the validated intermediate representation the engine works on
  (``TopicObservation``, ``AggregatedTopic``, …), produced once by the
  normalizer.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ── Raw dataset ────────────────────────────────────────────────────────────


class TopicEntry(BaseModel):
    """A single ``{topic, count, type?}`` entry as found in the dataset."""

    topic: Optional[str] = None
    count: int = 0
    type: Optional[str] = None

    @field_validator("count", mode="before")
    @classmethod
    def count_default(cls, value: Any) -> Any:
        return 0 if value is None else value


class SourceBlock(BaseModel):
    """One news outlet or social platform inside a graph."""

    source: str = ""
    topics: list[TopicEntry] = Field(default_factory=list)

    @field_validator("source", mode="before")
    @classmethod
    def source_default(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("topics", mode="before")
    @classmethod
    def topics_default(cls, value: Any) -> Any:
        return [] if value is None else value


class Graph(BaseModel):
    """A titled dashboard graph; carries ``sources``, ``data`` or both."""

    title: str = ""
    sources: list[SourceBlock] = Field(default_factory=list)
    data: dict[str, dict[str, int]] = Field(default_factory=dict)

    @field_validator("title", mode="before")
    @classmethod
    def title_default(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("sources", mode="before")
    @classmethod
    def sources_default(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("data", mode="before")
    @classmethod
    def data_default(cls, value: Any) -> Any:
        return {} if value is None else value


class PlatformFeed(BaseModel):
    """Per-platform trending topic list used for cross-platform totals."""

    trending_topics: list[TopicEntry] = Field(default_factory=list)

    @field_validator("trending_topics", mode="before")
    @classmethod
    def trending_default(cls, value: Any) -> Any:
        return [] if value is None else value


class Dataset(BaseModel):
    """The complete in-memory dataset snapshot handed to the engine."""

    graphs: list[Graph] = Field(default_factory=list)
    platforms: dict[str, PlatformFeed] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def lift_platform_feeds(cls, value: Any) -> Any:
        # Exported dashboards keep platform feeds as top-level keys next to
        # "graphs"; gather them under "platforms".
        if not isinstance(value, dict):
            return value
        platforms = dict(value.get("platforms") or {})
        for key, feed in value.items():
            if key in ("graphs", "platforms"):
                continue
            if isinstance(feed, dict) and "trending_topics" in feed:
                platforms.setdefault(key, feed)
        return {"graphs": value.get("graphs") or [], "platforms": platforms}


# ── Engine types ───────────────────────────────────────────────────────────


class TopicObservation(BaseModel):
    """One (source, topic) occurrence, tagged with where it was seen."""

    model_config = ConfigDict(frozen=True)

    topic: str = Field(min_length=1)
    count: int = Field(ge=0)
    source: str = ""
    type: Optional[str] = None


class AggregatedTopic(BaseModel):
    """Cross-source total for a single topic.

    ``type`` is the tag of the first observation seen for the topic.
    """

    model_config = ConfigDict(frozen=True)

    topic: str
    total_count: int
    type: Optional[str] = None


class ClassifiedTopic(BaseModel):
    """A topic placed in a classification bucket, with the metric used."""

    model_config = ConfigDict(frozen=True)

    topic: str
    type: Optional[str] = None
    total_count: int


class Classification(BaseModel):
    """High-demand and untapped buckets, each sorted by total count."""

    high_demand: list[ClassifiedTopic] = Field(default_factory=list)
    untapped: list[ClassifiedTopic] = Field(default_factory=list)


class OverlapResult(BaseModel):
    """Share of a source's topics that also appear in a reference set."""

    source: str
    percentage: float = Field(ge=0.0, le=100.0)


class PlatformEngagement(BaseModel):
    """Activity count for one platform in one month."""

    platform: str
    count: int


class TopicCount(BaseModel):
    """A plain topic → count pair (newsroom coverage)."""

    topic: str
    count: int


class DashboardReport(BaseModel):
    """Everything the dashboard renders, computed from one dataset snapshot."""

    top_topics: list[AggregatedTopic]
    classification: Classification
    overlap: list[OverlapResult]
    engagement: list[PlatformEngagement]
    newsroom: list[TopicCount]
