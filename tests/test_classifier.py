"""Tests for core/classifier.py — high-demand / untapped buckets."""

from __future__ import annotations

import pytest

from core.classifier import (
    DEFAULT_POLARITY,
    ThresholdPolarity,
    classify,
    meets_high_demand,
    parse_polarity,
)
from core.models import TopicObservation


def obs(topic: str, type_: str | None) -> TopicObservation:
    return TopicObservation(topic=topic, count=1, source="S", type=type_)


def totals(mapping: dict[str, int]):
    return lambda topic: mapping.get(topic, 0)


# ── Polarity ───────────────────────────────────────────────────────────────────


class TestPolarity:
    def test_default_is_below(self):
        assert DEFAULT_POLARITY is ThresholdPolarity.BELOW

    def test_below_is_strictly_less(self):
        assert meets_high_demand(99, 100, ThresholdPolarity.BELOW)
        assert not meets_high_demand(100, 100, ThresholdPolarity.BELOW)

    def test_above_is_strictly_greater(self):
        assert meets_high_demand(101, 100, ThresholdPolarity.ABOVE)
        assert not meets_high_demand(100, 100, ThresholdPolarity.ABOVE)

    def test_parse_is_case_insensitive(self):
        assert parse_polarity(" Above ") is ThresholdPolarity.ABOVE
        assert parse_polarity(ThresholdPolarity.BELOW) is ThresholdPolarity.BELOW

    def test_parse_unknown_raises(self):
        with pytest.raises(ValueError, match="polarity"):
            parse_polarity("sideways")


# ── High demand ────────────────────────────────────────────────────────────────


class TestHighDemand:
    def test_trending_below_threshold_included_by_default(self):
        result = classify([obs("Elections", "trending")], totals({"Elections": 40}),
                          high_demand_threshold=100)
        assert [t.topic for t in result.high_demand] == ["Elections"]
        assert result.high_demand[0].total_count == 40

    def test_trending_below_threshold_excluded_when_above(self):
        result = classify([obs("Elections", "trending")], totals({"Elections": 40}),
                          high_demand_threshold=100, polarity="above")
        assert result.high_demand == []

    def test_trending_over_threshold_included_when_above(self):
        result = classify([obs("Elections", "trending")], totals({"Elections": 140}),
                          high_demand_threshold=100, polarity=ThresholdPolarity.ABOVE)
        assert [t.topic for t in result.high_demand] == ["Elections"]

    def test_rising_never_high_demand(self):
        result = classify([obs("AI", "rising")], totals({"AI": 10}), high_demand_threshold=100)
        assert result.high_demand == []

    def test_sorted_by_total_descending(self):
        topics = [obs("A", "trending"), obs("B", "trending"), obs("C", "trending")]
        result = classify(topics, totals({"A": 10, "B": 90, "C": 50}))
        assert [t.topic for t in result.high_demand] == ["B", "C", "A"]

    def test_ties_keep_input_order(self):
        topics = [obs("A", "trending"), obs("B", "trending")]
        result = classify(topics, totals({"A": 10, "B": 10}))
        assert [t.topic for t in result.high_demand] == ["A", "B"]


# ── Untapped ───────────────────────────────────────────────────────────────────


class TestUntapped:
    def test_rising_at_threshold_included(self):
        result = classify([obs("AI", "rising")], totals({"AI": 50}), untapped_threshold=50)
        assert [t.topic for t in result.untapped] == ["AI"]

    def test_rising_over_threshold_excluded(self):
        result = classify([obs("AI", "rising")], totals({"AI": 51}), untapped_threshold=50)
        assert result.untapped == []

    def test_trending_never_untapped(self):
        result = classify([obs("AI", "trending")], totals({"AI": 0}), untapped_threshold=50)
        assert result.untapped == []

    def test_sorted_by_total_descending(self):
        topics = [obs("A", "rising"), obs("B", "rising")]
        result = classify(topics, totals({"A": 5, "B": 30}))
        assert [t.topic for t in result.untapped] == ["B", "A"]


# ── General ────────────────────────────────────────────────────────────────────


class TestClassify:
    def test_empty_input(self):
        result = classify([], totals({}))
        assert result.high_demand == []
        assert result.untapped == []

    def test_missing_total_treated_as_zero(self):
        result = classify([obs("AI", "rising")], lambda topic: None)
        assert result.untapped[0].total_count == 0

    def test_untagged_and_other_types_excluded(self):
        result = classify([obs("X", None), obs("Y", "viral")], totals({}))
        assert result.high_demand == [] and result.untapped == []

    def test_bucket_types_always_match(self):
        topics = [obs(f"T{i}", t) for i, t in enumerate(["trending", "rising", None, "x"] * 3)]
        result = classify(topics, totals({}), high_demand_threshold=1, untapped_threshold=1)
        assert all(t.type == "trending" for t in result.high_demand)
        assert all(t.type == "rising" for t in result.untapped)

    def test_type_match_is_exact(self):
        result = classify([obs("AI", "Trending")], totals({}))
        assert result.high_demand == []
