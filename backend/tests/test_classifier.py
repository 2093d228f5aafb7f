"""Tests for keyword-rule article classification."""

from datetime import datetime, timezone

import pytest

from civicfeed.core.classifier import (
    classify,
    estimate_read_time,
    is_civic_relevant,
    prioritize,
)
from civicfeed.models import Article, Category, Priority


def _article(headline: str, category: Category, priority: Priority) -> Article:
    return Article(
        id="a1",
        headline=headline,
        summary="summary",
        source="Test",
        category=category,
        priority=priority,
        published_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def test_gas_leak_is_urgent_emergency():
    text = "Gas leak forces evacuation near hospital"
    assert classify(text) == Category.EMERGENCY
    assert prioritize(text) == Priority.URGENT


def test_rule_order_emergency_beats_education():
    assert classify("emergency school closure") == Category.EMERGENCY


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Metro services resume on the Yellow line", Category.TRANSPORTATION),
        ("Monsoon arrives early this year", Category.WEATHER),
        ("New bridge construction approved", Category.INFRASTRUCTURE),
        ("AIIMS adds 300 beds", Category.HEALTH),
        ("Police arrest suspects after investigation", Category.PUBLIC_SAFETY),
        ("CBSE results declared", Category.EDUCATION),
        ("Minister inaugurates municipal office", Category.CIVIC_SERVICES),
        ("Electricity tariff revised", Category.UTILITIES),
    ],
)
def test_classify_first_matching_rule(text, expected):
    assert classify(text) == expected


def test_classify_is_case_insensitive():
    assert classify("FLOOD WARNING ISSUED") == classify("flood warning issued") == Category.WEATHER


def test_classify_defaults_to_civic_services():
    assert classify("Quarterly poetry reading") == Category.CIVIC_SERVICES
    assert classify("") == Category.CIVIC_SERVICES


def test_prioritize_levels_and_default():
    assert prioritize("Breaking: markets halt") == Priority.URGENT
    assert prioritize("Major overhaul of bus fleet") == Priority.HIGH
    assert prioritize("Council to announce budget") == Priority.MEDIUM
    assert prioritize("A quiet afternoon in the park") == Priority.MEDIUM


def test_classification_is_pure():
    text = "Serious flooding disrupts train services"
    assert [classify(text) for _ in range(3)] == [classify(text)] * 3
    assert [prioritize(text) for _ in range(3)] == [prioritize(text)] * 3


def test_estimate_read_time():
    assert estimate_read_time("") == 1
    assert estimate_read_time(None) == 1
    assert estimate_read_time("word " * 200) == 1
    assert estimate_read_time("word " * 201) == 2
    assert estimate_read_time("word " * 450) == 3


def test_is_civic_relevant_by_category_priority_or_headline():
    assert is_civic_relevant(_article("Anything", Category.HEALTH, Priority.LOW))
    assert is_civic_relevant(_article("Anything", Category.TECHNOLOGY, Priority.HIGH))
    assert is_civic_relevant(_article("New railway timetable", Category.TECHNOLOGY, Priority.LOW))
    assert not is_civic_relevant(_article("Gadget launch", Category.TECHNOLOGY, Priority.LOW))

