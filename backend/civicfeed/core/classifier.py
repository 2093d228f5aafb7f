"""
Keyword-rule article classification.

Category and priority are decided by ordered tables of case-insensitive
patterns. The first matching rule wins, so the table order is part of the
behavior: a text mentioning both an emergency and a school is an Emergency
story because the emergency rule is evaluated before the education rule.
"""
from __future__ import annotations

import math
import re
from typing import List, Pattern, Tuple

from civicfeed.config import WORDS_PER_MINUTE
from civicfeed.models import Article, Category, Priority


def _rule(pattern: str) -> Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


CATEGORY_RULES: List[Tuple[Pattern[str], Category]] = [
    (_rule(r"emergency|fire|disaster|rescue|accident|bomb|terror|alert|evacuat|gas leak"), Category.EMERGENCY),
    (_rule(r"traffic|transport|metro|road|highway|vehicle|railway|bus|train"), Category.TRANSPORTATION),
    (_rule(r"weather|rain|flood|storm|cyclone|temperature|monsoon"), Category.WEATHER),
    (_rule(r"infrastructure|construction|development|building|bridge|project|smart city"), Category.INFRASTRUCTURE),
    (_rule(r"health|hospital|medical|doctor|patient|covid|AIIMS|clinic"), Category.HEALTH),
    (_rule(r"environment|pollution|air|water|waste|climate|clean|green"), Category.ENVIRONMENT),
    (_rule(r"police|security|crime|safety|law|investigation"), Category.PUBLIC_SAFETY),
    (_rule(r"education|school|university|student|exam|CBSE|college"), Category.EDUCATION),
    (
        _rule(r"election|vote|politics|government|minister|municipal|civic|public service|administration"),
        Category.CIVIC_SERVICES,
    ),
    (_rule(r"water|electricity|gas|power|utility|sewage|drainage"), Category.UTILITIES),
]

PRIORITY_RULES: List[Tuple[Pattern[str], Priority]] = [
    (_rule(r"urgent|emergency|breaking|alert|critical|disaster|evacuat|gas leak"), Priority.URGENT),
    (_rule(r"important|significant|major|serious|warning"), Priority.HIGH),
    (_rule(r"update|report|announce|plan|develop"), Priority.MEDIUM),
]

DEFAULT_CATEGORY = Category.CIVIC_SERVICES
DEFAULT_PRIORITY = Priority.MEDIUM

# Categories that count as civic news when biasing the top-news carousel
CIVIC_CATEGORIES = frozenset(
    {
        Category.INFRASTRUCTURE,
        Category.HEALTH,
        Category.EMERGENCY,
        Category.CIVIC_SERVICES,
        Category.ENVIRONMENT,
        Category.TRANSPORTATION,
        Category.PUBLIC_SAFETY,
        Category.EDUCATION,
        Category.UTILITIES,
    }
)
CIVIC_PRIORITIES = frozenset({Priority.URGENT, Priority.HIGH})
CIVIC_HEADLINE_PATTERN = _rule(
    r"infrastructure|hospital|school|road|public|government|municipal|civic|health|education|transport|AIIMS|railway"
)


def classify(text: str) -> Category:
    """Return the category of the first rule matching ``text``."""
    for pattern, category in CATEGORY_RULES:
        if pattern.search(text or ""):
            return category
    return DEFAULT_CATEGORY


def prioritize(text: str) -> Priority:
    """Return the priority of the first rule matching ``text``."""
    for pattern, priority in PRIORITY_RULES:
        if pattern.search(text or ""):
            return priority
    return DEFAULT_PRIORITY


def estimate_read_time(text: str | None) -> int:
    """
    Estimate reading time in whole minutes.

    Args:
        text: Article body or summary

    Returns:
        Word count over reading speed, rounded up, never below one minute
    """
    words = len((text or "").split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def is_civic_relevant(article: Article) -> bool:
    return (
        article.category in CIVIC_CATEGORIES
        or article.priority in CIVIC_PRIORITIES
        or bool(CIVIC_HEADLINE_PATTERN.search(article.headline))
    )

