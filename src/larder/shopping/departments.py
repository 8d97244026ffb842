"""Grocery department classification for shopping items."""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional, Pattern, Tuple, TypeVar

OTHER = "Other"

DEPARTMENT_DISPLAY_ORDER: Tuple[str, ...] = (
    "Produce",
    "Meat & Seafood",
    "Dairy & Eggs",
    "Bakery",
    "Pantry",
    "Frozen",
    "Beverages",
    OTHER,
)

_DEPARTMENT_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (
        "Produce",
        (
            "lettuce", "spinach", "kale", "arugula", "cabbage", "carrot", "onion", "garlic",
            "potato", "tomato", "pepper", "cucumber", "zucchini", "squash", "apple", "banana",
            "orange", "lemon", "lime", "berries", "fruit", "vegetable", "produce", "greens",
            "broccoli", "celery", "mushroom", "avocado", "eggplant", "cilantro", "parsley",
            "basil", "scallion", "ginger",
        ),
    ),
    (
        "Meat & Seafood",
        (
            "beef", "steak", "chicken", "pork", "turkey", "lamb", "fish", "salmon", "tuna",
            "shrimp", "seafood", "meat", "ground meat", "bacon", "sausage", "cod",
        ),
    ),
    (
        "Dairy & Eggs",
        (
            "milk", "cheese", "yogurt", "butter", "cream", "sour cream", "egg", "dairy",
            "margarine", "half and half",
        ),
    ),
    (
        "Bakery",
        ("bread", "bagel", "bun", "roll", "tortilla", "pita", "muffin", "cake", "pastry", "bakery"),
    ),
    (
        "Pantry",
        (
            "flour", "sugar", "oil", "vinegar", "sauce", "condiment", "spice", "herb", "rice",
            "pasta", "bean", "legume", "canned", "jar", "shelf-stable", "pantry", "broth",
            "stock", "soup", "salt", "black pepper", "peanut butter", "coconut milk",
            "baking powder", "baking soda", "seasoning", "cereal", "oats", "honey",
            "tomato paste", "cocoa",
        ),
    ),
    ("Frozen", ("frozen", "ice cream", "popsicle")),
    (
        "Beverages",
        ("water", "juice", "soda", "pop", "coffee", "tea", "drink", "beverage", "wine", "beer", "alcohol"),
    ),
)


def _compile(keywords: Iterable[str]) -> Pattern[str]:
    ordered = sorted(keywords, key=len, reverse=True)
    return re.compile("|".join(re.escape(keyword) for keyword in ordered), re.IGNORECASE)


DEPARTMENT_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = tuple(
    (department, _compile(keywords)) for department, keywords in _DEPARTMENT_KEYWORDS
)

_RANKS: Dict[str, int] = {name: index for index, name in enumerate(DEPARTMENT_DISPLAY_ORDER)}

T = TypeVar("T")


def _candidate_matches(name: str) -> Iterable[Tuple[int, int, int, str]]:
    for order, (department, pattern) in enumerate(DEPARTMENT_PATTERNS):
        # Overlapping scan so "ice cream" and "cream" are both seen at their own offsets.
        position = 0
        while position < len(name):
            match = pattern.search(name, position)
            if match is None:
                break
            yield match.end(), match.end() - match.start(), -order, department
            position = match.start() + 1


def classify_department(name: Any) -> str:
    """Return the grocery department for an ingredient name.

    Every keyword hit is considered. The hit ending furthest to the right wins because
    the head noun of a grocery name comes last ("beef broth" is broth, "tomato sauce" is
    sauce); ties go to the longer keyword ("ice cream" over "cream"), then to the
    department listed first. Names without any hit fall back to ``Other``.
    """
    if not isinstance(name, str) or not name.strip():
        return OTHER
    best = max(_candidate_matches(name.lower()), default=None)
    if best is None:
        return OTHER
    return best[3]


def department_rank(department: Optional[str]) -> int:
    """Return the display position of a department (unknown values rank as ``Other``)."""
    return _RANKS.get(department or OTHER, _RANKS[OTHER])


def group_by_department(items: Iterable[T], key=lambda item: getattr(item, "department", None)) -> Dict[str, List[T]]:
    """Group items by department, with groups ordered by display order."""
    groups: Dict[str, List[T]] = {}
    for item in items:
        groups.setdefault(key(item) or OTHER, []).append(item)
    return dict(sorted(groups.items(), key=lambda entry: department_rank(entry[0])))


__all__ = [
    "DEPARTMENT_DISPLAY_ORDER",
    "DEPARTMENT_PATTERNS",
    "OTHER",
    "classify_department",
    "department_rank",
    "group_by_department",
]
