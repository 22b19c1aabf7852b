"""Heuristics that derive project framing from the user's goal."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass
class ProjectIntakeResult:
    title: str
    category: str


MAX_TITLE_LENGTH = 80
DEFAULT_TITLE = "Project"
CATEGORY_KEYWORDS: List[Tuple[str, Tuple[str, ...]]] = [
    (
        "event",
        (
            "party",
            "wedding",
            "birthday",
            "event",
            "conference",
            "celebration",
            "reunion",
            "meetup",
        ),
    ),
    (
        "travel",
        (
            "trip",
            "travel",
            "vacation",
            "holiday",
            "flight",
            "visit",
            "tour",
        ),
    ),
    (
        "home",
        (
            "move",
            "moving",
            "renovate",
            "remodel",
            "garden",
            "kitchen",
            "house",
            "apartment",
        ),
    ),
    (
        "finance",
        (
            "budget",
            "save",
            "taxes",
            "debt",
            "money",
            "invest",
        ),
    ),
    (
        "learning",
        (
            "learn",
            "study",
            "course",
            "exam",
            "certificate",
            "practice",
        ),
    ),
    (
        "work",
        (
            "launch",
            "ship",
            "release",
            "client",
            "deliver",
            "presentation",
            "website",
            "app",
        ),
    ),
]


def derive_project_fields(goal: str, title: Optional[str] = None) -> ProjectIntakeResult:
    """Prefer the model's title when it gave one; otherwise derive it from the goal."""
    chosen = (title or "").strip() or _normalize_title(goal)
    return ProjectIntakeResult(title=_shorten(chosen), category=classify_category(goal))


def _normalize_title(text: str) -> str:
    trimmed = text.strip()
    if not trimmed:
        return DEFAULT_TITLE
    candidate = _first_sentence(trimmed).strip()
    return candidate or trimmed


def _shorten(candidate: str) -> str:
    if len(candidate) <= MAX_TITLE_LENGTH:
        return candidate
    shortened = candidate[:MAX_TITLE_LENGTH].rstrip(",;:- ")
    return f"{shortened}..."


def _first_sentence(text: str) -> str:
    parts = re.split(r"[.!?\n]+", text, maxsplit=1)
    return parts[0] if parts else text


def classify_category(text: str) -> str:
    lowered = text.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(re.search(rf"\b{re.escape(keyword)}\b", lowered) for keyword in keywords):
            return category
    return "other"
