"""
Field Normalizers.

Per-field coercion rules applied while building canonical quizzes and
questions. Every function here is total (never raises): invalid or missing
values fall back to a safe default.
"""

from __future__ import annotations

import json
import math
import re
from datetime import datetime
from enum import Enum
from typing import Any, TypeVar

from quizforge.models import (
    Category,
    DifficultyLevel,
    QuestionType,
    QuizStatus,
    SourceFile,
)

E = TypeVar("E", bound=Enum)

UNTITLED_QUIZ = "ข้อสอบไม่มีชื่อ"  # "untitled quiz"

MAX_TITLE_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 1000
MAX_EXPLANATION_LENGTH = 500
MAX_OPTIONS = 6
MAX_TAGS = 10

MIN_POINTS = 1
MAX_POINTS = 10
DEFAULT_POINTS = 1

# Blanks are marked with three or more underscores or a literal {blank}
BLANK_PATTERN = re.compile(r"_{3,}|\{blank\}")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


# =============================================================================
# Text fields
# =============================================================================


def format_title(title: Any) -> str:
    if not isinstance(title, str) or not title.strip():
        return UNTITLED_QUIZ
    return title.strip()[:MAX_TITLE_LENGTH]


def format_text(text: Any) -> str:
    if not isinstance(text, str):
        return ""
    return text.strip()


def format_description(description: Any) -> str:
    return format_text(description)[:MAX_DESCRIPTION_LENGTH]


def format_explanation(explanation: Any) -> str:
    return format_text(explanation)[:MAX_EXPLANATION_LENGTH]


# =============================================================================
# Enumerated fields
# =============================================================================


def _format_enum(value: Any, enum_cls: type[E], default: E) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return default


def format_category(category: Any) -> Category:
    return _format_enum(category, Category, Category.GENERAL)


def format_question_type(question_type: Any) -> QuestionType:
    return _format_enum(question_type, QuestionType, QuestionType.MULTIPLE_CHOICE)


def format_difficulty_level(difficulty: Any) -> DifficultyLevel:
    return _format_enum(difficulty, DifficultyLevel, DifficultyLevel.MEDIUM)


def format_status(status: Any) -> QuizStatus:
    return _format_enum(status, QuizStatus, QuizStatus.DRAFT)


# =============================================================================
# Lists and objects
# =============================================================================


def _clean_strings(values: list[Any], limit: int) -> list[str]:
    cleaned = [v.strip() for v in values if isinstance(v, str)]
    return [v for v in cleaned if v][:limit]


def format_options(options: Any) -> list[str]:
    """Keep non-empty string options, trimmed, at most six."""
    if not isinstance(options, list):
        return []
    return _clean_strings(options, MAX_OPTIONS)


def format_tags(tags: Any) -> list[str]:
    """
    Normalize tags from a list, a JSON-encoded list, or a comma-separated string.

    The result never holds more than ten entries.
    """
    if isinstance(tags, list):
        return _clean_strings(tags, MAX_TAGS)
    if isinstance(tags, str):
        try:
            decoded = json.loads(tags)
        except (json.JSONDecodeError, ValueError):
            decoded = None
        if isinstance(decoded, list):
            return _clean_strings(decoded, MAX_TAGS)
        return _clean_strings(tags.split(","), MAX_TAGS)
    return []


def format_settings(settings: Any) -> dict[str, Any]:
    """Accept a dict or a JSON object string; anything else becomes {}."""
    if isinstance(settings, str):
        try:
            decoded = json.loads(settings)
        except (json.JSONDecodeError, ValueError):
            return {}
        return decoded if isinstance(decoded, dict) else {}
    if isinstance(settings, dict):
        return dict(settings)
    return {}


def format_source_file(source_file: Any) -> SourceFile | None:
    if not source_file:
        return None
    if isinstance(source_file, SourceFile):
        return source_file
    if not isinstance(source_file, dict):
        return SourceFile(name=str(source_file), extracted_at=datetime.now().isoformat())
    return SourceFile(
        name=source_file.get("name") or source_file.get("originalname"),
        size=source_file.get("size"),
        type=source_file.get("type") or source_file.get("mimetype"),
        extracted_at=source_file.get("extractedAt") or datetime.now().isoformat(),
    )


# =============================================================================
# Numbers
# =============================================================================


def parse_int(value: Any) -> int | None:
    """
    Parse a leading integer the way JavaScript's parseInt does.

    "7 points" -> 7, 3.9 -> 3, "abc" -> None. Booleans are not numbers here.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None


def points_in_range(points: int | None) -> bool:
    return points is not None and MIN_POINTS <= points <= MAX_POINTS


def format_points(points: Any) -> int:
    """Points in 1-10; anything else falls back to 1."""
    parsed = parse_int(points)
    return parsed if points_in_range(parsed) else DEFAULT_POINTS


def format_time_limit(time_limit: Any) -> int | None:
    parsed = parse_int(time_limit)
    if parsed is None or parsed <= 0:
        return None
    return parsed


def extract_blanks(question_text: str) -> int:
    return len(BLANK_PATTERN.findall(question_text))


# =============================================================================
# Timestamps
# =============================================================================


def format_timestamp(value: Any) -> datetime | str:
    """
    Parse an ISO-8601 timestamp; missing values become now().

    Strings that are not ISO-8601 are kept verbatim.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return value
    return datetime.now()
