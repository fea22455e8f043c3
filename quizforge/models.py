"""
Canonical Quiz Data Models.

These models represent the normalized, fully-defaulted quiz shape produced by
the formatters, independent of whatever shape the AI or import source
supplied. `to_dict()` emits the camelCase wire shape used by exporters and
API consumers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


# =============================================================================
# Enumerations
# =============================================================================


class Category(str, Enum):
    """Subject category of a quiz."""
    GENERAL = "general"
    MATHEMATICS = "mathematics"
    SCIENCE = "science"
    LANGUAGE = "language"
    HISTORY = "history"
    TECHNOLOGY = "technology"
    OTHER = "other"


class QuestionType(str, Enum):
    """Supported question types."""
    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"
    FILL_IN_BLANK = "fill_in_blank"
    ESSAY = "essay"
    MATCHING = "matching"


class DifficultyLevel(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"


class QuizStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class ComplexityLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Fixed option set for true/false questions ("true", "false")
TRUE_FALSE_OPTIONS = ("ถูก", "ผิด")

# Provenance tags
GENERATED_BY_AI = "ai"
GENERATED_BY_SYSTEM = "system"

METADATA_VERSION = "1.0"


def _serialize_timestamp(value: datetime | str | None) -> str | None:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


# =============================================================================
# Formatting Context
# =============================================================================


@dataclass
class SourceFile:
    """File a quiz was generated from."""
    name: str | None = None
    size: int | None = None
    type: str | None = None
    extracted_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "size": self.size,
            "type": self.type,
            "extractedAt": self.extracted_at,
        }


@dataclass
class FormatContext:
    """
    Caller-supplied context for a formatting call.

    generated_by is the provenance tag ("ai", "import", "manual", ...).
    """
    user_id: Any = None
    generated_by: str | None = None
    source_file: dict[str, Any] | None = None


# =============================================================================
# Question
# =============================================================================


@dataclass
class QuestionMetadata:
    created_at: datetime | str
    updated_at: datetime | str
    generated_by: str = GENERATED_BY_AI
    validated: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "createdAt": _serialize_timestamp(self.created_at),
            "updatedAt": _serialize_timestamp(self.updated_at),
            "generatedBy": self.generated_by,
            "validated": self.validated,
        }


@dataclass
class Question:
    """A canonical question. Option order is display order."""
    id: str
    question: str
    type: QuestionType
    options: list[str]
    correct_answer: str
    explanation: str
    points: int
    order_index: int
    difficulty: DifficultyLevel
    tags: list[str]
    metadata: QuestionMetadata

    # Type-specific
    blanks: int | None = None
    left_column: list[Any] | None = None
    right_column: list[Any] | None = None
    has_image: bool = False

    def to_dict(self) -> dict[str, Any]:
        result = {
            "id": self.id,
            "question": self.question,
            "type": self.type.value,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
            "explanation": self.explanation,
            "points": self.points,
            "orderIndex": self.order_index,
            "difficulty": self.difficulty.value,
            "tags": list(self.tags),
            "metadata": self.metadata.to_dict(),
        }
        if self.blanks is not None:
            result["blanks"] = self.blanks
        if self.left_column is not None:
            result["leftColumn"] = list(self.left_column)
        if self.right_column is not None:
            result["rightColumn"] = list(self.right_column)
        if self.has_image:
            result["hasImage"] = True
        return result


# =============================================================================
# Quiz
# =============================================================================


@dataclass
class QuizMetadata:
    """Derived provenance and estimates attached to every formatted quiz."""
    generated_by: str
    generated_at: str
    has_questions: bool
    is_complete: bool
    estimated_time: int
    complexity: ComplexityLevel
    version: str = METADATA_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "generatedBy": self.generated_by,
            "generatedAt": self.generated_at,
            "hasQuestions": self.has_questions,
            "isComplete": self.is_complete,
            "estimatedTime": self.estimated_time,
            "complexity": self.complexity.value,
        }


@dataclass
class Quiz:
    """A canonical quiz with its ordered questions."""
    id: Any
    title: str
    topic: str
    description: str
    category: Category
    question_type: QuestionType
    difficulty_level: DifficultyLevel
    question_count: int
    time_limit: int | None
    status: QuizStatus
    is_public: bool
    tags: list[str]
    user_id: Any
    folder_id: Any
    folder_name: str | None
    created_at: datetime | str
    updated_at: datetime | str
    settings: dict[str, Any]
    metadata: QuizMetadata
    questions: list[Question] | None = None
    source_file: SourceFile | None = None

    def to_dict(self) -> dict[str, Any]:
        result = {
            "id": self.id,
            "title": self.title,
            "topic": self.topic,
            "description": self.description,
            "category": self.category.value,
            "questionType": self.question_type.value,
            "difficultyLevel": self.difficulty_level.value,
            "questionCount": self.question_count,
            "timeLimit": self.time_limit,
            "status": self.status.value,
            "isPublic": self.is_public,
            "tags": list(self.tags),
            "userId": self.user_id,
            "folderId": self.folder_id,
            "folderName": self.folder_name,
            "createdAt": _serialize_timestamp(self.created_at),
            "updatedAt": _serialize_timestamp(self.updated_at),
            "settings": dict(self.settings),
            "metadata": self.metadata.to_dict(),
        }
        if self.questions is not None:
            result["questions"] = [q.to_dict() for q in self.questions]
        if self.source_file is not None:
            result["sourceFile"] = self.source_file.to_dict()
        return result


@dataclass
class QuizSummary:
    """Reporting summary of a formatted quiz."""
    basic: dict[str, Any]
    statistics: dict[str, Any]
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "basic": dict(self.basic),
            "statistics": dict(self.statistics),
            "metadata": dict(self.metadata),
        }
