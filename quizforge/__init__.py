"""
quizforge - quiz formatting, validation and export.

Turns loosely structured quiz data (legacy camelCase records, AI responses)
into canonical quizzes, validates them, and renders JSON, CSV, Moodle GIFT
and plain text exports.
"""

from quizforge.errors import QuizForgeError, UnsupportedExportError, ValidationError
from quizforge.export import export_to_string, format_for_export, supported_export_types
from quizforge.formatting import (
    QuizFormatter,
    ValidationPolicy,
    format_question,
    format_quiz,
    format_summary,
)
from quizforge.models import (
    Category,
    DifficultyLevel,
    FormatContext,
    Question,
    QuestionType,
    Quiz,
    QuizStatus,
    QuizSummary,
)
from quizforge.parsing import parse_questions_response, parse_quiz_response
from quizforge.validation import QuizValidator, ValidatorConfig

__version__ = "1.0.0"

__all__ = [
    "Category",
    "DifficultyLevel",
    "FormatContext",
    "Question",
    "QuestionType",
    "Quiz",
    "QuizFormatter",
    "QuizForgeError",
    "QuizStatus",
    "QuizSummary",
    "QuizValidator",
    "UnsupportedExportError",
    "ValidationError",
    "ValidationPolicy",
    "ValidatorConfig",
    "export_to_string",
    "format_for_export",
    "format_question",
    "format_quiz",
    "format_summary",
    "parse_questions_response",
    "parse_quiz_response",
    "supported_export_types",
]
