"""
Quiz formatting pipeline.

    raw data -> decode_legacy_quiz -> field normalizers
             -> QuestionFormatter (per question) -> QuizFormatter (+ derived metadata)
"""

from .legacy import decode_legacy_question, decode_legacy_quiz
from .policy import DEFAULT_POLICY, ValidationPolicy
from .question import TYPE_PROCESSORS, QuestionFormatter, register_type_processor
from .quiz import QuizFormatter, format_question, format_quiz
from .summary import (
    calculate_complexity,
    calculate_readability_score,
    estimate_completion_time,
    format_summary,
)

__all__ = [
    "DEFAULT_POLICY",
    "QuestionFormatter",
    "QuizFormatter",
    "TYPE_PROCESSORS",
    "ValidationPolicy",
    "calculate_complexity",
    "calculate_readability_score",
    "decode_legacy_question",
    "decode_legacy_quiz",
    "estimate_completion_time",
    "format_question",
    "format_quiz",
    "format_summary",
    "register_type_processor",
]
