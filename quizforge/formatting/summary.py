"""
Derived quiz metrics and reporting summary.

estimate_completion_time, calculate_complexity and calculate_readability_score
are pure functions over a list of canonical questions.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from typing import Sequence

from quizforge.models import ComplexityLevel, Question, Quiz, QuizSummary

SECONDS_PER_QUESTION = 60

_WORD_SPLIT = re.compile(r"\s+")
_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def estimate_completion_time(questions: Sequence[Question] | None, question_count: int = 0) -> int:
    """Minutes to finish the quiz at a flat one minute per question."""
    count = len(questions) if questions else question_count or 0
    return _round_half_up(count * SECONDS_PER_QUESTION / 60)


def calculate_complexity(questions: Sequence[Question] | None) -> ComplexityLevel:
    if not questions:
        return ComplexityLevel.LOW

    score = 0
    for q in questions:
        if len(q.question) > 200:
            score += 2
        elif len(q.question) > 100:
            score += 1
        if q.options and len(q.options) > 4:
            score += 1
        if q.explanation:
            score += 1

    average = score / len(questions)
    if average >= 3:
        return ComplexityLevel.HIGH
    if average >= 1.5:
        return ComplexityLevel.MEDIUM
    return ComplexityLevel.LOW


def calculate_readability_score(questions: Sequence[Question] | None) -> int:
    """
    Flesch-style score averaged over question texts, clamped to 0-100.

    The syllable term is words / words (always 1), so only words per sentence
    moves the score. Kept as-is so scores match previously stored quizzes.
    """
    if not questions:
        return 0

    total = 0.0
    for q in questions:
        words = len(_WORD_SPLIT.split(q.question))
        sentences = len(_SENTENCE_SPLIT.split(q.question))
        score = 206.835 - (1.015 * (words / sentences)) - (84.6 * (words / words))
        total += max(0.0, min(100.0, score))

    return _round_half_up(total / len(questions))


def format_summary(quiz: Quiz) -> QuizSummary:
    """Build the reporting summary for a formatted quiz."""
    questions = quiz.questions or []
    serialized = quiz.to_dict()

    type_counts = Counter(q.type.value for q in questions)
    difficulty_counts = Counter(q.difficulty.value for q in questions if q.difficulty)
    average_length = (
        _round_half_up(sum(len(q.question) for q in questions) / len(questions)) if questions else 0
    )

    return QuizSummary(
        basic={
            "id": quiz.id,
            "title": quiz.title,
            "category": quiz.category.value,
            "questionCount": quiz.question_count,
            "status": quiz.status.value,
            "createdAt": serialized["createdAt"],
            "updatedAt": serialized["updatedAt"],
        },
        statistics={
            "questionTypes": dict(type_counts),
            "difficulties": dict(difficulty_counts),
            "totalPoints": sum(q.points or 1 for q in questions),
            "averageQuestionLength": average_length,
            "hasExplanations": sum(1 for q in questions if q.explanation),
            "hasImages": sum(1 for q in questions if q.has_image),
        },
        metadata={
            "estimatedTime": estimate_completion_time(questions, quiz.question_count),
            "complexity": calculate_complexity(questions).value,
            "readabilityScore": calculate_readability_score(questions),
        },
    )
