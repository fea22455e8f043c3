"""JSON envelope export."""

from __future__ import annotations

from typing import Any

from quizforge.models import METADATA_VERSION, Quiz

from .base import register_exporter, utc_timestamp


@register_exporter("json")
def render_json(quiz: Quiz) -> dict[str, Any]:
    return {
        "metadata": {
            "title": quiz.title,
            "description": quiz.description,
            "category": quiz.category.value,
            "difficulty": quiz.difficulty_level.value,
            "questionCount": quiz.question_count,
            "timeLimit": quiz.time_limit,
            "exportedAt": utc_timestamp(),
            "version": METADATA_VERSION,
        },
        "questions": [
            {
                "question": q.question,
                "type": q.type.value,
                "options": list(q.options),
                "correctAnswer": q.correct_answer,
                "explanation": q.explanation,
                "points": q.points,
            }
            for q in quiz.questions or []
        ],
    }
