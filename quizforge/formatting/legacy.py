"""
Legacy shape decoder.

Raw quizzes arrive from AI responses, imports and older database rows that
use snake_case keys (question_type, created_at, ...). This module is the one
place those aliases are resolved; the formatters only read camelCase keys.
"""

from __future__ import annotations

from typing import Any

from quizforge.errors import ValidationError

# camelCase key -> snake_case alias
QUIZ_ALIASES = {
    "questionType": "question_type",
    "difficultyLevel": "difficulty_level",
    "timeLimit": "time_limit",
    "isPublic": "is_public",
    "userId": "user_id",
    "folderId": "folder_id",
    "folderName": "folder_name",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "sourceFile": "source_file",
}

QUESTION_ALIASES = {
    "question": "question_text",
    "type": "question_type",
    "correctAnswer": "correct_answer",
    "orderIndex": "order_index",
    "leftColumn": "left_column",
    "rightColumn": "right_column",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "hasImage": "has_image",
}


def _resolve_aliases(raw: dict[str, Any], aliases: dict[str, str]) -> dict[str, Any]:
    decoded = dict(raw)
    for camel, snake in aliases.items():
        if not decoded.get(camel) and raw.get(snake):
            decoded[camel] = raw[snake]
        decoded.pop(snake, None)
    return decoded


def decode_legacy_quiz(raw: Any) -> dict[str, Any]:
    """Return a copy of a raw quiz with every alias mapped to its camelCase key."""
    if not isinstance(raw, dict):
        raise ValidationError("Quiz data must be an object")
    decoded = _resolve_aliases(raw, QUIZ_ALIASES)
    questions = decoded.get("questions")
    if isinstance(questions, list):
        decoded["questions"] = [
            decode_legacy_question(q) if isinstance(q, dict) else q
            for q in questions
        ]
    return decoded


def decode_legacy_question(raw: Any) -> dict[str, Any]:
    """
    Return a copy of a raw question with aliases mapped to camelCase.

    Timestamps are also lifted out of a nested canonical metadata block so
    already-formatted questions decode to the same values.
    """
    if not isinstance(raw, dict):
        raise ValidationError("Question must be an object")
    decoded = _resolve_aliases(raw, QUESTION_ALIASES)
    metadata = raw.get("metadata")
    if isinstance(metadata, dict):
        for key in ("createdAt", "updatedAt"):
            if not decoded.get(key) and metadata.get(key):
                decoded[key] = metadata[key]
    return decoded
