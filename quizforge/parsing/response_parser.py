"""
AI Response Parser.

Turns raw LLM output (often wrapped in markdown code fences or surrounded by
prose) into a raw quiz dict the formatter can consume.

Decoding order:
1. clean_response()         strip fences and text around the JSON
2. json.loads()
3. extract_json_from_text() greedy {...} / [...] match
4. fix_common_issues()      trailing commas
"""

from __future__ import annotations

import json
import re
from collections import Counter
from datetime import datetime
from typing import Any

from loguru import logger

from quizforge.errors import ValidationError
from quizforge.models import TRUE_FALSE_OPTIONS

_CODE_FENCE = re.compile(r"```(?:json)?\n?")
_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")
_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")


def _response_length(response: Any) -> int:
    return len(response) if isinstance(response, str) else 0


def clean_response(response: str) -> str:
    if not response:
        return ""

    cleaned = _CODE_FENCE.sub("", response.strip())

    starts = [i for i in (cleaned.find("{"), cleaned.find("[")) if i != -1]
    if starts and min(starts) > 0:
        cleaned = cleaned[min(starts):]

    last = max(cleaned.rfind("}"), cleaned.rfind("]"))
    if last != -1 and last < len(cleaned) - 1:
        cleaned = cleaned[: last + 1]

    return cleaned.strip()


def extract_json_from_text(text: str) -> str | None:
    for pattern in (_OBJECT_PATTERN, _ARRAY_PATTERN):
        match = pattern.search(text)
        if match:
            return match.group(0)
    return None


def fix_common_issues(text: str) -> str:
    return _TRAILING_COMMA.sub(r"\1", text)


def decode_json(response: str) -> Any:
    """Decode JSON out of an LLM response, trying progressively looser strategies."""
    cleaned = clean_response(response)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as first_error:
        candidates = [extract_json_from_text(cleaned), fix_common_issues(cleaned)]
        for candidate in candidates:
            if not candidate:
                continue
            try:
                return json.loads(candidate)
            except json.JSONDecodeError:
                try:
                    return json.loads(fix_common_issues(candidate))
                except json.JSONDecodeError:
                    continue
        raise ValidationError(f"Invalid JSON format: {first_error}") from first_error


def normalize_ai_question(question: dict[str, Any]) -> dict[str, Any]:
    """
    Normalize one AI-generated question toward the formatter's input shape.

    LLMs often answer multiple choice with an option index and true/false
    with a boolean; both are converted to the answer text.
    """
    normalized = dict(question)

    if isinstance(normalized.get("type"), str):
        normalized["type"] = normalized["type"].strip().lower()
    if isinstance(normalized.get("question"), str):
        normalized["question"] = normalized["question"].strip()
    if isinstance(normalized.get("explanation"), str):
        normalized["explanation"] = normalized["explanation"].strip()

    options = normalized.get("options")
    if isinstance(options, list):
        normalized["options"] = [o.strip() if isinstance(o, str) else o for o in options]
        options = normalized["options"]

    answer = normalized.get("correctAnswer", normalized.get("correct_answer"))
    if isinstance(answer, bool):
        normalized["correctAnswer"] = TRUE_FALSE_OPTIONS[0] if answer else TRUE_FALSE_OPTIONS[1]
    elif isinstance(answer, int) and isinstance(options, list) and 0 <= answer < len(options):
        normalized["correctAnswer"] = options[answer]
    elif isinstance(answer, str):
        normalized["correctAnswer"] = answer.strip()
    normalized.pop("correct_answer", None)

    return normalized


def _validate_question_structure(question: Any) -> list[str]:
    if not isinstance(question, dict):
        return ["Question must be an object"]
    errors = []
    text = question.get("question", question.get("question_text"))
    if not isinstance(text, str) or not text.strip():
        errors.append("Question must have valid question text")
    return errors


def parse_questions_response(response: str) -> list[dict[str, Any]]:
    """Parse a bare question array, or an object with a questions array."""
    try:
        if not isinstance(response, str) or not response.strip():
            raise ValidationError("Invalid response format")

        data = decode_json(response)
        if isinstance(data, list):
            questions = data
        elif isinstance(data, dict) and isinstance(data.get("questions"), list):
            questions = data["questions"]
        else:
            raise ValidationError("Response does not contain valid questions array")

        normalized = []
        for index, question in enumerate(questions):
            errors = _validate_question_structure(question)
            if errors:
                raise ValidationError(f"Question {index + 1} validation failed: {', '.join(errors)}")
            normalized.append(normalize_ai_question(question))

        logger.debug(f"Questions response parsed | questionCount={len(normalized)}")
        return normalized

    except ValidationError as e:
        logger.error(f"Error parsing questions response | length={_response_length(response)} | {e}")
        raise
    except Exception as e:
        logger.error(f"Error parsing questions response | length={_response_length(response)} | {e}")
        raise ValidationError(f"Failed to parse questions response: {e}") from e


def parse_quiz_response(response: str) -> dict[str, Any]:
    """Parse a full quiz object from an AI response into a raw quiz dict."""
    try:
        if not isinstance(response, str) or not response.strip():
            raise ValidationError("Invalid response format")

        data = decode_json(response)
        errors = []
        if not isinstance(data, dict):
            raise ValidationError("Quiz structure validation failed: Quiz data must be an object")
        if not isinstance(data.get("title"), str) or not data["title"].strip():
            errors.append("Quiz must have a valid title")
        questions = data.get("questions")
        if not isinstance(questions, list):
            errors.append("Quiz must have a questions array")
        elif not questions:
            errors.append("Quiz must have at least one question")
        else:
            for index, question in enumerate(questions):
                question_errors = _validate_question_structure(question)
                if question_errors:
                    errors.append(f"Question {index + 1}: {', '.join(question_errors)}")
        if errors:
            raise ValidationError(f"Quiz structure validation failed: {', '.join(errors)}", errors=errors)

        quiz = dict(data)
        quiz["title"] = data["title"].strip()
        quiz["questions"] = [normalize_ai_question(q) for q in questions]
        metadata = dict(data["metadata"]) if isinstance(data.get("metadata"), dict) else {}
        metadata.update({
            "totalQuestions": len(questions),
            "questionTypes": dict(Counter(q.get("type") or "unknown" for q in quiz["questions"])),
            "aiGenerated": True,
            "generatedAt": metadata.get("generatedAt") or datetime.now().isoformat(),
        })
        quiz["metadata"] = metadata

        logger.debug(f"Quiz response parsed | title={quiz['title']!r} | questionCount={len(questions)}")
        return quiz

    except ValidationError as e:
        logger.error(f"Error parsing quiz response | length={_response_length(response)} | {e}")
        raise
    except Exception as e:
        logger.error(f"Error parsing quiz response | length={_response_length(response)} | {e}")
        raise ValidationError(f"Failed to parse quiz response: {e}") from e
