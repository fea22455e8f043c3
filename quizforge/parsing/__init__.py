"""Parsing of raw AI responses into raw quiz data."""

from .response_parser import (
    clean_response,
    decode_json,
    extract_json_from_text,
    fix_common_issues,
    normalize_ai_question,
    parse_questions_response,
    parse_quiz_response,
)

__all__ = [
    "clean_response",
    "decode_json",
    "extract_json_from_text",
    "fix_common_issues",
    "normalize_ai_question",
    "parse_questions_response",
    "parse_quiz_response",
]
