"""
Moodle GIFT export.

Layout per question:

    ::Question N::
    <question text> {
    =correct option
    ~incorrect option
    # explanation
    }

Answer encoding by type: multiple_choice uses =/~ sigils, true_false a bare
TRUE/FALSE, fill_in_blank a single =answer (GIFT short answer), essay an empty
body and matching =left -> right pairs. A matching question without usable
columns cannot be encoded and raises UnsupportedExportError.
"""

from __future__ import annotations

from typing import Callable

from quizforge.errors import UnsupportedExportError
from quizforge.models import TRUE_FALSE_OPTIONS, Question, QuestionType, Quiz

from .base import register_exporter, utc_timestamp

GIFT_SPECIAL_CHARS = ("~", "=", "#", "{", "}", ":")

_TRUE_ANSWERS = {TRUE_FALSE_OPTIONS[0], "true"}


def escape_gift(text: str) -> str:
    """Backslash-escape GIFT control characters."""
    escaped = text.replace("\\", "\\\\")
    for char in GIFT_SPECIAL_CHARS:
        escaped = escaped.replace(char, "\\" + char)
    return escaped


def _multiple_choice(q: Question, number: int) -> list[str]:
    return [
        f"{'=' if option == q.correct_answer else '~'}{escape_gift(option)}"
        for option in q.options
    ]


def _true_false(q: Question, number: int) -> list[str]:
    return ["TRUE" if q.correct_answer.lower() in _TRUE_ANSWERS else "FALSE"]


def _fill_in_blank(q: Question, number: int) -> list[str]:
    return [f"={escape_gift(q.correct_answer)}"]


def _essay(q: Question, number: int) -> list[str]:
    return []


def _matching(q: Question, number: int) -> list[str]:
    left = q.left_column or []
    right = q.right_column or []
    if not left or len(left) != len(right):
        raise UnsupportedExportError(
            f"Question {number} ({q.type.value}) cannot be exported to GIFT: "
            f"matching columns are missing or uneven",
            field="leftColumn",
        )
    return [f"={escape_gift(str(a))} -> {escape_gift(str(b))}" for a, b in zip(left, right)]


GIFT_ANSWER_RENDERERS: dict[QuestionType, Callable[[Question, int], list[str]]] = {
    QuestionType.MULTIPLE_CHOICE: _multiple_choice,
    QuestionType.TRUE_FALSE: _true_false,
    QuestionType.FILL_IN_BLANK: _fill_in_blank,
    QuestionType.ESSAY: _essay,
    QuestionType.MATCHING: _matching,
}


@register_exporter("moodle", "gift")
def render_gift(quiz: Quiz) -> str:
    lines = [
        f"// Quiz: {quiz.title}",
        f"// Category: {quiz.category.value}",
        f"// Generated: {utc_timestamp()}",
        "",
    ]

    for number, q in enumerate(quiz.questions or [], start=1):
        answer_renderer = GIFT_ANSWER_RENDERERS.get(q.type)
        if answer_renderer is None:
            raise UnsupportedExportError(
                f"Question {number} ({q.type.value}) cannot be exported to GIFT",
                field="type",
            )

        lines.append(f"::Question {number}::")
        lines.append(f"{escape_gift(q.question)} {{")
        lines.extend(answer_renderer(q, number))
        if q.explanation:
            lines.append(f"# {escape_gift(q.explanation)}")
        lines.append("}")
        lines.append("")

    return "\n".join(lines) + "\n"
