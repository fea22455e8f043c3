"""
Question Formatter.

Transforms a raw question-like object into a canonical Question and applies
type-specific post-processing through a small registry of processors.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable

from loguru import logger

from quizforge.config import get_settings
from quizforge.errors import ValidationError
from quizforge.formatting import normalizers as fmt
from quizforge.formatting.legacy import decode_legacy_question
from quizforge.formatting.policy import ValidationPolicy
from quizforge.models import (
    GENERATED_BY_AI,
    TRUE_FALSE_OPTIONS,
    FormatContext,
    Question,
    QuestionMetadata,
    QuestionType,
)

TypeProcessor = Callable[[Question, dict[str, Any]], Question]

# Processor registry - populated by @register_type_processor
TYPE_PROCESSORS: dict[QuestionType, TypeProcessor] = {}

_TRUE_WORDS = {"true", TRUE_FALSE_OPTIONS[0]}
_FALSE_WORDS = {"false", TRUE_FALSE_OPTIONS[1]}


def register_type_processor(question_type: QuestionType):
    """Decorator to register post-processing for a question type."""
    def decorator(func: TypeProcessor) -> TypeProcessor:
        TYPE_PROCESSORS[question_type] = func
        return func
    return decorator


@register_type_processor(QuestionType.TRUE_FALSE)
def _process_true_false(question: Question, raw: dict[str, Any]) -> Question:
    answer = question.correct_answer
    lowered = answer.lower()
    if lowered in _TRUE_WORDS:
        answer = TRUE_FALSE_OPTIONS[0]
    elif lowered in _FALSE_WORDS:
        answer = TRUE_FALSE_OPTIONS[1]
    elif answer in question.options[:2]:
        # Positional mapping: first supplied option means "true"
        answer = TRUE_FALSE_OPTIONS[question.options.index(answer)]
    return dataclasses.replace(question, options=list(TRUE_FALSE_OPTIONS), correct_answer=answer)


@register_type_processor(QuestionType.FILL_IN_BLANK)
def _process_fill_in_blank(question: Question, raw: dict[str, Any]) -> Question:
    return dataclasses.replace(question, blanks=fmt.extract_blanks(question.question))


@register_type_processor(QuestionType.MATCHING)
def _process_matching(question: Question, raw: dict[str, Any]) -> Question:
    left = raw.get("leftColumn")
    right = raw.get("rightColumn")
    return dataclasses.replace(
        question,
        left_column=list(left) if isinstance(left, list) else [],
        right_column=list(right) if isinstance(right, list) else [],
    )


def coerce_context(context: FormatContext | dict[str, Any] | None) -> FormatContext:
    if context is None:
        return FormatContext()
    if isinstance(context, FormatContext):
        return context
    return FormatContext(
        user_id=context.get("userId", context.get("user_id")),
        generated_by=context.get("generatedBy", context.get("generated_by")),
        source_file=context.get("sourceFile", context.get("source_file")),
    )


class QuestionFormatter:
    """Builds canonical questions under a strictness policy."""

    def __init__(self, policy: ValidationPolicy | None = None):
        self.policy = policy or get_settings().get_policy()

    def format(
        self,
        raw_question: Any,
        index: int = 0,
        context: FormatContext | dict[str, Any] | None = None,
    ) -> Question:
        """
        Format a single raw question.

        Any failure is re-raised as a ValidationError naming the 1-based
        question number.
        """
        try:
            return self._build(decode_legacy_question(raw_question), index, coerce_context(context))
        except Exception as e:
            text = raw_question.get("question") if isinstance(raw_question, dict) else None
            preview = text[:50] if isinstance(text, str) else None
            logger.error(f"formatQuestion failed | index={index} | question={preview!r} | {e}")
            raise ValidationError(
                f"Question {index + 1} formatting failed: {e}",
                field=getattr(e, "field", None),
            ) from e

    def _build(self, raw: dict[str, Any], index: int, context: FormatContext) -> Question:
        options = fmt.format_options(raw.get("options"))
        raw_metadata = raw.get("metadata") if isinstance(raw.get("metadata"), dict) else {}

        question = Question(
            id=raw.get("id") or f"q_{index + 1}",
            question=self._format_question_text(raw.get("question")),
            type=fmt.format_question_type(raw.get("type")),
            options=options,
            correct_answer=self._format_correct_answer(raw.get("correctAnswer")),
            explanation=fmt.format_explanation(raw.get("explanation")),
            points=self._format_points(raw.get("points")),
            order_index=raw.get("orderIndex") or index,
            difficulty=fmt.format_difficulty_level(raw.get("difficulty")),
            tags=fmt.format_tags(raw.get("tags")),
            metadata=QuestionMetadata(
                created_at=fmt.format_timestamp(raw.get("createdAt")),
                updated_at=fmt.format_timestamp(raw.get("updatedAt")),
                generated_by=context.generated_by or raw_metadata.get("generatedBy") or GENERATED_BY_AI,
                validated=bool(raw.get("validated") or raw_metadata.get("validated")),
            ),
            has_image=bool(raw.get("hasImage")),
        )

        if options:
            self._check_answer_in_options(question)

        processor = TYPE_PROCESSORS.get(question.type)
        if processor is not None:
            question = processor(question, raw)
        return question

    def _format_question_text(self, text: Any) -> str:
        if not isinstance(text, str) or not text.strip():
            raise ValidationError("Question text is required", field="question")
        return text.strip()

    def _format_correct_answer(self, answer: Any) -> str:
        if not isinstance(answer, str) or not answer.strip():
            raise ValidationError("Correct answer is required", field="correctAnswer")
        return answer.strip()

    def _check_answer_in_options(self, question: Question) -> None:
        if question.correct_answer in question.options:
            return
        if self.policy.strict_correct_answer:
            raise ValidationError(
                "Correct answer must be one of the provided options",
                field="correctAnswer",
            )
        logger.warning(f"Correct answer {question.correct_answer!r} is not among the options; kept as-is")

    def _format_points(self, points: Any) -> int:
        if points is None or points == "":
            return fmt.DEFAULT_POINTS
        parsed = fmt.parse_int(points)
        if fmt.points_in_range(parsed):
            return parsed
        if self.policy.strict_points:
            raise ValidationError(
                f"Points must be an integer between {fmt.MIN_POINTS} and {fmt.MAX_POINTS}, got {points!r}",
                field="points",
            )
        logger.warning(f"Invalid points {points!r}; falling back to {fmt.DEFAULT_POINTS}")
        return fmt.DEFAULT_POINTS
