"""
Quiz Formatter.

Assembles canonical quiz metadata, the formatted question list and derived
metadata (estimated time, complexity) from raw AI or import data.
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import Any

from loguru import logger

from quizforge.errors import ValidationError
from quizforge.formatting import normalizers as fmt
from quizforge.formatting.legacy import decode_legacy_quiz
from quizforge.formatting.policy import ValidationPolicy
from quizforge.formatting.question import QuestionFormatter, coerce_context
from quizforge.formatting.summary import (
    calculate_complexity,
    estimate_completion_time,
    format_summary,
)
from quizforge.models import (
    GENERATED_BY_SYSTEM,
    FormatContext,
    Question,
    Quiz,
    QuizMetadata,
    QuizStatus,
    QuizSummary,
)


class QuizFormatter:
    """
    Formats raw quizzes and questions into their canonical shape.

    Instances hold only the strictness policy; every call returns new objects.

    Example:
        formatter = QuizFormatter()
        quiz = formatter.format_quiz(raw, FormatContext(user_id=7, generated_by="ai"))
    """

    def __init__(self, policy: ValidationPolicy | None = None):
        self.question_formatter = QuestionFormatter(policy)

    @property
    def policy(self) -> ValidationPolicy:
        return self.question_formatter.policy

    def format_quiz(
        self,
        raw_quiz: Any,
        context: FormatContext | dict[str, Any] | None = None,
    ) -> Quiz:
        """Format a complete quiz. Any failure is re-raised as a ValidationError."""
        title = raw_quiz.get("title") if isinstance(raw_quiz, dict) else None
        try:
            if not raw_quiz:
                raise ValidationError("Raw quiz data is required")

            ctx = coerce_context(context)
            raw = decode_legacy_quiz(raw_quiz)
            raw_questions = raw.get("questions")

            logger.debug(
                f"Formatting quiz | title={title!r} | "
                f"questions={len(raw_questions) if isinstance(raw_questions, list) else 0}"
            )

            questions = None
            if isinstance(raw_questions, list):
                questions = self.format_questions(raw_questions, ctx)

            status = fmt.format_status(raw.get("status"))
            quiz = Quiz(
                id=raw.get("id") or int(time.time() * 1000),
                title=fmt.format_title(raw.get("title")),
                topic=fmt.format_text(raw.get("topic")),
                description=fmt.format_description(raw.get("description")),
                category=fmt.format_category(raw.get("category")),
                question_type=fmt.format_question_type(raw.get("questionType")),
                difficulty_level=fmt.format_difficulty_level(raw.get("difficultyLevel")),
                question_count=len(raw_questions) if isinstance(raw_questions, list) else 0,
                time_limit=fmt.format_time_limit(raw.get("timeLimit")),
                status=status,
                is_public=bool(raw.get("isPublic")),
                tags=fmt.format_tags(raw.get("tags")),
                user_id=raw.get("userId") or ctx.user_id,
                folder_id=raw.get("folderId") or None,
                folder_name=raw.get("folderName") or None,
                created_at=fmt.format_timestamp(raw.get("createdAt")),
                updated_at=fmt.format_timestamp(raw.get("updatedAt")),
                settings=fmt.format_settings(raw.get("settings")),
                metadata=self._generate_metadata(raw, questions, status, ctx),
                questions=questions,
                source_file=fmt.format_source_file(ctx.source_file or raw.get("sourceFile")),
            )

            logger.debug(
                f"Quiz formatting completed | id={quiz.id} | title={quiz.title!r} | "
                f"questionCount={quiz.question_count}"
            )
            return quiz

        except Exception as e:
            logger.error(f"formatQuiz failed | title={title!r} | {e}")
            raise ValidationError(
                f"Quiz formatting failed: {e}",
                field=getattr(e, "field", None),
            ) from e

    def format_questions(
        self,
        raw_questions: Any,
        context: FormatContext | dict[str, Any] | None = None,
    ) -> list[Question]:
        """Format questions in order; the first failure aborts the batch."""
        try:
            if not isinstance(raw_questions, list):
                raise ValidationError("Questions must be an array")
            return [
                self.question_formatter.format(raw_question, index, context)
                for index, raw_question in enumerate(raw_questions)
            ]
        except Exception as e:
            count = len(raw_questions) if isinstance(raw_questions, list) else 0
            logger.error(f"formatQuestions failed | questionCount={count} | {e}")
            raise ValidationError(
                f"Questions formatting failed: {e}",
                field=getattr(e, "field", None),
            ) from e

    def format_question(
        self,
        raw_question: Any,
        index: int = 0,
        context: FormatContext | dict[str, Any] | None = None,
    ) -> Question:
        return self.question_formatter.format(raw_question, index, context)

    def format_summary(self, quiz: Quiz) -> QuizSummary:
        return format_summary(quiz)

    def _generate_metadata(
        self,
        raw: dict[str, Any],
        questions: list[Question] | None,
        status: QuizStatus,
        context: FormatContext,
    ) -> QuizMetadata:
        previous = raw.get("metadata") if isinstance(raw.get("metadata"), dict) else {}
        estimated_time = estimate_completion_time(questions, fmt.parse_int(raw.get("questionCount")) or 0)
        if questions is None and not estimated_time:
            # A formatted quiz without questions only keeps its estimate in metadata
            estimated_time = fmt.parse_int(previous.get("estimatedTime")) or 0
        return QuizMetadata(
            generated_by=context.generated_by or previous.get("generatedBy") or GENERATED_BY_SYSTEM,
            generated_at=previous.get("generatedAt") or datetime.now().isoformat(),
            has_questions=bool(questions),
            is_complete=status == QuizStatus.PUBLISHED,
            estimated_time=estimated_time,
            complexity=calculate_complexity(questions),
        )


# =============================================================================
# Convenience functions
# =============================================================================


def format_quiz(
    raw_quiz: Any,
    context: FormatContext | dict[str, Any] | None = None,
    policy: ValidationPolicy | None = None,
) -> Quiz:
    return QuizFormatter(policy).format_quiz(raw_quiz, context)


def format_question(
    raw_question: Any,
    index: int = 0,
    context: FormatContext | dict[str, Any] | None = None,
    policy: ValidationPolicy | None = None,
) -> Question:
    return QuizFormatter(policy).format_question(raw_question, index, context)
