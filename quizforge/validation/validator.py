"""
Quiz Validator.

Collects every problem in a raw quiz instead of stopping at the first one
(the formatter is fail-fast), and scores formatted quizzes for quality and
publication readiness.

Quality signals:
- Type variety: distinct question types / supported types
- Difficulty imbalance: distance from an even spread over the used levels
- Length inconsistency: coefficient of variation of question lengths, capped at 1
- Answer bias: distance from an even spread of correct-option positions

Quality levels:
- excellent (90-100), good (75-89), fair (60-74), poor (<60)
"""

from __future__ import annotations

import json
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from quizforge.errors import ValidationError
from quizforge.formatting.legacy import decode_legacy_quiz
from quizforge.formatting.normalizers import parse_int
from quizforge.models import (
    Category,
    DifficultyLevel,
    QuestionType,
    Quiz,
    QuizStatus,
)

_CATEGORIES = {c.value for c in Category}
_QUESTION_TYPES = {t.value for t in QuestionType}
_DIFFICULTIES = {d.value for d in DifficultyLevel}
_STATUSES = {s.value for s in QuizStatus}


def _is_one_of(value: Any, allowed: set[str]) -> bool:
    return isinstance(value, str) and value in allowed


@dataclass
class ValidatorConfig:
    """Limits applied by QuizValidator."""
    max_title_length: int = 255
    min_title_length: int = 3
    max_description_length: int = 1000
    max_question_length: int = 1000
    max_option_length: int = 200
    max_explanation_length: int = 500
    max_questions_per_quiz: int = 100
    min_questions_per_quiz: int = 1
    max_options_per_question: int = 6
    min_options_per_question: int = 2
    max_tags_per_quiz: int = 10
    max_tag_length: int = 50
    max_points_per_question: int = 10
    min_points_per_question: int = 1
    max_time_limit: int = 480  # 8 hours
    min_time_limit: int = 1


@dataclass
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass
class PublicationReport:
    is_ready_for_publication: bool
    errors: list[str]
    requirements: dict[str, Any]


@dataclass
class QualityReport:
    """Quality analysis of a formatted quiz."""
    quality_score: float
    quality_level: str  # excellent, good, fair, poor
    issues: list[str]
    suggestions: list[str]
    analytics: dict[str, Any]

    @property
    def is_valid(self) -> bool:
        return not self.issues


class QuizValidator:
    """
    Validator for raw quiz data and formatted quiz quality.

    Example:
        validator = QuizValidator()
        validator.validate_quiz_data(raw)          # raises ValidationError(errors=[...])
        report = validator.validate_quiz_quality(formatted_quiz)
    """

    def __init__(self, config: ValidatorConfig | None = None):
        self.config = config or ValidatorConfig()

    # =========================================================================
    # Raw data validation
    # =========================================================================

    def validate_quiz_data(self, quiz_data: dict[str, Any] | Quiz) -> ValidationResult:
        """Validate a raw (or formatted) quiz; raises ValidationError listing every problem."""
        data = decode_legacy_quiz(quiz_data.to_dict() if isinstance(quiz_data, Quiz) else quiz_data)

        errors: list[str] = []
        errors += self.validate_basic_quiz_info(data)
        if isinstance(data.get("questions"), list):
            errors += self.validate_questions(data["questions"])
        errors += self.validate_advanced_properties(data)
        errors += self.validate_business_rules(data)

        if errors:
            logger.error(f"Quiz validation failed | title={data.get('title')!r} | errors={len(errors)}")
            raise ValidationError("Quiz validation failed", errors=errors)

        questions = data.get("questions")
        logger.debug(
            f"Quiz validation passed | title={data.get('title')!r} | "
            f"questions={len(questions) if isinstance(questions, list) else 0}"
        )
        return ValidationResult(is_valid=True)

    def validate_update_data(self, update_data: dict[str, Any]) -> ValidationResult:
        """Validate only the fields present in a partial update."""
        data = decode_legacy_quiz(update_data)
        errors: list[str] = []

        if "title" in data:
            errors += self._title_errors(data["title"])
        if "description" in data:
            errors += self._description_errors(data["description"])
        if "questions" in data:
            errors += self.validate_questions(data["questions"])
        if "timeLimit" in data:
            errors += self._time_limit_errors(data["timeLimit"])
        if "tags" in data:
            errors += self._tag_errors(data["tags"])

        if errors:
            raise ValidationError("Update validation failed", errors=errors)
        return ValidationResult(is_valid=True)

    def validate_basic_quiz_info(self, data: dict[str, Any]) -> list[str]:
        cfg = self.config
        errors = self._title_errors(data.get("title"))

        topic = data.get("topic")
        if isinstance(topic, str) and len(topic) > cfg.max_title_length:
            errors.append(f"Topic must not exceed {cfg.max_title_length} characters")

        errors += self._description_errors(data.get("description"))

        if data.get("category") and not _is_one_of(data["category"], _CATEGORIES):
            errors.append(f"Invalid category: {data['category']}")
        if data.get("questionType") and not _is_one_of(data["questionType"], _QUESTION_TYPES):
            errors.append(f"Invalid question type: {data['questionType']}")
        if data.get("difficultyLevel") and not _is_one_of(data["difficultyLevel"], _DIFFICULTIES):
            errors.append(f"Invalid difficulty level: {data['difficultyLevel']}")
        if data.get("status") and not _is_one_of(data["status"], _STATUSES):
            errors.append(f"Invalid status: {data['status']}")

        if data.get("timeLimit") is not None:
            errors += self._time_limit_errors(data["timeLimit"])

        if not data.get("userId"):
            errors.append("User ID is required")

        return errors

    def validate_questions(self, questions: Any) -> list[str]:
        cfg = self.config
        if not isinstance(questions, list):
            return ["Questions must be an array"]

        errors = []
        if len(questions) < cfg.min_questions_per_quiz:
            errors.append(f"Quiz must have at least {cfg.min_questions_per_quiz} question(s)")
        if len(questions) > cfg.max_questions_per_quiz:
            errors.append(f"Quiz must not have more than {cfg.max_questions_per_quiz} questions")

        for index, question in enumerate(questions):
            errors += self.validate_single_question(question, index)

        errors += self.check_duplicate_questions(questions)
        return errors

    def validate_single_question(self, question: Any, index: int) -> list[str]:
        cfg = self.config
        number = index + 1
        if not isinstance(question, dict):
            return [f"Question {number}: must be an object"]

        errors = []
        text = question.get("question")
        if not isinstance(text, str):
            errors.append(f"Question {number}: question text is invalid")
        elif not text.strip():
            errors.append(f"Question {number}: question text must not be empty")
        elif len(text.strip()) > cfg.max_question_length:
            errors.append(f"Question {number}: question text is too long (max {cfg.max_question_length} characters)")

        if question.get("type") and not _is_one_of(question["type"], _QUESTION_TYPES):
            errors.append(f"Question {number}: invalid question type")

        options = question.get("options")
        if options is not None and options != []:
            errors += self.validate_question_options(options, number)

        answer = question.get("correctAnswer")
        if not isinstance(answer, str) or not answer:
            errors.append(f"Question {number}: correct answer is required")
        elif isinstance(options, list) and options:
            trimmed = answer.strip()
            if not any(isinstance(o, str) and o.strip() == trimmed for o in options):
                errors.append(f"Question {number}: correct answer must be one of the options")

        explanation = question.get("explanation")
        if isinstance(explanation, str) and len(explanation) > cfg.max_explanation_length:
            errors.append(f"Question {number}: explanation is too long (max {cfg.max_explanation_length} characters)")

        if question.get("points") is not None:
            points = parse_int(question["points"])
            if points is None or not cfg.min_points_per_question <= points <= cfg.max_points_per_question:
                errors.append(
                    f"Question {number}: points must be between "
                    f"{cfg.min_points_per_question}-{cfg.max_points_per_question}"
                )

        if question.get("difficulty") and not _is_one_of(question["difficulty"], _DIFFICULTIES):
            errors.append(f"Question {number}: invalid difficulty level")

        return errors

    def validate_question_options(self, options: Any, number: int) -> list[str]:
        cfg = self.config
        if not isinstance(options, list):
            return [f"Question {number}: options must be an array"]

        errors = []
        if len(options) < cfg.min_options_per_question:
            errors.append(f"Question {number}: must have at least {cfg.min_options_per_question} options")
        if len(options) > cfg.max_options_per_question:
            errors.append(f"Question {number}: must not have more than {cfg.max_options_per_question} options")

        for option_number, option in enumerate(options, start=1):
            if not isinstance(option, str) or not option:
                errors.append(f"Question {number}: option {option_number} is invalid")
            elif not option.strip():
                errors.append(f"Question {number}: option {option_number} must not be empty")
            elif len(option.strip()) > cfg.max_option_length:
                errors.append(
                    f"Question {number}: option {option_number} is too long (max {cfg.max_option_length} characters)"
                )

        normalized = [o.strip().lower() if isinstance(o, str) else o for o in options]
        if len(set(map(str, normalized))) != len(options):
            errors.append(f"Question {number}: duplicate options")

        return errors

    def validate_advanced_properties(self, data: dict[str, Any]) -> list[str]:
        errors = []
        if data.get("tags"):
            errors += self._tag_errors(data["tags"])

        settings = data.get("settings")
        if settings and not isinstance(settings, (dict, str)):
            errors.append("Settings must be an object")

        if "isPublic" in data and data["isPublic"] is not None and not isinstance(data["isPublic"], bool):
            errors.append("isPublic must be a boolean")

        if data.get("folderId") is not None:
            folder_id = parse_int(data["folderId"])
            if folder_id is None or folder_id < 1:
                errors.append("Folder ID must be a positive integer")

        return errors

    def validate_business_rules(self, data: dict[str, Any]) -> list[str]:
        errors = []
        questions = data.get("questions") if isinstance(data.get("questions"), list) else None

        if data.get("status") == QuizStatus.PUBLISHED.value:
            if not questions:
                errors.append("A published quiz must have questions")
            if not data.get("timeLimit"):
                logger.warning(f"Published quiz without time limit | title={data.get('title')!r}")

        if data.get("isPublic"):
            description = data.get("description")
            if not isinstance(description, str) or not description.strip():
                errors.append("A public quiz must have a description")
            if data.get("status") == QuizStatus.DRAFT.value:
                errors.append("A public quiz must not be in draft status")

        quiz_type = data.get("questionType")
        for index, question in enumerate(questions or []):
            if not isinstance(question, dict) or not isinstance(question.get("options"), list):
                continue
            options = question["options"]
            # A question without its own type inherits the quiz type
            question_type = question.get("type") or quiz_type
            if question_type == QuestionType.MULTIPLE_CHOICE.value and len(options) < 2:
                errors.append(f"Multiple choice question {index + 1}: must have at least 2 options")
            if question_type == QuestionType.TRUE_FALSE.value and options and len(options) != 2:
                errors.append(f"True/false question {index + 1}: must have exactly 2 options")

        return errors

    def check_duplicate_questions(self, questions: list[Any]) -> list[str]:
        errors = []
        seen: set[str] = set()
        for index, question in enumerate(questions):
            text = question.get("question") if isinstance(question, dict) else None
            if not isinstance(text, str) or not text:
                continue
            normalized = text.strip().lower()
            if normalized in seen:
                errors.append(f"Question {index + 1}: duplicates another question")
            else:
                seen.add(normalized)
        return errors

    def _title_errors(self, title: Any) -> list[str]:
        cfg = self.config
        if not isinstance(title, str) or not title.strip():
            return ["Quiz title must not be empty"]
        title = title.strip()
        if len(title) < cfg.min_title_length:
            return [f"Quiz title must be at least {cfg.min_title_length} characters"]
        if len(title) > cfg.max_title_length:
            return [f"Quiz title must not exceed {cfg.max_title_length} characters"]
        return []

    def _description_errors(self, description: Any) -> list[str]:
        cfg = self.config
        if isinstance(description, str) and len(description) > cfg.max_description_length:
            return [f"Description must not exceed {cfg.max_description_length} characters"]
        return []

    def _time_limit_errors(self, time_limit: Any) -> list[str]:
        cfg = self.config
        parsed = parse_int(time_limit)
        if parsed is None or not cfg.min_time_limit <= parsed <= cfg.max_time_limit:
            return [f"Time limit must be between {cfg.min_time_limit}-{cfg.max_time_limit} minutes"]
        return []

    def _tag_errors(self, tags: Any) -> list[str]:
        cfg = self.config
        if isinstance(tags, str):
            tags = _split_tags(tags)
        if not isinstance(tags, list):
            return ["Tags must be an array or a comma-separated string"]
        errors = []
        if len(tags) > cfg.max_tags_per_quiz:
            errors.append(f"Quiz must not have more than {cfg.max_tags_per_quiz} tags")
        for number, tag in enumerate(tags, start=1):
            if not isinstance(tag, str) or not tag:
                errors.append(f"Tag {number}: must be a string")
            elif len(tag) > cfg.max_tag_length:
                errors.append(f"Tag {number}: must not exceed {cfg.max_tag_length} characters")
        return errors

    # =========================================================================
    # Formatted quiz checks
    # =========================================================================

    def validate_for_publication(self, quiz: Quiz) -> PublicationReport:
        errors = []
        questions = quiz.questions or []

        if len(quiz.title.strip()) < 5:
            errors.append("Quiz title must be at least 5 characters")
        if len(quiz.description.strip()) < 20:
            errors.append("Quiz description must be at least 20 characters")
        if len(questions) < 3:
            errors.append("Quiz must have at least 3 questions")
        if not quiz.time_limit:
            errors.append("Quiz must have a time limit")

        explanation_ratio = (
            sum(1 for q in questions if q.explanation) / len(questions) if questions else 0
        )
        if questions and explanation_ratio < 0.5:
            errors.append("At least 50% of questions should have an explanation")

        return PublicationReport(
            is_ready_for_publication=not errors,
            errors=errors,
            requirements={
                "titleLength": len(quiz.title),
                "descriptionLength": len(quiz.description),
                "questionCount": len(questions),
                "hasTimeLimit": bool(quiz.time_limit),
                "explanationRatio": explanation_ratio,
            },
        )

    def validate_quiz_quality(self, quiz: Quiz) -> QualityReport:
        questions = quiz.questions or []
        issues: list[str] = []
        suggestions: list[str] = []

        question_types = self.analyze_question_types(quiz)
        if question_types["variety"] < 0.3 and len(questions) > 5:
            issues.append("Questions lack variety in type")
            suggestions.append("Add questions of different types")

        difficulty = self.analyze_difficulty_distribution(quiz)
        if difficulty["imbalance"] > 0.8:
            issues.append("Difficulty distribution is unbalanced")
            suggestions.append("Spread questions across difficulty levels")

        lengths = self.analyze_question_lengths(quiz)
        if lengths["inconsistency"] > 0.7:
            issues.append("Question lengths are inconsistent")
            suggestions.append("Keep question lengths more uniform")

        answers = self.analyze_answer_distribution(quiz)
        if answers["bias"] > 0.6:
            issues.append("Correct answers are concentrated in few positions")
            suggestions.append("Spread correct answers evenly across option positions")

        score = self.calculate_quality_score(quiz, issues)
        report = QualityReport(
            quality_score=score,
            quality_level=self.get_quality_level(score),
            issues=issues,
            suggestions=suggestions,
            analytics={
                "questionTypes": question_types,
                "difficultyDistribution": difficulty,
                "lengthAnalysis": lengths,
                "answerDistribution": answers,
            },
        )
        logger.debug(f"Quiz quality validated | title={quiz.title!r} | score={score} | issues={len(issues)}")
        return report

    def analyze_question_types(self, quiz: Quiz) -> dict[str, Any]:
        questions = quiz.questions or []
        if not questions:
            return {"variety": 0, "distribution": {}, "uniqueTypes": 0}
        distribution = Counter(q.type.value for q in questions)
        return {
            "variety": len(distribution) / len(QuestionType),
            "distribution": dict(distribution),
            "uniqueTypes": len(distribution),
        }

    def analyze_difficulty_distribution(self, quiz: Quiz) -> dict[str, Any]:
        questions = quiz.questions or []
        if not questions:
            return {"imbalance": 0, "distribution": {}}
        distribution = Counter(q.difficulty.value for q in questions)
        return {
            "imbalance": _imbalance(distribution, len(questions)),
            "distribution": dict(distribution),
        }

    def analyze_question_lengths(self, quiz: Quiz) -> dict[str, Any]:
        questions = quiz.questions or []
        if not questions:
            return {"inconsistency": 0, "average": 0, "variance": 0, "standardDeviation": 0}
        lengths = [len(q.question) for q in questions]
        average = sum(lengths) / len(lengths)
        variance = sum((length - average) ** 2 for length in lengths) / len(lengths)
        deviation = math.sqrt(variance)
        return {
            "inconsistency": min(deviation / average, 1) if average else 0,
            "average": average,
            "variance": variance,
            "standardDeviation": deviation,
        }

    def analyze_answer_distribution(self, quiz: Quiz) -> dict[str, Any]:
        positions: Counter[int] = Counter()
        multiple_choice_count = 0
        for q in quiz.questions or []:
            if q.type == QuestionType.MULTIPLE_CHOICE and q.options and q.correct_answer:
                multiple_choice_count += 1
                if q.correct_answer in q.options:
                    positions[q.options.index(q.correct_answer)] += 1

        if not positions:
            return {"bias": 0, "distribution": {}, "multipleChoiceCount": multiple_choice_count}
        return {
            "bias": _imbalance(positions, multiple_choice_count),
            "distribution": dict(positions),
            "multipleChoiceCount": multiple_choice_count,
        }

    def calculate_quality_score(self, quiz: Quiz, issues: list[str]) -> float:
        questions = quiz.questions or []
        score = 100 - len(issues) * 10

        if len(quiz.description) > 50:
            score += 5
        if quiz.time_limit:
            score += 5
        if len(questions) >= 5:
            score += 5
        if questions:
            score += sum(1 for q in questions if q.explanation) / len(questions) * 10

        return round(max(0, min(100, score)), 2)

    @staticmethod
    def get_quality_level(score: float) -> str:
        if score >= 90:
            return "excellent"
        if score >= 75:
            return "good"
        if score >= 60:
            return "fair"
        return "poor"


def _split_tags(tags: str) -> Any:
    try:
        decoded = json.loads(tags)
    except json.JSONDecodeError:
        decoded = None
    if isinstance(decoded, list):
        return decoded
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


def _imbalance(counts: Counter, total: int) -> float:
    """Sum of each bucket's distance from an even share, as a fraction of total."""
    expected = total / len(counts)
    return sum(abs(count - expected) / total for count in counts.values())
