"""
Unit tests for the question formatter.

Run: pytest tests/unit/test_question_formatter.py -v
"""

import pytest

from quizforge.errors import ValidationError
from quizforge.formatting import QuestionFormatter, ValidationPolicy, format_question
from quizforge.models import TRUE_FALSE_OPTIONS, FormatContext, QuestionType


class TestRequiredFields:
    """Question text and correct answer are always required."""

    def test_missing_question_text(self):
        with pytest.raises(ValidationError) as exc:
            format_question({"correctAnswer": "A"})
        assert "Question text is required" in str(exc.value)
        assert exc.value.field == "question"

    def test_missing_correct_answer(self):
        with pytest.raises(ValidationError) as exc:
            format_question({"question": "Q?", "options": ["A", "B"]}, index=2)
        assert str(exc.value).startswith("Question 3 formatting failed")
        assert "Correct answer is required" in str(exc.value)

    def test_answer_not_in_options(self):
        with pytest.raises(ValidationError) as exc:
            format_question({"question": "Q?", "options": ["A", "B"], "correctAnswer": "C"})
        assert "must be one of the provided options" in str(exc.value)

    def test_answer_match_is_case_sensitive(self):
        with pytest.raises(ValidationError):
            format_question({"question": "Q?", "options": ["Paris", "Rome"], "correctAnswer": "paris"})

    def test_answer_trimmed_before_match(self):
        question = format_question({"question": "Q?", "options": [" A ", "B"], "correctAnswer": " A"})
        assert question.correct_answer == "A"
        assert question.options == ["A", "B"]


class TestDefaults:
    """Test default fallbacks."""

    def test_defaults(self, sample_question):
        del sample_question["type"], sample_question["points"], sample_question["difficulty"]
        question = format_question(sample_question, index=4)

        assert question.id == "q_5"
        assert question.type == QuestionType.MULTIPLE_CHOICE
        assert question.points == 1
        assert question.order_index == 4
        assert question.metadata.generated_by == "ai"
        assert question.metadata.validated is False

    def test_invalid_points_fall_back(self, sample_question):
        sample_question["points"] = 999
        assert format_question(sample_question).points == 1

    def test_context_provenance(self, sample_question):
        question = format_question(sample_question, context=FormatContext(generated_by="import"))
        assert question.metadata.generated_by == "import"

    def test_dict_context(self, sample_question):
        question = format_question(sample_question, context={"generatedBy": "manual"})
        assert question.metadata.generated_by == "manual"


class TestPolicy:
    """Strictness is configurable per field."""

    def test_strict_points(self, sample_question):
        sample_question["points"] = 50
        formatter = QuestionFormatter(ValidationPolicy(strict_points=True))

        with pytest.raises(ValidationError) as exc:
            formatter.format(sample_question)
        assert exc.value.field == "points"

    def test_policy_from_environment(self, sample_question, monkeypatch):
        monkeypatch.setenv("QUIZFORGE_STRICT_POINTS", "true")
        sample_question["points"] = 99

        with pytest.raises(ValidationError) as exc:
            format_question(sample_question)
        assert exc.value.field == "points"

    def test_lenient_answer_from_environment(self, monkeypatch):
        monkeypatch.setenv("QUIZFORGE_STRICT_CORRECT_ANSWER", "false")
        question = format_question({"question": "Q?", "options": ["A", "B"], "correctAnswer": "C"})
        assert question.correct_answer == "C"

    def test_lenient_answer_kept(self):
        formatter = QuestionFormatter(ValidationPolicy.lenient())
        question = formatter.format({"question": "Q?", "options": ["A", "B"], "correctAnswer": "C"})
        assert question.correct_answer == "C"


class TestTypeProcessors:
    """Type-specific post-processing."""

    def test_true_false_forces_options(self):
        question = format_question({
            "question": "The Earth is round.",
            "type": "true_false",
            "options": ["True", "False"],
            "correctAnswer": "True",
        })
        assert question.options == list(TRUE_FALSE_OPTIONS)
        assert question.correct_answer == TRUE_FALSE_OPTIONS[0]

    def test_true_false_positional_answer(self):
        question = format_question({
            "question": "Is it raining?",
            "type": "true_false",
            "options": ["Yes", "No"],
            "correctAnswer": "No",
        })
        assert question.correct_answer == TRUE_FALSE_OPTIONS[1]

    def test_true_false_word_answer_without_options(self):
        question = format_question({"question": "Is water wet?", "type": "true_false", "correctAnswer": "false"})
        assert question.options == list(TRUE_FALSE_OPTIONS)
        assert question.correct_answer == TRUE_FALSE_OPTIONS[1]

    def test_true_false_unmapped_answer_kept_without_options(self):
        question = format_question({"question": "Is water wet?", "type": "true_false", "correctAnswer": "Yes"})
        assert question.options == list(TRUE_FALSE_OPTIONS)
        assert question.correct_answer == "Yes"

    def test_true_false_checked_against_supplied_options(self):
        question = format_question({
            "question": "Pick one",
            "type": "true_false",
            "options": ["A", "B", "C"],
            "correctAnswer": "C",
        })
        assert question.options == list(TRUE_FALSE_OPTIONS)
        assert question.correct_answer == "C"

    def test_true_false_answer_not_in_supplied_options(self):
        with pytest.raises(ValidationError) as exc:
            format_question({
                "question": "Is it?",
                "type": "true_false",
                "options": ["True", "False"],
                "correctAnswer": "true",
            })
        assert "must be one of the provided options" in str(exc.value)

    def test_fill_in_blank_counts_blanks(self):
        question = format_question({
            "question": "___ is the capital of {blank}.",
            "type": "fill_in_blank",
            "correctAnswer": "Rome",
        })
        assert question.blanks == 2

    def test_matching_columns(self):
        question = format_question({
            "question": "Match the pairs",
            "type": "matching",
            "leftColumn": ["H2O", "NaCl"],
            "correctAnswer": "see columns",
        })
        assert question.left_column == ["H2O", "NaCl"]
        assert question.right_column == []

    def test_essay_passes_through(self):
        question = format_question({"question": "Discuss.", "type": "essay", "correctAnswer": "Any"})
        assert question.blanks is None
        assert question.left_column is None


class TestLegacyQuestion:
    """Legacy snake_case questions format like camelCase ones."""

    def test_snake_case(self):
        question = format_question({
            "question_text": "Q?",
            "question_type": "essay",
            "correct_answer": "A",
            "order_index": 3,
        })
        assert question.question == "Q?"
        assert question.type == QuestionType.ESSAY
        assert question.correct_answer == "A"
        assert question.order_index == 3
