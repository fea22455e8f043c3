"""
Unit tests for derived quiz metrics and the reporting summary.
"""

from quizforge.formatting import (
    calculate_complexity,
    calculate_readability_score,
    estimate_completion_time,
    format_question,
    format_quiz,
    format_summary,
)
from quizforge.models import ComplexityLevel


def _question(text, options=None, explanation=""):
    options = options or ["A", "B"]
    return format_question({
        "question": text,
        "options": options,
        "correctAnswer": options[0],
        "explanation": explanation,
    })


class TestEstimates:
    """Test completion time and complexity."""

    def test_completion_time(self):
        questions = [_question(f"Question {i}?") for i in range(5)]
        assert estimate_completion_time(questions) == 5

    def test_completion_time_falls_back_to_count(self):
        assert estimate_completion_time(None, 8) == 8
        assert estimate_completion_time([]) == 0

    def test_complexity_empty(self):
        assert calculate_complexity([]) == ComplexityLevel.LOW

    def test_complexity_high(self):
        long_text = "x" * 250 + "?"
        options = ["A", "B", "C", "D", "E"]
        questions = [_question(long_text, options, "because") for _ in range(2)]
        assert calculate_complexity(questions) == ComplexityLevel.HIGH

    def test_complexity_medium(self):
        questions = [_question("y" * 150 + "?", explanation="because")]
        assert calculate_complexity(questions) == ComplexityLevel.MEDIUM


class TestReadability:
    """Readability is clamped to 0-100."""

    def test_short_question_clamped_high(self):
        assert calculate_readability_score([_question("Is this short?")]) == 100

    def test_empty(self):
        assert calculate_readability_score([]) == 0

    def test_long_sentence_lowers_score(self):
        text = " ".join(["word"] * 150) + "?"
        assert calculate_readability_score([_question(text)]) < 100


class TestFormatSummary:
    """Test the summary sections."""

    def test_summary(self, sample_raw_quiz):
        summary = format_summary(format_quiz(sample_raw_quiz))

        assert summary.basic["title"] == "Geography Basics"
        assert summary.basic["questionCount"] == 3
        assert summary.basic["status"] == "published"
        assert summary.statistics["questionTypes"] == {
            "multiple_choice": 1,
            "true_false": 1,
            "fill_in_blank": 1,
        }
        assert summary.statistics["totalPoints"] == 4
        assert summary.statistics["hasExplanations"] == 1
        assert summary.metadata["estimatedTime"] == 3
        assert summary.metadata["complexity"] == "low"

    def test_average_length_rounds_half_up(self):
        quiz = format_quiz({
            "title": "Lengths",
            "questions": [
                {"question": text, "correctAnswer": "x"}
                for text in ("A?", "Bb?", "Cc?", "D?")
            ],
        })
        assert format_summary(quiz).statistics["averageQuestionLength"] == 3

    def test_summary_without_questions(self):
        summary = format_summary(format_quiz({"title": "Empty"}))
        assert summary.statistics["averageQuestionLength"] == 0
        assert summary.metadata["readabilityScore"] == 0
