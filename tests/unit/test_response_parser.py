"""
Unit tests for the AI response parser.

Run: pytest tests/unit/test_response_parser.py -v
"""

import pytest

from quizforge.errors import ValidationError
from quizforge.formatting import format_quiz
from quizforge.models import FormatContext
from quizforge.parsing import (
    clean_response,
    fix_common_issues,
    normalize_ai_question,
    parse_questions_response,
    parse_quiz_response,
)

FENCED_RESPONSE = """Here is your quiz:
```json
{
  "title": "  AI Quiz ",
  "questions": [
    {"question": "2 + 2 = ?", "type": "Multiple_Choice", "options": ["3", "4"], "correctAnswer": 1},
    {"question": "The sun is a star.", "type": "true_false", "correctAnswer": true},
  ],
}
```
Hope this helps!"""


class TestCleaning:
    """Fences and surrounding prose are stripped."""

    def test_clean_response(self):
        cleaned = clean_response('Sure! ```json\n{"a": 1}\n``` Enjoy')
        assert cleaned == '{"a": 1}'

    def test_empty(self):
        assert clean_response("") == ""

    def test_trailing_commas(self):
        assert fix_common_issues('{"a": [1, 2,], }') == '{"a": [1, 2] }'


class TestNormalizeQuestion:
    """LLM answer shapes are converted to answer text."""

    def test_index_answer(self):
        question = normalize_ai_question({"question": "Q", "options": ["A", "B"], "correctAnswer": 1})
        assert question["correctAnswer"] == "B"

    def test_boolean_answer(self):
        assert normalize_ai_question({"question": "Q", "correctAnswer": False})["correctAnswer"] == "ผิด"

    def test_snake_case_answer(self):
        question = normalize_ai_question({"question": " Q ", "correct_answer": " A "})
        assert question == {"question": "Q", "correctAnswer": "A"}


class TestParseQuizResponse:
    """Full quiz responses."""

    def test_fenced_response(self):
        quiz = parse_quiz_response(FENCED_RESPONSE)

        assert quiz["title"] == "AI Quiz"
        assert quiz["questions"][0]["type"] == "multiple_choice"
        assert quiz["questions"][0]["correctAnswer"] == "4"
        assert quiz["questions"][1]["correctAnswer"] == "ถูก"
        assert quiz["metadata"]["totalQuestions"] == 2
        assert quiz["metadata"]["questionTypes"] == {"multiple_choice": 1, "true_false": 1}
        assert quiz["metadata"]["aiGenerated"] is True

    def test_parsed_quiz_formats(self):
        quiz = format_quiz(parse_quiz_response(FENCED_RESPONSE), FormatContext(generated_by="ai"))

        assert quiz.title == "AI Quiz"
        assert quiz.question_count == 2
        assert quiz.metadata.generated_by == "ai"

    def test_empty_response(self):
        with pytest.raises(ValidationError) as exc:
            parse_quiz_response("   ")
        assert "Invalid response format" in str(exc.value)

    def test_not_json(self):
        with pytest.raises(ValidationError) as exc:
            parse_quiz_response("I could not generate a quiz, sorry.")
        assert "Invalid JSON format" in str(exc.value)

    def test_structure_errors_collected(self):
        with pytest.raises(ValidationError) as exc:
            parse_quiz_response('{"questions": []}')
        assert str(exc.value).startswith("Quiz structure validation failed")
        assert exc.value.errors == ["Quiz must have a valid title", "Quiz must have at least one question"]


class TestParseQuestionsResponse:
    """Bare question arrays."""

    def test_array(self):
        questions = parse_questions_response('[{"question": "A?", "correctAnswer": "x"}]')
        assert questions == [{"question": "A?", "correctAnswer": "x"}]

    def test_wrapped_array(self):
        questions = parse_questions_response('{"questions": [{"question": "A?"}, {"question": "B?"}]}')
        assert len(questions) == 2

    def test_invalid_question(self):
        with pytest.raises(ValidationError) as exc:
            parse_questions_response('{"questions": [{"question": ""}]}')
        assert "Question 1 validation failed" in str(exc.value)

    def test_no_questions(self):
        with pytest.raises(ValidationError):
            parse_questions_response('{"title": "No questions"}')
