"""
Unit tests for field normalizers.

Run: pytest tests/unit/test_normalizers.py -v
"""

from datetime import datetime

from quizforge.formatting import normalizers as fmt
from quizforge.models import Category, DifficultyLevel, QuestionType, QuizStatus


class TestTextFields:
    """Test title, description and explanation coercion."""

    def test_title_trimmed(self):
        assert fmt.format_title("  Algebra  ") == "Algebra"

    def test_blank_title_gets_placeholder(self):
        assert fmt.format_title("   ") == fmt.UNTITLED_QUIZ
        assert fmt.format_title(None) == fmt.UNTITLED_QUIZ

    def test_title_truncated(self):
        assert len(fmt.format_title("x" * 300)) == fmt.MAX_TITLE_LENGTH

    def test_description_truncated(self):
        assert len(fmt.format_description("d" * 1500)) == fmt.MAX_DESCRIPTION_LENGTH

    def test_explanation_truncated(self):
        assert len(fmt.format_explanation("e" * 600)) == fmt.MAX_EXPLANATION_LENGTH

    def test_non_string_text_is_empty(self):
        assert fmt.format_text(42) == ""


class TestEnumFields:
    """Unknown enumerated values fall back to their defaults."""

    def test_category(self):
        assert fmt.format_category("science") == Category.SCIENCE
        assert fmt.format_category("astrology") == Category.GENERAL

    def test_question_type(self):
        assert fmt.format_question_type("essay") == QuestionType.ESSAY
        assert fmt.format_question_type(None) == QuestionType.MULTIPLE_CHOICE

    def test_difficulty(self):
        assert fmt.format_difficulty_level("expert") == DifficultyLevel.EXPERT
        assert fmt.format_difficulty_level("impossible") == DifficultyLevel.MEDIUM

    def test_status_accepts_archived(self):
        assert fmt.format_status("archived") == QuizStatus.ARCHIVED
        assert fmt.format_status("deleted") == QuizStatus.DRAFT


class TestListFields:
    """Test options, tags and settings."""

    def test_options_drop_blank_and_non_strings(self):
        assert fmt.format_options([" A ", "", "  ", 3, "B"]) == ["A", "B"]

    def test_options_capped_at_six(self):
        assert fmt.format_options([str(i) for i in range(10)]) == ["0", "1", "2", "3", "4", "5"]

    def test_options_non_list(self):
        assert fmt.format_options("A,B") == []

    def test_tags_from_comma_string(self):
        assert fmt.format_tags("math, algebra , ,") == ["math", "algebra"]

    def test_tags_from_json_string(self):
        assert fmt.format_tags('["a", "b"]') == ["a", "b"]

    def test_tags_capped_at_ten(self):
        assert len(fmt.format_tags([f"t{i}" for i in range(15)])) == fmt.MAX_TAGS

    def test_settings_from_json_string(self):
        assert fmt.format_settings('{"shuffle": true}') == {"shuffle": True}

    def test_malformed_settings_recovered(self):
        assert fmt.format_settings("{not json") == {}
        assert fmt.format_settings("[1, 2]") == {}
        assert fmt.format_settings(None) == {}

    def test_source_file_aliases(self):
        source = fmt.format_source_file({"originalname": "notes.pdf", "mimetype": "application/pdf", "size": 10})
        assert source.name == "notes.pdf"
        assert source.type == "application/pdf"
        assert source.extracted_at is not None

    def test_missing_source_file(self):
        assert fmt.format_source_file(None) is None


class TestNumbers:
    """Test parse_int, points and time limits."""

    def test_parse_int_leading_digits(self):
        assert fmt.parse_int("7 points") == 7
        assert fmt.parse_int(3.9) == 3
        assert fmt.parse_int("abc") is None
        assert fmt.parse_int(True) is None

    def test_points_in_range(self):
        assert fmt.format_points("5") == 5

    def test_points_out_of_range(self):
        assert fmt.format_points(999) == fmt.DEFAULT_POINTS
        assert fmt.format_points(0) == fmt.DEFAULT_POINTS

    def test_time_limit(self):
        assert fmt.format_time_limit("30") == 30
        assert fmt.format_time_limit(0) is None
        assert fmt.format_time_limit("soon") is None

    def test_extract_blanks(self):
        assert fmt.extract_blanks("___ plus {blank} equals ____") == 3
        assert fmt.extract_blanks("no blanks __ here") == 0


class TestTimestamps:
    """Test timestamp parsing."""

    def test_iso_with_z(self):
        parsed = fmt.format_timestamp("2024-01-15T10:00:00Z")
        assert isinstance(parsed, datetime)
        assert parsed.year == 2024
        assert parsed.utcoffset().total_seconds() == 0

    def test_unparsable_kept(self):
        assert fmt.format_timestamp("last tuesday") == "last tuesday"

    def test_missing_is_now(self):
        assert isinstance(fmt.format_timestamp(None), datetime)
