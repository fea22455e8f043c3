"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from quizforge.config import get_settings


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so environment changes in a test take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def sample_question():
    """Provide a raw multiple choice question."""
    return {
        "question": "What is the capital of France?",
        "type": "multiple_choice",
        "options": ["Paris", "London", "Berlin", "Madrid"],
        "correctAnswer": "Paris",
        "explanation": "Paris is the capital of France.",
        "points": 2,
        "difficulty": "easy",
    }


@pytest.fixture
def sample_raw_quiz(sample_question):
    """Provide a raw quiz with one question of each encodable type."""
    return {
        "title": "  Geography Basics  ",
        "topic": "Capitals",
        "description": "A short quiz about European capitals and rivers.",
        "category": "history",
        "questionType": "multiple_choice",
        "difficultyLevel": "easy",
        "timeLimit": "15",
        "status": "published",
        "tags": "geography, europe",
        "userId": 7,
        "questions": [
            sample_question,
            {
                "question": "The Seine flows through Paris.",
                "type": "true_false",
                "options": ["True", "False"],
                "correctAnswer": "True",
            },
            {
                "question": "The capital of Italy is ____.",
                "type": "fill_in_blank",
                "correctAnswer": "Rome",
            },
        ],
    }


@pytest.fixture
def sample_legacy_quiz():
    """Provide a raw quiz in the snake_case shape of older records."""
    return {
        "title": "Legacy Quiz",
        "question_type": "true_false",
        "difficulty_level": "hard",
        "time_limit": 30,
        "user_id": 42,
        "created_at": "2024-01-15T10:00:00Z",
        "questions": [
            {
                "question_text": "Water boils at 100C at sea level.",
                "question_type": "true_false",
                "correct_answer": "ถูก",
                "order_index": 0,
            },
        ],
    }
