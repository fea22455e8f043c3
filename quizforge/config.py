"""
Configuration settings for quizforge.

Uses Pydantic Settings for environment variable management with .env file support.
All variables are read with the QUIZFORGE_ prefix (e.g. QUIZFORGE_LOCALE=en).
"""
from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from quizforge.formatting.policy import ValidationPolicy
    from quizforge.validation.validator import ValidatorConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="QUIZFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: str = Field(
        default="WARNING",
        description="Logging level for the stderr sink",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional path of a rotating log file",
    )

    # ========================================
    # Formatting policy
    # ========================================
    strict_points: bool = Field(
        default=False,
        description="Reject invalid question points instead of falling back to 1",
    )
    strict_correct_answer: bool = Field(
        default=True,
        description="Reject correct answers that are not among the options",
    )

    # ========================================
    # Export
    # ========================================
    locale: Literal["th", "en"] = Field(
        default="th",
        description="Label language for the plain text export",
    )
    default_export_type: str = Field(
        default="json",
        description="Export type used when the CLI is given none",
    )

    # ========================================
    # Validation limits
    # ========================================
    max_questions_per_quiz: int = Field(default=100, ge=1)
    min_questions_per_quiz: int = Field(default=1, ge=0)
    max_options_per_question: int = Field(default=6, ge=2)
    min_options_per_question: int = Field(default=2, ge=0)
    max_tags_per_quiz: int = Field(default=10, ge=0)
    max_time_limit: int = Field(
        default=480,
        description="Maximum time limit in minutes (8 hours)",
    )
    min_time_limit: int = Field(default=1)

    def get_policy(self) -> "ValidationPolicy":
        """Build the formatter strictness policy."""
        from quizforge.formatting.policy import ValidationPolicy

        return ValidationPolicy(
            strict_points=self.strict_points,
            strict_correct_answer=self.strict_correct_answer,
        )

    def get_validator_config(self) -> "ValidatorConfig":
        """Build the quiz validator limits."""
        from quizforge.validation.validator import ValidatorConfig

        return ValidatorConfig(
            max_questions_per_quiz=self.max_questions_per_quiz,
            min_questions_per_quiz=self.min_questions_per_quiz,
            max_options_per_question=self.max_options_per_question,
            min_options_per_question=self.min_options_per_question,
            max_tags_per_quiz=self.max_tags_per_quiz,
            max_time_limit=self.max_time_limit,
            min_time_limit=self.min_time_limit,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
