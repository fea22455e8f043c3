"""Quiz data validation and quality analysis."""

from .validator import (
    PublicationReport,
    QualityReport,
    QuizValidator,
    ValidationResult,
    ValidatorConfig,
)

__all__ = [
    "PublicationReport",
    "QualityReport",
    "QuizValidator",
    "ValidationResult",
    "ValidatorConfig",
]
