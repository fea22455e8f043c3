"""
Per-field strictness policy for the question formatter.

Required fields (question text, correct answer) always fail when missing.
What the policy decides is how value problems are treated:

    strict_points          invalid points raise instead of falling back to 1
    strict_correct_answer  an answer that is not among the options raises
                           instead of being kept with a warning

The defaults are lenient on points and strict on answers.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationPolicy:
    strict_points: bool = False
    strict_correct_answer: bool = True

    @classmethod
    def strict(cls) -> "ValidationPolicy":
        return cls(strict_points=True, strict_correct_answer=True)

    @classmethod
    def lenient(cls) -> "ValidationPolicy":
        return cls(strict_points=False, strict_correct_answer=False)


DEFAULT_POLICY = ValidationPolicy()
