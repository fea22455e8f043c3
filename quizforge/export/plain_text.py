"""
Human-readable plain text export with localized labels.
"""

from __future__ import annotations

from quizforge.config import get_settings
from quizforge.models import Quiz

from .base import register_exporter

RULE_WIDTH = 50

LABELS = {
    "th": {
        "category": "หมวดหมู่",
        "difficulty": "ระดับความยาก",
        "question_count": "จำนวนข้อ",
        "time_limit": "เวลา",
        "minutes": "นาที",
        "explanation": "คำอธิบาย",
        "points": "คะแนน",
    },
    "en": {
        "category": "Category",
        "difficulty": "Difficulty",
        "question_count": "Questions",
        "time_limit": "Time",
        "minutes": "minutes",
        "explanation": "Explanation",
        "points": "Points",
    },
}

CATEGORY_NAMES = {
    "th": {
        "general": "ทั่วไป",
        "mathematics": "คณิตศาสตร์",
        "science": "วิทยาศาสตร์",
        "language": "ภาษา",
        "history": "ประวัติศาสตร์",
        "technology": "เทคโนโลยี",
        "other": "อื่นๆ",
    },
    "en": {
        "general": "General",
        "mathematics": "Mathematics",
        "science": "Science",
        "language": "Language",
        "history": "History",
        "technology": "Technology",
        "other": "Other",
    },
}

DIFFICULTY_NAMES = {
    "th": {"easy": "ง่าย", "medium": "ปานกลาง", "hard": "ยาก", "expert": "ผู้เชี่ยวชาญ"},
    "en": {"easy": "Easy", "medium": "Medium", "hard": "Hard", "expert": "Expert"},
}


def render_plain_text(quiz: Quiz, locale: str | None = None) -> str:
    locale = locale or get_settings().locale
    if locale not in LABELS:
        locale = "th"
    labels = LABELS[locale]
    category = quiz.category.value
    difficulty = quiz.difficulty_level.value

    lines = [quiz.title, "=" * len(quiz.title), ""]

    if quiz.description:
        lines += [quiz.description, ""]

    lines.append(f"{labels['category']}: {CATEGORY_NAMES[locale].get(category, category)}")
    lines.append(f"{labels['difficulty']}: {DIFFICULTY_NAMES[locale].get(difficulty, difficulty)}")
    lines.append(f"{labels['question_count']}: {quiz.question_count}")
    if quiz.time_limit:
        lines.append(f"{labels['time_limit']}: {quiz.time_limit} {labels['minutes']}")

    lines += ["", "=" * RULE_WIDTH, ""]

    for number, q in enumerate(quiz.questions or [], start=1):
        lines.append(f"{number}. {q.question}")
        for index, option in enumerate(q.options):
            letter = chr(ord("a") + index)
            mark = " ✓" if option == q.correct_answer else ""
            lines.append(f"   {letter}) {option}{mark}")
        if q.explanation:
            lines.append(f"   {labels['explanation']}: {q.explanation}")
        lines.append(f"   {labels['points']}: {q.points or 1}")
        lines.append("")

    return "\n".join(lines) + "\n"


@register_exporter("text", "plain")
def _render_plain_text_default(quiz: Quiz) -> str:
    return render_plain_text(quiz)
