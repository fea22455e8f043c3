"""
CSV export.

One row per question with a fixed header. Only the first four options have
columns; any further options are dropped.
"""

from __future__ import annotations

import csv
import io

from quizforge.models import Quiz

from .base import register_exporter

CSV_HEADER = [
    "Question",
    "Type",
    "Option1",
    "Option2",
    "Option3",
    "Option4",
    "CorrectAnswer",
    "Explanation",
    "Points",
]

CSV_OPTION_COLUMNS = 4


@register_exporter("csv")
def render_csv(quiz: Quiz) -> str:
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    for q in quiz.questions or []:
        options = list(q.options[:CSV_OPTION_COLUMNS])
        options += [""] * (CSV_OPTION_COLUMNS - len(options))
        writer.writerow([
            q.question,
            q.type.value,
            *options,
            q.correct_answer or "",
            q.explanation or "",
            q.points or 1,
        ])

    return output.getvalue()
