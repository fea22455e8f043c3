"""
Export renderer registry and dispatch.

Each renderer is a pure function Quiz -> str | dict registered under one or
more export type names.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Callable

from loguru import logger

from quizforge.errors import ValidationError
from quizforge.models import Quiz

Renderer = Callable[[Quiz], Any]

# Renderer registry - populated by @register_exporter
EXPORTERS: dict[str, Renderer] = {}


def register_exporter(*names: str):
    """Decorator to register a renderer under one or more export type names."""
    def decorator(func: Renderer) -> Renderer:
        for name in names:
            EXPORTERS[name] = func
        return func
    return decorator


def supported_export_types() -> list[str]:
    return sorted(EXPORTERS)


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_for_export(quiz: Quiz, export_type: str = "json") -> Any:
    """
    Render a canonical quiz in the requested export format.

    Type names are matched case-insensitively: json, csv, moodle|gift, text|plain.
    """
    try:
        renderer = EXPORTERS.get(str(export_type).lower())
        if renderer is None:
            raise ValidationError(f"Unsupported export type: {export_type}", field="exportType")
        return renderer(quiz)
    except ValidationError as e:
        logger.error(f"formatForExport failed | exportType={export_type} | quizId={getattr(quiz, 'id', None)} | {e}")
        raise
    except Exception as e:
        logger.error(f"formatForExport failed | exportType={export_type} | quizId={getattr(quiz, 'id', None)} | {e}")
        raise ValidationError(f"Export failed: {e}") from e


def export_to_string(quiz: Quiz, export_type: str = "json") -> str:
    """Render any export type as text; the JSON envelope is pretty-printed."""
    rendered = format_for_export(quiz, export_type)
    if isinstance(rendered, str):
        return rendered
    return json.dumps(rendered, ensure_ascii=False, indent=2, default=str)
