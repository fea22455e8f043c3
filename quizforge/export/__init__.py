"""
Quiz export renderers.

Each renderer module registers itself with the dispatcher on import:
- json:          JSON envelope (dict)
- csv:           fixed-header CSV
- moodle, gift:  Moodle GIFT
- text, plain:   human-readable listing
"""

from .base import (
    EXPORTERS,
    export_to_string,
    format_for_export,
    register_exporter,
    supported_export_types,
)

# Import renderers to trigger registration
from . import csv_export
from . import gift
from . import json_export
from . import plain_text

SUPPORTED_EXPORT_TYPES = tuple(supported_export_types())

__all__ = [
    "EXPORTERS",
    "SUPPORTED_EXPORT_TYPES",
    "export_to_string",
    "format_for_export",
    "register_exporter",
    "supported_export_types",
]
