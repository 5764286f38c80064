"""Core constants."""

from __future__ import annotations

NUMBER_TYPE_NAME = "number"
TEXT_TYPE_NAME = "text-unicode"
TEXT_TYPE_URI = "http://sharejs.org/types/text-unicode"

# Document files with these suffixes are read and written as JSON, others as YAML.
JSON_SUFFIXES: frozenset[str] = frozenset({".json"})

DIFF_MODES: tuple[str, ...] = ("full", "summary", "none")
DIFF_PREVIEW_LIMIT = 120
