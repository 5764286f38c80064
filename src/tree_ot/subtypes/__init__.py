"""Bundled edit subtypes."""

from __future__ import annotations

from tree_ot.core.subtypes import SubtypeRegistry, default_registry
from tree_ot.subtypes.number import NumberType
from tree_ot.subtypes.text_unicode import TextUnicodeType


def register_default_subtypes(registry: SubtypeRegistry | None = None) -> None:
    """Register `number` and `text-unicode` (default: process-wide registry)."""

    target = registry if registry is not None else default_registry
    target.register(NumberType())
    target.register(TextUnicodeType())


__all__ = ["NumberType", "TextUnicodeType", "register_default_subtypes"]
