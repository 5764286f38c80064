"""`number` subtype: edit payload is added to the leaf."""

from __future__ import annotations

from tree_ot.core.constants import NUMBER_TYPE_NAME
from tree_ot.core.errors import ValidationError

type Number = int | float


class NumberType:
    name = NUMBER_TYPE_NAME

    def apply(self, snapshot: object, op: object) -> Number:
        if not _is_number(snapshot):
            raise ValidationError(
                f"number edit needs a numeric leaf, got {type(snapshot).__name__}"
            )
        if not _is_number(op):
            raise ValidationError(f"number edit payload must be numeric, got {op!r}")
        return snapshot + op  # type: ignore[operator]


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
