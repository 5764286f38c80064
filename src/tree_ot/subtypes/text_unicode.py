"""`text-unicode` subtype.

An edit is a list of components walked left to right over the string:

- ``int``: skip that many code points,
- ``str``: insert the text at the cursor,
- ``{"d": int | str}``: delete that many code points (a string counts by
  its length).

Text after the last component is kept.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from tree_ot.core.constants import TEXT_TYPE_NAME, TEXT_TYPE_URI
from tree_ot.core.errors import ValidationError


class TextUnicodeType:
    name = TEXT_TYPE_NAME
    uri = TEXT_TYPE_URI

    def apply(self, snapshot: object, op: object) -> str:
        if not isinstance(snapshot, str):
            raise ValidationError(
                f"text-unicode edit needs a string leaf, got {type(snapshot).__name__}"
            )
        if isinstance(op, (str, bytes)) or not isinstance(op, Sequence):
            raise ValidationError("text-unicode edit must be a list of components")

        parts: list[str] = []
        cursor = 0
        for component in op:
            if isinstance(component, bool):
                raise ValidationError(f"invalid text-unicode component: {component!r}")
            if isinstance(component, int):
                if component < 0 or cursor + component > len(snapshot):
                    raise ValidationError(
                        f"text-unicode skip {component} out of range at offset {cursor}"
                    )
                parts.append(snapshot[cursor : cursor + component])
                cursor += component
                continue
            if isinstance(component, str):
                parts.append(component)
                continue
            if isinstance(component, Mapping) and set(component) == {"d"}:
                cursor += _delete_length(component["d"], snapshot=snapshot, cursor=cursor)
                continue
            raise ValidationError(f"invalid text-unicode component: {component!r}")

        parts.append(snapshot[cursor:])
        return "".join(parts)


def _delete_length(raw: object, *, snapshot: str, cursor: int) -> int:
    if isinstance(raw, str):
        length = len(raw)
    elif isinstance(raw, int) and not isinstance(raw, bool):
        length = raw
    else:
        raise ValidationError(f"invalid text-unicode delete: {raw!r}")
    if length < 0 or cursor + length > len(snapshot):
        raise ValidationError(
            f"text-unicode delete {length} out of range at offset {cursor}"
        )
    return length
