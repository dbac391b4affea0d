"""Parser for field type expressions supplied by the front-end.

Grammar::

    type     := named | "repeated" named | "map" "<" named "," named ">"
    named    := ["."] ident ("." ident)*
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Tuple

from protoc_synth.models import Field, MapType, NamedType, RepeatedType, TypeExpr

_NAMED = r"\.?[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*"

_NAMED_RE = re.compile(rf"^({_NAMED})$")
_REPEATED_RE = re.compile(rf"^repeated\s+({_NAMED})$")
_MAP_RE = re.compile(rf"^map\s*<\s*({_NAMED})\s*,\s*({_NAMED})\s*>$")

_KEYWORDS = {"repeated", "map"}


class TypeExpressionError(ValueError):
    """Raised when a field type does not match the type grammar."""

    def __init__(self, text: str, field_name: str | None = None):
        self.text = text
        self.field_name = field_name
        if field_name:
            super().__init__(f"Field '{field_name}': unrecognised type expression {text!r}")
        else:
            super().__init__(f"Unrecognised type expression {text!r}")


def parse_type_expression(text: Optional[str], field_name: str | None = None) -> Optional[TypeExpr]:
    """Parse a type expression. Empty or missing text means unresolved (None)."""
    if text is None:
        return None
    text = text.strip()
    if not text:
        return None

    match = _REPEATED_RE.match(text)
    if match:
        return RepeatedType(NamedType(match.group(1)))

    match = _MAP_RE.match(text)
    if match:
        return MapType(NamedType(match.group(1)), NamedType(match.group(2)))

    match = _NAMED_RE.match(text)
    if match and text not in _KEYWORDS:
        return NamedType(match.group(1))

    raise TypeExpressionError(text, field_name)


def parse_field(name: str, type_text: Optional[str]) -> Field:
    return Field(name=name, type=parse_type_expression(type_text, field_name=name))


def parse_fields(pairs: Iterable[Tuple[str, Optional[str]]]) -> Tuple[Field, ...]:
    """Build fields from ``(name, type_text)`` pairs, keeping their order."""
    return tuple(parse_field(name, type_text) for name, type_text in pairs)
