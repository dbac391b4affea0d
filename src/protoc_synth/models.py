from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class NamedType:
    """A scalar or message type name, e.g. ``int64`` or ``.a.b.Item``."""

    name: str

    def __str__(self) -> str:
        return self.name

    def qualifiers(self) -> Iterator[str]:
        """Yield the dotted namespace prefix of this type, if it has one."""
        if "." in self.name:
            yield self.name.rsplit(".", 1)[0]


@dataclass(frozen=True)
class RepeatedType:
    element: NamedType

    def __str__(self) -> str:
        return f"repeated {self.element}"

    def qualifiers(self) -> Iterator[str]:
        yield from self.element.qualifiers()


@dataclass(frozen=True)
class MapType:
    key: NamedType
    value: NamedType

    def __str__(self) -> str:
        return f"map<{self.key}, {self.value}>"

    def qualifiers(self) -> Iterator[str]:
        yield from self.key.qualifiers()
        yield from self.value.qualifiers()


TypeExpr = Union[NamedType, RepeatedType, MapType]


@dataclass(frozen=True)
class Field:
    name: str
    type: Optional[TypeExpr] = None

    @property
    def is_resolved(self) -> bool:
        return self.type is not None


@dataclass(frozen=True)
class Message:
    """A message, or an rpc descriptor naming a call and its input fields."""

    name: str
    fields: Tuple[Field, ...] = ()

    @property
    def is_resolved(self) -> bool:
        """True when the message has fields and every field has a type."""
        return bool(self.fields) and all(f.is_resolved for f in self.fields)


@dataclass(frozen=True)
class EnumEntry:
    label: str
    value: str


@dataclass(frozen=True)
class ProtoEnum:
    name: str
    entries: Tuple[EnumEntry, ...] = ()


# Namespace that always holds the well-known messages.
DEFAULT_NAMESPACE = "data.service.models.protobuf"

EMPTY_MESSAGE_NAME = "Empty"

# Type of the single field carried by every synthesized rpc response.
RESULT_CODE_TYPE = NamedType(f".{DEFAULT_NAMESPACE}.ResultCode")

TIMESTAMP_MESSAGE = Message(
    name="Timestamp",
    fields=(
        Field("seconds", NamedType("int64")),
        Field("nanos", NamedType("int64")),
    ),
)

EMPTY_MESSAGE = Message(name=EMPTY_MESSAGE_NAME)

WELL_KNOWN_MESSAGES: Tuple[Message, ...] = (TIMESTAMP_MESSAGE, EMPTY_MESSAGE)
