"""Load a schema model from the JSON document produced by a front-end.

Document layout::

    {
      "enums":    {"<namespace>": [{"name": ..., "entries": [[label, value], ...]}]},
      "messages": {"<namespace>": [{"name": ..., "fields": [{"name": ..., "type": ...}]}]},
      "rpcs":     {"<namespace>": [{"name": ..., "fields": [...]}]}
    }

All sections are optional. Rpcs are registered last so their synthesized
request/response messages follow the explicitly listed ones.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

from protoc_synth.models import EnumEntry, Field, Message, ProtoEnum
from protoc_synth.parser.type_parser import TypeExpressionError, parse_field
from protoc_synth.schema import Proto


class ModelLoadError(Exception):
    """Raised when a model document does not have the expected structure."""


def load_model(file_path: str) -> Proto:
    """Read a JSON model document and build a Proto from it."""
    text = Path(file_path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ModelLoadError(f"{file_path}: invalid JSON: {e}") from e
    return build_model(data)


def build_model(data: Any) -> Proto:
    if not isinstance(data, dict):
        raise ModelLoadError("Model document must be a JSON object")

    proto = Proto()

    for namespace, items in _namespaces(data, "enums"):
        for index, item in enumerate(items):
            proto.add_enum(namespace, _parse_enum(item, f"enums.{namespace}[{index}]"))

    for namespace, items in _namespaces(data, "messages"):
        for index, item in enumerate(items):
            proto.add_message(namespace, _parse_message(item, f"messages.{namespace}[{index}]"))

    for namespace, items in _namespaces(data, "rpcs"):
        for index, item in enumerate(items):
            proto.add_rpc(namespace, _parse_message(item, f"rpcs.{namespace}[{index}]"))

    return proto


def _namespaces(data: Dict[str, Any], section: str) -> List[Tuple[str, List[Any]]]:
    entries = data.get(section, {})
    if not isinstance(entries, dict):
        raise ModelLoadError(f"'{section}' must map namespaces to lists")

    result = []
    for namespace, items in entries.items():
        if not isinstance(items, list):
            raise ModelLoadError(f"{section}.{namespace}: expected a list")
        result.append((namespace, items))
    return result


def _require_name(item: Any, path: str) -> str:
    if not isinstance(item, dict):
        raise ModelLoadError(f"{path}: expected an object")
    name = item.get("name")
    if not isinstance(name, str) or not name:
        raise ModelLoadError(f"{path}: missing 'name'")
    return name


def _parse_enum(item: Any, path: str) -> ProtoEnum:
    name = _require_name(item, path)

    entries: List[EnumEntry] = []
    for index, entry in enumerate(item.get("entries", [])):
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise ModelLoadError(f"{path}.entries[{index}]: expected [label, value]")
        label, value = entry
        entries.append(EnumEntry(label=str(label), value=str(value)))

    return ProtoEnum(name=name, entries=tuple(entries))


def _parse_message(item: Any, path: str) -> Message:
    name = _require_name(item, path)

    fields: List[Field] = []
    for index, raw in enumerate(item.get("fields", [])):
        field_path = f"{path}.fields[{index}]"
        field_name = _require_name(raw, field_path)
        type_text = raw.get("type")
        if type_text is not None and not isinstance(type_text, str):
            raise ModelLoadError(f"{field_path}: 'type' must be a string")
        try:
            fields.append(parse_field(field_name, type_text))
        except TypeExpressionError as e:
            raise ModelLoadError(f"{field_path}: {e}") from e

    return Message(name=name, fields=tuple(fields))
