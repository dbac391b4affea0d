"""Render a schema model into proto3 files, one file per namespace.

Generation runs in three phases over the whole model: enums, then messages,
then services. Each phase appends its output for a namespace to that
namespace's file, so a namespace with enums, messages and rpcs ends up with
its declarations in that order under a single header.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

from jinja2 import Environment, FileSystemLoader

from protoc_synth.config import GeneratorOptions
from protoc_synth.models import (
    DEFAULT_NAMESPACE,
    EMPTY_MESSAGE_NAME,
    EnumEntry,
    Message,
    ProtoEnum,
)
from protoc_synth.naming import (
    models_namespace,
    namespace_option_value,
    namespace_to_file_name,
    service_name,
)
from protoc_synth.schema import Proto, request_name, response_name
from protoc_synth.text.block import BlockKind, NewLineKind
from protoc_synth.text.block_generator import BlockGenerator

logger = logging.getLogger(__name__)

ZERO_VALUE = "0"


def _get_template_env() -> Environment:
    template_dir = Path(__file__).parent.parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
    )


def _as_number(value: str) -> Optional[int]:
    """Parse decimal (leading zeros allowed) or 0x/0o/0b prefixed values."""
    text = value.strip().lstrip("+-").lower()
    base = 0 if text.startswith(("0x", "0o", "0b")) else 10
    try:
        return int(value, base)
    except ValueError:
        return None


def is_renderable(message: Message) -> bool:
    """Messages are emitted only when fully resolved, except the field-less sentinel."""
    if message.name == EMPTY_MESSAGE_NAME and not message.fields:
        return True
    return message.is_resolved


def extract_imports(messages: Iterable[Message]) -> Dict[str, None]:
    """Collect the proto files referenced by the field types of the messages.

    Returns an insertion-ordered set of file names.
    """
    imports: Dict[str, None] = {}
    for message in messages:
        for field in message.fields:
            if field.type is None:
                continue
            for qualifier in field.type.qualifiers():
                imports[namespace_to_file_name(qualifier)] = None
    return imports


class ProtoGenerator(BlockGenerator):
    """Writes the proto3 files for a Proto model."""

    def __init__(self, proto: Proto, options: GeneratorOptions):
        super().__init__()
        self.proto = proto
        self.options = options
        self.generated_files: List[str] = []
        self._env = _get_template_env()

    def generate_files(self) -> List[str]:
        """Run all three phases and return the paths of the files written."""
        os.makedirs(self.options.output_dir, exist_ok=True)

        visited = self._generate_enum_namespaces()
        self._generate_message_namespaces(visited)
        self._generate_rpc_namespaces(visited)

        return self.generated_files

    # -- output --

    def output_path(self, namespace: str) -> str:
        return os.path.join(self.options.output_dir, namespace_to_file_name(namespace))

    def _write_output(self, namespace: str) -> None:
        """Append the rendered blocks to the namespace's file, then start over."""
        output = self.generate()
        file_path = self.output_path(namespace)

        with open(file_path, "a", encoding="utf-8") as stream:
            stream.write(output)

        if file_path not in self.generated_files:
            self.generated_files.append(file_path)
        logger.info("Wrote %d characters to %s", len(output), file_path)

        self.reset()

    # -- header and imports --

    def generate_header(self, namespace: str) -> None:
        template = self._env.get_template("proto_header.proto.j2")
        source = template.render(
            namespace_option=self.options.namespace_option,
            namespace_value=namespace_option_value(namespace),
            package=namespace,
        )

        self.push_block(BlockKind.HEADER, namespace)
        # The template's trailing newline becomes the blank line after `package`.
        self.write_lines(source)
        self.pop_block()

    def generate_imports(self, namespace: str, imports: Iterable[str]) -> None:
        own_file = namespace_to_file_name(namespace)

        self.push_block(BlockKind.USINGS, namespace)
        for file_name in imports:
            if file_name == own_file:
                continue
            self.write_line(f'import "{self.options.import_root}/{file_name}";')
        self.pop_block(NewLineKind.ALWAYS)

    # -- enums --

    def _sort_enum_entries(self, enum_name: str, entries: List[EnumEntry]) -> List[EnumEntry]:
        by_string = sorted(entries, key=lambda e: (e.value != ZERO_VALUE, e.value))

        numbers = [_as_number(e.value) for e in entries]
        if any(n is None for n in numbers):
            if self.options.numeric_enum_order:
                logger.warning("Enum '%s' has non-numeric values, ordering them as strings", enum_name)
            return by_string

        number_of = {id(e): n for e, n in zip(entries, numbers)}
        by_number = sorted(entries, key=lambda e: (e.value != ZERO_VALUE, number_of[id(e)]))

        if self.options.numeric_enum_order:
            return by_number
        if by_number != by_string:
            logger.warning(
                "Enum '%s' values are ordered as strings, which differs from numeric order",
                enum_name,
            )
        return by_string

    def prepare_enum(self, enum: ProtoEnum) -> List[EnumEntry]:
        """Return the entries to emit, writing `allow_alias` if values repeat.

        proto3 requires a zero value, so `{Enum}Unknown = 0` is added when the
        enum has none. The zero entry always comes first.
        """
        values = [e.value for e in enum.entries]
        if len(values) != len(set(values)):
            self.write_line("option allow_alias = true;")

        entries = list(enum.entries)
        if ZERO_VALUE not in values:
            entries.append(EnumEntry(f"{enum.name}Unknown", ZERO_VALUE))

        return self._sort_enum_entries(enum.name, entries)

    def generate_enum_items(self, enum: ProtoEnum, entries: List[EnumEntry], seen_labels: Set[str]) -> None:
        # Enum values share one scope per file; qualify labels already used.
        for entry in entries:
            if entry.label in seen_labels:
                self.write_line(f"{enum.name}{entry.label} = {entry.value};")
            else:
                seen_labels.add(entry.label)
                self.write_line(f"{entry.label} = {entry.value};")

    def generate_enum(self, enum: ProtoEnum, seen_labels: Set[str]) -> None:
        self.push_block(BlockKind.ENUM, enum)
        self.write(f"enum {enum.name} ")
        self.write_open_brace_and_indent()

        entries = self.prepare_enum(enum)
        self.generate_enum_items(enum, entries, seen_labels)

        self.unindent_and_write_close_brace()
        self.pop_block(NewLineKind.ALWAYS)

    def _generate_enum_namespaces(self) -> Set[str]:
        visited: Set[str] = set()

        for namespace, enums in self.proto.enums.items():
            logger.debug("Generating %d enum(s) for %s", len(enums), namespace)
            visited.add(namespace)
            self.generate_header(namespace)

            seen_labels: Set[str] = set()
            for enum in enums:
                self.generate_enum(enum, seen_labels)

            self._write_output(namespace)

        return visited

    # -- messages --

    def generate_message_fields(self, message: Message) -> None:
        for number, field in enumerate(message.fields, start=1):
            self.write_line(f"{field.type} {field.name} = {number};")

    def generate_message(self, message: Message) -> None:
        self.push_block(BlockKind.MESSAGE, message)
        self.write(f"message {message.name} ")
        self.write_open_brace_and_indent()

        self.generate_message_fields(message)

        self.unindent_and_write_close_brace()
        self.pop_block(NewLineKind.ALWAYS)

    def _generate_message_namespaces(self, visited: Set[str]) -> None:
        for namespace, messages in self.proto.messages.items():
            logger.debug("Generating %d message(s) for %s", len(messages), namespace)
            if namespace not in visited:
                visited.add(namespace)
                self.generate_header(namespace)

            self.generate_imports(namespace, extract_imports(messages))

            for message in messages:
                if is_renderable(message):
                    self.generate_message(message)
                else:
                    logger.debug("Skipping message '%s' in %s: no resolved fields", message.name, namespace)

            self._write_output(namespace)

    # -- services --

    def generate_rpc(self, models: str, rpc: Message) -> None:
        self.push_block(BlockKind.METHOD, rpc)
        self.write(f"rpc {rpc.name}")
        if rpc.is_resolved:
            self.write(f"(.{models}.{request_name(rpc.name)})")
        else:
            self.write(f"(.{DEFAULT_NAMESPACE}.{EMPTY_MESSAGE_NAME})")
        self.write(f" returns (.{models}.{response_name(rpc.name)});")
        self.new_line()
        self.pop_block()

    def generate_service(self, namespace: str, rpcs: List[Message]) -> None:
        models = models_namespace(namespace)

        self.push_block(BlockKind.SERVICE, namespace)
        self.write(f"service {service_name(namespace)} ")
        self.write_open_brace_and_indent()

        for rpc in rpcs:
            self.generate_rpc(models, rpc)

        self.unindent_and_write_close_brace()
        self.pop_block()

    def _generate_rpc_namespaces(self, visited: Set[str]) -> None:
        for namespace, rpcs in self.proto.rpcs.items():
            logger.debug("Generating service with %d rpc(s) for %s", len(rpcs), namespace)
            if namespace not in visited:
                visited.add(namespace)
                self.generate_header(namespace)

            imports = [
                namespace_to_file_name(DEFAULT_NAMESPACE),
                namespace_to_file_name(models_namespace(namespace)),
            ]
            self.generate_imports(namespace, dict.fromkeys(imports))

            self.generate_service(namespace, rpcs)

            self._write_output(namespace)


def generate_proto_files(proto: Proto, options: GeneratorOptions) -> List[str]:
    """Generate proto files for the whole model.

    Returns list of generated file paths.
    """
    return ProtoGenerator(proto, options).generate_files()
