from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List

from protoc_synth.config import DEFAULT_IMPORT_ROOT, GeneratorOptions
from protoc_synth.generator.proto_generator import generate_proto_files
from protoc_synth.naming import namespace_to_file_name
from protoc_synth.parser.model_loader import ModelLoadError, load_model
from protoc_synth.schema import Proto
from protoc_synth.text.block_generator import BlockError


def _model_namespaces(proto: Proto) -> List[str]:
    namespaces: List[str] = []
    for mapping in (proto.enums, proto.messages, proto.rpcs):
        for namespace in mapping:
            if namespace not in namespaces:
                namespaces.append(namespace)
    return namespaces


def _clean_outputs(proto: Proto, output_dir: str) -> None:
    """Remove existing output files so appended phases start from scratch."""
    for namespace in _model_namespaces(proto):
        file_path = os.path.join(output_dir, namespace_to_file_name(namespace))
        if os.path.exists(file_path):
            os.remove(file_path)
            print(f"  Removed {file_path}")


def run(
    model_path: str,
    output_dir: str,
    import_root: str = DEFAULT_IMPORT_ROOT,
    numeric_enum_order: bool = False,
    clean: bool = False,
) -> List[str]:
    """Main pipeline: load model, generate proto files."""
    try:
        proto = load_model(model_path)
    except ModelLoadError as e:
        print(f"FATAL: {e}", file=sys.stderr)
        sys.exit(1)

    namespaces = _model_namespaces(proto)
    print(f"Loaded model with {len(namespaces)} namespace(s)")

    if clean:
        _clean_outputs(proto, output_dir)

    options = GeneratorOptions(
        output_dir=output_dir,
        import_root=import_root,
        numeric_enum_order=numeric_enum_order,
    )
    try:
        generated = generate_proto_files(proto, options)
    except BlockError as e:
        print(f"FATAL: {e}", file=sys.stderr)
        sys.exit(1)

    for f in generated:
        print(f"  Generated: {f}")

    print("Done!")
    return generated


def main():
    parser = argparse.ArgumentParser(
        description="Generate proto3 schema files from a namespace-keyed model",
    )
    parser.add_argument(
        "--model",
        required=True,
        help="Path to the JSON model document",
    )
    parser.add_argument(
        "--output-dir",
        required=True,
        help="Directory the .proto files are appended to",
    )
    parser.add_argument(
        "--import-root",
        default=DEFAULT_IMPORT_ROOT,
        help=f"Path prefix for import statements (default: {DEFAULT_IMPORT_ROOT})",
    )
    parser.add_argument(
        "--numeric-enum-order",
        action="store_true",
        help="Order enum values numerically instead of as strings",
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Delete existing output files for the model's namespaces first",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    run(
        args.model,
        args.output_dir,
        import_root=args.import_root,
        numeric_enum_order=args.numeric_enum_order,
        clean=args.clean,
    )


if __name__ == "__main__":
    main()
