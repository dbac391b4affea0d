from __future__ import annotations

from dataclasses import dataclass

DEFAULT_IMPORT_ROOT = "Protos/DataService/Models"
DEFAULT_NAMESPACE_OPTION = "csharp_namespace"


@dataclass
class GeneratorOptions:
    output_dir: str
    # Directory prefix of every `import` path in generated files.
    import_root: str = DEFAULT_IMPORT_ROOT
    # Language option written in each file header.
    namespace_option: str = DEFAULT_NAMESPACE_OPTION
    # Order enum values numerically instead of comparing them as strings.
    numeric_enum_order: bool = False
