"""Namespace and identifier transformations shared by the model and generator."""

from __future__ import annotations

import re

NAMESPACE_SUFFIX = ".protobuf"
MODELS_NAMESPACE_SUFFIX = ".models.protobuf"
PROTO_FILE_EXTENSION = ".proto"


def strip_suffix(namespace: str) -> str:
    """Remove the ``.protobuf`` marker: ``svc.models.protobuf`` -> ``svc.models``."""
    return namespace.replace(NAMESPACE_SUFFIX, "")


def models_namespace(namespace: str) -> str:
    """Namespace holding request/response messages: ``svc.protobuf`` -> ``svc.models.protobuf``."""
    return namespace.replace(NAMESPACE_SUFFIX, MODELS_NAMESPACE_SUFFIX)


def namespace_to_file_stem(namespace: str) -> str:
    """Transliterate a namespace into its output file identity.

    ``svc.models.protobuf`` -> ``svc_models``; a fully qualified
    ``.a.b.protobuf`` -> ``a_b``.
    """
    stem = strip_suffix(namespace).replace(".", "_")
    return stem[1:] if stem.startswith("_") else stem


def namespace_to_file_name(namespace: str) -> str:
    return namespace_to_file_stem(namespace) + PROTO_FILE_EXTENSION


def title_case(text: str) -> str:
    """Capitalize each word, leaving all-uppercase words (acronyms) untouched.

    Digits inside a word belong to it: ``v2api`` -> ``V2api``.
    """

    def _word(match: re.Match) -> str:
        word = match.group(0)
        if word.isupper():
            return word
        return word[0].upper() + word[1:].lower()

    return re.sub(r"[^\W\d_][^\W_]*", _word, text)


def namespace_option_value(namespace: str) -> str:
    """``svc.models.protobuf`` -> ``Svc.Models``."""
    return title_case(strip_suffix(namespace))


def service_name(namespace: str) -> str:
    """``svc.orders.protobuf`` -> ``SvcOrders``."""
    return title_case(strip_suffix(namespace)).replace(".", "")
