"""The schema model: namespace-keyed messages, enums and rpcs."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from protoc_synth.models import (
    DEFAULT_NAMESPACE,
    RESULT_CODE_TYPE,
    WELL_KNOWN_MESSAGES,
    Field,
    Message,
    ProtoEnum,
)
from protoc_synth.naming import models_namespace

logger = logging.getLogger(__name__)

RESPONSE_RESULT_FIELD = "result"


def response_name(rpc_name: str) -> str:
    return f"{rpc_name}Response"


def request_name(rpc_name: str) -> str:
    return f"{rpc_name}Request"


class Proto:
    """Insertion-ordered collections of schema declarations per namespace.

    Insertion order is rendering order, both across namespaces and within
    each namespace's list.
    """

    def __init__(self) -> None:
        self.messages: Dict[str, List[Message]] = {}
        self.enums: Dict[str, List[ProtoEnum]] = {}
        self.rpcs: Dict[str, List[Message]] = {}

        for message in WELL_KNOWN_MESSAGES:
            self.add_message(DEFAULT_NAMESPACE, message)

    def add_message(self, namespace: str, message: Message) -> None:
        self.messages.setdefault(namespace, []).append(message)

    def add_enum(self, namespace: str, enum: ProtoEnum) -> None:
        self.enums.setdefault(namespace, []).append(enum)

    def find_message(self, namespace: str, name: str) -> Optional[Message]:
        for message in self.messages.get(namespace, []):
            if message.name == name:
                return message
        return None

    def has_rpc(self, name: str) -> bool:
        """True if an rpc with this name is registered in any namespace."""
        return any(rpc.name == name for rpcs in self.rpcs.values() for rpc in rpcs)

    def add_rpc(self, namespace: str, rpc: Message) -> None:
        """Register an rpc and synthesize its request/response messages.

        Rpc names are unique across all namespaces; registering a name a
        second time does nothing.
        """
        if self.has_rpc(rpc.name):
            logger.debug("Rpc '%s' already registered, ignoring", rpc.name)
            return

        models = models_namespace(namespace)

        response = response_name(rpc.name)
        if self.find_message(models, response) is None:
            self.add_message(
                models,
                Message(response, (Field(RESPONSE_RESULT_FIELD, RESULT_CODE_TYPE),)),
            )

        if rpc.fields:
            request = request_name(rpc.name)
            if self.find_message(models, request) is None:
                self.add_message(models, Message(request, tuple(rpc.fields)))

        self.rpcs.setdefault(namespace, []).append(rpc)
