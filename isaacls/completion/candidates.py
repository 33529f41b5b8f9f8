"""
Candidate producer.

Turns a completion context into the ordered list of names to offer:
every namespace for a GLOBAL context, the members of one namespace for a
WITHIN_NAMESPACE context.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from isaacls.context.types import CompletionContext, ContextKind
from isaacls.registry.registry import NamespaceRegistry


class CandidateKind(Enum):
    NAMESPACE = "namespace"
    MEMBER = "member"


@dataclass(frozen=True)
class Candidate:
    """
    One proposed completion.

    payload carries what the detail resolver needs later: the namespace
    name for NAMESPACE candidates, the integer value for MEMBER ones.
    detail stays None until the candidate is resolved.
    """

    label: str
    kind: CandidateKind
    payload: str | int | None
    detail: str | None = None


def produce_candidates(
    registry: NamespaceRegistry, context: CompletionContext
) -> list[Candidate]:
    """Build the candidates for a context, in registry / declaration order."""
    if context.kind is ContextKind.WITHIN_NAMESPACE:
        namespace = registry.get_namespace(context.namespace)
        if namespace is not None:
            return [
                Candidate(member.name, CandidateKind.MEMBER, member.value)
                for member in namespace.members
                if not (namespace.hide_zero and member.value == 0)
            ]

    return [
        Candidate(name, CandidateKind.NAMESPACE, name)
        for name in registry.list_namespace_names()
    ]
