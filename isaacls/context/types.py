from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ContextKind(Enum):
    """Scope of a completion request."""

    GLOBAL = "global"                       # offer every namespace
    WITHIN_NAMESPACE = "within_namespace"   # offer members of one namespace


@dataclass(frozen=True)
class CompletionContext:
    """
    Completion scope inferred from the text before the cursor.

    A WITHIN_NAMESPACE context always names a registered namespace; the
    detector falls back to GLOBAL otherwise.
    """

    kind: ContextKind
    namespace: str | None = None

    @classmethod
    def global_scope(cls) -> CompletionContext:
        return cls(ContextKind.GLOBAL)

    @classmethod
    def within_namespace(cls, name: str) -> CompletionContext:
        return cls(ContextKind.WITHIN_NAMESPACE, name)

    @property
    def is_global(self) -> bool:
        return self.kind is ContextKind.GLOBAL
