from __future__ import annotations

from typing import TYPE_CHECKING

from pygls.lsp.server import LanguageServer

from isaacls.registry.registry import NamespaceRegistry

if TYPE_CHECKING:
    from isaacls.lsp.capabilities.capabilities import CapabilityManager
    from isaacls.lsp.session import SessionContext
    from isaacls.lsp.text_sync_manager import TextSyncManager


class IsaacLanguageServer(LanguageServer):
    """
    Language Server with the Isaac API enum registry attached.

    Attributes:
        registry: Enum namespaces offered for completion (read-only)
        session: Client capabilities and per-document settings
    """

    def __init__(self, name: str, version: str, registry: NamespaceRegistry):
        super().__init__(name, version)

        self.registry = registry
        self.session: SessionContext | None = None
        self.capability_manager: CapabilityManager | None = None
        self.text_sync_manager: TextSyncManager | None = None
