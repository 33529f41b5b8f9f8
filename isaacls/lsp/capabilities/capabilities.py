"""
LSP Capabilities Manager

This module manages LSP feature handlers (completion, diagnostics) using
a plugin architecture.

Design Principles:
1. Plugin-based (add capabilities without modifying core)
2. Type-safe (abstract base class)
3. Composable (multiple handlers for same feature)
4. Fault-isolated (a failing capability never fails the request)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from lsprotocol.types import (
    CompletionItem,
    CompletionList,
    CompletionParams,
    Diagnostic,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    LogMessageParams,
    MessageType,
    PublishDiagnosticsParams,
)


if TYPE_CHECKING:
    from isaacls.lsp.isaac_language_server import IsaacLanguageServer


class Capability(ABC):
    """
    Base class for all LSP capability handlers.

    Each capability can handle one LSP feature and decides whether it can
    handle a specific request based on context.
    """

    def __init__(self, server: IsaacLanguageServer) -> None:
        self.server = server
        self.registry = server.registry
        self.session = server.session

    def register(self) -> None:
        """
        Hook into the server (text sync hooks etc.).

        Called once during server creation.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this capability."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this capability does."""
        pass

    @abstractmethod
    async def can_handle(self, params) -> bool:
        """Check if the capability can handle the request."""
        pass


class CompletionCapability(Capability):
    """Base class for completion capabilities."""

    @abstractmethod
    async def can_handle(self, params: CompletionParams) -> bool:
        """
        Check if this capability can handle the completion request.

        Returns True if this capability should provide completions
        for the current context.
        """
        pass

    @abstractmethod
    async def complete(self, params: CompletionParams) -> CompletionList:
        """
        Provide completion items.

        Only called if can_handle() returns True.
        """
        pass

    async def resolve(self, item: CompletionItem) -> CompletionItem:
        """
        Attach details to a completion item the user selected.

        By default, returns the item unchanged.
        """
        return item


class DiagnosticsCapability(Capability):
    """Base class for capabilities that report problems in a document."""

    @abstractmethod
    async def can_handle(self, uri: str) -> bool:
        """Check if this capability should check the document."""
        pass

    @abstractmethod
    async def diagnose(self, uri: str) -> list[Diagnostic]:
        """Compute diagnostics for the current content of the document."""
        pass


class CapabilityManager:
    """
    Central manager for all LSP capabilities.

    Usage:
        manager = CapabilityManager(server)
        manager.register_all()

        # In request handlers
        await manager.handle_completion(params)
    """

    def __init__(
        self,
        server: IsaacLanguageServer,
        capabilities: dict[str, Capability] | None = None,
    ):
        self.server = server

        # Default capabilities
        if capabilities is None:
            from isaacls.lsp.capabilities.diagnostics_capabilities import (
                UppercaseDiagnosticsCapability,
            )
            from isaacls.lsp.capabilities.enum_capabilities import (
                EnumCompletionCapability,
            )

            capabilities = {
                "enum_completion": EnumCompletionCapability(server),
                "uppercase_diagnostics": UppercaseDiagnosticsCapability(server),
            }

        self.capabilities = capabilities
        self._registered = False

    def register_all(self) -> None:
        """Register all capabilities with the server."""
        if self._registered:
            return

        for capability in self.capabilities.values():
            capability.register()

        # Diagnostics follow the document content
        text_sync = self.server.text_sync_manager
        if text_sync and self.get_capabilities_by_type(DiagnosticsCapability):
            text_sync.add_on_open_hook(self._on_document_opened)
            text_sync.add_on_change_hook(self._on_document_changed)

        self._registered = True

    def get_capability(self, name: str) -> Capability | None:
        """Get a specific capability by name"""
        return self.capabilities.get(name)

    def get_capabilities_by_type(self, capability_type: type) -> list[Capability]:
        """Get all capabilities of a specific type (e.g., all CompletionCapability)."""
        return [
            cap
            for cap in self.capabilities.values()
            if isinstance(cap, capability_type)
        ]

    def _log_error(self, capability: Capability, action: str, error: Exception) -> None:
        self.server.window_log_message(
            LogMessageParams(
                type=MessageType.Error,
                message=f"{action} error in {capability.name}: "
                        f"{type(error).__name__}: {error}"
            )
        )

    async def handle_completion(self, params: CompletionParams) -> CompletionList:
        """
        Handle completion requests by delegating to capable handlers.

        This aggregates results from all completion capabilities that
        can handle the request.
        """
        all_items: list[CompletionItem] = []

        for capability in self.get_capabilities_by_type(CompletionCapability):
            try:
                if await capability.can_handle(params):
                    result = await capability.complete(params)  # pyright: ignore
                    all_items.extend(result.items)
            except Exception as e:
                self._log_error(capability, "Completion", e)

        return CompletionList(is_incomplete=False, items=all_items)

    async def handle_completion_resolve(self, item: CompletionItem) -> CompletionItem:
        """Resolve a completion item with the first capability that adds detail."""
        for capability in self.get_capabilities_by_type(CompletionCapability):
            try:
                resolved = await capability.resolve(item)  # pyright: ignore
                if resolved.detail is not None:
                    return resolved
            except Exception as e:
                self._log_error(capability, "Completion resolve", e)

        return item

    async def validate_document(self, uri: str) -> None:
        """Run every diagnostics capability on a document and publish the result."""
        diagnostics: list[Diagnostic] = []

        for capability in self.get_capabilities_by_type(DiagnosticsCapability):
            try:
                if await capability.can_handle(uri):
                    diagnostics.extend(await capability.diagnose(uri))  # pyright: ignore
            except Exception as e:
                self._log_error(capability, "Diagnostics", e)

        self.server.text_document_publish_diagnostics(
            PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
        )

    async def revalidate_all(self) -> None:
        """Re-run diagnostics on every open document."""
        for uri in list(self.server.workspace.text_documents):
            await self.validate_document(uri)

    async def _on_document_opened(self, params: DidOpenTextDocumentParams) -> None:
        await self.validate_document(params.text_document.uri)

    async def _on_document_changed(self, params: DidChangeTextDocumentParams) -> None:
        await self.validate_document(params.text_document.uri)
