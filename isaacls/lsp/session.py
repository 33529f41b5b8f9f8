"""
Session Context

Per-session state that request handlers need: what the connected client
supports, and the settings that apply to each open document.

Lives on the server instance and is passed to capabilities explicitly,
so nothing in the completion core depends on module-level state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lsprotocol.types import (
    ClientCapabilities,
    ConfigurationItem,
    ConfigurationParams,
    DidCloseTextDocumentParams,
    LogMessageParams,
    MessageType,
)

from isaacls.config.settings import CONFIGURATION_SECTION, ServerSettings

if TYPE_CHECKING:
    from isaacls.lsp.isaac_language_server import IsaacLanguageServer


class SessionContext:
    """
    Client capabilities and settings for one server session.

    Usage:
        # On initialize
        session.update_client_capabilities(params.capabilities)

        # In a capability
        settings = await session.get_document_settings(uri)
    """

    def __init__(self, server: IsaacLanguageServer) -> None:
        self.server = server

        # Client capabilities (filled on initialize)
        self.has_configuration_capability = False
        self.has_workspace_folder_capability = False
        self.has_diagnostic_related_information_capability = False

        # Used when the client can't answer workspace/configuration
        self.global_settings = ServerSettings()

        # Settings of open documents, fetched lazily
        self._document_settings: dict[str, ServerSettings] = {}

    def update_client_capabilities(self, capabilities: ClientCapabilities | None) -> None:
        """Record which optional protocol features the client supports."""
        workspace = capabilities.workspace if capabilities else None
        text_document = capabilities.text_document if capabilities else None
        publish_diagnostics = text_document.publish_diagnostics if text_document else None

        self.has_configuration_capability = bool(workspace and workspace.configuration)
        self.has_workspace_folder_capability = bool(
            workspace and workspace.workspace_folders
        )
        self.has_diagnostic_related_information_capability = bool(
            publish_diagnostics and publish_diagnostics.related_information
        )

    async def get_document_settings(self, uri: str) -> ServerSettings:
        """
        Get the settings that apply to a document.

        Asks the client once per document and caches the answer until the
        configuration changes or the document is closed.
        """
        if not self.has_configuration_capability:
            return self.global_settings

        settings = self._document_settings.get(uri)
        if settings is not None:
            return settings

        try:
            result = await self.server.workspace_configuration_async(
                ConfigurationParams(
                    items=[ConfigurationItem(scope_uri=uri, section=CONFIGURATION_SECTION)]
                )
            )
        except Exception as e:
            self.server.window_log_message(
                LogMessageParams(
                    type=MessageType.Warning,
                    message=f"Could not fetch settings for {uri}: {e}",
                )
            )
            # Not cached so the next request asks again
            return ServerSettings()

        settings = ServerSettings.from_dict(result[0] if result else None)
        self._document_settings[uri] = settings
        return settings

    def apply_configuration_change(self, settings: Any) -> None:
        """
        Apply a workspace/didChangeConfiguration notification.

        Clients that answer workspace/configuration are asked again per
        document; for the others the pushed settings become global.
        """
        if self.has_configuration_capability:
            self._document_settings.clear()
            return

        section = settings.get(CONFIGURATION_SECTION) if isinstance(settings, dict) else None
        self.global_settings = ServerSettings.from_dict(section)

    def forget_document(self, uri: str) -> None:
        """Drop cached settings of a closed document."""
        self._document_settings.pop(uri, None)

    async def on_document_closed(self, params: DidCloseTextDocumentParams) -> None:
        """Text sync hook: only keep settings for open documents."""
        self.forget_document(params.text_document.uri)
