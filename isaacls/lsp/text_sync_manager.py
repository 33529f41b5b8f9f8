"""
Text Synchronization Manager

Manages LSP text sync events and provides hook extension points
for the session and capabilities to react to document lifecycle events.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Awaitable, Callable

from lsprotocol.types import (
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DidSaveTextDocumentParams,
    LogMessageParams,
    MessageType,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_SAVE,
)

if TYPE_CHECKING:
    from isaacls.lsp.isaac_language_server import IsaacLanguageServer


# Type aliases for hook signatures
OnOpenHook = Callable[[DidOpenTextDocumentParams], Awaitable[None]]
OnChangeHook = Callable[[DidChangeTextDocumentParams], Awaitable[None]]
OnSaveHook = Callable[[DidSaveTextDocumentParams], Awaitable[None]]
OnCloseHook = Callable[[DidCloseTextDocumentParams], Awaitable[None]]


class TextSyncManager:
    """
    Manages text document synchronization and hook broadcasting.

    pygls keeps ls.workspace up to date on its own; this class only tells
    interested parties that something happened.

    - Hooks run in registration order
    - Errors are isolated (one hook failure doesn't affect others)
    - No return values (notifications, not requests)

    Usage:
        text_sync = TextSyncManager(server)
        text_sync.register_handlers()

        # Diagnostics re-run on every edit
        text_sync.add_on_change_hook(self._on_document_changed)

        # The session drops settings of closed documents
        text_sync.add_on_close_hook(session.on_document_closed)
    """

    def __init__(self, server: IsaacLanguageServer) -> None:
        self.server = server

        self._on_open_hooks: list[OnOpenHook] = []
        self._on_change_hooks: list[OnChangeHook] = []
        self._on_save_hooks: list[OnSaveHook] = []
        self._on_close_hooks: list[OnCloseHook] = []

    def add_on_open_hook(self, hook: OnOpenHook) -> None:
        """Register a hook for document open events."""
        self._on_open_hooks.append(hook)

    def add_on_change_hook(self, hook: OnChangeHook) -> None:
        """
        Register a hook for document change events.

        Change hooks run on EVERY keystroke. Keep them fast.
        """
        self._on_change_hooks.append(hook)

    def add_on_save_hook(self, hook: OnSaveHook) -> None:
        """Register a hook for document save events."""
        self._on_save_hooks.append(hook)

    def add_on_close_hook(self, hook: OnCloseHook) -> None:
        """Register a hook for document close events."""
        self._on_close_hooks.append(hook)

    async def _broadcast(self, event: str, hooks: list, params) -> None:
        """
        Call every hook with params.

        A failing hook is reported to the client and the remaining hooks
        still run.
        """
        for hook in hooks:
            try:
                await hook(params)
            except Exception as e:
                self.server.window_log_message(
                    LogMessageParams(
                        type=MessageType.Error,
                        message=f"Error in {event} hook "
                                f"{getattr(hook, '__name__', repr(hook))}: "
                                f"{type(e).__name__}: {e}"
                    )
                )

    async def _broadcast_on_open(self, params: DidOpenTextDocumentParams) -> None:
        await self._broadcast("on_open", self._on_open_hooks, params)

    async def _broadcast_on_change(self, params: DidChangeTextDocumentParams) -> None:
        await self._broadcast("on_change", self._on_change_hooks, params)

    async def _broadcast_on_save(self, params: DidSaveTextDocumentParams) -> None:
        await self._broadcast("on_save", self._on_save_hooks, params)

    async def _broadcast_on_close(self, params: DidCloseTextDocumentParams) -> None:
        await self._broadcast("on_close", self._on_close_hooks, params)

    def register_handlers(self) -> None:
        """
        Register LSP text synchronization handlers with the server.

        Call once during server creation, BEFORE capabilities are
        registered (so they can add hooks).
        """

        @self.server.feature(TEXT_DOCUMENT_DID_OPEN)
        async def did_open(
            ls: IsaacLanguageServer,
            params: DidOpenTextDocumentParams,
        ) -> None:
            ls.window_log_message(
                LogMessageParams(
                    type=MessageType.Log,
                    message=f"Document opened: {params.text_document.uri}"
                )
            )
            await self._broadcast_on_open(params)

        @self.server.feature(TEXT_DOCUMENT_DID_CHANGE)
        async def did_change(
            ls: IsaacLanguageServer,
            params: DidChangeTextDocumentParams,
        ) -> None:
            ls.window_log_message(
                LogMessageParams(
                    type=MessageType.Log,
                    message=f"Document changed: {params.text_document.uri}"
                )
            )
            await self._broadcast_on_change(params)

        @self.server.feature(TEXT_DOCUMENT_DID_SAVE)
        async def did_save(
            ls: IsaacLanguageServer,
            params: DidSaveTextDocumentParams,
        ) -> None:
            ls.window_log_message(
                LogMessageParams(
                    type=MessageType.Log,
                    message=f"Document saved: {params.text_document.uri}"
                )
            )
            await self._broadcast_on_save(params)

        @self.server.feature(TEXT_DOCUMENT_DID_CLOSE)
        async def did_close(
            ls: IsaacLanguageServer,
            params: DidCloseTextDocumentParams,
        ) -> None:
            ls.window_log_message(
                LogMessageParams(
                    type=MessageType.Log,
                    message=f"Document closed: {params.text_document.uri}"
                )
            )
            await self._broadcast_on_close(params)
