import uuid

from lsprotocol.types import (
    COMPLETION_ITEM_RESOLVE,
    INITIALIZE,
    INITIALIZED,
    TEXT_DOCUMENT_COMPLETION,
    WORKSPACE_DID_CHANGE_CONFIGURATION,
    WORKSPACE_DID_CHANGE_WATCHED_FILES,
    WORKSPACE_DID_CHANGE_WORKSPACE_FOLDERS,
    CompletionItem,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    DidChangeConfigurationParams,
    DidChangeWatchedFilesParams,
    DidChangeWorkspaceFoldersParams,
    InitializedParams,
    InitializeParams,
    LogMessageParams,
    MessageType,
    Registration,
    RegistrationParams,
    ShowMessageParams,
)

from isaacls.lsp.capabilities.capabilities import CapabilityManager
from isaacls.lsp.isaac_language_server import IsaacLanguageServer
from isaacls.lsp.session import SessionContext
from isaacls.lsp.text_sync_manager import TextSyncManager
from isaacls.registry.registry import NamespaceRegistry, load_registry

SERVER_NAME = "isaacls"
SERVER_VERSION = "0.1.0"


def create_server(registry: NamespaceRegistry | None = None) -> IsaacLanguageServer:
    """
    Creates and returns a configured Language Server instance.

    The enum registry is loaded here, once, and shared read-only by every
    request for the lifetime of the process.

    Args:
        registry: Registry to serve instead of the bundled enums
    """
    server = IsaacLanguageServer(
        SERVER_NAME,
        SERVER_VERSION,
        registry if registry is not None else load_registry(),
    )
    server.session = SessionContext(server)

    # TextSyncManager BEFORE capabilities so they can register hooks
    server.text_sync_manager = TextSyncManager(server)
    server.text_sync_manager.register_handlers()
    server.text_sync_manager.add_on_close_hook(server.session.on_document_closed)

    server.capability_manager = CapabilityManager(server)
    server.capability_manager.register_all()

    @server.feature(INITIALIZE)
    async def initialize(ls: IsaacLanguageServer, params: InitializeParams):
        """Record what the client supports."""
        ls.session.update_client_capabilities(params.capabilities)

        ls.window_log_message(
            LogMessageParams(
                type=MessageType.Info,
                message=f"Loaded {len(ls.registry)} enum namespaces"
            )
        )

    @server.feature(INITIALIZED)
    async def initialized(ls: IsaacLanguageServer, params: InitializedParams):
        if ls.session.has_configuration_capability:
            # Ask the client to notify us about all configuration changes
            await ls.client_register_capability_async(
                RegistrationParams(
                    registrations=[
                        Registration(
                            id=str(uuid.uuid4()),
                            method=WORKSPACE_DID_CHANGE_CONFIGURATION,
                        )
                    ]
                )
            )

        ls.window_show_message(
            ShowMessageParams(
                type=MessageType.Info, message="Isaac Repentance API Running ..."
            )
        )

    @server.feature(WORKSPACE_DID_CHANGE_WORKSPACE_FOLDERS)
    async def did_change_workspace_folders(
        ls: IsaacLanguageServer, params: DidChangeWorkspaceFoldersParams
    ):
        if ls.session.has_workspace_folder_capability:
            ls.window_log_message(
                LogMessageParams(
                    type=MessageType.Log,
                    message="Workspace folder change event received."
                )
            )

    @server.feature(WORKSPACE_DID_CHANGE_WATCHED_FILES)
    async def did_change_watched_files(
        ls: IsaacLanguageServer, params: DidChangeWatchedFilesParams
    ):
        ls.window_log_message(
            LogMessageParams(
                type=MessageType.Log,
                message=f"Received a file change event ({len(params.changes)} files)",
            )
        )

    @server.feature(WORKSPACE_DID_CHANGE_CONFIGURATION)
    async def did_change_configuration(
        ls: IsaacLanguageServer, params: DidChangeConfigurationParams
    ):
        ls.session.apply_configuration_change(params.settings)
        ls.window_log_message(
            LogMessageParams(type=MessageType.Info, message="Configuration updated")
        )

        # Settings may change the diagnostics of every open document
        if ls.capability_manager:
            await ls.capability_manager.revalidate_all()

    # Register aggregated handlers
    @server.feature(
        TEXT_DOCUMENT_COMPLETION,
        CompletionOptions(trigger_characters=["."], resolve_provider=True),
    )
    async def completion(ls: IsaacLanguageServer, params: CompletionParams):
        if ls.capability_manager:
            return await ls.capability_manager.handle_completion(params)
        return CompletionList(is_incomplete=False, items=[])

    @server.feature(COMPLETION_ITEM_RESOLVE)
    async def completion_resolve(ls: IsaacLanguageServer, item: CompletionItem):
        if ls.capability_manager:
            return await ls.capability_manager.handle_completion_resolve(item)
        return item

    return server
