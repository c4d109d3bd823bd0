"""pygls language server for Logseq graphs."""

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from .. import __version__
from ..runtime import Runtime
from . import handlers

SERVER_NAME = "logseq-lsp"


def create_server(runtime: Runtime) -> LanguageServer:
    """
    Create the language server with the runtime injected.

    Only the capabilities enabled in the configuration are registered, and
    pygls advertises exactly the registered features during initialize.
    """
    server = LanguageServer(SERVER_NAME, f"v{__version__}")
    caps = runtime.config.capabilities

    if caps.hover:
        @server.feature(types.TEXT_DOCUMENT_HOVER)
        def hover(params: types.HoverParams) -> types.Hover | None:
            return handlers.hover(runtime, params, server.workspace.position_codec)

    if caps.definition:
        @server.feature(types.TEXT_DOCUMENT_DEFINITION)
        def definition(params: types.DefinitionParams) -> types.Location | None:
            return handlers.definition(runtime, params, server.workspace.position_codec)

    if caps.highlight:
        @server.feature(types.TEXT_DOCUMENT_DOCUMENT_HIGHLIGHT)
        def highlight(params: types.DocumentHighlightParams) -> list[types.DocumentHighlight] | None:
            return handlers.highlight(runtime, params, server.workspace.position_codec)

    if caps.document_links:
        @server.feature(
            types.TEXT_DOCUMENT_DOCUMENT_LINK,
            types.DocumentLinkOptions(resolve_provider=False),
        )
        def document_links(params: types.DocumentLinkParams) -> list[types.DocumentLink]:
            return handlers.document_links(runtime, params, server.workspace.position_codec)

    @server.feature(types.TEXT_DOCUMENT_DID_OPEN)
    def did_open(params: types.DidOpenTextDocumentParams) -> None:
        handlers.log_text_sync(types.TEXT_DOCUMENT_DID_OPEN, params.text_document.uri)

    @server.feature(types.TEXT_DOCUMENT_DID_CHANGE)
    def did_change(params: types.DidChangeTextDocumentParams) -> None:
        handlers.log_text_sync(types.TEXT_DOCUMENT_DID_CHANGE, params.text_document.uri)

    @server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
    def did_close(params: types.DidCloseTextDocumentParams) -> None:
        handlers.log_text_sync(types.TEXT_DOCUMENT_DID_CLOSE, params.text_document.uri)

    @server.feature(types.TEXT_DOCUMENT_DID_SAVE)
    def did_save(params: types.DidSaveTextDocumentParams) -> None:
        handlers.log_text_sync(types.TEXT_DOCUMENT_DID_SAVE, params.text_document.uri)

    return server
