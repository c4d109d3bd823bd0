"""Runtime wiring helper for the language server."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from pygls.workspace import PositionCodec

from .adapters.fs_files import FsDocumentSource
from .adapters.graph_client import HttpGraphClient
from .adapters.resolver import Resolver
from .config import LspConfig
from .core.ports import DocumentSource, GraphClient

logger = logging.getLogger(__name__)


@dataclass
class Runtime:
    """Context built once at startup and handed to every capability handler."""
    config: LspConfig
    client: GraphClient
    source: DocumentSource
    resolver: Resolver
    # UTF-16; handlers called by the server use the negotiated codec instead
    position_codec: PositionCodec = field(default_factory=PositionCodec)


def build_runtime(
    config: LspConfig,
    client: GraphClient | None = None,
    source: DocumentSource | None = None,
) -> Runtime:
    """Wire the components; asks the graph for its root unless configured."""
    if client is None:
        client = HttpGraphClient(
            config.graph.api_url,
            token=config.graph.token,
            timeout=config.graph.timeout,
        )
    if source is None:
        source = FsDocumentSource()

    graph_root = config.graph.root
    if graph_root is None:
        graph = client.current_graph()
        logger.info("connected to graph %r at %s", graph.name, graph.path)
        graph_root = Path(graph.path)

    resolver = Resolver(
        client,
        source,
        graph_root,
        pages_dir=config.graph.pages,
        journals_dir=config.graph.journals,
        journal_file_format=config.graph.journal_file_format,
    )

    return Runtime(
        config=config,
        client=client,
        source=source,
        resolver=resolver,
    )
