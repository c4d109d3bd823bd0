"""Capability handlers.

Each handler reads and scans the requested document from scratch, finds the
relevant links and resolves them through the runtime's resolver. ``None``
means "nothing here" and is a normal result; failures are raised.

Links are located in code points. Positions coming from the client and
ranges going back to it are converted with the negotiated position codec
(UTF-16 unless the client asked for something else).
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lsprotocol import types
from pygls.workspace import PositionCodec

from ..adapters.link_scanner import scan_document, split_lines
from ..adapters.resolver import NAVIGABLE_LINK_TYPES
from ..core.document import find_link_at, links_with_target
from ..core.errors import DocumentNotFoundError, PageNotFoundError
from ..core.model import Document, Link, LinkType, Position, Range

if TYPE_CHECKING:
    from ..runtime import Runtime

logger = logging.getLogger(__name__)

# Link kinds with something to show on hover
PREVIEWABLE_LINK_TYPES = NAVIGABLE_LINK_TYPES | {LinkType.QUERY}


class ScannedDocument:
    """A scanned document together with the codec of the current client."""

    def __init__(self, doc: Document, codec: PositionCodec):
        self.doc = doc
        self.codec = codec
        self.lines = split_lines(doc.text)

    def to_position(self, pos: types.Position) -> Position | None:
        if pos.line >= len(self.lines):
            return None
        converted = self.codec.position_from_client_units(self.lines, pos)
        return Position(line=converted.line, character=converted.character)

    def to_lsp_range(self, rng: Range) -> types.Range:
        return self.codec.range_to_client_units(
            self.lines,
            types.Range(
                start=types.Position(line=rng.start.line, character=rng.start.character),
                end=types.Position(line=rng.end.line, character=rng.end.character),
            ),
        )


def read_document(rt: Runtime, uri: str, codec: PositionCodec | None = None) -> ScannedDocument:
    return ScannedDocument(scan_document(rt.source.read(uri)), codec or rt.position_codec)


def _link_at(
    rt: Runtime, uri: str, pos: types.Position, codec: PositionCodec | None
) -> tuple[ScannedDocument, Link | None]:
    scanned = read_document(rt, uri, codec)
    position = scanned.to_position(pos)
    link = find_link_at(scanned.doc, position) if position is not None else None
    if link is None:
        logger.info("no link at %s:%d:%d", uri, pos.line, pos.character)
    return scanned, link


def hover(
    rt: Runtime, params: types.HoverParams, codec: PositionCodec | None = None
) -> types.Hover | None:
    uri = params.text_document.uri
    logger.info("hover %s %d:%d", uri, params.position.line, params.position.character)
    scanned, link = _link_at(rt, uri, params.position, codec)
    if link is None or link.type not in PREVIEWABLE_LINK_TYPES:
        return None

    try:
        content = rt.resolver.resolve_content(link)
    except (PageNotFoundError, DocumentNotFoundError) as exc:
        logger.warning("nothing to preview for %s %r: %s", link.type.value, link.target, exc)
        return None
    if content is None:
        return None

    return types.Hover(
        contents=types.MarkupContent(kind=types.MarkupKind.Markdown, value=content),
        range=scanned.to_lsp_range(link.range),
    )


def definition(
    rt: Runtime, params: types.DefinitionParams, codec: PositionCodec | None = None
) -> types.Location | None:
    uri = params.text_document.uri
    logger.info("definition %s %d:%d", uri, params.position.line, params.position.character)
    _, link = _link_at(rt, uri, params.position, codec)
    if link is None or link.type not in NAVIGABLE_LINK_TYPES:
        return None

    try:
        target = rt.resolver.resolve_uri(link)
    except PageNotFoundError as exc:
        logger.warning("no definition for %r: %s", link.target, exc)
        return None
    if target is None:
        return None
    logger.info("found link uri %s", target)

    # TODO: point at the referenced block instead of the top of the file
    start = types.Position(line=0, character=0)
    return types.Location(uri=target, range=types.Range(start=start, end=start))


def document_links(
    rt: Runtime, params: types.DocumentLinkParams, codec: PositionCodec | None = None
) -> list[types.DocumentLink]:
    uri = params.text_document.uri
    logger.info("document links %s", uri)
    scanned = read_document(rt, uri, codec)

    results = []
    for link in scanned.doc.links:
        if link.type not in NAVIGABLE_LINK_TYPES:
            continue
        try:
            target = rt.resolver.resolve_uri(link)
        except PageNotFoundError as exc:
            logger.info("skipping link %r: %s", link.target, exc)
            continue
        if target is None:
            continue
        results.append(types.DocumentLink(range=scanned.to_lsp_range(link.range), target=target))
    return results


def highlight(
    rt: Runtime, params: types.DocumentHighlightParams, codec: PositionCodec | None = None
) -> list[types.DocumentHighlight] | None:
    uri = params.text_document.uri
    logger.info("highlight %s %d:%d", uri, params.position.line, params.position.character)
    scanned, link = _link_at(rt, uri, params.position, codec)
    if link is None:
        return None
    return [
        types.DocumentHighlight(range=scanned.to_lsp_range(other.range), kind=types.DocumentHighlightKind.Text)
        for other in links_with_target(scanned.doc, link.target)
    ]


def log_text_sync(method: str, uri: str) -> None:
    logger.info("%s %s", method, uri)
