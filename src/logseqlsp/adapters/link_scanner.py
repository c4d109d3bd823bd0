import re
from collections.abc import Callable, Iterator

from ..core.model import (
    ID_PROPERTY,
    NAMESPACE_PLACEHOLDER,
    PAGE_LINK_TYPES,
    Document,
    Link,
    LinkType,
    Position,
    Range,
)

QUERY_RE = re.compile(r"\{\{query\s+(.*?)\s*(?:\}\}\s*)?$")
WIKI_RE = re.compile(r"(?:\{\{embed )?(\[*\[\[(.+?)\]\])")
TAG_RE = re.compile(r"#(?!\[\[)([^\s#]+)")
PROPERTY_RE = re.compile(r"^[ \t]*(?:-[ \t]*)?(?:.*?\s)?([^\s:]+)::[ \t]*(.*?)\s*$")
UUID_RE = re.compile(
    r"(?<![0-9a-fA-F])"
    r"([0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12})"
    r"(?![0-9a-fA-F])"
)

# (type, capture, start, end) for one candidate link on a line
Candidate = tuple[LinkType, str | None, int, int]


def _match_query(line: str) -> Iterator[Candidate]:
    for m in QUERY_RE.finditer(line):
        yield LinkType.QUERY, m.group(1), m.start(1), m.end(1)


def _match_wiki(line: str) -> Iterator[Candidate]:
    # the range covers the brackets, the embed macro prefix is left out
    for m in WIKI_RE.finditer(line):
        yield LinkType.WIKI, m.group(2), m.start(1), m.end(1)


def _match_tag(line: str) -> Iterator[Candidate]:
    for m in TAG_RE.finditer(line):
        yield LinkType.TAG, m.group(1), m.start(), m.end(1)


def _match_property(line: str) -> Iterator[Candidate]:
    for m in PROPERTY_RE.finditer(line):
        key = m.group(1)
        yield LinkType.PROP, key, m.start(1), m.end(1)
        # the id value is a block reference, _match_block_embed picks it up
        if key != ID_PROPERTY:
            yield LinkType.PROP_VALUE, m.group(2), m.start(2), m.end(2)


def _match_block_embed(line: str) -> Iterator[Candidate]:
    for m in UUID_RE.finditer(line):
        yield LinkType.BLOCK_EMBED, m.group(1), m.start(1), m.end(1)


# Precedence order. Position lookups return the first link containing the
# cursor, so where ranges overlap the earlier matcher wins.
SCAN_ORDER: tuple[Callable[[str], Iterator[Candidate]], ...] = (
    _match_query,
    _match_wiki,
    _match_tag,
    _match_property,
    _match_block_embed,
)


def normalize_target(target: str, link_type: LinkType) -> str:
    """Replace slashes in page names so they never act as path separators."""
    if link_type in PAGE_LINK_TYPES:
        return target.replace("/", NAMESPACE_PLACEHOLDER)
    return target


def _new_link(link_type: LinkType, target: str | None, line: int, start: int, end: int) -> Link | None:
    if not target:
        return None
    return Link(
        target=normalize_target(target, link_type),
        type=link_type,
        range=Range(Position(line, start), Position(line, end)),
    )


def split_lines(text: str) -> list[str]:
    return [ln.rstrip("\r") for ln in text.split("\n")]


def scan(text: str) -> list[Link]:
    """
    Extract every typed link from note text.

    Lines are scanned independently. On each line the matchers in
    SCAN_ORDER run one after the other, each reporting all of its
    non-overlapping matches left to right. Links keep that discovery order
    and are never deduplicated. Matches with an empty capture are dropped.
    """
    links: list[Link] = []
    for lineno, line in enumerate(split_lines(text)):
        for matcher in SCAN_ORDER:
            for link_type, capture, start, end in matcher(line):
                link = _new_link(link_type, capture, lineno, start, end)
                if link is not None:
                    links.append(link)
    return links


def scan_document(text: str) -> Document:
    return Document(text=text, links=tuple(scan(text)))
