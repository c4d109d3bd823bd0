from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Logseq stores "Foo/Bar" as pages/Foo___Bar.md
NAMESPACE_PLACEHOLDER = "___"

ID_PROPERTY = "id"


class LinkType(str, Enum):
    WIKI = "WIKI"
    TAG = "TAG"
    PROP = "PROP"
    PROP_VALUE = "PROPVALUE"
    BLOCK_EMBED = "EMBED"
    QUERY = "QUERY"


# Link kinds whose target is a page name
PAGE_LINK_TYPES = frozenset({LinkType.WIKI, LinkType.TAG, LinkType.PROP})


@dataclass(frozen=True, order=True)
class Position:
    line: int
    character: int  # code point offset within the line


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position

    def contains(self, pos: Position) -> bool:
        # inclusive on both ends
        return self.start <= pos <= self.end


@dataclass(frozen=True)
class Link:
    target: str
    type: LinkType
    range: Range


@dataclass(frozen=True)
class Document:
    text: str
    links: tuple[Link, ...] = ()


@dataclass(frozen=True)
class CurrentGraph:
    name: str
    path: str
    url: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> CurrentGraph:
        return cls(
            name=data.get("name") or "",
            path=data.get("path") or "",
            url=data.get("url") or "",
        )


@dataclass(frozen=True)
class Page:
    id: int
    name: str
    original_name: str
    journal_day: int | None = None
    is_journal: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Page:
        return cls(
            id=int(data.get("id") or 0),
            name=data.get("name") or "",
            original_name=data.get("originalName") or data.get("name") or "",
            journal_day=data.get("journalDay"),
            is_journal=bool(data.get("journal?", False)),
        )

    def is_zero(self) -> bool:
        return not self.id and not self.name and not self.original_name


@dataclass(frozen=True)
class PageRef:
    id: int


@dataclass
class Block:
    uuid: str
    content: str
    children: list[Block] = field(default_factory=list)
    page: PageRef | None = None
    id: int = 0

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Block:
        page = data.get("page")
        # children that were not expanded come back as ["uuid", "..."] pairs
        children = [
            cls.from_json(child)
            for child in data.get("children") or []
            if isinstance(child, dict)
        ]
        return cls(
            uuid=data.get("uuid") or "",
            content=data.get("content") or "",
            children=children,
            page=PageRef(id=int(page["id"])) if isinstance(page, dict) and "id" in page else None,
            id=int(data.get("id") or 0),
        )
