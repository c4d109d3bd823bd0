from typing import Protocol

from .model import Block, CurrentGraph, Page


class GraphClient(Protocol):
    """
    Stateless access to the running Logseq graph. Every call is a fresh
    request; nothing is cached between calls.
    """

    def current_graph(self) -> CurrentGraph:
        pass

    def get_page_by_name(self, name: str) -> Page:
        pass

    def get_page_by_id(self, id: int) -> Page:
        pass

    def get_block(self, uuid: str, include_children: bool = True) -> Block:
        pass

    def query(self, expression: str) -> list[Block]:
        pass


class DocumentSource(Protocol):
    """
    Reads note text addressed by URI.
    """

    def read(self, uri: str) -> str:
        pass
