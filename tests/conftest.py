"""Shared fixtures: an on-disk graph and an in-memory Logseq API."""

import tempfile
from pathlib import Path

import pytest

from logseqlsp.adapters.fs_files import path_to_uri
from logseqlsp.config import CapabilitiesConfig, GraphConfig, LoggingConfig, LspConfig
from logseqlsp.core.errors import GraphUnavailableError, PageNotFoundError
from logseqlsp.core.model import Block, CurrentGraph, Page, PageRef
from logseqlsp.runtime import build_runtime

BLOCK_UUID = "3f2504e0-4f89-11d3-9a0c-0305e82c3301"


class FakeGraphClient:
    """GraphClient backed by dictionaries; records every call."""

    def __init__(self, root: Path, pages=None, blocks=None, queries=None):
        self.root = root
        self.pages: dict[str, Page] = pages or {}
        self.blocks: dict[str, Block] = blocks or {}
        self.queries: dict[str, list[Block]] = queries or {}
        self.calls: list[tuple] = []

    def current_graph(self) -> CurrentGraph:
        self.calls.append(("current_graph",))
        return CurrentGraph(name="test", path=str(self.root))

    def get_page_by_name(self, name: str) -> Page:
        self.calls.append(("get_page_by_name", name))
        if name not in self.pages:
            raise PageNotFoundError(name)
        return self.pages[name]

    def get_page_by_id(self, id: int) -> Page:
        self.calls.append(("get_page_by_id", id))
        for page in self.pages.values():
            if page.id == id:
                return page
        raise GraphUnavailableError("no page")

    def get_block(self, uuid: str, include_children: bool = True) -> Block:
        self.calls.append(("get_block", uuid))
        if uuid not in self.blocks:
            raise GraphUnavailableError("no block")
        return self.blocks[uuid]

    def query(self, expression: str) -> list[Block]:
        self.calls.append(("query", expression))
        return self.queries.get(expression, [])


def make_config(**capabilities) -> LspConfig:
    return LspConfig(
        graph=GraphConfig(),
        logging=LoggingConfig(enabled=False),
        capabilities=CapabilitiesConfig(**capabilities),
    )


@pytest.fixture
def graph_dir():
    """A graph folder with a few pages and one journal."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir) / "graph"
        (root / "pages").mkdir(parents=True)
        (root / "journals").mkdir()
        (root / "pages" / "Foo.md").write_text("- foo page\n  - nested\n", encoding="utf-8")
        (root / "pages" / "Foo___Bar.md").write_text("- namespaced page\n", encoding="utf-8")
        (root / "journals" / "2023_01_15.md").write_text("- a journal entry\n", encoding="utf-8")
        yield root


@pytest.fixture
def fake_client(graph_dir):
    foo = Page(id=1, name="foo", original_name="Foo")
    return FakeGraphClient(
        graph_dir,
        pages={
            "Foo": foo,
            "Foo/Bar": Page(id=2, name="foo/bar", original_name="Foo/Bar"),
            "Jan 15th, 2023": Page(
                id=3,
                name="jan 15th, 2023",
                original_name="Jan 15th, 2023",
                journal_day=20230115,
                is_journal=True,
            ),
            # exists in the graph but has no file on disk
            "Ghost": Page(id=4, name="ghost", original_name="Ghost"),
        },
        blocks={
            BLOCK_UUID: Block(
                uuid=BLOCK_UUID,
                content="parent block",
                children=[
                    Block(
                        uuid="c1",
                        content="child one",
                        children=[Block(uuid="g1", content="grandchild")],
                    ),
                    Block(uuid="c2", content="child two"),
                ],
                page=PageRef(id=1),
            ),
        },
        queries={
            "(task TODO)": [
                Block(uuid="q1", content="TODO a"),
                Block(uuid="q2", content="TODO bb"),
            ],
        },
    )


@pytest.fixture
def runtime(fake_client):
    return build_runtime(make_config(), client=fake_client)


@pytest.fixture
def write_note(graph_dir):
    """Write a note into the graph and return its file:// URI."""
    def _write(text: str, name: str = "Note.md") -> str:
        path = graph_dir / "pages" / name
        path.write_text(text, encoding="utf-8")
        return path_to_uri(path)
    return _write
