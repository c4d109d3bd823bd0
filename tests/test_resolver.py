"""Tests for link resolution."""

import pytest

from logseqlsp.adapters.fs_files import path_to_uri
from logseqlsp.adapters.resolver import page_file_name
from logseqlsp.core.errors import (
    InvalidPageError,
    PageNotFoundError,
    UnsupportedLinkTypeError,
)
from logseqlsp.core.model import Link, LinkType, Page, Position, Range

BLOCK_UUID = "3f2504e0-4f89-11d3-9a0c-0305e82c3301"

RANGE = Range(Position(0, 0), Position(0, 1))


def _link(target, link_type):
    return Link(target=target, type=link_type, range=RANGE)


def test_page_file_name_plain():
    assert page_file_name(Page(id=1, name="foo", original_name="Foo")) == "Foo.md"


def test_page_file_name_namespace():
    page = Page(id=2, name="foo/bar", original_name="Foo/Bar")
    assert page_file_name(page) == "Foo___Bar.md"


def test_page_file_name_journal():
    page = Page(id=3, name="jan 15th, 2023", original_name="Jan 15th, 2023", journal_day=20230115, is_journal=True)
    assert page_file_name(page) == "2023_01_15.md"
    assert page_file_name(page, "%Y-%m-%d") == "2023-01-15.md"


def test_page_file_name_invalid():
    with pytest.raises(InvalidPageError):
        page_file_name(Page(id=0, name="", original_name=""))
    with pytest.raises(InvalidPageError):
        page_file_name(Page(id=5, name="j", original_name="j", journal_day=None, is_journal=True))


def test_resolve_wiki_link(runtime, graph_dir):
    uri = runtime.resolver.resolve_uri(_link("Foo", LinkType.WIKI))
    assert uri == path_to_uri(graph_dir / "pages" / "Foo.md")


def test_resolve_namespaced_page_queries_real_name(runtime, fake_client, graph_dir):
    uri = runtime.resolver.resolve_uri(_link("Foo___Bar", LinkType.TAG))
    assert ("get_page_by_name", "Foo/Bar") in fake_client.calls
    assert uri == path_to_uri(graph_dir / "pages" / "Foo___Bar.md")


def test_resolve_journal_page(runtime, graph_dir):
    uri = runtime.resolver.resolve_uri(_link("Jan 15th, 2023", LinkType.WIKI))
    assert uri == path_to_uri(graph_dir / "journals" / "2023_01_15.md")


def test_resolve_block_embed_uses_owning_page(runtime, fake_client, graph_dir):
    uri = runtime.resolver.resolve_uri(_link(BLOCK_UUID, LinkType.BLOCK_EMBED))
    assert uri == path_to_uri(graph_dir / "pages" / "Foo.md")
    assert ("get_block", BLOCK_UUID) in fake_client.calls
    assert ("get_page_by_id", 1) in fake_client.calls


def test_resolve_empty_target_is_no_result(runtime, fake_client):
    fake_client.calls.clear()
    assert runtime.resolver.resolve_uri(_link("", LinkType.PROP)) is None
    assert fake_client.calls == []


def test_resolve_unknown_page_raises(runtime):
    with pytest.raises(PageNotFoundError):
        runtime.resolver.resolve_uri(_link("Nope", LinkType.WIKI))


def test_resolve_uri_rejects_query_and_prop_value(runtime):
    with pytest.raises(UnsupportedLinkTypeError):
        runtime.resolver.resolve_uri(_link("(task TODO)", LinkType.QUERY))
    with pytest.raises(UnsupportedLinkTypeError):
        runtime.resolver.resolve_uri(_link("done", LinkType.PROP_VALUE))


def test_resolver_queries_every_time(runtime, fake_client):
    link = _link("Foo", LinkType.WIKI)
    fake_client.calls.clear()
    runtime.resolver.resolve_uri(link)
    runtime.resolver.resolve_uri(link)
    assert fake_client.calls == [("get_page_by_name", "Foo"), ("get_page_by_name", "Foo")]


def test_resolve_content_page(runtime):
    assert runtime.resolver.resolve_content(_link("Foo", LinkType.WIKI)) == "- foo page\n  - nested\n"


def test_resolve_content_block(runtime):
    content = runtime.resolver.resolve_content(_link(BLOCK_UUID, LinkType.BLOCK_EMBED))
    assert content == "- parent block\n\t- child one\n\t- child two\n"


def test_resolve_content_query(runtime):
    content = runtime.resolver.resolve_content(_link("(task TODO)", LinkType.QUERY))
    assert content == "Result 0:\nTODO a\n\n------\n\nResult 1:\nTODO bb\n\n-------\n\n"


def test_resolve_content_prop_value_is_unsupported(runtime):
    with pytest.raises(UnsupportedLinkTypeError):
        runtime.resolver.resolve_content(_link("done", LinkType.PROP_VALUE))
