import logging
from datetime import datetime
from pathlib import Path

from ..core.errors import InvalidPageError, UnsupportedLinkTypeError
from ..core.model import (
    NAMESPACE_PLACEHOLDER,
    PAGE_LINK_TYPES,
    Block,
    Link,
    LinkType,
    Page,
)
from ..core.ports import DocumentSource, GraphClient
from ..format.markup import block_to_markdown, query_to_markdown
from .fs_files import path_to_uri

logger = logging.getLogger(__name__)

# Link kinds that resolve to a file location
NAVIGABLE_LINK_TYPES = PAGE_LINK_TYPES | {LinkType.BLOCK_EMBED}


def page_file_name(page: Page, journal_file_format: str = "%Y_%m_%d") -> str:
    """
    File name of a page inside its sub-folder.

    Journal pages are named after their day, e.g. journalDay 20230115 gives
    "2023_01_15.md". Other pages use their original name with "/" replaced
    by the namespace placeholder, so "Foo/Bar" gives "Foo___Bar.md".
    """
    if page.is_zero():
        raise InvalidPageError("invalid page")
    if page.is_journal:
        try:
            day = datetime.strptime(str(page.journal_day), "%Y%m%d")
        except ValueError as exc:
            raise InvalidPageError(
                f"journal page {page.original_name!r} has no valid journal day: {page.journal_day!r}"
            ) from exc
        return f"{day.strftime(journal_file_format)}.md"
    if not page.original_name:
        raise InvalidPageError(f"page {page.id} has no name")
    return f"{page.original_name.replace('/', NAMESPACE_PLACEHOLDER)}.md"


class Resolver:
    """
    Turns links into file URIs or preview markdown. Holds no state across
    calls: every resolution queries the graph again.
    """

    def __init__(
        self,
        client: GraphClient,
        source: DocumentSource,
        graph_root: Path,
        pages_dir: str = "pages",
        journals_dir: str = "journals",
        journal_file_format: str = "%Y_%m_%d",
    ):
        self.client = client
        self.source = source
        self.graph_root = graph_root
        self.pages_dir = pages_dir
        self.journals_dir = journals_dir
        self.journal_file_format = journal_file_format

    def page_uri(self, page: Page) -> str:
        sub_dir = self.journals_dir if page.is_journal else self.pages_dir
        return path_to_uri(self.graph_root / sub_dir / page_file_name(page, self.journal_file_format))

    def _page_for(self, link: Link) -> Page | None:
        if link.type in PAGE_LINK_TYPES:
            if not link.target:
                return None
            return self.client.get_page_by_name(link.target.replace(NAMESPACE_PLACEHOLDER, "/"))
        if link.type is LinkType.BLOCK_EMBED:
            block = self.client.get_block(link.target)
            if block.page is None:
                raise InvalidPageError(f"block {link.target} has no page")
            page = self.client.get_page_by_id(block.page.id)
            logger.debug("block %s lives on page %r", link.target, page.original_name)
            return page
        logger.error("cannot resolve %s link %r to a uri", link.type, link.target)
        raise UnsupportedLinkTypeError(link.type)

    def resolve_uri(self, link: Link) -> str | None:
        """URI of the file a link points at, or None for an empty target."""
        page = self._page_for(link)
        if page is None:
            return None
        return self.page_uri(page)

    def fetch_block(self, link: Link) -> Block:
        return self.client.get_block(link.target, include_children=True)

    def run_query(self, link: Link) -> list[Block]:
        return self.client.query(link.target)

    def resolve_content(self, link: Link) -> str | None:
        """
        Markdown preview for a link.

        Page links preview the whole target file; block embeds preview the
        block with its direct children; queries preview their results.
        Returns None when the link has nothing to preview.
        """
        if link.type in PAGE_LINK_TYPES:
            uri = self.resolve_uri(link)
            if uri is None:
                return None
            return self.source.read(uri)
        if link.type is LinkType.BLOCK_EMBED:
            return block_to_markdown(self.fetch_block(link))
        if link.type is LinkType.QUERY:
            return query_to_markdown(self.run_query(link))
        logger.error("cannot preview %s link %r", link.type, link.target)
        raise UnsupportedLinkTypeError(link.type)
