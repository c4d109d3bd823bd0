from .model import Document, Link, Position


def find_link_at(doc: Document, pos: Position) -> Link | None:
    """Return the first link, in scan order, whose range contains pos."""
    for link in doc.links:
        if link.range.contains(pos):
            return link
    return None


def links_with_target(doc: Document, target: str) -> list[Link]:
    return [link for link in doc.links if link.target == target]
