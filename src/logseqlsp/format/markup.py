"""Render remote blocks as markdown for hover previews."""

from collections.abc import Sequence

from ..core.model import Block


def block_to_markdown(block: Block) -> str:
    """Render a block and its direct children as a two-level list.

    Grandchildren are not rendered.

    Example:
        >>> block_to_markdown(Block(uuid="a", content="parent", children=[Block(uuid="b", content="child")]))
        '- parent\\n\\t- child\\n'
    """
    lines = [f"- {block.content}\n"]
    for child in block.children:
        lines.append(f"\t- {child.content}\n")
    return "".join(lines)


def query_to_markdown(results: Sequence[Block]) -> str:
    """Render query results in order, each followed by a dashed rule."""
    parts = []
    for i, block in enumerate(results):
        parts.append(f"Result {i}:\n{block.content}\n\n{'-' * len(block.content)}\n\n")
    return "".join(parts)
