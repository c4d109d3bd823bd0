"""Markdown rendering for hover previews."""

from .markup import block_to_markdown, query_to_markdown

__all__ = [
    "block_to_markdown",
    "query_to_markdown",
]
