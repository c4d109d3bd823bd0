"""Exception hierarchy for logseqlsp.

"Nothing here" outcomes (no link under the cursor, empty link target) are
returned as ``None`` and never raised.
"""


class LspError(Exception):
    """Base class for all logseqlsp errors."""


class DocumentError(LspError):
    """A document URI could not be read."""


class UnsupportedSchemeError(DocumentError):
    def __init__(self, uri: str, scheme: str):
        super().__init__(f"unsupported uri scheme: {scheme!r} ({uri})")
        self.uri = uri
        self.scheme = scheme


class DocumentNotFoundError(DocumentError):
    def __init__(self, uri: str):
        super().__init__(f"uri not found in fs: {uri}")
        self.uri = uri


class GraphError(LspError):
    """The remote graph service failed or answered with something unusable."""


class GraphUnavailableError(GraphError):
    """Network failure, or an empty/null body (the service is not running)."""


class GraphResponseError(GraphError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidPageError(GraphError):
    """A page that cannot be mapped onto a file in the graph."""


class PageNotFoundError(GraphError):
    def __init__(self, name: str):
        super().__init__(f"page not found: {name!r}")
        self.name = name


class UnsupportedLinkTypeError(LspError):
    def __init__(self, link_type: object):
        super().__init__(f"unsupported link type: {link_type}")
        self.link_type = link_type
