import logging
from pathlib import Path
from urllib.parse import unquote, urlparse

from ..core.errors import DocumentError, DocumentNotFoundError, UnsupportedSchemeError
from ..core.ports import DocumentSource

logger = logging.getLogger(__name__)


def uri_to_path(uri: str) -> Path:
    parsed = urlparse(uri)
    if parsed.scheme != "file":
        raise UnsupportedSchemeError(uri, parsed.scheme)
    return Path(unquote(parsed.path))


def path_to_uri(path: Path | str) -> str:
    return Path(path).absolute().as_uri()


class FsDocumentSource(DocumentSource):
    """Reads documents straight from disk on every call."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def read(self, uri: str) -> str:
        p = uri_to_path(uri)
        try:
            return p.read_text(encoding=self.encoding)
        except FileNotFoundError as exc:
            logger.info("could not find file %s", uri)
            raise DocumentNotFoundError(uri) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentError(f"could not read {uri}: {exc}") from exc
