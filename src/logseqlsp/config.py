"""Configuration loader for logseq-lsp.toml."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_PORT = 12315
CONFIG_FILE_NAME = "logseq-lsp.toml"


def user_config_dir() -> Path:
    return Path.home() / ".config" / "logseqlsp"


@dataclass
class GraphConfig:
    """Remote graph (Logseq HTTP API) configuration."""
    host: str = "localhost"
    port: int = DEFAULT_PORT
    url: str = ""
    token: str = ""
    timeout: float = 10.0
    root: Path | None = None
    pages: str = "pages"
    journals: str = "journals"
    journal_file_format: str = "%Y_%m_%d"

    @property
    def api_url(self) -> str:
        return self.url or f"http://{self.host}:{self.port}/api"


@dataclass
class LoggingConfig:
    """Diagnostic log configuration."""
    enabled: bool = True
    file: Path = field(default_factory=lambda: user_config_dir() / "log.txt")
    level: str = "INFO"


@dataclass
class CapabilitiesConfig:
    """Which editor capabilities get advertised."""
    hover: bool = True
    definition: bool = True
    highlight: bool = True
    document_links: bool = True


@dataclass
class LspConfig:
    """Complete logseq-lsp configuration."""
    graph: GraphConfig
    logging: LoggingConfig
    capabilities: CapabilitiesConfig


def load_config(config_path: Path | None = None) -> LspConfig:
    """
    Load configuration from logseq-lsp.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/logseq-lsp.toml
    3. ~/.config/logseqlsp/config.toml

    Every key is optional; missing keys keep their defaults.
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_FILE_NAME)
    search_paths.append(user_config_dir() / "config.toml")

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    # Parse graph config
    graph_data = toml_data.get("graph", {})
    defaults = GraphConfig()
    root = graph_data.get("root")
    graph_config = GraphConfig(
        host=graph_data.get("host", defaults.host),
        port=int(graph_data.get("port", defaults.port)),
        url=graph_data.get("url", defaults.url),
        token=graph_data.get("token", defaults.token),
        timeout=float(graph_data.get("timeout", defaults.timeout)),
        root=Path(root).expanduser() if root else None,
        pages=graph_data.get("pages", defaults.pages),
        journals=graph_data.get("journals", defaults.journals),
        journal_file_format=graph_data.get("journal_file_format", defaults.journal_file_format),
    )

    # Parse logging config
    logging_data = toml_data.get("logging", {})
    logging_config = LoggingConfig(enabled=logging_data.get("enabled", True))
    if "file" in logging_data:
        logging_config.file = Path(logging_data["file"]).expanduser()
    logging_config.level = str(logging_data.get("level", logging_config.level)).upper()

    # Parse capabilities config
    caps_data = toml_data.get("capabilities", {})
    capabilities_config = CapabilitiesConfig(
        hover=caps_data.get("hover", True),
        definition=caps_data.get("definition", True),
        highlight=caps_data.get("highlight", True),
        document_links=caps_data.get("document_links", True),
    )

    return LspConfig(
        graph=graph_config,
        logging=logging_config,
        capabilities=capabilities_config,
    )
