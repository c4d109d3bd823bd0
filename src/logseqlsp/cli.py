"""CLI for logseq-lsp - a language server for Logseq graphs."""

import argparse
import json
import logging
import platform
import sys
from dataclasses import asdict
from pathlib import Path

import httpx

from . import __version__
from .adapters.fs_files import FsDocumentSource, path_to_uri
from .adapters.graph_client import HttpGraphClient
from .adapters.link_scanner import scan_document
from .config import LspConfig, load_config
from .core.errors import LspError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(enabled: bool, log_file: Path, level: str = "INFO") -> None:
    """Send logs to a file; stdout carries the protocol stream."""
    root_logger = logging.getLogger()
    if not enabled:
        root_logger.addHandler(logging.NullHandler())
        return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(file_handler)


def apply_overrides(config: LspConfig, args: argparse.Namespace) -> LspConfig:
    """Command line flags win over the config file."""
    if args.token is not None:
        config.graph.token = args.token
    if args.port is not None:
        config.graph.port = args.port
        if config.graph.url:
            config.graph.url = str(httpx.URL(config.graph.url).copy_with(port=args.port))
    if args.log_file is not None:
        config.logging.file = args.log_file
    if args.log_level is not None:
        config.logging.level = args.log_level.upper()
    if args.no_logging:
        config.logging.enabled = False
    return config


def cmd_serve(args: argparse.Namespace, config: LspConfig) -> int:
    """Run the language server over stdio."""
    from .lsp.server import create_server
    from .runtime import build_runtime

    logger.info("starting up, version %s", __version__)
    rt = build_runtime(config)
    server = create_server(rt)
    logger.info("serving")
    try:
        server.start_io()
    except Exception:
        logger.exception("server stopped unexpectedly")
        return 1
    return 0


def cmd_scan(args: argparse.Namespace, config: LspConfig) -> int:
    """Print the links found in a note file."""
    path = Path(args.file)
    if not path.exists():
        print(f"File {path} not found", file=sys.stderr)
        return 1

    doc = scan_document(FsDocumentSource().read(path_to_uri(path)))
    output = [
        {
            "type": link.type.value,
            "target": link.target,
            "range": asdict(link.range),
        }
        for link in doc.links
    ]
    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


def cmd_graph(args: argparse.Namespace, config: LspConfig) -> int:
    """Print the graph currently open in Logseq."""
    client = HttpGraphClient(config.graph.api_url, token=config.graph.token, timeout=config.graph.timeout)
    graph = client.current_graph()
    print(json.dumps(asdict(graph), indent=2, ensure_ascii=False))
    return 0


def version_string() -> str:
    return f"logseq-lsp {__version__} (python {platform.python_version()}, platform {platform.system().lower()})"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logseq-lsp", description="Language server for Logseq graphs"
    )
    parser.add_argument("--version", action="version", version=version_string())
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/logseq-lsp.toml, ~/.config/logseqlsp/config.toml)",
    )
    parser.add_argument("-t", "--token", default=None, help="Token for the Logseq HTTP API")
    parser.add_argument("-p", "--port", type=int, default=None, help="Port the Logseq HTTP API listens on")
    parser.add_argument("--log-file", type=Path, default=None, help="File to log to")
    parser.add_argument("--log-level", default=None, help="Log level (DEBUG, INFO, ...)")
    parser.add_argument("--no-logging", action="store_true", help="Disable logging")

    subparsers = parser.add_subparsers(dest="cmd")

    # serve command
    subparsers.add_parser("serve", help="Run the language server over stdio (default)")

    # scan command
    parser_scan = subparsers.add_parser("scan", help="Print the links of a note as JSON")
    parser_scan.add_argument("file", help="Path to a note file")

    # graph command
    subparsers.add_parser("graph", help="Print the current graph")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    config = apply_overrides(load_config(args.config), args)
    setup_logging(config.logging.enabled, config.logging.file, config.logging.level)

    handlers = {
        "serve": cmd_serve,
        "scan": cmd_scan,
        "graph": cmd_graph,
    }
    handler = handlers[args.cmd or "serve"]

    try:
        exit_code = handler(args, config)
    except LspError as e:
        logger.error("%s failed: %s", args.cmd or "serve", e)
        print(f"Error: {e}", file=sys.stderr)
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
