"""Command-line interface for qbt-tui."""

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from api import QBittorrentClient, QBittorrentError
from app import QbtApp
from config import AppConfig, ConfigError, load_config
from ui.title import set_terminal_title

QBT_TUI_VERSION = "0.1.0"

log = logging.getLogger(__name__)


@dataclass
class ParsedArgs:
    """Parsed command-line arguments. None means the flag was not given."""

    config_path: str | None
    url: str | None
    username: str | None
    password: str | None
    refresh: int | None
    debug: bool


def print_error_box(title: str, *lines: str) -> None:
    """Print a formatted error box to stderr.

    Args:
        title: The error title (will be prefixed with "Error: ")
        *lines: Additional lines to print in the box
    """
    print("=" * 60, file=sys.stderr)
    print(f"Error: {title}", file=sys.stderr)
    print("", file=sys.stderr)
    for line in lines:
        print(line, file=sys.stderr)
    print("=" * 60, file=sys.stderr)


class QbtHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Custom formatter that shows our structured help."""

    def format_help(self) -> str:
        lines = [
            "qbt-tui - A terminal dashboard for qBittorrent.",
            f"Version: {QBT_TUI_VERSION}",
            "",
            "Usage:",
            "  qbt-tui [options]",
            "",
            "Options:",
            "  --config PATH                  Config file (default: ./config.toml,",
            "                                 then $XDG_CONFIG_HOME/qbt-tui/config.toml)",
            "  -u, --url URL                  qBittorrent Web UI address",
            "  --username USER                Web UI user name",
            "  -p, --password PASS            Web UI password",
            "  -r, --refresh SECONDS          Seconds between refreshes (default: 3)",
            "  --debug                        Log debug output",
            "  --version                      Show the version and exit",
            "",
            "Environment:",
            "  QBT_SERVER_URL, QBT_SERVER_USERNAME, QBT_SERVER_PASSWORD,",
            "  QBT_UI_REFRESH_INTERVAL, QBT_DEBUG_ENABLED, QBT_DEBUG_LOG_FILE",
            "",
            "  Flags override environment variables, which override the config file.",
            "",
            "Examples:",
            "",
            "  # Connect to a local instance that whitelists localhost",
            "  qbt-tui --url http://localhost:8080",
            "",
            "  # Remote instance, credentials from the environment",
            "  QBT_SERVER_PASSWORD=secret qbt-tui -u https://seedbox.example:8080 --username admin",
            "",
            f"Logs are written to {_get_log_path(create=False)}",
        ]
        return "\n".join(lines) + "\n"


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the qbt-tui CLI."""
    parser = argparse.ArgumentParser(
        prog="qbt-tui",
        formatter_class=QbtHelpFormatter,
        add_help=True,
    )
    parser.add_argument("--config", metavar="PATH", help=argparse.SUPPRESS)
    parser.add_argument("-u", "--url", metavar="URL", help=argparse.SUPPRESS)
    parser.add_argument("--username", metavar="USER", help=argparse.SUPPRESS)
    parser.add_argument("-p", "--password", metavar="PASS", help=argparse.SUPPRESS)
    parser.add_argument("-r", "--refresh", metavar="SECONDS", type=int, help=argparse.SUPPRESS)
    parser.add_argument("--debug", action="store_true", help=argparse.SUPPRESS)
    parser.add_argument("--version", action="version", version=f"qbt-tui {QBT_TUI_VERSION}")
    return parser


def parse_args(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command line arguments (sys.argv when argv is None)."""
    args = create_parser().parse_args(argv)
    return ParsedArgs(
        config_path=args.config,
        url=args.url,
        username=args.username,
        password=args.password,
        refresh=args.refresh,
        debug=args.debug,
    )


def _get_log_path(create: bool = True) -> Path:
    """Get the log file path under the XDG state directory."""
    xdg_state = os.environ.get("XDG_STATE_HOME", str(Path.home() / ".local" / "state"))
    log_dir = Path(xdg_state) / "qbt-tui"
    if create:
        log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "qbt-tui.log"


def setup_logging(config: AppConfig) -> Path:
    """Send all logging to the log file. The terminal belongs to the TUI."""
    if config.debug.log_file:
        path = Path(config.debug.log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
    else:
        path = _get_log_path()
    logging.basicConfig(
        filename=str(path),
        level=logging.DEBUG if config.debug.enabled else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        force=True,
    )
    return path


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config, warnings = load_config(
            args.config_path,
            url=args.url,
            username=args.username,
            password=args.password,
            refresh_interval=args.refresh,
            debug=args.debug,
        )
    except ConfigError as e:
        print_error_box(
            "Invalid configuration",
            str(e),
            "",
            "Run qbt-tui --help for the config file locations and variables.",
        )
        sys.exit(1)

    log_path = setup_logging(config)
    log.info(f"qbt-tui {QBT_TUI_VERSION} starting, logging to {log_path}")
    for warning in warnings:
        print(f"Warning: {warning}", file=sys.stderr)
        log.warning(warning)

    client = QBittorrentClient(config.server.url, config.server.username, config.server.password)
    try:
        client.login()
    except QBittorrentError as e:
        log.error(f"Login failed: {e}")
        client.close()
        print_error_box(
            f"Cannot connect to {config.server.url}",
            str(e),
            "",
            "Check server.url, server.username and server.password.",
        )
        sys.exit(1)

    app = QbtApp(config, client)
    try:
        app.run()
    finally:
        client.close()
        if config.ui.terminal_title.enabled:
            set_terminal_title("")
    log.info("qbt-tui exited")


if __name__ == "__main__":
    main()
