"""Configuration for qbt-tui.

Values are layered, later sources winning: built-in defaults, the TOML
config file, QBT_* environment variables, command-line flags. The result is
a frozen AppConfig handed to the dashboard at construction.
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping
from urllib.parse import urlsplit

from model.columns import COLUMN_KEYS, DEFAULT_COLUMNS
from ui.title import TITLE_VARIABLES, validate_template

log = logging.getLogger(__name__)

CONFIG_DIR_NAME = "qbt-tui"
CONFIG_FILE_NAME = "config.toml"

DEFAULT_TITLE_TEMPLATE = "qbt-tui [{active_torrents}/{total_torrents}] ↓{dl_speed} ↑{up_speed}"


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


@dataclass(frozen=True)
class ServerConfig:
    """Connection to the qBittorrent Web UI."""

    url: str = ""
    username: str = ""
    password: str = ""


@dataclass(frozen=True)
class SortConfig:
    column: str = "name"
    direction: str = "asc"


@dataclass(frozen=True)
class TitleConfig:
    """Terminal window title."""

    enabled: bool = True
    template: str = DEFAULT_TITLE_TEMPLATE


@dataclass(frozen=True)
class UIConfig:
    refresh_interval: int = 3  # seconds between polls
    columns: tuple[str, ...] = DEFAULT_COLUMNS
    default_sort: SortConfig = field(default_factory=SortConfig)
    terminal_title: TitleConfig = field(default_factory=TitleConfig)


@dataclass(frozen=True)
class DebugConfig:
    enabled: bool = False
    log_file: str = ""  # empty = default location under $XDG_STATE_HOME


@dataclass(frozen=True)
class AppConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)


def default_config_paths() -> list[Path]:
    """Config files searched when --config is not given, in order."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config"))
    return [
        Path.cwd() / CONFIG_FILE_NAME,
        Path(xdg_config) / CONFIG_DIR_NAME / CONFIG_FILE_NAME,
    ]


def find_config_file(explicit: str | None = None) -> Path | None:
    if explicit:
        path = Path(explicit).expanduser()
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        return path
    for path in default_config_paths():
        if path.is_file():
            return path
    return None


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a TOML config file."""
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e.strerror or e}") from e


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, Mapping):
        raise ConfigError(f"[{name}] must be a table")
    return value


def _as_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("1", "true", "yes", "on"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("0", "false", "no", "off", ""):
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


def config_from_dict(data: Mapping[str, Any]) -> AppConfig:
    """Build an AppConfig from a parsed TOML document (missing keys keep defaults)."""
    server = _section(data, "server")
    ui = _section(data, "ui")
    debug = _section(data, "debug")
    sort = _section(ui, "default_sort")
    title = _section(ui, "terminal_title")

    defaults = AppConfig()
    columns = ui.get("columns", defaults.ui.columns)
    if not isinstance(columns, (list, tuple)):
        raise ConfigError("ui.columns must be a list of column names")

    return AppConfig(
        server=ServerConfig(
            url=str(server.get("url", "")),
            username=str(server.get("username", "")),
            password=str(server.get("password", "")),
        ),
        ui=UIConfig(
            refresh_interval=_as_int(ui.get("refresh_interval", defaults.ui.refresh_interval), "ui.refresh_interval"),
            columns=tuple(str(c) for c in columns),
            default_sort=SortConfig(
                column=str(sort.get("column", defaults.ui.default_sort.column)),
                direction=str(sort.get("direction", defaults.ui.default_sort.direction)).lower(),
            ),
            terminal_title=TitleConfig(
                enabled=_as_bool(title.get("enabled", True), "ui.terminal_title.enabled"),
                template=str(title.get("template", DEFAULT_TITLE_TEMPLATE)),
            ),
        ),
        debug=DebugConfig(
            enabled=_as_bool(debug.get("enabled", False), "debug.enabled"),
            log_file=str(debug.get("log_file", "")),
        ),
    )


def apply_env(config: AppConfig, environ: Mapping[str, str]) -> AppConfig:
    """Override values from QBT_* environment variables."""
    server = config.server
    if "QBT_SERVER_URL" in environ:
        server = replace(server, url=environ["QBT_SERVER_URL"])
    if "QBT_SERVER_USERNAME" in environ:
        server = replace(server, username=environ["QBT_SERVER_USERNAME"])
    if "QBT_SERVER_PASSWORD" in environ:
        server = replace(server, password=environ["QBT_SERVER_PASSWORD"])

    ui = config.ui
    if "QBT_UI_REFRESH_INTERVAL" in environ:
        ui = replace(ui, refresh_interval=_as_int(environ["QBT_UI_REFRESH_INTERVAL"], "QBT_UI_REFRESH_INTERVAL"))

    debug = config.debug
    if "QBT_DEBUG_ENABLED" in environ:
        debug = replace(debug, enabled=_as_bool(environ["QBT_DEBUG_ENABLED"], "QBT_DEBUG_ENABLED"))
    if "QBT_DEBUG_LOG_FILE" in environ:
        debug = replace(debug, log_file=environ["QBT_DEBUG_LOG_FILE"])

    return AppConfig(server=server, ui=ui, debug=debug)


def apply_overrides(
    config: AppConfig,
    url: str | None = None,
    username: str | None = None,
    password: str | None = None,
    refresh_interval: int | None = None,
    debug: bool = False,
) -> AppConfig:
    """Override values from command-line flags (None = not given)."""
    server = config.server
    if url is not None:
        server = replace(server, url=url)
    if username is not None:
        server = replace(server, username=username)
    if password is not None:
        server = replace(server, password=password)
    ui = config.ui
    if refresh_interval is not None:
        ui = replace(ui, refresh_interval=refresh_interval)
    debug_config = replace(config.debug, enabled=True) if debug else config.debug
    return AppConfig(server=server, ui=ui, debug=debug_config)


def validate_config(config: AppConfig) -> list[str]:
    """Check a config. Raises ConfigError on errors, returns warnings."""
    warnings: list[str] = []

    if not config.server.url:
        raise ConfigError("server.url is required (config file, QBT_SERVER_URL or --url)")
    parts = urlsplit(config.server.url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigError(f"server.url must be an http(s) URL, got {config.server.url!r}")

    if config.ui.refresh_interval < 1:
        raise ConfigError("ui.refresh_interval must be at least 1 second")

    if not config.ui.columns:
        raise ConfigError("ui.columns must name at least one column")
    unknown = [c for c in config.ui.columns if c not in COLUMN_KEYS]
    if unknown:
        raise ConfigError(f"Unknown column(s) {', '.join(unknown)}; valid: {', '.join(COLUMN_KEYS)}")

    if config.ui.default_sort.column not in COLUMN_KEYS:
        raise ConfigError(f"Unknown sort column {config.ui.default_sort.column!r}")
    if config.ui.default_sort.direction not in ("asc", "desc"):
        raise ConfigError("ui.default_sort.direction must be 'asc' or 'desc'")

    bad_vars = validate_template(config.ui.terminal_title.template)
    if bad_vars:
        raise ConfigError(
            f"Unknown title variable(s) {', '.join(bad_vars)}; valid: {', '.join(TITLE_VARIABLES)}"
        )
    if config.ui.terminal_title.enabled and not config.ui.terminal_title.template:
        warnings.append("terminal title enabled with an empty template; title left unchanged")

    if config.server.password and not config.server.username:
        warnings.append("server.password is set without server.username")
    return warnings


def load_config(
    path: str | None = None,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> tuple[AppConfig, list[str]]:
    """Load, layer and validate configuration.

    Args:
        path: Explicit config file (--config); searched for when None
        environ: Environment to read QBT_* from (defaults to os.environ)
        **overrides: Command-line values, see apply_overrides()

    Returns:
        (config, warnings)
    """
    config_file = find_config_file(path)
    if config_file is not None:
        log.info(f"Loading config from {config_file}")
        config = config_from_dict(read_config_file(config_file))
    else:
        config = AppConfig()
    config = apply_env(config, os.environ if environ is None else environ)
    config = apply_overrides(config, **overrides)
    warnings = validate_config(config)
    return config, warnings
