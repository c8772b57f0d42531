"""Tests for CLI argument parsing, logging setup and startup failures."""

import logging
import sys
from unittest.mock import MagicMock, patch

import pytest

from api import AuthenticationError
from cli import QBT_TUI_VERSION, _get_log_path, main, parse_args, setup_logging
from config import AppConfig, DebugConfig


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """No config files or QBT_* variables leak in from the real environment."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    for name in ("QBT_SERVER_URL", "QBT_SERVER_USERNAME", "QBT_SERVER_PASSWORD", "QBT_UI_REFRESH_INTERVAL"):
        monkeypatch.delenv(name, raising=False)
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if isinstance(handler, logging.FileHandler):
            handler.close()
            root.removeHandler(handler)


class TestParseArgs:
    """Test parse_args() function."""

    def test_no_args(self):
        """Every option defaults to not given."""
        args = parse_args([])
        assert args.config_path is None
        assert args.url is None
        assert args.username is None
        assert args.password is None
        assert args.refresh is None
        assert args.debug is False

    def test_all_options(self):
        """Short and long forms are parsed."""
        args = parse_args(
            ["--config", "/etc/qbt.toml", "-u", "http://nas:8080", "--username", "admin", "-p", "pw", "-r", "5", "--debug"]
        )
        assert args.config_path == "/etc/qbt.toml"
        assert args.url == "http://nas:8080"
        assert args.username == "admin"
        assert args.password == "pw"
        assert args.refresh == 5
        assert args.debug is True

    def test_reads_sys_argv(self):
        """argv=None falls back to sys.argv."""
        with patch.object(sys, "argv", ["qbt-tui", "--url", "http://x:1"]):
            assert parse_args().url == "http://x:1"

    def test_refresh_must_be_integer(self, capsys):
        """A non-numeric refresh interval is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["-r", "soon"])
        assert exc_info.value.code == 2

    def test_version(self, capsys):
        """--version prints the version and exits."""
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--version"])
        assert exc_info.value.code == 0
        assert QBT_TUI_VERSION in capsys.readouterr().out

    def test_help_lists_environment(self, capsys):
        """--help shows the structured help text."""
        with pytest.raises(SystemExit):
            parse_args(["--help"])
        out = capsys.readouterr().out
        assert "qbt-tui - A terminal dashboard for qBittorrent." in out
        assert "QBT_SERVER_URL" in out


class TestLogging:
    """Test setup_logging() function."""

    def test_default_log_path_under_xdg_state(self, tmp_path):
        """Logs go to $XDG_STATE_HOME/qbt-tui/qbt-tui.log."""
        path = setup_logging(AppConfig())
        assert path == tmp_path / "state" / "qbt-tui" / "qbt-tui.log"
        assert path.parent.is_dir()
        assert logging.getLogger().level == logging.INFO

    def test_get_log_path_without_create(self, tmp_path):
        """create=False doesn't touch the filesystem."""
        path = _get_log_path(create=False)
        assert not path.parent.exists()

    def test_debug_log_file(self, tmp_path):
        """debug.log_file and debug.enabled are honoured."""
        target = tmp_path / "logs" / "debug.log"
        config = AppConfig(debug=DebugConfig(enabled=True, log_file=str(target)))
        path = setup_logging(config)
        logging.getLogger("test").debug("hello")
        assert path == target
        assert logging.getLogger().level == logging.DEBUG
        assert "hello" in target.read_text()


class TestMain:
    """Test main() startup paths."""

    def test_config_error_exits(self, capsys):
        """A missing server URL prints an error box and exits 1."""
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Error: Invalid configuration" in err
        assert "server.url is required" in err

    def test_login_failure_exits(self, capsys):
        """A rejected login closes the client and exits 1."""
        client = MagicMock()
        client.login.side_effect = AuthenticationError("invalid username or password")
        with patch("cli.QBittorrentClient", return_value=client) as client_cls:
            with pytest.raises(SystemExit) as exc_info:
                main(["--url", "http://nas:8080", "--username", "admin", "-p", "bad"])
        assert exc_info.value.code == 1
        client_cls.assert_called_once_with("http://nas:8080", "admin", "bad")
        client.close.assert_called_once()
        err = capsys.readouterr().err
        assert "Cannot connect to http://nas:8080" in err
        assert "invalid username or password" in err

    def test_runs_app_and_closes_client(self, capsys):
        """A successful login runs the app, then closes the client and resets the title."""
        client = MagicMock()
        with (
            patch("cli.QBittorrentClient", return_value=client),
            patch("cli.QbtApp") as app_cls,
            patch("cli.set_terminal_title") as set_title,
        ):
            main(["--url", "http://nas:8080", "-p", "pw"])

        app_cls.return_value.run.assert_called_once()
        config = app_cls.call_args.args[0]
        assert config.server.url == "http://nas:8080"
        client.close.assert_called_once()
        set_title.assert_called_once_with("")
        assert "Warning: server.password is set without server.username" in capsys.readouterr().err
