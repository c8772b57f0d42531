"""Tests for configuration loading, layering and validation."""

from dataclasses import replace

import pytest

from config import (
    AppConfig,
    ConfigError,
    ServerConfig,
    apply_env,
    apply_overrides,
    config_from_dict,
    default_config_paths,
    find_config_file,
    load_config,
    validate_config,
)

FULL_CONFIG = """
[server]
url = "http://nas.local:8080"
username = "admin"
password = "secret"

[ui]
refresh_interval = 5
columns = ["name", "progress", "ratio"]

[ui.default_sort]
column = "ratio"
direction = "DESC"

[ui.terminal_title]
enabled = false
template = "{dl_speed}"

[debug]
enabled = true
log_file = "/tmp/qbt.log"
"""


@pytest.fixture(autouse=True)
def isolated_paths(tmp_path, monkeypatch):
    """Keep the default search paths away from the real home directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


def valid():
    return AppConfig(server=ServerConfig(url="http://localhost:8080"))


class TestConfigFile:
    """Finding and parsing the TOML file."""

    def test_full_file(self, tmp_path):
        """Every section is read."""
        path = tmp_path / "custom.toml"
        path.write_text(FULL_CONFIG)
        config, warnings = load_config(str(path), environ={})

        assert config.server.url == "http://nas.local:8080"
        assert config.server.username == "admin"
        assert config.ui.refresh_interval == 5
        assert config.ui.columns == ("name", "progress", "ratio")
        assert config.ui.default_sort.column == "ratio"
        assert config.ui.default_sort.direction == "desc"
        assert not config.ui.terminal_title.enabled
        assert config.debug.enabled
        assert config.debug.log_file == "/tmp/qbt.log"
        assert warnings == []

    def test_missing_keys_keep_defaults(self):
        config = config_from_dict({"server": {"url": "http://x:1"}})
        assert config.ui == AppConfig().ui
        assert config.debug == AppConfig().debug

    def test_explicit_path_must_exist(self, tmp_path):
        with pytest.raises(ConfigError, match="Config file not found"):
            find_config_file(str(tmp_path / "nope.toml"))

    def test_search_order(self, tmp_path):
        """./config.toml wins over the XDG config file."""
        xdg_file = tmp_path / "xdg" / "qbt-tui" / "config.toml"
        xdg_file.parent.mkdir(parents=True)
        xdg_file.write_text("")
        assert find_config_file() == xdg_file

        local = tmp_path / "config.toml"
        local.write_text("")
        assert find_config_file() == local
        assert default_config_paths() == [local, xdg_file]

    def test_no_file_found(self):
        assert find_config_file() is None

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[server\nurl = ")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(environ={})

    def test_section_must_be_table(self):
        with pytest.raises(ConfigError, match=r"\[server\] must be a table"):
            config_from_dict({"server": "http://x"})

    def test_bad_types(self):
        with pytest.raises(ConfigError, match="refresh_interval must be an integer"):
            config_from_dict({"ui": {"refresh_interval": "soon"}})
        with pytest.raises(ConfigError, match="refresh_interval must be an integer"):
            config_from_dict({"ui": {"refresh_interval": True}})
        with pytest.raises(ConfigError, match="debug.enabled must be a boolean"):
            config_from_dict({"debug": {"enabled": "maybe"}})
        with pytest.raises(ConfigError, match="ui.columns must be a list"):
            config_from_dict({"ui": {"columns": "name"}})


class TestLayering:
    """Environment variables override the file, flags override both."""

    def test_env_overrides_file(self, tmp_path):
        (tmp_path / "config.toml").write_text('[server]\nurl = "http://file:1"\n')
        config, _ = load_config(
            environ={"QBT_SERVER_URL": "http://env:2", "QBT_UI_REFRESH_INTERVAL": "7", "QBT_DEBUG_ENABLED": "yes"}
        )
        assert config.server.url == "http://env:2"
        assert config.ui.refresh_interval == 7
        assert config.debug.enabled

    def test_flags_override_env(self):
        config, _ = load_config(
            environ={"QBT_SERVER_URL": "http://env:2", "QBT_SERVER_USERNAME": "env"},
            url="http://flag:3",
            refresh_interval=9,
        )
        assert config.server.url == "http://flag:3"
        assert config.server.username == "env"
        assert config.ui.refresh_interval == 9

    def test_apply_env_bad_number(self):
        with pytest.raises(ConfigError, match="QBT_UI_REFRESH_INTERVAL"):
            apply_env(valid(), {"QBT_UI_REFRESH_INTERVAL": "x"})

    def test_apply_env_log_file_and_password(self):
        config = apply_env(valid(), {"QBT_SERVER_PASSWORD": "pw", "QBT_DEBUG_LOG_FILE": "/tmp/x.log"})
        assert config.server.password == "pw"
        assert config.debug.log_file == "/tmp/x.log"

    def test_overrides_none_means_not_given(self):
        base = apply_overrides(valid(), username="me")
        assert apply_overrides(base) == base
        assert apply_overrides(base, debug=True).debug.enabled


class TestValidation:
    """validate_config errors and warnings."""

    def test_valid_config_has_no_warnings(self):
        assert validate_config(valid()) == []

    def test_url_required(self):
        with pytest.raises(ConfigError, match="server.url is required"):
            load_config(environ={})

    @pytest.mark.parametrize("url", ["localhost:8080", "ftp://host", "http://"])
    def test_url_must_be_http(self, url):
        config = replace(valid(), server=ServerConfig(url=url))
        with pytest.raises(ConfigError, match="http"):
            validate_config(config)

    def test_refresh_interval_minimum(self):
        config = apply_overrides(valid(), refresh_interval=0)
        with pytest.raises(ConfigError, match="at least 1 second"):
            validate_config(config)

    def test_columns(self):
        with pytest.raises(ConfigError, match="at least one column"):
            validate_config(replace(valid(), ui=replace(valid().ui, columns=())))
        with pytest.raises(ConfigError, match="Unknown column"):
            validate_config(replace(valid(), ui=replace(valid().ui, columns=("name", "colour"))))

    def test_sort(self):
        ui = valid().ui
        with pytest.raises(ConfigError, match="Unknown sort column"):
            validate_config(replace(valid(), ui=replace(ui, default_sort=replace(ui.default_sort, column="x"))))
        with pytest.raises(ConfigError, match="direction"):
            validate_config(
                replace(valid(), ui=replace(ui, default_sort=replace(ui.default_sort, direction="up")))
            )

    def test_title_variables(self):
        ui = valid().ui
        config = replace(valid(), ui=replace(ui, terminal_title=replace(ui.terminal_title, template="{speed}")))
        with pytest.raises(ConfigError, match="Unknown title variable"):
            validate_config(config)

    def test_warnings(self):
        ui = valid().ui
        config = replace(
            valid(),
            server=ServerConfig(url="http://x:1", password="pw"),
            ui=replace(ui, terminal_title=replace(ui.terminal_title, template="")),
        )
        warnings = validate_config(config)
        assert len(warnings) == 2
        assert "empty template" in warnings[0]
        assert "without server.username" in warnings[1]
