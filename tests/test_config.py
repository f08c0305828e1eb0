"""
Unit tests for configuration and decoration metrics.
"""

import pytest
from autotile.config import TilingConfig, default_socket_path
from autotile.decoration import DecorationMetrics, DecorationPosition, DecorationStyle
from autotile.errors import ConfigError
from autotile.geometry import Border
from autotile.layouts import TilingMode
from autotile.objects import View


@pytest.mark.unit
class TestTilingConfig:
    """Test TilingConfig parsing and validation."""

    def test_defaults(self):
        config = TilingConfig()
        assert config.mode == TilingMode.SMART
        assert config.gap == 4
        assert config.titlebar_position == DecorationPosition.TOP
        assert config.socket_path.endswith(".sock")

    @pytest.mark.parametrize(
        "value,mode",
        [("smart", TilingMode.SMART), ("GRID", TilingMode.GRID), ("stacking", TilingMode.OFF)],
    )
    def test_mode_strings(self, value, mode):
        assert TilingConfig(mode=value).mode == mode

    def test_invalid_mode(self):
        with pytest.raises(ConfigError):
            TilingConfig(mode="spiral")

    @pytest.mark.parametrize("field", ["gap", "border_width", "titlebar_height"])
    def test_negative_sizes_rejected(self, field):
        with pytest.raises(ConfigError):
            TilingConfig(**{field: -1})

    def test_invalid_titlebar_position(self):
        with pytest.raises(ConfigError):
            TilingConfig(titlebar_position="left")

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            TilingConfig(gap=-5)

    def test_from_env(self):
        env = {
            "AUTOTILE_MODE": "grid",
            "AUTOTILE_GAP": "12",
            "AUTOTILE_BORDER_WIDTH": "3",
            "AUTOTILE_TITLEBAR_HEIGHT": "0",
            "AUTOTILE_SOCKET": "/tmp/custom.sock",
        }
        config = TilingConfig.from_env(env)
        assert config.mode == TilingMode.GRID
        assert config.gap == 12
        assert config.border_width == 3
        assert config.titlebar_height == 0
        assert config.socket_path == "/tmp/custom.sock"

    def test_from_env_overrides_win(self):
        config = TilingConfig.from_env({"AUTOTILE_GAP": "12"}, gap=2)
        assert config.gap == 2

    def test_from_env_bad_integer(self):
        with pytest.raises(ConfigError):
            TilingConfig.from_env({"AUTOTILE_GAP": "wide"})

    def test_default_socket_path(self, monkeypatch):
        monkeypatch.setenv("XDG_RUNTIME_DIR", "/run/user/1000")
        monkeypatch.setenv("WAYLAND_DISPLAY", "wayland-1")
        assert default_socket_path() == "/run/user/1000/autotile-wayland-1.sock"


@pytest.mark.unit
class TestDecorationMetrics:
    """Test decoration margins."""

    def test_titlebar_on_top(self):
        metrics = DecorationMetrics(DecorationStyle(height=20, border_width=2))
        assert metrics.margins(View(1)) == Border(left=2, top=22, right=2, bottom=2)

    def test_titlebar_on_bottom(self):
        style = DecorationStyle(height=20, position=DecorationPosition.BOTTOM, border_width=2)
        assert DecorationMetrics(style).margins(View(1)) == Border(2, 2, 2, 22)

    def test_client_side_decorations(self):
        metrics = DecorationMetrics()
        assert metrics.margins(View(1, use_ssd=False)) == Border()

    def test_fullscreen_has_no_margins(self):
        view = View(1)
        view.fullscreen = True
        assert DecorationMetrics().margins(view) == Border()

    def test_disabled_globally(self):
        assert DecorationMetrics(use_ssd=False).margins(View(1)) == Border()

    def test_from_config(self):
        config = TilingConfig(border_width=1, titlebar_height=10, titlebar_position="bottom")
        assert config.decoration_metrics().margins(View(1)) == Border(1, 1, 1, 11)
