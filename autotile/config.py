"""
Configuration

TilingConfig carries the tiling mode, geometry settings, decoration sizes
and window rules.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Union

from .decoration import DecorationMetrics, DecorationPosition, DecorationStyle
from .errors import ConfigError
from .layouts import TilingMode
from .rules import WindowRule, WindowRules


def default_socket_path() -> str:
    """IPC socket path for the current Wayland display."""
    runtime_dir = os.getenv("XDG_RUNTIME_DIR", "/tmp")
    display = os.getenv("WAYLAND_DISPLAY", "wayland-0")
    return os.path.join(runtime_dir, f"autotile-{display}.sock")


def parse_mode(value: Union[TilingMode, str]) -> TilingMode:
    """Parse a tiling mode name. "stacking" is accepted for OFF."""
    if isinstance(value, TilingMode):
        return value
    name = value.strip().lower()
    if name == "stacking":
        return TilingMode.OFF
    try:
        return TilingMode(name)
    except ValueError:
        raise ConfigError(
            f"Invalid tiling mode: {value!r}. Use off, smart or grid"
        ) from None


def parse_position(value: Union[DecorationPosition, str]) -> DecorationPosition:
    if isinstance(value, DecorationPosition):
        return value
    try:
        return DecorationPosition(value.strip().lower())
    except ValueError:
        raise ConfigError(f"Invalid titlebar position: {value!r}. Use top or bottom") from None


def _int_from_env(env: Mapping[str, str], key: str) -> Optional[int]:
    raw = env.get(key)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None


@dataclass
class TilingConfig:
    """Auto-tiling configuration."""

    # Tiling mode at startup
    mode: Union[TilingMode, str] = TilingMode.SMART

    # Layout settings
    gap: int = 4
    border_width: int = 2

    # Server-side decorations
    use_ssd: bool = True
    titlebar_height: int = 24
    titlebar_position: Union[DecorationPosition, str] = DecorationPosition.TOP

    # Window rules, later rules override earlier ones
    rules: List[WindowRule] = field(default_factory=list)

    # IPC socket (defaults to $XDG_RUNTIME_DIR/autotile-$WAYLAND_DISPLAY.sock)
    socket_path: Optional[str] = None

    def __post_init__(self):
        """Parse enum strings and validate sizes."""
        self.mode = parse_mode(self.mode)
        self.titlebar_position = parse_position(self.titlebar_position)
        for name in ("gap", "border_width", "titlebar_height"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ConfigError(f"{name} must be a non-negative integer, got {value!r}")
        if self.socket_path is None:
            self.socket_path = default_socket_path()

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, **overrides) -> "TilingConfig":
        """
        Build a config from AUTOTILE_* environment variables.

        Recognised: AUTOTILE_MODE, AUTOTILE_GAP, AUTOTILE_BORDER_WIDTH,
        AUTOTILE_TITLEBAR_HEIGHT, AUTOTILE_SOCKET. Keyword overrides win.
        """
        env = os.environ if env is None else env
        values = {}

        if env.get("AUTOTILE_MODE"):
            values["mode"] = env["AUTOTILE_MODE"]
        for key, name in (
            ("AUTOTILE_GAP", "gap"),
            ("AUTOTILE_BORDER_WIDTH", "border_width"),
            ("AUTOTILE_TITLEBAR_HEIGHT", "titlebar_height"),
        ):
            value = _int_from_env(env, key)
            if value is not None:
                values[name] = value
        if env.get("AUTOTILE_SOCKET"):
            values["socket_path"] = env["AUTOTILE_SOCKET"]

        values.update(overrides)
        return cls(**values)

    def decoration_metrics(self) -> DecorationMetrics:
        style = DecorationStyle(
            height=self.titlebar_height,
            position=self.titlebar_position,
            border_width=self.border_width,
        )
        return DecorationMetrics(style, use_ssd=self.use_ssd)

    def window_rules(self) -> WindowRules:
        return WindowRules(self.rules)
