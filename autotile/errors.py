"""
Exceptions raised around the tiling core.

The layout pipeline itself never raises for geometry; these cover the
configuration, command and IPC layers.
"""


class AutotileError(Exception):
    """Base class for autotile errors."""


class ConfigError(AutotileError, ValueError):
    """Invalid configuration value."""


class CommandError(AutotileError, ValueError):
    """Unknown tiling command or invalid command argument."""


class IPCError(AutotileError):
    """Failure talking to a running autotile IPC server."""
