"""
Window Rules

Per-window property lookup. Rules match views by app id and title glob
patterns and resolve the tiling properties to a tri-state value.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from fnmatch import fnmatchcase
from typing import Dict, List, Optional, Union, TYPE_CHECKING

from .errors import ConfigError

if TYPE_CHECKING:
    from .objects import View


# Property keys understood by the tiling engine
FIXED_POSITION = "fixedPosition"
TILE = "tile"
TILE_DIRECTION = "tileDirection"

KNOWN_PROPERTIES = (FIXED_POSITION, TILE, TILE_DIRECTION)


class Prop(IntEnum):
    """Tri-state rule property value."""

    UNSET = 0
    FALSE = 1
    TRUE = 2


def parse_prop(value: Union[Prop, bool, str, None]) -> Prop:
    """
    Parse a rule property value.

    Accepts:
    - Prop members
    - booleans
    - strings "yes"/"no"/"true"/"false"/"on"/"off" (case-insensitive)
    - None or "default" for unset
    """
    if isinstance(value, Prop):
        return value
    if value is None:
        return Prop.UNSET
    if isinstance(value, bool):
        return Prop.TRUE if value else Prop.FALSE
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("yes", "true", "on"):
            return Prop.TRUE
        if lowered in ("no", "false", "off"):
            return Prop.FALSE
        if lowered in ("", "default", "unset"):
            return Prop.UNSET
    raise ConfigError(f"Invalid property value: {value!r}. Use yes/no or true/false")


@dataclass
class WindowRule:
    """A single window rule.

    `identifier` matches the view's app id, `title` its title; both are
    glob patterns and both must match.
    """

    identifier: str = "*"
    title: str = "*"
    properties: Dict[str, Prop] = field(default_factory=dict)

    def __post_init__(self):
        """Validate property keys and normalize values."""
        parsed = {}
        for key, value in self.properties.items():
            if key not in KNOWN_PROPERTIES:
                raise ConfigError(
                    f"Unknown window rule property: {key}. "
                    f"Known: {', '.join(KNOWN_PROPERTIES)}"
                )
            parsed[key] = parse_prop(value)
        self.properties = parsed

    def matches(self, view: "View") -> bool:
        return fnmatchcase(view.app_id or "", self.identifier) and fnmatchcase(
            view.title or "", self.title
        )


class WindowRules:
    """Ordered rule set; later matching rules override earlier ones."""

    def __init__(self, rules: Optional[List[WindowRule]] = None):
        self.rules: List[WindowRule] = list(rules) if rules else []

    def add(self, rule: WindowRule):
        self.rules.append(rule)

    def get_property(self, view: "View", key: str) -> Prop:
        """Resolve a property for a view.

        Args:
            view: View to resolve the property for
            key: Property name (fixedPosition, tile, tileDirection)

        Returns:
            The value of the last matching rule that sets the key,
            or Prop.UNSET
        """
        result = Prop.UNSET
        for rule in self.rules:
            value = rule.properties.get(key, Prop.UNSET)
            if value is not Prop.UNSET and rule.matches(view):
                result = value
        return result
