"""
Decoration Metrics

Computes the border and titlebar thickness drawn around a view's content
box. The tiling engine adds these margins to get each view's full box.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TYPE_CHECKING

from .geometry import Border

if TYPE_CHECKING:
    from .objects import View


class DecorationPosition(Enum):
    """Position of server-side titlebars."""

    TOP = "top"
    BOTTOM = "bottom"


@dataclass
class DecorationStyle:
    """Size configuration for server-side decorations."""

    height: int = 24  # Titlebar height
    position: DecorationPosition = DecorationPosition.TOP
    border_width: int = 2


class DecorationMetrics:
    """Answers `margins(view)` for the tiling engine."""

    def __init__(self, style: Optional[DecorationStyle] = None, use_ssd: bool = True):
        self.style = style or DecorationStyle()
        self.use_ssd = use_ssd

    def margins(self, view: "View") -> Border:
        """Decoration thickness around a view's content box.

        Client-side decorated views and fullscreen views have no margins.
        """
        if not self.use_ssd or not view.use_ssd or view.fullscreen:
            return Border()

        bw = self.style.border_width
        top = bw
        bottom = bw
        if self.style.position == DecorationPosition.TOP:
            top += self.style.height
        else:
            bottom += self.style.height

        return Border(left=bw, top=top, right=bw, bottom=bottom)
