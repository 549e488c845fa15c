"""Visual tiers for round levels and the immutable tier -> style table."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Sequence, Tuple, Union

from .errors import InvalidConfiguration

DEFAULT_COLOR = "#6EDEFA"
DEFAULT_LINE_WIDTH = 1

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")


class Tier(Enum):
    """Visual weight class of a round level, strongest first."""

    MAGNITUDE_10000 = "magnitude_10000"
    MAGNITUDE_1000 = "magnitude_1000"
    EDGE_END = "edge_end"
    EDGE_NEAR_END = "edge_near_end"
    MAGNITUDE_100 = "magnitude_100"
    MAGNITUDE_50 = "magnitude_50"


# Opacity strictly decreases down this table.
TIER_ALPHA: Mapping[Tier, int] = MappingProxyType(
    {
        Tier.MAGNITUDE_10000: 255,
        Tier.MAGNITUDE_1000: 233,
        Tier.MAGNITUDE_100: 144,
        Tier.MAGNITUDE_50: 89,
        Tier.EDGE_NEAR_END: 55,
        Tier.EDGE_END: 34,
    }
)


@dataclass(frozen=True)
class TierStyle:
    """Pen used to draw every level of one tier."""

    color: str
    alpha: int
    width: int = DEFAULT_LINE_WIDTH

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return hex_to_rgb(self.color)

    @property
    def rgba(self) -> Tuple[int, int, int, int]:
        red, green, blue = self.rgb
        return red, green, blue, self.alpha

    @property
    def opacity(self) -> float:
        """Alpha on the 0..1 scale used by most plotting libraries."""
        return round(self.alpha / 255.0, 4)

    def to_dict(self) -> dict:
        return {"color": self.color, "alpha": self.alpha, "opacity": self.opacity, "width": self.width}


StyleTable = Mapping[Tier, TierStyle]
ColorLike = Union[str, Sequence[int]]


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    token = normalize_color(color)
    return int(token[1:3], 16), int(token[3:5], 16), int(token[5:7], 16)


def normalize_color(color: ColorLike) -> str:
    """Return ``color`` as an upper-case ``#RRGGBB`` string.

    Accepts ``#RRGGBB`` / ``RRGGBB`` strings or an ``(r, g, b)`` sequence.
    """

    if isinstance(color, str):
        match = _HEX_COLOR.match(color.strip())
        if not match:
            raise InvalidConfiguration("invalid_color")
        return f"#{match.group(1).upper()}"
    try:
        channels = [int(channel) for channel in color]
    except (TypeError, ValueError) as exc:
        raise InvalidConfiguration("invalid_color") from exc
    if len(channels) != 3 or any(channel < 0 or channel > 255 for channel in channels):
        raise InvalidConfiguration("invalid_color")
    return "#{:02X}{:02X}{:02X}".format(*channels)


def build_style_table(color: ColorLike = DEFAULT_COLOR, width: int = DEFAULT_LINE_WIDTH) -> StyleTable:
    """Build the read-only tier -> style mapping for a base color.

    Every tier shares the color and stroke width; only the alpha differs.
    Rebuild the table whenever the configured color changes.
    """

    base = normalize_color(color)
    stroke = int(width)
    if stroke <= 0:
        raise InvalidConfiguration("line_width_not_positive")
    return MappingProxyType({tier: TierStyle(color=base, alpha=alpha, width=stroke) for tier, alpha in TIER_ALPHA.items()})


__all__ = [
    "DEFAULT_COLOR",
    "DEFAULT_LINE_WIDTH",
    "StyleTable",
    "TIER_ALPHA",
    "Tier",
    "TierStyle",
    "build_style_table",
    "hex_to_rgb",
    "normalize_color",
]
