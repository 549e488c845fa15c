"""Round level enumeration and tiering for one render pass."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .errors import InvalidConfiguration, InvalidVisibleRange
from .tiers import Tier

logger = logging.getLogger(__name__)

PriceToPixel = Callable[[float], float]
DrawLine = Callable[[Tier, int], None]


@dataclass(frozen=True)
class VisibleRange:
    """Price bounds of the viewport, recomputed every frame."""

    top_price: float
    bottom_price: float


@dataclass(frozen=True)
class ViewportGeometry:
    height: int
    width: int

    @property
    def margin(self) -> int:
        """Height of the edge band at the top and at the bottom."""
        return self.height // 8

    @property
    def is_degenerate(self) -> bool:
        return self.height <= 0 or self.width <= 0


@dataclass(frozen=True)
class RoundLevel:
    price: float
    y: int
    tier: Tier

    def to_dict(self) -> dict:
        return {"price": self.price, "y": self.y, "tier": self.tier.value}


TierRule = Tuple[Callable[[float, int, ViewportGeometry], bool], Tier]

# First match wins. Magnitude checks sit above the edge bands so a
# 1000/10000 multiple is never faded.
TIER_RULES: Sequence[TierRule] = (
    (lambda price, y, geo: price % 10000 == 0, Tier.MAGNITUDE_10000),
    (lambda price, y, geo: price % 1000 == 0, Tier.MAGNITUDE_1000),
    (lambda price, y, geo: y <= geo.margin, Tier.EDGE_END),
    (lambda price, y, geo: y >= geo.height - geo.margin, Tier.EDGE_END),
    (lambda price, y, geo: y <= geo.margin * 2, Tier.EDGE_NEAR_END),
    (lambda price, y, geo: y >= geo.height - geo.margin * 2, Tier.EDGE_NEAR_END),
    (lambda price, y, geo: price % 100 == 0, Tier.MAGNITUDE_100),
)
DEFAULT_TIER = Tier.MAGNITUDE_50


def validate_base_unit(base_unit: object) -> int:
    """Return ``base_unit`` if it is a positive integer, else raise."""

    if isinstance(base_unit, bool) or not isinstance(base_unit, int):
        raise InvalidConfiguration("base_unit_not_integer")
    if base_unit <= 0:
        raise InvalidConfiguration("base_unit_not_positive")
    return base_unit


def _validate_range(visible_range: VisibleRange) -> Tuple[float, float]:
    top = float(visible_range.top_price)
    bottom = float(visible_range.bottom_price)
    if not (math.isfinite(top) and math.isfinite(bottom)):
        raise InvalidVisibleRange("range_not_finite")
    if top < bottom:
        raise InvalidVisibleRange("range_inverted")
    return top, bottom


def floor_to_unit(price: float, base_unit: int) -> int:
    """Largest multiple of ``base_unit`` at or below ``price``."""
    return math.floor(price / base_unit) * base_unit


def classify_tier(price: float, y: int, geometry: ViewportGeometry) -> Tier:
    """First tier in ``TIER_RULES`` matching the exact ``price`` and row ``y``."""
    for predicate, tier in TIER_RULES:
        if predicate(price, y, geometry):
            return tier
    return DEFAULT_TIER


def _pixel_row(price_to_pixel_y: PriceToPixel, price: float) -> Optional[int]:
    try:
        raw = float(price_to_pixel_y(price))
    except (ArithmeticError, ValueError, TypeError) as exc:
        logger.debug("price->pixel conversion failed for %s: %s", price, exc)
        return None
    if not math.isfinite(raw):
        return None
    return int(raw)


def level_span(visible_range: VisibleRange, base_unit: int) -> Tuple[int, int, int]:
    """Return ``(floor_min, floor_max, count)`` for a visible range.

    ``count`` is the number of candidate levels, starting at ``floor_min``;
    it is zero or negative when the range fits inside one unit.
    """

    unit = validate_base_unit(base_unit)
    top, bottom = _validate_range(visible_range)
    floor_min = floor_to_unit(bottom, unit)
    floor_max = floor_to_unit(top, unit)
    return floor_min, floor_max, (floor_max - floor_min) // unit


def compute_levels(
    visible_range: VisibleRange,
    base_unit: int,
    geometry: ViewportGeometry,
    price_to_pixel_y: PriceToPixel,
) -> List[RoundLevel]:
    """Enumerate and classify the round levels visible in one frame.

    Levels come back in ascending price order. Candidates whose pixel row
    falls outside ``[0, geometry.height)`` or cannot be converted are dropped.
    """

    floor_min, _, count = level_span(visible_range, base_unit)
    if geometry.is_degenerate or count <= 0:
        return []

    levels: List[RoundLevel] = []
    for step in range(count):
        price = floor_min + step * base_unit
        y = _pixel_row(price_to_pixel_y, price)
        if y is None or y < 0 or y >= geometry.height:
            continue
        levels.append(RoundLevel(price=float(price), y=y, tier=classify_tier(price, y, geometry)))
    return levels


def render(
    visible_range: VisibleRange,
    base_unit: int,
    geometry: ViewportGeometry,
    price_to_pixel_y: PriceToPixel,
    draw_line: DrawLine,
) -> List[RoundLevel]:
    """Draw one horizontal line per visible round level.

    ``draw_line(tier, y)`` is called once per level in ascending price order,
    only after every precondition has been checked. Returns the drawn levels.
    """

    levels = compute_levels(visible_range, base_unit, geometry, price_to_pixel_y)
    for level in levels:
        draw_line(level.tier, level.y)
    return levels


__all__ = [
    "DEFAULT_TIER",
    "DrawLine",
    "PriceToPixel",
    "RoundLevel",
    "TIER_RULES",
    "ViewportGeometry",
    "VisibleRange",
    "classify_tier",
    "compute_levels",
    "floor_to_unit",
    "level_span",
    "render",
    "validate_base_unit",
]
