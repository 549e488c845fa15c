"""Round level generation and tiering."""

from .errors import InvalidConfiguration, InvalidInput, InvalidVisibleRange
from .renderer import (
    RoundLevel,
    TIER_RULES,
    ViewportGeometry,
    VisibleRange,
    classify_tier,
    compute_levels,
    floor_to_unit,
    level_span,
    render,
    validate_base_unit,
)
from .tiers import DEFAULT_COLOR, TIER_ALPHA, StyleTable, Tier, TierStyle, build_style_table, normalize_color

__all__ = [
    "DEFAULT_COLOR",
    "InvalidConfiguration",
    "InvalidInput",
    "InvalidVisibleRange",
    "RoundLevel",
    "StyleTable",
    "TIER_ALPHA",
    "TIER_RULES",
    "Tier",
    "TierStyle",
    "ViewportGeometry",
    "VisibleRange",
    "build_style_table",
    "classify_tier",
    "compute_levels",
    "floor_to_unit",
    "level_span",
    "normalize_color",
    "render",
    "validate_base_unit",
]
