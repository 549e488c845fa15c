"""Psychological round price levels for chart overlays."""

from .config import IndicatorConfig, get_settings
from .indicator import PaintContext, PsyRoundLevel
from .levels import (
    InvalidConfiguration,
    InvalidInput,
    InvalidVisibleRange,
    RoundLevel,
    Tier,
    TierStyle,
    ViewportGeometry,
    VisibleRange,
    build_style_table,
    compute_levels,
    render,
)

__version__ = "0.1.0"

__all__ = [
    "IndicatorConfig",
    "InvalidConfiguration",
    "InvalidInput",
    "InvalidVisibleRange",
    "PaintContext",
    "PsyRoundLevel",
    "RoundLevel",
    "Tier",
    "TierStyle",
    "ViewportGeometry",
    "VisibleRange",
    "build_style_table",
    "compute_levels",
    "get_settings",
    "render",
]
