"""Host-facing indicator that paints psychological round levels.

The chart host owns the lifecycle. It calls `on_init` once, `on_settings_updated`
whenever the user edits the inputs, and `on_paint` for every repaint with a
`PaintContext` carrying the coordinate converter and the graphics surface of
the window being painted. Level selection and tiering live in
`round_levels.levels`; this module only adapts them to the host.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol

from pydantic import ValidationError

from .config import IndicatorConfig, Settings, config_from_settings
from .levels import (
    InvalidConfiguration,
    RoundLevel,
    StyleTable,
    Tier,
    TierStyle,
    ViewportGeometry,
    VisibleRange,
    build_style_table,
    level_span,
    render,
)
from .telemetry import record_levels_drawn, record_paint

logger = logging.getLogger(__name__)

NAME = "PsyRoundLevel"
SHORT_NAME = "LvL"
DESCRIPTION = "Psychological round price levels (50, 100, 1000, 10000) with edge fading."
HELP_LINK = "https://github.com/qtx-project/psy-round-level"
SOURCE_CODE_LINK = "https://github.com/qtx-project/psy-round-level"


class CoordinatesConverter(Protocol):
    def get_price(self, y: float) -> float: ...

    def get_chart_y(self, price: float) -> float: ...


class Graphics(Protocol):
    def draw_line(self, style: TierStyle, x1: float, y1: float, x2: float, y2: float) -> None: ...


@dataclass
class PaintContext:
    """One paint event: the window's converter, surface and pixel size."""

    converter: CoordinatesConverter
    graphics: Graphics
    width: int
    height: int


def _rejection_code(exc: ValidationError) -> str:
    for error in exc.errors():
        loc = error.get("loc") or ()
        if loc:
            return f"invalid_{loc[0]}"
    return "invalid_settings"


class PsyRoundLevel:
    """Round level overlay drawn on the main chart window."""

    name = NAME
    short_name = SHORT_NAME
    description = DESCRIPTION
    help_link = HELP_LINK
    source_code_link = SOURCE_CODE_LINK
    separate_window = False

    def __init__(self, config: Optional[IndicatorConfig] = None) -> None:
        self.config = config or IndicatorConfig()
        self.symbol: Optional[str] = None
        self.styles: StyleTable = build_style_table(self.config.color)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "PsyRoundLevel":
        return cls(config_from_settings(settings))

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def on_init(self, symbol: str) -> None:
        self.symbol = symbol
        self.debug(f"Instantiate {self.name} on {symbol}")

    def on_settings_updated(self, **changes: Any) -> IndicatorConfig:
        """Apply user edits and rebuild the style table.

        A rejected update leaves the previous configuration in place and is
        surfaced to the host as `InvalidConfiguration`.
        """

        payload = {**self.config.model_dump(), **changes}
        try:
            config = IndicatorConfig.model_validate(payload)
        except ValidationError as exc:
            code = _rejection_code(exc)
            logger.warning("Rejected %s settings update %s: %s", self.name, changes, code)
            raise InvalidConfiguration(code) from exc
        self.config = config
        self.styles = build_style_table(config.color)
        return config

    def on_paint(self, ctx: PaintContext) -> List[RoundLevel]:
        geometry = ViewportGeometry(height=int(ctx.height), width=int(ctx.width))
        if geometry.is_degenerate:
            record_paint("degenerate")
            return []

        converter = ctx.converter
        try:
            visible = VisibleRange(
                top_price=converter.get_price(0),
                bottom_price=converter.get_price(geometry.height),
            )
            floor_min, floor_max, count = level_span(visible, self.config.base_unit)
        except (ValueError, ArithmeticError, TypeError) as exc:
            logger.warning("Skipping %s paint on %s: %s", self.name, self.symbol, exc)
            record_paint("rejected")
            return []

        self.debug(f"Update Lines Round Level: from {floor_min} to {floor_max} <- {count}")
        levels = render(visible, self.config.base_unit, geometry, converter.get_chart_y, self._line_drawer(ctx))
        record_levels_drawn(levels)
        record_paint("drawn" if levels else "empty")
        return levels

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _line_drawer(self, ctx: PaintContext):
        styles = self.styles
        graphics = ctx.graphics
        width = ctx.width

        def _draw(tier: Tier, y: int) -> None:
            graphics.draw_line(styles[tier], 0, y, width, y)

        return _draw

    def debug(self, message: str) -> None:
        """Log ``message`` when the developer debug input is on."""
        if self.config.debug_enabled:
            logger.info(message, extra={"indicator": self.name, "symbol": self.symbol})


__all__ = [
    "CoordinatesConverter",
    "Graphics",
    "HELP_LINK",
    "NAME",
    "PaintContext",
    "PsyRoundLevel",
    "SHORT_NAME",
    "SOURCE_CODE_LINK",
]
