"""Matplotlib implementation of the indicator's chart host capabilities."""

from __future__ import annotations

import io
import math
from typing import List, Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.axes import Axes

from ..config import IndicatorConfig
from ..indicator import PaintContext, PsyRoundLevel
from ..levels import InvalidVisibleRange, RoundLevel, TierStyle

BACKGROUND_COLOR = "#0f172a"


class AxesConverter:
    """Pixel rows of an Axes, counted downwards from its top edge."""

    def __init__(self, ax: Axes) -> None:
        self.ax = ax

    @property
    def _x0(self) -> float:
        return self.ax.get_xlim()[0]

    @property
    def _top(self) -> float:
        return self.ax.get_window_extent().y1

    @property
    def width(self) -> int:
        return int(round(self.ax.get_window_extent().width))

    @property
    def height(self) -> int:
        return int(round(self.ax.get_window_extent().height))

    def get_chart_y(self, price: float) -> float:
        _, display_y = self.ax.transData.transform((self._x0, price))
        return self._top - display_y

    def get_price(self, y: float) -> float:
        display_y = self._top - float(y)
        _, price = self.ax.transData.inverted().transform((self._x0, display_y))
        return float(price)


class AxesGraphics:
    """Draws horizontal level lines onto an Axes."""

    def __init__(self, ax: Axes, converter: AxesConverter) -> None:
        self.ax = ax
        self.converter = converter

    def draw_line(self, style: TierStyle, x1: float, y1: float, x2: float, y2: float) -> None:
        width = self.converter.width or 1
        price = self.converter.get_price(y1)
        self.ax.axhline(
            price,
            xmin=max(0.0, x1 / width),
            xmax=min(1.0, x2 / width),
            color=style.color,
            alpha=style.opacity,
            linewidth=style.width,
        )


def paint_axes(ax: Axes, indicator: PsyRoundLevel) -> List[RoundLevel]:
    """Run one indicator paint pass against ``ax`` and its current y limits."""

    converter = AxesConverter(ax)
    ctx = PaintContext(
        converter=converter,
        graphics=AxesGraphics(ax, converter),
        width=converter.width,
        height=converter.height,
    )
    return indicator.on_paint(ctx)


def render_levels_png(
    top: float,
    bottom: float,
    config: Optional[IndicatorConfig] = None,
    *,
    width: int = 1200,
    height: int = 800,
    dpi: int = 100,
    symbol: Optional[str] = None,
) -> bytes:
    """Render the round levels of ``[bottom, top]`` as a ``width`` x ``height`` PNG.

    A zero-height price range yields an empty frame, as ``/levels`` does.
    """

    if not (math.isfinite(top) and math.isfinite(bottom)):
        raise InvalidVisibleRange("range_not_finite")
    if top < bottom:
        raise InvalidVisibleRange("range_inverted")

    indicator = PsyRoundLevel(config)
    if symbol:
        indicator.on_init(symbol)

    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi, facecolor=BACKGROUND_COLOR)
    try:
        ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
        ax.set_facecolor(BACKGROUND_COLOR)
        ax.set_xlim(0.0, 1.0)
        ax.set_axis_off()
        if top > bottom:
            ax.set_ylim(bottom, top)
            paint_axes(ax, indicator)

        buf = io.BytesIO()
        fig.savefig(buf, format="png", facecolor=fig.get_facecolor())
    finally:
        plt.close(fig)
    buf.seek(0)
    return buf.getvalue()


__all__ = ["AxesConverter", "AxesGraphics", "BACKGROUND_COLOR", "paint_axes", "render_levels_png"]
