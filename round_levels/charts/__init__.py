"""Reference chart hosts for the round level indicator."""

from .matplotlib_host import AxesConverter, AxesGraphics, paint_axes, render_levels_png
from .scale import LinearPriceScale

__all__ = ["AxesConverter", "AxesGraphics", "LinearPriceScale", "paint_axes", "render_levels_png"]
