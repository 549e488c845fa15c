"""Linear price <-> pixel mapping for hosts without a chart engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LinearPriceScale:
    """Maps ``top`` to pixel row 0 and ``bottom`` to pixel row ``height``.

    Rows grow downwards, so higher prices get smaller rows.
    """

    top: float
    bottom: float
    height: int

    @property
    def span(self) -> float:
        return float(self.top) - float(self.bottom)

    def get_chart_y(self, price: float) -> float:
        return (float(self.top) - float(price)) * self.height / self.span

    def get_price(self, y: float) -> float:
        return float(self.top) - float(y) * self.span / self.height


__all__ = ["LinearPriceScale"]
