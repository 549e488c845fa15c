"""HTTP endpoints exposing round level computation and PNG previews."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response
from pydantic import ValidationError

from .charts import LinearPriceScale, render_levels_png
from .config import IndicatorConfig, config_from_settings, get_settings
from .indicator import PaintContext, PsyRoundLevel
from .levels import InvalidInput, TierStyle, ViewportGeometry, VisibleRange, level_span

router = APIRouter(prefix="/levels", tags=["levels"])

MAX_PIXELS = 8000
MAX_LEVELS = 20000


class _LineCollector:
    """Graphics surface that records draw calls instead of painting."""

    def __init__(self) -> None:
        self.lines: List[Dict[str, Any]] = []

    def draw_line(self, style: TierStyle, x1: float, y1: float, x2: float, y2: float) -> None:
        self.lines.append({"y": int(y1), "x1": x1, "x2": x2, **style.to_dict()})


def _resolve_config(base_unit: Optional[int], color: Optional[str]) -> IndicatorConfig:
    config = config_from_settings(get_settings())
    overrides: Dict[str, Any] = {}
    if base_unit is not None:
        overrides["base_unit"] = base_unit
    if color is not None:
        overrides["color"] = color
    if not overrides:
        return config
    try:
        return IndicatorConfig.model_validate({**config.model_dump(), **overrides})
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
        raise HTTPException(status_code=400, detail=f"Invalid settings: {', '.join(fields) or 'unknown'}") from exc


def _checked_span(top: float, bottom: float, base_unit: int) -> Dict[str, int]:
    try:
        floor_min, floor_max, count = level_span(VisibleRange(top_price=top, bottom_price=bottom), base_unit)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if count > MAX_LEVELS:
        raise HTTPException(status_code=400, detail="too_many_levels")
    return {"floor_min": floor_min, "floor_max": floor_max, "count": count}


@router.get("")
def list_levels(
    top: float = Query(..., description="Price at the top edge of the viewport."),
    bottom: float = Query(..., description="Price at the bottom edge of the viewport."),
    height: int = Query(800, ge=1, le=MAX_PIXELS),
    width: int = Query(1200, ge=1, le=MAX_PIXELS),
    base_unit: Optional[int] = Query(None),
    color: Optional[str] = Query(None),
) -> Dict[str, Any]:
    config = _resolve_config(base_unit, color)
    span = _checked_span(top, bottom, config.base_unit)

    indicator = PsyRoundLevel(config)
    collector = _LineCollector()
    levels = indicator.on_paint(
        PaintContext(
            converter=LinearPriceScale(top=top, bottom=bottom, height=height),
            graphics=collector,
            width=width,
            height=height,
        )
    )
    payload = [
        {**level.to_dict(), **indicator.styles[level.tier].to_dict()}
        for level in levels
    ]
    return {
        "top": top,
        "bottom": bottom,
        "base_unit": config.base_unit,
        "margin": ViewportGeometry(height=height, width=width).margin,
        "span": span,
        "levels": payload,
    }


@router.get("/png")
def levels_png(
    top: float,
    bottom: float,
    height: Optional[int] = Query(None, ge=1, le=MAX_PIXELS),
    width: Optional[int] = Query(None, ge=1, le=MAX_PIXELS),
    base_unit: Optional[int] = Query(None),
    color: Optional[str] = Query(None),
    symbol: Optional[str] = Query(None),
) -> Response:
    settings = get_settings()
    config = _resolve_config(base_unit, color)
    _checked_span(top, bottom, config.base_unit)
    try:
        image = render_levels_png(
            top,
            bottom,
            config,
            width=width or settings.chart_width,
            height=height or settings.chart_height,
            symbol=symbol,
        )
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return Response(content=image, media_type="image/png")


__all__ = ["router", "list_levels", "levels_png"]
