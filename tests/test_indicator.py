from __future__ import annotations

import logging
from typing import List, Tuple

import pytest

from round_levels.charts import LinearPriceScale
from round_levels.config import IndicatorConfig
from round_levels.indicator import PaintContext, PsyRoundLevel
from round_levels.levels import InvalidConfiguration, Tier, TierStyle


class RecordingGraphics:
    def __init__(self) -> None:
        self.lines: List[Tuple[TierStyle, float, float, float, float]] = []

    def draw_line(self, style: TierStyle, x1: float, y1: float, x2: float, y2: float) -> None:
        self.lines.append((style, x1, y1, x2, y2))


class InvertedConverter:
    def get_price(self, y: float) -> float:
        return 1000.0 + y

    def get_chart_y(self, price: float) -> float:
        return price - 1000.0


def _paint(indicator: PsyRoundLevel, top: float, bottom: float, height: int = 800, width: int = 1200):
    graphics = RecordingGraphics()
    ctx = PaintContext(
        converter=LinearPriceScale(top=top, bottom=bottom, height=height),
        graphics=graphics,
        width=width,
        height=height,
    )
    return indicator.on_paint(ctx), graphics


def test_identification_surface():
    indicator = PsyRoundLevel()
    assert indicator.name == "PsyRoundLevel"
    assert indicator.short_name == "LvL"
    assert indicator.help_link == "https://github.com/qtx-project/psy-round-level"
    assert indicator.source_code_link == indicator.help_link
    assert indicator.separate_window is False


def test_defaults_match_indicator_inputs():
    indicator = PsyRoundLevel()
    assert indicator.config.base_unit == 50
    assert indicator.config.color == "#6EDEFA"
    assert indicator.config.debug_enabled is False
    assert indicator.styles[Tier.MAGNITUDE_1000].alpha == 233


def test_paint_draws_full_width_lines_with_tier_styles():
    indicator = PsyRoundLevel()
    levels, graphics = _paint(indicator, top=1125, bottom=975)

    assert [level.price for level in levels] == [1000.0, 1050.0]
    assert graphics.lines == [
        (indicator.styles[Tier.MAGNITUDE_1000], 0, 666, 1200, 666),
        (indicator.styles[Tier.MAGNITUDE_50], 0, 400, 1200, 400),
    ]


def test_settings_update_rebuilds_styles_before_next_paint():
    indicator = PsyRoundLevel()
    indicator.on_settings_updated(color=(255, 0, 0), base_unit=100)

    levels, graphics = _paint(indicator, top=1325, bottom=975)

    assert indicator.config.base_unit == 100
    assert {style.color for style, *_ in graphics.lines} == {"#FF0000"}
    assert all(level.price % 100 == 0 for level in levels)


@pytest.mark.parametrize("changes", [{"base_unit": 0}, {"base_unit": -50}, {"color": "nope"}, {"unknown": 1}])
def test_rejected_settings_keep_previous_configuration(changes):
    indicator = PsyRoundLevel(IndicatorConfig(base_unit=25))
    styles = indicator.styles

    with pytest.raises(InvalidConfiguration, match="invalid_"):
        indicator.on_settings_updated(**changes)

    assert indicator.config.base_unit == 25
    assert indicator.styles is styles


def test_degenerate_paint_context_draws_nothing():
    levels, graphics = _paint(PsyRoundLevel(), top=1125, bottom=975, height=0)
    assert levels == []
    assert graphics.lines == []


def test_inverted_converter_skips_the_frame(caplog):
    indicator = PsyRoundLevel()
    graphics = RecordingGraphics()
    with caplog.at_level(logging.WARNING, logger="round_levels.indicator"):
        levels = indicator.on_paint(
            PaintContext(converter=InvertedConverter(), graphics=graphics, width=400, height=300)
        )
    assert levels == []
    assert graphics.lines == []
    assert any("range_inverted" in record.getMessage() for record in caplog.records)


def test_debug_trace_only_when_enabled(caplog):
    caplog.set_level(logging.INFO, logger="round_levels.indicator")

    quiet = PsyRoundLevel()
    quiet.on_init("BTCUSD")
    _paint(quiet, top=1125, bottom=975)
    assert caplog.records == []

    loud = PsyRoundLevel(IndicatorConfig(debug_enabled=True))
    loud.on_init("BTCUSD")
    _paint(loud, top=1125, bottom=975)

    messages = [record.getMessage() for record in caplog.records]
    assert "Instantiate PsyRoundLevel on BTCUSD" in messages
    assert "Update Lines Round Level: from 950 to 1100 <- 3" in messages
    assert all(getattr(record, "symbol", None) == "BTCUSD" for record in caplog.records)


def test_from_settings_uses_process_configuration():
    from round_levels.config import Settings

    settings = Settings(round_level_factor=250, round_level_color="#00ff00", dev_debug=True)
    indicator = PsyRoundLevel.from_settings(settings)
    assert indicator.config == IndicatorConfig(color="#00FF00", base_unit=250, debug_enabled=True)
