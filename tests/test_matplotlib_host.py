from __future__ import annotations

import io

import matplotlib.image as mpimg
import matplotlib.pyplot as plt
import pytest

from round_levels.charts import AxesConverter, paint_axes, render_levels_png
from round_levels.config import IndicatorConfig
from round_levels.indicator import PsyRoundLevel
from round_levels.levels import InvalidVisibleRange, Tier

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def axes():
    fig = plt.figure(figsize=(6, 4), dpi=100)
    ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
    ax.set_xlim(0.0, 1.0)
    ax.set_ylim(1010, 1290)
    yield ax
    plt.close(fig)


def test_axes_converter_counts_rows_from_the_top(axes):
    converter = AxesConverter(axes)

    assert converter.width == 600
    assert converter.height == 400
    assert converter.get_chart_y(1290) == pytest.approx(0.0)
    assert converter.get_chart_y(1010) == pytest.approx(400.0)
    assert converter.get_price(100) == pytest.approx(1220.0)


def test_paint_axes_adds_one_line_per_level(axes):
    indicator = PsyRoundLevel()
    levels = paint_axes(axes, indicator)

    assert [level.price for level in levels] == [1050.0, 1100.0, 1150.0, 1200.0]
    assert len(axes.lines) == len(levels)
    for level, line in zip(levels, axes.lines):
        assert abs(line.get_ydata()[0] - level.price) < 1.0
        assert line.get_alpha() == indicator.styles[level.tier].opacity
    assert levels[0].tier is Tier.EDGE_NEAR_END
    assert levels[1].tier is Tier.MAGNITUDE_100


def test_render_levels_png_produces_requested_size():
    data = render_levels_png(1125, 975, IndicatorConfig(base_unit=25), width=300, height=200, symbol="ES")

    assert data.startswith(PNG_MAGIC)
    image = mpimg.imread(io.BytesIO(data))
    assert image.shape[:2] == (200, 300)


@pytest.mark.parametrize("top,bottom", [(900, 1000), (float("nan"), 1000)])
def test_render_levels_png_rejects_invalid_ranges(top, bottom):
    with pytest.raises(InvalidVisibleRange):
        render_levels_png(top, bottom)


def test_render_levels_png_draws_an_empty_frame_for_a_flat_range():
    data = render_levels_png(1000, 1000, width=160, height=120)

    image = mpimg.imread(io.BytesIO(data))
    assert image.shape[:2] == (120, 160)
    assert (image[..., :3] == image[0, 0, :3]).all()
