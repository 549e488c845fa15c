from __future__ import annotations

from prometheus_client import REGISTRY

from round_levels.levels import RoundLevel, Tier
from round_levels.telemetry import prometheus_response, record_levels_drawn, record_paint


def _sample(name: str, labels: dict) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_record_levels_drawn_counts_per_tier():
    before = _sample("round_levels_drawn_total", {"tier": "magnitude_100"})
    record_levels_drawn(
        [
            RoundLevel(price=1100.0, y=300, tier=Tier.MAGNITUDE_100),
            RoundLevel(price=1200.0, y=250, tier=Tier.MAGNITUDE_100),
            RoundLevel(price=1150.0, y=275, tier=Tier.MAGNITUDE_50),
        ]
    )
    assert _sample("round_levels_drawn_total", {"tier": "magnitude_100"}) == before + 2


def test_record_paint_defaults_unknown_outcome():
    before = _sample("round_level_paints_total", {"outcome": "unknown"})
    record_paint("")
    assert _sample("round_level_paints_total", {"outcome": "unknown"}) == before + 1

    payload, content_type = prometheus_response()
    assert b"round_level_paints_total" in payload
    assert content_type.startswith("text/plain")
