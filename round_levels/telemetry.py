"""Prometheus metrics for indicator paint passes."""

from __future__ import annotations

from typing import Iterable

from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

from .levels.renderer import RoundLevel


LEVELS_DRAWN = Counter(
    "round_levels_drawn",
    "Round level lines drawn, broken out by visual tier.",
    labelnames=("tier",),
)

PAINTS = Counter(
    "round_level_paints",
    "Indicator paint passes by outcome (drawn, empty, degenerate, rejected).",
    labelnames=("outcome",),
)


def record_levels_drawn(levels: Iterable[RoundLevel]) -> None:
    for level in levels:
        LEVELS_DRAWN.labels(tier=level.tier.value).inc()


def record_paint(outcome: str) -> None:
    PAINTS.labels(outcome=outcome or "unknown").inc()


def prometheus_response() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST


__all__ = [
    "LEVELS_DRAWN",
    "PAINTS",
    "prometheus_response",
    "record_levels_drawn",
    "record_paint",
]
