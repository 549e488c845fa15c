from __future__ import annotations

from fastapi.testclient import TestClient

from round_levels.server import app


def test_request_id_header_echo() -> None:
    with TestClient(app) as client:
        auto = client.get("/healthz")
        assert auto.status_code == 200
        generated = auto.headers.get("X-Request-ID")
        assert generated is not None and generated != ""

        custom_id = "test-req-123"
        echoed = client.get("/healthz", headers={"X-Request-ID": custom_id})
        assert echoed.status_code == 200
        assert echoed.headers.get("X-Request-ID") == custom_id


def test_metrics_expose_paint_counters() -> None:
    with TestClient(app) as client:
        client.get("/levels", params={"top": 1125, "bottom": 975})
        metrics = client.get("/metrics")

    assert metrics.status_code == 200
    assert "round_levels_drawn_total" in metrics.text
    assert 'round_level_paints_total{outcome="drawn"}' in metrics.text


def test_about_lists_indicator_links() -> None:
    with TestClient(app) as client:
        body = client.get("/about").json()

    assert body["short_name"] == "LvL"
    assert body["source_code_link"].endswith("/psy-round-level")
