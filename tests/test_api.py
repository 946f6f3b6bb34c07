"""Tests for the REST endpoints, exercised through FastAPI's TestClient."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from sentiment_pulse.main import create_app
from sentiment_pulse.store.observation_store import ObservationStore

from tests.test_observation import _valid_instrument, _valid_observation


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(ObservationStore()))


def _create_instrument(client: TestClient, **kw) -> dict:
    resp = client.post("/api/instruments", json=_valid_instrument(**kw))
    assert resp.status_code == 201, resp.text
    return resp.json()


def _record(client: TestClient, **kw) -> dict:
    resp = client.post("/api/sentiment", json=_valid_observation(**kw))
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestHealth:
    def test_health_reports_counts(self, client: TestClient) -> None:
        inst = _create_instrument(client)
        _record(client, instrument_id=inst["id"])

        body = client.get("/health").json()

        assert body["status"] == "ok"
        assert body["instrument_count"] == 1
        assert body["observation_count"] == 1


class TestInstrumentEndpoints:
    def test_create_and_get(self, client: TestClient) -> None:
        inst = _create_instrument(client, symbol="AAPL")
        resp = client.get(f"/api/instruments/{inst['id']}")
        assert resp.status_code == 200
        assert resp.json()["symbol"] == "AAPL"

    def test_get_unknown_is_404(self, client: TestClient) -> None:
        assert client.get("/api/instruments/999").status_code == 404

    def test_duplicate_symbol_is_409(self, client: TestClient) -> None:
        _create_instrument(client, symbol="AAPL")
        resp = client.post("/api/instruments", json=_valid_instrument(symbol="AAPL"))
        assert resp.status_code == 409

    def test_invalid_instrument_is_422(self, client: TestClient) -> None:
        resp = client.post("/api/instruments", json=_valid_instrument(current_price=-1))
        assert resp.status_code == 422

    def test_list_is_ordered_by_symbol(self, client: TestClient) -> None:
        _create_instrument(client, symbol="TSLA")
        _create_instrument(client, symbol="AAPL")
        symbols = [i["symbol"] for i in client.get("/api/instruments").json()]
        assert symbols == ["AAPL", "TSLA"]

    def test_patch_updates_fields(self, client: TestClient) -> None:
        inst = _create_instrument(client)
        resp = client.patch(f"/api/instruments/{inst['id']}", json={"current_price": 160.0, "market_cap": None})
        assert resp.status_code == 200
        body = resp.json()
        assert body["current_price"] == 160.0
        assert body["market_cap"] is None
        assert body["name"] == inst["name"]

    def test_patch_unknown_is_404(self, client: TestClient) -> None:
        assert client.patch("/api/instruments/999", json={"name": "x"}).status_code == 404

    def test_delete_cascades(self, client: TestClient) -> None:
        inst = _create_instrument(client)
        _record(client, instrument_id=inst["id"])

        assert client.delete(f"/api/instruments/{inst['id']}").status_code == 204
        assert client.get(f"/api/instruments/{inst['id']}").status_code == 404
        assert client.get("/health").json()["observation_count"] == 0

    def test_delete_unknown_is_404(self, client: TestClient) -> None:
        assert client.delete("/api/instruments/999").status_code == 404


class TestCurrentSentimentEndpoint:
    def test_includes_instruments_without_data(self, client: TestClient) -> None:
        aapl = _create_instrument(client, symbol="AAPL")
        _create_instrument(client, symbol="MSFT")
        _record(client, instrument_id=aapl["id"], score=0.3, category="positive")
        _record(client, instrument_id=aapl["id"], score=0.65, category="very_positive")

        body = client.get("/api/instruments/sentiment").json()

        assert [r["symbol"] for r in body] == ["AAPL", "MSFT"]
        assert body[0]["current_score"] == 0.65
        assert body[0]["current_category"] == "very_positive"
        assert body[1]["current_score"] is None
        assert body[1]["current_category"] is None


class TestSentimentEndpoints:
    def test_record_returns_full_observation(self, client: TestClient) -> None:
        inst = _create_instrument(client)
        before = datetime.now(timezone.utc)

        body = _record(client, instrument_id=inst["id"])

        assert body["id"] == 1
        assert body["instrument_id"] == inst["id"]
        assert body["note"] == "Apple reports strong earnings"
        assert datetime.fromisoformat(body["recorded_at"].replace("Z", "+00:00")) >= before

    def test_record_for_unknown_instrument_is_422(self, client: TestClient) -> None:
        resp = client.post("/api/sentiment", json=_valid_observation(instrument_id=999))
        assert resp.status_code == 422
        assert "not found" in resp.json()["detail"].lower()

    def test_record_out_of_range_score_is_422(self, client: TestClient) -> None:
        inst = _create_instrument(client)
        resp = client.post("/api/sentiment", json=_valid_observation(instrument_id=inst["id"], score=2))
        assert resp.status_code == 422

    def test_feed_is_newest_first(self, client: TestClient) -> None:
        inst = _create_instrument(client)
        first = _record(client, instrument_id=inst["id"])
        second = _record(client, instrument_id=inst["id"])

        body = client.get(f"/api/instruments/{inst['id']}/sentiment").json()

        assert [o["id"] for o in body] == [second["id"], first["id"]]

    def test_history_buckets_today(self, client: TestClient) -> None:
        inst = _create_instrument(client)
        for score, category, confidence in [
            (0.8, "very_positive", 0.9),
            (0.6, "positive", 0.8),
            (0.4, "positive", 0.7),
        ]:
            _record(client, instrument_id=inst["id"], score=score, category=category, confidence=confidence)

        body = client.get(f"/api/instruments/{inst['id']}/sentiment/history", params={"days": 1}).json()

        assert body["instrument_id"] == inst["id"]
        [bucket] = body["buckets"]
        assert bucket["mean_score"] == 0.6
        assert bucket["mean_confidence"] == 0.8
        assert bucket["count"] == 3
        assert bucket["category"] == "positive"
        assert len(bucket["date"]) == 10

    def test_history_for_unknown_instrument_is_404(self, client: TestClient) -> None:
        assert client.get("/api/instruments/999/sentiment/history").status_code == 404

    def test_feed_for_unknown_instrument_is_404(self, client: TestClient) -> None:
        assert client.get("/api/instruments/999/sentiment").status_code == 404

    @pytest.mark.parametrize("params", [{"days": 0}, {"days": 366}, {"limit": 0}, {"limit": 1001}])
    def test_history_query_bounds(self, client: TestClient, params: dict) -> None:
        inst = _create_instrument(client)
        resp = client.get(f"/api/instruments/{inst['id']}/sentiment/history", params=params)
        assert resp.status_code == 422
