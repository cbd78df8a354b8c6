"""Tests for the analysis API endpoints."""

import pytest
from fastapi.testclient import TestClient

from sheet_insights.action.api import app
from sheet_insights.config.settings import settings


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


def _payload(**overrides) -> dict:
    body = {
        "headers": ["name", "amount"],
        "rows": [["A", "100"], ["B", "200"], ["A", "100"]],
        "file_name": "sales.csv",
        "file_type": "csv",
    }
    body.update(overrides)
    return body


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


class TestFullReport:
    def test_report_shape(self, client):
        resp = client.post("/analysis", json=_payload())
        assert resp.status_code == 200
        data = resp.json()
        assert data["file_name"] == "sales.csv"
        assert data["total_rows"] == 3
        assert data["column_types"] == {"name": "text", "amount": "number"}
        summary = data["analysis"]["summary"]
        assert summary["completeness"] == 100
        assert summary["data_quality"] == 93
        assert [r["id"] for r in data["recommendations"]] == ["implement-forecasting"]
        assert data["recommendations"][0]["priority"] == "high"
        assert data["recommendations"][0]["timeframe"] == "long-term"
        assert [c["chart_type"] for c in data["charts"]] == ["bar", "pie"]
        assert data["preview"] == _payload()["rows"]

    def test_empty_rows(self, client):
        resp = client.post("/analysis", json=_payload(rows=[]))
        assert resp.status_code == 200
        summary = resp.json()["analysis"]["summary"]
        assert summary["completeness"] == 0
        assert summary["trends"] == []

    def test_ragged_rows_and_mixed_cells(self, client):
        resp = client.post("/analysis", json=_payload(rows=[["A"], ["B", 2, "extra"], [None, 3.5]]))
        assert resp.status_code == 200

    def test_integer_too_large_for_float(self, client):
        rows = [[10**400, 5], [1, 6], [2, 7]]
        resp = client.post("/analysis", json=_payload(headers=["id", "amount"], rows=rows))
        assert resp.status_code == 200
        assert resp.json()["column_types"] == {"id": "text", "amount": "number"}

    def test_values_near_float_limit(self, client):
        rows = [["A", 1e308], ["B", 1e308], ["C", 1e308]]
        resp = client.post("/analysis", json=_payload(rows=rows))
        assert resp.status_code == 200
        forecast = resp.json()["analysis"]["forecasts"][0]
        assert forecast["metric"] == "amount"

    def test_missing_headers_rejected(self, client):
        resp = client.post("/analysis", json={"rows": [[1]]})
        assert resp.status_code == 422

    def test_row_limit(self, client, monkeypatch):
        monkeypatch.setattr(settings, "max_rows", 2)
        resp = client.post("/analysis", json=_payload())
        assert resp.status_code == 413
        assert "limit is 2" in resp.json()["detail"]


class TestPartialEndpoints:
    def test_summary(self, client):
        body = _payload(headers=["x", "y"], rows=[[1, 2], [2, 4], [3, 6], [4, 8], [5, 10]])
        resp = client.post("/analysis/summary", json=body)
        assert resp.status_code == 200
        data = resp.json()
        corr = data["patterns"]["correlations"][0]
        assert corr["variables"] == ["x", "y"]
        assert corr["significance"] == 0.95
        assert abs(corr["strength"] - 1.0) < 1e-9
        assert [f["metric"] for f in data["forecasts"]] == ["x", "y"]

    def test_insights(self, client):
        body = _payload(headers=["v"], rows=[[1], [2], [2], [3], [2], [100]])
        resp = client.post("/analysis/insights", json=body)
        assert resp.status_code == 200
        data = resp.json()
        outlier = next(i for i in data["insights"] if i["id"] == "outlier-v")
        assert outlier["category"] == "risk"
        assert outlier["supporting_data"] == [100.0]
        assert "implement-forecasting" in [r["id"] for r in data["recommendations"]]

    def test_column_types(self, client):
        body = _payload(headers=["when", "price"], rows=[["2024-01-01", "$5.00"]])
        resp = client.post("/analysis/column-types", json=body)
        assert resp.json() == {"column_types": {"when": "date", "price": "currency"}}

    def test_charts(self, client):
        resp = client.post("/analysis/charts", json=_payload())
        charts = resp.json()["charts"]
        assert charts[0]["title"] == "amount by name"
        assert charts[0]["data"][0] == {"x": "A", "y": 100.0}
