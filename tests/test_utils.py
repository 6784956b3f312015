import json
import logging
from datetime import date, datetime

import pytest
import requests

from debt_planner.domain.errors import BadRequest, UpstreamError
from debt_planner.utils import http
from debt_planner.utils.dates import add_months, month_label, parse_date
from debt_planner.utils.formatters import fmt, fmt_money, pct_from_fraction
from debt_planner.utils.logging import JsonFormatter


# -------------------- dates --------------------

def test_parse_date_variants():
    assert parse_date("2024-01-01") == date(2024, 1, 1)
    assert parse_date("2024-01-01T23:59:00") == date(2024, 1, 1)
    assert parse_date(datetime(2024, 3, 5, 12)) == date(2024, 3, 5)
    assert parse_date(date(2024, 3, 5)) == date(2024, 3, 5)
    with pytest.raises(ValueError):
        parse_date("March 2024")


@pytest.mark.parametrize("start, months, expected", [
    (date(2024, 1, 15), 0, date(2024, 1, 15)),
    (date(2024, 1, 15), 13, date(2025, 2, 15)),
    (date(2024, 1, 31), 1, date(2024, 2, 29)),
    (date(2023, 1, 31), 1, date(2023, 2, 28)),
    (date(2024, 11, 30), 3, date(2025, 2, 28)),
])
def test_add_months(start, months, expected):
    assert add_months(start, months) == expected


def test_month_label():
    assert month_label(date(2024, 3, 9)) == "2024-03"


# -------------------- formatters --------------------

def test_fmt_half_up():
    assert fmt(2.675) == 2.68
    assert fmt(0.00125, "0.0001") == 0.0013


def test_fmt_money_and_pct():
    assert fmt_money(1234567.891) == "$1,234,567.89"
    assert fmt_money("oops") == "$0.00"
    assert pct_from_fraction(0.0825) == "8.25%"
    assert pct_from_fraction(None) == "—"


# -------------------- errors & logging --------------------

def test_error_body():
    assert BadRequest("bad", field="strategy").to_dict() == {"error": "bad", "field": "strategy"}
    assert UpstreamError("down").status_code == 502


def test_json_formatter_includes_extra():
    record = logging.LogRecord("debt_planner.test", logging.INFO, __file__, 1, "ran %s", ("ok",), None)
    record.strategy = "avalanche"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "ran ok"
    assert payload["level"] == "INFO"
    assert payload["strategy"] == "avalanche"
    assert payload["ts"].endswith("Z")


# -------------------- http --------------------

class FakeResponse:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self._body = body

    def json(self):
        return self._body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code}")


def test_post_returns_client_errors_without_retry(monkeypatch):
    calls = []

    def fake_request(method, url, json=None, timeout=None):
        calls.append((method, url, json))
        return FakeResponse(400, {"error": "bad"})

    monkeypatch.setattr(http.requests, "request", fake_request)
    assert http.post("http://api/debts/simulate", {"a": 1}) == (400, {"error": "bad"})
    assert calls == [("POST", "http://api/debts/simulate", {"a": 1})]


def test_get_retries_then_raises(monkeypatch):
    attempts = []

    def fake_request(method, url, json=None, timeout=None):
        attempts.append(method)
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(http.requests, "request", fake_request)
    monkeypatch.setattr(http.time, "sleep", lambda s: None)
    with pytest.raises(UpstreamError):
        http.get("http://api/debts/portfolio", retries=2)
    assert attempts == ["GET", "GET", "GET"]


def test_server_error_is_retried(monkeypatch):
    responses = iter([FakeResponse(503, {}), FakeResponse(200, {"status": "ok"})])
    monkeypatch.setattr(http.requests, "request", lambda *a, **kw: next(responses))
    monkeypatch.setattr(http.time, "sleep", lambda s: None)
    assert http.get("http://api/health") == (200, {"status": "ok"})
