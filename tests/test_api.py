from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from datewise.api.app import app
from datewise.api.public import (
    DATEWISE_DEFAULT_TZ_ENV,
    DATEWISE_FISCAL_START_MONTH_ENV,
    default_config,
    get_date_facts,
    parse_instant,
)
from datewise.core.config import DeriveConfig
from datewise.core.errors import InvalidDateInput, InvalidTimezoneInput

UTC = timezone.utc


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _json_type(resp) -> str:
    return resp.headers["content-type"].split(";")[0].strip()


# ------------------------------------------------------------
# parse_instant
# ------------------------------------------------------------
def test_parse_instant_iso_date_is_utc_midnight():
    assert parse_instant("2024-03-15") == datetime(2024, 3, 15, tzinfo=UTC)


def test_parse_instant_with_offset():
    assert parse_instant("2024-03-15T08:00:00-04:00") == datetime(2024, 3, 15, 12, tzinfo=UTC)
    assert parse_instant("2024-03-15T12:34:56Z") == datetime(2024, 3, 15, 12, 34, 56, tzinfo=UTC)


def test_parse_instant_free_form():
    now = datetime(2030, 6, 1, tzinfo=UTC)
    assert parse_instant("March 2024", now=now) == datetime(2024, 3, 1, tzinfo=UTC)
    assert parse_instant("Fri, 15 Mar 2024 12:34:56 GMT") == datetime(2024, 3, 15, 12, 34, 56, tzinfo=UTC)


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_parse_instant_blank_means_now(raw):
    now = datetime(2024, 3, 15, 12, 34, 56, tzinfo=UTC)
    assert parse_instant(raw, now=now) == now


@pytest.mark.parametrize("raw", ["not-a-date", "2024-02-30", "yesterday-ish"])
def test_parse_instant_rejects_garbage(raw):
    with pytest.raises(InvalidDateInput) as ei:
        parse_instant(raw)
    assert str(ei.value) == "Invalid date."


# ------------------------------------------------------------
# function API
# ------------------------------------------------------------
def test_get_date_facts_defaults_to_utc():
    res = get_date_facts("2024-03-15T12:34:56Z", config=DeriveConfig())
    assert res["tz"] == "UTC"
    assert res["iso"] == "2024-03-15T12:34:56.000Z"


def test_get_date_facts_default_tz_from_config():
    res = get_date_facts("2024-03-15T12:34:56Z", config=DeriveConfig(default_tz="Asia/Tokyo"))
    assert res["tz"] == "Asia/Tokyo"
    assert res["utcOffsetMinutes"] == 540


def test_get_date_facts_accepts_datetime():
    res = get_date_facts(datetime(2024, 12, 1, tzinfo=UTC), tz="UTC")
    assert res["fiscalYear"] == 2025


def test_get_date_facts_bad_timezone():
    with pytest.raises(InvalidTimezoneInput):
        get_date_facts("2024-03-15", tz="Not/AZone")


# ------------------------------------------------------------
# HTTP
# ------------------------------------------------------------
def test_http_success_is_sorted_pretty_json(client):
    r = client.get("/", params={"date": "2024-03-15T12:34:56Z", "tz": "America/New_York"})
    assert r.status_code == 200
    assert _json_type(r) == "application/json"
    assert '\n  "calWeekNumber": 10,' in r.text

    body = r.json()
    keys = list(body)
    assert keys == sorted(keys)
    assert body["utcOffsetMinutes"] == -240
    assert body["tz"] == "America/New_York"
    assert body["fiscalYear"] == 2024


def test_http_invalid_date(client):
    r = client.get("/", params={"date": "not-a-date"})
    assert r.status_code == 400
    assert _json_type(r) == "application/json"
    assert r.json() == {"error": "Invalid date."}


def test_http_invalid_timezone_names_identifier(client):
    r = client.get("/", params={"date": "2024-03-15", "tz": "Mars/Olympus_Mons"})
    assert r.status_code == 400
    assert _json_type(r) == "application/json"
    assert r.json() == {"error": "Unknown timezone: Mars/Olympus_Mons"}


def test_http_without_date_uses_now(client):
    before = datetime.now(UTC).year
    r = client.get("/")
    assert r.status_code == 200
    body = r.json()
    assert body["tz"] == "UTC"
    assert body["year"] in (before, before + 1)


@pytest.mark.parametrize("method", ["POST", "PUT", "DELETE"])
def test_http_any_method(client, method):
    r = client.request(method, "/", params={"date": "2024-12-01"})
    assert r.status_code == 200
    assert r.json()["fiscalYear"] == 2025


def test_http_same_request_same_bytes(client):
    params = {"date": "2024-03-15T12:34:56Z", "tz": "Europe/Berlin"}
    assert client.get("/", params=params).content == client.get("/", params=params).content


@pytest.mark.parametrize("raw", ["-1", "5", "12:00", "Monday", "31 Jan"])
def test_parse_instant_requires_year_and_month(raw):
    with pytest.raises(InvalidDateInput):
        parse_instant(raw)


def test_parse_instant_missing_day_is_first():
    assert parse_instant("2024-02") == datetime(2024, 2, 1, tzinfo=UTC)
    assert parse_instant("Feb 2024 10:30") == datetime(2024, 2, 1, 10, 30, tzinfo=UTC)


@pytest.mark.parametrize("raw", ["-1", "5", "12:00", "Monday"])
def test_http_partial_date_is_rejected(client, raw):
    r = client.get("/", params={"date": raw})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid date."}


@pytest.mark.parametrize("raw", ["0001-01-01T00:30:00+01:00", "0001-06-01", "9999-06-01"])
def test_http_unsupported_year_is_rejected(client, raw):
    r = client.get("/", params={"date": raw})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid date."}


def test_http_host_localtime_is_not_a_timezone(client):
    r = client.get("/", params={"date": "2024-03-15", "tz": "localtime"})
    assert r.status_code == 400
    assert r.json() == {"error": "Unknown timezone: localtime"}


# ------------------------------------------------------------
# environment configuration
# ------------------------------------------------------------
@pytest.fixture
def env_config(monkeypatch):
    monkeypatch.delenv(DATEWISE_DEFAULT_TZ_ENV, raising=False)
    monkeypatch.delenv(DATEWISE_FISCAL_START_MONTH_ENV, raising=False)
    default_config.cache_clear()
    yield monkeypatch
    default_config.cache_clear()


def test_env_default_tz(env_config):
    env_config.setenv(DATEWISE_DEFAULT_TZ_ENV, "Asia/Kolkata")
    res = get_date_facts("2024-03-15T12:34:56Z")
    assert res["tz"] == "Asia/Kolkata"
    assert res["utcOffsetMinutes"] == 330


def test_env_fiscal_start_month(env_config):
    env_config.setenv(DATEWISE_FISCAL_START_MONTH_ENV, "10")
    assert get_date_facts("2024-09-30")["fiscalYear"] == 2024
    assert get_date_facts("2024-10-01")["fiscalYear"] == 2025


def test_env_fiscal_start_month_over_http(env_config, client):
    env_config.setenv(DATEWISE_FISCAL_START_MONTH_ENV, "1")
    body = client.get("/", params={"date": "2024-12-01"}).json()
    assert body["fiscalYear"] == 2024
    assert body["fiscalQuarter"] == 4


def test_env_unset_uses_defaults(env_config):
    res = get_date_facts("2024-12-01")
    assert res["tz"] == "UTC"
    assert res["fiscalYear"] == 2025


@pytest.mark.parametrize("raw", ["abc", "13", "0"])
def test_env_bad_fiscal_start_month(env_config, raw):
    env_config.setenv(DATEWISE_FISCAL_START_MONTH_ENV, raw)
    with pytest.raises(ValueError):
        default_config()
