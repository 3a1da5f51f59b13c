import pytest
import requests

from app.services import exchange_rate_service
from app.services.exchange_rate_service import CURRENCIES, FALLBACK_RATES, ExchangeRateService

from conftest import FakeResponse


LATEST = {"USD": 1380.5, "JPY": 9.2, "EUR": 1490.0, "CNY": 190.1}
PREVIOUS = {"USD": 1375.0, "JPY": 9.1, "EUR": 1485.0, "CNY": 189.9}


class FakeRateApi:
    def __init__(self, fail_latest=(), fail_previous=False, error=None):
        self.fail_latest = set(fail_latest)
        self.fail_previous = fail_previous
        self.error = error
        self.calls = []

    def __call__(self, url, params=None, timeout=None):
        self.calls.append((url, params))
        if self.error is not None:
            raise self.error
        code = params["base"]
        if url.endswith("/latest"):
            if code in self.fail_latest:
                return FakeResponse(status_code=503, text="unavailable")
            return FakeResponse(payload={"base": code, "rates": {"KRW": LATEST[code]}})
        if self.fail_previous:
            return FakeResponse(status_code=404, text="not found")
        return FakeResponse(payload={"base": code, "rates": {"KRW": PREVIOUS[code]}})


@pytest.fixture
def rate_api(monkeypatch):
    def _install(**kwargs):
        api = FakeRateApi(**kwargs)
        monkeypatch.setattr(exchange_rate_service.requests, "get", api)
        return api
    return _install


def rates_by_code(result):
    return {r.code: (r.rate_to_krw, r.previous_rate_to_krw) for r in result.rates}


def test_live_rates(rate_api):
    api = rate_api()
    result = ExchangeRateService(base_url="https://rates.test/v1/").fetch_rates()

    assert result.is_live is True
    assert rates_by_code(result) == {code: (LATEST[code], PREVIOUS[code]) for code in CURRENCIES}
    assert [r.code for r in result.rates] == CURRENCIES
    assert api.calls[0] == ("https://rates.test/v1/latest", {"base": "USD", "symbols": "KRW"})
    assert len(api.calls) == 8


def test_missing_previous_day_keeps_live_rates(rate_api):
    rate_api(fail_previous=True)
    result = ExchangeRateService(base_url="https://rates.test/v1").fetch_rates()
    assert result.is_live is True
    assert all(r.previous_rate_to_krw is None for r in result.rates)


def test_one_failed_currency_uses_fallback_table(rate_api):
    api = rate_api(fail_latest=["JPY"])
    result = ExchangeRateService(base_url="https://rates.test/v1").fetch_rates()
    assert result.is_live is False
    assert rates_by_code(result) == {code: (FALLBACK_RATES[code], None) for code in CURRENCIES}
    # previous-day rates are not requested once latest is incomplete
    assert len(api.calls) == 4


def test_network_error_uses_fallback_table(rate_api):
    rate_api(error=requests.exceptions.ConnectionError("offline"))
    result = ExchangeRateService(base_url="https://rates.test/v1").fetch_rates()
    assert result.is_live is False


def test_fallback_serialises_with_client_keys():
    dumped = ExchangeRateService(base_url="https://rates.test/v1").fallback().model_dump(by_alias=True, exclude_none=True)
    assert dumped["isLive"] is False
    assert dumped["rates"][0] == {"code": "USD", "rateToKRW": 1350}
    assert dumped["lastUpdated"].endswith("Z")


def test_live_result_is_cached(rate_api):
    api = rate_api()
    service = ExchangeRateService(base_url="https://rates.test/v1")
    first = service.get_rates()
    second = service.get_rates()
    assert second is first
    assert len(api.calls) == 8


def test_fallback_result_is_not_cached(rate_api):
    api = rate_api(fail_latest=["USD"])
    service = ExchangeRateService(base_url="https://rates.test/v1")
    service.get_rates()
    service.get_rates()
    assert len(api.calls) == 8
