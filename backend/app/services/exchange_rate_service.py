# backend/app/services/exchange_rate_service.py

import time
from datetime import timedelta
from typing import Dict, List, Optional

import requests

from app.core.config_loader import settings
from app.core.logger import logger
from app.models.rate_models import ExchangeRatesResult, RateItem
from app.utils.time_utils import seoul_today, utc_now_iso


CURRENCIES: List[str] = ["USD", "JPY", "EUR", "CNY"]

# approximate KRW per unit, served when the rate API is unreachable
FALLBACK_RATES: Dict[str, float] = {
    "USD": 1350,
    "JPY": 9,
    "EUR": 1450,
    "CNY": 185,
}

CACHE_TTL_SECONDS = 600


class ExchangeRateService:
    """USD / JPY / EUR / CNY -> KRW from the Frankfurter API, with a static fallback."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or settings.EXCHANGE_API_BASE).rstrip("/")
        self.timeout = settings.HTTP_TIMEOUT_SECONDS if timeout is None else timeout
        self._cached: Optional[ExchangeRatesResult] = None
        self._cached_at = 0.0

    def _fetch_rate(self, code: str, date: Optional[str] = None) -> Optional[float]:
        url = f"{self.base_url}/{date or 'latest'}"
        try:
            resp = requests.get(url, params={"base": code, "symbols": "KRW"}, timeout=self.timeout)
            if not resp.ok:
                logger.warning(f"Rate API {code} {date or 'latest'}: HTTP {resp.status_code}")
                return None
            rate = (resp.json().get("rates") or {}).get("KRW")
            return float(rate) if rate is not None else None
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning(f"Rate API {code} {date or 'latest'} failed: {e}")
            return None

    def fallback(self) -> ExchangeRatesResult:
        return ExchangeRatesResult(
            rates=[RateItem(code=code, rate_to_krw=FALLBACK_RATES[code]) for code in CURRENCIES],
            last_updated=utc_now_iso(),
            is_live=False,
        )

    def fetch_rates(self) -> ExchangeRatesResult:
        yesterday = (seoul_today() - timedelta(days=1)).isoformat()

        latest = [self._fetch_rate(code) for code in CURRENCIES]
        if any(rate is None for rate in latest):
            logger.info("Incomplete live rates, using fallback table")
            return self.fallback()

        previous = [self._fetch_rate(code, yesterday) for code in CURRENCIES]
        return ExchangeRatesResult(
            rates=[
                RateItem(code=code, rate_to_krw=rate, previous_rate_to_krw=prev)
                for code, rate, prev in zip(CURRENCIES, latest, previous)
            ],
            last_updated=utc_now_iso(),
            is_live=True,
        )

    def get_rates(self) -> ExchangeRatesResult:
        now = time.monotonic()
        if self._cached is not None and now - self._cached_at < CACHE_TTL_SECONDS:
            return self._cached

        result = self.fetch_rates()
        # only live results are cached so a transient outage is retried
        if result.is_live:
            self._cached = result
            self._cached_at = now
        return result
