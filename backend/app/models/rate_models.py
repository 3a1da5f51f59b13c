# backend/app/models/rate_models.py

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


CurrencyCode = Literal["USD", "JPY", "EUR", "CNY"]


class RateItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code: CurrencyCode
    # 1 unit of currency = rate_to_krw KRW
    rate_to_krw: float = Field(alias="rateToKRW")
    previous_rate_to_krw: Optional[float] = Field(default=None, alias="previousRateToKRW")


class ExchangeRatesResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rates: List[RateItem]
    last_updated: str = Field(alias="lastUpdated")
    is_live: bool = Field(alias="isLive")
