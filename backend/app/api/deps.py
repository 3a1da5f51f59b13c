# backend/app/api/deps.py

from functools import lru_cache

from app.agents.map_agent import MapAgent
from app.core.config_loader import settings
from app.db.plan_store import PlanStore
from app.db.kv_store import SQLiteKeyValueStore
from app.services.exchange_rate_service import ExchangeRateService


# Shared instances; tests swap them through app.dependency_overrides.

@lru_cache()
def get_plan_store() -> PlanStore:
    return PlanStore(SQLiteKeyValueStore(settings.DB_PATH or None), key=settings.PLANS_STORAGE_KEY)


@lru_cache()
def get_map_agent() -> MapAgent:
    return MapAgent()


@lru_cache()
def get_exchange_rate_service() -> ExchangeRateService:
    return ExchangeRateService()
