# backend/app/api/routes_info.py

from fastapi import APIRouter, Depends

from app.api.deps import get_exchange_rate_service
from app.core.config_loader import settings
from app.services.destination_service import get_ai_recommendations
from app.services.exchange_rate_service import ExchangeRateService

router = APIRouter(prefix="/api", tags=["info"])


@router.get("/recommendations")
def recommendations():
    items = get_ai_recommendations()
    return {"items": [d.model_dump(by_alias=True, exclude_none=True) for d in items]}


@router.get("/exchange-rates")
def exchange_rates(service: ExchangeRateService = Depends(get_exchange_rate_service)):
    return service.get_rates().model_dump(by_alias=True, exclude_none=True)


@router.get("/version")
def version():
    # the client secret is never part of this payload
    return {
        "version": settings.APP_VERSION,
        "buildTime": settings.BUILD_TIME,
        "mapClientId": settings.NAVER_MAP_CLIENT_ID,
    }
