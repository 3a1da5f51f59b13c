import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes_destination import router as destination_router
from app.api.routes_info import router as info_router
from app.api.routes_map import router as map_router
from app.api.routes_plan import router as plan_router
from app.core.config_loader import settings
from app.core.errors import KogoError
from app.core.logger import logger


app = FastAPI(
    title="KoGo Seoul Travel Planner",
    description="Day-by-day Seoul itineraries, saved travel plans and a Naver Maps proxy",
    version=settings.APP_VERSION,
)

origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()] or ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(map_router)
app.include_router(plan_router)
app.include_router(destination_router)
app.include_router(info_router)


@app.exception_handler(KogoError)
async def kogo_error_handler(request: Request, exc: KogoError):
    # proxy routes answer their own errors; this catches the rest
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse({"error": str(exc)}, status_code=502)


@app.get("/")
def root():
    return {
        "status": "ok",
        "message": "KoGo planner backend is running",
        "version": settings.APP_VERSION,
        "env": settings.environment,
    }


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.environment == "development")
