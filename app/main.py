from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from loguru import logger
import uuid

from app.core.config import settings
from app.core.exceptions import AppException, app_exception_handler
from app.api.endpoints import router as api_router
from app.core.logging import setup_logging
from app.models import HealthResponse


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)
    logger.info("🚀 Application startup")
    if not settings.LLM_ENDPOINT_URL and not settings.DEBUG_MOCK_SUMMARY:
        logger.warning("LLM_ENDPOINT_URL is not set; summary requests will fail until it is configured")
    yield
    logger.info("🛑 Application shutdown")

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.add_exception_handler(AppException, app_exception_handler)

@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    request_id = str(uuid.uuid4())
    with logger.contextualize(request_id=request_id):
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

app.include_router(api_router, prefix="/api/v1")

@app.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="ok", project=settings.PROJECT_NAME)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
