import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from cropcast.api.rest_routes.recommendations import (
    router as recommendations_router,
)
from cropcast.api.rest_routes.report_summaries import (
    router as report_summaries_router,
)
from cropcast.api.rest_routes.yield_predictions import (
    router as yield_predictions_router,
)
from cropcast.core.config import settings
from cropcast.core.logging_config import configure_logging

load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY is not set; model calls will fail")
    logger.info("CropCast API using model %s", settings.GEMINI_MODEL)
    yield


app = FastAPI(title="CropCast", lifespan=lifespan)

app.include_router(recommendations_router)
app.include_router(yield_predictions_router)
app.include_router(report_summaries_router)


@app.get("/")
async def root():
    return {"message": "Welcome to CropCast!"}


@app.get("/health")
async def health():
    return {"status": "ok"}
