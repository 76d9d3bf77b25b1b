# tax_estimator/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tax_estimator.api.v1 import v1_router
from tax_estimator.api.v1.envelope import error
from tax_estimator.config.settings import settings
from tax_estimator.core.logging_config import setup_logging
from tax_estimator.domain.models.tax_bracket_config import InvalidBracketConfigError

logger = logging.getLogger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting %s (%s), tax year %s", settings.APP_NAME, settings.ENVIRONMENT, settings.TAX_YEAR)
    yield


app = FastAPI(title="Tax Estimator", lifespan=lifespan)


@app.exception_handler(InvalidBracketConfigError)
async def invalid_bracket_config_handler(request: Request, exc: InvalidBracketConfigError):
    logger.error("Bracket configuration error: %s", exc)
    return JSONResponse(status_code=500, content=error(f"Bracket configuration error: {exc}"))


@app.get("/health")
async def health():
    return {"status": "ok", "message": "Tax estimator running"}


app.include_router(v1_router)
