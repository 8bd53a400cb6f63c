"""
app/main.py -- FastAPI application entry point.

START_TIME and PROCESS are set at module level (singleton pattern).
All routes are registered under CONFIG.base_path (default /financial/v1).
Server runs on CONFIG.server.port (default 5477).
"""
from __future__ import annotations

from datetime import datetime, timezone

import psutil
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import AppConfig
from app.exceptions import CalculatorError
from app.logging import get_logger, setup_logging
from routes import investments as _investments_route
from routes import loans as _loans_route
from routes import purchases as _purchases_route
from routes import system as _system_route
from routes import tax as _tax_route

CONFIG: AppConfig = AppConfig.from_env()
setup_logging(CONFIG.logging.level, CONFIG.logging.format_type)

logger = get_logger(__name__)

# Singleton process tracking -- captured once at boot
START_TIME: datetime = datetime.now(timezone.utc)
PROCESS: psutil.Process = psutil.Process()

app = FastAPI(
    title="Financial Calculators API",
    version="1.0.0",
    description="SIP/SWP projections, loan prepayment, tax regimes and rent-vs-buy.",
)


# ---------------------------------------------------------------------------
# Error handlers -- return 400 with a clean message
# ---------------------------------------------------------------------------

def _clean_message(error: dict) -> str:
    msg = error.get("msg", "Validation error")
    # Pydantic v2 prefixes messages raised as ValueError
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    field = [str(part) for part in error.get("loc", ()) if part != "body"]
    return f"{'.'.join(field)}: {msg}" if field else msg


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    msg = _clean_message(errors[0]) if errors else "Validation error"
    logger.warning("rejected %s %s: %s", request.method, request.url.path, msg)
    return JSONResponse(status_code=400, content={"detail": msg})


@app.exception_handler(CalculatorError)
async def calculator_exception_handler(request: Request, exc: CalculatorError) -> JSONResponse:
    logger.warning("calculation refused %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# ---------------------------------------------------------------------------
# Register routes
# ---------------------------------------------------------------------------

BASE = CONFIG.base_path

app.include_router(_investments_route.router, prefix=BASE)
app.include_router(_loans_route.router, prefix=BASE)
app.include_router(_tax_route.router, prefix=BASE)
app.include_router(_purchases_route.router, prefix=BASE)
app.include_router(_system_route.router, prefix=BASE)

logger.info("financial calculators ready under %s", BASE or "/")


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=CONFIG.server.host,
        port=CONFIG.server.port,
        reload=CONFIG.server.reload,
    )
