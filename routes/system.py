"""
routes/system.py -- Service endpoints
  GET /health    -- status, version, uptime, memory (MB) and thread count
  GET /defaults  -- default inputs of every calculator

Uptime format: "HH:mm:ss.SSS". Memory format: "XX.XX", no unit suffix.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from fastapi import APIRouter

from app.models import (
    BudgetRequest,
    CarRequest,
    HealthResponse,
    LoanRequest,
    RentVsBuyRequest,
    SIPRequest,
    SWPRequest,
    TaxCompareRequest,
)

router = APIRouter()

_DEFAULTS = {
    "sip": SIPRequest,
    "swp": SWPRequest,
    "loan": LoanRequest,
    "tax": TaxCompareRequest,
    "rent_vs_buy": RentVsBuyRequest,
    "car": CarRequest,
    "budget": BudgetRequest,
}


def _format_uptime(uptime: timedelta) -> str:
    """Format a timedelta as 'HH:mm:ss.SSS' (hours may exceed 24)."""
    total_seconds = int(uptime.total_seconds())
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    ms = uptime.microseconds // 1000
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{ms:03d}"


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    # Lazy import to avoid circular dependency at module load time
    import app.main as _main

    uptime = datetime.now(timezone.utc) - _main.START_TIME
    mem_mb = _main.PROCESS.memory_info().rss / (1024 * 1024)

    return HealthResponse(
        status="ok",
        version=_main.app.version,
        uptime=_format_uptime(uptime),
        memory=f"{mem_mb:.2f}",
        threads=_main.PROCESS.num_threads(),
    )


@router.get("/defaults")
def defaults() -> Dict[str, Dict[str, Any]]:
    """Every calculator's inputs as they are when a request omits them."""
    return {name: model().model_dump(mode="json") for name, model in _DEFAULTS.items()}
