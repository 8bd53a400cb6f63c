"""routes/investments.py -- SIP and SWP projections (POST /sip, POST /swp)"""
from __future__ import annotations

from fastapi import APIRouter

from app.models import SIPRequest, SIPResponse, SWPRequest, SWPResponse
from app.utils.sip import calculate_sip
from app.utils.swp import calculate_swp

router = APIRouter()


@router.post("/sip", response_model=SIPResponse)
def sip(body: SIPRequest) -> SIPResponse:
    """
    Monthly SIP projection with optional annual step-up.
    step_up_percentage only applies when step_up_enabled is true.
    """
    result = calculate_sip(
        monthly_investment=body.monthly_investment,
        annual_return=body.expected_return,
        years=body.time_period,
        step_up_percentage=body.effective_step_up,
    )
    return SIPResponse.from_result(result)


@router.post("/swp", response_model=SWPResponse)
def swp(body: SWPRequest) -> SWPResponse:
    """
    Monthly withdrawals from a lump sum, optionally inflation-indexed.
    The yearly series stops at the year the corpus runs out.
    """
    result = calculate_swp(
        lumpsum_amount=body.lumpsum_amount,
        monthly_withdrawal=body.monthly_withdrawal,
        annual_return=body.expected_return,
        years=body.time_period,
        inflation_rate=body.effective_inflation,
    )
    return SWPResponse.from_result(result)
