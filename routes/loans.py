"""
routes/loans.py -- Loan endpoints
  POST /loan:emi         -- EMI, total payment and total interest
  POST /loan:prepayment  -- tenure and interest saved by prepaying
"""
from __future__ import annotations

from fastapi import APIRouter

from app.models import EMIRequest, EMIResponse, LoanRequest, LoanResponse
from app.utils.finance import calculate_emi, calculate_prepayment_impact, round_rupees
from app.utils.formatting import format_currency

router = APIRouter()


@router.post("/loan:emi", response_model=EMIResponse)
def emi(body: EMIRequest) -> EMIResponse:
    monthly = calculate_emi(body.principal, body.annual_rate, body.tenure)
    total_payment = round_rupees(monthly * body.tenure * 12)
    total_interest = total_payment - round_rupees(body.principal)
    return EMIResponse(
        emi=round(monthly, 2),
        total_payment=total_payment,
        total_interest=total_interest,
        formatted={
            "emi": format_currency(round_rupees(monthly)),
            "total_payment": format_currency(total_payment),
            "total_interest": format_currency(total_interest),
        },
    )


@router.post("/loan:prepayment", response_model=LoanResponse)
def prepayment(body: LoanRequest) -> LoanResponse:
    """
    Prepayment impact. frequency is one of onetime / annual / monthly;
    for monthly, prepayment is the yearly total spread over 12 months.
    """
    result = calculate_prepayment_impact(
        principal=body.principal,
        annual_rate=body.annual_rate,
        years=body.tenure,
        prepayment=body.prepayment,
        frequency=body.frequency,
    )
    return LoanResponse.from_result(result)
