"""
routes/tax.py -- Income tax endpoints
  POST /tax          -- tax under one regime
  POST /tax:compare  -- both regimes side by side with a recommendation

Deductions are only honoured by the old regime; the new regime allows the
standard deduction alone.
"""
from __future__ import annotations

from fastapi import APIRouter

from app.models import TaxCompareRequest, TaxCompareResponse, TaxRequest, TaxResponse
from app.utils.tax import calculate_tax, compare_regimes

router = APIRouter()


@router.post("/tax", response_model=TaxResponse)
def tax(body: TaxRequest) -> TaxResponse:
    result = calculate_tax(body.income, body.deductions.to_deductions(), body.regime)
    return TaxResponse.from_result(result)


@router.post("/tax:compare", response_model=TaxCompareResponse)
def tax_compare(body: TaxCompareRequest) -> TaxCompareResponse:
    result = compare_regimes(body.income, body.deductions.to_deductions())
    return TaxCompareResponse.from_result(result)
