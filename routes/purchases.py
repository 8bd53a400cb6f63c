"""
routes/purchases.py -- Big-ticket purchase decisions
  POST /rent-vs-buy        -- net worth of renting + investing vs buying
  POST /car:affordability  -- 20/4/10 rule check
  POST /budget             -- 50/30/20 rule check
"""
from __future__ import annotations

from fastapi import APIRouter

from app.models import (
    BudgetRequest,
    BudgetResponse,
    CarRequest,
    CarResponse,
    RentVsBuyRequest,
    RentVsBuyResponse,
)
from app.utils.affordability import calculate_budget, check_car_affordability
from app.utils.rent_vs_buy import calculate_rent_vs_buy

router = APIRouter()


@router.post("/rent-vs-buy", response_model=RentVsBuyResponse)
def rent_vs_buy(body: RentVsBuyRequest) -> RentVsBuyResponse:
    """The loan amount is home_price - down_payment."""
    result = calculate_rent_vs_buy(
        monthly_rent=body.monthly_rent,
        annual_rent_increase=body.annual_rent_increase,
        home_price=body.home_price,
        down_payment=body.down_payment,
        interest_rate=body.interest_rate,
        loan_tenure=body.loan_tenure,
        home_appreciation=body.home_appreciation,
        expected_return=body.expected_return,
        years=body.time_period,
    )
    return RentVsBuyResponse.from_result(result)


@router.post("/car:affordability", response_model=CarResponse)
def car_affordability(body: CarRequest) -> CarResponse:
    result = check_car_affordability(**body.model_dump())
    return CarResponse.from_result(result)


@router.post("/budget", response_model=BudgetResponse)
def budget(body: BudgetRequest) -> BudgetResponse:
    result = calculate_budget(**body.model_dump())
    return BudgetResponse.from_result(result)
