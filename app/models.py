"""
Models for the financial calculators.

Engine results are frozen dataclasses (created fresh on every call, never
shared between calls). Request bodies are Pydantic models that carry the
calculator defaults and the input bounds; response models are built from
the engine results with ``from_result``.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.utils.formatting import format_currency

MAX_YEARS = 50


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class PrepaymentFrequency(str, Enum):
    ONE_TIME = "onetime"
    ANNUAL = "annual"
    MONTHLY = "monthly"


class TaxRegime(str, Enum):
    OLD = "old"
    NEW = "new"


class Verdict(str, Enum):
    RENT = "Rent"
    BUY = "Buy"


# ---------------------------------------------------------------------------
# Engine results (immutable value objects)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LoanYear:
    """Outstanding balance at the end of a loan year, with and without prepayment."""
    year: int
    without_prepayment: int
    with_prepayment: int


@dataclass(frozen=True)
class PrepaymentImpact:
    emi: int
    original_tenure: str
    original_total_interest: int
    new_tenure: str
    new_total_interest: int
    tenure_reduced: str
    interest_saved: int
    payoff_month: int
    months_saved: int
    yearly_data: tuple[LoanYear, ...] = ()


@dataclass(frozen=True)
class SIPYear:
    year: int
    invested: int
    wealth: int
    total: int
    monthly_investment: int


@dataclass(frozen=True)
class SIPResult:
    invested_amount: int
    future_value: int
    wealth_gained: int
    yearly_data: tuple[SIPYear, ...] = ()


@dataclass(frozen=True)
class SWPYear:
    year: int
    corpus: int
    withdrawn: int
    monthly_withdrawal: int
    cumulative_withdrawn: int


@dataclass(frozen=True)
class SWPResult:
    """depletion_month is 0 when the corpus lasts the whole horizon."""
    yearly_data: tuple[SWPYear, ...]
    total_withdrawn: int
    final_corpus: int
    corpus_depleted: bool
    depletion_month: int
    years_lasted: int
    months_lasted: int
    lasting_period: str


@dataclass(frozen=True)
class TaxDeductions:
    """Claimed old-regime deductions, before statutory caps."""
    section_80c: float = 0.0
    section_80d: float = 0.0
    hra: float = 0.0
    nps_personal: float = 0.0
    nps_employer: float = 0.0
    other_deductions: float = 0.0


@dataclass(frozen=True)
class TaxResult:
    regime: TaxRegime
    label: str
    taxable_income: int
    tax: int
    takehome: int
    deductions: int
    slab_tax: int
    cess: int
    rebate_applied: bool


@dataclass(frozen=True)
class RegimeComparison:
    old: TaxResult
    new: TaxResult
    savings: int
    recommended: TaxRegime


@dataclass(frozen=True)
class RentVsBuyYear:
    year: int
    rent_paid: int
    emi_paid: int
    cumulative_rent: int
    cumulative_emi: int
    investment_corpus: int
    home_value: int
    home_equity: int
    rent_net_worth: int
    buy_net_worth: int
    current_rent: int


@dataclass(frozen=True)
class RentVsBuyResult:
    yearly_data: tuple[RentVsBuyYear, ...]
    loan_amount: int
    emi: int
    total_rent_paid: int
    total_emi_paid: int
    final_investment_corpus: int
    final_home_value: int
    final_home_equity: int
    opportunity_cost: int
    rent_scenario_net_worth: int
    buy_scenario_net_worth: int
    verdict: Verdict
    difference: int


@dataclass(frozen=True)
class CarAffordability:
    down_payment_amount: int
    loan_amount: int
    monthly_emi: int
    total_running_cost: int
    total_monthly_expense: int
    percent_of_salary: float
    is_down_payment_compliant: bool
    is_tenure_compliant: bool
    is_expense_compliant: bool
    is_affordable: bool
    required_salary: int


@dataclass(frozen=True)
class BudgetSplit:
    needs: float
    wants: float
    savings: float


@dataclass(frozen=True)
class BudgetResult:
    effective_monthly_income: int
    ideal: BudgetSplit
    actual_percentages: BudgetSplit
    needs_compliant: bool
    savings_compliant: bool
    is_fully_compliant: bool
    total_actual_spending: int
    is_balanced: bool
    remaining_amount: int
    suggested: BudgetSplit


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------

class SIPRequest(BaseModel):
    monthly_investment: float = Field(default=10_000, ge=500, le=10_000_000)
    expected_return: float = Field(default=12, ge=0, le=50)
    time_period: int = Field(default=10, ge=1, le=MAX_YEARS)
    step_up_enabled: bool = False
    step_up_percentage: float = Field(default=10, ge=0, le=100)

    @property
    def effective_step_up(self) -> float:
        return self.step_up_percentage if self.step_up_enabled else 0.0


class SWPRequest(BaseModel):
    lumpsum_amount: float = Field(default=5_000_000, ge=100_000, le=1_000_000_000)
    monthly_withdrawal: float = Field(default=30_000, ge=1_000)
    expected_return: float = Field(default=10, ge=0, le=50)
    time_period: int = Field(default=20, ge=1, le=MAX_YEARS)
    inflation_enabled: bool = False
    inflation_rate: float = Field(default=6, ge=0, le=50)

    @property
    def effective_inflation(self) -> float:
        return self.inflation_rate if self.inflation_enabled else 0.0


class EMIRequest(BaseModel):
    principal: float = Field(default=5_000_000, ge=100_000, le=100_000_000)
    annual_rate: float = Field(default=8.5, ge=0, le=50)
    tenure: int = Field(default=20, ge=1, le=MAX_YEARS)


class LoanRequest(EMIRequest):
    prepayment: float = Field(default=100_000, ge=0)
    frequency: PrepaymentFrequency = PrepaymentFrequency.ANNUAL

    @field_validator("frequency", mode="before")
    @classmethod
    def check_frequency(cls, v: object) -> object:
        allowed = [f.value for f in PrepaymentFrequency]
        if v not in allowed and not isinstance(v, PrepaymentFrequency):
            raise ValueError(f"Frequency must be one of: {', '.join(allowed)}")
        return v


class DeductionsIn(BaseModel):
    section_80c: float = Field(default=150_000, ge=0)
    section_80d: float = Field(default=25_000, ge=0)
    hra: float = Field(default=0, ge=0)
    nps_personal: float = Field(default=0, ge=0)
    nps_employer: float = Field(default=0, ge=0)
    other_deductions: float = Field(default=0, ge=0)

    def to_deductions(self) -> TaxDeductions:
        return TaxDeductions(**self.model_dump())


class TaxRequest(BaseModel):
    income: float = Field(default=1_000_000, ge=0)
    deductions: DeductionsIn = Field(default_factory=DeductionsIn)
    regime: TaxRegime = TaxRegime.NEW

    @field_validator("regime", mode="before")
    @classmethod
    def check_regime(cls, v: object) -> object:
        if isinstance(v, str) and v.lower() in ("old", "new"):
            return v.lower()
        if isinstance(v, TaxRegime):
            return v
        raise ValueError("Regime must be 'old' or 'new'")


class TaxCompareRequest(BaseModel):
    income: float = Field(default=1_000_000, ge=0)
    deductions: DeductionsIn = Field(default_factory=DeductionsIn)


class RentVsBuyRequest(BaseModel):
    monthly_rent: float = Field(default=25_000, ge=1_000, le=10_000_000)
    annual_rent_increase: float = Field(default=5, ge=0, le=50)
    home_price: float = Field(default=5_000_000, ge=500_000, le=1_000_000_000)
    down_payment: float = Field(default=1_000_000, ge=0)
    interest_rate: float = Field(default=8.5, ge=0, le=50)
    loan_tenure: int = Field(default=20, ge=1, le=MAX_YEARS)
    home_appreciation: float = Field(default=5, ge=0, le=50)
    expected_return: float = Field(default=12, ge=0, le=50)
    time_period: int = Field(default=20, ge=1, le=MAX_YEARS)

    @model_validator(mode="after")
    def check_down_payment(self) -> "RentVsBuyRequest":
        if self.down_payment > self.home_price:
            raise ValueError("Down payment cannot exceed the home price")
        return self


class CarRequest(BaseModel):
    monthly_salary: float = Field(default=50_000, gt=0)
    on_road_price: float = Field(default=1_000_000, gt=0)
    down_payment_percent: float = Field(default=20, ge=0, le=100)
    loan_tenure_years: int = Field(default=4, ge=1, le=10)
    interest_rate: float = Field(default=9.5, ge=0, le=50)
    fuel_cost: float = Field(default=5_000, ge=0)
    insurance_cost: float = Field(default=2_000, ge=0)
    maintenance_cost: float = Field(default=1_500, ge=0)


class BudgetRequest(BaseModel):
    monthly_salary: float = Field(default=50_000, gt=0)
    annual_bonus: float = Field(default=0, ge=0)
    bonus_enabled: bool = False
    actual_needs: float = Field(default=25_000, ge=0)
    actual_wants: float = Field(default=15_000, ge=0)
    actual_savings: float = Field(default=10_000, ge=0)


# ---------------------------------------------------------------------------
# Response / output models
# ---------------------------------------------------------------------------

def _money(values: Dict[str, float]) -> Dict[str, str]:
    """Headline figures rendered for display ("₹43,391", "₹12.50 L", ...)."""
    return {key: format_currency(value) for key, value in values.items()}


class EMIResponse(BaseModel):
    emi: float
    total_payment: int
    total_interest: int
    formatted: Dict[str, str] = {}


class LoanYearOut(BaseModel):
    year: int
    without_prepayment: int
    with_prepayment: int


class LoanResponse(BaseModel):
    emi: int
    original_tenure: str
    original_total_interest: int
    new_tenure: str
    new_total_interest: int
    tenure_reduced: str
    interest_saved: int
    payoff_month: int
    months_saved: int
    yearly_data: List[LoanYearOut]
    formatted: Dict[str, str] = {}

    @classmethod
    def from_result(cls, r: PrepaymentImpact) -> "LoanResponse":
        return cls(
            **asdict(r),
            formatted=_money({
                "emi": r.emi,
                "original_total_interest": r.original_total_interest,
                "new_total_interest": r.new_total_interest,
                "interest_saved": r.interest_saved,
            }),
        )


class SIPYearOut(BaseModel):
    year: int
    invested: int
    wealth: int
    total: int
    monthly_investment: int


class SIPResponse(BaseModel):
    invested_amount: int
    future_value: int
    wealth_gained: int
    yearly_data: List[SIPYearOut]
    formatted: Dict[str, str] = {}

    @classmethod
    def from_result(cls, r: SIPResult) -> "SIPResponse":
        return cls(
            **asdict(r),
            formatted=_money({
                "invested_amount": r.invested_amount,
                "future_value": r.future_value,
                "wealth_gained": r.wealth_gained,
            }),
        )


class SWPYearOut(BaseModel):
    year: int
    corpus: int
    withdrawn: int
    monthly_withdrawal: int
    cumulative_withdrawn: int


class SWPResponse(BaseModel):
    yearly_data: List[SWPYearOut]
    total_withdrawn: int
    final_corpus: int
    corpus_depleted: bool
    depletion_month: Optional[int] = None
    years_lasted: int
    months_lasted: int
    lasting_period: str
    formatted: Dict[str, str] = {}

    @classmethod
    def from_result(cls, r: SWPResult) -> "SWPResponse":
        data = asdict(r)
        # 0 means "never depleted" inside the engine; the API reports null
        data["depletion_month"] = r.depletion_month or None
        return cls(
            **data,
            formatted=_money({
                "total_withdrawn": r.total_withdrawn,
                "final_corpus": r.final_corpus,
            }),
        )


class TaxResponse(BaseModel):
    regime: TaxRegime
    label: str
    taxable_income: int
    tax: int
    takehome: int
    deductions: int
    slab_tax: int
    cess: int
    rebate_applied: bool
    formatted: Dict[str, str] = {}

    @classmethod
    def from_result(cls, r: TaxResult) -> "TaxResponse":
        return cls(
            **asdict(r),
            formatted=_money({
                "taxable_income": r.taxable_income,
                "tax": r.tax,
                "takehome": r.takehome,
            }),
        )


class TaxCompareResponse(BaseModel):
    old: TaxResponse
    new: TaxResponse
    savings: int
    recommended: TaxRegime
    recommendation: str

    @classmethod
    def from_result(cls, r: RegimeComparison) -> "TaxCompareResponse":
        cheaper = "Old" if r.recommended is TaxRegime.OLD else "New"
        return cls(
            old=TaxResponse.from_result(r.old),
            new=TaxResponse.from_result(r.new),
            savings=r.savings,
            recommended=r.recommended,
            recommendation=(
                f"Choose {cheaper} Regime for maximum savings "
                f"({format_currency(abs(r.savings))} a year)"
            ),
        )


class RentVsBuyYearOut(BaseModel):
    year: int
    rent_paid: int
    emi_paid: int
    cumulative_rent: int
    cumulative_emi: int
    investment_corpus: int
    home_value: int
    home_equity: int
    rent_net_worth: int
    buy_net_worth: int
    current_rent: int


class RentVsBuyResponse(BaseModel):
    yearly_data: List[RentVsBuyYearOut]
    loan_amount: int
    emi: int
    total_rent_paid: int
    total_emi_paid: int
    final_investment_corpus: int
    final_home_value: int
    final_home_equity: int
    opportunity_cost: int
    rent_scenario_net_worth: int
    buy_scenario_net_worth: int
    verdict: Verdict
    difference: int
    formatted: Dict[str, str] = {}

    @classmethod
    def from_result(cls, r: RentVsBuyResult) -> "RentVsBuyResponse":
        return cls(
            **asdict(r),
            formatted=_money({
                "emi": r.emi,
                "final_investment_corpus": r.final_investment_corpus,
                "final_home_equity": r.final_home_equity,
                "difference": r.difference,
            }),
        )


class CarResponse(BaseModel):
    down_payment_amount: int
    loan_amount: int
    monthly_emi: int
    total_running_cost: int
    total_monthly_expense: int
    percent_of_salary: float
    is_down_payment_compliant: bool
    is_tenure_compliant: bool
    is_expense_compliant: bool
    is_affordable: bool
    required_salary: int
    formatted: Dict[str, str] = {}

    @classmethod
    def from_result(cls, r: CarAffordability) -> "CarResponse":
        return cls(
            **asdict(r),
            formatted=_money({
                "monthly_emi": r.monthly_emi,
                "total_monthly_expense": r.total_monthly_expense,
                "required_salary": r.required_salary,
            }),
        )


class BudgetSplitOut(BaseModel):
    needs: float
    wants: float
    savings: float


class BudgetResponse(BaseModel):
    effective_monthly_income: int
    ideal: BudgetSplitOut
    actual_percentages: BudgetSplitOut
    suggested: BudgetSplitOut
    needs_compliant: bool
    savings_compliant: bool
    is_fully_compliant: bool
    total_actual_spending: int
    is_balanced: bool
    remaining_amount: int

    @classmethod
    def from_result(cls, r: BudgetResult) -> "BudgetResponse":
        return cls(**asdict(r))


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime: str
    memory: str
    threads: int
