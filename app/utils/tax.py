"""
utils/tax.py -- Indian income tax under the old and new regimes (FY 2025-26).

calculate_tax(income, deductions, regime) -> TaxResult
compare_regimes(income, deductions)       -> RegimeComparison
slab_tax(taxable_income, slabs)           -> progressive tax before cess

Slab tables are (lower, upper, rate %) rows. Tax for a row is
(min(income, upper) - lower) * rate for every row the income reaches;
the rows are evaluated together with numpy.

Old regime:
  taxable = income - (50,000 standard + min(80C, 1.5L) + min(80D, 50K)
                      + HRA + min(NPS personal, 50K) + NPS employer + other)
New regime:
  taxable = income - 75,000 standard deduction, nothing else.
  taxable <= 12,00,000 -> tax = 0 (full Section 87A rebate, no marginal relief)

A 4% health and education cess is added to the slab tax in both regimes.
"""
from __future__ import annotations

import math

import numpy as np

from app.exceptions import InvalidInputError
from app.logging import get_logger
from app.models import RegimeComparison, TaxDeductions, TaxRegime, TaxResult
from app.utils.finance import round_rupees

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Slab tables
# ---------------------------------------------------------------------------

OLD_REGIME_SLABS: tuple[tuple[float, float, float], ...] = (
    (0, 250_000, 0),
    (250_000, 500_000, 5),
    (500_000, 1_000_000, 20),
    (1_000_000, math.inf, 30),
)

NEW_REGIME_SLABS: tuple[tuple[float, float, float], ...] = (
    (0, 400_000, 0),
    (400_000, 800_000, 5),
    (800_000, 1_200_000, 10),
    (1_200_000, 1_600_000, 15),
    (1_600_000, 2_000_000, 20),
    (2_000_000, 2_400_000, 25),
    (2_400_000, math.inf, 30),
)

CESS_RATE = 0.04

OLD_STANDARD_DEDUCTION = 50_000
NEW_STANDARD_DEDUCTION = 75_000
NEW_REGIME_REBATE_LIMIT = 1_200_000

SECTION_80C_CAP = 150_000
SECTION_80D_CAP = 50_000
NPS_PERSONAL_CAP = 50_000  # 80CCD(1B), over and above 80C

REGIME_LABELS = {
    TaxRegime.OLD: "Old Regime",
    TaxRegime.NEW: "New Regime",
}


# ---------------------------------------------------------------------------
# Slab arithmetic
# ---------------------------------------------------------------------------

def slab_tax(taxable_income: float, slabs: tuple[tuple[float, float, float], ...]) -> float:
    """Progressive tax on ``taxable_income`` for a slab table, before cess."""
    table = np.array(slabs, dtype=np.float64)
    lower, upper, rate = table[:, 0], table[:, 1], table[:, 2]
    taxed_in_slab = np.clip(taxable_income - lower, 0.0, upper - lower)
    return float(np.sum(taxed_in_slab * rate / 100.0))


def old_regime_deductions(deductions: TaxDeductions) -> float:
    """Total old-regime deductions, statutory caps applied."""
    return (
        OLD_STANDARD_DEDUCTION
        + min(deductions.section_80c, SECTION_80C_CAP)
        + min(deductions.section_80d, SECTION_80D_CAP)
        + deductions.hra
        + min(deductions.nps_personal, NPS_PERSONAL_CAP)
        + deductions.nps_employer
        + deductions.other_deductions
    )


def parse_regime(regime: TaxRegime | str) -> TaxRegime:
    try:
        return TaxRegime(regime)
    except ValueError:
        raise InvalidInputError(f"Unknown tax regime {regime!r}; expected 'old' or 'new'")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def calculate_tax(
    income: float,
    deductions: TaxDeductions | None = None,
    regime: TaxRegime | str = TaxRegime.NEW,
) -> TaxResult:
    """
    Tax payable on annual gross ``income`` under one regime.

    ``deductions`` is ignored under the new regime. takehome is
    income - tax on the rounded tax figure, so the identity holds exactly.
    """
    regime = parse_regime(regime)
    deductions = deductions or TaxDeductions()

    if regime is TaxRegime.OLD:
        total_deductions = old_regime_deductions(deductions)
        slabs = OLD_REGIME_SLABS
    else:
        total_deductions = NEW_STANDARD_DEDUCTION
        slabs = NEW_REGIME_SLABS

    taxable_income = max(0.0, income - total_deductions)
    base_tax = slab_tax(taxable_income, slabs)
    cess = base_tax * CESS_RATE
    tax = base_tax + cess

    rebate_applied = False
    if regime is TaxRegime.NEW and taxable_income <= NEW_REGIME_REBATE_LIMIT:
        rebate_applied = tax > 0
        tax = 0.0
        cess = 0.0

    tax_rounded = round_rupees(tax)

    logger.debug(
        "tax: regime=%s income=%s taxable=%s tax=%s rebate=%s",
        regime.value, income, taxable_income, tax_rounded, rebate_applied,
    )

    return TaxResult(
        regime=regime,
        label=REGIME_LABELS[regime],
        taxable_income=round_rupees(taxable_income),
        tax=tax_rounded,
        takehome=round_rupees(income) - tax_rounded,
        deductions=round_rupees(total_deductions),
        slab_tax=round_rupees(base_tax),
        cess=round_rupees(cess),
        rebate_applied=rebate_applied,
    )


def compare_regimes(income: float, deductions: TaxDeductions | None = None) -> RegimeComparison:
    """
    Run both regimes on the same income.

    savings = new.tax - old.tax; a positive figure means the old regime is
    cheaper and is recommended, otherwise the new regime is.
    """
    old = calculate_tax(income, deductions, TaxRegime.OLD)
    new = calculate_tax(income, deductions, TaxRegime.NEW)
    savings = new.tax - old.tax
    return RegimeComparison(
        old=old,
        new=new,
        savings=savings,
        recommended=TaxRegime.OLD if savings > 0 else TaxRegime.NEW,
    )
