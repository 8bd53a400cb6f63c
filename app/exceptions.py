"""
exceptions.py -- Exception hierarchy for the calculators.

The engine never raises for in-range numeric inputs. It only fails fast
on values outside a closed set (prepayment frequency, tax regime), which
would otherwise turn into a silent wrong answer.
"""
from __future__ import annotations


class CalculatorError(Exception):
    """Base exception for all calculator errors."""


class InvalidInputError(CalculatorError, ValueError):
    """Raised when an argument is outside the values a calculator accepts."""


class ConfigurationError(CalculatorError):
    """Raised when configuration is invalid or missing."""
