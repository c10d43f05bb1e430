"""
Test Calculator Module
======================

Unit tests for the arithmetic parser and the calculator tool.
"""

import pytest
from pathlib import Path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from capabilities.calculator import (
    tokenize, evaluate, format_number, extract_expression, calculator
)
from core.exceptions import CalculationError


class TestTokenize:
    """Tests for tokenize()."""

    def test_numbers_and_operators(self):
        assert tokenize("1 + 2.5*(3)") == [1, "+", 2.5, "*", "(", 3, ")"]

    def test_leading_dot(self):
        assert tokenize(".5") == [0.5]

    def test_rejects_names(self):
        """Test identifiers are never accepted."""
        with pytest.raises(CalculationError):
            tokenize("__import__('os')")

    def test_rejects_power_operator(self):
        with pytest.raises(CalculationError):
            tokenize("2 ^ 3")


class TestEvaluate:
    """Tests for evaluate()."""

    def test_precedence(self):
        """Test multiplication binds tighter than addition."""
        assert evaluate("2 + 3 * 4") == 14

    def test_parentheses(self):
        assert evaluate("(2 + 3) * 4") == 20

    def test_left_associative(self):
        assert evaluate("10 - 4 - 3") == 3
        assert evaluate("100 / 10 / 5") == 2

    def test_unary_minus(self):
        assert evaluate("-3 + 5") == 2
        assert evaluate("2 * -(1 + 1)") == -4

    def test_division_gives_float(self):
        assert evaluate("7 / 2") == 3.5

    def test_division_by_zero(self):
        with pytest.raises(CalculationError):
            evaluate("1 / 0")

    def test_empty_expression(self):
        with pytest.raises(CalculationError):
            evaluate("   ")

    def test_unbalanced_parentheses(self):
        with pytest.raises(CalculationError):
            evaluate("(1 + 2")

    def test_trailing_operator(self):
        with pytest.raises(CalculationError):
            evaluate("1 +")

    def test_extra_closing_parenthesis(self):
        with pytest.raises(CalculationError):
            evaluate("1 + 2)")


class TestFormatNumber:
    """Tests for format_number()."""

    def test_integral_float(self):
        assert format_number(15.0) == "15"

    def test_fraction(self):
        assert format_number(2.5) == "2.5"

    def test_int(self):
        assert format_number(-4) == "-4"


class TestExtractExpression:
    """Tests for extract_expression()."""

    def test_strips_words(self):
        assert extract_expression("calculate 10 + 5") == "10 + 5"

    def test_question(self):
        assert extract_expression("what is (2+3)*4?") == "(2+3)*4"

    def test_trailing_period(self):
        assert extract_expression("compute 6 * 7.") == "6 * 7"

    def test_no_digits_falls_back_to_text(self):
        assert extract_expression("  do some math  ") == "do some math"


class TestCalculatorTool:
    """Tests for the calculator tool."""

    def test_scenario(self):
        """Test the result format for a simple request."""
        assert calculator("calculate 10 + 5") == "10 + 5 = 15"

    def test_float_result(self):
        assert calculator("compute 1 / 4") == "1 / 4 = 0.25"

    def test_error_names_expression(self):
        """Test failures become a result string instead of raising."""
        assert calculator("calculate 1 / 0") == "Error calculating: 1 / 0"

    def test_no_expression(self):
        assert calculator("do some math") == "Error calculating: do some math"

    def test_deep_nesting(self):
        """Test pathological nesting is reported, not raised."""
        expression = "(" * 5000 + "1" + ")" * 5000
        assert calculator(expression).startswith("Error calculating:")

    def test_huge_literal(self):
        """Test a literal past the int digit limit is reported, not raised."""
        result = calculator("calculate " + "9" * 5000 + " + 1")
        assert result.startswith("Error calculating: 999")

    def test_huge_result(self):
        """Test a result too long to print is reported, not raised."""
        n = "9" * 2500
        assert calculator(f"calculate {n} * {n}") == f"Error calculating: {n} * {n}"


class TestTokenizeLimits:
    """Tests for oversized numeric literals."""

    def test_huge_literal_raises_calculation_error(self):
        with pytest.raises(CalculationError):
            tokenize("9" * 5000)
