"""
Calculator - Arithmetic-only expression evaluation
==================================================

Evaluates ``+ - * / ( )`` over numeric literals with a small
recursive-descent parser. Nothing else is accepted, so user text is
never handed to a general-purpose evaluator.

Grammar:
    expression := term (("+" | "-") term)*
    term       := factor (("*" | "/") factor)*
    factor     := ("+" | "-") factor | NUMBER | "(" expression ")"
"""

import re
from typing import List, Union

from core.exceptions import CalculationError
from core.logging import get_logger

logger = get_logger("capabilities.calculator")

Number = Union[int, float]

TOKEN_PATTERN = re.compile(r"\s*(?:(\d+(?:\.\d*)?|\.\d+)|(\S))")
OPERATORS = frozenset("+-*/()")

# A run of characters that can belong to an arithmetic expression
EXPRESSION_PATTERN = re.compile(r"[-+(.\d][\d.\s+\-*/()]*")


def tokenize(expression: str) -> List[Union[Number, str]]:
    """
    Split an expression into numbers and operator symbols.

    Raises:
        CalculationError: On any character outside digits, '.', and + - * / ( )
    """
    tokens: List[Union[Number, str]] = []

    for number, symbol in TOKEN_PATTERN.findall(expression):
        if number:
            try:
                tokens.append(float(number) if "." in number else int(number))
            except ValueError:
                # int() refuses literals past the interpreter digit limit
                raise CalculationError("Number too large", {"digits": len(number)})
        elif symbol in OPERATORS:
            tokens.append(symbol)
        else:
            raise CalculationError("Unsupported character", {"character": symbol})

    return tokens


class ExpressionParser:
    """
    Recursive-descent evaluator over a token list.

    Example:
        ExpressionParser("2 * (3 + 4)").parse()  # 14
    """

    def __init__(self, expression: str):
        self.expression = expression
        self.tokens = tokenize(expression)
        self.position = 0

    def parse(self) -> Number:
        """
        Evaluate the whole expression.

        Raises:
            CalculationError: If the expression is empty or malformed
        """
        if not self.tokens:
            raise CalculationError("Empty expression")

        value = self._expression()

        if self.position != len(self.tokens):
            raise CalculationError("Unexpected token", {"token": self._peek()})

        return value

    def _peek(self):
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def _advance(self):
        token = self._peek()
        self.position += 1
        return token

    def _expression(self) -> Number:
        value = self._term()
        while self._peek() in ("+", "-"):
            operator = self._advance()
            right = self._term()
            value = value + right if operator == "+" else value - right
        return value

    def _term(self) -> Number:
        value = self._factor()
        while self._peek() in ("*", "/"):
            operator = self._advance()
            right = self._factor()
            if operator == "*":
                value = value * right
            elif right == 0:
                raise CalculationError("Division by zero")
            else:
                value = value / right
        return value

    def _factor(self) -> Number:
        token = self._advance()

        if token in ("+", "-"):
            value = self._factor()
            return value if token == "+" else -value

        if token == "(":
            value = self._expression()
            if self._advance() != ")":
                raise CalculationError("Unbalanced parentheses")
            return value

        if isinstance(token, (int, float)):
            return token

        if token is None:
            raise CalculationError("Unexpected end of expression")
        raise CalculationError("Unexpected token", {"token": token})


def evaluate(expression: str) -> Number:
    """Evaluate an arithmetic expression; raises CalculationError."""
    return ExpressionParser(expression).parse()


def format_number(value: Number) -> str:
    """Render a result, dropping the fraction from integral floats."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def extract_expression(text: str) -> str:
    """
    Pull the arithmetic part out of free text.

    Picks the longest expression-like run that contains a digit,
    e.g. "calculate 10 + 5" -> "10 + 5". Falls back to the whole
    text when nothing looks like arithmetic.
    """
    candidates = [
        match.group(0).strip().rstrip(".").strip()
        for match in EXPRESSION_PATTERN.finditer(text)
    ]
    candidates = [c for c in candidates if any(ch.isdigit() for ch in c)]

    if not candidates:
        return text.strip()

    return max(candidates, key=len)


def calculator(text: str) -> str:
    """
    Calculator tool: evaluate the expression embedded in ``text``.

    Returns "<expr> = <value>", or "Error calculating: <expr>" when the
    expression cannot be evaluated. Never raises.
    """
    expression = extract_expression(text)

    try:
        formatted = format_number(evaluate(expression))
    except (CalculationError, RecursionError, OverflowError, ValueError) as e:
        # ValueError: result too long for str() under the int digit limit
        logger.debug(f"Calculation failed for {expression!r}: {e}")
        return f"Error calculating: {expression}"

    return f"{expression} = {formatted}"
