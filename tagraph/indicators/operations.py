"""
Lightweight (uncached) arithmetic nodes.

Each evaluation recomputes the operands; wrap the result in a
MemoizedIndicator when repeated queries are expensive.
"""

import operator
from decimal import Decimal
from typing import Callable

from ..utils.numeric import num_min, num_max, num_sqrt
from .base import Indicator, ensure_compatible


class BinaryOperation(Indicator):
    """Elementwise combination of two indicators."""

    def __init__(self, operator_fn: Callable[[Decimal, Decimal], Decimal], left: Indicator, right: Indicator, symbol: str):
        ensure_compatible(left, right)
        super().__init__(left.bar_series)
        self.operator_fn = operator_fn
        self.left = left
        self.right = right
        self.symbol = symbol

    @classmethod
    def sum(cls, left: Indicator, right: Indicator) -> 'BinaryOperation':
        return cls(operator.add, left, right, '+')

    @classmethod
    def difference(cls, left: Indicator, right: Indicator) -> 'BinaryOperation':
        return cls(operator.sub, left, right, '-')

    @classmethod
    def product(cls, left: Indicator, right: Indicator) -> 'BinaryOperation':
        return cls(operator.mul, left, right, '*')

    @classmethod
    def quotient(cls, left: Indicator, right: Indicator) -> 'BinaryOperation':
        return cls(operator.truediv, left, right, '/')

    @classmethod
    def min(cls, left: Indicator, right: Indicator) -> 'BinaryOperation':
        return cls(num_min, left, right, 'min')

    @classmethod
    def max(cls, left: Indicator, right: Indicator) -> 'BinaryOperation':
        return cls(num_max, left, right, 'max')

    def get_value(self, index: int) -> Decimal:
        return self.operator_fn(self.left.get_value(index), self.right.get_value(index))

    def __repr__(self) -> str:
        if self.symbol in ('min', 'max'):
            return f"{self.symbol}({self.left!r}, {self.right!r})"
        return f"({self.left!r} {self.symbol} {self.right!r})"


class UnaryOperation(Indicator):
    """Elementwise function of one indicator."""

    def __init__(self, operator_fn: Callable[[Decimal], Decimal], operand: Indicator, name: str):
        super().__init__(operand.bar_series)
        self.operator_fn = operator_fn
        self.operand = operand
        self.name = name

    @classmethod
    def abs(cls, operand: Indicator) -> 'UnaryOperation':
        return cls(operator.abs, operand, 'abs')

    @classmethod
    def sqrt(cls, operand: Indicator) -> 'UnaryOperation':
        return cls(num_sqrt, operand, 'sqrt')

    @classmethod
    def negate(cls, operand: Indicator) -> 'UnaryOperation':
        return cls(operator.neg, operand, 'neg')

    def get_value(self, index: int) -> Decimal:
        return self.operator_fn(self.operand.get_value(index))

    def __repr__(self) -> str:
        return f"{self.name}({self.operand!r})"
