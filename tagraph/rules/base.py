"""
Rule base class and boolean combinators.
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Rule(ABC):
    """Stateless boolean predicate over an absolute index."""

    @abstractmethod
    def is_satisfied(self, index: int) -> bool:
        pass

    def and_(self, other: 'Rule') -> 'Rule':
        return AndRule(self, other)

    def or_(self, other: 'Rule') -> 'Rule':
        return OrRule(self, other)

    def xor(self, other: 'Rule') -> 'Rule':
        return XorRule(self, other)

    def negation(self) -> 'Rule':
        return NotRule(self)

    __and__ = and_
    __or__ = or_
    __xor__ = xor
    __invert__ = negation

    def _trace(self, index: int, satisfied: bool) -> bool:
        logger.debug("rule_evaluated", extra={"rule": repr(self), "index": index, "satisfied": satisfied})
        return satisfied

    def __repr__(self) -> str:
        return self.__class__.__name__


class AndRule(Rule):
    def __init__(self, rule1: Rule, rule2: Rule):
        self.rule1 = rule1
        self.rule2 = rule2

    def is_satisfied(self, index: int) -> bool:
        return self._trace(index, self.rule1.is_satisfied(index) and self.rule2.is_satisfied(index))

    def __repr__(self) -> str:
        return f"({self.rule1!r} AND {self.rule2!r})"


class OrRule(Rule):
    def __init__(self, rule1: Rule, rule2: Rule):
        self.rule1 = rule1
        self.rule2 = rule2

    def is_satisfied(self, index: int) -> bool:
        return self._trace(index, self.rule1.is_satisfied(index) or self.rule2.is_satisfied(index))

    def __repr__(self) -> str:
        return f"({self.rule1!r} OR {self.rule2!r})"


class XorRule(Rule):
    def __init__(self, rule1: Rule, rule2: Rule):
        self.rule1 = rule1
        self.rule2 = rule2

    def is_satisfied(self, index: int) -> bool:
        return self._trace(index, self.rule1.is_satisfied(index) != self.rule2.is_satisfied(index))

    def __repr__(self) -> str:
        return f"({self.rule1!r} XOR {self.rule2!r})"


class NotRule(Rule):
    def __init__(self, rule: Rule):
        self.rule = rule

    def is_satisfied(self, index: int) -> bool:
        return self._trace(index, not self.rule.is_satisfied(index))

    def __repr__(self) -> str:
        return f"NOT {self.rule!r}"
