#!/usr/bin/env python
# Created by "Thieu" at 15:40, 02/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

from enum import Enum
from xfis.helpers.errors import InvalidArgumentError


class OperatorType(Enum):
    AND = "and"
    OR = "or"


class HedgeType(Enum):
    """Linguistic hedge applied to a membership degree before negation."""
    NONE = "none"
    SLIGHTLY = "slightly"       # cube root
    SOMEWHAT = "somewhat"       # square root
    VERY = "very"               # square
    EXTREMELY = "extremely"     # cube


class SingleCondition:
    """``variable is [not] value``. Used as the conclusion of a rule."""

    def __init__(self, variable=None, term=None, negated=False):
        self.variable = variable
        self.term = term
        self.negated = negated

    def __str__(self):
        neg = "not " if self.negated else ""
        return f"({self.variable.name} is {neg}{self.term.name})"


class FuzzyCondition(SingleCondition):
    """Leaf of a condition tree: ``input_variable is [not] [hedge] term``."""

    def __init__(self, variable=None, term=None, negated=False, hedge=HedgeType.NONE):
        super().__init__(variable, term, negated)
        if not isinstance(hedge, HedgeType):
            raise InvalidArgumentError(f"Unsupported hedge: {hedge}.")
        self.hedge = hedge

    def __str__(self):
        neg = "not " if self.negated else ""
        hedge = "" if self.hedge == HedgeType.NONE else f"{self.hedge.value} "
        return f"({self.variable.name} is {neg}{hedge}{self.term.name})"


class Conditions:
    """
    Inner node of a condition tree.

    Children (``FuzzyCondition`` leaves or nested ``Conditions``) are folded left to right with
    ``op``; ``negated`` is applied to the folded value.
    """

    def __init__(self, op=OperatorType.AND, negated=False, conditions=None):
        if not isinstance(op, OperatorType):
            raise InvalidArgumentError(f"Unsupported operator: {op}.")
        self.op = op
        self.negated = negated
        self.conditions = list(conditions) if conditions is not None else []

    def render(self, nested=False):
        # Negation of a group has no textual form in the rule grammar and is not rendered.
        parts = []
        for cond in self.conditions:
            parts.append(cond.render(nested=True) if isinstance(cond, Conditions) else str(cond))
        text = f" {self.op.value} ".join(parts)
        return f"({text})" if nested else text

    def __str__(self):
        return self.render()


class BaseFuzzyRule:
    """A rule ``if <condition> then <conclusion>``."""

    def __init__(self):
        self.condition = Conditions()
        self.conclusion = SingleCondition()

    @staticmethod
    def create_condition(variable, term, negated=False, hedge=HedgeType.NONE):
        return FuzzyCondition(variable, term, negated, hedge)

    def __str__(self):
        return f"if {self.condition} then {self.conclusion}"

    def __repr__(self):
        return f"{self.__class__.__name__}('{self}')"


class MamdaniFuzzyRule(BaseFuzzyRule):
    """Mamdani rule; its firing strength is scaled by ``weight``."""

    def __init__(self, weight=1.0):
        super().__init__()
        self.weight = float(weight)


class SugenoFuzzyRule(BaseFuzzyRule):
    pass
