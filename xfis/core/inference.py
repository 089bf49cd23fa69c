#!/usr/bin/env python
# Created by "Thieu" at 16:02, 02/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

from enum import Enum
import numpy as np
from xfis.core.rules import Conditions, FuzzyCondition, HedgeType, OperatorType
from xfis.helpers import validator
from xfis.helpers.errors import StructuralError


class AndMethod(Enum):
    MIN = "min"
    PRODUCTION = "production"


class OrMethod(Enum):
    MAX = "max"
    PROBABILISTIC = "probabilistic"


class ImplicationMethod(Enum):
    MIN = "min"
    PRODUCTION = "production"


class AggregationMethod(Enum):
    MAX = "max"
    SUM = "sum"


class DefuzzificationMethod(Enum):
    CENTROID = "centroid"
    BISECTOR = "bisector"
    AVERAGE_MAXIMUM = "average_maximum"


def to_method(enum_class, value):
    """Convert an enum member or its string value (e.g. "min") into a member of ``enum_class``."""
    if isinstance(value, enum_class):
        return value
    supported = [item.value for item in enum_class]
    return enum_class(validator.check_str(enum_class.__name__, value, supported))


def apply_hedge(value, hedge):
    if hedge == HedgeType.SLIGHTLY:
        return value ** (1.0 / 3.0)
    elif hedge == HedgeType.SOMEWHAT:
        return np.sqrt(value)
    elif hedge == HedgeType.VERY:
        return value * value
    elif hedge == HedgeType.EXTREMELY:
        return value ** 3
    return value


def and_operator(val1, val2, method=AndMethod.MIN):
    if method == AndMethod.MIN:
        return min(val1, val2)
    return val1 * val2


def or_operator(val1, val2, method=OrMethod.MAX):
    if method == OrMethod.MAX:
        return max(val1, val2)
    return val1 + val2 - val1 * val2


def fuzzify_variables(variables, input_values):
    """
    Membership degree of every term of every variable.

    Parameters
    ----------
    variables : list of FuzzyVariable
    input_values : dict
        ``{FuzzyVariable: crisp value}``, one entry per variable.

    Returns
    -------
    dict
        ``{FuzzyVariable: {FuzzyTerm: degree}}``. NaN degrees are reported as 0.
    """
    result = {}
    for var in variables:
        degrees = {}
        for term in var.terms:
            value = term.mf.get_value(input_values[var])
            degrees[term] = 0.0 if np.isnan(value) else float(value)
        result[var] = degrees
    return result


def evaluate_condition(condition, fuzzified, and_method=AndMethod.MIN, or_method=OrMethod.MAX):
    """Firing strength of a condition tree for already fuzzified inputs."""
    if isinstance(condition, Conditions):
        if len(condition.conditions) == 0:
            raise StructuralError("Condition group has no conditions.")
        result = evaluate_condition(condition.conditions[0], fuzzified, and_method, or_method)
        for child in condition.conditions[1:]:
            value = evaluate_condition(child, fuzzified, and_method, or_method)
            if condition.op == OperatorType.AND:
                result = and_operator(result, value, and_method)
            else:
                result = or_operator(result, value, or_method)
        return 1.0 - result if condition.negated else result
    elif isinstance(condition, FuzzyCondition):
        result = apply_hedge(fuzzified[condition.variable][condition.term], condition.hedge)
        return 1.0 - result if condition.negated else result
    raise StructuralError(f"Unknown condition type: {type(condition).__name__}.")


def centroid(mf, min_value, max_value, n_intervals=50):
    """
    Centre of gravity of ``mf`` over [min_value, max_value] by composite Simpson's rule.

    Returns NaN when the membership function is zero over the whole domain.
    """
    step = (max_value - min_value) / n_intervals
    numerator, denominator = 0.0, 0.0
    pt_right = min_value
    val_right = mf.get_value(pt_right)
    for idx in range(n_intervals):
        pt_left, val_left = pt_right, val_right
        pt_center = min_value + step * (idx + 0.5)
        pt_right = min_value + step * (idx + 1)
        val_center = mf.get_value(pt_center)
        val_right = mf.get_value(pt_right)
        numerator += step * (pt_left * val_left + 4 * pt_center * val_center + pt_right * val_right) / 6.0
        denominator += step * (val_left + 4 * val_center + val_right) / 6.0
    if denominator == 0:
        return float("nan")
    return numerator / denominator
