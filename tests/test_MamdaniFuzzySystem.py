#!/usr/bin/env python
# Created by "Thieu" at 22:20, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import numpy as np
import pytest
from xfis import (MamdaniFuzzySystem, TriangularMembership, AndMethod, OrMethod, ImplicationMethod,
                  AggregationMethod, DefuzzificationMethod, UnsupportedFeatureError, StructuralError,
                  InvalidArgumentError, LookupFailureError, Conditions, OperatorType, HedgeType)


@pytest.fixture
def fis():
    model = MamdaniFuzzySystem()
    x = model.add_input("x", 0, 10)
    x.add_term("mid", TriangularMembership(0, 5, 10))
    x.add_term("poor", TriangularMembership(0, 0, 10))
    x.add_term("good", TriangularMembership(0, 10, 10))
    z = model.add_input("z", 0, 10)
    z.add_term("mid", TriangularMembership(0, 5, 10))
    y = model.add_output("y", 0, 30)
    y.add_term("cheap", TriangularMembership(0, 5, 10))
    y.add_term("avg", TriangularMembership(10, 15, 20))
    y.add_term("generous", TriangularMembership(20, 25, 30))
    return model


def test_centroid_of_symmetric_set(fis):
    y = fis.output_by_name("y")
    fis.add_rule("if (x is mid) then (y is avg)")
    assert fis.calculate({"x": 5.0, "z": 0.0})[y] == pytest.approx(15.0, abs=1e-6)
    assert fis.calculate({"x": 2.5, "z": 0.0})[y] == pytest.approx(15.0, abs=1e-6)
    fis.implication_method = ImplicationMethod.PRODUCTION
    assert fis.calculate([2.5, 0.0])[y] == pytest.approx(15.0, abs=1e-6)


def test_two_rules_balance(fis):
    y = fis.output_by_name("y")
    fis.add_rule("if (x is poor) then (y is cheap)")
    fis.add_rule("if (x is good) then (y is generous)")
    assert fis.calculate({"x": 5.0, "z": 0.0})[y] == pytest.approx(15.0, abs=1e-6)
    assert fis.calculate({"x": 2.0, "z": 0.0})[y] < 15.0
    assert fis.calculate({"x": 8.0, "z": 0.0})[y] > 15.0
    fis.aggregation_method = AggregationMethod.SUM
    assert fis.calculate({"x": 5.0, "z": 0.0})[y] == pytest.approx(15.0, abs=1e-6)


def test_output_without_firing_rule_is_nan(fis):
    fis.add_rule("if (x is mid) then (y is avg)")
    result = fis.calculate({"x": 0.0, "z": 5.0})
    assert np.isnan(result[fis.output_by_name("y")])


def test_rule_weight_scales_strength(fis):
    rule = fis.parse_rule("if (x is mid) then (y is avg)")
    rule.weight = 0.0
    fis.add_rule(rule)
    strengths = fis.evaluate_conditions(fis.fuzzify({"x": 5.0, "z": 5.0}))
    assert strengths[rule] == 0.0
    assert np.isnan(fis.calculate({"x": 5.0, "z": 5.0})[fis.output_by_name("y")])


@pytest.mark.parametrize("and_method, or_method, expected_and, expected_or", [
    (AndMethod.MIN, OrMethod.MAX, 0.5, 0.5),
    ("production", "probabilistic", 0.25, 0.75),
])
def test_and_or_methods(fis, and_method, or_method, expected_and, expected_or):
    fis.and_method = and_method
    fis.or_method = or_method
    r_and = fis.add_rule("if (x is mid) and (z is mid) then (y is avg)")
    r_or = fis.add_rule("if (x is mid) or (z is mid) then (y is avg)")
    strengths = fis.evaluate_conditions(fis.fuzzify({"x": 2.5, "z": 7.5}))
    assert strengths[r_and] == pytest.approx(expected_and)
    assert strengths[r_or] == pytest.approx(expected_or)


def test_hedges_and_negation(fis):
    r_very = fis.add_rule("if (x is very mid) then (y is avg)")
    r_not = fis.add_rule("if (x is not mid) then (y is avg)")
    r_somewhat = fis.add_rule("if (x is somewhat mid) then (y is avg)")
    strengths = fis.evaluate_conditions(fis.fuzzify({"x": 2.5, "z": 0.0}))
    assert strengths[r_very] == pytest.approx(0.25)
    assert strengths[r_not] == pytest.approx(0.5)
    assert strengths[r_somewhat] == pytest.approx(np.sqrt(0.5))


def test_unsupported_defuzzification(fis):
    fis.add_rule("if (x is mid) then (y is avg)")
    fis.defuzzification_method = DefuzzificationMethod.BISECTOR
    with pytest.raises(UnsupportedFeatureError):
        fis.calculate({"x": 5.0, "z": 0.0})
    fis.defuzzification_method = "average_maximum"
    with pytest.raises(NotImplementedError):
        fis.calculate({"x": 5.0, "z": 0.0})


def test_invalid_methods(fis):
    with pytest.raises(InvalidArgumentError):
        fis.and_method = "max"
    with pytest.raises(InvalidArgumentError):
        MamdaniFuzzySystem(implication_method="sum")


def test_structure_errors(fis):
    with pytest.raises(StructuralError):
        fis.calculate({"x": 5.0, "z": 0.0})
    fis.add_rule("if (x is mid) then (y is avg)")
    with pytest.raises(InvalidArgumentError):
        fis.calculate({"x": 5.0})
    with pytest.raises(InvalidArgumentError):
        fis.calculate({"x": "five", "z": 0.0})
    with pytest.raises(InvalidArgumentError):
        fis.add_input("x", 0, 1)
    with pytest.raises(LookupFailureError):
        fis.get_term_by_name("x", "huge")
    with pytest.raises(KeyError):
        fis.output_by_name("w")


def test_clear_and_set_rules(fis):
    r1 = fis.parse_rule("if (x is mid) then (y is avg)")
    r2 = fis.parse_rule("if (x is poor) then (y is cheap)")
    fis.set_rules([r1, r2])
    assert fis.rules == [r1, r2]
    fis.clear_rules()
    assert fis.rules == []


def test_rule_built_without_text(fis):
    x, z, y = fis.input_by_name("x"), fis.input_by_name("z"), fis.output_by_name("y")
    rule = fis.empty_rule()
    rule.condition = Conditions(OperatorType.OR, conditions=[
        rule.create_condition(x, fis.get_term_by_name("x", "mid")),
        rule.create_condition(z, fis.get_term_by_name("z", "mid"), negated=True, hedge=HedgeType.VERY),
    ])
    rule.conclusion.variable = y
    rule.conclusion.term = fis.get_term_by_name("y", "avg")
    fis.add_rule(rule)
    assert str(rule) == "if (x is mid) or (z is not very mid) then (y is avg)"
    assert fis.calculate({"x": 5.0, "z": 5.0})[y] == pytest.approx(15.0, abs=1e-6)
