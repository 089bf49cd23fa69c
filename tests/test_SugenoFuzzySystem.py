#!/usr/bin/env python
# Created by "Thieu" at 22:50, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import numpy as np
import pytest
from xfis import (SugenoFuzzySystem, GaussianMembership, TriangularMembership, LinearSugenoFunction,
                  StructuralError, InvalidArgumentError, InvalidNameError, LookupFailureError)


@pytest.fixture
def fis():
    model = SugenoFuzzySystem()
    x = model.add_input("x", 0, 10)
    x.add_term("low", GaussianMembership(0, 3))
    x.add_term("high", GaussianMembership(10, 3))
    y = model.add_output("y")
    y.add_function(model.create_sugeno_function("flat", {x: 0.0}, 1.0))
    y.add_function(model.create_sugeno_function("rise", {x: 2.0}, 0.0))
    model.add_rule("if (x is low) then (y is flat)")
    model.add_rule("if (x is high) then (y is rise)")
    return model


def test_weighted_average(fis):
    y = fis.output_by_name("y")
    x = fis.input_by_name("x")
    assert fis.calculate({x: 5.0})[y] == pytest.approx(5.5)
    assert fis.calculate({"x": 5.0})[y] == pytest.approx(5.5)
    assert fis.calculate([5.0])[y] == pytest.approx(5.5)
    w_low, w_high = np.exp(-1 / 18), np.exp(-81 / 18)
    expected = (w_low * 1.0 + w_high * 2.0) / (w_low + w_high)
    assert fis.calculate({x: 1.0})[y] == pytest.approx(expected)


def test_linear_function_evaluation(fis):
    x = fis.input_by_name("x")
    z = fis.add_input("z", 0, 5)
    func = LinearSugenoFunction("lin", fis.inputs, [2.0, -1.0, 0.5])
    assert func.get_coefficient(x) == 2.0
    assert func.get_coefficient("z") == -1.0
    assert func.get_coefficient() == 0.5
    assert func.evaluate({x: 3.0, z: 1.0}) == pytest.approx(5.5)
    func.set_coefficient(None, 1.0)
    func.set_coefficient("z", 0.0)
    assert func.evaluate({x: 3.0, z: 1.0}) == pytest.approx(7.0)
    with pytest.raises(LookupFailureError):
        func.evaluate({z: 1.0})
    with pytest.raises(InvalidArgumentError):
        LinearSugenoFunction("bad", fis.inputs, [1.0])
    with pytest.raises(InvalidArgumentError):
        func.set_coefficient("w", 1.0)


def test_function_sees_inputs_added_later():
    model = SugenoFuzzySystem()
    func = model.create_sugeno_function("f")
    x = model.add_input("x", 0, 1)
    func.set_coefficient(x, 3.0)
    assert func.evaluate({x: 2.0}) == pytest.approx(6.0)


def test_no_rule_fires_gives_zero():
    model = SugenoFuzzySystem()
    x = model.add_input("x", 0, 10)
    x.add_term("low", TriangularMembership(0, 1, 2))
    y = model.add_output("y")
    y.add_function(model.create_sugeno_function("const", {x: 0.0}, 4.0))
    model.add_rule("if (x is low) then (y is const)")
    assert model.calculate({x: 1.0})[y] == pytest.approx(4.0)
    assert model.calculate({x: 8.0})[y] == 0.0


def test_lookups(fis):
    assert fis.get_function_by_name("y", "rise").name == "rise"
    assert fis.get_term_by_name("x", "high").mf.b == 10.0
    with pytest.raises(LookupFailureError):
        fis.get_function_by_name("y", "fall")
    with pytest.raises(LookupFailureError):
        fis.input_by_name("w")


def test_errors():
    model = SugenoFuzzySystem()
    x = model.add_input("x", 0, 10)
    model.add_output("y")
    with pytest.raises(StructuralError):
        model.calculate({x: 1.0})
    with pytest.raises(InvalidArgumentError):
        model.add_output("x")
    with pytest.raises(InvalidNameError):
        model.add_input("bad name", 0, 1)
    with pytest.raises(InvalidNameError):
        model.add_input("then", 0, 1)
    with pytest.raises(InvalidArgumentError):
        model.add_input("w", 5, 1)


def test_rule_text(fis):
    assert [str(rule) for rule in fis.rules] == ["if (x is low) then (y is flat)", "if (x is high) then (y is rise)"]
