#!/usr/bin/env python
# Created by "Thieu" at 18:45, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

from xfis import (MamdaniFuzzySystem, SugenoFuzzySystem, TriangularMembership, TrapezoidMembership,
                  GaussianMembership, ImplicationMethod, AggregationMethod)


## Mamdani: tipping problem
fis = MamdaniFuzzySystem(implication_method=ImplicationMethod.MIN, aggregation_method=AggregationMethod.MAX)
service = fis.add_input("service", 0, 10)
service.add_term("poor", TrapezoidMembership(-1, 0, 2, 4))
service.add_term("good", TriangularMembership(2, 5, 8))
service.add_term("excellent", TrapezoidMembership(6, 8, 10, 11))
food = fis.add_input("food", 0, 10)
food.add_term("rancid", TrapezoidMembership(-1, 0, 1, 3))
food.add_term("delicious", TrapezoidMembership(7, 9, 10, 11))

tip = fis.add_output("tip", 0, 30)
tip.add_term("cheap", TriangularMembership(0, 5, 10))
tip.add_term("average", TriangularMembership(10, 15, 20))
tip.add_term("generous", TriangularMembership(20, 25, 30))

fis.add_rule("if (service is poor) or (food is rancid) then (tip is cheap)")
fis.add_rule("if (service is good) then (tip is average)")
fis.add_rule("if (service is excellent) or (food is delicious) then (tip is generous)")
for rule in fis.rules:
    print(rule)

for s, f in [(1, 2), (5, 5), (9, 8)]:
    print(f"service = {s}, food = {f} -> tip = {fis.calculate({service: s, food: f})[tip]:.2f}")


## Sugeno: piecewise linear approximation
sfis = SugenoFuzzySystem()
x = sfis.add_input("x", 0, 10)
x.add_term("low", GaussianMembership(0, 3))
x.add_term("high", GaussianMembership(10, 3))
y = sfis.add_output("y")
y.add_function(sfis.create_sugeno_function("flat", {x: 0.0}, 1.0))
y.add_function(sfis.create_sugeno_function("rise", {x: 2.0}, 0.0))
sfis.add_rule("if (x is low) then (y is flat)")
sfis.add_rule("if (x is very high) then (y is rise)")

for value in [0.0, 2.5, 5.0, 7.5, 10.0]:
    print(f"x = {value} -> y = {sfis.calculate({'x': value})[y]:.4f}")
