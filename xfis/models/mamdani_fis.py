#!/usr/bin/env python
# Created by "Thieu" at 10:15, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

from xfis.core.variables import FuzzyVariable
from xfis.core.rules import MamdaniFuzzyRule
from xfis.core import inference as inf
from xfis.helpers.membership_family import CompositeMembership, ConstantMembership, MfCompositionType
from xfis.helpers.errors import UnsupportedFeatureError
from xfis.models.base_fis import BaseFuzzySystem


class MamdaniFuzzySystem(BaseFuzzySystem):
    """
    Mamdani fuzzy inference system.

    Rule conclusions are fuzzy terms of output variables. Each rule's firing strength truncates (min)
    or scales (production) its conclusion term, the implicated terms of one output are aggregated
    (max or sum) and the resulting fuzzy set is defuzzified by its centroid.

    Parameters
    ----------
    and_method : AndMethod or str, optional (default="min")
    or_method : OrMethod or str, optional (default="max")
    implication_method : ImplicationMethod or str, optional (default="min")
    aggregation_method : AggregationMethod or str, optional (default="max")
    defuzzification_method : DefuzzificationMethod or str, optional (default="centroid")
        Only the centroid is implemented, the other methods raise `UnsupportedFeatureError` in `calculate`.
    """

    def __init__(self, and_method=inf.AndMethod.MIN, or_method=inf.OrMethod.MAX,
                 implication_method=inf.ImplicationMethod.MIN, aggregation_method=inf.AggregationMethod.MAX,
                 defuzzification_method=inf.DefuzzificationMethod.CENTROID):
        super().__init__(and_method, or_method)
        self.implication_method = implication_method
        self.aggregation_method = aggregation_method
        self.defuzzification_method = defuzzification_method

    @property
    def implication_method(self):
        return self._implication_method

    @implication_method.setter
    def implication_method(self, value):
        self._implication_method = inf.to_method(inf.ImplicationMethod, value)

    @property
    def aggregation_method(self):
        return self._aggregation_method

    @aggregation_method.setter
    def aggregation_method(self, value):
        self._aggregation_method = inf.to_method(inf.AggregationMethod, value)

    @property
    def defuzzification_method(self):
        return self._defuzzification_method

    @defuzzification_method.setter
    def defuzzification_method(self, value):
        self._defuzzification_method = inf.to_method(inf.DefuzzificationMethod, value)

    def add_output(self, variable, min_value=0.0, max_value=10.0):
        """Register an output variable, given as a `FuzzyVariable` or as its name and domain."""
        if not isinstance(variable, FuzzyVariable):
            variable = FuzzyVariable(variable, min_value, max_value)
        self._check_unique_name(variable.name)
        self.outputs.append(variable)
        return variable

    def empty_rule(self):
        return MamdaniFuzzyRule()

    def evaluate_conditions(self, fuzzified):
        return {rule: rule.weight * self.evaluate_condition(rule.condition, fuzzified) for rule in self.rules}

    def implicate(self, conditions):
        """Implicated conclusion of every rule: ``{rule: membership function}``."""
        if self.implication_method == inf.ImplicationMethod.MIN:
            comp_type = MfCompositionType.MIN
        else:
            comp_type = MfCompositionType.PROD
        conclusions = {}
        for rule, strength in conditions.items():
            strength = min(max(strength, 0.0), 1.0)
            conclusions[rule] = CompositeMembership(comp_type, [ConstantMembership(strength), rule.conclusion.term.mf])
        return conclusions

    def aggregate(self, conclusions):
        """Fuzzy result of every output variable: ``{FuzzyVariable: membership function}``."""
        if self.aggregation_method == inf.AggregationMethod.MAX:
            comp_type = MfCompositionType.MAX
        else:
            comp_type = MfCompositionType.SUM
        results = {}
        for var in self.outputs:
            mfs = [mf for rule, mf in conclusions.items() if rule.conclusion.variable is var]
            results[var] = CompositeMembership(comp_type, mfs)
        return results

    def defuzzify(self, fuzzy_results):
        if self.defuzzification_method != inf.DefuzzificationMethod.CENTROID:
            raise UnsupportedFeatureError(f"Defuzzification method '{self.defuzzification_method.value}' is not implemented.")
        return {var: inf.centroid(mf, var.min_value, var.max_value) for var, mf in fuzzy_results.items()}

    def calculate(self, input_values):
        """
        Crisp outputs ``{FuzzyVariable: value}`` for crisp inputs.

        An output whose aggregated fuzzy set is empty over its domain yields NaN.
        """
        self._check_rules()
        fuzzified = self.fuzzify(input_values)
        conditions = self.evaluate_conditions(fuzzified)
        conclusions = self.implicate(conditions)
        fuzzy_results = self.aggregate(conclusions)
        return self.defuzzify(fuzzy_results)
