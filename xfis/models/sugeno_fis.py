#!/usr/bin/env python
# Created by "Thieu" at 09:30, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

from xfis.core.variables import SugenoVariable, LinearSugenoFunction
from xfis.core.rules import SugenoFuzzyRule
from xfis.core import inference as inf
from xfis.models.base_fis import BaseFuzzySystem


class SugenoFuzzySystem(BaseFuzzySystem):
    """
    Takagi-Sugeno fuzzy inference system.

    Every rule concludes on a linear consequent function of an output variable. The crisp output of
    a variable is the average of its rules' function values weighted by the rules' firing strengths.

    Examples
    --------
    ::

        from xfis import SugenoFuzzySystem, GaussianMembership

        fis = SugenoFuzzySystem()
        x = fis.add_input("x", 0, 10)
        x.add_term("low", GaussianMembership(0, 3))
        x.add_term("high", GaussianMembership(10, 3))
        y = fis.add_output("y")
        y.add_function(fis.create_sugeno_function("flat", {x: 0.0}, 1.0))
        y.add_function(fis.create_sugeno_function("rise", {x: 2.0}, 0.0))
        fis.add_rule("if (x is low) then (y is flat)")
        fis.add_rule("if (x is high) then (y is rise)")
        fis.calculate({x: 5.0})[y]   # 5.5, both rules fire equally
    """

    def add_output(self, variable):
        """Register an output variable, given as a `SugenoVariable` or as its name."""
        if not isinstance(variable, SugenoVariable):
            variable = SugenoVariable(variable)
        self._check_unique_name(variable.name)
        self.outputs.append(variable)
        return variable

    def create_sugeno_function(self, name, coefficients=None, const_value=0.0):
        """Linear consequent bound to this system's inputs; see `LinearSugenoFunction`."""
        return LinearSugenoFunction(name, self.inputs, coefficients, const_value)

    def get_function_by_name(self, output_name, function_name):
        return self.output_by_name(output_name).get_function_by_name(function_name)

    def empty_rule(self):
        return SugenoFuzzyRule()

    def evaluate_functions(self, input_values):
        """Value of every consequent function: ``{SugenoVariable: {function: value}}``."""
        return {var: {func: func.evaluate(input_values) for func in var.functions} for var in self.outputs}

    def combine_result(self, rule_weights, function_results):
        numerators = {var: 0.0 for var in self.outputs}
        denominators = {var: 0.0 for var in self.outputs}
        for rule, weight in rule_weights.items():
            var = rule.conclusion.variable
            numerators[var] += function_results[var][rule.conclusion.term] * weight
            denominators[var] += weight
        results = {}
        for var in self.outputs:
            # No rule fired for this output.
            results[var] = 0.0 if denominators[var] == 0.0 else numerators[var] / denominators[var]
        return results

    def calculate(self, input_values):
        """
        Crisp outputs for crisp inputs.

        Parameters
        ----------
        input_values : dict or sequence
            One value per input variable (see `resolve_inputs`).

        Returns
        -------
        dict
            ``{SugenoVariable: value}``

        Raises
        ------
        StructuralError
            If the system has no rules.
        """
        self._check_rules()
        resolved = self.resolve_inputs(input_values)
        fuzzified = inf.fuzzify_variables(self.inputs, resolved)
        rule_weights = self.evaluate_conditions(fuzzified)
        function_results = self.evaluate_functions(resolved)
        return self.combine_result(rule_weights, function_results)
