#!/usr/bin/env python
# Created by "Thieu" at 08:45, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import numbers
from xfis.core.variables import FuzzyVariable
from xfis.core.rule_parser import RuleParser
from xfis.core import inference as inf
from xfis.helpers.errors import InvalidArgumentError, LookupFailureError, StructuralError


class BaseFuzzySystem:
    """
    Common part of the Mamdani and Sugeno fuzzy inference systems.

    It owns the input variables, the rule list and the AND/OR methods, and implements fuzzification
    and the evaluation of rule conditions. Subclasses add the output variables and the way
    rule conclusions are combined.

    Parameters
    ----------
    and_method : AndMethod or str, optional (default=AndMethod.MIN)
        How children of an ``and`` group are combined: "min" or "production".
    or_method : OrMethod or str, optional (default=OrMethod.MAX)
        How children of an ``or`` group are combined: "max" or "probabilistic".

    Attributes
    ----------
    inputs : list of FuzzyVariable
        Registered input variables, in registration order.
    outputs : list
        Registered output variables.
    rules : list
        Current rule base.
    """

    def __init__(self, and_method=inf.AndMethod.MIN, or_method=inf.OrMethod.MAX):
        self.inputs = []
        self.outputs = []
        self.rules = []
        self.and_method = and_method
        self.or_method = or_method

    @property
    def and_method(self):
        return self._and_method

    @and_method.setter
    def and_method(self, value):
        self._and_method = inf.to_method(inf.AndMethod, value)

    @property
    def or_method(self):
        return self._or_method

    @or_method.setter
    def or_method(self, value):
        self._or_method = inf.to_method(inf.OrMethod, value)

    ## Construction

    def add_input(self, variable, min_value=0.0, max_value=10.0):
        """Register an input variable, given as a `FuzzyVariable` or as its name and domain."""
        if not isinstance(variable, FuzzyVariable):
            variable = FuzzyVariable(variable, min_value, max_value)
        self._check_unique_name(variable.name)
        self.inputs.append(variable)
        return variable

    def _check_unique_name(self, name):
        for var in self.inputs + self.outputs:
            if var.name == name:
                raise InvalidArgumentError(f"A variable named '{name}' is already registered.")

    def input_by_name(self, name):
        for var in self.inputs:
            if var.name == name:
                return var
        raise LookupFailureError(f"No input variable named '{name}'.")

    def output_by_name(self, name):
        for var in self.outputs:
            if var.name == name:
                return var
        raise LookupFailureError(f"No output variable named '{name}'.")

    def get_term_by_name(self, variable_name, term_name):
        """Term ``term_name`` of the fuzzy (input or Mamdani output) variable ``variable_name``."""
        for var in self.inputs + self.outputs:
            if var.name == variable_name and isinstance(var, FuzzyVariable):
                return var.get_term_by_name(term_name)
        raise LookupFailureError(f"No fuzzy variable named '{variable_name}'.")

    def empty_rule(self):
        raise NotImplementedError

    def parse_rule(self, text):
        """Parse rule text against the registered variables into a new, unattached rule."""
        return RuleParser(self.inputs, self.outputs).parse(text, self.empty_rule())

    def add_rule(self, rule):
        """Append a rule object or the rule parsed from text; returns the rule."""
        if isinstance(rule, str):
            rule = self.parse_rule(rule)
        self.rules.append(rule)
        return rule

    def clear_rules(self):
        self.rules = []

    def set_rules(self, rules):
        """Replace the whole rule list at once."""
        self.rules = list(rules)

    ## Inference

    def resolve_inputs(self, input_values):
        """
        Validate crisp inputs and key them by variable.

        Parameters
        ----------
        input_values : dict or sequence
            ``{FuzzyVariable or name: value}`` with exactly one entry per input variable, or a sequence
            of values in input registration order.

        Returns
        -------
        dict
            ``{FuzzyVariable: float}``
        """
        if isinstance(input_values, dict):
            if len(input_values) != len(self.inputs):
                raise InvalidArgumentError(f"Expected {len(self.inputs)} input values, got {len(input_values)}.")
            by_name = {(k if isinstance(k, str) else k.name): v for k, v in input_values.items()}
            resolved = {}
            for var in self.inputs:
                if var in input_values:
                    value = input_values[var]
                elif var.name in by_name:
                    value = by_name[var.name]
                else:
                    raise InvalidArgumentError(f"No value supplied for input variable '{var.name}'.")
                resolved[var] = value
        else:
            values = list(input_values)
            if len(values) != len(self.inputs):
                raise InvalidArgumentError(f"Expected {len(self.inputs)} input values, got {len(values)}.")
            resolved = dict(zip(self.inputs, values))
        for var, value in resolved.items():
            if not isinstance(value, numbers.Number) or isinstance(value, bool):
                raise InvalidArgumentError(f"Value of input '{var.name}' should be a number, got {value}.")
            resolved[var] = float(value)
        return resolved

    def fuzzify(self, input_values):
        """Membership degrees ``{FuzzyVariable: {FuzzyTerm: degree}}`` for the given crisp inputs."""
        return inf.fuzzify_variables(self.inputs, self.resolve_inputs(input_values))

    def evaluate_condition(self, condition, fuzzified):
        return inf.evaluate_condition(condition, fuzzified, self.and_method, self.or_method)

    def evaluate_conditions(self, fuzzified):
        """Firing strength of every rule, in rule order."""
        return {rule: self.evaluate_condition(rule.condition, fuzzified) for rule in self.rules}

    def _check_rules(self):
        if len(self.rules) == 0:
            raise StructuralError("There should be at least one rule.")

    def calculate(self, input_values):
        raise NotImplementedError
