#!/usr/bin/env python
# Created by "Thieu" at 14:12, 02/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import re
import numbers
from xfis.helpers.membership_family import BaseMembership
from xfis.helpers.errors import InvalidArgumentError, InvalidNameError, LookupFailureError

KEYWORDS = ("if", "then", "is", "and", "or", "not", "(", ")", "slightly", "somewhat", "very", "extremely")
_NAME_PATTERN = re.compile(r"\w+")


def is_valid_name(name) -> bool:
    """A name is non-empty, made of letters, digits and underscores, and is not a rule keyword."""
    if type(name) is not str or len(name) == 0:
        return False
    if _NAME_PATTERN.fullmatch(name) is None:
        return False
    return name not in KEYWORDS


def check_name(name, kind="variable"):
    if not is_valid_name(name):
        raise InvalidNameError(f"Invalid {kind} name: '{name}'. Names may contain letters, digits and '_' "
                               f"and must not be one of the keywords {KEYWORDS}.")
    return name


class NamedObject:
    _kind = "value"

    @property
    def name(self):
        return self._name

    @name.setter
    def name(self, value):
        self._name = check_name(value, self._kind)

    def __repr__(self):
        return f"{self.__class__.__name__}(name='{self.name}')"


class FuzzyTerm(NamedObject):
    """
    A linguistic term of a fuzzy variable, e.g. ``cold`` with its membership function.

    Parameters
    ----------
    name : str
        Term name, see `is_valid_name`.
    mf : BaseMembership
        Membership function owned by the term.
    """
    _kind = "term"

    def __init__(self, name, mf):
        self.name = name
        self.mf = mf

    @property
    def mf(self):
        return self._mf

    @mf.setter
    def mf(self, value):
        if not isinstance(value, BaseMembership):
            raise InvalidArgumentError(f"Membership function of term '{self.name}' should be a BaseMembership instance.")
        self._mf = value


class FuzzyVariable(NamedObject):
    """
    Fuzzy variable over the domain [min_value, max_value] holding an ordered list of terms.

    The domain is used by Mamdani defuzzification; input values outside it are accepted.
    """
    _kind = "variable"

    def __init__(self, name, min_value=0.0, max_value=10.0, terms=None):
        self.name = name
        if min_value > max_value:
            raise InvalidArgumentError(f"Variable '{name}': min_value ({min_value}) must not exceed max_value ({max_value}).")
        self.min_value = float(min_value)
        self.max_value = float(max_value)
        self.terms = []
        for term in (terms or []):
            self.add_term(term)

    def add_term(self, term, mf=None):
        """Append a term, given either as a `FuzzyTerm` or as a name plus a membership function."""
        if not isinstance(term, FuzzyTerm):
            term = FuzzyTerm(term, mf)
        self.terms.append(term)
        return term

    @property
    def values(self):
        return self.terms

    def get_term_by_name(self, name):
        for term in self.terms:
            if term.name == name:
                return term
        raise LookupFailureError(f"Variable '{self.name}' has no term named '{name}'.")


class LinearSugenoFunction(NamedObject):
    """
    Linear Sugeno consequent: y = c0 + c1 * x1 + ... + cn * xn.

    Parameters
    ----------
    name : str
        Function name.
    inputs : list of FuzzyVariable
        Input variable list of the owning system (kept by reference). Coefficients can only refer to these.
    coefficients : dict or sequence, optional
        Either a mapping ``{variable_or_name: coefficient}`` or a sequence with one coefficient per
        input, optionally followed by the constant term.
    const_value : float, optional
        Constant term c0. Ignored when the constant is given as the last item of a sequence.
    """
    _kind = "function"

    def __init__(self, name, inputs, coefficients=None, const_value=0.0):
        self.name = name
        self._inputs = inputs
        self.const_value = float(const_value)
        self.coefficients = {}
        if coefficients is None:
            return
        if isinstance(coefficients, dict):
            for var, coeff in coefficients.items():
                self.set_coefficient(var, coeff)
        else:
            coefficients = list(coefficients)
            n_inputs = len(self._inputs)
            if len(coefficients) not in (n_inputs, n_inputs + 1):
                raise InvalidArgumentError(f"Function '{name}' expects {n_inputs} or {n_inputs + 1} coefficients, "
                                           f"got {len(coefficients)}.")
            for var, coeff in zip(self._inputs, coefficients):
                self.coefficients[var] = float(coeff)
            if len(coefficients) == n_inputs + 1:
                self.const_value = float(coefficients[-1])

    def _resolve(self, var):
        if isinstance(var, str):
            for item in self._inputs:
                if item.name == var:
                    return item
            raise InvalidArgumentError(f"Function '{self.name}': the system has no input variable '{var}'.")
        if not any(var is item for item in self._inputs):
            name = getattr(var, "name", var)
            raise InvalidArgumentError(f"Function '{self.name}': the system has no input variable '{name}'.")
        return var

    def get_coefficient(self, var=None):
        """Coefficient of ``var``, or the constant term when ``var`` is None."""
        if var is None:
            return self.const_value
        return self.coefficients.get(self._resolve(var), 0.0)

    def set_coefficient(self, var, value):
        if not isinstance(value, numbers.Number):
            raise InvalidArgumentError(f"Coefficient of function '{self.name}' should be a number, got {value}.")
        if var is None:
            self.const_value = float(value)
        else:
            self.coefficients[self._resolve(var)] = float(value)

    def evaluate(self, input_values):
        """
        Evaluate the function.

        Parameters
        ----------
        input_values : dict
            ``{FuzzyVariable: crisp value}`` for every variable with a coefficient.
        """
        result = 0.0
        for var, coeff in self.coefficients.items():
            if var not in input_values:
                raise LookupFailureError(f"Function '{self.name}': no value supplied for input '{var.name}'.")
            result += coeff * input_values[var]
        return result + self.const_value


class SugenoVariable(NamedObject):
    """Output variable of a Sugeno system; its values are consequent functions."""
    _kind = "variable"

    def __init__(self, name, functions=None):
        self.name = name
        self.functions = list(functions) if functions is not None else []

    def add_function(self, function):
        self.functions.append(function)
        return function

    @property
    def values(self):
        return self.functions

    def get_function_by_name(self, name):
        for func in self.functions:
            if func.name == name:
                return func
        raise LookupFailureError(f"Output '{self.name}' has no function named '{name}'.")
