#!/usr/bin/env python
# Created by "Thieu" at 09:20, 02/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%


class XfisError(Exception):
    """Base class for all errors raised by the xfis library."""
    pass


class InvalidArgumentError(XfisError, ValueError):
    """Bad dimensions, out-of-range configuration or mismatched input lengths."""
    pass


class DimensionMismatchError(InvalidArgumentError):
    """Operands of a matrix operation have incompatible shapes."""
    pass


class NotSquareError(InvalidArgumentError):
    """The operation is only defined for square matrices."""
    pass


class InvalidRadiusError(InvalidArgumentError):
    """A clustering radius lies outside (0, 1]."""
    pass


class InvalidNameError(InvalidArgumentError):
    """A variable, term or function name is empty, malformed or a reserved keyword."""
    pass


class LookupFailureError(XfisError, KeyError):
    """Unknown variable, term, function or rule name."""

    def __str__(self):
        # KeyError quotes its argument, keep the plain message instead.
        return str(self.args[0]) if self.args else ""


class StructuralError(XfisError, RuntimeError):
    """The model is structurally unusable (no rules, empty condition tree, no clusters)."""
    pass


class NumericDegeneracyError(XfisError, ArithmeticError):
    """A numeric routine could not produce finite results (e.g. SVD did not converge)."""
    pass


class UnsupportedFeatureError(XfisError, NotImplementedError):
    """The requested method exists in the API but is explicitly not implemented."""
    pass


class RuleParseError(XfisError, ValueError):
    """
    Rule text could not be parsed.

    Parameters
    ----------
    message : str
        Human readable reason.
    token : str or None
        The offending token, if one can be identified.
    position : int or None
        Index of the offending token in the tokenized rule.
    """

    def __init__(self, message, token=None, position=None):
        self.token = token
        self.position = position
        if token is not None and position is not None:
            message = f"{message} (token '{token}' at position {position})"
        elif token is not None:
            message = f"{message} (token '{token}')"
        super().__init__(message)
