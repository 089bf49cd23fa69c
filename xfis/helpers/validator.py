#!/usr/bin/env python
# Created by "Thieu" at 09:31, 02/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import operator
import numbers
import numpy as np
from xfis.helpers.errors import InvalidArgumentError


def is_in_bound(value, bound):
    ops = None
    if type(bound) is tuple:
        ops = operator.lt
    elif type(bound) is list:
        ops = operator.le
    if bound[0] == float("-inf") and bound[1] == float("inf"):
        return True
    elif bound[0] == float("-inf") and ops(value, bound[1]):
        return True
    elif ops(bound[0], value) and bound[1] == float("inf"):
        return True
    elif ops(bound[0], value) and ops(value, bound[1]):
        return True
    return False


def is_str_in_sequence(value: str, my_list: list):
    if type(value) == str and my_list is not None:
        return True if value in my_list else False
    return False


def check_int(name: str, value, bound=None):
    """
    Check an integer parameter.

    A tuple bound is open ``(a, b)``, a list bound is closed ``[a, b]``. Floats are accepted only when
    they hold a whole number.
    """
    if isinstance(value, numbers.Real) and not isinstance(value, bool) and np.isfinite(value) and value == int(value):
        if bound is None:
            return int(value)
        elif is_in_bound(value, bound):
            return int(value)
    bound = "" if bound is None else f"and value should be in range: {bound}"
    raise InvalidArgumentError(f"'{name}' is an integer {bound}.")


def check_float(name: str, value, bound=None):
    """
    Check a real-valued parameter.

    A tuple bound is open ``(a, b)``, a list bound is closed ``[a, b]``.
    """
    if isinstance(value, numbers.Number) and not isinstance(value, bool) and np.isfinite(value):
        if bound is None:
            return float(value)
        elif is_in_bound(value, bound):
            return float(value)
    bound = "" if bound is None else f"and value should be in range: {bound}"
    raise InvalidArgumentError(f"'{name}' is a float {bound}.")


def check_str(name: str, value: str, bound=None):
    if type(value) is str:
        if bound is None or is_str_in_sequence(value, bound):
            return value
    bound = "" if bound is None else f"and value should be one of this: {bound}"
    raise InvalidArgumentError(f"'{name}' is a string {bound}.")


def check_bool(name: str, value: bool, bound=(True, False)):
    if type(value) is bool:
        if value in bound:
            return value
    bound = "" if bound is None else f"and value should be one of this: {bound}"
    raise InvalidArgumentError(f"'{name}' is a boolean {bound}.")


def check_callable(name: str, value):
    if value is None or callable(value):
        return value
    raise InvalidArgumentError(f"'{name}' should be a callable or None.")
