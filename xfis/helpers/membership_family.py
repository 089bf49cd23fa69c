#!/usr/bin/env python
# Created by "Thieu" at 13:05, 02/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

from enum import Enum
from typing import Dict, List, Optional
import numpy as np
from xfis.helpers.errors import InvalidArgumentError


class MfCompositionType(Enum):
    """How a composite membership function folds the values of its parts."""
    MIN = "min"
    MAX = "max"
    PROD = "prod"
    SUM = "sum"


class BaseMembership:
    """Base class for membership functions.

    This class defines the interface for all membership functions. Subclasses
    must implement the `get_value` method to calculate the membership degree of a crisp value.
    """

    # Only functions with differentiable (center, spread) parameters take part in ANFIS premise tuning.
    supports_gradient_tuning = False

    def get_value(self, x: float) -> float:
        """
        Calculate the membership degree of ``x``.

        Raises:
            NotImplementedError: If not implemented by subclass.
        """
        raise NotImplementedError("Subclasses must implement the get_value method.")

    def __call__(self, x: float) -> float:
        return self.get_value(x)

    def get_parameters(self) -> Dict[str, float]:
        """
        Retrieve the current parameters of the membership function.

        Returns:
            Dict[str, float]: Dictionary containing parameter names and values.
        """
        return {}

    def __str__(self):
        return self.__class__.__name__

    def name(self):
        return self.__class__.__name__


class TriangularMembership(BaseMembership):
    """Triangular membership function defined by the points x1 <= x2 <= x3 (x2 is the peak)."""

    def __init__(self, x1: float, x2: float, x3: float) -> None:
        if not (x1 <= x2 <= x3):
            raise InvalidArgumentError(f"TriangularMembership needs x1 <= x2 <= x3, got ({x1}, {x2}, {x3}).")
        self.x1, self.x2, self.x3 = float(x1), float(x2), float(x3)

    def get_value(self, x: float) -> float:
        if x == self.x1 and x == self.x2:
            return 1.0
        if x == self.x2 and x == self.x3:
            return 1.0
        if x <= self.x1 or x >= self.x3:
            return 0.0
        if x == self.x2:
            return 1.0
        if self.x1 < x < self.x2:
            return (x - self.x1) / (self.x2 - self.x1)
        return (self.x3 - x) / (self.x3 - self.x2)

    def to_normal_mf(self) -> "GaussianMembership":
        """Approximate the triangle with a Gaussian centered on the peak, half-width ~ 2.5 sigma."""
        sigma = (self.x3 - self.x1) / 2.0 / 2.5
        return GaussianMembership(self.x2, sigma)

    def get_parameters(self) -> Dict[str, float]:
        return {"x1": self.x1, "x2": self.x2, "x3": self.x3}


class TrapezoidMembership(BaseMembership):
    """Trapezoidal membership function defined by x1 <= x2 <= x3 <= x4 (plateau on [x2, x3])."""

    def __init__(self, x1: float, x2: float, x3: float, x4: float) -> None:
        if not (x1 <= x2 <= x3 <= x4):
            raise InvalidArgumentError(f"TrapezoidMembership needs x1 <= x2 <= x3 <= x4, got ({x1}, {x2}, {x3}, {x4}).")
        self.x1, self.x2, self.x3, self.x4 = float(x1), float(x2), float(x3), float(x4)

    def get_value(self, x: float) -> float:
        if x == self.x1 and x == self.x2:
            return 1.0
        if x == self.x3 and x == self.x4:
            return 1.0
        if x <= self.x1 or x >= self.x4:
            return 0.0
        if self.x2 <= x <= self.x3:
            return 1.0
        if self.x1 < x < self.x2:
            return (x - self.x1) / (self.x2 - self.x1)
        return (self.x4 - x) / (self.x4 - self.x3)

    def get_parameters(self) -> Dict[str, float]:
        return {"x1": self.x1, "x2": self.x2, "x3": self.x3, "x4": self.x4}


class GaussianMembership(BaseMembership):
    """
    Gaussian (normal) membership function: exp(-(x - b)^2 / (2 * sigma^2)).

    Both ``b`` (center) and ``sigma`` (spread) are mutable so the ANFIS trainer can tune them.
    A zero spread degenerates to a crisp singleton at ``b``.
    """

    supports_gradient_tuning = True

    def __init__(self, b: float = 0.0, sigma: float = 1.0) -> None:
        self.b = float(b)
        self.sigma = float(sigma)

    def get_value(self, x: float) -> float:
        if self.sigma == 0:
            return 1.0 if x == self.b else 0.0
        return float(np.exp(-(x - self.b) ** 2 / (2.0 * self.sigma ** 2)))

    def get_parameters(self) -> Dict[str, float]:
        return {"b": self.b, "sigma": self.sigma}


# Alias kept for code that speaks of "normal" membership functions.
NormalMembership = GaussianMembership


class ConstantMembership(BaseMembership):
    """Singleton-like membership function returning the same degree everywhere."""

    def __init__(self, value: float) -> None:
        if not (0.0 <= value <= 1.0):
            raise InvalidArgumentError(f"ConstantMembership value should be in range [0, 1], got {value}.")
        self.value = float(value)

    def get_value(self, x: float) -> float:
        return self.value

    def get_parameters(self) -> Dict[str, float]:
        return {"value": self.value}


class CompositeMembership(BaseMembership):
    """
    Membership function built from other membership functions.

    The values of the parts are folded left to right with the composition type
    (min, max, product or sum). A composite with no parts evaluates to 0. Mamdani
    implication and aggregation are expressed with this class.
    """

    def __init__(self, composition_type: MfCompositionType, mfs: Optional[List[BaseMembership]] = None) -> None:
        if not isinstance(composition_type, MfCompositionType):
            raise InvalidArgumentError(f"Unsupported composition type: {composition_type}.")
        self.composition_type = composition_type
        self.mfs = list(mfs) if mfs is not None else []

    def _compose(self, val1: float, val2: float) -> float:
        if self.composition_type == MfCompositionType.MAX:
            return max(val1, val2)
        elif self.composition_type == MfCompositionType.MIN:
            return min(val1, val2)
        elif self.composition_type == MfCompositionType.PROD:
            return val1 * val2
        return val1 + val2

    def get_value(self, x: float) -> float:
        if len(self.mfs) == 0:
            return 0.0
        result = self.mfs[0].get_value(x)
        for mf in self.mfs[1:]:
            result = self._compose(result, mf.get_value(x))
        return result

    def get_parameters(self) -> Dict[str, float]:
        return {"composition_type": self.composition_type.value, "n_functions": len(self.mfs)}
