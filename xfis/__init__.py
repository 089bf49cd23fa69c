#!/usr/bin/env python
# Created by "Thieu" at 09:10, 02/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

__version__ = "1.0.0"

from xfis.helpers.membership_family import *
from xfis.helpers.errors import (XfisError, InvalidArgumentError, DimensionMismatchError, NotSquareError,
                                 InvalidRadiusError, InvalidNameError, LookupFailureError, StructuralError,
                                 NumericDegeneracyError, UnsupportedFeatureError, RuleParseError)
from xfis.core.matrix import Matrix, SVDResult
from xfis.core.svd import SingularValueDecomposition
from xfis.core.clustering import SubtractiveClustering, ClusterResult
from xfis.core.fuzzy_transform import FuzzyTransform
from xfis.core.variables import FuzzyTerm, FuzzyVariable, SugenoVariable, LinearSugenoFunction
from xfis.core.rules import (OperatorType, HedgeType, FuzzyCondition, Conditions,
                             MamdaniFuzzyRule, SugenoFuzzyRule)
from xfis.core.inference import (AndMethod, OrMethod, ImplicationMethod, AggregationMethod,
                                 DefuzzificationMethod)
from xfis.models.mamdani_fis import MamdaniFuzzySystem
from xfis.models.sugeno_fis import SugenoFuzzySystem
from xfis.models.anfis import Anfis
from xfis.models.classic_anfis import AnfisRegressor
