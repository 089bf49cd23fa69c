#!/usr/bin/env python
# Created by "Thieu" at 09:40, 02/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

from permetrics import RegressionMetric
from xfis.helpers.errors import InvalidArgumentError


def get_all_regression_metrics():
    """
    Collect the regression metrics supported by permetrics together with their optimization direction.

    Returns
    -------
    dict
        Mapping ``{metric_name: "min" | "max"}``.
    """
    UNUSED_METRICS = ("RE", "RB", "AE", "SE", "SLE")
    dict_results = {}
    for key, value in RegressionMetric.SUPPORT.items():
        if (key not in UNUSED_METRICS) and value["type"] in ("min", "max"):
            dict_results[key] = value["type"]
    return dict_results


def get_metric_names(list_metrics=None):
    """Validate a list of metric names against the permetrics regression metrics."""
    supported = get_all_regression_metrics()
    if list_metrics is None:
        return ["MSE", "MAE"]
    if isinstance(list_metrics, str):
        list_metrics = [list_metrics]
    names = []
    for name in list_metrics:
        if name not in supported:
            raise InvalidArgumentError(f"Metric '{name}' is not supported. Supported metrics are: {list(supported.keys())}")
        names.append(name)
    return names
