#!/usr/bin/env python
# Created by "Thieu" at 19:00, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import numpy as np
from xfis import FuzzyTransform


## Noisy seasonal series
t = np.arange(60)
series = 10 + 0.2 * t + np.sin(t / 3.0) + np.random.default_rng(42).normal(0, 0.3, t.size)

ft = FuzzyTransform(series, n=4).run()
print(f"Nodes: {ft.nodes}, step: {ft.step}")
print("Components:", np.round(ft.time_series_direct, 3))
print("Trend:", np.round(ft.time_series_inverse[:10], 3))
print("Remainder:", np.round(ft.time_series_remainder[:10], 3))
