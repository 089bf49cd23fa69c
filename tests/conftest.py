#!/usr/bin/env python
# Created by "Thieu" at 23:05, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import numpy as np
import pytest


@pytest.fixture
def grid_data():
    """Samples of y = x1 + x2 on the grid {0, 1, 2, 3}^2, X shape (16, 2)."""
    X = np.array([(a, b) for a in range(4) for b in range(4)], dtype=float)
    y = X.sum(axis=1)
    return X, y
