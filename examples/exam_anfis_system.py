#!/usr/bin/env python
# Created by "Thieu" at 18:30, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import numpy as np
from xfis import Anfis


## Samples of y = x1 + x2 on a 4 x 4 grid, one row per input
grid = np.array([(a, b) for a in range(4) for b in range(4)], dtype=float)
xin = grid.T
xout = grid.sum(axis=1)


def show_progress(epoch, epochs, nu, error):
    print(f"[{epoch}/{epochs}] nu = {nu:.4f}, error = {error:.6f}")


model = Anfis(xin, xout, radii=0.5, epochs=10, nu=0.1, nu_step=0.9)
model.train(callback=show_progress)

for text in model.rules_text:
    print(text)
print(model.calculate([2.0, 2.0]))
print(model.calculate([1.5, 0.5]))
