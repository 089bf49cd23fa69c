#!/usr/bin/env python
# Created by "Thieu" at 09:14, 02/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%
