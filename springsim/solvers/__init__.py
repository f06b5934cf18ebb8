# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Solvers module for 3D spring-mass simulations

from .semi_implicit import SolverSemiImplicit
from .solver import SolverBase

__all__ = [
    "SolverBase",
    "SolverSemiImplicit",
]
