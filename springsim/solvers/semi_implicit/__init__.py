# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0

from .solver_semi_implicit import SolverSemiImplicit

__all__ = ["SolverSemiImplicit"]
