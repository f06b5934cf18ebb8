# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0

from .mass_on_spring import MassOnASpringModel
from .chain_pendulum import ChainPendulumModel
from .cloth import ClothModel
from .cube import CubeModel

__all__ = [
    "MassOnASpringModel",
    "ChainPendulumModel",
    "ClothModel",
    "CubeModel",
]
