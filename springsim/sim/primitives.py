# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Point mass and damped spring records

from dataclasses import dataclass, field

import numpy as np


def _vec3(value) -> np.ndarray:
    return np.array(value, dtype=np.float64).reshape(3)


@dataclass
class Particle:
    """
    A point mass.

    A particle with ``mass == 0`` is fixed: the solver never moves it.
    """
    position: np.ndarray
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    mass: float = 1.0
    force: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        self.position = _vec3(self.position)
        self.velocity = _vec3(self.velocity)
        self.force = _vec3(self.force)
        self.mass = float(self.mass)

    @property
    def is_fixed(self) -> bool:
        return self.mass == 0.0


@dataclass(frozen=True)
class Spring:
    """
    Damped spring between particles ``i`` and ``j`` (indices into the
    owning model's particle arena).

    ``rest_length`` is captured once by the builder and never changes.
    """
    i: int
    j: int
    stiffness: float
    damping: float
    rest_length: float
