# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Incremental construction of particle/spring topologies

import numpy as np

from .primitives import Particle, Spring

# Pair scans above this many particles print a cost notice
PAIR_SCAN_NOTICE_THRESHOLD = 500


class ModelBuilder:
    """
    Collects particles and springs before they are packed into a Model.

    Springs capture their rest length from the endpoints' positions at the
    moment ``add_spring`` is called. Moving a particle afterwards (see
    ``set_particle_position``) leaves existing rest lengths untouched.

    Example:
        >>> builder = ModelBuilder()
        >>> a = builder.add_particle((0.0, 5.0, 0.0), mass=0.0)
        >>> b = builder.add_particle((0.0, -5.0, 0.0), mass=0.1)
        >>> builder.add_spring(a, b, stiffness=10.0, damping=0.5)
        >>> builder.set_particle_position(b, (0.0, 2.5, 0.0))
    """

    def __init__(self):
        self.particles = []
        self.springs = []

    @property
    def particle_count(self) -> int:
        return len(self.particles)

    @property
    def spring_count(self) -> int:
        return len(self.springs)

    def add_particle(self, position, velocity=(0.0, 0.0, 0.0), mass: float = 1.0) -> int:
        """Append a particle and return its index."""
        if mass < 0.0:
            raise ValueError(f"Particle mass must be >= 0, got {mass}")
        self.particles.append(Particle(position, velocity, mass))
        return len(self.particles) - 1

    def set_particle_position(self, index: int, position):
        self.particles[index].position = np.array(position, dtype=np.float64).reshape(3)

    def add_spring(self, i: int, j: int, stiffness: float, damping: float) -> int:
        """Connect particles ``i`` and ``j`` and return the spring index."""
        rest = float(np.linalg.norm(self.particles[i].position - self.particles[j].position))
        self.springs.append(Spring(i, j, float(stiffness), float(damping), rest))
        return len(self.springs) - 1

    def add_springs_within(self, cell, stiffness: float, damping: float, verbose: bool = True) -> int:
        """
        Connect every pair of particles whose per-axis separation is within
        ``cell``.

        ``cell`` holds one bound per axis; ``None`` ignores that axis. Each
        particle is compared against every earlier one, so the cost is
        O(n^2) in the particle count. Springs are ordered (later, earlier).

        Returns:
            Number of springs added
        """
        positions = np.array([p.position for p in self.particles])
        n = len(positions)
        if verbose and n > PAIR_SCAN_NOTICE_THRESHOLD:
            print(f"  ⚠ O(n²) pair scan over {n} particles ({n * (n - 1) // 2} pairs)")

        axes = [a for a, bound in enumerate(cell) if bound is not None]
        bounds = np.array([cell[a] for a in axes])

        added = 0
        for i in range(1, n):
            d = np.abs(positions[:i, axes] - positions[i, axes])
            for j in np.nonzero(np.all(d <= bounds, axis=1))[0]:
                self.add_spring(i, int(j), stiffness, damping)
                added += 1
        return added
