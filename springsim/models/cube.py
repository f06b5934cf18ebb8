# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Jelly cube: free-falling lattice

from ..sim.model import Model


class CubeModel(Model):
    """
    Unanchored lattice of masses that falls under gravity.

    Particles are generated over four nested indices (i, j, k, h) and
    placed at (s*i, s*h, s*(j - (n-1))); the k index does not enter the
    position, so every lattice site holds ``lattice_size`` coincident
    particles. The default 6-lattice therefore has 6^4 = 1296 particles on
    6^3 sites. Coincident particles are joined by zero-length springs, which
    exert no force while their endpoints coincide.

    Springs join every pair within one cell along all three axes, found by
    an O(n^2) scan; at the default size this is ~840k pair checks and
    dominates construction time.

    Args:
        lattice_size: Sites per axis (and copies per site). Default 6.
        spacing: Lattice cell size. Default 2.0.
    """

    topology = "cube"
    display_name = "Jelly cube"

    def __init__(self, config=None, device=None, verbose: bool = True,
                 lattice_size: int = 6, spacing: float = 2.0):
        if lattice_size < 1:
            raise ValueError(f"Cube lattice size must be >= 1, got {lattice_size}")
        self.lattice_size = lattice_size
        self.spacing = spacing
        super().__init__(config=config, device=device, verbose=verbose)

    def build(self, builder):
        cfg = self.config
        n = self.lattice_size
        s = self.spacing

        for i in range(n):
            for j in range(n):
                for k in range(n):
                    for h in range(n):
                        builder.add_particle((s * i, s * h, s * (j - (n - 1))), mass=cfg.mass)

        builder.add_springs_within((s, s, s), cfg.stiffness, cfg.damping, verbose=self.verbose)
