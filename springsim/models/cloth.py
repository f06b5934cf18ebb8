# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Hanging cloth: square grid pinned at two corners

from ..sim.model import Model


class ClothModel(Model):
    """
    Square grid of masses in the y = 0 plane with structural and shear
    springs, pinned at grid corners (0, 0) and (0, grid_size - 1).

    Springs join every pair of particles within one grid cell along both x
    and z, found by scanning all earlier particles (O(n^2) in the particle
    count).

    Args:
        grid_size: Particles per side. Default 10.
        spacing: Grid cell size. Default 2.0.

    Example:
        >>> model = ClothModel(grid_size=10, device='cpu')
        >>> model.particle_count, model.spring_count
        (100, 342)
    """

    topology = "cloth"
    display_name = "Hanging cloth"

    def __init__(self, config=None, device=None, verbose: bool = True,
                 grid_size: int = 10, spacing: float = 2.0):
        if grid_size < 2:
            raise ValueError(f"Cloth grid must be at least 2x2, got {grid_size}x{grid_size}")
        self.grid_size = grid_size
        self.spacing = spacing
        super().__init__(config=config, device=device, verbose=verbose)

    def is_pinned(self, row: int, col: int) -> bool:
        return row == 0 and col in (0, self.grid_size - 1)

    def build(self, builder):
        cfg = self.config
        n = self.grid_size
        half = n // 2

        for row in range(n):
            for col in range(n):
                mass = 0.0 if self.is_pinned(row, col) else cfg.mass
                position = (self.spacing * (row - half), 0.0, self.spacing * (col - half))
                builder.add_particle(position, mass=mass)

        builder.add_springs_within((self.spacing, None, self.spacing),
                                   cfg.stiffness, cfg.damping, verbose=self.verbose)
