# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Single anchored spring

from ..sim.model import Model


class MassOnASpringModel(Model):
    """
    One free mass hanging from a fixed anchor by a single spring.

    The spring captures its rest length at full extension (10 units) and the
    free mass is then moved to 2.5 units below the anchor, so the first step
    pushes it away from the anchor.

    Example:
        >>> model = MassOnASpringModel(device='cpu')
        >>> model.step(0.01)
    """

    topology = "spring"
    display_name = "Mass on a spring"

    ANCHOR = (0.0, 5.0, 0.0)
    EXTENDED = (0.0, -5.0, 0.0)
    COMPRESSED = (0.0, 2.5, 0.0)

    def build(self, builder):
        cfg = self.config

        anchor = builder.add_particle(self.ANCHOR, mass=0.0)
        mass = builder.add_particle(self.EXTENDED, mass=cfg.mass)
        builder.add_spring(anchor, mass, cfg.stiffness, cfg.damping)

        # Compress the spring
        builder.set_particle_position(mass, self.COMPRESSED)
