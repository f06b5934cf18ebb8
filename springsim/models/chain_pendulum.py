# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Chain pendulum: a horizontal chain swinging from one anchor

from ..sim.model import Model


class ChainPendulumModel(Model):
    """
    A fixed anchor followed by ``num_links`` free masses laid out in a
    horizontal line, each joined to its predecessor by a spring.

    Args:
        num_links: Number of free masses. Default 10.
        spacing: Distance between consecutive masses. Default 2.0.
        height: Height of the chain. Default 10.0.
    """

    topology = "chain"
    display_name = "Chain pendulum"

    def __init__(self, config=None, device=None, verbose: bool = True,
                 num_links: int = 10, spacing: float = 2.0, height: float = 10.0):
        if num_links < 1:
            raise ValueError(f"Chain needs at least one link, got {num_links}")
        self.num_links = num_links
        self.spacing = spacing
        self.height = height
        super().__init__(config=config, device=device, verbose=verbose)

    def build(self, builder):
        cfg = self.config

        prev = builder.add_particle((0.0, self.height, 0.0), mass=0.0)
        for k in range(self.num_links):
            p = builder.add_particle((self.spacing * (k + 1), self.height, 0.0), mass=cfg.mass)
            builder.add_spring(prev, p, cfg.stiffness, cfg.damping)
            prev = p
