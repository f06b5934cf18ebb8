# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Semi-implicit solver for 3D spring-mass systems

import warp as wp

from ..solver import SolverBase
from .kernels_particle import eval_spring_forces, integrate_particles


class SolverSemiImplicit(SolverBase):
    """
    Symplectic Euler integrator shared by every topology.

    One step accumulates the forces of the whole spring list, then
    integrates every particle once, then clears the force accumulators.
    Not unconditionally stable: dt must be small relative to the spring
    stiffness.

    Example:
        >>> model = ChainPendulumModel(device='cpu')
        >>> solver = SolverSemiImplicit(model)
        >>> state_in = model.state()
        >>> state_out = model.state()
        >>>
        >>> for i in range(100):
        >>>     solver.step(state_in, state_out, dt=0.001)
        >>>     state_in, state_out = state_out, state_in
    """

    def step(self, state_in, state_out, dt: float):
        """
        Advance the simulation by one timestep.

        Args:
            state_in: The input state
            state_out: The output state
            dt: The timestep (in seconds)
        """
        model = self.model

        if model.particle_count == 0:
            return state_out

        # Evaluate spring forces at time n
        state_in.particle_f.zero_()
        eval_spring_forces(model, state_in, state_in.particle_f)

        wp.launch(
            kernel=integrate_particles,
            dim=model.particle_count,
            inputs=[
                state_in.particle_q,
                state_in.particle_qd,
                state_in.particle_f,
                model.particle_inv_mass,
                model.gravity,
                dt,
            ],
            outputs=[state_out.particle_q, state_out.particle_qd],
            device=model.device,
        )

        # Forces are consumed by the step
        state_in.particle_f.zero_()
        state_out.particle_f.zero_()

        self._update_and_normalize_strains()

        return state_out
