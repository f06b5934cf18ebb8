# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Base solver class for 3D spring mass simulations

import numpy as np


class SolverBase:
    """
    Generic base class for solvers.

    Defines the ``step`` interface and keeps the adaptive strain scale used
    to normalize spring strains for visualization.
    """

    def __init__(self, model):
        """
        Initialize the solver with a model.

        Args:
            model: The Model object containing the system description
        """
        self.model = model

        # Adaptive strain normalization parameters
        self._strain_update_counter = 0
        self._strain_update_interval = 10  # Update every N steps
        self._ema_alpha = 0.1  # Exponential moving average smoothing factor

    @property
    def device(self):
        return self.model.device

    def step(self, state_in, state_out, dt: float):
        """
        Simulate the model for a given time step.

        Args:
            state_in: The input state
            state_out: The output state
            dt: The time step (in seconds)
        """
        raise NotImplementedError("Concrete solvers must implement step()")

    def _update_strain_normalization(self):
        """
        Blend the 95th percentile of |strain| into the model's strain scale.

            scale(t+1) = α * percentile(|ε|, 95) + (1 - α) * scale(t)
        """
        model = self.model

        abs_strains = np.abs(model.spring_strains.numpy())
        if len(abs_strains) == 0:
            return

        percentile_95 = np.percentile(abs_strains, 95)
        if percentile_95 < 1e-8:
            percentile_95 = 0.01  # ~1% strain

        current_scale = model.spring_strain_scale.numpy()[0]
        new_scale = self._ema_alpha * percentile_95 + (1 - self._ema_alpha) * current_scale
        model.spring_strain_scale.assign([new_scale])

    def _update_and_normalize_strains(self):
        """Periodically refresh the strain scale; call at the end of step()."""
        self._strain_update_counter += 1
        if self._strain_update_counter >= self._strain_update_interval:
            if self.model.spring_count > 0:
                self._update_strain_normalization()
            self._strain_update_counter = 0
