# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# 3D Model class for spring mass simulations

import math
from typing import List, Optional

import numpy as np
import warp as wp

from ..config import DEFAULT_CONFIGS, ModelConfig
from ..solvers import SolverSemiImplicit
from .builder import ModelBuilder
from .primitives import Particle, Spring


class State:
    """
    Represents the time-varying state of a simulation.

    Contains particle positions, velocities, and forces.
    """

    def __init__(self):
        self.particle_q = None    # Positions (vec3)
        self.particle_qd = None   # Velocities (vec3)
        self.particle_f = None    # Forces (vec3)


class Model:
    """
    A spring-mass body: particle arena, spring network, and the state the
    solver advances.

    Subclasses describe one topology by overriding ``build``. The external
    driver only needs three things:

        model.reset()                 # rebuild topology and initial state
        model.step(dt)                # one semi-implicit Euler tick
        model.particle_positions()    # read back for drawing

    Springs reference particles by index into dense warp arrays, so the
    arena can be reallocated on ``reset()`` without dangling references.

    Args:
        config: Physical constants; defaults to the topology's entry in
            DEFAULT_CONFIGS
        device: Warp device ('cpu', 'cuda', or None for the default device)
        verbose: Print construction summaries
    """

    topology = None  # key into DEFAULT_CONFIGS
    display_name = "Model"

    def __init__(self, config: Optional[ModelConfig] = None, device=None, verbose: bool = True):
        self.config = config or DEFAULT_CONFIGS.get(self.topology, ModelConfig())
        self.device = wp.get_device(device)
        self.verbose = verbose

        # Particle properties
        self.particle_q = None              # Initial positions, shape [particle_count], vec3
        self.particle_qd = None             # Initial velocities, shape [particle_count], vec3
        self.particle_mass = None           # Particle mass, shape [particle_count], float
        self.particle_inv_mass = None       # Inverse mass (0 for fixed), shape [particle_count], float
        self.particle_count = 0

        # Spring network properties
        self.spring_indices = None          # Spring connectivity [i0, j0, i1, j1, ...], shape [spring_count*2], int
        self.spring_rest_length = None      # Rest length per spring, shape [spring_count], float
        self.spring_stiffness = None        # Stiffness per spring, shape [spring_count], float
        self.spring_damping = None          # Damping per spring, shape [spring_count], float
        self.spring_strains = None          # Raw strain ε = (L - L₀)/L₀, shape [spring_count], float
        self.spring_strains_normalized = None  # Normalized strains in [-1, 1], shape [spring_count], float
        self.spring_strain_scale = None     # Adaptive normalization scale [1], float
        self.spring_count = 0
        self.springs: List[Spring] = []

        # Physical parameters
        self.gravity = wp.vec3(0.0, 0.0, 0.0)
        self.min_spring_length = 1e-6       # Springs shorter than this exert no force

        # Simulation state
        self.state_in: Optional[State] = None
        self.state_out: Optional[State] = None
        self.solver = None
        self.t = 0.0
        self.step_count = 0

        self.reset()

    # ========================================================================
    # TOPOLOGY
    # ========================================================================

    def build(self, builder: ModelBuilder) -> None:
        """Add this topology's particles and springs to ``builder``."""
        raise NotImplementedError("Concrete models must implement build()")

    # ========================================================================
    # DRIVER INTERFACE
    # ========================================================================

    def reset(self) -> None:
        """Discard all particles and springs and rebuild the initial configuration."""
        builder = ModelBuilder()
        self.build(builder)
        self._finalize(builder)
        self.set_gravity(self.config.gravity)

        self.state_in = self.state()
        self.state_out = self.state()
        self.solver = SolverSemiImplicit(self)
        self.t = 0.0
        self.step_count = 0

        if self.verbose:
            fixed = int(np.count_nonzero(self.particle_mass.numpy() == 0.0))
            print(f"✓ {self.display_name}: {self.particle_count} particles "
                  f"({fixed} fixed), {self.spring_count} springs")

    def step(self, dt: float) -> None:
        """
        Advance the model by one semi-implicit Euler step.

        Raises:
            ValueError: if ``dt`` is not a positive finite number
        """
        if not (math.isfinite(dt) and dt > 0.0):
            raise ValueError(f"dt must be a positive finite number, got {dt}")

        self.solver.step(self.state_in, self.state_out, dt)
        self.state_in, self.state_out = self.state_out, self.state_in

        self.t += dt
        self.step_count += 1

    # ========================================================================
    # CONSTRUCTION
    # ========================================================================

    def state(self) -> State:
        """
        Create a new State initialized from the model's initial configuration.
        """
        s = State()

        if self.particle_count > 0:
            s.particle_q = wp.clone(self.particle_q)
            s.particle_qd = wp.clone(self.particle_qd)
            s.particle_f = wp.zeros(self.particle_count, dtype=wp.vec3, device=self.device)

        return s

    def set_gravity(self, gravity):
        """
        Set the gravitational acceleration.

        Args:
            gravity: Gravity vector as (gx, gy, gz) or wp.vec3
        """
        self.gravity = wp.vec3(float(gravity[0]), float(gravity[1]), float(gravity[2]))

    def _finalize(self, builder: ModelBuilder) -> None:
        """Pack the builder's particles and springs into device arrays."""
        device = self.device
        n = builder.particle_count

        pos_np = np.array([p.position for p in builder.particles], dtype=np.float32).reshape(n, 3)
        vel_np = np.array([p.velocity for p in builder.particles], dtype=np.float32).reshape(n, 3)
        mass_np = np.array([p.mass for p in builder.particles], dtype=np.float32)
        inv_mass_np = np.zeros_like(mass_np)
        inv_mass_np[mass_np > 0.0] = 1.0 / mass_np[mass_np > 0.0]

        self.particle_count = n
        self.particle_q = wp.array(pos_np, dtype=wp.vec3, device=device)
        self.particle_qd = wp.array(vel_np, dtype=wp.vec3, device=device)
        self.particle_mass = wp.array(mass_np, dtype=float, device=device)
        self.particle_inv_mass = wp.array(inv_mass_np, dtype=float, device=device)

        self.springs = list(builder.springs)
        self.spring_count = len(self.springs)

        indices = np.array([(s.i, s.j) for s in self.springs], dtype=np.int32).reshape(-1)
        self.spring_indices = wp.array(indices, dtype=int, device=device)
        self.spring_rest_length = wp.array(
            np.array([s.rest_length for s in self.springs], dtype=np.float32), dtype=float, device=device)
        self.spring_stiffness = wp.array(
            np.array([s.stiffness for s in self.springs], dtype=np.float32), dtype=float, device=device)
        self.spring_damping = wp.array(
            np.array([s.damping for s in self.springs], dtype=np.float32), dtype=float, device=device)

        self.spring_strains = wp.zeros(self.spring_count, dtype=float, device=device)
        self.spring_strains_normalized = wp.zeros(self.spring_count, dtype=float, device=device)
        self.spring_strain_scale = wp.array([0.01], dtype=float, device=device)

    # ========================================================================
    # READ-BACK (renderer side)
    # ========================================================================

    def particle_positions(self) -> np.ndarray:
        """Current positions, shape (particle_count, 3). Returns a copy."""
        return self.state_in.particle_q.numpy().copy()

    def particle_velocities(self) -> np.ndarray:
        return self.state_in.particle_qd.numpy().copy()

    def particle_forces(self) -> np.ndarray:
        return self.state_in.particle_f.numpy().copy()

    def particle_masses(self) -> np.ndarray:
        return self.particle_mass.numpy().copy()

    def fixed_mask(self) -> np.ndarray:
        return self.particle_mass.numpy() == 0.0

    def particles(self) -> List[Particle]:
        """Snapshot of every particle; mutating it does not affect the model."""
        q = self.particle_positions()
        qd = self.particle_velocities()
        f = self.particle_forces()
        m = self.particle_masses()
        return [Particle(q[k], qd[k], m[k], f[k]) for k in range(self.particle_count)]

    def spring_index_pairs(self) -> np.ndarray:
        """Spring endpoints, shape (spring_count, 2)."""
        return self.spring_indices.numpy().reshape(-1, 2)

    def spring_segments(self) -> np.ndarray:
        """Endpoint positions of every spring, shape (spring_count, 2, 3)."""
        q = self.particle_positions()
        return q[self.spring_index_pairs()]

    def normalized_strains(self) -> np.ndarray:
        """Normalized strains in [-1, 1] from the most recent step."""
        return self.spring_strains_normalized.numpy().copy()

    # ========================================================================
    # ENERGY
    # ========================================================================

    def kinetic_energy(self) -> float:
        m = self.particle_masses()
        v = self.particle_velocities().astype(np.float64)
        return float(0.5 * np.sum(m * np.sum(v ** 2, axis=1)))

    def potential_energy(self) -> float:
        """Spring potential plus gravitational potential (zero at the origin)."""
        q = self.particle_positions().astype(np.float64)
        pairs = self.spring_index_pairs()

        spring_pe = 0.0
        if self.spring_count > 0:
            lengths = np.linalg.norm(q[pairs[:, 0]] - q[pairs[:, 1]], axis=1)
            rest = self.spring_rest_length.numpy()
            ks = self.spring_stiffness.numpy()
            spring_pe = float(np.sum(0.5 * ks * (lengths - rest) ** 2))

        g = np.array([self.gravity[0], self.gravity[1], self.gravity[2]], dtype=np.float64)
        gravity_pe = float(-np.sum(self.particle_masses() * (q @ g)))

        return spring_pe + gravity_pe

    def total_energy(self) -> float:
        return self.kinetic_energy() + self.potential_energy()
