"""
Basic scenario tests for the springsim models.

Covers the driver-facing contract: reset, step, read-back, and the
behaviour expected from each topology after a short run.

Run with:
    pytest test_basic.py -v
"""

import numpy as np

from springsim import ChainPendulumModel, ClothModel, MassOnASpringModel

DEVICE = "cpu"


def test_single_spring_first_step_pushes_mass_away():
    """A compressed spring pushes the free mass away from the anchor."""
    model = MassOnASpringModel(device=DEVICE, verbose=False)
    anchor, mass = model.particle_positions()
    d0 = np.linalg.norm(mass - anchor)
    assert np.isclose(d0, 2.5)

    model.step(0.01)

    anchor1, mass1 = model.particle_positions()
    velocity = model.particle_velocities()[1]

    # Anchor sits above the mass, so "away" is -y
    assert velocity[1] < 0.0
    assert np.linalg.norm(mass1 - anchor1) > d0
    np.testing.assert_array_equal(anchor1, anchor)


def test_single_spring_rest_length_differs_from_initial_length():
    model = MassOnASpringModel(device=DEVICE, verbose=False)
    assert model.spring_count == 1
    spring = model.springs[0]
    assert (spring.i, spring.j) == (0, 1)
    assert np.isclose(spring.rest_length, 10.0)
    assert np.isclose(np.linalg.norm(model.spring_segments()[0, 1] - model.spring_segments()[0, 0]), 2.5)


def test_chain_pendulum_long_run_stays_finite():
    """1000 steps at dt=0.001 with gravity: no NaN/Inf, anchor unchanged."""
    model = ChainPendulumModel(device=DEVICE, verbose=False)
    anchor = model.particle_positions()[0].copy()

    for _ in range(1000):
        model.step(0.001)

    positions = model.particle_positions()
    assert np.all(np.isfinite(positions))
    assert np.all(np.isfinite(model.particle_velocities()))
    np.testing.assert_array_equal(positions[0], anchor)

    # The free end has started to fall
    assert positions[-1, 1] < 10.0


def test_cloth_hangs_from_pinned_corners():
    model = ClothModel(device=DEVICE, verbose=False)
    initial = model.particle_positions()

    for _ in range(500):
        model.step(0.001)

    positions = model.particle_positions()
    fixed = model.fixed_mask()

    assert np.all(np.isfinite(positions))
    np.testing.assert_array_equal(positions[fixed], initial[fixed])
    assert positions[~fixed, 1].mean() < -0.1


def test_reset_restores_initial_configuration():
    model = ChainPendulumModel(device=DEVICE, verbose=False)
    initial = model.particle_positions()

    for _ in range(200):
        model.step(0.001)
    assert not np.allclose(model.particle_positions(), initial)

    model.reset()

    np.testing.assert_array_equal(model.particle_positions(), initial)
    np.testing.assert_array_equal(model.particle_velocities(), np.zeros_like(initial))
    assert model.t == 0.0
    assert model.step_count == 0


def test_particles_snapshot_is_read_only_copy():
    model = MassOnASpringModel(device=DEVICE, verbose=False)
    particles = model.particles()

    assert len(particles) == 2
    assert particles[0].is_fixed
    assert not particles[1].is_fixed
    assert np.isclose(particles[1].mass, 0.1)

    particles[1].position[:] = 100.0
    assert not np.any(model.particle_positions() == 100.0)
