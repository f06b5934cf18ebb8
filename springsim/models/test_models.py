"""
Topology construction tests: particle/spring counts, anchors, rest lengths
and deterministic reset.
"""

import numpy as np
import pytest

from springsim.config import DEFAULT_CONFIGS, ModelConfig
from springsim.models import ChainPendulumModel, ClothModel, CubeModel, MassOnASpringModel

DEVICE = "cpu"


@pytest.fixture(scope="module")
def cube():
    return CubeModel(device=DEVICE, verbose=False)


def _rest_lengths_match_positions(springs, positions):
    for s in springs:
        assert np.isclose(s.rest_length, np.linalg.norm(positions[s.i] - positions[s.j]), atol=1e-5)


def test_chain_counts_and_anchor():
    model = ChainPendulumModel(device=DEVICE, verbose=False)

    assert model.particle_count == 11
    assert model.spring_count == 10
    assert np.count_nonzero(model.fixed_mask()) == 1
    assert model.fixed_mask()[0]

    pairs = model.spring_index_pairs()
    np.testing.assert_array_equal(pairs[:, 0], np.arange(10))
    np.testing.assert_array_equal(pairs[:, 1], np.arange(1, 11))

    positions = model.particle_positions()
    np.testing.assert_allclose(positions[:, 0], 2.0 * np.arange(11))
    np.testing.assert_allclose(positions[:, 1], 10.0)
    assert all(np.isclose(s.rest_length, 2.0) for s in model.springs)


def test_chain_custom_length():
    model = ChainPendulumModel(device=DEVICE, verbose=False, num_links=3)
    assert model.particle_count == 4
    assert model.spring_count == 3

    with pytest.raises(ValueError):
        ChainPendulumModel(device=DEVICE, verbose=False, num_links=0)


def test_cloth_counts_and_pins():
    model = ClothModel(device=DEVICE, verbose=False)

    assert model.particle_count == 100
    # 180 structural + 162 shear
    assert model.spring_count == 342

    fixed = np.nonzero(model.fixed_mask())[0]
    np.testing.assert_array_equal(fixed, [0, 9])

    positions = model.particle_positions()
    np.testing.assert_allclose(positions[0], [-10.0, 0.0, -10.0])
    np.testing.assert_allclose(positions[9], [-10.0, 0.0, 8.0])
    np.testing.assert_allclose(positions[:, 1], 0.0)


def test_cloth_springs_join_neighbours_only():
    model = ClothModel(device=DEVICE, verbose=False)
    positions = model.particle_positions()

    for s in model.springs:
        assert s.i > s.j
        d = np.abs(positions[s.i] - positions[s.j])
        assert d[0] <= 2.0 and d[2] <= 2.0
        assert np.isclose(s.rest_length, 2.0) or np.isclose(s.rest_length, 2.0 * np.sqrt(2.0))


def test_cloth_rejects_degenerate_grid():
    with pytest.raises(ValueError):
        ClothModel(device=DEVICE, verbose=False, grid_size=1)


def test_cube_counts(cube):
    assert cube.particle_count == 1296
    assert not np.any(cube.fixed_mask())
    # 216 sites x 6 stacked copies: 1940 neighbouring site pairs x 36 + 216 x 15 same-site pairs
    assert cube.spring_count == 73080


def test_cube_lattice_sites(cube):
    positions = cube.particle_positions()
    sites = np.unique(positions, axis=0)
    assert len(sites) == 216
    np.testing.assert_allclose(positions.min(axis=0), [0.0, 0.0, -10.0])
    np.testing.assert_allclose(positions.max(axis=0), [10.0, 10.0, 0.0])


def test_cube_zero_length_springs_stay_inert(cube):
    cube.reset()
    for _ in range(10):
        cube.step(0.001)

    positions = cube.particle_positions()
    assert np.all(np.isfinite(positions))
    assert np.all(np.isfinite(cube.particle_velocities()))

    # Unanchored: the whole body falls
    assert positions[:, 1].mean() < 5.0
    cube.reset()


def test_rest_length_matches_construction_positions():
    for model in (ChainPendulumModel(device=DEVICE, verbose=False),
                  ClothModel(device=DEVICE, verbose=False)):
        _rest_lengths_match_positions(model.springs, model.particle_positions())


def test_rest_length_never_changes():
    model = ClothModel(device=DEVICE, verbose=False)
    rest_before = model.spring_rest_length.numpy().copy()
    springs_before = list(model.springs)

    for _ in range(300):
        model.step(0.001)

    np.testing.assert_array_equal(model.spring_rest_length.numpy(), rest_before)
    assert model.springs == springs_before


def test_fixed_particles_are_bit_identical():
    model = ClothModel(device=DEVICE, verbose=False)
    fixed = model.fixed_mask()
    q0 = model.particle_positions()[fixed]
    qd0 = model.particle_velocities()[fixed]

    for _ in range(300):
        model.step(0.001)

    np.testing.assert_array_equal(model.particle_positions()[fixed], q0)
    np.testing.assert_array_equal(model.particle_velocities()[fixed], qd0)


@pytest.mark.parametrize("cls", [MassOnASpringModel, ChainPendulumModel, ClothModel])
def test_reset_is_idempotent(cls):
    model = cls(device=DEVICE, verbose=False)
    q_first = model.particle_positions()
    springs_first = list(model.springs)

    model.reset()
    model.reset()

    np.testing.assert_array_equal(model.particle_positions(), q_first)
    np.testing.assert_array_equal(model.particle_velocities(), 0.0)
    np.testing.assert_array_equal(model.particle_forces(), 0.0)
    assert model.springs == springs_first


def test_default_configs_per_topology():
    assert MassOnASpringModel(device=DEVICE, verbose=False).config == DEFAULT_CONFIGS["spring"]
    assert ChainPendulumModel(device=DEVICE, verbose=False).config == DEFAULT_CONFIGS["chain"]

    spring = MassOnASpringModel(device=DEVICE, verbose=False)
    np.testing.assert_array_equal(np.array(spring.gravity), 0.0)
    np.testing.assert_allclose(spring.particle_masses(), [0.0, 0.1])


def test_config_override_reaches_springs():
    config = ModelConfig(mass=2.0, stiffness=42.0, damping=0.1, gravity=(0.0, -1.0, 0.0))
    model = ChainPendulumModel(config=config, device=DEVICE, verbose=False)

    assert all(s.stiffness == 42.0 and s.damping == pytest.approx(0.1) for s in model.springs)
    np.testing.assert_allclose(model.particle_masses()[1:], 2.0)
    np.testing.assert_allclose(np.array(model.gravity), [0.0, -1.0, 0.0])
