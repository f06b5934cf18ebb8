"""
springsim: damped mass-spring bodies on NVIDIA Warp.

Four topologies (single spring, chain pendulum, hanging cloth, jelly cube)
share one semi-implicit Euler solver.

    from springsim import ClothModel

    model = ClothModel(device='cpu')
    for _ in range(1000):
        model.step(0.001)
    positions = model.particle_positions()
"""

from .config import DEFAULT_CONFIGS, ModelConfig, load_configs
from .driver import TOPOLOGIES, PanelState, SimulationDriver, create_model
from .models import ChainPendulumModel, ClothModel, CubeModel, MassOnASpringModel
from .sim import Model, ModelBuilder, Particle, Spring, State
from .solvers import SolverBase, SolverSemiImplicit

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIGS",
    "ModelConfig",
    "load_configs",
    "TOPOLOGIES",
    "PanelState",
    "SimulationDriver",
    "create_model",
    "ChainPendulumModel",
    "ClothModel",
    "CubeModel",
    "MassOnASpringModel",
    "Model",
    "ModelBuilder",
    "Particle",
    "Spring",
    "State",
    "SolverBase",
    "SolverSemiImplicit",
]
