"""
Simulation driver: the control-panel logic behind the viewer.

Holds one model per topology, tracks which one is active, and applies the
panel's requests (load a topology, reset, play, single step) once per frame.
No windowing here; the pygame viewer and the energy plot both drive models
through this class.

Usage:
    driver = SimulationDriver(device='cpu')
    driver.request_load("cloth")
    driver.panel.play_model = True
    while running:
        driver.update()
        positions = driver.model.particle_positions()
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .config import DEFAULT_CONFIGS, ModelConfig
from .models import ChainPendulumModel, ClothModel, CubeModel, MassOnASpringModel
from .sim import Model

TOPOLOGIES = {
    "spring": MassOnASpringModel,
    "chain": ChainPendulumModel,
    "cloth": ClothModel,
    "cube": CubeModel,
}


def create_model(name: str, config: Optional[ModelConfig] = None, device=None,
                 verbose: bool = True, **kwargs) -> Model:
    """
    Instantiate the topology registered under ``name``.

    Raises:
        ValueError: if ``name`` is not a known topology
    """
    if name not in TOPOLOGIES:
        raise ValueError(f"Unknown topology: {name} (expected one of {sorted(TOPOLOGIES)})")
    return TOPOLOGIES[name](config=config, device=device, verbose=verbose, **kwargs)


@dataclass
class PanelState:
    """Requests raised by the user interface, consumed by SimulationDriver.update()."""
    play_model: bool = False
    reset_model: bool = False
    step_model: bool = False
    dt: float = 0.001
    requested_model: Optional[str] = None


class SimulationDriver:
    """
    Owns the active model and applies panel requests.

    Models are constructed on first activation and kept afterwards; each
    activation resets the model.

    Args:
        configs: Per-topology configs (defaults to DEFAULT_CONFIGS)
        device: Warp device for all models
        initial: Topology activated at construction
        dt: Initial time step
        verbose: Print model construction summaries
    """

    def __init__(self, configs: Optional[Dict[str, ModelConfig]] = None, device=None,
                 initial: str = "spring", dt: float = 0.001, verbose: bool = True):
        self.configs = dict(DEFAULT_CONFIGS)
        if configs:
            self.configs.update(configs)
        self.device = device
        self.verbose = verbose

        self.panel = PanelState(dt=dt)
        self.models: Dict[str, Model] = {}
        self.active: Optional[str] = None

        self.load(initial)

    @property
    def model(self) -> Model:
        return self.models[self.active]

    def load(self, name: str) -> Model:
        """Activate topology ``name`` and reset it."""
        if name not in TOPOLOGIES:
            raise ValueError(f"Unknown topology: {name} (expected one of {sorted(TOPOLOGIES)})")

        if name not in self.models:
            self.models[name] = create_model(name, self.configs.get(name),
                                             device=self.device, verbose=self.verbose)
        else:
            self.models[name].reset()

        self.active = name
        return self.models[name]

    # ========================================================================
    # PANEL REQUESTS
    # ========================================================================

    def request_load(self, name: str) -> None:
        self.panel.requested_model = name

    def request_reset(self) -> None:
        self.panel.reset_model = True

    def request_step(self) -> None:
        self.panel.step_model = True

    def toggle_play(self) -> bool:
        self.panel.play_model = not self.panel.play_model
        return self.panel.play_model

    def set_dt(self, dt: float) -> None:
        if not dt > 0.0:
            raise ValueError(f"dt must be positive, got {dt}")
        self.panel.dt = dt

    def update(self, substeps: int = 1) -> int:
        """
        Apply pending requests for one frame.

        Order: load, then reset, then either a single step (one-shot) or
        ``substeps`` steps while playing.

        Returns:
            Number of steps taken
        """
        panel = self.panel

        if panel.requested_model is not None:
            name = panel.requested_model
            panel.requested_model = None
            self.load(name)

        if panel.reset_model:
            panel.reset_model = False
            self.model.reset()

        steps = 0
        if panel.step_model:
            panel.step_model = False
            self.model.step(panel.dt)
            steps = 1
        elif panel.play_model:
            for _ in range(substeps):
                self.model.step(panel.dt)
            steps = substeps

        return steps
