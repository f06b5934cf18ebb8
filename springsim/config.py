"""
Configuration for springsim models and the viewer.

Each topology carries a ModelConfig with the recognized fields
{mass, stiffness, damping, gravity}. Overrides can be loaded from a JSON
file mapping topology names to partial field sets:

    {
        "chain": {"stiffness": 800.0},
        "cloth": {"gravity": [0.0, -3.0, 0.0]}
    }
"""

import json
import math
import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class ModelConfig:
    """Physical constants for one topology."""
    mass: float = 1.0
    stiffness: float = 100.0
    damping: float = 0.5
    gravity: Tuple[float, float, float] = (0.0, -9.81, 0.0)

    def __post_init__(self):
        object.__setattr__(self, "gravity", tuple(float(g) for g in self.gravity))
        self.validate()

    def validate(self) -> None:
        if len(self.gravity) != 3:
            raise ValueError(f"gravity must have 3 components, got {len(self.gravity)}")
        for name in ("mass", "stiffness", "damping"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0.0:
                raise ValueError(f"{name} must be a finite value >= 0, got {value}")

    @classmethod
    def from_dict(cls, data: dict, base: Optional["ModelConfig"] = None) -> "ModelConfig":
        """
        Build a config from a (partial) mapping, filling gaps from ``base``.

        Raises:
            ValueError: on keys that are not ModelConfig fields
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config fields: {unknown} (expected {sorted(known)})")
        return replace(base or cls(), **data)

    def to_dict(self) -> dict:
        return asdict(self)


NO_GRAVITY = (0.0, 0.0, 0.0)
EARTH_GRAVITY = (0.0, -9.81, 0.0)

DEFAULT_CONFIGS: Dict[str, ModelConfig] = {
    "spring": ModelConfig(mass=0.1, stiffness=10.0, damping=0.5, gravity=NO_GRAVITY),
    "chain": ModelConfig(mass=0.5, stiffness=500.0, damping=0.5, gravity=EARTH_GRAVITY),
    "cloth": ModelConfig(mass=0.1, stiffness=100.0, damping=0.5, gravity=EARTH_GRAVITY),
    "cube": ModelConfig(mass=1.0, stiffness=150.0, damping=0.2, gravity=EARTH_GRAVITY),
}


def load_configs(path: str) -> Dict[str, ModelConfig]:
    """
    Load per-topology overrides from a JSON file merged over DEFAULT_CONFIGS.

    Raises:
        FileNotFoundError: if ``path`` does not exist
        ValueError: on unknown topology names or config fields
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, 'r') as f:
        data = json.load(f)

    configs = dict(DEFAULT_CONFIGS)
    for name, overrides in data.items():
        if name not in DEFAULT_CONFIGS:
            raise ValueError(f"Unknown topology '{name}' in {path} "
                             f"(expected one of {sorted(DEFAULT_CONFIGS)})")
        configs[name] = ModelConfig.from_dict(overrides, base=DEFAULT_CONFIGS[name])
    return configs


@dataclass
class ViewerConfig:
    """Configuration for the interactive viewer."""
    # Physics
    dt: float = 0.001
    substeps: int = 10
    device: Optional[str] = None

    # Scene
    topology: str = "spring"
    config_path: Optional[str] = None

    # Display
    window_width: int = 1000
    window_height: int = 700
    fps: int = 60
