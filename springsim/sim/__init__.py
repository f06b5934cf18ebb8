# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0

from .builder import ModelBuilder
from .model import Model, State
from .primitives import Particle, Spring

__all__ = [
    "Model",
    "ModelBuilder",
    "Particle",
    "Spring",
    "State",
]
