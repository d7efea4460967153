"""Minimal host-side transform the oscillator writes to."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


def _vec3(values) -> np.ndarray:
    v = np.asarray(values, dtype=np.float64).reshape(-1)
    assert v.shape == (3,), f"expected a 3-vector, got shape {v.shape}"
    return v.copy()


@dataclass
class Transform:
    """World position and local scale of the moved object."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self) -> None:
        self.position = _vec3(self.position)
        self.scale = _vec3(self.scale)

    def set_uniform_scale(self, size: float) -> None:
        self.scale = np.full(3, float(size))
