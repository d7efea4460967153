"""Headless oscillating cube with remotely-configured motion parameters."""

from .sim import MotionConfig, MotionState, Oscillator, OscillatorPhase, Transform
from .sheets import SheetLoader, SheetSource

__all__ = [
    "MotionConfig",
    "MotionState",
    "Oscillator",
    "OscillatorPhase",
    "Transform",
    "SheetLoader",
    "SheetSource",
]
