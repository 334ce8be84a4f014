"""
Simulation Module - Particle force field and gesture state machine.

This module provides:
- Per-frame state records (state.py)
- Fingertip motion estimation (motion_estimator.py)
- Mode transition tracking and one-shot timers (transition_controller.py)
- Force computation (force_field.py)
- The particle arena (particle_pool.py)
- Per-frame orchestration (engine.py)
"""

from .engine import DebugSnapshot, ParticleEngine, ParticleFrame
from .force_field import ForceField
from .motion_estimator import MotionEstimator
from .particle_pool import ParticlePool
from .state import ExplosionState, MotionSignal, RecoveryState, SimulationState
from .transition_controller import ModeEdgeDetector, ModeTransition, TransitionController

__all__ = [
    'ParticleEngine',
    'ParticleFrame',
    'DebugSnapshot',
    'ForceField',
    'MotionEstimator',
    'ParticlePool',
    'ExplosionState',
    'MotionSignal',
    'RecoveryState',
    'SimulationState',
    'ModeEdgeDetector',
    'ModeTransition',
    'TransitionController',
]
