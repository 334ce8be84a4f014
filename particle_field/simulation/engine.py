"""
Per-frame orchestration of the particle simulation.

Data flow for one frame:
hand observation -> gesture classifier -> transition controller (one-shot events)
-> motion estimator -> force field -> particle pool integration -> particle frame.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import numpy.typing as npt

from particle_field.config import CanvasConfig, ParticleConfig
from particle_field.detection import EMPTY_OBSERVATION, GestureClassifier, HandObservation, Mode
from particle_field.simulation.force_field import ForceField
from particle_field.simulation.motion_estimator import MotionEstimator
from particle_field.simulation.particle_pool import ParticlePool
from particle_field.simulation.state import SimulationState
from particle_field.simulation.transition_controller import TransitionController
from particle_field.utils import Coords, LatestValue

logger = logging.getLogger(__name__)


def _frozen(array: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    array = array.copy()
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class ParticleFrame:
    """
    Read-only view of the particles for the renderer, taken once per frame.
    """

    positions: npt.NDArray[np.float64]
    velocities: npt.NDArray[np.float64]
    sizes: npt.NDArray[np.float64]
    hues: npt.NDArray[np.float64]
    alphas: npt.NDArray[np.float64]
    gesture_active: bool
    intensity: float
    fingertip: Optional[Coords]
    """Mirrored fingertip in canvas coordinates, or None if no hand."""

    def __len__(self) -> int:
        return len(self.positions)


@dataclass(frozen=True)
class DebugSnapshot:
    mode: Mode
    hand_detected: bool
    tracker_ready: bool
    particle_count: int


class ParticleEngine:
    """
    Owns the simulation components and advances them exactly once per rendered frame.

    The hand observation is either passed to `step` directly or read from a
    `LatestValue` mailbox that the tracking worker publishes into. A stale mailbox
    simply yields the last published observation again.
    """

    def __init__(
        self,
        width: int = CanvasConfig.WIDTH,
        height: int = CanvasConfig.HEIGHT,
        max_particles: int = ParticleConfig.MAX_PARTICLES,
        seed: Optional[int] = None,
        observations: Optional[LatestValue[HandObservation]] = None,
    ) -> None:
        self.width = width
        self.height = height
        self.rng = np.random.default_rng(seed)
        self.observations = observations

        self.state = SimulationState()
        self.classifier = GestureClassifier(width, height)
        self.transitions = TransitionController()
        self.motion = MotionEstimator()
        self.forces = ForceField(width, self.rng)
        self.pool = ParticlePool(width, height, max_particles, self.rng)

        logger.info(f"ParticleEngine initialized: {width}x{height}, {max_particles} particles")

    def step(
        self,
        observation: Optional[HandObservation] = None,
        tracker_ready: Optional[bool] = None,
    ) -> ParticleFrame:
        """
        Advance the simulation by one frame.

        :param observation: The hands to use for this frame. If None, the latest
            value of the mailbox is used (no hands if there is no mailbox).
        :param tracker_ready: Tracker status shown in the debug snapshot; unchanged if None.
        """
        if observation is None:
            observation = self._latest_observation()
        if tracker_ready is not None:
            self.state.tracker_ready = tracker_ready

        state = self.state
        gesture = self.classifier.classify(observation)

        if self.transitions.begin_frame(state, gesture):
            self.pool.spawn_burst(state.explosion.midpoint)

        state.motion = self.motion.update(gesture.fingertip)

        self.forces.apply(self.pool.velocities, self.pool.positions, state)
        self.pool.integrate(state.motion.intensity)
        self.pool.update_appearance(state.gesture_active, state.motion.intensity)

        self.transitions.end_frame(state)

        if state.mode is Mode.NONE:
            self.pool.trim_and_respawn()

        return self.frame()

    def _latest_observation(self) -> HandObservation:
        if self.observations is None:
            return EMPTY_OBSERVATION
        observation = self.observations.latest()
        return observation if observation is not None else EMPTY_OBSERVATION

    def frame(self) -> ParticleFrame:
        """
        Snapshot of the particle state for the renderer.
        """
        pool = self.pool
        fingertip = self.state.fingertip
        return ParticleFrame(
            positions=_frozen(pool.positions),
            velocities=_frozen(pool.velocities),
            sizes=_frozen(pool.current_size),
            hues=_frozen(pool.hue),
            alphas=_frozen(pool.alpha),
            gesture_active=self.state.gesture_active,
            intensity=self.state.motion.intensity,
            fingertip=fingertip.mirrored(self.width) if fingertip is not None else None,
        )

    def debug_snapshot(self) -> DebugSnapshot:
        return DebugSnapshot(
            mode=self.state.mode,
            hand_detected=self.state.gesture.hand_detected,
            tracker_ready=self.state.tracker_ready,
            particle_count=len(self.pool),
        )
