"""
Force field acting on the particle pool.

Forces are velocity deltas (pixels / frame) computed for every particle at once:
- motion coupling: the fingertip motion direction drags every particle
- repel / attract: radial push away from / pull toward the mirrored fingertip
- explosion: radial push away from the two-hand midpoint, fading over time
- recovery: random dispersal after a gesture ends, fading over time
- ambient jitter: small random movement for a natural look

Damping and the velocity clamp are applied last, once per frame.
"""

import logging
from typing import Optional

import numpy as np
import numpy.typing as npt

from particle_field.config import ForceConfig
from particle_field.detection import Mode
from particle_field.simulation.state import ExplosionState, MotionSignal, RecoveryState, SimulationState
from particle_field.utils import Coords

logger = logging.getLogger(__name__)

Vectors = npt.NDArray[np.float64]


def radial_force(offsets: Vectors, strength: Vectors, dist: Vectors, mask: Vectors) -> Vectors:
    """
    Unit `offsets` scaled by `strength`, only where `mask` holds.
    """
    force = np.zeros_like(offsets)
    force[mask] = offsets[mask] / dist[mask][:, None] * strength[mask][:, None]
    return force


class ForceField:
    def __init__(self, width: float, rng: Optional[np.random.Generator] = None) -> None:
        self.width = width
        self.rng = rng if rng is not None else np.random.default_rng()

    # ==================== Individual forces ====================

    def motion_coupling(self, count: int, motion: MotionSignal) -> Vectors:
        direction = np.array([motion.direction_x, motion.direction_y]) * ForceConfig.MOTION_INFLUENCE
        return np.tile(direction, (count, 1))

    def repel(self, positions: Vectors, hand: Coords) -> Vectors:
        """
        Push away from the hand, falling off with the squared distance.
        """
        offsets = positions - np.array(hand.coords)
        dist = np.linalg.norm(offsets, axis=1)
        mask = (dist > ForceConfig.MIN_DISTANCE) & (dist < ForceConfig.REPEL_RADIUS)

        strength = np.minimum(
            ForceConfig.REPEL_STRENGTH / (1 + dist * dist * ForceConfig.REPEL_FALLOFF),
            ForceConfig.REPEL_MAX,
        )
        return radial_force(offsets, strength, dist, mask)

    def attract(self, positions: Vectors, hand: Coords) -> Vectors:
        """
        Pull toward the hand, stronger when closer.
        """
        offsets = np.array(hand.coords) - positions
        dist = np.linalg.norm(offsets, axis=1)
        mask = (dist > ForceConfig.MIN_DISTANCE) & (dist < ForceConfig.ATTRACT_RADIUS)

        strength = np.minimum(
            ForceConfig.ATTRACT_STRENGTH / (1 + dist * ForceConfig.ATTRACT_FALLOFF),
            ForceConfig.ATTRACT_MAX,
        )
        return radial_force(offsets, strength, dist, mask)

    def explosion(self, positions: Vectors, explosion: ExplosionState) -> Vectors:
        """
        Push away from the explosion midpoint. Unbounded radius; fades with time and distance.
        """
        offsets = positions - np.array(explosion.midpoint.coords)
        dist = np.linalg.norm(offsets, axis=1)
        mask = dist > ForceConfig.MIN_DISTANCE

        strength = np.minimum(
            ForceConfig.EXPLOSION_STRENGTH * explosion.time_factor / (1 + dist * ForceConfig.EXPLOSION_FALLOFF),
            ForceConfig.EXPLOSION_MAX,
        )
        return radial_force(offsets, strength, dist, mask)

    def recovery(self, count: int, recovery: RecoveryState) -> Vectors:
        j = ForceConfig.RECOVERY_JITTER
        return self.rng.uniform(-j, j, size=(count, 2)) * recovery.factor

    def jitter(self, count: int) -> Vectors:
        j = ForceConfig.AMBIENT_JITTER
        return self.rng.uniform(-j, j, size=(count, 2))

    # ==================== Combined ====================

    def accelerations(self, positions: Vectors, state: SimulationState) -> Vectors:
        """
        Sum of every force that applies in the current state.
        """
        count = len(positions)
        accel = self.motion_coupling(count, state.motion)

        if state.fingertip is not None:
            hand = state.fingertip.mirrored(self.width)
            if state.mode is Mode.REPEL:
                accel += self.repel(positions, hand)
            elif state.mode is Mode.ATTRACT:
                accel += self.attract(positions, hand)

        if state.explosion is not None and state.explosion.active:
            accel += self.explosion(positions, state.explosion)

        if state.mode is Mode.NONE and state.recovery.active:
            accel += self.recovery(count, state.recovery)

        accel += self.jitter(count)
        return accel

    def apply(self, velocities: Vectors, positions: Vectors, state: SimulationState) -> None:
        """
        Add the accelerations to the velocities in place, then damp and clamp them.
        """
        velocities += self.accelerations(positions, state)
        self.damp(velocities)

    @staticmethod
    def damp(velocities: Vectors) -> None:
        velocities *= ForceConfig.DAMPING
        np.clip(velocities, -ForceConfig.MAX_VELOCITY, ForceConfig.MAX_VELOCITY, out=velocities)
