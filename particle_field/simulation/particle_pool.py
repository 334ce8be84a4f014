"""
Particle pool stored as contiguous numpy arrays.

State (one row per particle, in append order):
- positions: Nx2 canvas pixels, always wrapped into [0, width] x [0, height]
- velocities: Nx2 pixels / frame (before the per-particle speed scaling)
- base_speed, base_size, current_size, target_size, hue, alpha: N

Particles are never destroyed individually. Resetting writes a fresh record in
place; bursts append rows and trimming drops the tail.
"""

import logging
from typing import Dict, Optional, Sequence

import numpy as np
import numpy.typing as npt

from particle_field.config import CanvasConfig, ParticleConfig
from particle_field.utils import Coords, lerp, map_range

logger = logging.getLogger(__name__)

FIELDS = (
    "positions",
    "velocities",
    "base_speed",
    "base_size",
    "current_size",
    "target_size",
    "hue",
    "alpha",
)

ParticleRecords = Dict[str, npt.NDArray[np.float64]]


class ParticlePool:
    def __init__(
        self,
        width: float = CanvasConfig.WIDTH,
        height: float = CanvasConfig.HEIGHT,
        max_particles: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")

        self.width = float(width)
        self.height = float(height)
        self.max_particles = max_particles if max_particles is not None else ParticleConfig.MAX_PARTICLES
        if self.max_particles <= 0:
            raise ValueError(f"Pool size must be positive, got {self.max_particles}")

        self.rng = rng if rng is not None else np.random.default_rng()

        self.positions = np.zeros((0, 2))
        self.velocities = np.zeros((0, 2))
        self.base_speed = np.zeros(0)
        self.base_size = np.zeros(0)
        self.current_size = np.zeros(0)
        self.target_size = np.zeros(0)
        self.hue = np.zeros(0)
        self.alpha = np.zeros(0)

        self.reset()

    def __len__(self) -> int:
        return len(self.positions)

    # ==================== Lifecycle ====================

    def fresh_particles(self, count: int) -> ParticleRecords:
        """
        Build `count` new particle records with randomized fields.
        Nothing in the pool is touched.
        """
        rng = self.rng
        v = ParticleConfig.INITIAL_VELOCITY
        base_size = rng.uniform(*ParticleConfig.BASE_SIZE_RANGE, size=count)

        return {
            "positions": np.column_stack(
                (rng.uniform(0, self.width, size=count), rng.uniform(0, self.height, size=count))
            ),
            "velocities": rng.uniform(-v, v, size=(count, 2)),
            "base_speed": rng.uniform(*ParticleConfig.BASE_SPEED_RANGE, size=count),
            "base_size": base_size,
            "current_size": base_size.copy(),
            "target_size": base_size.copy(),
            "hue": rng.uniform(*ParticleConfig.HUE_RANGE, size=count),
            "alpha": np.full(count, ParticleConfig.INITIAL_ALPHA),
        }

    def reset(self) -> None:
        """
        Replace the whole pool with `max_particles` fresh particles.
        """
        records = self.fresh_particles(self.max_particles)
        for name in FIELDS:
            setattr(self, name, records[name])

    def reset_particles(self, indices: Sequence[int]) -> None:
        """
        Recycle some particles in place with fresh records.
        """
        indices = np.asarray(indices, dtype=int)
        records = self.fresh_particles(len(indices))
        for name in FIELDS:
            getattr(self, name)[indices] = records[name]

    def append(self, records: ParticleRecords) -> None:
        for name in FIELDS:
            setattr(self, name, np.concatenate((getattr(self, name), records[name])))

    def spawn_burst(self, midpoint: Coords, count: int = ParticleConfig.BURST_COUNT) -> None:
        """
        Append `count` bright, large particles at the midpoint with random outward velocities.
        This is the only way the pool grows beyond `max_particles`.
        """
        rng = self.rng
        records = self.fresh_particles(count)

        jitter = ParticleConfig.BURST_JITTER
        records["positions"] = np.column_stack(
            (
                midpoint.x + rng.uniform(-jitter, jitter, size=count),
                midpoint.y + rng.uniform(-jitter, jitter, size=count),
            )
        )

        angle = rng.uniform(0, 2 * np.pi, size=count)
        speed = rng.uniform(*ParticleConfig.BURST_SPEED_RANGE, size=count)
        records["velocities"] = np.column_stack((np.cos(angle) * speed, np.sin(angle) * speed))

        records["alpha"] = np.full(count, ParticleConfig.BURST_ALPHA)
        records["current_size"] = records["base_size"] * ParticleConfig.GESTURE_SIZE_MULTIPLIER
        records["target_size"] = records["current_size"].copy()

        self.append(records)
        logger.info(f"Spawned {count} burst particles at {midpoint} (pool size {len(self)})")

    def trim_and_respawn(self) -> int:
        """
        Idle housekeeping, called only while no gesture is active.

        Truncates the pool back to `max_particles` (the tail holds the most recent
        burst particles, so those go first and the initial particles survive),
        then recycles a few random particles that sit near the canvas edges.

        :return: The number of particles trimmed.
        """
        trimmed = 0
        if len(self) > self.max_particles:
            trimmed = len(self) - self.max_particles
            for name in FIELDS:
                setattr(self, name, getattr(self, name)[: self.max_particles])
            logger.info(f"Trimmed {trimmed} burst particles")

        respawn_count = min(ParticleConfig.RESPAWN_PER_FRAME, len(self))
        for idx in self.rng.integers(0, len(self), size=respawn_count):
            if self.is_near_edge(idx):
                self.respawn(idx)

        return trimmed

    def is_near_edge(self, idx: int) -> bool:
        x, y = self.positions[idx]
        margin = ParticleConfig.EDGE_MARGIN
        return x < margin or x > self.width - margin or y < margin or y > self.height - margin

    def respawn(self, idx: int) -> None:
        """
        Move a particle to a random interior point with a small random velocity.
        """
        margin = ParticleConfig.RESPAWN_MARGIN
        v = ParticleConfig.RESPAWN_VELOCITY
        self.positions[idx] = (
            self.rng.uniform(margin, self.width - margin),
            self.rng.uniform(margin, self.height - margin),
        )
        self.velocities[idx] = self.rng.uniform(-v, v, size=2)

    # ==================== Per-frame update ====================

    def integrate(self, intensity: float) -> None:
        """
        Move every particle by its velocity, scaled by its base speed and by the
        motion intensity, then wrap around the canvas edges.
        """
        speed_multiplier = map_range(intensity, 0, 100, *ParticleConfig.SPEED_MULTIPLIER_RANGE)
        self.positions += self.velocities * (self.base_speed * speed_multiplier)[:, None]
        self.wrap()

    def wrap(self) -> None:
        """
        Particles leaving one edge reappear on the opposite edge (no bounce).
        """
        x = self.positions[:, 0]
        y = self.positions[:, 1]

        x[x < 0] = self.width
        x[x > self.width] = 0
        y[y < 0] = self.height
        y[y > self.height] = 0

    def update_appearance(self, gesture_active: bool, intensity: float) -> None:
        """
        Ease sizes toward their target and update the alpha from the motion intensity.
        Sizes grow while a gesture is active and never snap.
        """
        multiplier = ParticleConfig.GESTURE_SIZE_MULTIPLIER if gesture_active else 1.0
        self.target_size = self.base_size * multiplier
        self.current_size = lerp(self.current_size, self.target_size, ParticleConfig.SIZE_EASING)

        alpha_target = map_range(intensity, 0, 100, *ParticleConfig.ALPHA_RANGE)
        if gesture_active:
            self.alpha = np.full(
                len(self),
                np.clip(alpha_target + ParticleConfig.GESTURE_ALPHA_BOOST, 0, ParticleConfig.MAX_ALPHA),
            )
        else:
            self.alpha = lerp(self.alpha, alpha_target, ParticleConfig.ALPHA_EASING)
            np.clip(self.alpha, 0, ParticleConfig.MAX_ALPHA, out=self.alpha)
