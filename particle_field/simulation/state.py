"""
Per-frame simulation state.

A single `SimulationState` instance is passed explicitly to each component every
frame instead of living in module globals. The render loop is its only writer.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Optional

from particle_field.config import TimingConfig
from particle_field.detection import NO_HANDS, GestureResult, Mode
from particle_field.utils import Coords


@dataclass(frozen=True)
class MotionSignal:
    """
    Smoothed fingertip motion: intensity in [0, 100] and a direction in [-1, 1] per axis.
    """

    intensity: float = 0.0
    direction_x: float = 0.0
    direction_y: float = 0.0

    ZERO: ClassVar["MotionSignal"]

    @property
    def direction(self) -> Coords:
        return Coords(self.direction_x, self.direction_y)


MotionSignal.ZERO = MotionSignal()


@dataclass
class ExplosionState:
    """
    An explosion in effect: an outward force around `midpoint` that fades over `ticks_remaining` frames.
    """

    midpoint: Coords
    ticks_remaining: int = TimingConfig.EXPLOSION_DURATION

    @property
    def active(self) -> bool:
        return self.ticks_remaining > 0

    @property
    def time_factor(self) -> float:
        """
        Linear decay from 1 (just triggered) to 0 (expired).
        """
        return self.ticks_remaining / TimingConfig.EXPLOSION_DURATION


@dataclass
class RecoveryState:
    """
    Gentle re-dispersal after a gesture ends, decaying linearly to zero.
    """

    ticks_remaining: int = 0

    @property
    def active(self) -> bool:
        return self.ticks_remaining > 0

    @property
    def factor(self) -> float:
        return self.ticks_remaining / TimingConfig.RECOVERY_DURATION


@dataclass
class SimulationState:
    """
    Everything the simulation needs to carry from one frame to the next,
    apart from the particles themselves.
    """

    gesture: GestureResult = NO_HANDS
    "Latest classification result."

    motion: MotionSignal = MotionSignal.ZERO
    "Motion signal computed this frame."

    explosion: Optional[ExplosionState] = None
    "Explosion in effect, if any. Cleared when its timer runs out."

    recovery: RecoveryState = field(default_factory=RecoveryState)
    "Recovery dispersal timer."

    tracker_ready: bool = False
    "Whether the hand tracker has processed at least one frame."

    frame: int = 0
    "Number of frames simulated so far."

    @property
    def mode(self) -> Mode:
        return self.gesture.mode

    @property
    def fingertip(self) -> Optional[Coords]:
        return self.gesture.fingertip

    @property
    def gesture_active(self) -> bool:
        return self.mode.is_gesture
