"""
Mode transition tracking.

Turns the per-frame mode sequence into one-shot events: the explosion fires on
entering EXPLOSION (and re-arms only after leaving it), and the recovery timer
is armed whenever a gesture ends.
"""

import logging
from dataclasses import dataclass

from particle_field.config import TimingConfig
from particle_field.detection import GestureResult, Mode
from particle_field.simulation.state import ExplosionState, RecoveryState, SimulationState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModeTransition:
    """
    The previous and current mode of one frame.
    """

    previous: Mode
    current: Mode

    @property
    def changed(self) -> bool:
        return self.previous is not self.current

    def entered(self, mode: Mode) -> bool:
        return self.current is mode and self.previous is not mode

    def left(self, mode: Mode) -> bool:
        return self.previous is mode and self.current is not mode

    @property
    def gesture_ended(self) -> bool:
        return self.previous.is_gesture and not self.current.is_gesture


class ModeEdgeDetector:
    """
    Remembers the last mode and reports the transition for each new one.
    """

    def __init__(self, initial: Mode = Mode.NONE) -> None:
        self.previous = initial

    def push(self, mode: Mode) -> ModeTransition:
        transition = ModeTransition(self.previous, mode)
        self.previous = mode
        return transition


class TransitionController:
    """
    Drives the explosion and recovery timers from the mode sequence.

    Each frame calls `begin_frame` once the gesture is classified (it may fire the
    explosion and arm the recovery) and `end_frame` after the particles moved
    (it counts both timers down).
    """

    def __init__(self) -> None:
        self.edges = ModeEdgeDetector()
        self.explosion_duration = TimingConfig.EXPLOSION_DURATION
        self.recovery_duration = TimingConfig.RECOVERY_DURATION

    @property
    def previous_mode(self) -> Mode:
        return self.edges.previous

    def begin_frame(self, state: SimulationState, gesture: GestureResult) -> bool:
        """
        Record the gesture of the new frame and fire one-shot events.

        :return: True if an explosion was triggered this frame (the caller spawns the burst).
        """
        transition = self.edges.push(gesture.mode)
        state.gesture = gesture

        if transition.changed:
            logger.info(f"Mode changed: {transition.previous} -> {transition.current}")

        fired = False
        if transition.entered(Mode.EXPLOSION) and gesture.midpoint is not None:
            state.explosion = ExplosionState(gesture.midpoint, self.explosion_duration)
            fired = True
            logger.info(f"Explosion triggered at {gesture.midpoint}")

        if transition.gesture_ended:
            state.recovery = RecoveryState(self.recovery_duration)
            logger.debug("Gesture ended, recovery armed")

        return fired

    def end_frame(self, state: SimulationState) -> None:
        """
        Count down the explosion and recovery timers.
        """
        if state.explosion is not None:
            state.explosion.ticks_remaining = max(0, state.explosion.ticks_remaining - 1)
            if not state.explosion.active:
                state.explosion = None
                logger.debug("Explosion expired")

        if state.recovery.active:
            state.recovery.ticks_remaining -= 1

        state.frame += 1
