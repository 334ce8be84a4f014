import logging
from typing import Optional

from particle_field.config import MotionConfig
from particle_field.simulation.state import MotionSignal
from particle_field.utils import Coords, clamp, map_range

logger = logging.getLogger(__name__)


class MotionEstimator:
    """
    Derives a motion signal from the fingertip displacement between consecutive frames.

    Intensity follows the displacement magnitude. The direction is only updated
    above a small deadband so that a resting hand does not make it flicker.
    Losing the hand zeroes the signal immediately.
    """

    def __init__(self) -> None:
        self.prev_position: Optional[Coords] = None
        self.signal = MotionSignal.ZERO

        self.max_displacement = MotionConfig.MAX_DISPLACEMENT
        self.max_intensity = MotionConfig.MAX_INTENSITY
        self.deadband = MotionConfig.DIRECTION_DEADBAND
        self.direction_scale = MotionConfig.DIRECTION_SCALE

    def update(self, fingertip: Optional[Coords]) -> MotionSignal:
        """
        Push the fingertip position of the current frame and return the motion signal.

        :param fingertip: Index fingertip in canvas coordinates (not mirrored), or None if no hand.
        """
        if fingertip is None:
            self.reset()
            return self.signal

        if self.prev_position is not None:
            delta = fingertip - self.prev_position
            displacement = delta.length()

            intensity = clamp(
                map_range(displacement, 0, self.max_displacement, 0, self.max_intensity),
                0,
                self.max_intensity,
            )

            direction_x = self.signal.direction_x
            direction_y = self.signal.direction_y
            if displacement > self.deadband:
                # Horizontal component inverted because the video is displayed mirrored
                direction_x = clamp(-delta.x / self.direction_scale, -1.0, 1.0)
                direction_y = clamp(delta.y / self.direction_scale, -1.0, 1.0)

            self.signal = MotionSignal(intensity, direction_x, direction_y)
            logger.debug(f"Motion: displacement={displacement:.2f} signal={self.signal}")

        self.prev_position = fingertip
        return self.signal

    def reset(self) -> None:
        """
        Forget the previous position and zero the signal.
        """
        self.prev_position = None
        self.signal = MotionSignal.ZERO
