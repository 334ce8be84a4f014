"""
MediaPipe hand tracking adapter.

Turns camera frames into `HandObservation`s. This is the boundary with the
external tracking model: initialization failures surface as `TrackingUnavailable`,
including a missing or incompatible mediapipe install,
and everything downstream only ever sees plain landmark tuples.
"""

import logging

import cv2 as cv
import numpy as np
import numpy.typing as npt

from particle_field.config import MediaPipeConfig
from particle_field.detection.landmarks import EMPTY_OBSERVATION, HandObservation, make_hand

logger = logging.getLogger(__name__)


class TrackingUnavailable(RuntimeError):
    """
    The hand tracking model could not be initialized.
    """


class HandTracker:
    """
    MediaPipe hands wrapper.
    It exposes only one method, `process`, that receives a BGR image and returns the detected hands.
    """

    def __init__(
        self,
        max_hands: int = MediaPipeConfig.MAX_NUM_HANDS,
        det_conf: float = MediaPipeConfig.MIN_DETECTION_CONFIDENCE,
        track_conf: float = MediaPipeConfig.MIN_TRACKING_CONFIDENCE,
    ) -> None:
        try:
            import mediapipe as mp

            self.hands_detector = mp.solutions.hands.Hands(
                static_image_mode=False,
                max_num_hands=max_hands,
                model_complexity=MediaPipeConfig.MODEL_COMPLEXITY,
                min_detection_confidence=float(det_conf),
                min_tracking_confidence=float(track_conf),
            )
        except Exception as e:
            raise TrackingUnavailable(f"Could not initialize MediaPipe Hands: {e}") from e

        logger.info(f"MediaPipe Hands configured (max_hands={max_hands})")

    def process(self, img: npt.NDArray[np.uint8]) -> HandObservation:
        """
        Apply the hand detection model to an image and return the detected hands.

        :param img: A BGR camera frame.
        """
        img = cv.cvtColor(img, cv.COLOR_BGR2RGB)

        img.flags.writeable = False
        results = self.hands_detector.process(img)

        if not results.multi_hand_landmarks:
            return EMPTY_OBSERVATION

        return tuple(make_hand(hand.landmark) for hand in results.multi_hand_landmarks)

    def close(self) -> None:
        self.hands_detector.close()
