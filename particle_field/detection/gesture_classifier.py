import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from particle_field.config import CanvasConfig, GestureConfig
from particle_field.detection.landmarks import (
    Hand,
    HandLandmark,
    Landmark,
    fingertip_distances,
    well_formed_hands,
)
from particle_field.utils import Coords

logger = logging.getLogger(__name__)


class Mode(Enum):
    """
    Interaction mode derived from the hands in a frame.
    """

    NONE = "none"
    REPEL = "repel"
    ATTRACT = "attract"
    EXPLOSION = "explosion"

    @property
    def is_gesture(self) -> bool:
        """
        Whether the mode is an active gesture (anything but NONE).
        """
        return self is not Mode.NONE

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GestureResult:
    """
    This class represents the result of classifying one hand observation.
    """

    mode: Mode
    """The interaction mode for the frame."""

    fingertip: Optional[Coords] = None
    """
    Index fingertip of the first hand in canvas coordinates (not mirrored).
    This field is not None whenever at least one hand is present, regardless of the mode.
    """

    midpoint: Optional[Coords] = None
    """
    Midpoint of the two wrists in mirrored canvas coordinates.
    This field is not None only when exactly two hands are present.
    """

    hand_count: int = 0
    """Number of well-formed hands in the observation."""

    @property
    def hand_detected(self) -> bool:
        return self.fingertip is not None


NO_HANDS = GestureResult(Mode.NONE)
"""This constant represents the case where no hand is found in the observation."""


class GestureClassifier:
    """
    Maps the hands of one frame to an interaction mode.

    Priority, first match wins:
    two hands far enough apart -> EXPLOSION, one open palm -> REPEL,
    one fist -> ATTRACT, anything else -> NONE.
    Classification is a pure function of the observation; edge detection of the
    explosion is done by the transition controller.
    """

    def __init__(self, width: float = CanvasConfig.WIDTH, height: float = CanvasConfig.HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.two_hand_min_distance = GestureConfig.TWO_HAND_MIN_WRIST_DISTANCE
        self.open_palm_threshold = GestureConfig.OPEN_PALM_THRESHOLD
        self.fist_threshold = GestureConfig.FIST_THRESHOLD

    def classify(self, observation: Sequence[Sequence[Landmark]]) -> GestureResult:
        """
        Classify the hands detected in a frame.

        :param observation: The hands in detection order; malformed hands are ignored.
        """
        hands = well_formed_hands(observation)

        if len(hands) == 0:
            return NO_HANDS

        fingertip = hands[0][HandLandmark.INDEX_FINGER_TIP].scaled(self.width, self.height)

        midpoint = None
        if len(hands) == 2:
            midpoint = self.wrist_midpoint(hands[0], hands[1])

        return GestureResult(self.detect_mode(hands), fingertip, midpoint, len(hands))

    def detect_mode(self, hands: Sequence[Hand]) -> Mode:
        """
        Return the mode for a list of well-formed hands.
        """
        if self.are_two_hands(hands):
            return Mode.EXPLOSION

        if len(hands) == 1:
            if self.is_open_palm(hands[0]):
                return Mode.REPEL
            if self.is_fist(hands[0]):
                return Mode.ATTRACT

        return Mode.NONE

    def are_two_hands(self, hands: Sequence[Hand]) -> bool:
        """
        Exactly two hands whose wrists are far enough apart.
        The distance floor rejects a single hand detected twice.
        """
        if len(hands) != 2:
            return False

        wrist1 = hands[0][HandLandmark.WRIST]
        wrist2 = hands[1][HandLandmark.WRIST]
        return wrist1.distance_to(wrist2) > self.two_hand_min_distance

    def is_open_palm(self, hand: Hand) -> bool:
        """
        All fingertips are far from the palm center.
        """
        return all(d > self.open_palm_threshold for d in fingertip_distances(hand))

    def is_fist(self, hand: Hand) -> bool:
        """
        All fingertips are close to the palm center.
        """
        return all(d < self.fist_threshold for d in fingertip_distances(hand))

    def wrist_midpoint(self, hand1: Hand, hand2: Hand) -> Coords:
        """
        Midpoint of the two wrists in mirrored canvas coordinates.
        """
        wrist1 = hand1[HandLandmark.WRIST]
        wrist2 = hand2[HandLandmark.WRIST]
        return wrist1.midpoint(wrist2).scaled(self.width, self.height).mirrored(self.width)
