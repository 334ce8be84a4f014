"""
Hand landmark definitions shared by the tracker and the gesture classifier.

Landmarks are normalized 2D points (x, y in [0, 1]) following the MediaPipe
hand skeleton: 21 points per hand, indexed by anatomical role.
"""

import logging
from enum import IntEnum
from typing import Iterable, Sequence, Tuple

from particle_field.config import GestureConfig
from particle_field.utils import Coords

logger = logging.getLogger(__name__)


class HandLandmark(IntEnum):
    """
    Indices of the landmarks used by the classifier.
    """

    WRIST = 0
    THUMB_TIP = 4
    INDEX_FINGER_TIP = 8
    MIDDLE_FINGER_MCP = 9
    MIDDLE_FINGER_TIP = 12
    RING_FINGER_TIP = 16
    PINKY_TIP = 20


FINGERTIPS = (
    HandLandmark.THUMB_TIP,
    HandLandmark.INDEX_FINGER_TIP,
    HandLandmark.MIDDLE_FINGER_TIP,
    HandLandmark.RING_FINGER_TIP,
    HandLandmark.PINKY_TIP,
)

Landmark = Coords
"""A normalized landmark point."""

Hand = Tuple[Landmark, ...]
"""The 21 landmarks of one detected hand."""

HandObservation = Tuple[Hand, ...]
"""All hands detected in one frame, in detection order (no identity across frames)."""

EMPTY_OBSERVATION: HandObservation = ()


def make_hand(points: Iterable) -> Hand:
    """
    Build a hand from any iterable of objects exposing `x` and `y`
    (MediaPipe landmarks, `Coords`) or of (x, y) pairs.
    """
    hand = []
    for point in points:
        if hasattr(point, "x") and hasattr(point, "y"):
            hand.append(Coords(float(point.x), float(point.y)))
        else:
            x, y = point[0], point[1]
            hand.append(Coords(float(x), float(y)))
    return tuple(hand)


def is_well_formed(hand: Sequence[Landmark]) -> bool:
    """
    Whether a hand carries the full landmark set.
    """
    return len(hand) >= GestureConfig.LANDMARKS_PER_HAND


def well_formed_hands(observation: Sequence[Sequence[Landmark]]) -> HandObservation:
    """
    Drop malformed hands from an observation, keeping detection order.
    """
    hands = tuple(tuple(hand) for hand in observation if is_well_formed(hand))
    dropped = len(observation) - len(hands)
    if dropped:
        logger.debug(f"Dropped {dropped} malformed hand(s) from observation")
    return hands


def palm_center(hand: Hand) -> Coords:
    """
    Approximate the palm center as the midpoint of the wrist and the middle finger MCP.
    """
    return hand[HandLandmark.WRIST].midpoint(hand[HandLandmark.MIDDLE_FINGER_MCP])


def fingertip_distances(hand: Hand) -> Tuple[float, ...]:
    """
    Distances of the five fingertips to the palm center (normalized units).
    """
    center = palm_center(hand)
    return tuple(hand[i].distance_to(center) for i in FINGERTIPS)
