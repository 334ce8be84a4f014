import math

import numpy as np
import pytest

from particle_field.detection.landmarks import FINGERTIPS, HandLandmark
from particle_field.utils import Coords


def make_synthetic_hand(center=(0.5, 0.5), fingertip_distances=0.3, palm_half_length=0.05):
    """
    Build 21 normalized landmarks around a palm center.

    The wrist sits below the center and the middle finger MCP above it, so their
    midpoint is exactly `center`. Each fingertip is placed at the requested
    distance from the center (one value for all, or five values thumb..pinky).
    Every other landmark sits on the palm center.
    """
    cx, cy = center
    if isinstance(fingertip_distances, (int, float)):
        fingertip_distances = [fingertip_distances] * len(FINGERTIPS)

    hand = [Coords(cx, cy)] * 21
    hand[HandLandmark.WRIST] = Coords(cx, cy + palm_half_length)
    hand[HandLandmark.MIDDLE_FINGER_MCP] = Coords(cx, cy - palm_half_length)

    # Fan the fingers out upward, from the thumb on the left to the pinky on the right
    for k, (idx, dist) in enumerate(zip(FINGERTIPS, fingertip_distances)):
        angle = math.radians(200 + 35 * k)
        hand[idx] = Coords(cx + dist * math.cos(angle), cy + dist * math.sin(angle))

    return tuple(hand)


@pytest.fixture
def hand_factory():
    return make_synthetic_hand


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
