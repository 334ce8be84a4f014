"""
Tests for the palm-relative gesture classifier.
"""

import pytest

from particle_field.detection import NO_HANDS, GestureClassifier, HandLandmark, Mode, make_hand
from particle_field.detection.landmarks import fingertip_distances, palm_center
from particle_field.utils import Coords


@pytest.fixture
def classifier():
    return GestureClassifier(640, 480)


def test_synthetic_hand_geometry(hand_factory):
    """The builder puts the palm center and fingertips where it says."""
    hand = hand_factory(center=(0.4, 0.6), fingertip_distances=0.3)

    assert palm_center(hand).x == pytest.approx(0.4)
    assert palm_center(hand).y == pytest.approx(0.6)
    assert fingertip_distances(hand) == pytest.approx([0.3] * 5)


def test_no_hands(classifier):
    assert classifier.classify(()) == NO_HANDS
    assert not NO_HANDS.hand_detected


def test_open_palm_is_repel(classifier, hand_factory):
    result = classifier.classify((hand_factory(fingertip_distances=0.3),))

    assert result.mode is Mode.REPEL
    assert result.hand_count == 1
    assert result.midpoint is None


def test_fist_is_attract(classifier, hand_factory):
    result = classifier.classify((hand_factory(fingertip_distances=0.05),))
    assert result.mode is Mode.ATTRACT


def test_mixed_hand_is_none(classifier, hand_factory):
    """Some fingers extended, some curled."""
    hand = hand_factory(fingertip_distances=[0.3, 0.3, 0.05, 0.05, 0.05])
    result = classifier.classify((hand,))

    assert result.mode is Mode.NONE
    assert result.hand_detected


def test_between_thresholds_is_none(classifier, hand_factory):
    """Every fingertip between the fist and open palm thresholds."""
    result = classifier.classify((hand_factory(fingertip_distances=0.135),))
    assert result.mode is Mode.NONE


def test_two_hands_apart_is_explosion(classifier, hand_factory):
    left = hand_factory(center=(0.4, 0.5), fingertip_distances=0.05)
    right = hand_factory(center=(0.6, 0.5), fingertip_distances=0.3)

    result = classifier.classify((left, right))

    assert result.mode is Mode.EXPLOSION
    assert result.hand_count == 2

    # Wrists at (0.4, 0.55) and (0.6, 0.55): midpoint (0.5, 0.55), mirrored on a 640 canvas
    assert result.midpoint.x == pytest.approx(640 - 0.5 * 640)
    assert result.midpoint.y == pytest.approx(0.55 * 480)


def test_two_hands_too_close_is_not_explosion(classifier, hand_factory):
    """A wrist distance of 0.05 is a double detection of one hand."""
    first = hand_factory(center=(0.475, 0.5), fingertip_distances=0.3)
    second = hand_factory(center=(0.525, 0.5), fingertip_distances=0.3)

    result = classifier.classify((first, second))

    assert result.mode is Mode.NONE
    assert result.midpoint is not None


def test_more_than_two_hands_is_none(classifier, hand_factory):
    hands = tuple(hand_factory(center=(0.2 + 0.3 * i, 0.5)) for i in range(3))
    assert classifier.classify(hands).mode is Mode.NONE


def test_fingertip_comes_from_first_hand(classifier, hand_factory):
    first = hand_factory(center=(0.3, 0.5), fingertip_distances=0.3)
    second = hand_factory(center=(0.7, 0.5), fingertip_distances=0.3)

    result = classifier.classify((first, second))

    tip = first[HandLandmark.INDEX_FINGER_TIP]
    assert result.fingertip.x == pytest.approx(tip.x * 640)
    assert result.fingertip.y == pytest.approx(tip.y * 480)


def test_fingertip_present_for_ambiguous_hand(classifier, hand_factory):
    hand = hand_factory(fingertip_distances=[0.3, 0.05, 0.3, 0.05, 0.3])
    result = classifier.classify((hand,))

    assert result.mode is Mode.NONE
    assert result.fingertip is not None


def test_classification_is_deterministic(classifier, hand_factory):
    observation = (hand_factory(fingertip_distances=0.3),)
    assert classifier.classify(observation) == classifier.classify(observation)


def test_malformed_hand_is_ignored(classifier, hand_factory):
    """A hand with fewer than 21 landmarks counts as no hand."""
    truncated = hand_factory(fingertip_distances=0.3)[:10]

    assert classifier.classify((truncated,)) == NO_HANDS

    # The well-formed hand still counts on its own
    result = classifier.classify((truncated, hand_factory(fingertip_distances=0.05)))
    assert result.mode is Mode.ATTRACT
    assert result.hand_count == 1


def test_make_hand_accepts_pairs_and_points():
    class Point:
        def __init__(self, x, y):
            self.x, self.y = x, y

    from_pairs = make_hand([(0.1, 0.2)] * 21)
    from_points = make_hand([Point(0.1, 0.2)] * 21)

    assert from_pairs == from_points
    assert from_pairs[0] == Coords(0.1, 0.2)


def test_invalid_canvas_rejected():
    with pytest.raises(ValueError):
        GestureClassifier(0, 480)
