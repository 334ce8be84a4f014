"""
Detection Module - Hand landmarks and gesture classification.

This module provides:
- Landmark indices and hand observation types (landmarks.py)
- Palm-relative gesture classification (gesture_classifier.py)
- The MediaPipe tracking adapter (hand_tracker.py, imported on demand)
"""

from .gesture_classifier import NO_HANDS, GestureClassifier, GestureResult, Mode
from .landmarks import (
    EMPTY_OBSERVATION,
    FINGERTIPS,
    Hand,
    HandLandmark,
    HandObservation,
    Landmark,
    make_hand,
)

__all__ = [
    'GestureClassifier',
    'GestureResult',
    'Mode',
    'NO_HANDS',
    'EMPTY_OBSERVATION',
    'FINGERTIPS',
    'Hand',
    'HandLandmark',
    'HandObservation',
    'Landmark',
    'make_hand',
]
