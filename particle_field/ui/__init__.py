"""
UI Module - Rendering of the particle field.

This module provides:
- The trail canvas renderer
- Fingertip indicator and debug overlay drawing
"""

from .renderer import ParticleRenderer, draw_debug_info, draw_finger_indicator, hsv_to_bgr

__all__ = [
    'ParticleRenderer',
    'draw_debug_info',
    'draw_finger_indicator',
    'hsv_to_bgr',
]
