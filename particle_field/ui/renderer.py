"""
UI Renderer Module - Drawing functions for the particle field.

This module turns a `ParticleFrame` into an image: a fading trail canvas with
the particles, their glow and velocity trails, blended over the mirrored webcam
feed, plus the fingertip indicator and the debug overlay.
"""

import logging

import cv2 as cv
import numpy as np

from particle_field.config import UIConfig
from particle_field.utils import map_range

logger = logging.getLogger(__name__)


def hsv_to_bgr(hue, saturation, value):
    """
    Convert HSV colours (hue 0-360, saturation and value 0-100) to BGR floats.
    Accepts scalars or arrays of equal length and returns an Nx3 array.
    """
    hue = np.atleast_1d(np.asarray(hue, dtype=np.float64))
    saturation = np.broadcast_to(saturation, hue.shape)
    value = np.broadcast_to(value, hue.shape)

    hsv = np.stack(
        (
            (hue % 360) / 2,
            np.asarray(saturation) * 2.55,
            np.asarray(value) * 2.55,
        ),
        axis=-1,
    )
    hsv = np.rint(hsv).astype(np.uint8).reshape(-1, 1, 3)
    return cv.cvtColor(hsv, cv.COLOR_HSV2BGR).reshape(-1, 3).astype(np.float64)


def _point(x, y):
    return int(round(x)), int(round(y))


class ParticleRenderer:
    """
    Keeps the trail canvas between frames and draws each new frame on top of it.
    """

    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.canvas = np.zeros((height, width, 3), dtype=np.float32)

    def render(self, frame, video=None, debug=None):
        """
        Draw one frame.

        Args:
            frame (ParticleFrame): Particle state to draw
            video (numpy.ndarray): Optional BGR webcam frame (unmirrored)
            debug (DebugSnapshot): Optional debug information to overlay

        Returns:
            numpy.ndarray: BGR image of the canvas size
        """
        # More motion = weaker fade = longer trails
        fade = map_range(frame.intensity, 0, 100, *UIConfig.BACKGROUND_FADE_RANGE) / 100
        self.canvas *= 1 - fade

        self._draw_particles(frame)

        output = self.canvas
        if video is not None:
            ghost = cv.resize(cv.flip(video, 1), (self.width, self.height)).astype(np.float32)
            output = output + ghost * UIConfig.VIDEO_OPACITY
        output = np.clip(output, 0, 255).astype(np.uint8)

        if frame.fingertip is not None:
            draw_finger_indicator(output, frame.fingertip)

        if debug is not None:
            draw_debug_info(output, debug)

        return output

    def _draw_particles(self, frame):
        if len(frame) == 0:
            return

        active = frame.gesture_active
        colors = hsv_to_bgr(frame.hues, 70, 100 if active else 90)
        trail_colors = hsv_to_bgr(frame.hues, 70, 90)
        glow_colors = hsv_to_bgr(frame.hues, 50, 100)

        if active:
            trail_length = UIConfig.TRAIL_LENGTH_ACTIVE
            trail_weight = UIConfig.TRAIL_WEIGHT_ACTIVE
            trail_share = 0.7
        else:
            trail_length = map_range(frame.intensity, 0, 100, *UIConfig.TRAIL_LENGTH_RANGE)
            trail_weight = UIConfig.TRAIL_WEIGHT_IDLE
            trail_share = 0.5

        for i in range(len(frame)):
            x, y = frame.positions[i]
            vx, vy = frame.velocities[i]
            opacity = frame.alphas[i] / 100
            radius = max(1, int(frame.sizes[i] / 2))

            cv.line(
                self.canvas,
                _point(x, y),
                _point(x - vx * trail_length, y - vy * trail_length),
                (trail_colors[i] * opacity * trail_share).tolist(),
                trail_weight,
                cv.LINE_AA,
            )

            if active:
                cv.circle(
                    self.canvas,
                    _point(x, y),
                    max(1, int(radius * UIConfig.GLOW_SCALE)),
                    (glow_colors[i] * opacity * 0.25).tolist(),
                    -1,
                    cv.LINE_AA,
                )

            cv.circle(self.canvas, _point(x, y), radius, (colors[i] * opacity).tolist(), -1, cv.LINE_AA)


def draw_finger_indicator(img, fingertip):
    """
    Draw a glowing circle at the (already mirrored) fingertip position.
    """
    color = hsv_to_bgr(UIConfig.INDICATOR_HUE, 80, 100)[0].tolist()

    # Outer glow first, inner circle last
    for radius, alpha in UIConfig.INDICATOR_RINGS:
        overlay = img.copy()
        cv.circle(overlay, _point(fingertip.x, fingertip.y), radius, color, -1, cv.LINE_AA)
        cv.addWeighted(overlay, alpha / 100, img, 1 - alpha / 100, 0, dst=img)


def draw_debug_info(img, debug):
    """
    Draw hand detection status, tracker status and the current mode.
    """
    green = hsv_to_bgr(120, 70, 90)[0].tolist()
    gray = hsv_to_bgr(0, 0, 60)[0].tolist()
    red = hsv_to_bgr(0, 70, 90)[0].tolist()

    def put(text, row, color):
        cv.putText(img, text, (15, 20 + row * 15), cv.FONT_HERSHEY_SIMPLEX,
                   UIConfig.FONT_SCALE, color, UIConfig.FONT_THICKNESS, cv.LINE_AA)

    if debug.hand_detected:
        put("Hand Detected", 0, green)
    else:
        put("No Hand Detected", 0, gray)

    if debug.tracker_ready:
        put("Tracker Ready", 1, green)
    else:
        put("Loading Tracker...", 1, red)

    mode_color = hsv_to_bgr(*UIConfig.MODE_COLORS[debug.mode.value])[0].tolist()
    put(f"Mode: {debug.mode}", 2, mode_color)
    put(f"Particles: {debug.particle_count}", 3, gray)
