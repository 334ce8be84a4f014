"""
Webcam capture on a background thread.

The capture thread publishes every frame into a LatestValue mailbox so the
render loop never blocks on the camera and always sees the newest image.
"""

import logging
import threading
import time

import cv2 as cv

from particle_field.config import CameraConfig
from particle_field.utils import LatestValue

logger = logging.getLogger(__name__)


class CameraUnavailable(RuntimeError):
    """Raised when the webcam cannot be opened."""


class CameraFeed(threading.Thread):
    """
    Reads frames from a VideoCapture-like object and keeps only the latest one.
    """

    def __init__(self, cap, frames=None, stop_event=None):
        super().__init__(name="CameraFeed", daemon=True)
        self.cap = cap
        self.frames = frames if frames is not None else LatestValue()
        self.stop_event = stop_event if stop_event is not None else threading.Event()
        self._last_version = 0

    def run(self):
        logger.info("Camera feed started")
        while not self.stop_event.is_set():
            ok, frame = self.cap.read()
            if not ok or frame is None:
                time.sleep(CameraConfig.RETRY_DELAY)
                continue
            self.frames.publish(frame)
        logger.info("Camera feed stopped")

    def wait_for_first_frame(self, timeout=CameraConfig.FIRST_FRAME_TIMEOUT):
        deadline = time.time() + timeout
        while self.frames.version == 0 and time.time() < deadline:
            time.sleep(0.01)

        if self.frames.version == 0:
            logger.warning("Camera feed started but no frame captured yet")
            return False
        return True

    def read(self):
        """
        Non-blocking read of the newest frame.

        Returns:
            tuple: (fresh, frame) where `fresh` is False when no frame arrived since
            the previous read. `frame` is None until the first capture.
        """
        frame, version = self.frames.snapshot()
        fresh = version != self._last_version
        self._last_version = version
        return fresh, frame

    def release(self):
        self.stop_event.set()
        if self.is_alive():
            self.join(timeout=1.0)
        self.cap.release()


def setup_camera(cam_port, width, height, stop_event=None):
    """
    Open the webcam, request the canvas resolution and start the capture thread.

    Raises:
        CameraUnavailable: If the device cannot be opened
    """
    logger.info(f"Setting up camera on port {cam_port}")

    cap = cv.VideoCapture(cam_port)
    if not cap.isOpened():
        raise CameraUnavailable(f"Could not open camera on port {cam_port}")

    cap.set(cv.CAP_PROP_BUFFERSIZE, CameraConfig.BUFFER_SIZE)
    cap.set(cv.CAP_PROP_FPS, CameraConfig.TARGET_FPS)
    cap.set(cv.CAP_PROP_FRAME_WIDTH, width)
    cap.set(cv.CAP_PROP_FRAME_HEIGHT, height)
    logger.info(
        f"Camera configured: {cap.get(cv.CAP_PROP_FRAME_WIDTH):.0f}x"
        f"{cap.get(cv.CAP_PROP_FRAME_HEIGHT):.0f} @ {cap.get(cv.CAP_PROP_FPS):.1f}fps"
    )

    feed = CameraFeed(cap, stop_event=stop_event)
    feed.start()
    feed.wait_for_first_frame()
    return feed
