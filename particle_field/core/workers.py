"""
Background worker thread for hand tracking.

The tracker runs at its own pace, decoupled from the render clock. The main loop
feeds it the latest camera frame and the worker publishes each observation into
a single-slot mailbox that the simulation reads once per frame.
"""

import logging
import queue
import threading

from particle_field.config import WorkerConfig
from particle_field.detection import HandObservation
from particle_field.utils import LatestValue

logger = logging.getLogger(__name__)


class TrackingWorker(threading.Thread):
    """
    Background worker thread for hand tracking.

    This worker processes camera frames asynchronously to detect hands
    without blocking the render loop. A frame that cannot be processed
    publishes nothing, so readers keep the last good observation.
    """

    def __init__(self, tracker, stop_event=None, queue_maxsize=WorkerConfig.TRACKING_QUEUE_MAXSIZE):
        """
        Initialize the tracking worker thread.

        Args:
            tracker: Object with a `process(frame) -> HandObservation` method
            stop_event: Event to signal thread shutdown
            queue_maxsize (int): Maximum number of pending frames
        """
        super().__init__(daemon=True, name="TrackingWorker")
        self.tracker = tracker
        self.in_queue = queue.Queue(maxsize=queue_maxsize)
        self.observations: LatestValue[HandObservation] = LatestValue()
        self.stop_event = stop_event if stop_event is not None else threading.Event()
        self._ready = threading.Event()

        logger.info("TrackingWorker initialized")

    @property
    def ready(self) -> bool:
        """Whether the tracker has processed at least one frame."""
        return self._ready.is_set()

    def submit(self, frame):
        """
        Hand the latest frame to the worker (non-blocking).
        If a frame is still pending it is dropped in favour of the new one.

        Args:
            frame: BGR camera frame

        Returns:
            bool: True if the frame was queued
        """
        try:
            self.in_queue.put_nowait(frame)
            return True
        except queue.Full:
            try:
                _ = self.in_queue.get_nowait()
            except queue.Empty:
                pass
            try:
                self.in_queue.put_nowait(frame)
                return True
            except queue.Full:
                return False

    def run(self):
        """Main worker loop - processes frames from queue."""
        logger.info("TrackingWorker started")

        while not self.stop_event.is_set():
            try:
                frame = self.in_queue.get(timeout=WorkerConfig.QUEUE_TIMEOUT)
            except queue.Empty:
                continue

            try:
                observation = self.tracker.process(frame)
            except Exception as e:
                logger.error(f"Hand tracking error: {e}")
                continue

            self.observations.publish(observation)

            if not self._ready.is_set():
                self._ready.set()
                logger.info("Hand tracker ready")

        close = getattr(self.tracker, "close", None)
        if close is not None:
            close()
        logger.info("TrackingWorker stopped")

    def stop(self):
        """Signal the worker to stop and wait for it to exit."""
        logger.info("Stopping TrackingWorker...")
        self.stop_event.set()
        if self.is_alive():
            self.join(timeout=WorkerConfig.THREAD_SHUTDOWN_TIMEOUT)
