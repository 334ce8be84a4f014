"""
Particle Field - Webcam-driven particle visualization with hand tracking.

This is the main entry point: it wires the camera, the background hand tracker,
the particle engine and the renderer together and runs the render loop.
"""

import logging
import signal
import threading
import time

import cv2 as cv

from particle_field.args_parser import get_args
from particle_field.config import UIConfig
from particle_field.core import CameraUnavailable, TrackingWorker, setup_camera
from particle_field.simulation import ParticleEngine
from particle_field.ui import ParticleRenderer

logger = logging.getLogger(__name__)


def configure_logging(debug=False):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_tracking_worker(stop_event):
    """
    Create and start the hand tracking worker.

    Args:
        stop_event (threading.Event): Event for coordinated shutdown

    Returns:
        TrackingWorker or None: The running worker, or None if tracking is unavailable
    """
    from particle_field.detection.hand_tracker import HandTracker, TrackingUnavailable

    try:
        tracker = HandTracker()
    except TrackingUnavailable as e:
        logger.error(f"Hand tracking unavailable, running without gestures: {e}")
        return None

    worker = TrackingWorker(tracker, stop_event=stop_event)
    worker.start()
    return worker


def setup_signal_handler(stop_event):
    """
    Stop the render loop on Ctrl+C.
    """
    def signal_handler(sig, frame):
        logger.info("Signal received, shutting down...")
        stop_event.set()

    signal.signal(signal.SIGINT, signal_handler)


def handle_keyboard_input(waitkey, stop_event, engine):
    """
    Apply the key pressed in the window: q or Esc quits, r scatters the particles again.

    Returns:
        bool: False once the user asked to quit
    """
    # Quit
    if waitkey == 27 or waitkey == ord('q'):
        logger.info('Exiting...')
        stop_event.set()
        return False

    # Scatter the particles again
    if waitkey == ord('r'):
        logger.info("Particle pool reset by user")
        engine.pool.reset()

    return True


def run_headless(engine, frames):
    """
    Advance the simulation without camera or window (no hands present).

    Args:
        engine (ParticleEngine): Simulation to run
        frames (int): Number of frames to simulate
    """
    logger.info(f"Running {frames} headless frames")
    start = time.time()
    for _ in range(frames):
        engine.step()
    elapsed = time.time() - start
    logger.info(f"Simulated {frames} frames in {elapsed:.2f}s ({frames / max(elapsed, 1e-9):.1f} FPS)")
    return engine.debug_snapshot()


def run(args):
    """
    Main render loop.

    Args:
        args (argparse.Namespace): Parsed command line arguments
    """
    stop_event = threading.Event()

    if args.headless_frames > 0:
        engine = ParticleEngine(args.width, args.height, args.particles, seed=args.seed)
        return run_headless(engine, args.headless_frames)

    setup_signal_handler(stop_event)

    worker = None if args.no_tracking else create_tracking_worker(stop_event)
    engine = ParticleEngine(
        args.width,
        args.height,
        args.particles,
        seed=args.seed,
        observations=worker.observations if worker is not None else None,
    )
    renderer = ParticleRenderer(args.width, args.height)
    try:
        cap = setup_camera(args.camera, args.width, args.height, stop_event=stop_event)
    except CameraUnavailable as e:
        logger.error(str(e))
        stop_event.set()
        if worker is not None:
            worker.stop()
        return None

    cv.namedWindow(UIConfig.WINDOW_NAME, cv.WINDOW_NORMAL)

    try:
        while not stop_event.is_set():
            fresh, frame = cap.read()
            if fresh and worker is not None:
                worker.submit(frame)

            particle_frame = engine.step(tracker_ready=worker is not None and worker.ready)
            image = renderer.render(particle_frame, frame, engine.debug_snapshot())

            cv.imshow(UIConfig.WINDOW_NAME, image)
            waitkey = cv.waitKey(1) & 0xFF
            if not handle_keyboard_input(waitkey, stop_event, engine):
                break
    finally:
        stop_event.set()
        if worker is not None:
            worker.stop()
        cap.release()
        cv.destroyAllWindows()
        logger.info("Shutdown complete")

    return engine.debug_snapshot()


def main():
    args = get_args()
    configure_logging(args.debug)
    run(args)


if __name__ == '__main__':
    main()
