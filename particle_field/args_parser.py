import argparse

from .config import CameraConfig, CanvasConfig, ParticleConfig

particle_parser = argparse.ArgumentParser(
    description="Particle Field, a webcam-driven particle visualization"
)

particle_parser.add_argument(
    "--camera",
    help="Camera port to capture from.",
    type=int,
    default=CameraConfig.DEFAULT_PORT,
)
particle_parser.add_argument(
    "--width",
    help="Canvas width in pixels.",
    type=int,
    default=CanvasConfig.WIDTH,
)
particle_parser.add_argument(
    "--height",
    help="Canvas height in pixels.",
    type=int,
    default=CanvasConfig.HEIGHT,
)
particle_parser.add_argument(
    "--particles",
    help="Nominal number of particles.",
    type=int,
    default=ParticleConfig.MAX_PARTICLES,
)
particle_parser.add_argument(
    "--seed",
    help="Seed for the particle random generator.",
    type=int,
    default=None,
)

particle_parser.add_argument(
    "--no-tracking",
    help="Run without hand tracking (particles drift only).",
    action="store_true",
    default=False,
)
particle_parser.add_argument(
    "--headless-frames",
    help="Run N frames without a camera or window and exit.",
    type=int,
    default=0,
)

particle_parser.add_argument(
    "--debug",
    help="Enable debug logging.",
    action="store_true",
    default=False,
)

get_args = particle_parser.parse_args
