"""
Configuration module for Particle Field.

This module contains all configuration parameters and constants used throughout the application.
Centralizing configuration makes it easier to tune the look and feel of the simulation.

PERFORMANCE TUNING:
- For best FPS: keep CanvasConfig at 640x480 and ParticleConfig.MAX_PARTICLES modest
- Camera capture and hand tracking run on their own threads so the render loop never waits on them
"""


# ==================== Canvas Configuration ====================
class CanvasConfig:
    """Canvas dimensions used to scale normalized coordinates."""

    WIDTH = 640
    HEIGHT = 480


# ==================== Particle Configuration ====================
class ParticleConfig:
    """Particle pool sizing and per-particle randomization ranges."""

    # Nominal pool size (may be exceeded transiently by explosion bursts)
    MAX_PARTICLES = 100

    # Ranges used when a particle is (re)created
    INITIAL_VELOCITY = 1.0          # vx, vy uniform in [-1, 1]
    BASE_SPEED_RANGE = (0.5, 2.0)
    BASE_SIZE_RANGE = (3.0, 8.0)
    HUE_RANGE = (0.0, 360.0)
    INITIAL_ALPHA = 50.0

    # Size/alpha easing
    GESTURE_SIZE_MULTIPLIER = 3.0
    SIZE_EASING = 0.08
    ALPHA_EASING = 0.1
    ALPHA_RANGE = (20.0, 90.0)      # alpha mapped from motion intensity
    GESTURE_ALPHA_BOOST = 5.0
    MAX_ALPHA = 95.0

    # Integration speed multiplier mapped from motion intensity
    SPEED_MULTIPLIER_RANGE = (0.5, 3.0)

    # Explosion burst
    BURST_COUNT = 40
    BURST_JITTER = 5.0              # px around the midpoint
    BURST_SPEED_RANGE = (3.0, 7.0)
    BURST_ALPHA = 95.0

    # Idle respawn of particles stuck near the edges
    RESPAWN_PER_FRAME = 2
    EDGE_MARGIN = 20.0
    RESPAWN_MARGIN = 50.0
    RESPAWN_VELOCITY = 0.5


# ==================== Force Configuration ====================
class ForceConfig:
    """Force field constants (all in canvas pixels per frame)."""

    MOTION_INFLUENCE = 0.7

    # Repel: falls off with distance squared
    REPEL_RADIUS = 300.0
    REPEL_STRENGTH = 8.0
    REPEL_FALLOFF = 0.0005
    REPEL_MAX = 5.0

    # Attract: gravitational-style, stronger when closer
    ATTRACT_RADIUS = 300.0
    ATTRACT_STRENGTH = 2.5
    ATTRACT_FALLOFF = 0.02
    ATTRACT_MAX = 1.5

    # Explosion: fades over time and with distance
    EXPLOSION_STRENGTH = 5.0
    EXPLOSION_FALLOFF = 0.01
    EXPLOSION_MAX = 4.0

    # Minimum distance for any radial force (avoids division by ~0)
    MIN_DISTANCE = 1.0

    RECOVERY_JITTER = 0.15
    AMBIENT_JITTER = 0.05

    DAMPING = 0.95
    MAX_VELOCITY = 8.0


# ==================== Gesture Configuration ====================
class GestureConfig:
    """Thresholds for the palm-relative gesture classifier (normalized units)."""

    LANDMARKS_PER_HAND = 21

    # Wrists closer than this are treated as a double-detection of one hand
    TWO_HAND_MIN_WRIST_DISTANCE = 0.15

    OPEN_PALM_THRESHOLD = 0.15      # every fingertip farther than this -> repel
    FIST_THRESHOLD = 0.12           # every fingertip closer than this -> attract


# ==================== Motion Configuration ====================
class MotionConfig:
    """Configuration for the fingertip motion estimator."""

    # Displacement (px/frame) mapped onto intensity [0, 100]
    MAX_DISPLACEMENT = 20.0
    MAX_INTENSITY = 100.0

    # Below this displacement the direction keeps its previous value
    DIRECTION_DEADBAND = 0.1

    # Displacement that saturates the direction components to +/-1
    DIRECTION_SCALE = 10.0


# ==================== Timing Configuration ====================
class TimingConfig:
    """Durations of one-shot effects, in frames."""

    EXPLOSION_DURATION = 60
    RECOVERY_DURATION = 120


# ==================== Camera Configuration ====================
class CameraConfig:
    """Camera capture configuration parameters."""

    DEFAULT_PORT = 0

    # Camera buffer size (reduce latency)
    BUFFER_SIZE = 1

    TARGET_FPS = 30

    # Seconds to wait for the first frame from the threaded capture
    FIRST_FRAME_TIMEOUT = 2.0

    # Pause after a failed read before polling the device again
    RETRY_DELAY = 0.005


# ==================== MediaPipe Hand Detection Configuration ====================
class MediaPipeConfig:
    """Configuration for MediaPipe hand tracking."""

    MODEL_COMPLEXITY = 1
    MIN_DETECTION_CONFIDENCE = 0.5
    MIN_TRACKING_CONFIDENCE = 0.4
    MAX_NUM_HANDS = 2


# ==================== UI Configuration ====================
class UIConfig:
    """Configuration for the renderer."""

    WINDOW_NAME = "Particle Field"

    # Webcam ghost opacity (0-1)
    VIDEO_OPACITY = 60 / 255

    # Background fade per frame, mapped from motion intensity (percent)
    BACKGROUND_FADE_RANGE = (50.0, 30.0)

    # Trails
    TRAIL_LENGTH_ACTIVE = 12.0
    TRAIL_LENGTH_RANGE = (3.0, 8.0)
    TRAIL_WEIGHT_ACTIVE = 2
    TRAIL_WEIGHT_IDLE = 1

    GLOW_SCALE = 1.8

    # Mode colours as HSV (hue 0-360, saturation 0-100, value 0-100)
    MODE_COLORS = {
        "repel": (180, 80, 100),
        "attract": (30, 80, 100),
        "explosion": (0, 90, 100),
        "none": (0, 0, 60),
    }

    # Fingertip indicator (radius px, alpha percent)
    INDICATOR_RINGS = ((20, 30), (12, 60), (6, 90))
    INDICATOR_HUE = 180

    FONT_SCALE = 0.45
    FONT_THICKNESS = 1


# ==================== Worker Thread Configuration ====================
class WorkerConfig:
    """Configuration for background worker threads."""

    TRACKING_QUEUE_MAXSIZE = 1

    # Queue timeout (seconds)
    QUEUE_TIMEOUT = 0.1

    # Thread shutdown timeout (seconds)
    THREAD_SHUTDOWN_TIMEOUT = 2.0
