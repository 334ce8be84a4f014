"""
Particle Field - Webcam-driven particle visualization with hand tracking.

A hand-tracking signal (fingertip position, gesture classification) perturbs a
2D particle field with repel, attract, explosion and ambient drift forces.

Main components:
- config: Centralized configuration
- detection: Landmarks, gesture classification, MediaPipe hand tracking
- simulation: Motion estimation, mode transitions, force field, particle pool
- core: Background tracking worker and threaded camera capture
- ui: OpenCV rendering of the particle frame
"""

__version__ = "1.0.0"
