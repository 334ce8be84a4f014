"""
Core Module - Background workers.

This module contains the background threads of the application:
- Hand tracking worker publishing into a latest-value mailbox (workers.py)
- Camera capture thread (camera_thread.py)
"""

from .camera_thread import CameraFeed, CameraUnavailable, setup_camera
from .workers import TrackingWorker

__all__ = [
    'CameraFeed',
    'CameraUnavailable',
    'setup_camera',
    'TrackingWorker',
]
