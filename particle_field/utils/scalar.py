"""
Scalar helpers shared by the simulation and the renderer.
"""


def clamp(value, vmin, vmax):
    return max(vmin, min(vmax, value))


def lerp(a, b, t):
    return a + (b - a) * t


def map_range(value, in_min, in_max, out_min, out_max):
    """
    Linearly re-map a value from one range to another (no clamping).
    Works on scalars and numpy arrays alike.
    """
    return out_min + (value - in_min) * (out_max - out_min) / (in_max - in_min)
