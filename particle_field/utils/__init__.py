from .coords import Coords
from .mailbox import LatestValue
from .scalar import clamp, lerp, map_range

__all__ = ["Coords", "LatestValue", "clamp", "lerp", "map_range"]
