from dataclasses import dataclass
from typing import ClassVar, Tuple


@dataclass(frozen=True)
class Coords:
    """
    An immutable 2D point or vector.
    Hand landmarks use it with normalized [0, 1] values; the simulation uses it
    with canvas pixels. Convert between the two with `scaled`.
    """

    x: float
    "Horizontal component."
    y: float
    "Vertical component (grows downwards)."

    ZERO: ClassVar["Coords"]
    "The origin."

    @property
    def coords(self) -> Tuple[float, float]:
        return self.x, self.y

    def distance_to(self, other: "Coords") -> float:
        return (self - other).length()

    def length(self) -> float:
        return float((self.x * self.x + self.y * self.y) ** 0.5)

    def midpoint(self, other: "Coords") -> "Coords":
        return Coords((self.x + other.x) / 2, (self.y + other.y) / 2)

    def scaled(self, width: float, height: float) -> "Coords":
        """
        Map a normalized point onto a canvas of the given size.
        """
        return Coords(self.x * width, self.y * height)

    def mirrored(self, width: float) -> "Coords":
        """
        Flip the point horizontally on a canvas of the given width.
        The webcam image is shown mirrored, so anything drawn over it must be too.
        """
        return Coords(width - self.x, self.y)

    def __sub__(self, other: "Coords") -> "Coords":
        return Coords(self.x - other.x, self.y - other.y)

    def __str__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f})"


Coords.ZERO = Coords(0, 0)
