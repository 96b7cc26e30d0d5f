# core/ray.py
from core.vector import Vector3

class Ray:
    """
    A ray in 3D space with an origin, a direction (not necessarily unit
    length) and the time at which it was cast, used by moving geometry.
    """
    __slots__ = ("origin", "direction", "time")

    def __init__(self, origin: Vector3, direction: Vector3, time: float = 0.0):
        self.origin = origin
        self.direction = direction
        self.time = time

    def at(self, t: float) -> Vector3:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t

    def __getstate__(self):
        return (self.origin, self.direction, self.time)

    def __setstate__(self, state):
        self.origin, self.direction, self.time = state

    def __repr__(self) -> str:
        return f"Ray({self.origin}, {self.direction}, time={self.time})"
