# src/core/aabb.py
from numba import njit
from core.vector import Vector3


@njit(error_model="numpy")
def slab_hit(origin, direction, minimum, maximum, t_min, t_max):
    """
    Slab test over three axes. Tuples are (x, y, z) floats.

    error_model="numpy" makes 1.0 / 0.0 evaluate to +/-inf, so rays parallel
    to a slab propagate infinities through the interval instead of raising.
    """
    for a in range(3):
        inv_d = 1.0 / direction[a]
        t0 = (minimum[a] - origin[a]) * inv_d
        t1 = (maximum[a] - origin[a]) * inv_d
        if inv_d < 0.0:
            t0, t1 = t1, t0
        if t0 > t_min:
            t_min = t0
        if t1 < t_max:
            t_max = t1
        if t_max <= t_min:
            return False
    return True


class AABB:
    """
    Axis-aligned bounding box. minimum <= maximum holds on every axis.
    """
    __slots__ = ("minimum", "maximum", "_min", "_max")

    def __init__(self, minimum: Vector3, maximum: Vector3):
        self.minimum = minimum
        self.maximum = maximum
        # Cached float tuples for the compiled slab test.
        self._min = minimum.as_tuple()
        self._max = maximum.as_tuple()

    def __getstate__(self):
        return (self.minimum, self.maximum)

    def __setstate__(self, state):
        self.__init__(*state)

    def hit(self, ray, t_min: float, t_max: float) -> bool:
        return slab_hit(ray.origin.as_tuple(), ray.direction.as_tuple(),
                        self._min, self._max, float(t_min), float(t_max))

    def padded(self, delta: float = 0.0001) -> "AABB":
        """
        Returns a box grown by delta on every axis thinner than delta, so flat
        primitives keep a non-zero slab on their perpendicular axis.
        """
        lo = list(self.minimum)
        hi = list(self.maximum)
        for a in range(3):
            if hi[a] - lo[a] < delta:
                lo[a] -= delta
                hi[a] += delta
        return AABB(Vector3(*lo), Vector3(*hi))

    def translated(self, offset: Vector3) -> "AABB":
        return AABB(self.minimum + offset, self.maximum + offset)

    def corners(self):
        for x in (self.minimum.x, self.maximum.x):
            for y in (self.minimum.y, self.maximum.y):
                for z in (self.minimum.z, self.maximum.z):
                    yield Vector3(x, y, z)

    def contains_box(self, other: "AABB") -> bool:
        return all(self.minimum[a] <= other.minimum[a] and other.maximum[a] <= self.maximum[a]
                   for a in range(3))

    def __eq__(self, other) -> bool:
        if not isinstance(other, AABB):
            return NotImplemented
        return self.minimum == other.minimum and self.maximum == other.maximum

    __hash__ = None

    def __repr__(self) -> str:
        return f"AABB(min={self.minimum}, max={self.maximum})"

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        return AABB(Vector3.component_min(box0.minimum, box1.minimum),
                    Vector3.component_max(box0.maximum, box1.maximum))
