# geometry/rectangle.py
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.aabb import AABB
from geometry.hittable import Hittable, HitRecord

# Half-thickness given to flat rectangles along their fixed axis.
RECT_PAD = 0.0001


class AxisAlignedRect(Hittable):
    """
    A rectangle lying in the plane `axis k == k`, spanning [a0, a1] on the
    first in-plane axis and [b0, b1] on the second.

    Subclasses fix the three axis indices.
    """
    k_axis = 2
    a_axis = 0
    b_axis = 1

    def __init__(self, a0: float, a1: float, b0: float, b1: float, k: float, material):
        self.a0, self.a1 = a0, a1
        self.b0, self.b1 = b0, b1
        self.k = k
        self.material = material
        normal = [0.0, 0.0, 0.0]
        normal[self.k_axis] = 1.0
        self.outward_normal = Vector3(*normal)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        d_k = ray.direction[self.k_axis]
        if d_k == 0:
            # Parallel to the plane.
            return None
        t = (self.k - ray.origin[self.k_axis]) / d_k
        if t < t_min or t > t_max:
            return None
        a = ray.origin[self.a_axis] + t * ray.direction[self.a_axis]
        b = ray.origin[self.b_axis] + t * ray.direction[self.b_axis]
        if a < self.a0 or a > self.a1 or b < self.b0 or b > self.b1:
            return None
        u = (a - self.a0) / (self.a1 - self.a0)
        v = (b - self.b0) / (self.b1 - self.b0)
        return HitRecord.from_outward_normal(ray, t, ray.at(t), self.outward_normal,
                                             u, v, self.material)

    def _point(self, a: float, b: float) -> Vector3:
        coords = [0.0, 0.0, 0.0]
        coords[self.a_axis] = a
        coords[self.b_axis] = b
        coords[self.k_axis] = self.k
        return Vector3(*coords)

    def bounding_box(self, time_start: float, time_end: float) -> AABB:
        flat = AABB(self._point(self.a0, self.b0), self._point(self.a1, self.b1))
        return flat.padded(RECT_PAD)


class XYRect(AxisAlignedRect):
    """Rectangle in the plane z = k."""
    k_axis, a_axis, b_axis = 2, 0, 1


class XZRect(AxisAlignedRect):
    """Rectangle in the plane y = k."""
    k_axis, a_axis, b_axis = 1, 0, 2


class YZRect(AxisAlignedRect):
    """Rectangle in the plane x = k."""
    k_axis, a_axis, b_axis = 0, 1, 2
