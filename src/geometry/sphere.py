# geometry/sphere.py
import math
from typing import Optional, Tuple
from core.vector import Vector3
from core.ray import Ray
from core.aabb import AABB
from geometry.hittable import Hittable, HitRecord

class Sphere(Hittable):
    """
    A sphere whose center moves linearly from center to center_end between
    time_start and time_end. With no center_end the sphere is static.
    """
    def __init__(self, center: Vector3, radius: float, material,
                 center_end: Optional[Vector3] = None,
                 time_start: float = 0.0, time_end: float = 1.0):
        self.center_start = center
        self.center_end = center if center_end is None else center_end
        self.radius = radius
        self.material = material
        self.time_start = time_start
        self.time_end = time_end

    @classmethod
    def moving(cls, center_start: Vector3, center_end: Vector3, radius: float, material,
               time_start: float = 0.0, time_end: float = 1.0) -> "Sphere":
        return cls(center_start, radius, material, center_end, time_start, time_end)

    def center(self, time: float) -> Vector3:
        if self.center_end == self.center_start or self.time_end == self.time_start:
            return self.center_start
        fraction = (time - self.time_start) / (self.time_end - self.time_start)
        return self.center_start + (self.center_end - self.center_start) * fraction

    @staticmethod
    def get_sphere_uv(p: Vector3) -> Tuple[float, float]:
        """
        Texture coordinates of a point on the unit sphere centered at the origin.

        u in [0, 1] is the angle around the Y axis starting at X=-1,
        v in [0, 1] is the angle from Y=-1 up to Y=+1.
        """
        theta = math.acos(max(-1.0, min(1.0, -p.y)))
        phi = math.atan2(-p.z, p.x) + math.pi
        return phi / (2 * math.pi), theta / math.pi

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        center = self.center(ray.time)
        oc = ray.origin - center
        a = ray.direction.length_squared()
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        if a == 0 or discriminant < 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (-half_b - sqrt_disc) / a
        if root < t_min or root > t_max:
            root = (-half_b + sqrt_disc) / a
            if root < t_min or root > t_max:
                return None

        p = ray.at(root)
        outward_normal = (p - center) / self.radius
        u, v = self.get_sphere_uv(outward_normal)
        return HitRecord.from_outward_normal(ray, root, p, outward_normal, u, v, self.material)

    def _box_at(self, center: Vector3) -> AABB:
        # A negative radius (hollow glass) flips the normal, not the extent.
        r = abs(self.radius)
        offset = Vector3(r, r, r)
        return AABB(center - offset, center + offset)

    def bounding_box(self, time_start: float, time_end: float) -> AABB:
        # The box covers the whole path of the center, whatever interval is asked.
        return AABB.surrounding_box(self._box_at(self.center_start),
                                    self._box_at(self.center_end))
