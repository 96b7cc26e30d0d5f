# geometry/hittable.py
import math
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.aabb import AABB

class HitRecord:
    """
    Records details of a ray-object intersection.

    Records are built once per successful test and never modified; wrappers
    such as Translate and RotateY build a new record instead.
    """
    __slots__ = ("t", "p", "normal", "u", "v", "front_face", "material")

    def __init__(self, t: float, p: Vector3, normal: Vector3, u: float = 0.0,
                 v: float = 0.0, front_face: bool = True, material=None):
        self.t = t                    # Ray parameter at intersection
        self.p = p                    # Intersection point
        self.normal = normal          # Surface normal, facing against the ray
        self.u = u
        self.v = v
        self.front_face = front_face  # Whether the ray hit the outside
        self.material = material

    @classmethod
    def from_outward_normal(cls, ray: Ray, t: float, p: Vector3, outward_normal: Vector3,
                            u: float, v: float, material) -> "HitRecord":
        """
        Orients the normal against the ray: front_face is True when the ray
        direction and the outward normal point into opposite half-spaces.
        """
        front_face = ray.direction.dot(outward_normal) < 0
        normal = outward_normal if front_face else -outward_normal
        return cls(t, p, normal, u, v, front_face, material)

    def __repr__(self) -> str:
        return f"HitRecord(t={self.t}, p={self.p}, normal={self.normal}, front_face={self.front_face})"


class Hittable:
    """
    Abstract class for objects that can be hit by a ray.

    rng is an optional random source for stochastic objects (participating
    media); aggregates forward it to their children.
    """
    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self, time_start: float, time_end: float) -> Optional[AABB]:
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")


class Translate(Hittable):
    """Moves the wrapped object by a fixed offset."""
    def __init__(self, hittable: Hittable, offset: Vector3):
        self.hittable = hittable
        self.offset = offset

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        moved = Ray(ray.origin - self.offset, ray.direction, ray.time)
        rec = self.hittable.hit(moved, t_min, t_max, rng)
        if rec is None:
            return None
        # Translation leaves directions alone, so the normal and face flag carry over.
        return HitRecord(rec.t, rec.p + self.offset, rec.normal, rec.u, rec.v,
                         rec.front_face, rec.material)

    def bounding_box(self, time_start: float, time_end: float) -> Optional[AABB]:
        box = self.hittable.bounding_box(time_start, time_end)
        if box is None:
            return None
        return box.translated(self.offset)


class RotateY(Hittable):
    """
    Rotates the wrapped object by angle degrees about the Y axis.
    """
    def __init__(self, hittable: Hittable, angle: float):
        self.hittable = hittable
        radians = math.radians(angle)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)
        self.box = self._rotated_box(hittable.bounding_box(0.0, 1.0))

    def _rotated_box(self, box: Optional[AABB]) -> Optional[AABB]:
        if box is None:
            return None
        lo = [math.inf] * 3
        hi = [-math.inf] * 3
        for corner in box.corners():
            rotated = self._to_world(corner)
            for a in range(3):
                lo[a] = min(lo[a], rotated[a])
                hi[a] = max(hi[a], rotated[a])
        return AABB(Vector3(*lo), Vector3(*hi))

    def _to_object(self, v: Vector3) -> Vector3:
        return Vector3(self.cos_theta * v.x - self.sin_theta * v.z,
                       v.y,
                       self.sin_theta * v.x + self.cos_theta * v.z)

    def _to_world(self, v: Vector3) -> Vector3:
        return Vector3(self.cos_theta * v.x + self.sin_theta * v.z,
                       v.y,
                       -self.sin_theta * v.x + self.cos_theta * v.z)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        rotated = Ray(self._to_object(ray.origin), self._to_object(ray.direction), ray.time)
        rec = self.hittable.hit(rotated, t_min, t_max, rng)
        if rec is None:
            return None
        # Rotation preserves the sign of dot(direction, normal): front_face is unchanged.
        return HitRecord(rec.t, self._to_world(rec.p), self._to_world(rec.normal),
                         rec.u, rec.v, rec.front_face, rec.material)

    def bounding_box(self, time_start: float, time_end: float) -> Optional[AABB]:
        return self.box
