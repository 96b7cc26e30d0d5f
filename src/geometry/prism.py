# geometry/prism.py
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.aabb import AABB
from geometry.hittable import Hittable, HitRecord
from geometry.rectangle import XYRect, XZRect, YZRect
from geometry.world import HittableList

class RectangularPrism(Hittable):
    """
    A solid axis-aligned box made of its six faces, given two opposite corners.
    """
    def __init__(self, box_min: Vector3, box_max: Vector3, material):
        self.box_min = box_min
        self.box_max = box_max
        self.sides = HittableList([
            XYRect(box_min.x, box_max.x, box_min.y, box_max.y, box_max.z, material),
            XYRect(box_min.x, box_max.x, box_min.y, box_max.y, box_min.z, material),
            XZRect(box_min.x, box_max.x, box_min.z, box_max.z, box_max.y, material),
            XZRect(box_min.x, box_max.x, box_min.z, box_max.z, box_min.y, material),
            YZRect(box_min.y, box_max.y, box_min.z, box_max.z, box_max.x, material),
            YZRect(box_min.y, box_max.y, box_min.z, box_max.z, box_min.x, material),
        ])

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        return self.sides.hit(ray, t_min, t_max, rng)

    def bounding_box(self, time_start: float, time_end: float) -> AABB:
        # Already a solid volume, no padding.
        return AABB(self.box_min, self.box_max)
