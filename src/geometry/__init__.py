# geometry/__init__.py
"""
Scene geometry: everything a ray can hit.

Primitives (spheres, axis-aligned rectangles, rectangular prisms), wrappers
that move or rotate another object or fill it with a participating medium,
the HittableList aggregate and the BVHNode acceleration tree all share the
Hittable interface: hit(ray, t_min, t_max, rng) and bounding_box(t0, t1).
"""
from geometry.hittable import HitRecord, Hittable, Translate, RotateY
from geometry.world import HittableList
from geometry.bvh import BVHNode
from geometry.sphere import Sphere
from geometry.rectangle import XYRect, XZRect, YZRect
from geometry.prism import RectangularPrism
from geometry.medium import ParticipatingMedium

__all__ = [
    "HitRecord",
    "Hittable",
    "Translate",
    "RotateY",
    "HittableList",
    "BVHNode",
    "Sphere",
    "XYRect",
    "XZRect",
    "YZRect",
    "RectangularPrism",
    "ParticipatingMedium",
]
