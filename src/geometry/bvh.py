# src/geometry/bvh.py
import random
from typing import Iterator, List, Optional, Sequence
from core.aabb import AABB
from core.errors import SceneConstructionError
from core.ray import Ray
from geometry.hittable import Hittable, HitRecord


def box_sort_key(obj: Hittable, axis: int, time_start: float, time_end: float):
    """
    Sort key for BVH splits: the box minimum along axis.

    Objects without a box sort after every object with one, and compare equal
    among themselves.
    """
    box = obj.bounding_box(time_start, time_end)
    if box is None:
        return (1, 0.0)
    return (0, box.minimum[axis])


class BVHNode(Hittable):
    """
    A node of a binary bounding volume hierarchy.

    Each child is either another BVHNode or a scene primitive. A range holding
    a single primitive gets that primitive on both sides, so traversal never
    has to special-case one-sided nodes. The tree is read-only once built.
    """
    def __init__(self, objects: Sequence[Hittable], start: int, end: int,
                 time_start: float = 0.0, time_end: float = 1.0, rng=None):
        object_span = end - start
        if object_span <= 0:
            raise SceneConstructionError("cannot build a BVH over an empty range of objects")
        if rng is None:
            rng = random

        # A fresh random axis per node.
        axis = rng.randrange(3)

        if object_span == 1:
            self.left = self.right = objects[start]
        elif object_span == 2:
            a, b = objects[start], objects[start + 1]
            if box_sort_key(a, axis, time_start, time_end) < box_sort_key(b, axis, time_start, time_end):
                self.left, self.right = a, b
            else:
                self.left, self.right = b, a
        else:
            # Sort a copy of the sub-range; the caller's ordering is left untouched.
            ordered: List[Hittable] = sorted(
                objects[start:end],
                key=lambda obj: box_sort_key(obj, axis, time_start, time_end))
            mid = object_span // 2
            self.left = BVHNode(ordered, 0, mid, time_start, time_end, rng)
            self.right = BVHNode(ordered, mid, object_span, time_start, time_end, rng)

        left_box = self.left.bounding_box(time_start, time_end)
        right_box = self.right.bounding_box(time_start, time_end)
        if left_box is None or right_box is None:
            missing = self.left if left_box is None else self.right
            raise SceneConstructionError(
                f"no bounding box for {type(missing).__name__} in BVHNode constructor")
        self.box = AABB.surrounding_box(left_box, right_box)

    @classmethod
    def from_list(cls, hittable_list, time_start: float = 0.0, time_end: float = 1.0,
                  rng=None) -> "BVHNode":
        objects = hittable_list.objects
        return cls(objects, 0, len(objects), time_start, time_end, rng)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        if not self.box.hit(ray, t_min, t_max):
            return None

        hit_left = self.left.hit(ray, t_min, t_max, rng)
        if hit_left is None:
            return self.right.hit(ray, t_min, t_max, rng)

        # Search the right side up to and including hit_left.t: an equal t goes
        # to the right child.
        hit_right = self.right.hit(ray, t_min, hit_left.t, rng)
        if hit_right is not None:
            return hit_right
        return hit_left

    def bounding_box(self, time_start: float, time_end: float) -> AABB:
        return self.box

    def leaves(self) -> Iterator[Hittable]:
        """
        Yields the primitive at every leaf position, left to right. A singleton
        partition yields its primitive twice.
        """
        for child in (self.left, self.right):
            if isinstance(child, BVHNode):
                yield from child.leaves()
            else:
                yield child

    def depth(self) -> int:
        return 1 + max(child.depth() if isinstance(child, BVHNode) else 0
                       for child in (self.left, self.right))
