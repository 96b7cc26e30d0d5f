# src/geometry/world.py
from typing import Iterable, List, Optional
from core.aabb import AABB
from core.errors import SceneConstructionError
from core.ray import Ray
from geometry.hittable import Hittable, HitRecord

class HittableList(Hittable):
    """
    An ordered list of Hittable objects, itself hit by linear scan.

    The list is editable until build_bvh() is called; after that it is frozen
    so the tree built from it stays consistent while rendering.
    """
    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: List[Hittable] = list(objects) if objects is not None else []
        self.bvh_root = None
        self.frozen = False

    def __len__(self) -> int:
        return len(self.objects)

    def add(self, obj: Hittable):
        if self.frozen:
            raise SceneConstructionError("cannot add objects to a scene after its BVH was built")
        self.objects.append(obj)

    def clear(self):
        if self.frozen:
            raise SceneConstructionError("cannot clear a scene after its BVH was built")
        self.objects.clear()

    def build_bvh(self, time_start: float = 0.0, time_end: float = 1.0, rng=None,
                  verbose: bool = False):
        """
        Builds the BVH over every object and freezes the list.

        Raises SceneConstructionError if the list is empty or an object cannot
        be bounded.
        """
        from geometry.bvh import BVHNode

        if verbose:
            print(f"Building BVH for {len(self.objects)} objects...")
        self.bvh_root = BVHNode.from_list(self, time_start, time_end, rng)
        self.frozen = True
        if verbose:
            print(f"BVH built: depth {self.bvh_root.depth()}, box {self.bvh_root.box}")
        return self.bvh_root

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far, rng)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record

    def bounding_box(self, time_start: float, time_end: float) -> Optional[AABB]:
        # Partial coverage is not a bound: one unbounded child makes the list unbounded.
        if not self.objects:
            return None
        result = None
        for obj in self.objects:
            box = obj.bounding_box(time_start, time_end)
            if box is None:
                return None
            result = box if result is None else AABB.surrounding_box(result, box)
        return result
