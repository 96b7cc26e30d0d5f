# geometry/medium.py
import math
import random
from typing import Optional, Union
from core.vector import Vector3
from core.ray import Ray
from core.aabb import AABB
from geometry.hittable import Hittable, HitRecord
from materials.isotropic import Isotropic
from materials.textures import Texture

# Offset between the entry and exit boundary queries, and the forward nudge
# applied when the entry coincides with t_min.
MEDIUM_EPSILON = 0.0001


class ParticipatingMedium(Hittable):
    """
    A volume of constant density bounded by a closed shape (smoke, fog).

    A ray passing through the boundary scatters at a random distance drawn
    from an exponential distribution with rate `density`. If that distance
    exceeds the path length inside the boundary, the ray passes straight
    through.
    """
    def __init__(self, boundary: Hittable, density: float, albedo: Union[Vector3, Texture]):
        if density <= 0:
            raise ValueError(f"medium density must be positive, got {density}")
        self.boundary = boundary
        self.density = density
        self.neg_inv_density = -1.0 / density
        self.phase_function = Isotropic(albedo)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        if rng is None:
            rng = random

        entry = self.boundary.hit(ray, -math.inf, math.inf, rng)
        if entry is None:
            return None
        exit_ = self.boundary.hit(ray, entry.t + MEDIUM_EPSILON, math.inf, rng)
        if exit_ is None:
            return None

        t_entry = entry.t
        if t_entry == t_min:
            # Do not treat a ray that starts on the boundary as already inside.
            t_entry += MEDIUM_EPSILON
        t_entry = max(t_entry, t_min)
        t_exit = min(exit_.t, t_max)
        if t_entry >= t_exit:
            return None
        t_entry = max(t_entry, 0.0)

        ray_length = ray.direction.length()
        distance_inside = (t_exit - t_entry) * ray_length
        # 1 - random() lies in (0, 1], keeping the log finite.
        hit_distance = self.neg_inv_density * math.log(1.0 - rng.random())
        if hit_distance > distance_inside:
            return None

        t = t_entry + hit_distance / ray_length
        # Normal and face flag are arbitrary inside a volume.
        return HitRecord(t, ray.at(t), Vector3(1, 0, 0), 0.0, 0.0, True, self.phase_function)

    def bounding_box(self, time_start: float, time_end: float) -> Optional[AABB]:
        return self.boundary.bounding_box(time_start, time_end)
