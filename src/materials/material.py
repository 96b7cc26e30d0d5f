# materials/material.py
from typing import TYPE_CHECKING, Optional, Tuple, Union
from core.ray import Ray
from core.vector import Vector3
from materials.textures import Texture, SolidTexture

if TYPE_CHECKING:
    from geometry.hittable import HitRecord

BLACK = Vector3(0, 0, 0)


def as_texture(value: Union[Vector3, Texture]) -> Texture:
    """Wraps a plain color in a SolidTexture; textures pass through."""
    if isinstance(value, Vector3):
        return SolidTexture(value)
    return value


class Material:
    """
    Abstract material class. Subclasses must implement scatter().

    Materials are shared by every worker during a render and must not change
    once rendering has started.
    """
    def __init__(self):
        self.texture = None

    def scatter(self, ray_in: Ray, rec: "HitRecord", rng) -> Optional[Tuple[Ray, Vector3]]:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

    def emitted(self, u: float, v: float, p: Vector3) -> Vector3:
        """Radiance emitted at the hit point. Non-emissive materials return black."""
        return BLACK
