# materials/isotropic.py
from typing import Tuple, Union
from core.ray import Ray
from core.vector import Vector3
from core.utils import random_in_unit_sphere
from materials.material import Material, as_texture
from materials.textures import Texture

class Isotropic(Material):
    """
    Phase function of a participating medium: scatters uniformly in every
    direction, tinted by the albedo.
    """
    def __init__(self, albedo: Union[Vector3, Texture]):
        super().__init__()
        self.texture = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec, rng) -> Tuple[Ray, Vector3]:
        scattered = Ray(rec.p, random_in_unit_sphere(rng), ray_in.time)
        return scattered, self.texture.value(rec.u, rec.v, rec.p)
