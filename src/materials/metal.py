# materials/metal.py
from typing import Optional, Tuple, Union
from core.ray import Ray
from core.vector import Vector3
from core.utils import reflect, random_in_unit_sphere
from materials.material import Material, as_texture
from materials.textures import Texture

class Metal(Material):
    """
    Specular reflector. fuzz (capped at 1) jitters the mirror direction by a
    random point in a sphere of that radius; 0 gives a perfect mirror.
    """
    def __init__(self, albedo: Union[Vector3, Texture], fuzz: float = 0.0):
        super().__init__()
        self.texture = as_texture(albedo)
        self.fuzz = min(fuzz, 1)

    def scatter(self, ray_in: Ray, rec, rng) -> Optional[Tuple[Ray, Vector3]]:
        mirrored = reflect(ray_in.direction.normalize(), rec.normal)
        direction = mirrored + random_in_unit_sphere(rng) * self.fuzz
        if direction.dot(rec.normal) <= 0:
            # Fuzz pushed the reflection below the surface.
            return None
        return Ray(rec.p, direction, ray_in.time), self.texture.value(rec.u, rec.v, rec.p)
