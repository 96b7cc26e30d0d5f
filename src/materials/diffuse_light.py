# materials/diffuse_light.py
from typing import Union
from core.ray import Ray
from core.vector import Vector3
from materials.material import Material, as_texture
from materials.textures import Texture

class DiffuseLight(Material):
    """
    An area light. Every hit returns the emission color and ends the path;
    a textured emitter varies its color across the surface.
    """
    def __init__(self, emit: Union[Vector3, Texture]):
        super().__init__()
        self.texture = as_texture(emit)

    def scatter(self, ray_in: Ray, rec, rng) -> None:
        return None

    def emitted(self, u: float, v: float, p: Vector3) -> Vector3:
        return self.texture.value(u, v, p)
