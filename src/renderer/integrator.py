# renderer/integrator.py
import math
from typing import Optional
from core.ray import Ray
from core.vector import Vector3

# Lower bound of every scene query; keeps a scattered ray from hitting the
# surface it just left.
T_MIN = 0.001

SKY_WHITE = Vector3(1.0, 1.0, 1.0)
SKY_BLUE = Vector3(0.5, 0.7, 1.0)


class ConstantBackground:
    """Returns the same radiance for every ray that escapes the scene."""
    def __init__(self, color: Vector3):
        self.color = color

    def value(self, ray: Ray) -> Vector3:
        return self.color


class GradientBackground:
    """Sky gradient blended on the vertical component of the ray direction."""
    def __init__(self, bottom: Optional[Vector3] = None, top: Optional[Vector3] = None):
        self.bottom = bottom if bottom is not None else SKY_WHITE
        self.top = top if top is not None else SKY_BLUE

    def value(self, ray: Ray) -> Vector3:
        unit_direction = ray.direction.normalize()
        t = 0.5 * (unit_direction.y + 1.0)
        return self.bottom * (1.0 - t) + self.top * t


def ray_color(ray: Ray, background, world, depth: int, rng) -> Vector3:
    """
    Radiance carried back along ray, following at most depth bounces.

    Equivalent to the recursion
        emitted + attenuation * ray_color(scattered, depth - 1)
    with black once depth is exhausted, unrolled into a loop that carries the
    product of attenuations.
    """
    radiance = Vector3(0.0, 0.0, 0.0)
    throughput = Vector3(1.0, 1.0, 1.0)
    while depth > 0:
        rec = world.hit(ray, T_MIN, math.inf, rng)
        if rec is None:
            return radiance + throughput * background.value(ray)

        radiance = radiance + throughput * rec.material.emitted(rec.u, rec.v, rec.p)
        scatter = rec.material.scatter(ray, rec, rng)
        if scatter is None:
            return radiance

        ray, attenuation = scatter
        throughput = throughput * attenuation
        depth -= 1
    # Out of bounces: remaining energy is treated as absorbed.
    return radiance
