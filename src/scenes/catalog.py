# scenes/catalog.py
import random
from typing import Callable, Dict, Optional
from camera.camera import Camera
from core.errors import SceneConstructionError
from core.vector import Vector3
from core.utils import random_color
from geometry.bvh import BVHNode
from geometry.hittable import RotateY, Translate
from geometry.medium import ParticipatingMedium
from geometry.prism import RectangularPrism
from geometry.rectangle import XYRect, XZRect, YZRect
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.dielectric import Dielectric
from materials.diffuse_light import DiffuseLight
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.textures import CheckerTexture, ImageTexture, NoiseTexture
from renderer.integrator import ConstantBackground, GradientBackground

BLACK = Vector3(0, 0, 0)
EARTH_TEXTURE = "earthmap.jpg"


class SceneSetup:
    """A world plus the camera placement and background it is meant to be seen with."""
    def __init__(self, world: HittableList, look_from: Vector3, look_at: Vector3,
                 vfov: float = 20.0, aperture: float = 0.0, focus_dist: float = 10.0,
                 background=None, aspect_ratio: float = 16.0 / 9.0,
                 time0: float = 0.0, time1: float = 1.0):
        self.world = world
        self.look_from = look_from
        self.look_at = look_at
        self.vfov = vfov
        self.aperture = aperture
        self.focus_dist = focus_dist
        self.background = background if background is not None else GradientBackground()
        self.aspect_ratio = aspect_ratio
        self.time0 = time0
        self.time1 = time1

    def make_camera(self, aspect_ratio: Optional[float] = None) -> Camera:
        return Camera(self.look_from, self.look_at, Vector3(0, 1, 0), self.vfov,
                      aspect_ratio if aspect_ratio is not None else self.aspect_ratio,
                      self.aperture, self.focus_dist, self.time0, self.time1)


def random_scene(rng: random.Random) -> SceneSetup:
    """Checkered ground, a field of small (partly moving) spheres and three large ones."""
    world = HittableList()
    checker = CheckerTexture(Vector3(0.2, 0.3, 0.1), Vector3(0.9, 0.9, 0.9))
    world.add(Sphere(Vector3(0, -1000, 0), 1000, Lambertian(checker)))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Vector3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - Vector3(4, 0.2, 0)).length() <= 0.9:
                continue
            if choose_mat < 0.8:
                # diffuse, bouncing upwards during the shutter interval
                albedo = random_color(rng) * random_color(rng)
                center_end = center + Vector3(0, rng.uniform(0, 0.5), 0)
                world.add(Sphere.moving(center, center_end, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.95:
                # metal
                albedo = random_color(rng, 0.5, 1.0)
                world.add(Sphere(center, 0.2, Metal(albedo, rng.uniform(0, 0.5))))
            else:
                # glass
                world.add(Sphere(center, 0.2, Dielectric(1.5)))

    world.add(Sphere(Vector3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Vector3(-4, 1, 0), 1.0, Lambertian(Vector3(0.4, 0.2, 0.1))))
    world.add(Sphere(Vector3(4, 1, 0), 1.0, Metal(Vector3(0.7, 0.6, 0.5), 0.0)))

    return SceneSetup(world, Vector3(13, 2, 3), Vector3(0, 0, 0), vfov=20.0, aperture=0.1)


def two_spheres(rng: random.Random) -> SceneSetup:
    world = HittableList()
    checker = CheckerTexture(Vector3(0.2, 0.3, 0.1), Vector3(0.9, 0.9, 0.9))
    world.add(Sphere(Vector3(0, -10, 0), 10, Lambertian(checker)))
    world.add(Sphere(Vector3(0, 10, 0), 10, Lambertian(checker)))
    return SceneSetup(world, Vector3(13, 2, 3), Vector3(0, 0, 0), vfov=20.0)


def two_perlin_spheres(rng: random.Random) -> SceneSetup:
    world = HittableList()
    perlin = NoiseTexture(4.0, seed=rng.randrange(2**32))
    world.add(Sphere(Vector3(0, -1000, 0), 1000, Lambertian(perlin)))
    world.add(Sphere(Vector3(0, 2, 0), 2, Lambertian(perlin)))
    return SceneSetup(world, Vector3(13, 2, 3), Vector3(0, 0, 0), vfov=20.0)


def earth(rng: random.Random, texture_path: str = EARTH_TEXTURE) -> SceneSetup:
    world = HittableList()
    world.add(Sphere(Vector3(0, 0, 0), 2, Lambertian(ImageTexture(texture_path))))
    return SceneSetup(world, Vector3(13, 2, 3), Vector3(0, 0, 0), vfov=20.0)


def simple_light(rng: random.Random) -> SceneSetup:
    world = HittableList()
    perlin = NoiseTexture(4.0, seed=rng.randrange(2**32))
    world.add(Sphere(Vector3(0, -1000, 0), 1000, Lambertian(perlin)))
    world.add(Sphere(Vector3(0, 2, 0), 2, Lambertian(perlin)))
    world.add(XYRect(3, 5, 1, 3, -2, DiffuseLight(Vector3(4, 4, 4))))
    return SceneSetup(world, Vector3(26, 3, 6), Vector3(0, 2, 0), vfov=20.0,
                      background=ConstantBackground(BLACK))


def _cornell_walls(world: HittableList, light_rect):
    red = Lambertian(Vector3(0.65, 0.05, 0.05))
    white = Lambertian(Vector3(0.73, 0.73, 0.73))
    green = Lambertian(Vector3(0.12, 0.45, 0.15))

    world.add(YZRect(0, 555, 0, 555, 555, green))
    world.add(YZRect(0, 555, 0, 555, 0, red))
    world.add(light_rect)
    world.add(XZRect(0, 555, 0, 555, 0, white))
    world.add(XZRect(0, 555, 0, 555, 555, white))
    world.add(XYRect(0, 555, 0, 555, 555, white))
    return white


def _cornell_boxes(white):
    tall = RectangularPrism(Vector3(0, 0, 0), Vector3(165, 330, 165), white)
    tall = Translate(RotateY(tall, 15), Vector3(265, 0, 295))
    short = RectangularPrism(Vector3(0, 0, 0), Vector3(165, 165, 165), white)
    short = Translate(RotateY(short, -18), Vector3(130, 0, 65))
    return tall, short


def _cornell_setup(world: HittableList) -> SceneSetup:
    return SceneSetup(world, Vector3(278, 278, -800), Vector3(278, 278, 0), vfov=40.0,
                      background=ConstantBackground(BLACK), aspect_ratio=1.0)


def cornell_box(rng: random.Random) -> SceneSetup:
    world = HittableList()
    light = DiffuseLight(Vector3(15, 15, 15))
    white = _cornell_walls(world, XZRect(213, 343, 227, 332, 554, light))
    for box in _cornell_boxes(white):
        world.add(box)
    return _cornell_setup(world)


def cornell_smoke(rng: random.Random) -> SceneSetup:
    world = HittableList()
    light = DiffuseLight(Vector3(7, 7, 7))
    white = _cornell_walls(world, XZRect(113, 443, 127, 432, 554, light))
    tall, short = _cornell_boxes(white)
    world.add(ParticipatingMedium(tall, 0.01, Vector3(0, 0, 0)))
    world.add(ParticipatingMedium(short, 0.01, Vector3(1, 1, 1)))
    return _cornell_setup(world)


def materials_demo(rng: random.Random) -> SceneSetup:
    """Ground plus diffuse, glass and metal spheres, the three grouped in their own BVH."""
    world = HittableList()
    world.add(Sphere(Vector3(0, -100.5, -1), 100, Lambertian(Vector3(0.8, 0.8, 0.0))))

    big_spheres = HittableList([
        Sphere(Vector3(0, 0, -1), 0.5, Lambertian(Vector3(0.1, 0.2, 0.5))),
        Sphere(Vector3(-1, 0, -1), 0.5, Dielectric(1.5)),
        Sphere(Vector3(1, 0, -1), 0.5, Metal(Vector3(0.8, 0.6, 0.2), 0.0)),
    ])
    world.add(BVHNode.from_list(big_spheres, 0.0, 1.0, rng))
    return SceneSetup(world, Vector3(-2, 2, 1), Vector3(0, 0, -1), vfov=20.0)


SCENES: Dict[str, Callable[[random.Random], SceneSetup]] = {
    "random": random_scene,
    "two_spheres": two_spheres,
    "two_perlin_spheres": two_perlin_spheres,
    "earth": earth,
    "simple_light": simple_light,
    "cornell_box": cornell_box,
    "cornell_smoke": cornell_smoke,
    "materials_demo": materials_demo,
}


def build_scene(name: str, seed: int = 0) -> SceneSetup:
    """Builds the named scene; randomized scenes are reproducible from seed."""
    try:
        builder = SCENES[name]
    except KeyError:
        raise SceneConstructionError(
            f"unknown scene {name!r}; choose one of {', '.join(sorted(SCENES))}") from None
    return builder(random.Random(seed))
