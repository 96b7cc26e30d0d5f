# materials/textures.py
import math
import os
from typing import Optional, Union
import numpy as np
from PIL import Image
from core.vector import Vector3
from materials.perlin import Perlin

# Returned by an ImageTexture whose file could not be loaded.
FALLBACK_COLOR = Vector3(0.0, 1.0, 1.0)


class Texture:
    """Base class for all textures."""
    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        """Color at surface coordinates (u, v) and world point p."""
        raise NotImplementedError("value() must be implemented by texture subclasses.")

class SolidTexture(Texture):
    """A solid color texture."""
    def __init__(self, color: Vector3):
        self.color = color

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        return self.color

class CheckerTexture(Texture):
    """
    A 3D checker pattern: the sign of sin(scale*x)*sin(scale*y)*sin(scale*z)
    picks the odd or the even texture.
    """
    def __init__(self, even: Union[Vector3, Texture], odd: Union[Vector3, Texture],
                 scale: float = 10.0):
        self.even = SolidTexture(even) if isinstance(even, Vector3) else even
        self.odd = SolidTexture(odd) if isinstance(odd, Vector3) else odd
        self.scale = scale

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        sines = (math.sin(self.scale * p.x) * math.sin(self.scale * p.y)
                 * math.sin(self.scale * p.z))
        if sines < 0:
            return self.odd.value(u, v, p)
        return self.even.value(u, v, p)

class NoiseTexture(Texture):
    """A marble-like procedural texture built on Perlin turbulence."""
    def __init__(self, scale: float = 1.0, seed: Optional[int] = None):
        self.noise = Perlin(seed)
        self.scale = scale

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        shade = 0.5 * (1 + math.sin(self.scale * p.z + 10 * self.noise.turb(p)))
        return Vector3(shade, shade, shade)

class ImageTexture(Texture):
    """
    A texture from an 8-bit image file, sampled at the nearest pixel.

    A missing or unreadable file is not an error: a warning is printed and
    the texture returns FALLBACK_COLOR everywhere.
    """
    def __init__(self, image_path: str):
        self.image_path = image_path
        self.data: Optional[np.ndarray] = None
        self.width = 0
        self.height = 0
        if not os.path.exists(image_path):
            print(f"WARNING: texture file not found: {image_path}")
            return
        try:
            with Image.open(image_path) as img:
                if img.mode != 'RGB':
                    img = img.convert('RGB')
                self.data = np.asarray(img, dtype=np.float64) / 255.0
                self.width = img.width
                self.height = img.height
        except (OSError, ValueError) as e:
            print(f"WARNING: error loading texture {image_path}: {e}")
            self.data = None
            return
        print(f"Loaded {image_path}, width: {self.width}, height: {self.height}")

    @property
    def loaded(self) -> bool:
        return self.data is not None

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        if self.data is None:
            return FALLBACK_COLOR

        u = min(max(u, 0.0), 1.0)
        v = 1.0 - min(max(v, 0.0), 1.0)  # Image rows start at the top

        x = min(int(u * self.width), self.width - 1)
        y = min(int(v * self.height), self.height - 1)

        color = self.data[y, x]
        return Vector3(color[0], color[1], color[2])
