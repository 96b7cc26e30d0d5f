# renderer/ppm.py
from typing import Iterable, List, Sequence
import numpy as np
from core.errors import RenderOutputError
from core.vector import Vector3
from renderer.tone_mapping import gamma2_to_rgb8


def rows_to_array(rows: Iterable[Sequence[Vector3]]) -> np.ndarray:
    """Flattens per-job pixel sums into an (n_pixels, 3) float array, keeping order."""
    pixels: List[tuple] = [pixel.as_tuple() for row in rows for pixel in row]
    if not pixels:
        return np.zeros((0, 3), dtype=np.float64)
    return np.array(pixels, dtype=np.float64)


def format_ppm(accumulated: np.ndarray, width: int, height: int, samples_per_pixel: int) -> str:
    """Plain-text P3 image: header, then one "R G B" line per pixel."""
    rgb = gamma2_to_rgb8(accumulated, samples_per_pixel)
    lines = [f"P3\n{width} {height}\n255\n"]
    lines.extend(f"{r} {g} {b}\n" for r, g, b in rgb.tolist())
    return "".join(lines)


def write_ppm(path: str, rows: Iterable[Sequence[Vector3]], width: int, height: int,
              samples_per_pixel: int) -> None:
    """
    Writes rendered rows, in the order given, to path as a P3 PPM.

    Raises RenderOutputError if the file cannot be created or written.
    """
    accumulated = rows_to_array(rows)
    if len(accumulated) != width * height:
        raise ValueError(f"expected {width * height} pixels, got {len(accumulated)}")
    text = format_ppm(accumulated, width, height, samples_per_pixel)
    try:
        with open(path, "w") as f:
            f.write(text)
    except OSError as e:
        raise RenderOutputError(path, e) from e
