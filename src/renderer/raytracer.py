# renderer/raytracer.py
import os
import random
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from typing import List, Optional
from tqdm import tqdm
from core.vector import Vector3
from renderer.integrator import GradientBackground, ray_color
from renderer.job import RenderJob, create_jobs

DEFAULT_SEED = 42
MAX_BOUNCES = 50


class RenderContext:
    """
    Everything a worker needs to trace a job. Built once before the pool
    starts and shipped to each worker process a single time; nothing in it is
    modified while rendering.
    """
    def __init__(self, world, camera, background, width: int, height: int,
                 samples_per_pixel: int, max_depth: int, seed: int):
        self.world = world
        self.camera = camera
        self.background = background
        self.width = width
        self.height = height
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.seed = seed


def job_rng(seed: int, job: RenderJob) -> random.Random:
    """Random source for one job, fixed by the render seed and the job's first row."""
    return random.Random(seed * 1_000_003 + job.rows.start)


def trace_job(context: RenderContext, job: RenderJob) -> List[Vector3]:
    """
    Renders the pixels of one job and returns their summed sample radiance,
    rows top to bottom, columns left to right. Sums are neither averaged nor
    gamma corrected.
    """
    rng = job_rng(context.seed, job)
    camera = context.camera
    world = context.world
    background = context.background
    samples = context.samples_per_pixel
    max_depth = context.max_depth
    u_scale = 1.0 / max(context.width - 1, 1)
    v_scale = 1.0 / max(context.height - 1, 1)

    pixels = []
    for j in reversed(job.rows):
        for i in job.columns:
            pixel_color = Vector3(0.0, 0.0, 0.0)
            for _ in range(samples):
                u = (i + rng.random()) * u_scale
                v = (j + rng.random()) * v_scale
                ray = camera.get_ray(u, v, rng)
                pixel_color = pixel_color + ray_color(ray, background, world, max_depth, rng)
            pixels.append(pixel_color)
    return pixels


# Per-process context, installed by the pool initializer.
_worker_context: Optional[RenderContext] = None


def _init_worker(context: RenderContext):
    global _worker_context
    _worker_context = context


def _run_job(job: RenderJob) -> List[Vector3]:
    return trace_job(_worker_context, job)


class Renderer:
    """
    Renders a scene by splitting the image into row jobs and tracing them on
    a pool of worker processes.

    Results come back in job order whatever order the workers finish in, so
    output is deterministic for a given seed. An exception in any job aborts
    the whole render.
    """
    def __init__(self, world, camera, width: int, height: int, samples_per_pixel: int = 100,
                 max_depth: int = MAX_BOUNCES, background=None, workers: Optional[int] = None,
                 seed: int = DEFAULT_SEED, rows_per_job: int = 1):
        if width < 1 or height < 1:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        if samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {samples_per_pixel}")
        self.world = world
        self.camera = camera
        self.width = width
        self.height = height
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.background = background if background is not None else GradientBackground()
        self.workers = workers if workers is not None else (os.cpu_count() or 1)
        self.seed = seed
        self.rows_per_job = rows_per_job

    def jobs(self) -> List[RenderJob]:
        return create_jobs(self.height, self.width, self.rows_per_job)

    def context(self) -> RenderContext:
        return RenderContext(self.world, self.camera, self.background, self.width,
                             self.height, self.samples_per_pixel, self.max_depth, self.seed)

    def render(self, progress: bool = True) -> List[List[Vector3]]:
        """
        Traces every job and returns one list of pixel sums per job, in job
        order.
        """
        jobs = self.jobs()
        context = self.context()
        if progress:
            print(f"Rendering {self.width}x{self.height}, {self.samples_per_pixel} samples, "
                  f"max depth {self.max_depth}, {len(jobs)} jobs on {self.workers} worker(s)")

        with tqdm(total=len(jobs), disable=not progress, unit="job") as bar:
            if self.workers <= 1:
                return self._collect(map(partial(trace_job, context), jobs), bar)
            with ProcessPoolExecutor(max_workers=self.workers, initializer=_init_worker,
                                     initargs=(context,)) as executor:
                try:
                    return self._collect(executor.map(_run_job, jobs), bar)
                except BaseException:
                    # Drop queued jobs; a failed render produces no image.
                    executor.shutdown(cancel_futures=True)
                    raise

    @staticmethod
    def _collect(results, bar) -> List[List[Vector3]]:
        outcome = []
        for pixels in results:
            outcome.append(pixels)
            bar.update(1)
        return outcome
