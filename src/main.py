# main.py
import argparse
import random
import sys
import time
from core.errors import RayTracerError
from renderer.ppm import write_ppm
from renderer.raytracer import DEFAULT_SEED, Renderer
from scenes.catalog import SCENES, build_scene

QUALITY_LEVELS = {
    "preview": {"samples": 4, "bounces": 8},
    "balanced": {"samples": 32, "bounces": 20},
    "final": {"samples": 100, "bounces": 50},
}


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render a scene with a BVH-accelerated Monte Carlo path tracer.")
    parser.add_argument("--scene", default="random", choices=sorted(SCENES),
                        help="scene to render (default: random)")
    parser.add_argument("--width", type=int, default=400, help="image width in pixels (default: 400)")
    parser.add_argument("--aspect-ratio", type=float, default=None,
                        help="width / height; defaults to the scene's own ratio")
    parser.add_argument("--quality", default="balanced", choices=sorted(QUALITY_LEVELS),
                        help="sample/bounce preset (default: balanced)")
    parser.add_argument("--samples", type=int, default=None, help="samples per pixel, overrides --quality")
    parser.add_argument("--max-depth", type=int, default=None, help="bounce limit, overrides --quality")
    parser.add_argument("--workers", type=int, default=None,
                        help="worker processes (default: one per CPU)")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="random seed")
    parser.add_argument("--output", default="out.ppm", help="output PPM path (default: out.ppm)")
    parser.add_argument("--quiet", action="store_true", help="suppress progress output")
    parser.add_argument("--list-scenes", action="store_true", help="print scene names and exit")
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> None:
    verbose = not args.quiet
    quality = QUALITY_LEVELS[args.quality]
    samples = args.samples if args.samples is not None else quality["samples"]
    max_depth = args.max_depth if args.max_depth is not None else quality["bounces"]

    setup = build_scene(args.scene, args.seed)
    aspect_ratio = args.aspect_ratio if args.aspect_ratio is not None else setup.aspect_ratio
    width = args.width
    height = max(1, int(width / aspect_ratio))
    camera = setup.make_camera(aspect_ratio)

    # The tree must be complete before any worker starts.
    bvh = setup.world.build_bvh(setup.time0, setup.time1, random.Random(args.seed), verbose=verbose)

    renderer = Renderer(bvh, camera, width, height, samples_per_pixel=samples,
                        max_depth=max_depth, background=setup.background,
                        workers=args.workers, seed=args.seed)
    start = time.time()
    rows = renderer.render(progress=verbose)
    write_ppm(args.output, rows, width, height, samples)
    if verbose:
        print(f"Wrote {args.output} ({width}x{height}) in {time.time() - start:.1f}s")


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.list_scenes:
        for name in sorted(SCENES):
            print(name)
        return 0
    try:
        run(args)
    except RayTracerError as e:
        print(f"ERROR: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
