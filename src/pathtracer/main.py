# main.py
import argparse
import sys

import numpy as np

from pathtracer.renderer.image_io import check_output_path, save_image
from pathtracer.renderer.raytracer import Renderer
from pathtracer.scenes import SCENES, build_scene

# Each level scales the scene's own settings; explicit flags override them.
QUALITY_LEVELS = {
    "preview": {"samples": 4, "bounces": 8, "scale": 0.25},
    "balanced": {"samples": 32, "bounces": 20, "scale": 0.5},
    "final": {"samples": None, "bounces": None, "scale": 1.0},  # scene defaults
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render a sphere scene with a Monte Carlo path tracer.")
    parser.add_argument("--scene", choices=sorted(SCENES), default="three_spheres")
    parser.add_argument("--quality", choices=list(QUALITY_LEVELS), default="final")
    parser.add_argument("--width", type=int, help="image width in pixels")
    parser.add_argument("--samples", type=int, help="samples per pixel")
    parser.add_argument("--depth", type=int, help="maximum ray bounces")
    parser.add_argument("--seed", type=int, help="seed for a reproducible image")
    parser.add_argument("--workers", type=int, help="worker processes (default: CPU count)")
    parser.add_argument("-o", "--output", default="image.ppm",
                        help="output file; .ppm is written directly, other suffixes go through Pillow")
    parser.add_argument("--binary", action="store_true", help="write binary P6 instead of text P3")
    parser.add_argument("--gamma", type=float, default=1.0,
                        help="gamma applied before quantizing (1.0 keeps linear output)")
    parser.add_argument("--preview", action="store_true", help="show the result in a window")
    parser.add_argument("-q", "--quiet", action="store_true", help="no progress output")
    return parser


def apply_quality_settings(camera, quality: str, args):
    """
    Apply a quality level and then the explicit overrides to the camera.
    """
    level = QUALITY_LEVELS[quality]
    camera.image_width = max(1, int(camera.image_width * level["scale"]))
    if level["samples"] is not None:
        camera.samples_per_pixel = level["samples"]
    if level["bounces"] is not None:
        camera.max_depth = level["bounces"]

    if args.width is not None:
        camera.image_width = args.width
    if args.samples is not None:
        camera.samples_per_pixel = args.samples
    if args.depth is not None:
        camera.max_depth = args.depth

    if camera.max_depth < 0:
        raise ValueError(f"depth must not be negative, got {camera.max_depth}")
    camera.initialize()


def show_preview(pixels: np.ndarray, title: str = "Path Tracer"):
    """
    Display an (H, W, 3) uint8 image in a pygame window until it is closed
    or Escape is pressed.
    """
    import pygame

    pygame.init()
    try:
        height, width = pixels.shape[:2]
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        # surfarray is indexed (x, y)
        frame_surface = pygame.surfarray.make_surface(pixels.transpose(1, 0, 2))
        screen.blit(frame_surface, (0, 0))
        pygame.display.flip()

        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            clock.tick(30)
    finally:
        pygame.quit()


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    world, camera = build_scene(args.scene)
    try:
        apply_quality_settings(camera, args.quality, args)
        if args.gamma <= 0:
            raise ValueError(f"gamma must be positive, got {args.gamma}")
        check_output_path(args.output)
        renderer = Renderer(workers=args.workers, verbose=not args.quiet)
    except ValueError as e:
        parser.error(str(e))

    image = renderer.render(camera, world, seed=args.seed)

    pixels = save_image(args.output, image, gamma=args.gamma, binary=args.binary)

    if not args.quiet:
        print(f"Wrote {camera.image_width}x{camera.image_height} image to {args.output}", file=sys.stderr)

    if args.preview:
        show_preview(pixels, title=f"{args.scene} ({args.quality})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
