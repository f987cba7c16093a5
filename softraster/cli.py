import argparse
import logging
from typing import Optional, Sequence

from .config import RenderConfig
from .errors import RenderError
from .log import configure_logging
from .obj_loader import load
from .renderer import MODE_NAMES, Renderer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CPU software renderer for textured OBJ meshes")
    parser.add_argument("model", help="Path to a triangulated OBJ file (v/vt/vn faces)")
    parser.add_argument("output", help="Output image path; the format follows the extension")
    parser.add_argument("--width", type=int, default=800, help="Output width in pixels (default: 800)")
    parser.add_argument("--height", type=int, default=800, help="Output height in pixels (default: 800)")
    parser.add_argument("--texture", type=str, default=None, help="Diffuse texture image")
    parser.add_argument(
        "--no-texture",
        action="store_true",
        help="Ignore --texture and shade in grayscale",
    )
    for name, what in (("eye", "Camera position"), ("focus", "Point the camera looks at"), ("up", "Camera up vector")):
        parser.add_argument(
            f"--{name}",
            type=float,
            nargs=3,
            metavar=("X", "Y", "Z"),
            default=None,
            help=f"{what}; --eye, --focus and --up go together",
        )
    parser.add_argument(
        "--light",
        type=float,
        nargs=3,
        metavar=("X", "Y", "Z"),
        default=(0.0, 0.0, -1.0),
        help="Directional light vector (default: 0 0 -1)",
    )
    parser.add_argument(
        "--mode",
        choices=sorted(MODE_NAMES),
        default="smooth",
        help="Shading mode (default: smooth)",
    )
    parser.add_argument(
        "--focal-distance",
        type=float,
        default=5.0,
        help="Projection distance when no camera is given (default: 5)",
    )
    parser.add_argument(
        "--background",
        type=int,
        nargs=3,
        metavar=("R", "G", "B"),
        default=(0, 0, 0),
        help="Background color (default: 0 0 0)",
    )
    parser.add_argument("--show", action="store_true", help="Preview the result in a window")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    return parser


def parse_arguments(argv: Optional[Sequence[str]] = None) -> RenderConfig:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = RenderConfig.from_args(args)
    try:
        config.validate()
    except ValueError as exc:
        parser.error(str(exc))
    return config


def run(config: RenderConfig) -> None:
    mesh = load(config.model_path)

    renderer = Renderer(
        mesh,
        light_direction=config.light_direction,
        mode=config.render_mode,
        background=config.background,
    )
    if config.texture_path:
        renderer.set_texture(config.texture_path)
    if config.has_camera:
        renderer.set_camera(config.eye, config.focus, config.up)
    else:
        renderer.camera.set_projection(config.focal_distance)

    framebuffer = renderer.render_to_file(config.output_path, config.width, config.height)

    if config.show:
        from .viewer import show

        show(framebuffer, title=f"softraster - {config.model_path}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    config = parse_arguments(argv)
    configure_logging(config.log_level)
    try:
        run(config)
    except (RenderError, OSError) as exc:
        logger.error("Render failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
