import argparse
from dataclasses import dataclass
from typing import Optional, Tuple

from .renderer import MODE_NAMES
from .vecmath import Vec3

Triple = Tuple[float, float, float]


@dataclass
class RenderConfig:
    model_path: str
    output_path: str
    width: int = 800
    height: int = 800
    texture_path: Optional[str] = None
    eye: Optional[Triple] = None
    focus: Optional[Triple] = None
    up: Optional[Triple] = None
    light_direction: Triple = (0.0, 0.0, -1.0)
    mode: str = "smooth"
    focal_distance: float = 5.0
    background: Tuple[int, int, int] = (0, 0, 0)
    show: bool = False
    log_level: str = "INFO"

    @property
    def has_camera(self) -> bool:
        return self.eye is not None

    @property
    def render_mode(self) -> int:
        return MODE_NAMES[self.mode]

    def validate(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"width and height must be >= 1, got {self.width}x{self.height}")
        camera = (self.eye, self.focus, self.up)
        if any(v is None for v in camera) and any(v is not None for v in camera):
            raise ValueError("eye, focus and up must be given together")
        if self.eye is not None and self.focus is not None and self.up is not None:
            view = Vec3.of(self.eye) - Vec3.of(self.focus)
            if view.norm() <= 1e-12:
                raise ValueError("eye and focus must be different points")
            if Vec3.of(self.up).cross(view.normalize()).norm() <= 1e-12:
                raise ValueError("up must not be parallel to the eye-focus direction")
        if self.mode not in MODE_NAMES:
            raise ValueError(f"Unknown mode '{self.mode}', expected one of {sorted(MODE_NAMES)}")
        if all(abs(c) <= 1e-12 for c in self.light_direction):
            raise ValueError("light direction must be non-zero")
        if self.focal_distance <= 0.0:
            raise ValueError("focal distance must be positive")
        if any(not 0 <= c <= 255 for c in self.background):
            raise ValueError("background channels must be in 0..255")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RenderConfig":
        def triple(values) -> Optional[Triple]:
            return None if values is None else tuple(float(v) for v in values)

        return cls(
            model_path=args.model,
            output_path=args.output,
            width=args.width,
            height=args.height,
            texture_path=None if args.no_texture else args.texture,
            eye=triple(args.eye),
            focus=triple(args.focus),
            up=triple(args.up),
            light_direction=triple(args.light),
            mode=args.mode,
            focal_distance=args.focal_distance,
            background=tuple(int(c) for c in args.background),
            show=args.show,
            log_level=args.log_level,
        )
