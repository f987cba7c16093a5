from .camera import Camera
from .errors import ImageWriteError, IndexOutOfRange, ParseError, RenderError, TextureLoadError
from .framebuffer import Framebuffer
from .obj_loader import Face, Mesh, load, parse
from .raster import rasterize
from .renderer import RENDER_FLAT, RENDER_SMOOTH, RENDER_WIREFRAME, Renderer
from .texture import Texture, load_texture
from .vecmath import Mat4, Triangle, Vec3

__all__ = [
    "Camera",
    "Face",
    "Framebuffer",
    "ImageWriteError",
    "IndexOutOfRange",
    "Mat4",
    "Mesh",
    "ParseError",
    "RENDER_FLAT",
    "RENDER_SMOOTH",
    "RENDER_WIREFRAME",
    "RenderError",
    "Renderer",
    "Texture",
    "TextureLoadError",
    "Triangle",
    "Vec3",
    "load",
    "load_texture",
    "parse",
    "rasterize",
]
