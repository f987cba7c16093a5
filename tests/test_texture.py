import numpy as np
import pytest
from PIL import Image

from softraster.errors import TextureLoadError
from softraster.texture import Texture, load_texture


@pytest.fixture
def quad_texture():
    pixels = np.array(
        [
            [[10, 0, 0], [20, 0, 0]],
            [[30, 0, 0], [40, 0, 0]],
        ],
        dtype=np.uint8,
    )
    return Texture(pixels)


def test_dimensions(quad_texture):
    assert (quad_texture.width, quad_texture.height) == (2, 2)


def test_nearest_neighbour_sampling(quad_texture):
    uv = np.array([[0.25, 0.25], [0.75, 0.25], [0.25, 0.75], [0.75, 0.75]])
    np.testing.assert_array_equal(quad_texture.sample(uv)[:, 0], [10, 20, 30, 40])


def test_sample_coordinates_stay_in_bounds():
    tex = Texture(np.zeros((5, 7, 3), dtype=np.uint8))
    grid = np.linspace(-1e-9, 1.0, 41)
    uu, vv = np.meshgrid(grid, grid)
    uv = np.column_stack([uu.ravel(), vv.ravel(), np.zeros(uu.size)])
    tx, ty = tex.pixel_coords(uv)
    assert tx.min() >= 0 and tx.max() <= tex.width - 1
    assert ty.min() >= 0 and ty.max() <= tex.height - 1
    # u = 1.0 would address column `width` without the clip
    assert tx.max() == tex.width - 1


def test_texture_is_read_only(quad_texture):
    with pytest.raises(ValueError):
        quad_texture.pixels[0, 0, 0] = 1


def test_rejects_bad_shapes():
    with pytest.raises(ValueError):
        Texture(np.zeros((4, 4), dtype=np.uint8))
    with pytest.raises(ValueError):
        Texture(np.zeros((0, 4, 3), dtype=np.uint8))


def test_load_flips_to_bottom_left_origin(tmp_path):
    path = tmp_path / "stripes.png"
    image = Image.new("RGB", (2, 2))
    image.putpixel((0, 0), (255, 0, 0))
    image.putpixel((1, 0), (255, 0, 0))
    image.putpixel((0, 1), (0, 0, 255))
    image.putpixel((1, 1), (0, 0, 255))
    image.save(path)

    tex = load_texture(str(path))
    # v = 0 is the bottom row of the source image
    assert tuple(tex.sample(np.array([[0.5, 0.1]]))[0]) == (0, 0, 255)
    assert tuple(tex.sample(np.array([[0.5, 0.9]]))[0]) == (255, 0, 0)


def test_load_converts_to_rgb(tmp_path):
    path = tmp_path / "gray.png"
    Image.new("L", (3, 2), color=128).save(path)
    tex = load_texture(str(path))
    assert tex.pixels.shape == (2, 3, 3)
    assert tuple(tex.pixels[0, 0]) == (128, 128, 128)


def test_missing_texture(tmp_path):
    with pytest.raises(TextureLoadError) as info:
        load_texture(str(tmp_path / "missing.tga"))
    assert isinstance(info.value, OSError)


def test_undecodable_texture(tmp_path):
    path = tmp_path / "not_an_image.png"
    path.write_text("definitely not a png")
    with pytest.raises(TextureLoadError):
        load_texture(str(path))
