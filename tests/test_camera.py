import math

import pytest

from softraster.camera import DEPTH_RANGE, Camera
from softraster.vecmath import Mat4, Triangle, Vec3


@pytest.fixture
def camera():
    cam = Camera()
    cam.set_viewport(0, 0, 64, 64)
    return cam


def test_default_camera_maps_origin_to_center(camera):
    p = camera.transform_point(Vec3(0.0, 0.0, 0.0))
    assert p == Vec3(32.0, 32.0, DEPTH_RANGE / 2.0)
    assert camera.view_dir == Vec3(0.0, 0.0, -1.0)


def test_viewport_matrix_layout():
    cam = Camera()
    cam.set_viewport(10, 20, 100, 50)
    assert cam.viewport == Mat4.from_rows([
        [50.0, 0.0, 0.0, 60.0],
        [0.0, 25.0, 0.0, 45.0],
        [0.0, 0.0, 127.5, 127.5],
        [0.0, 0.0, 0.0, 1.0],
    ])


def test_projection_coefficient():
    cam = Camera()
    cam.set_projection(4.0)
    assert cam.projection.m[3][2] == -0.25
    assert cam.focal_distance == 4.0
    with pytest.raises(ValueError):
        cam.set_projection(0.0)


def test_nearer_points_get_larger_depth(camera):
    near = camera.transform_point(Vec3(0.0, 0.0, 0.5))
    far = camera.transform_point(Vec3(0.0, 0.0, -0.5))
    assert near.z > far.z > 0.0


def test_look_at_along_z_is_identity_view(camera):
    camera.look_at(Vec3(0.0, 0.0, 3.0), Vec3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0))
    assert camera.model_view == Mat4.identity()
    assert camera.view_dir == Vec3(0.0, 0.0, -1.0)


def test_look_at_from_side_keeps_right_handed_basis(camera):
    # Looking down -x with +y up, world -z is on the right of the image.
    camera.look_at((3.0, 0.0, 0.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    right = camera.transform_point(Vec3(0.0, 0.0, -1.0))
    left = camera.transform_point(Vec3(0.0, 0.0, 1.0))
    assert right.x > 32.0 > left.x
    assert camera.view_dir == Vec3(-1.0, 0.0, 0.0)


def test_focus_projects_to_viewport_center(camera):
    focus = Vec3(0.5, 0.0, 0.0)
    camera.look_at(Vec3(1.0, 2.0, 3.0), focus, Vec3(0.0, 1.0, 0.0))
    p = camera.transform_point(focus)
    assert p.x == pytest.approx(32.0)
    assert p.y == pytest.approx(32.0)
    assert p.z == pytest.approx(DEPTH_RANGE / 2.0)


@pytest.mark.parametrize(
    "eye, focus, up",
    [
        ((0, 0, 1), (0, 0, 1), (0, 1, 0)),
        ((0, 0, 1), (0, 0, 0), (0, 0, 1)),
    ],
)
def test_look_at_rejects_degenerate_basis(camera, eye, focus, up):
    with pytest.raises(ValueError):
        camera.look_at(eye, focus, up)


def test_transform_overwrites_triangle_in_place(camera):
    tri = Triangle(Vec3(-0.5, -0.5, 0.0), Vec3(0.5, -0.5, 0.0), Vec3(0.0, 0.5, 0.0))
    same = tri
    camera.transform(tri)
    assert same is tri
    assert tri.a == Vec3(16.0, 16.0, 127.5)
    assert tri.b == Vec3(48.0, 16.0, 127.5)
    assert tri.c == Vec3(32.0, 48.0, 127.5)


def test_zero_w_is_not_guarded(camera):
    # A point at the eye (z = c) has w = 0; the divide yields non-finite values.
    p = camera.transform_point(Vec3(0.0, 0.0, 5.0))
    assert not all(math.isfinite(v) for v in p.as_tuple())
