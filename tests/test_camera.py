import pytest

from camera import Camera, WorldBounds


def test_screen_world_round_trip():
    cam = Camera()
    cam.apply_zoom(3, 123, 45)
    cam.pan(17.5, -8)
    for wx, wy in [(0, 0), (100.5, -20), (-333, 999.25)]:
        sx, sy = cam.world_to_screen(wx, wy)
        assert cam.screen_to_world(sx, sy) == pytest.approx((wx, wy))


def test_zoom_keeps_pivot_world_point_fixed():
    cam = Camera()
    cam.pan(40, 30)
    before = cam.screen_to_world(200, 150)
    cam.apply_zoom(2, 200, 150)
    assert cam.zoom == pytest.approx(1.15 ** 2)
    assert cam.screen_to_world(200, 150) == pytest.approx(before)


@pytest.mark.parametrize("notches", [100, -100])
def test_zoom_is_clamped(notches):
    cam = Camera(min_zoom=0.1, max_zoom=5.0)
    before = cam.screen_to_world(300, 200)
    cam.apply_zoom(notches, 300, 200)
    assert 0.1 <= cam.zoom <= 5.0
    assert cam.screen_to_world(300, 200) == pytest.approx(before)


def test_pan_is_not_scaled_by_zoom():
    cam = Camera()
    cam.apply_zoom(5, 0, 0)
    cam.pan(10, -5)
    assert (cam.offset_x, cam.offset_y) == pytest.approx((10, -5))


def test_reset():
    cam = Camera()
    cam.apply_zoom(4, 50, 50)
    cam.pan(3, 3)
    cam.reset()
    assert (cam.zoom, cam.offset_x, cam.offset_y) == (1.0, 0.0, 0.0)


def test_visible_bounds_follow_camera():
    cam = Camera()
    cam.pan(100, 50)
    bounds = cam.visible_bounds(800, 600)
    assert (bounds.left, bounds.top, bounds.right, bounds.bottom) == pytest.approx((-100, -50, 700, 550))


def test_bounds_clamp_with_inset():
    bounds = WorldBounds(0, 0, 100, 50)
    assert bounds.clamp(-10, 80, inset=20) == (20, 30)
    # Inset larger than the rectangle collapses to the centre
    assert bounds.clamp(0, 0, inset=60) == (50, 25)
