"""Tests for camera.py: lead offset, smoothing and clamping."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pogo_rider.camera import Camera, follow_camera
from pogo_rider.config import CameraConfig

FINISH = 2150.0


class TestFollowCamera:
    def test_snaps_to_lead_on_large_dt(self):
        """A step long enough saturates the smoothing at the target."""
        assert follow_camera(0.0, 1000.0, 1000.0, 1.0, FINISH) == pytest.approx(650.0)

    def test_partial_smoothing(self):
        assert follow_camera(0.0, 1000.0, 1000.0, 0.1 / 7, FINISH) == pytest.approx(65.0)

    def test_never_before_start(self):
        assert follow_camera(0.0, 120.0, 1280.0, 1.0, FINISH) == 0.0

    def test_stops_short_of_finish(self):
        assert follow_camera(0.0, 9000.0, 1000.0, 1.0, FINISH) == pytest.approx(FINISH - 400.0)

    def test_wide_viewport_pins_to_zero(self):
        assert follow_camera(300.0, 2000.0, 8000.0, 1.0, FINISH) == 0.0

    def test_zero_width_viewport_untouched(self):
        assert follow_camera(42.0, 1000.0, 0.0, 0.1, FINISH) == 42.0

    def test_negative_dt_does_not_move(self):
        assert follow_camera(100.0, 1000.0, 1000.0, -0.5, FINISH) == 100.0

    def test_custom_lead(self):
        cfg = CameraConfig(lead_fraction=0.5)
        assert follow_camera(0.0, 1000.0, 1000.0, 1.0, FINISH, cfg) == pytest.approx(500.0)


class TestCamera:
    def test_update_and_reset(self):
        camera = Camera(CameraConfig(), FINISH)
        camera.update(1.0, 1000.0, 1000.0)
        assert camera.x == pytest.approx(650.0)
        assert camera.to_screen(1000.0) == pytest.approx(350.0)
        camera.reset()
        assert camera.x == 0.0
