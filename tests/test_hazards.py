"""Tests for hazards.py: spike, ground, off-world and finish checks."""

import math
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pogo_rider.config import HazardConfig
from pogo_rider.hazards import CrashCause, check_crash, evaluate
from pogo_rider.rider import RiderState
from pogo_rider.terrain import default_terrain

VIEWPORT_HEIGHT = 720


class TestCrashChecks:
    def test_upright_rider_is_safe(self):
        rider = RiderState(x=120.0, y=400.0)
        assert check_crash(rider, default_terrain(), VIEWPORT_HEIGHT) is None

    def test_head_in_spikes(self):
        """Head point inside the first spike field, below the tips."""
        rider = RiderState(x=1294.0, y=450.0, angle=math.pi / 2)  # head at (1240, 450)
        assert check_crash(rider, default_terrain(), VIEWPORT_HEIGHT) is CrashCause.SPIKE_HEAD

    def test_body_on_spikes(self):
        """Head clear of the tips but the body bottom reaches into the spike base."""
        rider = RiderState(x=1240.0, y=420.0)
        assert check_crash(rider, default_terrain(), VIEWPORT_HEIGHT) is CrashCause.SPIKE_BODY

    def test_hopping_over_spikes_is_safe(self):
        rider = RiderState(x=1240.0, y=200.0)
        assert check_crash(rider, default_terrain(), VIEWPORT_HEIGHT) is None

    def test_head_in_ground(self):
        """Upside-down rider with the helmet buried in the ground."""
        rider = RiderState(x=120.0, y=490.0, angle=math.pi)
        assert check_crash(rider, default_terrain(), VIEWPORT_HEIGHT) is CrashCause.HEAD_IN_GROUND

    def test_body_in_ground(self):
        rider = RiderState(x=120.0, y=545.0)
        assert check_crash(rider, default_terrain(), VIEWPORT_HEIGHT) is CrashCause.BODY_IN_GROUND

    def test_fell_off_world(self):
        """The off-world line sits a fixed margin below the viewport."""
        rider = RiderState(x=120.0, y=500.0)
        terrain = default_terrain()
        assert check_crash(rider, terrain, 0) is CrashCause.OFF_WORLD
        assert check_crash(rider, terrain, VIEWPORT_HEIGHT) is None

    def test_tolerances_are_configurable(self):
        rider = RiderState(x=120.0, y=500.0)
        loose = HazardConfig(fall_margin=10_000.0)
        assert check_crash(rider, default_terrain(), 0, loose) is None


class TestEvaluate:
    def test_finish_reached(self):
        rider = RiderState(x=2150.0, y=300.0)
        outcome = evaluate(rider, default_terrain(), VIEWPORT_HEIGHT)
        assert outcome.finished is True
        assert outcome.crash is None

    def test_short_of_finish(self):
        rider = RiderState(x=2149.9, y=300.0)
        assert evaluate(rider, default_terrain(), VIEWPORT_HEIGHT).finished is False

    def test_crash_and_finish_both_reported(self):
        rider = RiderState(x=2200.0, y=495.0)
        outcome = evaluate(rider, default_terrain(), VIEWPORT_HEIGHT)
        assert outcome.crash is CrashCause.BODY_IN_GROUND
        assert outcome.finished is True
