"""
Tests for the simulated clock's Running and Paused states.
"""

import pytest

from planet_generator.runtime import SimulatedClock


class TestClock:
    """Time only advances while running."""

    def test_update_scales_delta(self):
        """A running clock advances by delta * time scale."""
        clock = SimulatedClock(time_scale=2.0)
        clock.update(1.5)
        assert clock.current_time == pytest.approx(3.0)

    def test_paused_clock_does_not_advance(self):
        """update is ignored while paused."""
        clock = SimulatedClock()
        clock.pause()
        clock.update(10.0)
        assert clock.current_time == 0.0
        clock.resume()
        clock.update(1.0)
        assert clock.current_time == pytest.approx(1.0)

    def test_negative_delta_ignored(self):
        """Time never runs backwards through update."""
        clock = SimulatedClock()
        clock.update(-5.0)
        assert clock.current_time == 0.0

    def test_fast_forward_while_paused(self):
        """fast_forward applies regardless of the run state."""
        clock = SimulatedClock(paused=True)
        clock.fast_forward(1_000_000)
        assert clock.current_time == 1_000_000

    def test_rewind_stops_at_zero(self):
        """Rewinding past the start clamps to zero."""
        clock = SimulatedClock()
        clock.fast_forward(50)
        clock.rewind(20)
        assert clock.current_time == 30
        clock.rewind(100)
        assert clock.current_time == 0.0

    def test_reset(self):
        """reset returns to year zero."""
        clock = SimulatedClock()
        clock.update(4.0)
        clock.reset()
        assert clock.current_time == 0.0

    def test_current_time_read_only(self):
        """current_time cannot be assigned."""
        clock = SimulatedClock()
        with pytest.raises(AttributeError):
            clock.current_time = 5.0
