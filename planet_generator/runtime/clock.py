# planet_generator/runtime/clock.py

"""
================================================================================
SIMULATED CLOCK
================================================================================
This module provides a self-contained, data-only class for tracking simulated
planetary time, measured in abstract years. It is designed to be driven once
per frame by the animation loop.

Data Contract:
---------------
- Inputs (on initialization):
    - time_scale (float): Simulated years per real second.
- Public Methods:
    - update(real_delta_time): Advances the clock while running.
    - pause() / resume(): Toggle between the Running and Paused states.
    - set_speed(new_scale): Changes the speed of time.
    - fast_forward(amount) / rewind(amount): Coarse jumps, regardless of state.
    - reset(): Back to zero.
- Public Properties:
    - current_time (float, read-only).
- Side Effects: None.
- Invariants: current_time never decreases while running and never drops
  below zero.
================================================================================
"""


class SimulatedClock:
    """Manages the passage of simulated time."""

    def __init__(self, time_scale: float = 1.0, paused: bool = False):
        self.time_scale = max(0.0, time_scale)
        self.is_paused = paused
        self._current_time = 0.0

    @property
    def current_time(self) -> float:
        return self._current_time

    def update(self, real_delta_time: float):
        """
        Advances the clock by a given amount of real-world time.

        Args:
            real_delta_time (float): The time elapsed in the real world, in seconds.
        """
        if self.is_paused or self.time_scale <= 0 or real_delta_time <= 0:
            return

        self._current_time += real_delta_time * self.time_scale

    def pause(self):
        self.is_paused = True

    def resume(self):
        self.is_paused = False

    def set_speed(self, new_scale: float):
        """
        Sets the number of simulated years per real second.
        Negative values are treated as 0 (frozen).
        """
        self.time_scale = max(0.0, new_scale)

    def fast_forward(self, amount: float):
        """Jumps forward by `amount` simulated years, even while paused."""
        self._current_time = max(0.0, self._current_time + amount)

    def rewind(self, amount: float):
        """Jumps back by `amount` simulated years, stopping at zero."""
        self._current_time = max(0.0, self._current_time - amount)

    def reset(self):
        self._current_time = 0.0
