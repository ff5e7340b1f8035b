"""Quadrature encoder simulation of the Atari ST mouse."""

from __future__ import annotations

import random
import time
from typing import Callable, Optional, Tuple

from .util import rotl, rotr

MOUSE_MASK = 0x33333333
MAX_SPEED = 50000.0
MIN_PERIOD_US = 650


def _now_us() -> int:
    return time.monotonic_ns() // 1000


class AtariSTMouse:
    """Rotates the X and Y encoder registers at a rate set by the mouse speed.

    ``clock`` returns the current time in microseconds.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], int]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._clock = clock if clock is not None else _now_us
        rng = rng if rng is not None else random.Random()
        # The real encoder starts at an arbitrary phase; some software relies on it.
        self.x_reg = rotl(MOUSE_MASK, rng.randrange(16))
        self.y_reg = rotl(self.x_reg, rng.randrange(16))
        self.x_period_us = 0
        self.y_period_us = 0
        self._last_x_us = self._last_y_us = self._clock()

    @staticmethod
    def _period(speed: int) -> int:
        if speed == 0:
            return 0
        period = int(MAX_SPEED / speed)
        if speed > 0 and period < MIN_PERIOD_US:
            return MIN_PERIOD_US
        if speed < 0 and period > -MIN_PERIOD_US:
            return -MIN_PERIOD_US
        return period

    def set_speed(self, x: int, y: int) -> None:
        """Set the speed on each axis; the sign gives the direction, 0 stops."""
        self.x_period_us = self._period(x)
        self.y_period_us = self._period(y)

    def update(self) -> None:
        """Rotate any axis whose period has elapsed since its last rotation."""
        now = self._clock()
        if self.x_period_us and now > self._last_x_us + abs(self.x_period_us):
            self._last_x_us = now
            self.x_reg = rotr(self.x_reg, 1) if self.x_period_us > 0 else rotl(self.x_reg, 1)
        if self.y_period_us and now > self._last_y_us + abs(self.y_period_us):
            self._last_y_us = now
            self.y_reg = rotr(self.y_reg, 1) if self.y_period_us > 0 else rotl(self.y_reg, 1)

    def tick(self) -> Tuple[int, int]:
        """Return the current X and Y encoder registers."""
        return self.x_reg, self.y_reg