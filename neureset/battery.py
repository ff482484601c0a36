"""A battery that drains at a fixed rate while the device is on."""

from __future__ import annotations

import logging

from neureset.events import Clock, Signal, Timer

logger = logging.getLogger(__name__)

FULL_LEVEL = 100
DRAIN_INTERVAL_MS = 15000
DRAIN_STEP = 10
LOW_LEVEL = 20


class Battery:
    """Battery level in percent, lowered by ``DRAIN_STEP`` on every drain tick."""

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock = clock if clock is not None else Clock()
        self._level = FULL_LEVEL
        self.low_battery_warning = Signal()
        self.level_changed = Signal()
        self.depleted = Signal()
        self._timer = Timer(self.clock, DRAIN_INTERVAL_MS)
        self._timer.timeout.connect(self.consume_power)

    @property
    def level(self) -> int:
        return self._level

    @property
    def is_draining(self) -> bool:
        return self._timer.is_active()

    def start_consumption(self) -> None:
        self._timer.start(DRAIN_INTERVAL_MS)
        logger.debug("Battery consumption started.")

    def stop_consumption(self) -> None:
        if self._timer.is_active():
            self._timer.stop()

    def consume_power(self) -> None:
        """Drain one step, warning when low and stopping when empty."""
        self._level -= DRAIN_STEP
        if self._level <= 0:
            self._level = 0
            self.depleted.emit()
            self._timer.stop()
        elif self._level <= LOW_LEVEL:
            self.low_battery_warning.emit()
        self.level_changed.emit(self._level)
        logger.debug("Battery level is now at %d %%", self._level)