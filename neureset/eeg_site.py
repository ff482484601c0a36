"""An EEG electrode site: recorded brainwave bands, baseline and treatment."""

from __future__ import annotations

import enum
import logging
import random
from collections.abc import Sequence

from neureset.events import Signal

logger = logging.getLogger(__name__)

NUM_EEG_SITES = 21
MAX_NUM_SESSIONS = 5
ROUND_TIME_MS = 15000

SAMPLES = 60
TREATMENT_STEPS = 16
MIN_FREQUENCY = 0
MAX_FREQUENCY = 40
UNSET_BASELINE = -1


class Band(enum.Enum):
    """Brainwave bands, keyed by their initial letter."""

    ALPHA = "a"
    BETA = "b"
    DELTA = "d"
    THETA = "t"

    @classmethod
    def from_name(cls, name: str) -> Band:
        """Pick a band by the first letter of its name; anything unrecognised is theta."""
        if not name:
            raise ValueError("band name must not be empty")
        initial = name[0].lower()
        for band in (cls.ALPHA, cls.BETA, cls.DELTA):
            if band.value == initial:
                return band
        return cls.THETA

    @property
    def frequency_range(self) -> tuple[int, int]:
        """Inclusive range of frequencies, in Hz, generated for this band."""
        return _BAND_RANGES[self]


_BAND_RANGES = {
    Band.ALPHA: (8, 12),
    Band.BETA: (12, 30),
    Band.DELTA: (1, 4),
    Band.THETA: (4, 7),
}


def _truncating_div(total: int, count: int) -> int:
    quotient = abs(total) // count
    return -quotient if total < 0 else quotient


class EEGSite:
    """One electrode site with a baseline frequency and four recorded bands."""

    def __init__(self, site_id: int = 1, rng: random.Random | None = None) -> None:
        self.id = site_id
        self.is_connected = True
        self.baseline = UNSET_BASELINE
        self.contact_lost = Signal()
        self._rng = rng if rng is not None else random.Random()
        self._waveforms: dict[Band, list[int]] = {}
        self.generate_waveforms()

    def generate_waveforms(self) -> None:
        """Record a fresh set of samples for every band."""
        for band in (Band.ALPHA, Band.BETA, Band.DELTA, Band.THETA):
            low, high = band.frequency_range
            self._waveforms[band] = [self._rng.randint(low, high) for _ in range(SAMPLES)]

    def calculate_baseline(self, data: Sequence[int]) -> int:
        """Set the baseline to the integer mean of ``data`` and return it."""
        if not data:
            raise ValueError("cannot calculate a baseline from no samples")
        self.baseline = _truncating_div(sum(data), len(data))
        return self.baseline

    def deliver_treatment(self, offset_frequency: int) -> int:
        """Apply the offset frequency for the treatment steps; return the new baseline."""
        if offset_frequency < 0:
            raise ValueError("offset frequency must not be negative")
        initial = self.baseline
        for _ in range(TREATMENT_STEPS):
            self.baseline = self._next_baseline(self.baseline, offset_frequency)
        logger.info(
            "Site #%d has now been treated and has gone from %dhz to %dhz",
            self.id,
            initial,
            self.baseline,
        )
        return self.baseline

    def _next_baseline(self, baseline: int, offset_frequency: int) -> int:
        spread = offset_frequency // 5
        changed = baseline + self._rng.randint(-spread, spread)
        return max(MIN_FREQUENCY, min(MAX_FREQUENCY, changed))

    def disconnect(self) -> None:
        logger.debug("contact lost on #%d", self.id)
        self.is_connected = False
        self.contact_lost.emit(True)

    def reconnect(self) -> None:
        logger.debug("contact reconnected on #%d", self.id)
        self.is_connected = True
        self.contact_lost.emit(False)

    def waveform(self, band: Band | str) -> list[int]:
        """Return a copy of the samples recorded for ``band`` (a Band or a band name)."""
        if not isinstance(band, Band):
            band = Band.from_name(band)
        return list(self._waveforms[band])