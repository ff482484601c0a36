"""The treatment controller: EEG sites, session timing, treatment rounds and logs."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from neureset.eeg_site import (
    MAX_NUM_SESSIONS,
    NUM_EEG_SITES,
    ROUND_TIME_MS,
    SAMPLES,
    Band,
    EEGSite,
)
from neureset.events import Clock, ElapsedTimer, Signal, Timer

logger = logging.getLogger(__name__)

TOTAL_ROUNDS = 4
OFFSET_STEP_HZ = 5
TICK_MS = 1000
PAUSE_LIMIT_MS = 5000
TREATMENT_DURATION_MS = 60000
INITIAL_TIME_TEXT = "01:00"


@dataclass
class Chart:
    """A line chart of one band recorded at one EEG site."""

    title: str
    points: list[tuple[int, int]]
    x_range: tuple[int, int] = (0, SAMPLES)
    y_range: tuple[int, int] = (0, 30)
    x_title: str = "time"
    y_title: str = "frequency"
    legend_visible: bool = False


@dataclass
class _SessionRecord:
    started_at: datetime
    before: list[int] = field(default_factory=list)
    after: list[int] = field(default_factory=list)


def _format_timestamp(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{moment:%d/%m/%y} {hour:02d}:{moment:%M:%S} {meridiem}"


class NeuresetController:
    """Runs treatment sessions over the EEG sites on a simulated clock."""

    def __init__(
        self,
        clock: Clock | None = None,
        rng: random.Random | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self.clock = clock if clock is not None else Clock()
        self._rng = rng if rng is not None else random.Random()
        self._now = now if now is not None else datetime.now

        self.lost_contact = Signal()
        self.treatment_delivered = Signal()
        self.time_updated = Signal()
        self.progress_updated = Signal()
        self.reset = Signal()

        self.sites = [EEGSite(i + 1, self._rng) for i in range(NUM_EEG_SITES)]
        for eeg_site in self.sites:
            eeg_site.contact_lost.connect(self.on_contact_lost)

        self.is_paused = False
        self.is_started = False
        self.current_round = 0
        self.history = ""
        self._is_resumed = False
        self._paused_time = 0
        self._pause_offset = 0
        self._sessions: list[_SessionRecord] = []
        self._before: list[int] = []
        self._session_started: datetime | None = None

        self._elapsed = ElapsedTimer(self.clock)
        self._treatment_timer = Timer(self.clock, TICK_MS)
        self._treatment_timer.timeout.connect(self.update_timer)
        self._pause_timer = Timer(self.clock, PAUSE_LIMIT_MS, single_shot=True)
        self._pause_timer.timeout.connect(self.handle_pause_timeout)
        self._round_timer = Timer(self.clock, ROUND_TIME_MS)
        self._round_timer.timeout.connect(self.handle_treatment_round)

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    def site(self, eeg_id: int) -> EEGSite:
        """Return the site numbered ``eeg_id`` (1-based)."""
        if not 1 <= eeg_id <= NUM_EEG_SITES:
            raise IndexError(f"no EEG site #{eeg_id}")
        return self.sites[eeg_id - 1]

    def disconnect_site(self, eeg_id: int) -> None:
        self.site(eeg_id).disconnect()

    def reconnect_sites(self) -> None:
        for eeg_site in self.sites:
            if not eeg_site.is_connected:
                eeg_site.reconnect()

    def start_timer(self) -> None:
        self._elapsed.start()
        self._paused_time = 0
        self._pause_offset = 0
        self.is_paused = False
        self._treatment_timer.start(TICK_MS)
        self.is_started = True

    def pause_timer(self) -> None:
        if self.is_paused or not self.is_started:
            return
        self._treatment_timer.stop()
        self._round_timer.stop()
        self._paused_time = self._elapsed.elapsed()
        self.is_paused = True
        self._pause_timer.start(PAUSE_LIMIT_MS)

    def resume_timer(self) -> None:
        if not (self.is_paused and self.is_started):
            return
        self._pause_offset += self._elapsed.elapsed() - self._paused_time
        self._treatment_timer.start(TICK_MS)
        self.is_paused = False
        self._pause_timer.stop()

        in_round = (self._elapsed.elapsed() - self._pause_offset) % ROUND_TIME_MS
        self._is_resumed = True
        self._round_timer.start(ROUND_TIME_MS - in_round)

    def stop_timer(self) -> None:
        if not self.is_started:
            return
        self._treatment_timer.stop()
        self._elapsed.restart()
        self.is_paused = False
        self._paused_time = 0
        self._pause_offset = 0
        self.time_updated.emit(INITIAL_TIME_TEXT)
        self._round_timer.stop()
        self.current_round = 0
        self.is_started = False
        self.progress_updated.emit(0)

    def start_new_session(self, band: Band | str) -> None:
        """Measure baselines for ``band`` at every site and start the treatment rounds."""
        if len(self._sessions) >= MAX_NUM_SESSIONS:
            raise RuntimeError(f"at most {MAX_NUM_SESSIONS} sessions can be logged")
        logger.debug("Starting new session")
        self.current_round = 1
        self._before = [
            eeg_site.calculate_baseline(eeg_site.waveform(band)) for eeg_site in self.sites
        ]
        self.treatment_delivered.emit(False)
        self._round_timer.start()

    def session_log_to_string(self, session: int) -> str:
        if not 0 <= session < len(self._sessions):
            raise IndexError(f"no session #{session}")
        record = self._sessions[session]
        lines = []
        for number, (before, after) in enumerate(zip(record.before, record.after), start=1):
            logger.info("EEG site # %d : %d hz -> %d hz", number, before, after)
            lines.append(f"EEG site #{number}: {before}hz -> {after}hz\n")
        return "".join(lines) + "\n"

    def session_log(self) -> str:
        """Return the log of every completed session, oldest first."""
        parts = []
        for index, record in enumerate(self._sessions):
            stamp = _format_timestamp(record.started_at)
            logger.info("Session # %d At: %s", index + 1, stamp)
            parts.append(f"Session #{index + 1}, At:{stamp}\n")
            parts.append(self.session_log_to_string(index))
        self.history = "".join(parts)
        return self.history

    def generate_chart(self, eeg_site: int, band: Band | str) -> Chart:
        data = self.site(eeg_site).waveform(band)
        return Chart(title=f"EEG Waveform #{eeg_site}", points=list(enumerate(data)))

    def on_contact_lost(self, lost: bool) -> None:
        if lost:
            logger.debug("controller receives contact lost from EEG site")
        else:
            logger.debug("controller receives contact restored from EEG site")
        self.lost_contact.emit(lost)

    def update_timer(self) -> None:
        current = self._elapsed.elapsed() - self._pause_offset
        remaining = TREATMENT_DURATION_MS - current
        if remaining < 0:
            remaining = 0
            self.stop_timer()
        minutes, seconds = divmod((remaining // 1000) % 3600, 60)
        self.time_updated.emit(f"{minutes:02d}:{seconds:02d}")
        self.progress_updated.emit(100 - (remaining * 100) // TREATMENT_DURATION_MS)

    def handle_pause_timeout(self) -> None:
        logger.debug("Pause timeout reached. Ending session.")
        self.stop_timer()
        self.reset.emit()

    def handle_treatment_round(self) -> None:
        offset = self.current_round * OFFSET_STEP_HZ
        logger.info("Beginning round # %d with %d Hz offset frequency", self.current_round, offset)

        if self.current_round == 1 or self._session_started is None:
            self._session_started = self._now()
            self._before = [eeg_site.baseline for eeg_site in self.sites]

        for eeg_site in self.sites:
            eeg_site.deliver_treatment(offset)

        logger.info("Round # %d completed", self.current_round)

        if self._is_resumed and self._round_timer.interval != ROUND_TIME_MS:
            self._round_timer.start(ROUND_TIME_MS)
            self._is_resumed = False

        if self.current_round == TOTAL_ROUNDS:
            self._round_timer.stop()
            logger.debug("Treatment session completed")
            self._sessions.append(
                _SessionRecord(
                    started_at=self._session_started,
                    before=list(self._before),
                    after=[eeg_site.baseline for eeg_site in self.sites],
                )
            )
            self._session_started = None
            self.treatment_delivered.emit(True)
            return

        self.current_round += 1