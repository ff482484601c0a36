"""The device front panel: power, menu, treatment controls and indicators."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from neureset.battery import Battery
from neureset.controller import INITIAL_TIME_TEXT, Chart, NeuresetController
from neureset.eeg_site import Band

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = "Session_Log.txt"

MENU_TIME_AND_DATE = "TIME AND DATE"
MENU_NEW_SESSION = "NEW SESSION"
MENU_SESSION_LOG = "SESSION LOG"

TREATMENT_IDLE = "#A9E6B3"
TREATMENT_ACTIVE = "green"
CONTACT_IDLE = "#B8D6F5"
CONTACT_ACTIVE = "blue"
CONTACT_LOST_IDLE = "pink"
CONTACT_LOST_ACTIVE = "red"

LOW_BATTERY_THRESHOLD = 20
LOW_BATTERY_TEXT = "Low Battery!"


@dataclass
class Controls:
    """Which front-panel controls can currently be used."""

    connect_sites: bool = False
    disconnect_site: bool = False
    pause: bool = False
    resume: bool = False
    stop: bool = False
    site_selector: bool = False
    eeg_wave: bool = False
    eeg_wave_selector: bool = False
    band_selector: bool = False


@dataclass
class Indicators:
    """Colours of the three status lights."""

    treatment: str = TREATMENT_IDLE
    contact: str = CONTACT_IDLE
    contact_lost: str = CONTACT_LOST_IDLE


class Device:
    """The device as its user sees it, wired to a controller and a battery."""

    def __init__(
        self,
        controller: NeuresetController | None = None,
        battery: Battery | None = None,
        log_path: str | os.PathLike[str] = DEFAULT_LOG_FILE,
    ) -> None:
        self.controller = controller if controller is not None else NeuresetController()
        self.battery = battery if battery is not None else Battery(self.controller.clock)
        self.log_path = Path(log_path)

        self.powered = False
        self.controls = Controls()
        self.indicators = Indicators()
        self.date_editor_visible = False
        self.date_time = datetime.now()
        self.band = Band.ALPHA
        self.treatment_time = INITIAL_TIME_TEXT
        self.progress = 0
        self.history = ""
        self.battery_level = self.battery.level
        self.battery_warning = ""

        self.reset()

        self.controller.lost_contact.connect(self.on_contact_lost)
        self.controller.treatment_delivered.connect(self.on_treatment_delivered)
        self.controller.reset.connect(self.reset)
        self.controller.time_updated.connect(self._on_time_updated)
        self.controller.progress_updated.connect(self._on_progress_updated)
        self.battery.level_changed.connect(self.on_battery_level)
        self.battery.depleted.connect(self.on_battery_depleted)

        self.log_path.unlink(missing_ok=True)

    @staticmethod
    def _require(allowed: bool, action: str) -> None:
        if not allowed:
            raise RuntimeError(f"cannot {action} now")

    def power_on(self) -> None:
        self.powered = True
        self.controls.eeg_wave = True
        self.controls.eeg_wave_selector = True
        self.controls.band_selector = True
        self.battery.start_consumption()

    def power_off(self) -> None:
        self.reset()
        self.powered = False
        self.controls.eeg_wave = False
        self.controls.eeg_wave_selector = False
        self.controls.band_selector = False
        self.controller.stop_timer()
        self.battery.stop_consumption()
        logger.debug("Battery consumption stopped.")

    def select_menu(self, item: str) -> None:
        """Activate a menu entry; entries other than the known ones only close the date editor."""
        self._require(self.powered, "use the menu while the device is off")
        self.date_editor_visible = item == MENU_TIME_AND_DATE
        if item == MENU_NEW_SESSION:
            self.controller.start_timer()
            self.controls.site_selector = True
            self.controls.disconnect_site = True
            self.controls.pause = True
            self.controls.resume = True
            self.controls.stop = True
            self.indicators.contact = CONTACT_ACTIVE
            self.controller.start_new_session(self.band)
        elif item == MENU_SESSION_LOG:
            self.history = self.controller.session_log()

    def pause_treatment(self) -> None:
        self._require(self.controls.pause, "pause the treatment")
        self.controller.pause_timer()
        self.indicators.treatment = TREATMENT_IDLE

    def continue_treatment(self) -> None:
        self._require(self.controls.resume, "continue the treatment")
        self.controller.resume_timer()
        self.indicators.treatment = TREATMENT_ACTIVE

    def stop_treatment(self) -> None:
        self._require(self.controls.stop, "stop the treatment")
        self.reset()
        self.controller.stop_timer()

    def disconnect_site(self, eeg_id: int) -> None:
        """Lose contact on one site, which also pauses the treatment."""
        self._require(self.controls.disconnect_site, "disconnect a site")
        self.controls.pause = False
        self.controls.resume = False
        logger.debug("disconnect site %d", eeg_id)
        self.controller.disconnect_site(eeg_id)
        self.controller.pause_timer()

    def connect_sites(self) -> None:
        self._require(self.controls.connect_sites, "reconnect the sites")
        logger.debug("reconnect sites")
        self.controls.pause = True
        self.controls.resume = True
        self.controller.reconnect_sites()
        self.controller.resume_timer()

    def set_date(self, value: datetime) -> None:
        self._require(self.date_editor_visible, "set the date")
        self.date_time = value
        logger.debug("The date time is now: %s", value)
        self.date_editor_visible = False

    def reset(self) -> None:
        """Return the indicators and treatment controls to their idle state."""
        self.indicators.treatment = TREATMENT_IDLE
        self.indicators.contact = CONTACT_IDLE
        self.indicators.contact_lost = CONTACT_LOST_IDLE
        self.controls.connect_sites = False
        self.controls.disconnect_site = False
        self.controls.pause = False
        self.controls.resume = False
        self.controls.stop = False
        self.controls.site_selector = False

    def eeg_chart(self, eeg_site: int, band: Band | str) -> Chart:
        self._require(self.controls.eeg_wave, "show an EEG waveform")
        return self.controller.generate_chart(eeg_site, band)

    def on_contact_lost(self, lost: bool) -> None:
        if lost:
            self.indicators.contact_lost = CONTACT_LOST_ACTIVE
            self.controls.connect_sites = True
            self.indicators.contact = CONTACT_IDLE
            self.indicators.treatment = TREATMENT_IDLE
        else:
            self.indicators.contact_lost = CONTACT_LOST_IDLE
            self.controls.connect_sites = False
            self.indicators.contact = CONTACT_ACTIVE
            self.indicators.treatment = TREATMENT_ACTIVE

    def on_treatment_delivered(self, delivered: bool) -> None:
        """Light the treatment signal when starting; save the log when finished."""
        if not delivered:
            self.indicators.treatment = TREATMENT_ACTIVE
            return
        self.reset()
        self.history = self.controller.session_log()
        try:
            self.log_path.write_text(self.history, encoding="utf-8")
        except OSError as error:
            logger.error("Error opening the file %s: %s", self.log_path, error)

    def on_battery_level(self, level: int) -> None:
        self.battery_level = level
        self.battery_warning = LOW_BATTERY_TEXT if level < LOW_BATTERY_THRESHOLD else ""

    def on_battery_depleted(self) -> None:
        logger.debug("Battery depleted. Device will now turn off.")
        self.power_off()

    def _on_time_updated(self, text: str) -> None:
        self.treatment_time = text

    def _on_progress_updated(self, progress: int) -> None:
        self.progress = progress