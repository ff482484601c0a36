"""Command line entry point: run one simulated treatment session."""

from __future__ import annotations

import argparse
import random
import sys

from neureset.controller import TICK_MS, TREATMENT_DURATION_MS, NeuresetController
from neureset.device import DEFAULT_LOG_FILE, MENU_NEW_SESSION, Device
from neureset.eeg_site import Band


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="neureset", description="Simulate one neurofeedback treatment session."
    )
    parser.add_argument(
        "--band",
        choices=[band.name.lower() for band in Band],
        default="alpha",
        help="brainwave band used for the baseline (default: alpha)",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for the simulated signals")
    parser.add_argument(
        "--log-file",
        default=DEFAULT_LOG_FILE,
        help=f"file the session log is saved to (default: {DEFAULT_LOG_FILE})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    controller = NeuresetController(rng=random.Random(args.seed))
    device = Device(controller, log_path=args.log_file)
    device.band = Band.from_name(args.band)
    device.power_on()
    device.select_menu(MENU_NEW_SESSION)
    controller.clock.advance(TREATMENT_DURATION_MS + TICK_MS)
    device.power_off()
    sys.stdout.write(device.history)
    return 0