"""Platform and controller capability detection."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

OSRELEASE_PATH = Path("/proc/sys/kernel/osrelease")


def is_wsl(osrelease: Path = OSRELEASE_PATH) -> bool:
    """True when running under the Windows Subsystem for Linux."""
    if not sys.platform.startswith("linux"):
        return False
    if os.getenv("WSL_DISTRO_NAME"):
        return True
    try:
        release = osrelease.read_text(encoding="utf-8")
    except OSError:
        return False
    return "microsoft" in release.lower()


@dataclass(frozen=True, slots=True)
class Capabilities:
    wsl: bool
    controller_enabled: bool


def detect(controller_requested: bool, controller_support: bool) -> Capabilities:
    """Fold the CLI flag and the joystick subsystem's availability into one flag."""
    wsl = is_wsl()
    enabled = controller_requested and controller_support
    if controller_requested and not enabled:
        logger.info("Controller input unavailable; keyboard only")
    if wsl:
        logger.debug("Running under WSL")
    return Capabilities(wsl=wsl, controller_enabled=enabled)
