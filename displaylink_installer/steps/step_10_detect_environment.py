from __future__ import annotations

import logging

from ..context import EnvironmentProbe, RunContext
from ..errors import UnsupportedPlatformError, WorkflowStopped
from ..lib.hwdetect import detect_distribution, detect_usb_devices, is_supported
from ..logging_utils import SUCCESS
from ..prompts import confirm

logger = logging.getLogger(__name__)


class DetectEnvironmentStep:
    step_id = "10_detect_environment"

    def _check_distribution(self, ctx: RunContext) -> tuple[str, str]:
        cfg = ctx.config
        info = detect_distribution(cfg.os_release_path)
        if not info:
            logger.warning("Could not determine the distribution; assuming Ubuntu")
            return "Ubuntu", ""

        name = info.get("NAME") or info.get("ID") or "unknown"
        version = info.get("VERSION_ID", "")
        if not is_supported(info, cfg.supported_distributions):
            raise UnsupportedPlatformError(
                f"This installer is designed for Ubuntu-based systems. Detected: {name} {version}".rstrip()
            )
        logger.log(SUCCESS, "Detected %s %s", name, version)
        return name, version

    def run(self, ctx: RunContext) -> None:
        cfg = ctx.config
        name, version = self._check_distribution(ctx)

        logger.info("Checking for %s devices...", cfg.usb_vendor_name)
        devices = detect_usb_devices(vendor_ids=cfg.usb_vendor_ids, vendor_name=cfg.usb_vendor_name)
        ctx.probe = EnvironmentProbe(
            distribution_name=name,
            distribution_version=version,
            detected_devices=devices,
        )

        if devices:
            for d in devices:
                logger.log(SUCCESS, "%s device detected: %s", cfg.usb_vendor_name, d)
            return

        logger.warning("No %s device detected.", cfg.usb_vendor_name)
        logger.info("Please ensure your %s dock is connected via USB.", cfg.usb_vendor_name)
        if not confirm(ctx.prompter, "Continue anyway?", default=False):
            raise WorkflowStopped("Exiting without changes.")
        logger.info("Continuing without a detected device")
