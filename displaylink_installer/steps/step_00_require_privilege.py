from __future__ import annotations

import logging

from ..context import RunContext
from ..errors import NotPrivilegedError

logger = logging.getLogger(__name__)


class RequirePrivilegeStep:
    step_id = "00_require_privilege"

    def run(self, ctx: RunContext) -> None:
        # Checked once, before anything mutates the system.
        if not ctx.invocation.is_privileged:
            raise NotPrivilegedError("This installer must be run as root. Please use 'sudo'.")
        logger.debug("Running with root privileges")
