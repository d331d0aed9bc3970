from __future__ import annotations

import logging
from pathlib import Path

from ..context import RunContext
from ..errors import StaleCleanupError
from ..logging_utils import SUCCESS

logger = logging.getLogger(__name__)


class CleanupStaleStateStep:
    step_id = "40_cleanup_stale_state"

    def run(self, ctx: RunContext) -> None:
        logger.info("Cleaning up previous installation attempts...")
        removed: list[str] = []
        for raw in ctx.config.stale_paths:
            p = Path(raw)
            if p.is_file() or p.is_symlink():
                try:
                    p.unlink()
                except OSError as e:
                    raise StaleCleanupError(f"Could not remove stale file {p}: {e}") from e
                removed.append(str(p))
                logger.info("Removed %s", p)
        ctx.decisions["stale_removed"] = removed
        logger.log(SUCCESS, "Cleanup completed")
