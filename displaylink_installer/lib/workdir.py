from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ..errors import WorkdirError

logger = logging.getLogger(__name__)


@contextmanager
def scoped_workdir(parent: Optional[str] = None, *, prefix: str = "displaylink-") -> Iterator[Path]:
    """Private temporary directory, removed when the block exits for any reason.

    Any exception (including KeyboardInterrupt and the interrupt error raised
    by our signal handlers) passes through the finally block.
    """

    try:
        if parent:
            Path(parent).mkdir(parents=True, exist_ok=True)
        path = Path(tempfile.mkdtemp(prefix=prefix, dir=parent))
    except OSError as e:
        raise WorkdirError(f"Could not create a temporary directory: {e}") from e
    logger.debug("Created temporary directory %s", path)
    try:
        yield path
    finally:
        logger.info("Cleaning up temporary files...")
        shutil.rmtree(path, ignore_errors=True)
        if path.exists():
            logger.warning("Temporary directory %s could not be fully removed", path)
        else:
            logger.debug("Removed temporary directory %s", path)
