from __future__ import annotations

import os


def is_privileged() -> bool:
    """True when running with an effective UID of root."""

    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0
