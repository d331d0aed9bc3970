"""DisplayLink driver installer for Ubuntu-family systems (Python-first, step-driven).

Core design goals:
- One-shot, operator-supervised run
- Fail fast on any external command failure
- Idempotent install/uninstall guarded by the vendor uninstaller marker
- Scoped temporary files, removed on every exit path
- Centralized logging
"""

__version__ = "2.1.0"

__all__ = ["__version__"]
