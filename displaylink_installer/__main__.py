from __future__ import annotations

from displaylink_installer.main import main

if __name__ == "__main__":
    raise SystemExit(main())
