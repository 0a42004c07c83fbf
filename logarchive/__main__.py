"""Allow ``python -m logarchive`` to run one sync pass."""

from __future__ import annotations

import sys

from logarchive.app.main import main


if __name__ == "__main__":
    sys.exit(main())
