"""Console diagnostics shared by the discovery and link stages."""

from __future__ import annotations

import sys


def warn(msg: str) -> None:
    print(f"Warning: {msg}", file=sys.stderr)
