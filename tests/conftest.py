"""Pytest configuration for path setup.

The package lives under ``src/``.  When pytest is executed without the
project being installed, neither the repository root nor ``src`` is on
``sys.path``.  This file ensures that both are available so that tests can
import ``bitflyer_client`` and the helpers under ``tests.helpers``.
"""

from __future__ import annotations

import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]

for path in (ROOT, ROOT / "src"):
    path_str = str(path)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)
