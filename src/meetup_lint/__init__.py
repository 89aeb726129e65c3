"""
meetup-lint — package root

Purpose
- Validate and auto-correct meetup issue records with a dependency-ordered
  rule pipeline.

Import boundary
- Must not have side effects at import time (no config loading, no logging init).
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
