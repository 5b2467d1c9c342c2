"""Static game data access.

Exports:
    DataRegistry: Immutable economy/activity/map container passed into the engine.
"""

from __future__ import annotations

from shitbox_engine.data.registry import DataRegistry


__all__ = ["DataRegistry"]
