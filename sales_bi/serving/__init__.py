"""
Snapshot Serving Module
"""
from .snapshot import CurrentSnapshot, SnapshotManager

__all__ = [
    "CurrentSnapshot",
    "SnapshotManager",
]
