"""MotionBlocks data model.

Pydantic models for assets, tracks, timelines and projects. These are plain
validated records: the engine reads them, and nothing here performs I/O.
"""

from .models import (
    Asset,
    AssetType,
    CameraSnapshot,
    Position,
    Project,
    ProjectMetadata,
    ProjectSettings,
    Timeline,
    Track,
)

__all__ = [
    "Asset",
    "AssetType",
    "CameraSnapshot",
    "Position",
    "Project",
    "ProjectMetadata",
    "ProjectSettings",
    "Timeline",
    "Track",
]
