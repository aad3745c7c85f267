# Copyright (C) 2023 Deforum LLC
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, version 3 of the License.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

# Contact the authors: https://deforum.github.io/

from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Dict, List, Optional, Tuple
from enum import Enum

Vector3 = Tuple[float, float, float]


class AssetType(str, Enum):
    """Kind of content an asset carries."""
    IMAGE = "image"
    VIDEO = "video"
    SVG = "svg"
    TEXT = "text"


class Asset(BaseModel):
    """Resolved asset descriptor handed to templates.

    File-type slots reference assets by id; the engine swaps the id for this
    descriptor before a template sees it. ``src`` is an opaque locator owned by
    the host; the engine never opens it.
    """
    model_config = ConfigDict(
        frozen=True,
        extra='ignore',
        json_schema_extra={
            "example": {"id": "logo", "type": "image", "src": "/assets/logo.png"}
        }
    )

    id: str = Field(description="Unique asset identifier")
    type: AssetType = Field(description="Asset content type")
    src: Optional[str] = Field(default=None, description="Opaque locator for image/video/svg data")
    content: Optional[str] = Field(default=None, description="Inline text content")
    name: Optional[str] = Field(default=None, description="Display name")

    @property
    def is_media(self) -> bool:
        return self.type in (AssetType.IMAGE, AssetType.VIDEO, AssetType.SVG)


class Position(BaseModel):
    """2D offset applied to a track's scene root."""
    x: float = 0.0
    y: float = 0.0


class Track(BaseModel):
    """One scheduled template instance on the timeline.

    Tracks are half-open intervals ``[start_frame, start_frame + duration)``.
    Both snake_case names and the camelCase JSON spelling are accepted.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        extra='ignore',
        json_schema_extra={
            "example": {
                "id": "t1",
                "template": "counter",
                "startFrame": 0,
                "duration": 90,
                "templateProps": {"endValue": 250, "suffix": "%"}
            }
        }
    )

    id: str = Field(description="Unique track identifier")
    template: str = Field(description="Template id, e.g. 'kinetic-text'")
    start_frame: int = Field(default=0, ge=0, alias="startFrame", description="First global frame of the track")
    duration: int = Field(gt=0, description="Number of frames the track occupies")
    template_props: Dict[str, Any] = Field(
        default_factory=dict,
        alias="templateProps",
        description="Slot values and template props (camelCase keys)"
    )
    position: Position = Field(default_factory=Position, description="Offset of the track's scene root")
    asset_id: Optional[str] = Field(default=None, alias="assetId", description="Primary asset, if any")

    @property
    def end_frame(self) -> int:
        """First frame after the track (exclusive end)."""
        return self.start_frame + self.duration

    def contains(self, frame: int) -> bool:
        return self.start_frame <= frame < self.end_frame


class Timeline(BaseModel):
    """Ordered list of tracks plus output format."""
    model_config = ConfigDict(populate_by_name=True)

    fps: int = Field(default=30, gt=0, description="Frames per second")
    width: int = Field(default=1920, gt=0, description="Canvas width in pixels")
    height: int = Field(default=1080, gt=0, description="Canvas height in pixels")
    tracks: List[Track] = Field(default_factory=list, description="Tracks in playback order")

    @property
    def duration_in_frames(self) -> int:
        """Total length, derived as the sum of track durations."""
        return sum(track.duration for track in self.tracks)

    @property
    def aspect(self) -> float:
        return self.width / self.height


class ProjectSettings(BaseModel):
    """Global project output settings."""
    model_config = ConfigDict(populate_by_name=True)

    fps: int = Field(default=30, gt=0)
    width: int = Field(default=1920, gt=0)
    height: int = Field(default=1080, gt=0)
    global_font_url: Optional[str] = Field(default=None, alias="globalFontUrl")
    global_font_preset: str = Field(default="custom", alias="globalFontPreset")


class ProjectMetadata(BaseModel):
    """Descriptive project metadata (timestamps are Unix epoch milliseconds)."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Unique project identifier")
    name: str = Field(description="Project name")
    description: Optional[str] = Field(default=None)
    created_at: float = Field(alias="createdAt")
    updated_at: float = Field(alias="updatedAt")
    version: str = Field(default="1.0.0")


class Project(BaseModel):
    """Complete project: metadata, settings, assets and tracks."""
    metadata: ProjectMetadata
    settings: ProjectSettings = Field(default_factory=ProjectSettings)
    assets: List[Asset] = Field(default_factory=list)
    tracks: List[Track] = Field(default_factory=list)

    def timeline(self) -> Timeline:
        """Timeline view of the project for the engine."""
        return Timeline(
            fps=self.settings.fps,
            width=self.settings.width,
            height=self.settings.height,
            tracks=list(self.tracks),
        )


class CameraSnapshot(BaseModel):
    """One-way snapshot of a damped camera pose.

    Saved snapshots are written back to a track as the ``cameraPosition`` and
    ``cameraTarget`` props, which templates with a fixed camera then honor.
    """
    model_config = ConfigDict(frozen=True)

    position: Vector3 = Field(description="Camera position (x, y, z)")
    target: Vector3 = Field(description="Look-at point (x, y, z)")
    fov: float = Field(gt=0, lt=180, description="Vertical field of view in degrees")

    def to_props(self) -> Dict[str, List[float]]:
        """Props update that pins this pose on a track."""
        return {
            "cameraPosition": [float(v) for v in self.position],
            "cameraTarget": [float(v) for v in self.target],
        }
