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

from typing import Any, Callable, Dict, Iterable, List, Mapping, NamedTuple, Optional

from tqdm import tqdm

from motionblocks.api.models import Asset, CameraSnapshot, Timeline, Track
from motionblocks.camera.rig import CameraPose, CameraRig
from motionblocks.config.settings import EngineSettings
from motionblocks.core.scene import NodeKind, SceneNode, empty_scene
from motionblocks.core.scheduler import frame_track_series, locate
from motionblocks.core.templates import AnimationTemplate, EvaluationContext, RenderProps, SlotType, TemplateKind
from motionblocks.templates import resolve_template
from motionblocks.utils.logging import log

AssetResolver = Callable[[str], Optional[Asset]]
CameraSaveCallback = Callable[[str, CameraSnapshot], None]

FONT_PROP = "globalFontUrl"
FLIP_WINDOW_PROP = "flipWindow"


class FrameResult(NamedTuple):
    """Everything a rendering surface needs for one global frame."""
    scene: SceneNode
    camera_pose: Optional[CameraPose] = None
    track_id: Optional[str] = None
    local_frame: Optional[int] = None


def resolver_from_assets(assets: Iterable[Asset]) -> AssetResolver:
    """Asset resolver backed by an in-memory list (last duplicate id wins)."""
    by_id = {asset.id: asset for asset in assets}
    return by_id.get


def _no_assets(asset_id: str) -> Optional[Asset]:
    return None


class Engine:
    """Per-frame evaluator for a timeline.

    The engine locates the active track, resolves its file slots, evaluates
    its template and steps the camera rig for any camera cue in the scene.
    Camera rigs are the only state carried between frames. They are kept per
    track and reset whenever frames stop arriving in order (seek, restart or
    a jump back), so a seek lands on the same pose as a fresh start.
    """

    def __init__(self, timeline: Timeline, resolver: Optional[AssetResolver] = None,
                 settings: Optional[EngineSettings] = None, context: Optional[EvaluationContext] = None,
                 font_url: Optional[str] = None, on_camera_save: Optional[CameraSaveCallback] = None):
        self.timeline = timeline
        self.resolver = resolver or _no_assets
        self.settings = settings or EngineSettings(fps=timeline.fps, width=timeline.width, height=timeline.height)
        self.context = context or EvaluationContext(fps=timeline.fps)
        self.font_url = font_url
        self.on_camera_save = on_camera_save
        self._rigs: Dict[str, CameraRig] = {}
        self._last_frame: Optional[int] = None

    @property
    def tracks(self) -> List[Track]:
        return self.timeline.tracks

    @property
    def total_frames(self) -> int:
        return self.timeline.duration_in_frames

    def set_tracks(self, tracks: List[Track]):
        """Swap in an edited track list; camera state is dropped."""
        self.timeline = self.timeline.model_copy(update={"tracks": list(tracks)})
        self.reset()

    def reset(self):
        """Forget all camera state after a seek or a timeline change."""
        for rig in self._rigs.values():
            rig.reset()
        self._last_frame = None

    def _rig(self, track_id: str) -> CameraRig:
        rig = self._rigs.get(track_id)
        if rig is None:
            def save(snapshot: CameraSnapshot):
                if self.on_camera_save is not None:
                    self.on_camera_save(track_id, snapshot)
            rig = self._rigs[track_id] = CameraRig(aspect=self.settings.aspect, on_save=save)
        return rig

    def _resolve_value(self, value: Any) -> Optional[Asset]:
        if value is None or isinstance(value, Asset):
            return value
        if isinstance(value, Mapping):
            return Asset.model_validate(value)
        asset = self.resolver(str(value))
        if asset is None:
            log.warning(f"Asset '{value}' could not be resolved")
        return asset

    def resolve_slots(self, template: AnimationTemplate, track: Track) -> Dict[str, Any]:
        """Slot values for a track, with file slots swapped for resolved assets.

        The first file slot falls back to the track's ``asset_id``.
        """
        assets = {}
        first_file = True
        for slot in template.slots:
            value = track.template_props.get(slot.id)
            if slot.type == SlotType.FILE:
                if value is None and first_file:
                    value = track.asset_id
                first_file = False
                value = self._resolve_value(value)
            assets[slot.id] = value
        return assets

    def _props(self, template: AnimationTemplate, track: Track) -> Dict[str, Any]:
        slot_ids = {slot.id for slot in template.slots}
        props = {k: v for k, v in track.template_props.items() if k not in slot_ids}
        if self.font_url and FONT_PROP not in props:
            props[FONT_PROP] = self.font_url
        if template.kind == TemplateKind.COUNTER:
            props.setdefault(FLIP_WINDOW_PROP, self.settings.flip_window)
        return props

    def suggest_duration(self, track: Track) -> Optional[int]:
        """Auto-duration the track's template suggests for its current inputs."""
        template = resolve_template(track.template)
        if template is None:
            return None
        return template.suggested_duration(self.resolve_slots(template, track), self._props(template, track))

    def _evaluate_track(self, track: Track, local_frame: int) -> Optional[SceneNode]:
        template = resolve_template(track.template)
        if template is None:
            return None
        try:
            render_props = RenderProps(
                frame=local_frame,
                duration=track.duration,
                assets=self.resolve_slots(template, track),
                props=self._props(template, track),
                element_id=track.id,
            )
        except Exception as e:
            log.error(f"Could not prepare track '{track.id}' at frame {local_frame}: {e}")
            return None
        return template.evaluate(render_props, self.context)

    def _step_camera(self, track: Track, scene: Optional[SceneNode], frame: int) -> Optional[CameraPose]:
        if scene is None:
            return None
        cues = scene.find_kind(NodeKind.CAMERA)
        if not cues:
            return None
        rig = self._rig(track.id)
        return rig.step(cues[0].attrs["cue"], frame, self.settings.frame_dt)

    def evaluate_frame(self, frame: int) -> FrameResult:
        """Evaluate one global frame; never raises.

        Frames outside every track give an empty scene and no camera pose.
        """
        if self._last_frame is None or frame != self._last_frame + 1:
            self.reset()
        self._last_frame = frame

        location = locate(frame, self.tracks)
        if location is None:
            return FrameResult(empty_scene())
        track, local_frame = location
        scene = self._evaluate_track(track, local_frame)
        try:
            pose = self._step_camera(track, scene, local_frame)
        except Exception as e:
            log.error(f"Camera step failed on track '{track.id}' at frame {frame}: {e}")
            pose = None

        root = empty_scene()
        root.position = (track.position.x, track.position.y, 0.0)
        return FrameResult(root.add(scene), pose, track.id, local_frame)

    def save_camera(self, track_id: str) -> Optional[Dict[str, List[float]]]:
        """Snapshot the track's current camera and return the props that pin it.

        Returns None when the track has not produced a camera pose yet.
        """
        rig = self._rigs.get(track_id)
        snapshot = rig.save() if rig is not None else None
        if snapshot is None:
            return None
        return snapshot.to_props()

    def render_range(self, start: int = 0, end: Optional[int] = None,
                     show_progress: Optional[bool] = None) -> List[FrameResult]:
        """Evaluate ``[start, end)`` in order, as an offline sweep would."""
        end = self.total_frames if end is None else end
        if end <= start:
            return []
        coverage = frame_track_series(self.tracks, end).iloc[start:end]
        log.info(f"Rendering frames {start}-{end - 1} across {coverage.nunique()} track(s)", log.BLUE)
        self.reset()
        show = self.settings.show_progress if show_progress is None else show_progress
        results = [
            self.evaluate_frame(frame)
            for frame in tqdm(range(start, end), desc="MotionBlocks frames", unit="frame", disable=not show)
        ]
        log.info(f"Rendered {len(results)} frames", log.GREEN)
        return results
