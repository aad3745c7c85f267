"""Core engine building blocks.

Scene description, prop readers, the template evaluation contract, the
segment sequencer, the track scheduler and playback state.
"""

from .scene import NodeKind, SceneNode
from .templates import (
    AnimationTemplate,
    EvaluationContext,
    RenderProps,
    SlotDefinition,
    SlotType,
    TemplateKind,
)
from .resources import MeasurementArena, ResourcePool
from .scheduler import TrackLocation, locate, reorder
from .playback import PlaybackState

__all__ = [
    "NodeKind",
    "SceneNode",
    "AnimationTemplate",
    "EvaluationContext",
    "RenderProps",
    "SlotDefinition",
    "SlotType",
    "TemplateKind",
    "MeasurementArena",
    "ResourcePool",
    "TrackLocation",
    "locate",
    "reorder",
    "PlaybackState",
]
