"""Abstract scene description produced by templates.

A :class:`SceneNode` tree is the only output of template evaluation. It names
what to draw (text, shapes, media planes) and where, and leaves rasterization
to an external surface. Nodes compare by value, so two evaluations of the
same frame can be checked for bit-identical output with ``==``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

Vec3 = Tuple[float, float, float]

ORIGIN: Vec3 = (0.0, 0.0, 0.0)
UNIT_SCALE: Vec3 = (1.0, 1.0, 1.0)


class NodeKind(str, Enum):
    """Closed set of primitives a rendering surface must understand."""
    GROUP = "group"
    TEXT = "text"
    BOX = "box"
    PLANE = "plane"
    IMAGE = "image"
    VIDEO = "video"
    SPHERE = "sphere"
    CIRCLE = "circle"
    RING = "ring"
    CYLINDER = "cylinder"
    LINE = "line"
    SPRITE = "sprite"
    CAMERA = "camera"


@dataclass
class SceneNode:
    """One node of the scene tree.

    ``size`` holds geometry arguments whose meaning depends on ``kind``
    (font size for text, ``(w, h)`` for planes, ``(w, h, d)`` for boxes,
    ``(radius,)`` for spheres and circles, ``(inner, outer)`` for rings,
    ``(radius_top, radius_bottom, height)`` for cylinders).
    ``attrs`` carries anything else the surface needs (clip ranges, anchor,
    emissive flags, line points, camera cues).
    """
    kind: NodeKind
    key: str = ""
    position: Vec3 = ORIGIN
    rotation: Vec3 = ORIGIN
    scale: Vec3 = UNIT_SCALE
    opacity: float = 1.0
    color: Optional[str] = None
    text: Optional[str] = None
    size: Tuple[float, ...] = ()
    asset: Any = None
    handle: Any = None
    attrs: Dict[str, Any] = field(default_factory=dict)
    children: List["SceneNode"] = field(default_factory=list)

    def add(self, *nodes: Optional["SceneNode"]) -> "SceneNode":
        """Append non-None children and return self for chaining."""
        self.children.extend(n for n in nodes if n is not None)
        return self

    def walk(self) -> Iterator["SceneNode"]:
        """Depth-first iteration over this node and all descendants."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, key: str) -> Optional["SceneNode"]:
        for node in self.walk():
            if node.key == key:
                return node
        return None

    def find_kind(self, kind: NodeKind) -> List["SceneNode"]:
        return [node for node in self.walk() if node.kind == kind]


def uniform(value: float) -> Vec3:
    """Uniform 3D scale."""
    return (value, value, value)


def group(key: str = "", children: Optional[List[SceneNode]] = None, **kwargs) -> SceneNode:
    return SceneNode(NodeKind.GROUP, key=key, children=[c for c in (children or []) if c is not None], **kwargs)


def text_node(key: str, text: str, font_size: float, color: Optional[str] = None, **kwargs) -> SceneNode:
    return SceneNode(NodeKind.TEXT, key=key, text=text, size=(font_size,), color=color, **kwargs)


def media_node(key: str, asset: Any, width: float, height: Optional[float] = None, **kwargs) -> SceneNode:
    """Image or video plane for a resolved asset (video when ``asset.type`` is video)."""
    kind = NodeKind.VIDEO if getattr(asset, "type", None) == "video" else NodeKind.IMAGE
    return SceneNode(kind, key=key, asset=asset, size=(width, width if height is None else height), **kwargs)


def empty_scene() -> SceneNode:
    """Scene with nothing in it, returned when no track is active."""
    return SceneNode(NodeKind.GROUP, key="root")
