"""Exception hierarchy for MotionBlocks.

These are raised only at caller-facing editing and lookup APIs (timeline
edits, strict registry lookups, resource pool misuse). Frame evaluation never
lets them escape: the engine converts failures into an empty scene.
"""


class MotionBlocksError(Exception):
    """Base class for all MotionBlocks errors."""


class TimelineError(MotionBlocksError):
    """Invalid timeline edit."""


class TrackNotFoundError(TimelineError):
    """A track id referenced by an edit does not exist."""

    def __init__(self, track_id: str):
        super().__init__(f"Track not found: '{track_id}'")
        self.track_id = track_id


class TemplateError(MotionBlocksError):
    """Template lookup or definition problem."""


class UnknownTemplateError(TemplateError):
    """No template is registered under the requested id."""

    def __init__(self, template_id: str):
        super().__init__(f"Unknown template: '{template_id}'")
        self.template_id = template_id


class ResourceError(MotionBlocksError):
    """Resource pool misuse."""


class ResourceReleaseError(ResourceError):
    """A handle was released more times than it was acquired."""

    def __init__(self, key: str):
        super().__init__(f"Resource '{key}' released without a matching acquire")
        self.key = key
