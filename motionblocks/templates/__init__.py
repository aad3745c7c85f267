"""Built-in animation templates and the template registry.

Every :class:`~motionblocks.core.templates.TemplateKind` member maps to
exactly one :class:`~motionblocks.core.templates.AnimationTemplate`. The
mapping is checked when this package is imported, so adding an enum member
without registering its template fails loudly at startup instead of
rendering nothing at frame time.
"""

from typing import Dict, Optional

from motionblocks.core.templates import AnimationTemplate, TemplateKind
from motionblocks.errors import TemplateError, UnknownTemplateError
from motionblocks.utils.logging import log

from .chapters import CHAPTERS
from .counter import COUNTER
from .emphasis import EMPHASIS_TEMPLATES
from .entry import ENTRY_TEMPLATES
from .graph import GRAPH
from .highlight import HIGHLIGHT
from .kinetic_text import KINETIC_TEXT
from .mind_map import MIND_MAP
from .text_list import LIST
from .timeline_reveal import TIMELINE_REVEAL

TEMPLATES: Dict[TemplateKind, AnimationTemplate] = {
    template.kind: template
    for template in (
        *ENTRY_TEMPLATES,
        *EMPHASIS_TEMPLATES,
        LIST,
        CHAPTERS,
        HIGHLIGHT,
        KINETIC_TEXT,
        COUNTER,
        TIMELINE_REVEAL,
        GRAPH,
        MIND_MAP,
    )
}


def _check_registry():
    missing = [kind.value for kind in TemplateKind if kind not in TEMPLATES]
    if missing:
        raise TemplateError(f"No template registered for: {', '.join(missing)}")


_check_registry()


def get_template(kind: TemplateKind) -> AnimationTemplate:
    return TEMPLATES[kind]


def resolve_template(template_id: Optional[str]) -> Optional[AnimationTemplate]:
    """Template for a track's id string, or None (with a warning) when unknown."""
    kind = TemplateKind.from_string(template_id) if template_id else None
    if kind is None:
        log.warning(f"Unknown template '{template_id}', track will render nothing")
        return None
    return TEMPLATES[kind]


def require_template(template_id: str) -> AnimationTemplate:
    """Strict lookup for editing APIs.

    Raises:
        UnknownTemplateError: If no template is registered under ``template_id``
    """
    kind = TemplateKind.from_string(template_id)
    if kind is None:
        raise UnknownTemplateError(template_id)
    return TEMPLATES[kind]


def list_templates(category: Optional[str] = None):
    """Registered templates in enum order, optionally filtered by category."""
    return [TEMPLATES[kind] for kind in TemplateKind if category is None or kind.category == category]


__all__ = [
    "TEMPLATES",
    "get_template",
    "resolve_template",
    "require_template",
    "list_templates",
]
