"""Unit tests for the template registry."""

import pytest

from motionblocks.core.templates import EvaluationContext, RenderProps, TemplateKind
from motionblocks.errors import UnknownTemplateError
from motionblocks.templates import TEMPLATES, get_template, list_templates, require_template, resolve_template


class TestRegistry:
    """Test template lookup."""

    def test_every_kind_registered(self):
        """Each kind maps to a template of that kind."""
        assert set(TEMPLATES) == set(TemplateKind)
        for kind in TemplateKind:
            assert get_template(kind).kind is kind

    def test_resolve(self):
        """Known ids resolve; unknown or empty ids give None."""
        assert resolve_template("graph").kind is TemplateKind.GRAPH
        assert resolve_template("sparkles") is None
        assert resolve_template(None) is None

    def test_require(self):
        """Strict lookup raises for unknown ids."""
        assert require_template("mind-map").kind is TemplateKind.MIND_MAP
        with pytest.raises(UnknownTemplateError, match="sparkles"):
            require_template("sparkles")

    def test_categories(self):
        """Templates can be listed by category in enum order."""
        assert [t.id for t in list_templates("entry")] == ["fade-in", "slide-in", "scale-pop", "mask-reveal"]
        assert [t.id for t in list_templates("visual")] == ["graph", "mind-map"]
        assert len(list_templates()) == 16

    def test_names(self):
        """Templates carry their kind's display name."""
        assert get_template(TemplateKind.KINETIC_TEXT).name == "Kinetic Text"

    @pytest.mark.parametrize("kind", list(TemplateKind))
    def test_renders_with_defaults(self, kind):
        """Every template evaluates with placeholder inputs or returns None."""
        result = TEMPLATES[kind].evaluate(RenderProps(frame=10, duration=60, element_id="t"), EvaluationContext())
        assert result is None or result.key.startswith("t")
