"""Unit tests for tolerant template prop readers."""

import pytest

from motionblocks.core.props import (
    PropReader,
    get_bool,
    get_choice,
    get_color,
    get_int,
    get_list,
    get_number,
    get_string,
    get_vector3,
)


class TestGetNumber:
    """Test get_number function."""

    def test_numeric_string(self):
        """Numeric strings are accepted."""
        assert get_number({"gap": "80"}, "gap", 60) == 80.0

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), True, "abc", None, [1]])
    def test_malformed_falls_back(self, value):
        """Malformed values give the default."""
        assert get_number({"gap": value}, "gap", 60) == 60

    def test_missing(self):
        """Missing keys and empty props give the default."""
        assert get_number({}, "gap", 60) == 60
        assert get_number(None, "gap", 60) == 60

    def test_clamped(self):
        """Values are clamped into the optional range."""
        assert get_number({"gap": 5000}, "gap", 60, maximum=400) == 400
        assert get_number({"gap": -5}, "gap", 60, minimum=0) == 0

    def test_int_truncates(self):
        """get_int truncates toward zero."""
        assert get_int({"n": 3.9}, "n", 0) == 3
        assert get_int({"n": -3.9}, "n", 0) == -3


class TestOtherReaders:
    """Test string, bool, choice, color, vector and list readers."""

    def test_string(self):
        """Strings pass, numbers convert, others fall back."""
        assert get_string({"s": "hi"}, "s") == "hi"
        assert get_string({"s": 5}, "s") == "5"
        assert get_string({"s": True}, "s", "d") == "d"
        assert get_string({"s": None}, "s", "d") == "d"

    def test_bool(self):
        """Only real booleans and true/false strings count."""
        assert get_bool({"b": False}, "b", True) is False
        assert get_bool({"b": " TRUE "}, "b", False) is True
        assert get_bool({"b": 1}, "b", False) is False
        assert get_bool({"b": "yes"}, "b", True) is True

    def test_choice(self):
        """Values outside the closed set fall back."""
        assert get_choice({"type": "pie"}, "type", ("bar", "line", "pie"), "bar") == "pie"
        assert get_choice({"type": "donut"}, "type", ("bar", "line", "pie"), "bar") == "bar"

    def test_color(self):
        """Colors are normalized or fall back."""
        assert get_color({"c": "#ABC"}, "c", "#000000") == "#aabbcc"
        assert get_color({"c": "red"}, "c", "#000000") == "#000000"

    def test_vector3(self):
        """Exactly three numeric components are required."""
        assert get_vector3({"p": [1, "2", 3]}, "p") == (1.0, 2.0, 3.0)
        assert get_vector3({"p": [1, 2]}, "p") is None
        assert get_vector3({"p": "abc"}, "p") is None
        assert get_vector3({"p": [1, "x", 3]}, "p", (0.0, 0.0, 0.0)) == (0.0, 0.0, 0.0)

    def test_list(self):
        """Lists and tuples are copied, others give []."""
        assert get_list({"l": ("a", "b")}, "l") == ["a", "b"]
        assert get_list({"l": "ab"}, "l") == []


class TestPropReader:
    """Test PropReader default resolution."""

    @pytest.fixture
    def reader(self):
        return PropReader({"fontSize": "x", "gap": 80, "style": "flip"}, {"fontSize": 60, "gap": 40, "style": "plain"})

    def test_declared_default(self, reader):
        """Malformed values fall back to the declared default."""
        assert reader.number("fontSize", minimum=1) == 60

    def test_explicit_default_wins(self, reader):
        """An explicit default overrides the declared one."""
        assert reader.number("missing", 7) == 7

    def test_unknown_key_without_default(self, reader):
        """Keys with no default read as zero or empty."""
        assert reader.number("missing") == 0.0
        assert reader.string("missing") == ""

    def test_present_value(self, reader):
        """Valid values are returned."""
        assert reader.integer("gap") == 80
        assert reader.choice("style", ("plain", "flip")) == "flip"

    def test_raw_and_sequence(self, reader):
        """raw returns untouched values, sequence returns lists."""
        assert reader.raw("fontSize") == "x"
        assert reader.sequence("gap") == []

    def test_color_default(self):
        """Colors without any default are white."""
        assert PropReader({}).color("c") == "#ffffff"
