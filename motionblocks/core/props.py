"""Tolerant readers for template props.

Props come from user-edited tracks, so any value may be missing, of the wrong
type, or out of range. Every reader returns the documented default for
missing or malformed input and clamps numbers into an optional range; none of
them raise. NaN, infinities and booleans passed where a number is expected
count as malformed.
"""

from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple

from motionblocks.utils.color_utils import normalize_hex
from motionblocks.utils.text_utils import parse_number

_MISSING = object()


def _clamp_range(value: float, minimum: Optional[float], maximum: Optional[float]) -> float:
    if minimum is not None:
        value = max(minimum, value)
    if maximum is not None:
        value = min(maximum, value)
    return value


def get_number(props: Mapping[str, Any], key: str, default: float,
               minimum: Optional[float] = None, maximum: Optional[float] = None) -> float:
    """Read a finite number (numeric strings accepted).

    Examples:
        >>> get_number({"gap": "80"}, "gap", 60)
        80.0
        >>> get_number({"gap": float("nan")}, "gap", 60)
        60
        >>> get_number({"gap": 5000}, "gap", 60, maximum=400)
        400
    """
    value = parse_number(props.get(key)) if props else None
    if value is None:
        return default
    return _clamp_range(value, minimum, maximum)


def get_int(props: Mapping[str, Any], key: str, default: int,
            minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
    """Read a number and truncate it to an int (floor toward zero)."""
    return int(get_number(props, key, default, minimum, maximum))


def get_string(props: Mapping[str, Any], key: str, default: str = "") -> str:
    """Read a string; numbers are converted, everything else falls back."""
    value = props.get(key) if props else None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def get_bool(props: Mapping[str, Any], key: str, default: bool) -> bool:
    """Read a boolean; only real booleans and 'true'/'false' strings count."""
    value = props.get(key) if props else None
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    return default


def get_choice(props: Mapping[str, Any], key: str, choices: Iterable[str], default: str) -> str:
    """Read one of a closed set of string values.

    Examples:
        >>> get_choice({"type": "pie"}, "type", ("bar", "line", "pie"), "bar")
        'pie'
        >>> get_choice({"type": "donut"}, "type", ("bar", "line", "pie"), "bar")
        'bar'
    """
    value = props.get(key) if props else None
    return value if isinstance(value, str) and value in tuple(choices) else default


def get_color(props: Mapping[str, Any], key: str, default: str) -> str:
    """Read a ``#rgb``/``#rrggbb`` color, normalized to lowercase ``#rrggbb``."""
    return normalize_hex(props.get(key) if props else None, default)


def get_vector3(props: Mapping[str, Any], key: str,
                default: Optional[Tuple[float, float, float]] = None) -> Optional[Tuple[float, float, float]]:
    """Read a 3-element numeric sequence (e.g. ``cameraPosition``).

    Examples:
        >>> get_vector3({"p": [1, 2, 3]}, "p")
        (1.0, 2.0, 3.0)
        >>> get_vector3({"p": [1, 2]}, "p") is None
        True
    """
    value = props.get(key) if props else None
    if not isinstance(value, Sequence) or isinstance(value, str) or len(value) != 3:
        return default
    parsed = [parse_number(v) for v in value]
    if any(v is None for v in parsed):
        return default
    return (parsed[0], parsed[1], parsed[2])


def get_list(props: Mapping[str, Any], key: str) -> list:
    """Read a list value; anything else becomes an empty list."""
    value = props.get(key) if props else None
    return list(value) if isinstance(value, (list, tuple)) else []


class PropReader:
    """Reader bound to one template's merged props and its default props.

    When no explicit default is passed, the template's declared default for
    the key is used, so templates state each default exactly once.

    Examples:
        >>> reader = PropReader({"fontSize": "x"}, {"fontSize": 60})
        >>> reader.number("fontSize", minimum=1)
        60
    """

    def __init__(self, props: Optional[Mapping[str, Any]], defaults: Optional[Mapping[str, Any]] = None):
        self.props = dict(props or {})
        self.defaults = dict(defaults or {})

    def _default(self, key: str, default: Any) -> Any:
        return self.defaults.get(key) if default is _MISSING else default

    def raw(self, key: str, default: Any = None) -> Any:
        return self.props.get(key, default)

    def number(self, key: str, default: Any = _MISSING,
               minimum: Optional[float] = None, maximum: Optional[float] = None) -> float:
        fallback = self._default(key, default)
        return get_number(self.props, key, 0.0 if fallback is None else fallback, minimum, maximum)

    def integer(self, key: str, default: Any = _MISSING,
                minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
        fallback = self._default(key, default)
        return get_int(self.props, key, 0 if fallback is None else fallback, minimum, maximum)

    def string(self, key: str, default: Any = _MISSING) -> str:
        fallback = self._default(key, default)
        return get_string(self.props, key, "" if fallback is None else fallback)

    def boolean(self, key: str, default: Any = _MISSING) -> bool:
        fallback = self._default(key, default)
        return get_bool(self.props, key, bool(fallback))

    def choice(self, key: str, choices: Iterable[str], default: Any = _MISSING) -> str:
        return get_choice(self.props, key, choices, self._default(key, default))

    def color(self, key: str, default: Any = _MISSING) -> str:
        fallback = self._default(key, default)
        return get_color(self.props, key, "#ffffff" if fallback is None else fallback)

    def vector3(self, key: str, default: Any = None) -> Optional[Tuple[float, float, float]]:
        return get_vector3(self.props, key, default)

    def sequence(self, key: str) -> list:
        return get_list(self.props, key)
