"""Pure functions for color parsing and palette handling.

Template props carry colors as CSS-style hex strings. These helpers validate
them and turn comma-separated palettes into lists, without ever raising into
the render loop (the ``*_or_default`` variants fall back instead).
"""

from typing import List, Tuple


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color string to RGB tuple.

    Accepts 6-digit and 3-digit shorthand forms, with or without ``#``.

    Args:
        hex_color: Hex color string

    Returns:
        Tuple of (red, green, blue) values (0-255)

    Raises:
        ValueError: If hex string is invalid format

    Examples:
        >>> hex_to_rgb('#FF0000')
        (255, 0, 0)
        >>> hex_to_rgb('00d09c')
        (0, 208, 156)
        >>> hex_to_rgb('#fff')
        (255, 255, 255)
    """
    hex_color = hex_color.strip().lstrip('#')

    if len(hex_color) == 3:
        hex_color = ''.join(ch * 2 for ch in hex_color)

    if len(hex_color) != 6:
        raise ValueError(
            f"Hex color must be 3 or 6 characters (got {len(hex_color)}): '{hex_color}'"
        )

    try:
        r = int(hex_color[0:2], 16)
        g = int(hex_color[2:4], 16)
        b = int(hex_color[4:6], 16)
        return (r, g, b)
    except ValueError as e:
        raise ValueError(
            f"Invalid hex color string '{hex_color}': {str(e)}"
        ) from e


def rgb_to_hex(r: int, g: int, b: int, include_hash: bool = True) -> str:
    """Convert RGB values to a lowercase hex color string.

    Raises:
        ValueError: If any channel is outside 0-255

    Examples:
        >>> rgb_to_hex(255, 0, 0)
        '#ff0000'
        >>> rgb_to_hex(0, 208, 156, include_hash=False)
        '00d09c'
    """
    for channel in (r, g, b):
        if not 0 <= channel <= 255:
            raise ValueError(f"RGB values must be in range 0-255, got ({r}, {g}, {b})")
    hex_str = f"{r:02x}{g:02x}{b:02x}"
    return f"#{hex_str}" if include_hash else hex_str


def is_hex_color(value: object) -> bool:
    """Return True if ``value`` is a parseable hex color string.

    Examples:
        >>> is_hex_color('#3b82f6')
        True
        >>> is_hex_color('blue')
        False
        >>> is_hex_color(12)
        False
    """
    if not isinstance(value, str):
        return False
    try:
        hex_to_rgb(value)
    except ValueError:
        return False
    return True


def normalize_hex(value: object, default: str) -> str:
    """Return ``value`` as ``#rrggbb`` or ``default`` when it is not a hex color.

    Examples:
        >>> normalize_hex('#FFF', '#000000')
        '#ffffff'
        >>> normalize_hex(None, '#0f172a')
        '#0f172a'
    """
    if not is_hex_color(value):
        return default
    return rgb_to_hex(*hex_to_rgb(value))


def parse_palette(value: object, default: List[str]) -> List[str]:
    """Split a comma-separated palette string into normalized hex colors.

    Invalid entries are skipped; an empty result falls back to ``default``.

    Examples:
        >>> parse_palette('#3b82f6, #60a5fa,oops', ['#000000'])
        ['#3b82f6', '#60a5fa']
        >>> parse_palette('', ['#000000'])
        ['#000000']
    """
    if isinstance(value, (list, tuple)):
        entries = [str(v) for v in value]
    elif isinstance(value, str):
        entries = value.split(',')
    else:
        return list(default)

    colors = [rgb_to_hex(*hex_to_rgb(c)) for c in (e.strip() for e in entries) if is_hex_color(c)]
    return colors or list(default)
