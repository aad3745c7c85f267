"""
MotionBlocks utility modules - pure functions organized by domain.

All functions in this package follow functional programming principles:
- Pure functions with no side effects
- Complete type hints
- Deterministic output for identical input

Modules:
    math.core: Clamping, interpolation, damping and seeded pseudo-randomness
    math.easing: Named easing curves
    color_utils: Hex color parsing and palette handling
    hash_utils: Stable content fingerprints
    text_utils: Text splitting and data-table parsing for templates
"""

__all__ = [
    "color_utils",
    "hash_utils",
    "text_utils",
]
