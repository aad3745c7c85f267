"""Pure numeric helpers: clamping, damping and easing curves."""
