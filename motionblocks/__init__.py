"""
MotionBlocks - procedural, frame-indexed motion graphics engine.

Given a global frame number the engine deterministically rebuilds the full
visual state of a short motion-graphics sequence (text reveals, counters,
charts, camera moves) without replaying earlier frames. The output is an
abstract scene description handed to an external rendering surface.

Package structure:
    motionblocks/
        utils/          - Pure math, easing, text and color helpers
        core/           - Scheduling, sequencing and the template contract
        camera/         - Procedural camera rig and safe-framing solver
        templates/      - Built-in animation templates and the registry
        orchestration/  - Per-frame engine and playback driver
        api/            - Pydantic data model (assets, tracks, timelines)
        config/         - Default props and engine settings
"""

__version__ = "1.0.0"
__all__ = ["utils", "core", "camera", "templates", "orchestration", "api", "config"]
