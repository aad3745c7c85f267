"""Default template props and tuned timing constants.

The auto-timing heuristics (intro fractions, minimum reveal windows, graph
buffers) were tuned by eye. They live here as configuration defaults instead
of being re-derived inside the templates.

Keys use the camelCase spelling that tracks store in ``templateProps``.
"""

import copy

# Segment sequencer
SEQUENCER_INTRO_FRAMES = 24
SEQUENCER_MIN_INTRO_FRAMES = 8
SEQUENCER_INTRO_FRACTION = 0.25
SEQUENCER_MAX_OUTRO_FRAMES = 24
SEQUENCER_MIN_OUTRO_FRAMES = 8
SEQUENCER_OUTRO_FRACTION = 0.12
SEQUENCER_MIN_PER_ITEM_FRAMES = 10
SEQUENCER_MAX_REVEAL_WINDOW = 90

# Kinetic text
KINETIC_MIN_SEGMENT_FRAMES = 12
KINETIC_CONTINUATION_SLIDE_FRAMES = 12
KINETIC_CONTINUATION_OVERSHOOT = 1.2

# Counter digit flips
COUNTER_FLIP_WINDOW = 0.25

# Graph
DEFAULT_GRAPH_INTRO_FRAMES = 15
DEFAULT_GRAPH_PER_ITEM_FRAMES = 20
DEFAULT_GRAPH_BUFFER_FRAMES = 60

# Background plane shared by text templates
BACKGROUND_PLANE_Z = -120
BACKGROUND_MIN_ASPECT = 0.2
BACKGROUND_MAX_ASPECT = 5.0

_BACKGROUND_DEFAULTS = {
    "backgroundEnabled": False,
    "backgroundColor": "#ffffff",
    "backgroundOpacity": 1.0,
    "backgroundScale": 6000,
    "backgroundVideoAspect": 16 / 9,
}

_ENTRY_DEFAULTS = {
    "fade-in": {
        "duration": 30,
        "fontSize": 60,
        "textColor": "#0f172a",
        "imageSize": 400,
    },
    "slide-in": {
        "direction": "left",
        "duration": 30,
        "easing": "easeOutCubic",
        "layout": "row",
        "gap": 100,
        "fontSize": 60,
        "textColor": "#0f172a",
        "imageSize": 400,
        "staggerFrames": 0,
        "distance": 800,
    },
    "scale-pop": {
        "popFrames": 15,
        "peakScale": 1.2,
        "fontSize": 60,
        "textColor": "#0f172a",
        "imageSize": 400,
    },
    "mask-reveal": {
        "direction": "horizontal",
        "duration": 30,
        "easing": "easeInOutCubic",
        "fontSize": 60,
        "textColor": "#0f172a",
        "imageSize": 400,
    },
}

_EMPHASIS_DEFAULTS = {
    "pulse": {"intensity": 1.1, "speed": 0.2, "fontSize": 60, "textColor": "#ffffff", "imageSize": 400},
    "glow": {"color": "#ffffff", "radius": 20, "fontSize": 60, "textColor": "#ffffff", "imageSize": 400},
    "bounce": {"height": 100, "speed": 0.1, "fontSize": 60, "textColor": "#ffffff", "imageSize": 400},
    "shake": {"intensity": 5, "fontSize": 60, "textColor": "#ffffff", "imageSize": 400},
}

_TEXT_DEFAULTS = {
    "list": {
        "textColor": "#1a1a1a",
        "bulletColor": "#00d09c",
        "fontSize": 40,
        "gap": 60,
        "introFrames": 30,
        "perItemFrames": 60,
        "bulletType": "bullet",
        "listStyle": "classic",
    },
    "chapters": {
        "startNumber": 1,
        "showNumber": True,
        "accentColor": "#00d09c",
        "textColor": "#1a1a1a",
        "introFrames": 30,
        "framesPerChapter": 60,
        "outroFrames": 15,
        **_BACKGROUND_DEFAULTS,
    },
    "highlight": {
        "highlightColor": "#fde047",
        "fontColor": "#0f172a",
        "highlightFontColor": "#0f172a",
        "fontSize": 60,
        "highlightPadding": 12,
        "highlightXOffset": 0,
        "highlightYOffset": 0,
        **_BACKGROUND_DEFAULTS,
    },
    "kinetic-text": {
        "fontSize": 78,
        "fontColor": "#ffffff",
        "accentColor": "#ffffff",
        "autoDuration": True,
        "perSegmentFrames": 45,
        "enterFrames": 14,
        "exitFrames": 10,
        "continuationDelayFrames": 10,
        "continuationTypeFrames": 16,
        "slidePx": 32,
        "segmentEffects": [],
        "cameraMotionEnabled": True,
        "cameraDrift": 14,
        "cameraPunch": 260,
        "cameraWhip": 320,
        "cameraPan": 220,
        "cameraSmooth": 0.2,
        "cameraOrbit": 320,
        "cameraOrbitSpeed": 0.008,
        "cameraDolly": 360,
        "cameraDollySpeed": 0.006,
        "cameraZBase": 1000,
        "cameraFovBase": 36,
        **_BACKGROUND_DEFAULTS,
        "backgroundColor": "#0b1220",
    },
}

_DATA_DEFAULTS = {
    "counter": {
        "startValue": 0,
        "endValue": 100,
        "duration": 60,
        "prefix": "",
        "suffix": "",
        "style": "plain",
        "flipWindow": COUNTER_FLIP_WINDOW,
        "fontSize": 80,
        "textColor": "#0f172a",
        "labelColor": "#60a5fa",
    },
    "timeline-reveal": {
        "accentColor": "#6366f1",
        "lineColor": "#94a3b8",
        "textColor": "#0b1220",
        "glowStrength": 0.45,
        "spacing": 180,
        "nodeRadius": 26,
        "imageSize": 110,
        "labelSize": 34,
        "cardOffset": 120,
        "lineWidth": 6,
        "introFrames": SEQUENCER_INTRO_FRAMES,
        "itemZoom": 0.35,
        "panStrength": 0.82,
        "zoomStrength": 0.14,
        "backgroundEnabled": False,
        "backgroundColor": "#ffffff",
        "backgroundOpacity": 1.0,
    },
}

_VISUAL_DEFAULTS = {
    "graph": {
        "type": "bar",
        "barWidth": 60,
        "barGap": 40,
        "lineThickness": 8,
        "pieRadius": 200,
        "pieHeight": 40,
        "colors": "#3b82f6,#60a5fa,#93c5fd,#2563eb,#1d4ed8",
        "textColor": "#ffffff",
        "introFrames": DEFAULT_GRAPH_INTRO_FRAMES,
        "perItemFrames": DEFAULT_GRAPH_PER_ITEM_FRAMES,
        "bufferFrames": DEFAULT_GRAPH_BUFFER_FRAMES,
        "showAxes": True,
        "axisColor": "#ffffff",
        "yAxisTickCount": 5,
    },
    "mind-map": {
        "depth": 200,
        "spread": 1.5,
        "introHoldFrames": 24,
        "perNodeFrames": 40,
        "nodeEnterFrames": 12,
        "edgeGrowFrames": 18,
        "focusHoldFrames": 12,
        "focusZoomFrames": 12,
        "focusZoomStrength": 0.14,
        "cameraEnabled": True,
        "cameraSmooth": 1.0,
        "cameraLeadFrames": 0,
        "highlightColor": "#93c5fd",
        "lineColor": "#3b82f6",
        "rootColor": "#3b82f6",
        "nodeColor": "#60a5fa",
    },
}

TEMPLATE_DEFAULTS = {
    **_ENTRY_DEFAULTS,
    **_EMPHASIS_DEFAULTS,
    **_TEXT_DEFAULTS,
    **_DATA_DEFAULTS,
    **_VISUAL_DEFAULTS,
}


def get_template_defaults(template_id: str) -> dict:
    """Return a deep copy of the default props for a template id ({} if unknown)."""
    return copy.deepcopy(TEMPLATE_DEFAULTS.get(template_id, {}))


def get_fallback_kinetic_script():
    """Segments shown when a kinetic text track has an empty script."""
    return [
        ("text animation | just works", "pop_then_type"),
        ("In this video", "zoom_back"),
        ("we will break down", "slide_left"),
        ("the essentials", "typewriter"),
    ]
