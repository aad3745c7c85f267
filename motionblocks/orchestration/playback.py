"""Fixed-rate playback loop on top of :class:`~motionblocks.core.playback.PlaybackState`.

The driver owns the playhead and asks the engine for one frame per step.
Time is injected (``clock`` and ``sleep``) so hosts can run it against a real
clock and tests can run it instantly.
"""

import time
from typing import Callable, Optional

from motionblocks.core.playback import PlaybackState
from motionblocks.orchestration.engine import Engine, FrameResult
from motionblocks.utils.logging import log

FrameCallback = Callable[[FrameResult], None]


class PlaybackDriver:
    """Steps an engine at ``rate`` frames per second until the timeline ends.

    Examples:
        >>> from motionblocks.api.models import Timeline, Track
        >>> engine = Engine(Timeline(tracks=[Track(id="t", template="counter", duration=3)]))
        >>> frames = []
        >>> driver = PlaybackDriver(engine, on_frame=lambda r: frames.append(r.local_frame), sleep=lambda s: None)
        >>> driver.run()
        >>> frames
        [0, 1, 2]
    """

    def __init__(self, engine: Engine, on_frame: Optional[FrameCallback] = None, rate: Optional[float] = None,
                 sleep: Callable[[float], None] = time.sleep, clock: Callable[[], float] = time.monotonic):
        self.engine = engine
        self.on_frame = on_frame
        self.rate = rate or engine.settings.playback_rate
        self.sleep = sleep
        self.clock = clock
        self.state = PlaybackState(total_frames=engine.total_frames)

    @property
    def interval(self) -> float:
        return 1.0 / self.rate

    def sync_total(self):
        """Pick up a changed timeline length."""
        self.state = self.state.with_total(self.engine.total_frames)

    def play(self):
        restart = self.state.at_end
        self.state = self.state.play()
        if restart:
            self.engine.reset()

    def pause(self):
        self.state = self.state.pause()

    def toggle(self):
        if self.state.is_playing:
            self.pause()
        else:
            self.play()

    def seek(self, frame: int) -> FrameResult:
        """Pause at ``frame`` (clamped) and show it."""
        self.state = self.state.seek(frame)
        self.engine.reset()
        return self._emit()

    def reset_to_start(self):
        self.state = self.state.reset_to_start()
        self.engine.reset()

    def _emit(self) -> FrameResult:
        result = self.engine.evaluate_frame(self.state.current_frame)
        if self.on_frame is not None:
            self.on_frame(result)
        return result

    def step(self) -> FrameResult:
        """Show the current frame, then advance the playhead by one."""
        result = self._emit()
        self.state = self.state.increment()
        return result

    def run(self):
        """Play from the current frame to the end of the timeline.

        The loop stops early when ``on_frame`` pauses the driver.
        """
        self.play()
        if self.state.total_frames <= 0:
            log.warning("Nothing to play: the timeline is empty")
            return
        log.debug(f"Playback from frame {self.state.current_frame} at {self.rate:g} fps")
        next_tick = self.clock()
        while True:
            was_last = self.state.at_end
            self.step()
            # increment() pauses on the last frame, which still has to be shown
            if was_last or not (self.state.is_playing or self.state.at_end):
                break
            next_tick += self.interval
            delay = next_tick - self.clock()
            if delay > 0:
                self.sleep(delay)
        self.state = self.state.pause()
