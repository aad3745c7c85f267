"""Playback state transitions.

:class:`PlaybackState` is an immutable record; every transition returns a new
state, so hosts can diff or replay them. The frame is always clamped to
``[0, total_frames - 1]`` (0 for an empty timeline).
"""

from dataclasses import dataclass, replace


def _clamp_frame(frame: int, total_frames: int) -> int:
    return max(0, min(max(0, total_frames - 1), int(frame)))


@dataclass(frozen=True)
class PlaybackState:
    """Where the playhead is and whether it is moving.

    Examples:
        >>> state = PlaybackState(total_frames=90).play()
        >>> state.increment().current_frame
        1
        >>> state.seek(500).current_frame, state.seek(500).is_playing
        (89, False)
    """
    is_playing: bool = False
    current_frame: int = 0
    total_frames: int = 0

    @property
    def at_end(self) -> bool:
        return self.current_frame >= self.total_frames - 1

    def play(self) -> "PlaybackState":
        """Start playing; a playhead parked on the last frame restarts from 0."""
        if self.total_frames <= 0:
            return replace(self, is_playing=False, current_frame=0)
        frame = 0 if self.at_end else self.current_frame
        return replace(self, is_playing=True, current_frame=frame)

    def pause(self) -> "PlaybackState":
        return replace(self, is_playing=False)

    def toggle(self) -> "PlaybackState":
        return self.pause() if self.is_playing else self.play()

    def seek(self, frame: int) -> "PlaybackState":
        """Jump to a frame (clamped) and pause."""
        return replace(self, is_playing=False, current_frame=_clamp_frame(frame, self.total_frames))

    def reset_to_start(self) -> "PlaybackState":
        return replace(self, is_playing=False, current_frame=0)

    def increment(self) -> "PlaybackState":
        """Advance one frame while playing; stops (pauses) on the last frame."""
        if not self.is_playing:
            return self
        if self.at_end:
            return replace(self, is_playing=False, current_frame=_clamp_frame(self.current_frame, self.total_frames))
        next_frame = self.current_frame + 1
        return replace(self, current_frame=next_frame, is_playing=next_frame < self.total_frames - 1)

    def with_total(self, total_frames: int) -> "PlaybackState":
        """Adopt a new timeline length, re-clamping the playhead."""
        total = max(0, int(total_frames))
        return replace(self, total_frames=total, current_frame=_clamp_frame(self.current_frame, total),
                       is_playing=self.is_playing and total > 0)
