"""
Hook points for presentation feedback (audible tap and haptic vibration).

The engines only *request* feedback. Delivering it (playing a tone, pulsing the device) is the job of whatever
sink the presentation layer plugs in.
"""

from dataclasses import dataclass, field
from typing import Protocol

# Vibration patterns in milliseconds. A single int is one pulse, a list alternates pulse / pause.
VibrationPattern = int | list[int]

ROUTINE_PULSE: VibrationPattern = 10
RESET_PULSE: VibrationPattern = 20
BACK_PULSE: VibrationPattern = 5
WIN_PULSE: VibrationPattern = [50, 50, 50]
PAIR_PULSE: VibrationPattern = [30, 50, 30]
GUESS_WIN_PULSE: VibrationPattern = [50, 50, 50, 50, 100]


@dataclass(frozen=True)
class TapTone:
    """The short fixed tone a sink should play on tap()."""

    frequency_hz: int = 600
    waveform: str = "sine"
    gain: float = 0.1
    duration_s: float = 0.1


TAP_TONE = TapTone()


class Feedback(Protocol):
    def tap(self) -> None:
        """Short audible cue."""
        ...

    def vibrate(self, pattern: VibrationPattern = ROUTINE_PULSE) -> None:
        """Haptic pulse(s)."""
        ...


class NullFeedback:
    """Default sink: drops every request."""

    def tap(self) -> None:
        pass

    def vibrate(self, pattern: VibrationPattern = ROUTINE_PULSE) -> None:
        pass


@dataclass
class FeedbackSettings:
    sound_enabled: bool = True
    vibration_enabled: bool = True

    def toggle_sound(self) -> None:
        self.sound_enabled = not self.sound_enabled

    def toggle_vibration(self) -> None:
        self.vibration_enabled = not self.vibration_enabled


class GatedFeedback:
    """Forward requests to a sink only if the user enabled that kind of feedback."""

    def __init__(self, sink: Feedback, settings: FeedbackSettings) -> None:
        self.sink = sink
        self.settings = settings

    def tap(self) -> None:
        if self.settings.sound_enabled:
            self.sink.tap()

    def vibrate(self, pattern: VibrationPattern = ROUTINE_PULSE) -> None:
        if self.settings.vibration_enabled:
            self.sink.vibrate(pattern)


@dataclass
class RecordingFeedback:
    """Sink that remembers what was requested. Handy in tests and for replaying a match."""

    taps: int = 0
    vibrations: list[VibrationPattern] = field(default_factory=list)

    def tap(self) -> None:
        self.taps += 1

    def vibrate(self, pattern: VibrationPattern = ROUTINE_PULSE) -> None:
        self.vibrations.append(pattern)
