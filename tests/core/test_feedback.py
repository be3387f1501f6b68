"""Unit tests for arcade/core/feedback.py"""

from arcade.core.feedback import (
    TAP_TONE,
    WIN_PULSE,
    FeedbackSettings,
    GatedFeedback,
    NullFeedback,
    RecordingFeedback,
)


def test_everything_enabled_by_default() -> None:
    sink = RecordingFeedback()
    feedback = GatedFeedback(sink, FeedbackSettings())
    feedback.tap()
    feedback.vibrate(WIN_PULSE)
    assert sink.taps == 1
    assert sink.vibrations == [WIN_PULSE]


def test_sound_and_vibration_toggle_independently() -> None:
    sink = RecordingFeedback()
    settings = FeedbackSettings()
    feedback = GatedFeedback(sink, settings)

    settings.toggle_sound()
    feedback.tap()
    feedback.vibrate()
    assert sink.taps == 0
    assert sink.vibrations == [10]

    settings.toggle_sound()
    settings.toggle_vibration()
    feedback.tap()
    feedback.vibrate()
    assert sink.taps == 1
    assert sink.vibrations == [10]


def test_null_feedback_accepts_everything() -> None:
    feedback = NullFeedback()
    feedback.tap()
    feedback.vibrate([1, 2, 3])


def test_tap_tone() -> None:
    assert TAP_TONE.frequency_hz == 600
    assert TAP_TONE.waveform == "sine"
    assert TAP_TONE.duration_s == 0.1
