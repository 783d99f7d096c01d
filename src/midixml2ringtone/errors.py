from __future__ import annotations
from typing import Any, Dict, Optional


class ConversionError(Exception):
    """Base for every failure that aborts a file or a single track."""

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.context: Dict[str, Any] = context


class InputFormatError(ConversionError):
    pass


class OutOfRangeNote(ConversionError):
    def __init__(self, identifier: str, track_index: Optional[int] = None,
                 event_index: Optional[int] = None, event: Any = None):
        super().__init__(
            f"Out of range midi number {identifier!r} "
            f"(track={track_index}, event={event_index}): {event!r}",
            identifier=identifier, track_index=track_index,
            event_index=event_index, event=event,
        )
        self.identifier = identifier


class VoiceOverflow(ConversionError):
    def __init__(self, lane_count: int, track_index: Optional[int] = None, note: Any = None):
        super().__init__(
            f"Can't find a free voice among {lane_count} lanes (track={track_index}): {note!r}",
            lane_count=lane_count, track_index=track_index, note=note,
        )


class DurationTooSmall(ConversionError):
    def __init__(self, duration: Any):
        super().__init__(f"Duration {duration} is below the smallest quantized value", duration=duration)
        self.duration = duration


class DurationTooLarge(ConversionError):
    def __init__(self, duration: Any, max_pieces: int):
        super().__init__(
            f"Duration {duration} needs more than {max_pieces} quantized pieces",
            duration=duration, max_pieces=max_pieces,
        )
        self.duration = duration


class UnclosedNote(ConversionError):
    def __init__(self, track_index: Optional[int] = None, note: Any = None):
        super().__init__(
            f"Note still open at end of track (track={track_index}): {note!r}",
            track_index=track_index, note=note,
        )
