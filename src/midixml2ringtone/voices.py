from __future__ import annotations
from typing import List, Optional

from .errors import VoiceOverflow
from .timeline import DEFAULT_LANE_COUNT, PianoNote, TrackVoices

def notes_overlap(note: PianoNote, other: PianoNote) -> bool:
    """
    True if note's start or end lies within [other.start, other.end].
    Both bounds are inclusive, so notes touching at a tick count as overlapping.
    """
    if other.start_tick <= note.start_tick <= other.end_tick:
        return True
    return other.start_tick <= note.end_tick <= other.end_tick

def _lane_accepts(lane: List[PianoNote], note: PianoNote) -> bool:
    return not any(notes_overlap(note, placed) for placed in lane)

def split_voices(
    notes: List[PianoNote],
    lane_count: int = DEFAULT_LANE_COUNT,
    track_index: Optional[int] = None,
) -> TrackVoices:
    """First-fit lane assignment in input (start) order."""
    lanes: List[List[PianoNote]] = [[] for _ in range(lane_count)]
    for note in notes:
        if note.is_open:
            raise ValueError(f"open note passed to split_voices: {note!r}")
        lane = next((ln for ln in lanes if _lane_accepts(ln, note)), None)
        if lane is None:
            raise VoiceOverflow(lane_count, track_index=track_index, note=note)
        lane.append(note)
    return TrackVoices(lanes=lanes)
