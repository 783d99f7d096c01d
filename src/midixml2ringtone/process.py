from __future__ import annotations
import logging
from typing import List, Optional

from .assemble import assemble_notes
from .config import ConverterConfig
from .errors import ConversionError
from .render import render_voice
from .timeline import ConversionResult, EventFile, EventTrack, TrackResult, TrackVoices
from .voices import split_voices

log = logging.getLogger(__name__)

def build_voices(track: EventTrack, ticks_per_beat: int, cfg: ConverterConfig,
                 track_index: Optional[int] = None) -> TrackVoices:
    notes = assemble_notes(track.events, ticks_per_beat,
                           track_index=track_index, strict=cfg.strict_unclosed_notes)
    return split_voices(notes, lane_count=cfg.lane_count, track_index=track_index)

def render_track(track: EventTrack, ticks_per_beat: int, cfg: ConverterConfig,
                 track_index: Optional[int] = None) -> List[List[str]]:
    """Token lists for every non-empty lane of one track. Raises ConversionError."""
    voices = build_voices(track, ticks_per_beat, cfg, track_index)
    return [
        render_voice(lane, rest_marker=cfg.rest_marker,
                     dotted_suffix=cfg.dotted_suffix, max_pieces=cfg.max_pieces)
        for lane in voices.non_empty()
    ]

def convert_track(track: EventTrack, ticks_per_beat: int, cfg: ConverterConfig,
                  track_index: int) -> TrackResult:
    try:
        voices = render_track(track, ticks_per_beat, cfg, track_index)
    except ConversionError as e:
        e.context.setdefault("track_index", track_index)
        log.error("track %d aborted: %s", track_index, e)
        return TrackResult(index=track_index, error=e)
    return TrackResult(index=track_index, voices=voices)

def convert_file(events: EventFile, cfg: Optional[ConverterConfig] = None) -> ConversionResult:
    """Converts every track independently; a failing track does not affect the others."""
    cfg = cfg or ConverterConfig()
    result = ConversionResult(ticks_per_beat=events.ticks_per_beat)
    for ti, track in enumerate(events.tracks):
        result.tracks.append(convert_track(track, events.ticks_per_beat, cfg, ti))
    return result
