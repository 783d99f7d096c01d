from __future__ import annotations
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Optional, List

from .pitch import PianoKey

DEFAULT_LANE_COUNT = 8

# --- Input: raw event stream ---

@dataclass(frozen=True)
class MidiEventRecord:
    delta: int
    note_on: Optional[str] = None    # pitch identifier as found in the source ("60")
    note_off: Optional[str] = None

@dataclass
class EventTrack:
    events: List[MidiEventRecord] = field(default_factory=list)
    name: Optional[str] = None

@dataclass
class EventFile:
    ticks_per_beat: int
    tracks: List[EventTrack] = field(default_factory=list)

# --- Pass 1: assembled notes ---

@dataclass
class PianoNote:
    start_tick: int
    start_in_wholes: Fraction
    piano_key: PianoKey
    duration_ticks: Optional[int] = None        # None while the note is open
    duration_in_wholes: Optional[Fraction] = None

    @property
    def is_open(self) -> bool:
        return self.duration_ticks is None

    @property
    def end_tick(self) -> int:
        return self.start_tick + (self.duration_ticks or 0)

# --- Pass 2: quantized output ---

@dataclass(frozen=True)
class QuantizedNote:
    duration: Fraction        # one of QUANTIZED_DURATIONS
    offset: Fraction          # absolute position in wholes
    piano_key: PianoKey

@dataclass
class TrackVoices:
    lanes: List[List[PianoNote]]

    def non_empty(self) -> List[List[PianoNote]]:
        return [lane for lane in self.lanes if lane]

@dataclass
class TrackResult:
    index: int
    voices: List[List[str]] = field(default_factory=list)   # token lists per non-empty lane
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

@dataclass
class ConversionResult:
    ticks_per_beat: int
    tracks: List[TrackResult] = field(default_factory=list)

    @property
    def failed(self) -> List[TrackResult]:
        return [t for t in self.tracks if not t.ok]
