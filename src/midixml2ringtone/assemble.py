from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional

from .errors import OutOfRangeNote, UnclosedNote
from .pitch import PianoKey, resolve_piano_key
from .timeline import MidiEventRecord, PianoNote
from .util.time import ticks_to_wholes

log = logging.getLogger(__name__)

def _resolve(identifier: str, ev: MidiEventRecord, track_index: Optional[int], event_index: int) -> PianoKey:
    key = resolve_piano_key(identifier)
    if key is None:
        raise OutOfRangeNote(identifier, track_index=track_index, event_index=event_index, event=ev)
    return key

def assemble_notes(
    events: Iterable[MidiEventRecord],
    ticks_per_beat: int,
    track_index: Optional[int] = None,
    strict: bool = False,
) -> List[PianoNote]:
    """
    Turns a delta-timed NoteOn/NoteOff stream into closed PianoNotes (creation order).

    A NoteOn for a pitch that is already open and a NoteOff without an open
    note are ignored. Notes still open at the end are dropped with a warning,
    or raise UnclosedNote when strict is set.
    """
    opened: Dict[PianoKey, PianoNote] = {}
    notes: List[PianoNote] = []
    current_pos = 0

    for ei, ev in enumerate(events):
        current_pos += ev.delta

        if ev.note_on is not None:
            key = _resolve(ev.note_on, ev, track_index, ei)
            if key in opened:
                log.debug("track %s event %d: %s already open, NoteOn ignored", track_index, ei, key.name)
            else:
                note = PianoNote(
                    start_tick=current_pos,
                    start_in_wholes=ticks_to_wholes(current_pos, ticks_per_beat),
                    piano_key=key,
                )
                opened[key] = note
                notes.append(note)

        if ev.note_off is not None:
            key = _resolve(ev.note_off, ev, track_index, ei)
            note = opened.pop(key, None)
            if note is None:
                log.debug("track %s event %d: no open %s, NoteOff ignored", track_index, ei, key.name)
            else:
                note.duration_ticks = current_pos - note.start_tick
                note.duration_in_wholes = ticks_to_wholes(note.duration_ticks, ticks_per_beat)

    if opened:
        if strict:
            first = min(opened.values(), key=lambda n: n.start_tick)
            raise UnclosedNote(track_index=track_index, note=first)
        log.warning("track %s: dropping %d unclosed note(s)", track_index, len(opened))
        notes = [n for n in notes if not n.is_open]

    return notes
