# src/midixml2ringtone/analyze.py
from __future__ import annotations
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

import mido

from .errors import InputFormatError
from .timeline import EventFile, EventTrack, MidiEventRecord
from .util.xml import get_ns, find, find_all, text_of

MIDI_SUFFIXES = (".mid", ".midi")

def _parse_int(raw: Optional[str], what: str, **where) -> int:
    if raw is None:
        raise InputFormatError(f"Missing {what}", **where)
    try:
        return int(raw)
    except ValueError:
        raise InputFormatError(f"{what} is not an integer: {raw!r}", **where) from None

def _note_attr(elem: Optional[ET.Element], **where) -> Optional[str]:
    if elem is None:
        return None
    note = elem.attrib.get("Note")
    if note is None:
        raise InputFormatError(f"<{elem.tag}> without Note attribute", **where)
    return note

def read_midi_xml(path: str) -> EventFile:
    """
    Reads a MIDI-XML document (<MIDIFile> with <TicksPerBeat> and <Track>/<Event> children).
    Only delta timestamps are supported; NoteOn/NoteOff are kept as raw pitch strings.
    """
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise InputFormatError(f"Not a well-formed XML document: {e}", path=str(path)) from e
    ns = get_ns(root)

    tpb = _parse_int(text_of(root, "TicksPerBeat", ns), "TicksPerBeat", path=str(path))
    if tpb <= 0:
        raise InputFormatError(f"TicksPerBeat must be > 0, got {tpb}", path=str(path))

    ts_type = text_of(root, "TimestampType", ns)
    if ts_type is not None and ts_type.lower() != "delta":
        raise InputFormatError(f"Unsupported TimestampType {ts_type!r}", path=str(path))

    out = EventFile(ticks_per_beat=tpb)
    for ti, track_el in enumerate(find_all(root, "Track", ns)):
        track = EventTrack()
        for ei, ev in enumerate(find_all(track_el, "Event", ns)):
            where = {"track_index": ti, "event_index": ei}
            delta = _parse_int(text_of(ev, "Delta", ns), "Delta", **where)
            if delta < 0:
                raise InputFormatError(f"Negative Delta {delta}", **where)

            name = text_of(ev, "TrackName", ns)
            if name and track.name is None:
                track.name = name

            track.events.append(MidiEventRecord(
                delta=delta,
                note_on=_note_attr(find(ev, "NoteOn", ns), **where),
                note_off=_note_attr(find(ev, "NoteOff", ns), **where),
            ))
        out.tracks.append(track)
    return out

def read_midi_file(path: str) -> EventFile:
    """Reads a Standard MIDI File; non-note messages only contribute their delta."""
    try:
        mid = mido.MidiFile(path)
    except (OSError, EOFError, ValueError) as e:
        raise InputFormatError(f"Can't read MIDI file: {e}", path=str(path)) from e

    out = EventFile(ticks_per_beat=int(mid.ticks_per_beat))
    for mt in mid.tracks:
        track = EventTrack(name=mt.name or None)
        pending = 0
        for msg in mt:
            pending += int(msg.time)
            if msg.type == "note_on" and msg.velocity > 0:
                track.events.append(MidiEventRecord(delta=pending, note_on=str(msg.note)))
            elif msg.type == "note_off" or (msg.type == "note_on" and msg.velocity == 0):
                track.events.append(MidiEventRecord(delta=pending, note_off=str(msg.note)))
            else:
                continue
            pending = 0
        out.tracks.append(track)
    return out

def read_events(path: str) -> EventFile:
    if Path(path).suffix.lower() in MIDI_SUFFIXES:
        return read_midi_file(path)
    return read_midi_xml(path)
