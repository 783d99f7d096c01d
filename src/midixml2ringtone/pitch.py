from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

LOWEST_PIANO_MIDI = 21    # A0
HIGHEST_PIANO_MIDI = 108  # C8

SEMITONE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

@dataclass(frozen=True, order=True)
class PianoKey:
    midi: int
    name: str

    @property
    def display_name(self) -> str:
        return self.name.lower()

def name_from_midi(midi: int) -> str:
    return f"{SEMITONE_NAMES[midi % 12]}{midi // 12 - 1}"

PIANO_KEY_BY_MIDI_NUMBER: Dict[int, PianoKey] = {
    m: PianoKey(m, name_from_midi(m))
    for m in range(LOWEST_PIANO_MIDI, HIGHEST_PIANO_MIDI + 1)
}

def resolve_piano_key(identifier: str) -> Optional[PianoKey]:
    """
    Maps a string-encoded MIDI number ("60", "60.0") to its PianoKey.
    Returns None for anything that is not an integral number inside the piano range.
    """
    try:
        value = float(str(identifier).strip())
    except ValueError:
        return None
    if not value.is_integer():
        return None
    return PIANO_KEY_BY_MIDI_NUMBER.get(int(value))
