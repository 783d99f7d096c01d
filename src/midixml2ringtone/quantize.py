from __future__ import annotations
from fractions import Fraction
from typing import List, Sequence, Tuple

from .errors import DurationTooSmall, DurationTooLarge
from .timeline import PianoNote, QuantizedNote

DEFAULT_MAX_PIECES = 64
DOT = Fraction(3, 2)

# Legal note lengths in wholes, plain and dotted, largest first.
QUANTIZED_DURATIONS: Tuple[Fraction, ...] = tuple(sorted(
    (v for den in (1, 2, 4, 8, 16, 32) for v in (Fraction(1, den), Fraction(1, den) * DOT)),
    reverse=True,
))

def quantize_duration(
    duration,
    start=Fraction(0),
    durations: Sequence[Fraction] = QUANTIZED_DURATIONS,
    max_pieces: int = DEFAULT_MAX_PIECES,
) -> List[Tuple[Fraction, Fraction]]:
    """
    Decomposes a duration (in wholes) into (value, offset) pieces drawn from `durations`.

    The cursor walks the table from the largest value down and stops at the
    smallest value that is still >= the original duration (the largest value
    if none is); that value is emitted until the remaining duration is used up.
    Every comparison is made against the original duration, not the remainder.
    """
    d = Fraction(duration)
    table = sorted(durations, reverse=True)
    if d <= 0 or d < table[-1]:
        raise DurationTooSmall(d)

    pieces: List[Tuple[Fraction, Fraction]] = []
    remaining = d
    offset = Fraction(start)
    cursor = 0
    while remaining > 0:
        if cursor + 1 < len(table) and table[cursor + 1] >= d:
            cursor += 1
            continue
        if len(pieces) >= max_pieces:
            raise DurationTooLarge(d, max_pieces)
        value = table[cursor]
        pieces.append((value, offset))
        offset += value
        remaining -= value
    return pieces

def quantize_note(note: PianoNote, max_pieces: int = DEFAULT_MAX_PIECES) -> List[QuantizedNote]:
    if note.duration_in_wholes is None:
        raise ValueError(f"can't quantize an open note: {note!r}")
    return [
        QuantizedNote(duration=value, offset=offset, piano_key=note.piano_key)
        for value, offset in quantize_duration(
            note.duration_in_wholes, note.start_in_wholes, max_pieces=max_pieces,
        )
    ]
