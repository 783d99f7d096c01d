from __future__ import annotations
from fractions import Fraction
from typing import Dict, List

from .pitch import PianoKey
from .quantize import DEFAULT_MAX_PIECES, QUANTIZED_DURATIONS, quantize_note
from .timeline import PianoNote

REST_MARKER = "p"
DOTTED_SUFFIX = "."

def duration_labels(dotted_suffix: str = DOTTED_SUFFIX) -> Dict[Fraction, str]:
    """1/4 -> "4", 3/8 -> "4." for every entry of the quantized table."""
    labels: Dict[Fraction, str] = {}
    for value in QUANTIZED_DURATIONS:
        plain = 1 / value
        if plain.denominator == 1:
            labels[value] = str(plain.numerator)
        else:
            labels[value] = f"{(plain * 3 / 2).numerator}{dotted_suffix}"
    return labels

DURATION_LABELS = duration_labels()

def duration_label(value: Fraction, labels: Dict[Fraction, str] = DURATION_LABELS) -> str:
    return labels[value]

def pitch_label(key: PianoKey) -> str:
    return key.display_name

def render_voice(
    lane: List[PianoNote],
    rest_marker: str = REST_MARKER,
    dotted_suffix: str = DOTTED_SUFFIX,
    max_pieces: int = DEFAULT_MAX_PIECES,
) -> List[str]:
    """
    Renders one lane into tokens: "<duration><pitch>" per quantized piece.
    When the note starts after the end of the previous note, its first token
    is prefixed with "<duration><rest_marker>", using the first piece's duration.
    """
    labels = duration_labels(dotted_suffix) if dotted_suffix != DOTTED_SUFFIX else DURATION_LABELS
    tokens: List[str] = []
    prev_end = 0
    for note in lane:
        pieces = quantize_note(note, max_pieces=max_pieces)
        rest = ""
        if note.start_tick > prev_end:
            rest = f"{duration_label(pieces[0].duration, labels)}{rest_marker}"
        name = pitch_label(note.piano_key)
        for i, piece in enumerate(pieces):
            token = f"{duration_label(piece.duration, labels)}{name}"
            tokens.append(rest + token if i == 0 else token)
        prev_end = note.end_tick
    return tokens
