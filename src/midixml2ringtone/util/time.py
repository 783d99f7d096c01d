from __future__ import annotations
from fractions import Fraction

def ticks_to_wholes(ticks: int, ticks_per_beat: int) -> Fraction:
    # one beat is a quarter note
    return Fraction(ticks, ticks_per_beat) / 4
