from fractions import Fraction

import pytest

from midixml2ringtone.assemble import assemble_notes
from midixml2ringtone.errors import OutOfRangeNote, UnclosedNote
from midixml2ringtone.timeline import MidiEventRecord as Ev


def test_single_quarter_note() -> None:
    notes = assemble_notes([Ev(0, note_on="60"), Ev(480, note_off="60")], 480)
    assert len(notes) == 1
    n = notes[0]
    assert n.start_tick == 0
    assert n.duration_ticks == 480
    assert n.duration_in_wholes == Fraction(1, 4)
    assert n.piano_key.name == "C4"


def test_position_accumulates_deltas() -> None:
    events = [
        Ev(240, note_on="60"),
        Ev(240, note_off="60"),
        Ev(480, note_on="62"),
        Ev(960, note_off="62"),
    ]
    first, second = assemble_notes(events, 480)
    assert (first.start_tick, first.duration_ticks) == (240, 240)
    assert (second.start_tick, second.duration_ticks) == (960, 960)
    assert second.start_in_wholes == Fraction(1, 2)
    assert second.duration_in_wholes == Fraction(1, 2)


def test_duplicate_note_on_is_ignored() -> None:
    events = [Ev(0, note_on="60"), Ev(100, note_on="60"), Ev(380, note_off="60")]
    notes = assemble_notes(events, 480)
    assert len(notes) == 1
    assert notes[0].start_tick == 0
    assert notes[0].duration_ticks == 480


def test_orphan_note_off_is_ignored() -> None:
    assert assemble_notes([Ev(0, note_off="60")], 480) == []


def test_note_on_and_off_in_same_event() -> None:
    events = [Ev(0, note_on="60"), Ev(480, note_on="64", note_off="60"), Ev(480, note_off="64")]
    notes = assemble_notes(events, 480)
    assert [n.piano_key.midi for n in notes] == [60, 64]
    assert [n.start_tick for n in notes] == [0, 480]
    assert all(n.duration_ticks == 480 for n in notes)


def test_notes_keep_note_on_order() -> None:
    events = [
        Ev(0, note_on="67"),
        Ev(0, note_on="60"),
        Ev(240, note_off="60"),
        Ev(240, note_off="67"),
    ]
    notes = assemble_notes(events, 480)
    assert [n.piano_key.midi for n in notes] == [67, 60]
    assert [n.duration_ticks for n in notes] == [480, 240]


@pytest.mark.parametrize("ident", ["20", "109", "abc", "", "60.5", "nan"])
def test_out_of_range_note_on(ident) -> None:
    with pytest.raises(OutOfRangeNote) as exc:
        assemble_notes([Ev(0, note_on="60"), Ev(10, note_on=ident)], 480, track_index=3)
    assert exc.value.context["track_index"] == 3
    assert exc.value.context["event_index"] == 1


def test_out_of_range_note_off() -> None:
    with pytest.raises(OutOfRangeNote):
        assemble_notes([Ev(0, note_off="5")], 480)


def test_unclosed_notes_are_dropped() -> None:
    events = [Ev(0, note_on="60"), Ev(0, note_on="62"), Ev(480, note_off="62")]
    notes = assemble_notes(events, 480)
    assert [n.piano_key.midi for n in notes] == [62]


def test_unclosed_notes_strict() -> None:
    with pytest.raises(UnclosedNote):
        assemble_notes([Ev(0, note_on="60")], 480, strict=True)


def test_zero_length_note_is_kept() -> None:
    notes = assemble_notes([Ev(10, note_on="60"), Ev(0, note_off="60")], 480)
    assert notes[0].duration_ticks == 0
    assert notes[0].start_tick == 10


def test_numeric_identifiers_like_60_0_resolve() -> None:
    notes = assemble_notes([Ev(0, note_on="60.0"), Ev(480, note_off="60")], 480)
    assert len(notes) == 1
    assert notes[0].piano_key.midi == 60
    assert notes[0].duration_ticks == 480
