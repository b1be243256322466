"""Tests for lilynote.midi."""

from __future__ import annotations

from pathlib import Path

import mido
import pytest

from lilynote.codec import NoteCodec
from lilynote.languages import ENGLISH
from lilynote.midi import (
    midi_file_from_notes,
    midi_from_pitch,
    note_ticks,
    pitch_from_midi,
)
from lilynote.notation import Accidental, Length, NoteName, Octave, Pitch, Rhythm

codec = NoteCodec(ENGLISH)


def test_midi_from_pitch() -> None:
    assert midi_from_pitch(Pitch.new(NoteName.C)) == 48
    assert midi_from_pitch(codec.parse("c'").pitch) == 60
    assert midi_from_pitch(codec.parse("a'").pitch) == 69
    assert midi_from_pitch(codec.parse("cf,,,").pitch) == 11
    assert midi_from_pitch(codec.parse("g''''''").pitch) == 127


def test_midi_from_pitch_out_of_range() -> None:
    with pytest.raises(ValueError, match="out of range"):
        midi_from_pitch(codec.parse("gs''''''").pitch)


def test_midi_from_rest() -> None:
    with pytest.raises(ValueError):
        midi_from_pitch(Pitch.rest())


def test_pitch_from_midi() -> None:
    assert pitch_from_midi(48) == Pitch.new(NoteName.C)
    assert pitch_from_midi(61) == Pitch(NoteName.C, Octave.S4, Accidental.Sharp)
    assert pitch_from_midi(61, prefer_flats=True) == Pitch(
        NoteName.D, Octave.S4, Accidental.Flat
    )
    with pytest.raises(ValueError):
        pitch_from_midi(11)
    with pytest.raises(ValueError):
        pitch_from_midi(128)


def test_midi_pitch_roundtrip() -> None:
    for number in range(12, 128):
        assert midi_from_pitch(pitch_from_midi(number)) == number
        assert midi_from_pitch(pitch_from_midi(number, prefer_flats=True)) == number


def test_note_ticks() -> None:
    assert note_ticks(Rhythm.new(Length.Quarter)) == 480
    assert note_ticks(Rhythm.new(Length.Whole)) == 1920
    assert note_ticks(Rhythm.new(Length.Eighth, 1)) == 360
    assert note_ticks(Rhythm.new(Length.Half, 2)) == 1680
    assert note_ticks(Rhythm.rest(Length.OneTwentyEighth)) == 15
    assert note_ticks(Rhythm.new(Length.Quarter), ticks_per_beat=96) == 96


def test_midi_file_from_notes() -> None:
    notes = [codec.parse(text) for text in ["c4", "r8", "e8.", "r4"]]
    mid = midi_file_from_notes(notes)
    assert mid.ticks_per_beat == 480
    (track,) = mid.tracks
    assert track[0].type == "set_tempo"
    assert track[0].tempo == mido.bpm2tempo(120)

    events = [(msg.type, getattr(msg, "note", None), msg.time) for msg in track[1:]]
    assert events == [
        ("note_on", 48, 0),
        ("note_off", 48, 480),
        ("note_on", 52, 240),
        ("note_off", 52, 360),
        ("end_of_track", None, 480),
    ]
    assert track[1].velocity == 64


def test_midi_file_saves(tmp_path: Path) -> None:
    path = tmp_path / "scale.mid"
    notes = [codec.parse(text) for text in ["c'8", "d'8", "e'8", "f'8"]]
    midi_file_from_notes(notes, tempo=90, velocity=100).save(path)
    loaded = mido.MidiFile(path)
    note_ons = [msg.note for msg in loaded.tracks[0] if msg.type == "note_on"]
    assert note_ons == [60, 62, 64, 65]


def test_midi_file_rejects_bad_velocity() -> None:
    with pytest.raises(ValueError):
        midi_file_from_notes([], velocity=200)  # type: ignore[arg-type]
