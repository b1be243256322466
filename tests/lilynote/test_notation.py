"""Tests for lilynote.notation."""

from __future__ import annotations

import pytest

from lilynote.notation import (
    MAX_DOTS,
    REFERENCE_OCTAVE,
    Accidental,
    DurationType,
    Length,
    Note,
    NoteName,
    Octave,
    Pitch,
    Rhythm,
    mk_dots,
)


def test_default_note() -> None:
    note = Note.new(NoteName.A)
    assert note.pitch == Pitch(NoteName.A, Octave.S3, Accidental.Natural)
    assert note.rhythm == Rhythm(DurationType.Note, Length.Quarter, 0)
    assert not note.is_rest


def test_default_rest() -> None:
    rest = Note.new(None)
    assert rest.is_rest
    assert rest.pitch == Pitch(None, None, None)
    assert rest.rhythm == Rhythm.rest()
    assert rest == Note.rest(Length.Quarter, 0)


def test_octave_levels() -> None:
    assert REFERENCE_OCTAVE == Octave.S3
    assert Octave.from_level(0) == Octave.S0
    assert Octave.from_level(9) == Octave.S9
    assert Octave.from_level(-1) is None
    assert Octave.from_level(10) is None
    assert Octave.S0.offset == -3
    assert Octave.S9.offset == 6


def test_accidental_semitones() -> None:
    assert [a.semitones for a in Accidental] == [0, 1, 2, -1, -2]


def test_length_literals() -> None:
    assert [length.literal for length in Length] == [
        "1",
        "2",
        "4",
        "8",
        "16",
        "32",
        "64",
        "128",
    ]


def test_dots_bounds() -> None:
    assert mk_dots(0) == 0
    assert mk_dots(MAX_DOTS) == 255
    with pytest.raises(ValueError):
        mk_dots(-1)
    with pytest.raises(ValueError):
        mk_dots(256)
    with pytest.raises(ValueError):
        Rhythm.new(Length.Half, 256)


def test_inconsistent_rest_pitch() -> None:
    with pytest.raises(ValueError):
        Pitch(NoteName.C, None, Accidental.Natural)
    with pytest.raises(ValueError):
        Pitch(None, Octave.S3, None)


def test_pitch_and_rhythm_must_agree_on_rest() -> None:
    with pytest.raises(ValueError):
        Note(Pitch.rest(), Rhythm.new())
    with pytest.raises(ValueError):
        Note(Pitch.new(NoteName.C), Rhythm.rest())


def test_setters_return_copies() -> None:
    note = Note.new(NoteName.G)
    higher = note.with_pitch(note.pitch.with_octave(Octave.S5))
    assert note.pitch.octave == Octave.S3
    assert higher.pitch.octave == Octave.S5

    assert note.pitch.sharpen().accidental == Accidental.Sharp
    assert note.pitch.flatten().accidental == Accidental.Flat
    assert (
        note.pitch.with_accidental(Accidental.DoubleFlat).accidental
        == Accidental.DoubleFlat
    )

    dotted = note.with_rhythm(note.rhythm.with_length(Length.Half).with_dots(2))
    assert dotted.rhythm == Rhythm.new(Length.Half, 2)
    assert note.rhythm == Rhythm.new()


def test_values_are_frozen() -> None:
    note = Note.new(NoteName.C)
    with pytest.raises(AttributeError):
        note.pitch = Pitch.new(NoteName.D)  # type: ignore[misc]
