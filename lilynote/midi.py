"""Mapping between pitches and MIDI note numbers, and MIDI file export."""

from __future__ import annotations

from fractions import Fraction
from typing import Iterable, List, NewType

import mido

from lilynote.notation import Accidental, Note, NoteName, Octave, Pitch, Rhythm

MidiNote = NewType("MidiNote", int)
"""MIDI note number (0-127)"""

Velocity = NewType("Velocity", int)
"""MIDI velocity (0-127)"""

DEFAULT_VELOCITY = Velocity(64)
DEFAULT_TEMPO = 120
DEFAULT_TICKS_PER_BEAT = 480

_SHARP_SPELLINGS: List[tuple[NoteName, Accidental]] = [
    (NoteName.C, Accidental.Natural),
    (NoteName.C, Accidental.Sharp),
    (NoteName.D, Accidental.Natural),
    (NoteName.D, Accidental.Sharp),
    (NoteName.E, Accidental.Natural),
    (NoteName.F, Accidental.Natural),
    (NoteName.F, Accidental.Sharp),
    (NoteName.G, Accidental.Natural),
    (NoteName.G, Accidental.Sharp),
    (NoteName.A, Accidental.Natural),
    (NoteName.A, Accidental.Sharp),
    (NoteName.B, Accidental.Natural),
]

_FLAT_SPELLINGS: List[tuple[NoteName, Accidental]] = [
    (NoteName.C, Accidental.Natural),
    (NoteName.D, Accidental.Flat),
    (NoteName.D, Accidental.Natural),
    (NoteName.E, Accidental.Flat),
    (NoteName.E, Accidental.Natural),
    (NoteName.F, Accidental.Natural),
    (NoteName.G, Accidental.Flat),
    (NoteName.G, Accidental.Natural),
    (NoteName.A, Accidental.Flat),
    (NoteName.A, Accidental.Natural),
    (NoteName.B, Accidental.Flat),
    (NoteName.B, Accidental.Natural),
]


def _assert_midi_range(value: int, name: str) -> None:
    if not (0 <= value <= 127):
        raise ValueError(f"{name} {value} out of range (0-127)")


def midi_from_pitch(pitch: Pitch) -> MidiNote:
    """Convert a pitch to its MIDI note number.

    C in the reference octave S3 is 48; middle C (S4) is 60.

    Raises:
        ValueError: If the pitch is a rest or falls outside 0-127.
    """
    if pitch.note_name is None or pitch.octave is None or pitch.accidental is None:
        raise ValueError("A rest has no MIDI note number")
    value = (
        12 * (pitch.octave.value + 1)
        + pitch.note_name.value
        + pitch.accidental.semitones
    )
    _assert_midi_range(value, "MIDI note")
    return MidiNote(value)


def pitch_from_midi(note: int, prefer_flats: bool = False) -> Pitch:
    """Spell a MIDI note number as a pitch.

    Args:
        note: MIDI note number; must lie in octaves S0-S9 (12-127).
        prefer_flats: Spell black keys with flats instead of sharps.

    Raises:
        ValueError: If the note has no representable octave.
    """
    _assert_midi_range(note, "MIDI note")
    octave = Octave.from_level(note // 12 - 1)
    if octave is None:
        raise ValueError(f"MIDI note {note} is below octave S0")
    spellings = _FLAT_SPELLINGS if prefer_flats else _SHARP_SPELLINGS
    note_name, accidental = spellings[note % 12]
    return Pitch(note_name, octave, accidental)


def note_ticks(rhythm: Rhythm, ticks_per_beat: int = DEFAULT_TICKS_PER_BEAT) -> int:
    """Length of a rhythm in MIDI ticks, with a quarter note as one beat.

    Each dot adds half of the previous value.
    """
    base = Fraction(4 * ticks_per_beat, rhythm.length.value)
    total = base * (2 - Fraction(1, 2**rhythm.dots))
    return round(total)


def midi_file_from_notes(
    notes: Iterable[Note],
    tempo: int = DEFAULT_TEMPO,
    ticks_per_beat: int = DEFAULT_TICKS_PER_BEAT,
    velocity: Velocity = DEFAULT_VELOCITY,
    channel: int = 0,
) -> mido.MidiFile:
    """Build a single-track MIDI file playing notes one after another.

    Rests become delays before the next note.

    Args:
        notes: Notes and rests in order.
        tempo: Tempo in quarter notes per minute.
        ticks_per_beat: MIDI resolution.
        velocity: Note-on velocity.
        channel: MIDI channel (0-15).

    Raises:
        ValueError: If a pitch has no MIDI note number.
    """
    _assert_midi_range(int(velocity), "Velocity")
    mid = mido.MidiFile(ticks_per_beat=ticks_per_beat)
    track = mido.MidiTrack()
    mid.tracks.append(track)
    track.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(tempo), time=0))

    delay = 0
    for note in notes:
        ticks = note_ticks(note.rhythm, ticks_per_beat)
        if note.is_rest:
            delay += ticks
            continue
        number = midi_from_pitch(note.pitch)
        track.append(
            mido.Message(
                "note_on",
                channel=channel,
                note=int(number),
                velocity=int(velocity),
                time=delay,
            )
        )
        track.append(
            mido.Message(
                "note_off", channel=channel, note=int(number), velocity=0, time=ticks
            )
        )
        delay = 0
    track.append(mido.MetaMessage("end_of_track", time=delay))
    return mid
