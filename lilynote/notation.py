"""Structured note model: pitch and rhythm, independent of any dialect.

A rest is represented by ``None`` in every pitch field. The invariant

    duration_type == Rest  <=>  note_name is None
                           <=>  octave is None
                           <=>  accidental is None

is checked whenever a Pitch or Note is constructed.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, unique
from typing import NewType, Optional


@unique
class NoteName(Enum):
    """The seven natural note letters.

    Values are semitone offsets from C within an octave.
    """

    C = 0
    D = 2
    E = 4
    F = 5
    G = 7
    A = 9
    B = 11


@unique
class Octave(Enum):
    """Absolute octave levels in scientific pitch numbering.

    S3 is the reference octave, written without transposition marks.
    """

    S0 = 0
    S1 = 1
    S2 = 2
    S3 = 3
    S4 = 4
    S5 = 5
    S6 = 6
    S7 = 7
    S8 = 8
    S9 = 9

    @property
    def offset(self) -> int:
        """Signed number of octaves above (positive) or below the reference."""
        return self.value - REFERENCE_OCTAVE.value

    @staticmethod
    def from_level(level: int) -> Optional[Octave]:
        """Return the octave for an integer level, or None outside 0-9."""
        return _OCTAVE_LOOKUP.get(level)


REFERENCE_OCTAVE = Octave.S3
"""The octave that carries no transposition marks."""

_OCTAVE_LOOKUP = {o.value: o for o in Octave}


@unique
class Accidental(Enum):
    """Accidentals a natural note can carry, valued in semitones."""

    Natural = 0
    Sharp = 1
    DoubleSharp = 2
    Flat = -1
    DoubleFlat = -2

    @property
    def semitones(self) -> int:
        return self.value


@unique
class Length(Enum):
    """Power-of-two note values, valued by their LilyPond duration number."""

    Whole = 1
    Half = 2
    Quarter = 4
    Eighth = 8
    Sixteenth = 16
    ThirtySecond = 32
    SixtyFourth = 64
    OneTwentyEighth = 128

    @property
    def literal(self) -> str:
        """The digit string used in note text, e.g. "16"."""
        return str(self.value)


DEFAULT_LENGTH = Length.Quarter


@unique
class DurationType(Enum):
    Note = 0
    Rest = 1


Dots = NewType("Dots", int)
"""Number of rhythmic augmentation dots (0-255)"""

MAX_DOTS = 255


def mk_dots(count: int) -> Dots:
    """Construct a bounded dot count.

    Raises:
        ValueError: If count is outside 0-MAX_DOTS.
    """
    if not (0 <= count <= MAX_DOTS):
        raise ValueError(f"Dots {count} out of range (0-{MAX_DOTS})")
    return Dots(count)


@dataclass(frozen=True)
class Pitch:
    """A single pitch: letter, octave and accidental, or all None for a rest."""

    note_name: Optional[NoteName]
    octave: Optional[Octave]
    accidental: Optional[Accidental]

    def __post_init__(self) -> None:
        absent = (self.note_name is None, self.octave is None, self.accidental is None)
        if any(absent) and not all(absent):
            raise ValueError(f"Inconsistent rest pitch: {self}")

    @staticmethod
    def new(note_name: NoteName) -> Pitch:
        """Create a natural pitch in the reference octave."""
        return Pitch(note_name, REFERENCE_OCTAVE, Accidental.Natural)

    @staticmethod
    def rest() -> Pitch:
        return _REST_PITCH

    @property
    def is_rest(self) -> bool:
        return self.note_name is None

    def with_octave(self, octave: Octave) -> Pitch:
        return replace(self, octave=octave)

    def with_accidental(self, accidental: Accidental) -> Pitch:
        return replace(self, accidental=accidental)

    def sharpen(self) -> Pitch:
        return self.with_accidental(Accidental.Sharp)

    def flatten(self) -> Pitch:
        return self.with_accidental(Accidental.Flat)


_REST_PITCH = Pitch(None, None, None)


@dataclass(frozen=True)
class Rhythm:
    """Duration of a note or rest."""

    duration_type: DurationType
    length: Length = DEFAULT_LENGTH
    dots: Dots = Dots(0)

    def __post_init__(self) -> None:
        mk_dots(self.dots)

    @staticmethod
    def new(length: Length = DEFAULT_LENGTH, dots: int = 0) -> Rhythm:
        return Rhythm(DurationType.Note, length, mk_dots(dots))

    @staticmethod
    def rest(length: Length = DEFAULT_LENGTH, dots: int = 0) -> Rhythm:
        return Rhythm(DurationType.Rest, length, mk_dots(dots))

    @property
    def is_rest(self) -> bool:
        return self.duration_type == DurationType.Rest

    def with_length(self, length: Length) -> Rhythm:
        return replace(self, length=length)

    def with_dots(self, dots: int) -> Rhythm:
        return replace(self, dots=mk_dots(dots))


@dataclass(frozen=True)
class Note:
    """A note (or rest) with pitch and rhythm.

    Examples:
        >>> Note.new(NoteName.A)
        # A natural in octave S3, quarter length, no dots

        >>> Note.new(None)
        # A quarter rest
    """

    pitch: Pitch
    rhythm: Rhythm

    def __post_init__(self) -> None:
        if self.pitch.is_rest != self.rhythm.is_rest:
            raise ValueError(
                f"Pitch and duration type disagree on rest: {self.pitch}, {self.rhythm}"
            )

    @staticmethod
    def new(note_name: Optional[NoteName]) -> Note:
        """Construct a default note, or a default rest when note_name is None.

        Args:
            note_name: The note letter, or None for a rest.

        Returns:
            A quarter note at the reference octave with no accidental or dots,
            or a quarter rest.
        """
        if note_name is None:
            return Note.rest()
        return Note(Pitch.new(note_name), Rhythm.new())

    @staticmethod
    def rest(length: Length = DEFAULT_LENGTH, dots: int = 0) -> Note:
        return Note(Pitch.rest(), Rhythm.rest(length, dots))

    @property
    def is_rest(self) -> bool:
        return self.rhythm.is_rest

    def with_pitch(self, pitch: Pitch) -> Note:
        return replace(self, pitch=pitch)

    def with_rhythm(self, rhythm: Rhythm) -> Note:
        return replace(self, rhythm=rhythm)
