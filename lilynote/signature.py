"""Key and time signature values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from lilynote.languages import Dialect
from lilynote.notation import Accidental, Length, NoteName

MAX_KEY_ACCIDENTALS = 7

# Major tonics along the circle of fifths, indexed by number of accidentals
_SHARP_TONICS: List[Tuple[NoteName, Accidental]] = [
    (NoteName.C, Accidental.Natural),
    (NoteName.G, Accidental.Natural),
    (NoteName.D, Accidental.Natural),
    (NoteName.A, Accidental.Natural),
    (NoteName.E, Accidental.Natural),
    (NoteName.B, Accidental.Natural),
    (NoteName.F, Accidental.Sharp),
    (NoteName.C, Accidental.Sharp),
]

_FLAT_TONICS: List[Tuple[NoteName, Accidental]] = [
    (NoteName.C, Accidental.Natural),
    (NoteName.F, Accidental.Natural),
    (NoteName.B, Accidental.Flat),
    (NoteName.E, Accidental.Flat),
    (NoteName.A, Accidental.Flat),
    (NoteName.D, Accidental.Flat),
    (NoteName.G, Accidental.Flat),
    (NoteName.C, Accidental.Flat),
]


@dataclass(frozen=True)
class KeySignature:
    """A key signature with up to seven sharps or seven flats, never both.

    The default is C major (no accidentals).
    """

    sharps: int = 0
    flats: int = 0

    def __post_init__(self) -> None:
        for name, count in (("sharps", self.sharps), ("flats", self.flats)):
            if not (0 <= count <= MAX_KEY_ACCIDENTALS):
                raise ValueError(
                    f"Key signature {name} {count} out of range (0-{MAX_KEY_ACCIDENTALS})"
                )
        if self.sharps and self.flats:
            raise ValueError("Key signature cannot have both sharps and flats")

    @staticmethod
    def sharps_of(count: int) -> KeySignature:
        return KeySignature(sharps=count)

    @staticmethod
    def flats_of(count: int) -> KeySignature:
        return KeySignature(flats=count)

    @staticmethod
    def parse(text: str) -> KeySignature:
        """Parse a count and kind, e.g. "2s", "3f", or "0".

        Raises:
            ValueError: If the text is malformed or the count out of range.
        """
        stripped = text.strip().lower()
        if stripped.isdigit() and int(stripped) == 0:
            return KeySignature()
        count, kind = stripped[:-1], stripped[-1:]
        if not count.isdigit() or kind not in ("s", "f"):
            raise ValueError(f"Invalid key signature: {text!r}")
        if kind == "s":
            return KeySignature.sharps_of(int(count))
        return KeySignature.flats_of(int(count))

    @property
    def major_tonic(self) -> Tuple[NoteName, Accidental]:
        if self.flats:
            return _FLAT_TONICS[self.flats]
        return _SHARP_TONICS[self.sharps]

    def to_lilypond(self, dialect: Dialect) -> str:
        """Render as a LilyPond command, e.g. ``\\key d \\major``."""
        note_name, accidental = self.major_tonic
        return f"\\key {dialect.spell(note_name, accidental)} \\major"


@dataclass(frozen=True)
class TimeSignature:
    """Beats per measure over the note value of one beat. Defaults to 4/4."""

    num_beats: int = 4
    duration: int = 4

    def __post_init__(self) -> None:
        if not (1 <= self.num_beats <= 255):
            raise ValueError(f"Number of beats {self.num_beats} out of range (1-255)")
        if self.duration not in {length.value for length in Length}:
            raise ValueError(f"Beat duration {self.duration} is not a note length")

    @staticmethod
    def parse(text: str) -> TimeSignature:
        """Parse "N/D", e.g. "3/4".

        Raises:
            ValueError: If the text is malformed or out of range.
        """
        num, sep, den = text.strip().partition("/")
        if not sep or not num.isdigit() or not den.isdigit():
            raise ValueError(f"Invalid time signature: {text!r}")
        return TimeSignature(int(num), int(den))

    def to_lilypond(self) -> str:
        return f"\\time {self.num_beats}/{self.duration}"
