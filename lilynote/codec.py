"""Conversion between validated note text and the structured note model.

Decoding maps each captured grammar field to a model value through small,
independent field decoders. The first failing field raises its specific
NoteDecodeError. Encoding formats each field with the dialect's canonical
spelling and re-validates the result through RawNote.parse, so a dialect table
that emits text its own grammar rejects is caught here.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from lilynote.errors import (
    DialectInconsistency,
    InvalidAccidental,
    InvalidDuration,
    InvalidNoteName,
    InvalidNoteSyntax,
    LanguageMismatch,
    MixedOctaveMarks,
    OctaveOutOfRange,
    TooManyDots,
)
from lilynote.grammar import DOT_MARK, LOWER_MARK, RAISE_MARK, NoteGrammar, grammar_for
from lilynote.languages import Dialect
from lilynote.notation import (
    DEFAULT_LENGTH,
    MAX_DOTS,
    REFERENCE_OCTAVE,
    Accidental,
    Dots,
    DurationType,
    Length,
    Note,
    NoteName,
    Octave,
    Pitch,
    Rhythm,
    mk_dots,
)
from lilynote.raw import RawNote

logger = logging.getLogger(__name__)

_LENGTH_LOOKUP: Dict[str, Length] = {length.literal: length for length in Length}


# =============================================================================
# Field decoders
# =============================================================================


def decode_octave(marks: str) -> Octave:
    """Decode octave transposition marks into an absolute octave.

    Starts from the reference octave, adding one level per apostrophe or
    removing one per comma.

    Args:
        marks: The captured octave field, e.g. ",," or "'''".

    Raises:
        MixedOctaveMarks: If both commas and apostrophes are present.
        OctaveOutOfRange: If the resulting level is outside S0-S9.
    """
    lower = marks.count(LOWER_MARK)
    raise_ = marks.count(RAISE_MARK)
    if lower and raise_:
        raise MixedOctaveMarks("octave", marks)
    if lower + raise_ != len(marks):
        raise OctaveOutOfRange("octave", marks)
    octave = Octave.from_level(REFERENCE_OCTAVE.value + raise_ - lower)
    if octave is None:
        raise OctaveOutOfRange("octave", marks)
    return octave


def decode_length(literal: str) -> Length:
    """Decode a duration literal; the empty string means the default length.

    Raises:
        InvalidDuration: If the literal is not a legal duration.
    """
    if literal == "":
        return DEFAULT_LENGTH
    try:
        return _LENGTH_LOOKUP[literal]
    except KeyError:
        raise InvalidDuration("duration", literal) from None


def decode_dots(marks: str) -> Dots:
    """Count augmentation dots.

    Raises:
        TooManyDots: If there are more than MAX_DOTS dots.
    """
    count = marks.count(DOT_MARK)
    if count > MAX_DOTS:
        raise TooManyDots("dot", marks)
    return mk_dots(count)


def encode_octave(octave: Octave) -> str:
    offset = octave.offset
    if offset < 0:
        return LOWER_MARK * -offset
    return RAISE_MARK * offset


# =============================================================================
# Codec
# =============================================================================


class NoteCodec:
    """Bidirectional codec between note text and Note values for one dialect.

    Several codecs bound to different dialects can be used side by side.

    Examples:
        >>> codec = NoteCodec(ENGLISH)
        >>> codec.parse("fs,,,")
        # Note(F sharp, octave S0, quarter)
        >>> codec.format(Note.new(NoteName.D).with_rhythm(Rhythm.new(Length.Eighth, 1)))
        'd8.'
    """

    def __init__(self, dialect: Dialect, grammar: Optional[NoteGrammar] = None) -> None:
        self.dialect = dialect
        self.grammar = grammar if grammar is not None else grammar_for(dialect)

    # -------------------------------------------------------------------------
    # Decode
    # -------------------------------------------------------------------------

    def duration_type(self, raw: RawNote) -> DurationType:
        if raw.field("note_name") == self.dialect.rest_token:
            return DurationType.Rest
        return DurationType.Note

    def note_name(self, raw: RawNote) -> Optional[NoteName]:
        if self.duration_type(raw) == DurationType.Rest:
            return None
        literal = raw.field("note_name")
        try:
            return self.dialect.note_names[literal]
        except KeyError:
            raise InvalidNoteName("note_name", literal) from None

    def accidental(self, raw: RawNote) -> Optional[Accidental]:
        if self.duration_type(raw) == DurationType.Rest:
            return None
        literal = raw.field("accidental")
        try:
            return self.dialect.accidental_spellings[literal]
        except KeyError:
            raise InvalidAccidental("accidental", literal) from None

    def octave(self, raw: RawNote) -> Optional[Octave]:
        if self.duration_type(raw) == DurationType.Rest:
            return None
        return decode_octave(raw.field("octave"))

    def rhythm(self, raw: RawNote) -> Rhythm:
        return Rhythm(
            self.duration_type(raw),
            decode_length(raw.field("duration")),
            decode_dots(raw.field("dot")),
        )

    def decode(self, raw: RawNote) -> Note:
        """Convert a validated note into a Note.

        Raises:
            LanguageMismatch: If raw was validated by another language's grammar.
            NoteDecodeError: The subclass naming the first field that failed.
        """
        if raw.language != self.grammar.dialect.name:
            raise LanguageMismatch(raw.text, raw.language, self.grammar.dialect.name)
        pitch = Pitch(self.note_name(raw), self.octave(raw), self.accidental(raw))
        return Note(pitch, self.rhythm(raw))

    def parse(self, text: str) -> Note:
        """Validate and decode note text in this codec's dialect.

        Raises:
            InvalidNoteSyntax: If the text is not a well-formed note.
            NoteDecodeError: If a field cannot be decoded.
        """
        return self.decode(RawNote.parse(text, self.grammar))

    # -------------------------------------------------------------------------
    # Encode
    # -------------------------------------------------------------------------

    def _pitch_text(self, pitch: Pitch) -> str:
        assert pitch.note_name is not None
        assert pitch.accidental is not None
        assert pitch.octave is not None
        return self.dialect.spell(pitch.note_name, pitch.accidental) + encode_octave(
            pitch.octave
        )

    def encode(self, note: Note) -> RawNote:
        """Format a Note in this dialect and re-validate it.

        Rests are written as the rest token followed by length and dots only.

        Raises:
            DialectInconsistency: If the dialect produces text its own grammar
                does not accept.
        """
        if note.is_rest:
            head = self.dialect.rest_token
        else:
            head = self._pitch_text(note.pitch)
        text = head + note.rhythm.length.literal + DOT_MARK * note.rhythm.dots
        try:
            return RawNote.parse(text, self.grammar)
        except InvalidNoteSyntax as e:
            logger.warning(
                "Language %s produced text its grammar rejects: %r",
                self.dialect.name,
                text,
            )
            raise DialectInconsistency("note", text) from e

    def format(self, note: Note) -> str:
        return self.encode(note).text

    def canonical(self, text: str) -> str:
        """Re-spell note text in the form the encoder emits."""
        return self.format(self.parse(text))

    def __repr__(self) -> str:
        return f"NoteCodec({self.dialect.name!r})"
