"""Lilynote: parse and format single LilyPond notes in several note-name languages."""

from lilynote.codec import NoteCodec, decode_octave
from lilynote.config import active_codec, active_dialect, active_grammar
from lilynote.errors import (
    DialectInconsistency,
    InvalidNoteSyntax,
    LanguageMismatch,
    NoteDecodeError,
    NoteError,
    UnknownDialect,
)
from lilynote.grammar import NoteGrammar, grammar_for
from lilynote.languages import DIALECTS, ENGLISH, NEDERLANDS, Dialect, dialect_for
from lilynote.notation import (
    Accidental,
    DurationType,
    Length,
    Note,
    NoteName,
    Octave,
    Pitch,
    Rhythm,
)
from lilynote.raw import RawNote

__all__ = [
    "Accidental",
    "DIALECTS",
    "Dialect",
    "DialectInconsistency",
    "DurationType",
    "ENGLISH",
    "InvalidNoteSyntax",
    "LanguageMismatch",
    "Length",
    "NEDERLANDS",
    "Note",
    "NoteCodec",
    "NoteDecodeError",
    "NoteError",
    "NoteGrammar",
    "NoteName",
    "Octave",
    "Pitch",
    "RawNote",
    "Rhythm",
    "UnknownDialect",
    "active_codec",
    "active_dialect",
    "active_grammar",
    "decode_octave",
    "dialect_for",
    "grammar_for",
]
