"""Exceptions raised while validating, decoding and encoding LilyPond notes.

Every exception derives from NoteError (itself a ValueError) so callers can
catch the whole family at once, or pick out the field-level failures through
NoteDecodeError. DialectInconsistency marks failures that can only happen when
a dialect's grammar and its lookup tables disagree, as opposed to bad user
input.
"""

from __future__ import annotations

from typing import Optional


class NoteError(ValueError):
    """Base class for all note errors."""


class InvalidNoteSyntax(NoteError):
    """The whole string is not accepted by the note grammar."""

    def __init__(self, text: str, language: Optional[str] = None) -> None:
        self.text = text
        self.language = language
        suffix = f" ({language})" if language is not None else ""
        super().__init__(f"Invalid note syntax{suffix}: {text!r}")


class UnknownDialect(NoteError):
    """No note-name language is registered under the given name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown note name language: {name!r}")


class LanguageMismatch(NoteError):
    """A note validated in one language was handed to a codec for another."""

    def __init__(self, text: str, language: str, expected: str) -> None:
        self.text = text
        self.language = language
        self.expected = expected
        super().__init__(
            f"Note {text!r} was validated as {language}, not {expected}"
        )


class NoteDecodeError(NoteError):
    """A single field of an otherwise well-formed note could not be decoded.

    Attributes:
        field: Name of the grammar field that failed (e.g. "octave").
        literal: The captured text of that field.
    """

    reason = "Invalid value"

    def __init__(self, field: str, literal: str) -> None:
        self.field = field
        self.literal = literal
        super().__init__(f"{self.reason} in field '{field}': {literal!r}")


class MixedOctaveMarks(NoteDecodeError):
    reason = "Mixed octave transposition marks"


class OctaveOutOfRange(NoteDecodeError):
    reason = "Octave out of range"


class InvalidAccidental(NoteDecodeError):
    reason = "Invalid accidental"


class TooManyDots(NoteDecodeError):
    reason = "Too many dots"


class DialectInconsistency(NoteDecodeError):
    """The grammar accepted a literal that the dialect tables cannot map.

    This signals a broken dialect definition rather than bad input.
    """

    reason = "Dialect tables out of sync with grammar"


class InvalidNoteName(DialectInconsistency):
    reason = "Invalid note name"


class InvalidDuration(DialectInconsistency):
    reason = "Invalid duration"
