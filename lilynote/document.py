"""Assembling and reading minimal LilyPond documents of single notes."""

from __future__ import annotations

from typing import Iterable, List, Optional

from lilynote.codec import NoteCodec
from lilynote.notation import Note
from lilynote.signature import KeySignature, TimeSignature

DEFAULT_LILYPOND_VERSION = "2.24.0"


def curly_brackets(text: str) -> Optional[str]:
    """Return the content between the first "{" and the last "}".

    Examples:
        >>> curly_brackets("{ c e g }")
        ' c e g '
        >>> curly_brackets("c e g") is None
        True
    """
    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end < start:
        return None
    return text[start + 1 : end]


def read_notes(text: str, codec: NoteCodec) -> List[Note]:
    """Parse whitespace-separated notes, optionally wrapped in braces.

    Raises:
        InvalidNoteSyntax: If a token is not a well-formed note.
        NoteDecodeError: If a token cannot be decoded.
    """
    music = curly_brackets(text)
    body = music if music is not None else text
    return [codec.parse(token) for token in body.split()]


def build_document(
    notes: Iterable[Note],
    codec: NoteCodec,
    key: Optional[KeySignature] = None,
    time: Optional[TimeSignature] = None,
    version: str = DEFAULT_LILYPOND_VERSION,
) -> str:
    """Build LilyPond source for a single staff of notes.

    The note names are written in the codec's language, which is declared
    with ``\\language`` so LilyPond reads them back the same way.
    """
    lines = [
        f'\\version "{version}"',
        f'\\language "{codec.dialect.name}"',
        "",
        "{",
    ]
    if key is not None:
        lines.append("  " + key.to_lilypond(codec.dialect))
    if time is not None:
        lines.append("  " + time.to_lilypond())
    lines.append("  " + " ".join(codec.format(note) for note in notes))
    lines.append("}")
    return "\n".join(lines) + "\n"
