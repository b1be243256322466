"""Note-name languages (dialects) for LilyPond note input.

The vocabulary of each language is documented at
<http://lilypond.org/doc/v2.24/Documentation/notation/writing-pitches#note-names-in-other-languages>.

A Dialect is pure data: literal tokens for the note letters and the rest, the
canonical and accepted spellings of each accidental, and a Lark grammar
fragment defining the ``accidental`` rule. The octave, duration and dot
sub-grammars are shared by every language (see lilynote.grammar). Adding a
language means adding one Dialect below and registering it in DIALECTS.

An ``accidental_grammar`` fragment must define a rule named ``accidental``
that matches the empty string (natural) and zero to two repetitions of exactly
one spelling. Terminal names are local to the fragment.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Dict, Mapping, Optional

from lilynote.errors import UnknownDialect
from lilynote.notation import Accidental, NoteName

_LETTER_TOKENS: Dict[NoteName, str] = {
    NoteName.A: "a",
    NoteName.B: "b",
    NoteName.C: "c",
    NoteName.D: "d",
    NoteName.E: "e",
    NoteName.F: "f",
    NoteName.G: "g",
}


@dataclass(frozen=True, eq=False)
class Dialect:
    """Constant vocabulary for one note-name language.

    Dialects compare and hash by identity.

    Attributes:
        name: The string passed to LilyPond's ``\\language`` command.
        note_tokens: Literal token for each note letter.
        rest_token: Literal token for a rest.
        accidental_tokens: Canonical spelling emitted for each accidental.
        accidental_spellings: Every accepted spelling, mapped to its accidental.
        accidental_grammar: Lark fragment defining the ``accidental`` rule.
    """

    name: str
    note_tokens: Mapping[NoteName, str]
    rest_token: str
    accidental_tokens: Mapping[Accidental, str]
    accidental_spellings: Mapping[str, Accidental]
    accidental_grammar: str

    @cached_property
    def note_names(self) -> Dict[str, NoteName]:
        """Reverse lookup from letter token to note name."""
        return {token: name for name, token in self.note_tokens.items()}

    def spell(self, note_name: NoteName, accidental: Accidental) -> str:
        """Spell a pitch class without octave, e.g. ``ees`` or ``ef``."""
        return self.note_tokens[note_name] + self.accidental_tokens[accidental]


ENGLISH = Dialect(
    name="english",
    note_tokens=_LETTER_TOKENS,
    rest_token="r",
    accidental_tokens={
        Accidental.Natural: "",
        Accidental.Sharp: "s",
        Accidental.DoubleSharp: "ss",
        Accidental.Flat: "f",
        Accidental.DoubleFlat: "ff",
    },
    accidental_spellings={
        "": Accidental.Natural,
        "s": Accidental.Sharp,
        "ss": Accidental.DoubleSharp,
        "f": Accidental.Flat,
        "ff": Accidental.DoubleFlat,
        "-sharp": Accidental.Sharp,
        "-sharpsharp": Accidental.DoubleSharp,
        "-flat": Accidental.Flat,
        "-flatflat": Accidental.DoubleFlat,
    },
    accidental_grammar=r"""
accidental: [SHARPS | FLATS | SPELLED]
SHARPS: /s{1,2}/
FLATS: /f{1,2}/
SPELLED: "-sharpsharp" | "-sharp" | "-flatflat" | "-flat"
""",
)


NEDERLANDS = Dialect(
    name="nederlands",
    note_tokens=_LETTER_TOKENS,
    rest_token="r",
    accidental_tokens={
        Accidental.Natural: "",
        Accidental.Sharp: "is",
        Accidental.DoubleSharp: "isis",
        Accidental.Flat: "es",
        Accidental.DoubleFlat: "eses",
    },
    accidental_spellings={
        "": Accidental.Natural,
        "is": Accidental.Sharp,
        "isis": Accidental.DoubleSharp,
        "es": Accidental.Flat,
        "eses": Accidental.DoubleFlat,
    },
    accidental_grammar=r"""
accidental: [SHARPS | FLATS]
SHARPS: /(?:is){1,2}/
FLATS: /(?:es){1,2}/
""",
)


DIALECTS: Dict[str, Dialect] = {d.name: d for d in (ENGLISH, NEDERLANDS)}
"""Registered dialects by LilyPond language name."""

DEFAULT_DIALECT = ENGLISH


def dialect_for(name: Optional[str]) -> Dialect:
    """Look up a dialect by name (case-insensitive).

    Args:
        name: A registered language name, or None for the default dialect.

    Raises:
        UnknownDialect: If no dialect is registered under that name.
    """
    if name is None:
        return DEFAULT_DIALECT
    try:
        return DIALECTS[name.strip().lower()]
    except KeyError:
        raise UnknownDialect(name) from None
