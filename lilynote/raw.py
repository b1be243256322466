"""The validated string form of a single LilyPond note."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from lilynote.errors import InvalidNoteSyntax
from lilynote.grammar import FIELDS, NoteGrammar


@dataclass(frozen=True)
class RawNote:
    """A string known to be a well-formed note in some dialect.

    Construct with RawNote.parse; the field captures are extracted once at
    construction and never re-scanned.

    Examples:
        >>> raw = RawNote.parse("aeses'''''8", grammar_for(NEDERLANDS))
        >>> raw.field("accidental")
        'eses'
        >>> raw.field("dot")
        ''
    """

    text: str
    language: str
    _fields: Dict[str, str] = field(compare=False, repr=False)

    @staticmethod
    def parse(text: str, grammar: Optional[NoteGrammar] = None) -> RawNote:
        """Validate text against a grammar.

        Args:
            text: Candidate note text, e.g. "fs,,,8.".
            grammar: The grammar to check against. Defaults to the grammar of
                the active dialect (see lilynote.config).

        Raises:
            InvalidNoteSyntax: If the whole text is not accepted.
        """
        if grammar is None:
            from lilynote.config import active_grammar

            grammar = active_grammar()
        fields = grammar.captures(text)
        if fields is None:
            raise InvalidNoteSyntax(text, grammar.dialect.name)
        return RawNote(text, grammar.dialect.name, fields)

    def field(self, name: str) -> str:
        """Return the captured text of a grammar field ("" if absent).

        Raises:
            KeyError: If name is not a grammar field.
        """
        if name not in FIELDS:
            raise KeyError(name)
        return self._fields[name]

    def __str__(self) -> str:
        return self.text
