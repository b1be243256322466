"""Lark grammar for single LilyPond notes.

The grammar is assembled from a dialect's note tokens and accidental fragment
plus the language-invariant octave, duration and dot sub-grammars. It has five
fields, matched left to right over the whole input:

- ``note_name``: a note letter or the rest token
- ``accidental``: zero to two repetitions of exactly one accidental spelling
- ``octave``: one to three commas or one to six apostrophes, never both
- ``duration``: one of 1, 2, 4, 8, 16, 32, 64, 128
- ``dot``: zero to 255 periods

Optional fields that are absent capture the empty string.
"""

from __future__ import annotations

import logging
from functools import cache
from typing import Dict, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from lilynote.errors import InvalidNoteSyntax
from lilynote.languages import Dialect

FIELDS = ("note_name", "accidental", "octave", "duration", "dot")
"""Names of the grammar fields, in matching order."""

LOWER_MARK = ","
RAISE_MARK = "'"
DOT_MARK = "."

# Shared by every dialect. Alternations list longer literals first.
_COMMON_GRAMMAR = r"""
start: note_name accidental octave duration dot

octave: [LOWER | RAISE]
LOWER: /,{1,3}/
RAISE: /'{1,6}/

duration: [DURATION]
DURATION: "128" | "64" | "32" | "16" | "8" | "4" | "2" | "1"

dot: [DOTS]
DOTS: /\.{1,255}/
"""

logger = logging.getLogger(__name__)


def _literal(token: str) -> str:
    escaped = token.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_grammar_source(dialect: Dialect) -> str:
    """Assemble the full Lark grammar text for a dialect."""
    tokens = sorted(
        [*dialect.note_tokens.values(), dialect.rest_token],
        key=lambda t: (-len(t), t),
    )
    note_name = "note_name: NOTE_NAME\nNOTE_NAME: " + " | ".join(
        _literal(t) for t in tokens
    )
    return "\n".join([_COMMON_GRAMMAR, note_name, dialect.accidental_grammar])


class NoteGrammar:
    """A compiled note grammar bound to one dialect.

    Instances are immutable after construction and safe to share.
    """

    def __init__(self, dialect: Dialect) -> None:
        self.dialect = dialect
        self.source = build_grammar_source(dialect)
        self._parser = Lark(
            self.source,
            parser="earley",
            lexer="dynamic",
            keep_all_tokens=True,
        )
        logger.debug("Compiled note grammar for language %s", dialect.name)

    def captures(self, text: str) -> Optional[Dict[str, str]]:
        """Extract all five fields, or return None if the text does not match.

        Examples:
            >>> grammar_for(ENGLISH).captures("fss'''128.")
            {'note_name': 'f', 'accidental': 'ss', 'octave': "'''",
             'duration': '128', 'dot': '.'}
        """
        try:
            tree = self._parser.parse(text)
        except UnexpectedInput:
            return None
        fields: Dict[str, str] = {}
        for child in tree.children:
            if isinstance(child, Tree):
                values = child.scan_values(lambda v: isinstance(v, Token))
                fields[str(child.data)] = "".join(str(v) for v in values)
        return fields

    def matches(self, text: str) -> bool:
        """Check whether the whole text is a well-formed note."""
        return self.captures(text) is not None

    def capture(self, text: str, field: str) -> str:
        """Extract one named field from a note.

        Args:
            text: The note text.
            field: One of FIELDS.

        Returns:
            The captured text, or "" for an absent optional field.

        Raises:
            KeyError: If field is not a grammar field name.
            InvalidNoteSyntax: If the text does not match the grammar.
        """
        if field not in FIELDS:
            raise KeyError(field)
        fields = self.captures(text)
        if fields is None:
            raise InvalidNoteSyntax(text, self.dialect.name)
        return fields[field]

    def __repr__(self) -> str:
        return f"NoteGrammar({self.dialect.name!r})"


@cache
def grammar_for(dialect: Dialect) -> NoteGrammar:
    """Return the shared compiled grammar for a dialect."""
    return NoteGrammar(dialect)
