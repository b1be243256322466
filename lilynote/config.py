"""Process-wide defaults, read once from the environment.

Environment variables:

- ``LILYNOTE_LANGUAGE``: note-name language of the active dialect
  (default ``english``)
- ``LILYNOTE_LOG_LEVEL``: log level used by the command line (default ``WARNING``)
- ``LILYNOTE_LILYPOND``: the lilypond executable (default ``lilypond``)

The active dialect is selected lazily on first use and is read-only after
that. Code that needs another dialect should construct its own NoteCodec or
NoteGrammar rather than change the default.
"""

from __future__ import annotations

import logging
import os
from functools import cache

from lilynote.codec import NoteCodec
from lilynote.grammar import NoteGrammar, grammar_for
from lilynote.languages import Dialect, dialect_for

LANGUAGE_ENV = "LILYNOTE_LANGUAGE"
LOG_LEVEL_ENV = "LILYNOTE_LOG_LEVEL"
LILYPOND_ENV = "LILYNOTE_LILYPOND"

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LILYPOND = "lilypond"

logger = logging.getLogger(__name__)


@cache
def active_dialect() -> Dialect:
    """Return the dialect selected by LILYNOTE_LANGUAGE.

    Raises:
        UnknownDialect: If the variable names an unregistered language.
    """
    dialect = dialect_for(os.environ.get(LANGUAGE_ENV))
    logger.debug("Active note name language: %s", dialect.name)
    return dialect


def active_grammar() -> NoteGrammar:
    return grammar_for(active_dialect())


@cache
def active_codec() -> NoteCodec:
    return NoteCodec(active_dialect())


def reset_active() -> None:
    """Forget the active dialect so the environment is read again."""
    active_dialect.cache_clear()
    active_codec.cache_clear()


def log_level() -> str:
    return os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)


def lilypond_command() -> str:
    return os.environ.get(LILYPOND_ENV, DEFAULT_LILYPOND)
