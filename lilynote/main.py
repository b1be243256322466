"""Command-line entry point for lilynote.

Subcommands:

- ``parse``: decode notes and print their fields
- ``convert``: re-spell notes in another note-name language
- ``midi``: print MIDI note numbers
- ``render``: typeset notes with lilypond
"""

from __future__ import annotations

import logging
import sys
from argparse import ArgumentParser, Namespace
from enum import Enum
from pathlib import Path
from typing import List, Optional

from lilynote import config
from lilynote.codec import NoteCodec
from lilynote.document import build_document
from lilynote.errors import NoteError, UnknownDialect
from lilynote.languages import DIALECTS, dialect_for
from lilynote.midi import midi_from_pitch
from lilynote.notation import Note
from lilynote.render import render_document
from lilynote.signature import KeySignature, TimeSignature


def _name(value: Optional[Enum]) -> str:
    return "-" if value is None else value.name


def describe(note: Note) -> str:
    """One-line summary of a decoded note."""
    pitch = note.pitch
    fields = [
        f"type={note.rhythm.duration_type.name}",
        f"name={_name(pitch.note_name)}",
        f"accidental={_name(pitch.accidental)}",
        f"octave={_name(pitch.octave)}",
        f"length={note.rhythm.length.name}",
        f"dots={note.rhythm.dots}",
    ]
    return " ".join(fields)


def _codec(args: Namespace) -> NoteCodec:
    if args.language is None:
        return config.active_codec()
    return NoteCodec(dialect_for(args.language))


def _report(text: str, exc: Exception) -> None:
    sys.stderr.write(f"ERROR: {text}: {exc}\n")


def cmd_parse(args: Namespace) -> int:
    codec = _codec(args)
    status = 0
    for text in args.notes:
        try:
            note = codec.parse(text)
        except NoteError as e:
            _report(text, e)
            status = 1
            continue
        print(f"{text}: {describe(note)}")
    return status


def cmd_convert(args: Namespace) -> int:
    source = _codec(args)
    target = NoteCodec(dialect_for(args.to))
    status = 0
    converted: List[str] = []
    for text in args.notes:
        try:
            converted.append(target.format(source.parse(text)))
        except NoteError as e:
            _report(text, e)
            status = 1
    print(" ".join(converted))
    return status


def cmd_midi(args: Namespace) -> int:
    codec = _codec(args)
    status = 0
    numbers: List[str] = []
    for text in args.notes:
        try:
            note = codec.parse(text)
            numbers.append("-" if note.is_rest else str(midi_from_pitch(note.pitch)))
        except ValueError as e:
            _report(text, e)
            status = 1
    print(" ".join(numbers))
    return status


def cmd_render(args: Namespace) -> int:
    codec = _codec(args)
    try:
        notes = [codec.parse(text) for text in args.notes]
        key = KeySignature.parse(args.key) if args.key is not None else None
        time = TimeSignature.parse(args.time) if args.time is not None else None
        source = build_document(notes, codec, key=key, time=time)
        output = render_document(source, Path(args.output), lilypond=args.lilypond)
    except (ValueError, RuntimeError, OSError) as e:
        sys.stderr.write(f"ERROR: {e}\n")
        return 1
    print(output)
    return 0


def make_parser() -> ArgumentParser:
    """Create the command-line argument parser."""
    languages = sorted(DIALECTS)
    parser = ArgumentParser(prog="lilynote")
    parser.add_argument("--log-level", default=None)
    parser.add_argument(
        "--language",
        choices=languages,
        default=None,
        help="Note name language (default: LILYNOTE_LANGUAGE or english)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_parse = sub.add_parser("parse", help="Decode notes and print their fields")
    p_parse.add_argument("notes", nargs="+", metavar="NOTE")
    p_parse.set_defaults(func=cmd_parse)

    p_convert = sub.add_parser("convert", help="Re-spell notes in another language")
    p_convert.add_argument("--to", required=True, choices=languages)
    p_convert.add_argument("notes", nargs="+", metavar="NOTE")
    p_convert.set_defaults(func=cmd_convert)

    p_midi = sub.add_parser("midi", help="Print MIDI note numbers")
    p_midi.add_argument("notes", nargs="+", metavar="NOTE")
    p_midi.set_defaults(func=cmd_midi)

    p_render = sub.add_parser("render", help="Typeset notes with lilypond")
    p_render.add_argument("--output", "-o", required=True, metavar="PATH")
    p_render.add_argument("--key", default=None, help='e.g. "2s" or "3f"')
    p_render.add_argument("--time", default=None, help='e.g. "3/4"')
    p_render.add_argument("--lilypond", default=None, metavar="CMD")
    p_render.add_argument("notes", nargs="+", metavar="NOTE")
    p_render.set_defaults(func=cmd_render)

    return parser


def configure_logging(log_level: str) -> None:
    """Configure the logging system with the specified log level.

    Args:
        log_level: The logging level (e.g., 'DEBUG', 'INFO', 'WARNING').

    Raises:
        ValueError: If log_level is not a logging level name.
    """
    level = log_level.upper()
    if level not in logging.getLevelNamesMapping():
        raise ValueError(f"Unknown level: {log_level!r}")
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(filename)s:%(lineno)d -- %(message)s",
        level=level,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, configure logging, and run a subcommand."""
    parser = make_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level or config.log_level())
    except ValueError as e:
        sys.stderr.write(f"ERROR: {e}\n")
        return 1
    try:
        return args.func(args)
    except UnknownDialect as e:
        sys.stderr.write(f"ERROR: {e}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())
