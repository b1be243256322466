"""Typesetting LilyPond documents with the lilypond binary."""

from __future__ import annotations

import logging
import subprocess
from enum import Enum, unique
from pathlib import Path
from typing import Optional

from lilynote.config import lilypond_command

logger = logging.getLogger(__name__)


@unique
class OutputFormat(Enum):
    """Output formats lilypond can produce, valued by backend flag."""

    Pdf = "pdf"
    Svg = "svg"
    Png = "png"

    @property
    def extension(self) -> str:
        return f".{self.value}"


def output_format_for(path: Path) -> OutputFormat:
    """Determine the output format from a file extension.

    Raises:
        ValueError: If the extension is not .pdf, .svg or .png.
    """
    suffix = path.suffix.lower()
    for fmt in OutputFormat:
        if fmt.extension == suffix:
            return fmt
    supported = ", ".join(fmt.extension for fmt in OutputFormat)
    raise ValueError(f"Unsupported output file '{path}'. Use one of: {supported}.")


def render_document(
    source: str, output: Path, lilypond: Optional[str] = None
) -> Path:
    """Write LilyPond source next to output and compile it.

    The source is saved as ``<output stem>.ly`` in the output directory, which
    is created if needed.

    Args:
        source: LilyPond document text.
        output: Destination file; its extension selects the format.
        lilypond: The lilypond executable (defaults to LILYNOTE_LILYPOND or
            ``lilypond``).

    Returns:
        The path of the generated file. lilypond always writes a lowercase
        extension, so this can differ from output in case.

    Raises:
        ValueError: If the output extension is unsupported.
        RuntimeError: If lilypond is missing, fails, or produces no output.
    """
    fmt = output_format_for(output)
    cmd_name = lilypond if lilypond is not None else lilypond_command()

    output.parent.mkdir(parents=True, exist_ok=True)
    ly_path = output.with_suffix(".ly")
    ly_path.write_text(source, encoding="utf-8")

    cmd = [cmd_name, f"--{fmt.value}", f"--output={output.stem}", ly_path.name]
    logger.info("Running %s", " ".join(cmd))
    try:
        subprocess.run(
            cmd,
            cwd=output.parent,
            check=True,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        raise RuntimeError(
            f"LilyPond not found ({cmd_name}). Please install LilyPond."
        ) from None
    except subprocess.CalledProcessError as e:
        raise RuntimeError(f"LilyPond compilation failed: {e.stderr}") from e

    generated = output.with_suffix(fmt.extension)
    if not generated.exists():
        raise RuntimeError(f"{fmt.name} was not generated at {generated}")
    logger.info("Wrote %s", generated)
    return generated
