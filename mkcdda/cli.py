"""Command-line interface for the WAV to CDDA converter.

WHY: Users need one command that turns a list of WAV files into a
burnable BIN/CUE pair. The CLI wires together the pipeline (input
validation, container parsing, sector assembly, cue sheet formatting,
and file saving) and turns every failure into a clear diagnostic and a
non-zero exit status.

HOW: argparse accepts the input paths. The disc image is opened in the
current directory and filled by assemble(); every registered formatter
then renders the resulting Disc layout and its output is saved next to
the image. Status messages go to stderr.

RULES:
- Positional arguments: one or more WAV paths, processed in order
- Zero inputs → usage diagnostic, exit status 1, no files created
- A bad MKCDDA_COPY_BUFFER_SIZE is reported before any file is created
- Output names are fixed: disc.bin and disc.cue in the working directory
- Any MkcddaError aborts the run with "Error: <message>" and exit status 1
- Partially written outputs are left in place on failure
- Status output goes to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from mkcdda import __version__
from mkcdda.config import BIN_FILENAME, CUE_FILENAME, LOG_LEVEL, load_copy_buffer_size
from mkcdda.core.assembler import assemble
from mkcdda.core.errors import (
    MkcddaError,
    OutputWriteFailedError,
    ResourceExhaustedError,
    UsageError,
)
from mkcdda.core.ir import Disc, Track
from mkcdda.formatters import FORMATTERS
from mkcdda.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.

    HOW: Writes to sys.stderr with a flush to ensure immediate display.
    """
    print(msg, file=sys.stderr, flush=True)


def _report_track(track: Track) -> None:
    source = track.source
    _status("Appended {} ({} bytes, padded to {})".format(
        source.path, source.data_size, source.padded_size,
    ))


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    """Save a single formatter output to disk.

    WHY: Formatters only produce content. The CLI decides where it goes
    and reports write failures in the package's error type.

    HOW: Builds ``{stem}{suffix}`` in output_dir and writes content as
    text (UTF-8, Unix line endings) or bytes depending on its type.
    Existing files are overwritten; output names are fixed.

    Raises:
        OutputWriteFailedError: If the file cannot be written.
    """
    path = output_dir / "{}{}".format(stem, output.suffix)
    try:
        if isinstance(output.content, bytes):
            path.write_bytes(output.content)
        else:
            with open(path, "w", encoding="utf-8", newline="\n") as f:
                f.write(output.content)
    except OSError as e:
        raise OutputWriteFailedError("write error ({})".format(e), path.name) from e
    return path


def convert(inputs: List[str], output_dir: Path) -> Disc:
    """Build the disc image and its cue sheet from ``inputs``.

    WHY: Keeps the pipeline callable without argparse, so tests can run
    it against a temporary directory.

    HOW: Opens the image for writing, folds every input into it with
    assemble(), then runs all registered formatters on the Disc layout.

    Args:
        inputs: WAV paths in track order.
        output_dir: Directory receiving disc.bin and disc.cue.

    Returns:
        The assembled Disc layout.

    Raises:
        UsageError: If no inputs are given, the configuration is invalid,
            or an input cannot be opened.
        MkcddaError: Any parse, copy or write failure.
    """
    if not inputs:
        raise UsageError("No track*.wav files found (pass them as arguments).")

    try:
        buffer_size = load_copy_buffer_size()
    except ValueError as e:
        raise UsageError(str(e)) from e

    image_path = output_dir / BIN_FILENAME
    stem = Path(CUE_FILENAME).stem

    try:
        image = open(image_path, "wb")
    except OSError as e:
        raise OutputWriteFailedError("cannot open ({})".format(e), BIN_FILENAME) from e

    with image:
        disc = assemble(
            inputs, image, BIN_FILENAME,
            on_track=_report_track,
            buffer_size=buffer_size,
        )
        try:
            image.flush()
        except OSError as e:
            raise OutputWriteFailedError("write error ({})".format(e), BIN_FILENAME) from e

    logger.info("Wrote %s: %d sectors, %d bytes", BIN_FILENAME, disc.total_sectors, disc.total_bytes)

    saved = [image_path]
    for key, formatter_cls in FORMATTERS.items():
        formatter = formatter_cls()
        logger.debug("Running %s formatter (%s)", formatter.name, key)
        for output in formatter.format(disc):
            saved.append(_save_output(output, stem, output_dir))

    _status("Done! Created {} with {} track(s).".format(
        " and ".join(p.name for p in saved), len(disc.tracks),
    ))
    return disc


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    RULES:
    - Positional: inputs (zero or more; emptiness is reported by convert())
    - --version prints the package version
    """
    parser = argparse.ArgumentParser(
        prog="mkcdda",
        usage="%(prog)s track1.wav [track2.wav ...]",
        description="Convert 44.1kHz 16-bit stereo PCM WAV files into a "
                    "CDDA disc image ({}) and cue sheet.".format(BIN_FILENAME),
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        help="WAV files, one per track, in track order.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI.

    WHY: This is the function that __main__.py calls and that users
    invoke via ``python -m mkcdda``.

    HOW: Parses arguments, configures logging, runs convert() in the
    working directory, and maps failures to an exit status.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Returns 0 on success, 1 on any conversion error
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        try:
            convert(args.inputs, Path.cwd())
        except MemoryError:
            raise ResourceExhaustedError("Out of memory") from None
    except UsageError as e:
        print("Error: {}".format(e), file=sys.stderr)
        if not args.inputs:
            parser.print_usage(sys.stderr)
        return 1
    except MkcddaError as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
