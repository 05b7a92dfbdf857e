"""Sector assembly: stream PCM payloads into a padded CDDA image.

WHY: A CD image is a flat run of 2352-byte sectors. Each WAV payload is
an arbitrary number of bytes, so every track has to be copied verbatim
and zero-padded to the next sector boundary, and the sector at which each
track begins has to be known exactly for the cue sheet.

HOW: append_track() is a pure step over an explicit accumulator: given
the cumulative sector count so far and one AudioSource, it copies the
payload in bounded chunks, writes the padding, and returns the new count
together with the Track record. assemble() folds that step over the
inputs in order and produces the Disc layout.

RULES:
- start_sector of a track == cumulative count before it (0 for track 1)
- pad = (2352 - size % 2352) % 2352 zero bytes after every payload
- Output length is always total_sectors * 2352 bytes
- Payload bytes pass through unchanged; no conversion of any kind
- Short or failed read → TruncatedPayloadError, write failure → OutputWriteFailedError
- Inputs are processed strictly in the order given
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Callable, List, Optional, Sequence, Tuple

from mkcdda.config import load_copy_buffer_size
from mkcdda.core.errors import MalformedContainerError, OutputWriteFailedError, TruncatedPayloadError
from mkcdda.core.ir import AudioSource, Disc, Track, pad_length, padded_sector_count
from mkcdda.core.wav import open_input, parse_wav

logger = logging.getLogger(__name__)


def _write(out: BinaryIO, data: bytes, image_name: str) -> None:
    try:
        out.write(data)
    except OSError as e:
        raise OutputWriteFailedError("write error ({})".format(e), image_name) from e


def append_track(
    out: BinaryIO,
    stream: BinaryIO,
    source: AudioSource,
    number: int,
    cumulative: int,
    image_name: str = "",
    buffer_size: Optional[int] = None,
) -> Tuple[int, Track]:
    """Copy one payload plus its sector padding to ``out``.

    WHY: Threading the cumulative sector count through as a value keeps
    every step independent and makes the start-sector law easy to test.

    HOW: Seeks ``stream`` to the payload offset, copies ``data_size`` bytes
    in chunks of at most ``buffer_size``, then writes the zero padding in
    chunks of the same bound.

    Args:
        out: Writable binary stream positioned at cumulative * 2352.
        stream: The opened container the source was parsed from.
        source: Payload location resolved by parse_wav().
        number: 1-based track number.
        cumulative: Sectors already written before this track.
        image_name: Output identifier for write diagnostics.
        buffer_size: Copy chunk size; defaults to the configured value.

    Returns:
        (new cumulative sector count, Track placed at ``cumulative``).
    """
    if buffer_size is None:
        buffer_size = load_copy_buffer_size()

    track = Track(number=number, source=source, start_sector=cumulative)

    try:
        stream.seek(source.data_offset)
    except (OSError, ValueError) as e:
        raise MalformedContainerError("seek failed ({})".format(e), source.path) from e

    remaining = source.data_size
    while remaining > 0:
        copied = source.data_size - remaining
        try:
            chunk = stream.read(min(remaining, buffer_size))
        except OSError as e:
            raise TruncatedPayloadError(source.data_size, copied, source.path) from e
        if not chunk:
            raise TruncatedPayloadError(source.data_size, copied, source.path)
        _write(out, chunk, image_name)
        remaining -= len(chunk)

    pad = pad_length(source.data_size)
    zeros = bytes(min(pad, buffer_size))
    while pad > 0:
        step = min(pad, len(zeros))
        _write(out, zeros[:step], image_name)
        pad -= step

    return cumulative + padded_sector_count(source.data_size), track


def assemble(
    paths: Sequence[str],
    out: BinaryIO,
    image_name: str,
    on_track: Optional[Callable[[Track], None]] = None,
    buffer_size: Optional[int] = None,
) -> Disc:
    """Parse every input in order and append it to the disc image.

    Args:
        paths: Input WAV paths, in track order.
        out: Writable binary stream for the image, initially empty.
        image_name: Name the cue sheet will use for the image file.
        on_track: Optional callback invoked with each Track once written.
        buffer_size: Copy chunk size; defaults to the configured value.

    Returns:
        Disc layout with one Track per input and the total sector count.
    """
    if buffer_size is None:
        buffer_size = load_copy_buffer_size()
    tracks: List[Track] = []
    cumulative = 0

    for number, path in enumerate(paths, start=1):
        with open_input(path) as stream:
            source = parse_wav(stream, path)
            cumulative, track = append_track(
                out, stream, source, number, cumulative,
                image_name=image_name,
                buffer_size=buffer_size,
            )
        tracks.append(track)
        logger.info(
            "Track %02d: %s at sectors %d-%d",
            number, path, track.start_sector, track.end_sector,
        )
        if on_track is not None:
            on_track(track)

    return Disc(image_name=image_name, tracks=tracks, total_sectors=cumulative)
