"""Streaming conversion of block CSVs to alternative network representations."""

from __future__ import annotations

import csv
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterator, List, Optional, Sequence, Tuple, Union

from .columns import (
    HeaderTransform,
    LineTransform,
    RepresentationRequest,
    build_header_transform,
    build_line_transform,
)
from .prefix import PrefixParseError, parse_prefix
from .utils import CSV_LINE_TERMINATOR

logger = logging.getLogger(__name__)


class ConversionError(RuntimeError):
    """Base class for every failure that aborts a conversion.

    ``path`` names the file involved, when the conversion ran against files.
    """

    path: Optional[Path] = None

    def __str__(self) -> str:
        message = super().__str__()
        if self.path is None or str(self.path) in message:
            return message
        return f"{self.path}: {message}"


class InputReadError(ConversionError):
    """Raised when the input CSV cannot be read or decoded."""


class MissingHeaderError(InputReadError):
    """Raised when the input holds no header row."""


class RecordShapeError(InputReadError):
    """Raised when a record's field count differs from the header's."""

    def __init__(self, line_num: int, expected: int, actual: int) -> None:
        super().__init__(
            f"reading CSV: record on line {line_num}: wrong number of fields "
            f"(expected {expected}, got {actual})"
        )
        self.line_num = line_num
        self.expected = expected
        self.actual = actual


class NetworkParseError(ConversionError):
    """Raised when a record's network column is not a valid prefix."""

    def __init__(self, text: str, line_num: int, reason: str) -> None:
        super().__init__(f"parsing network ({text}) on line {line_num}: {reason}")
        self.text = text
        self.line_num = line_num


class OutputWriteError(ConversionError):
    """Raised when converted rows cannot be written or flushed."""


class FileConversionError(ConversionError):
    """Raised when opening, syncing or closing a file fails."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


@dataclass
class ConversionStats:
    rows_written: int = 0


def _records(reader) -> Iterator[Tuple[int, List[str]]]:
    """Yield ``(line_num, record)`` pairs, skipping blank lines."""
    while True:
        try:
            record = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            raise InputReadError(f"reading CSV (line {reader.line_num}): {exc}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise InputReadError(f"reading CSV: {exc}") from exc
        if not record:
            continue
        yield reader.line_num, record


def iter_converted_rows(
    records: Iterator[Tuple[int, List[str]]],
    line_transform: LineTransform,
    field_count: int,
) -> Iterator[List[str]]:
    """Lazily parse each record's network column and transform the row."""
    for line_num, record in records:
        if len(record) != field_count:
            raise RecordShapeError(line_num, field_count, len(record))
        try:
            prefix = parse_prefix(record[0])
        except PrefixParseError as exc:
            raise NetworkParseError(record[0], line_num, exc.reason) from exc
        yield line_transform(prefix, record[1:])


def _field_needs_quotes(field: str) -> bool:
    if not field:
        return False
    if field == "\\.":
        return True
    if any(c in field for c in ',"\r\n'):
        return True
    return field[0].isspace()


def format_record(fields: Sequence[str]) -> str:
    """Render one CSV record without its line terminator.

    Fields holding a delimiter, quote or line break are quoted, and so are
    fields that start with whitespace.
    """
    out = []
    for field in fields:
        if _field_needs_quotes(field):
            out.append('"' + field.replace('"', '""') + '"')
        else:
            out.append(field)
    return ",".join(out)


def _write_row(output: IO[str], row: Sequence[str]) -> None:
    try:
        output.write(format_record(row) + CSV_LINE_TERMINATOR)
    except (OSError, ValueError) as exc:
        raise OutputWriteError(f"writing CSV: {exc}") from exc


def convert_stream(
    input: IO[str],
    output: IO[str],
    header_transform: HeaderTransform,
    line_transform: LineTransform,
) -> ConversionStats:
    """Read a header and records from ``input`` and write converted rows to ``output``."""

    reader = csv.reader(input, strict=True)
    records = _records(reader)

    header = next(records, None)
    if header is None:
        raise MissingHeaderError("reading CSV header: input has no header row")
    _, header_fields = header

    _write_row(output, header_transform(header_fields[1:]))
    logger.debug("Converted header, replacing source column %r", header_fields[0])

    stats = ConversionStats()
    for row in iter_converted_rows(records, line_transform, len(header_fields)):
        _write_row(output, row)
        stats.rows_written += 1

    try:
        output.flush()
    except OSError as exc:
        raise OutputWriteError(f"flushing CSV: {exc}") from exc

    return stats


def convert(
    input: IO[str],
    output: IO[str],
    cidr: bool = False,
    ip_range: bool = False,
    integer_range: bool = False,
    hex_range: bool = False,
) -> ConversionStats:
    """Convert the block CSV in ``input`` to ``output``.

    Each requested representation adds its columns in place of the leading
    network column. When none is requested, the network column is stripped.
    """

    request = RepresentationRequest(
        cidr=cidr,
        ip_range=ip_range,
        integer_range=integer_range,
        hex_range=hex_range,
    )
    if not request.any():
        logger.debug("No network representation requested; stripping network column")
    return convert_stream(
        input,
        output,
        build_header_transform(request),
        build_line_transform(request),
    )


def _release(handle: IO[str], path: Path) -> None:
    """Close ``handle`` after an earlier failure; that failure is the one reported."""
    try:
        handle.close()
    except OSError:
        logger.debug("Failed to close %s after error", path, exc_info=True)


def _close(handle: IO[str], path: Path) -> None:
    try:
        handle.close()
    except OSError as exc:
        raise FileConversionError(f"closing file ({path}): {exc}", path) from exc


def _sync(handle: IO[str], path: Path) -> None:
    try:
        handle.flush()
        os.fsync(handle.fileno())
    except OSError as exc:
        raise FileConversionError(f"syncing file ({path}): {exc}", path) from exc


def convert_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    cidr: bool = False,
    ip_range: bool = False,
    integer_range: bool = False,
    hex_range: bool = False,
) -> ConversionStats:
    """Convert the block CSV at ``input_path`` into a new file at ``output_path``.

    The output file is created or truncated. Both files are closed on every
    exit path.
    """

    input_path = Path(input_path)
    output_path = Path(output_path)

    # Undecodable bytes in passthrough columns are written back unchanged.
    try:
        out_file = output_path.open(
            "w", encoding="utf-8", errors="surrogateescape", newline=""
        )
    except OSError as exc:
        raise FileConversionError(
            f"creating output file ({output_path}): {exc}", output_path
        ) from exc

    in_file: Optional[IO[str]] = None
    try:
        try:
            in_file = input_path.open(
                "r", encoding="utf-8", errors="surrogateescape", newline=""
            )
        except OSError as exc:
            raise FileConversionError(
                f"opening input file ({input_path}): {exc}", input_path
            ) from exc

        stats = convert(in_file, out_file, cidr, ip_range, integer_range, hex_range)
        _sync(out_file, output_path)
    except BaseException as exc:
        if isinstance(exc, ConversionError) and exc.path is None:
            exc.path = output_path if isinstance(exc, OutputWriteError) else input_path
        if in_file is not None:
            _release(in_file, input_path)
        _release(out_file, output_path)
        raise

    try:
        _close(in_file, input_path)
    except FileConversionError:
        _release(out_file, output_path)
        raise
    _close(out_file, output_path)
    logger.debug("Wrote %d rows from %s to %s", stats.rows_written, input_path, output_path)
    return stats


__all__ = [
    "ConversionError",
    "InputReadError",
    "MissingHeaderError",
    "RecordShapeError",
    "NetworkParseError",
    "OutputWriteError",
    "FileConversionError",
    "ConversionStats",
    "format_record",
    "iter_converted_rows",
    "convert_stream",
    "convert",
    "convert_file",
]
