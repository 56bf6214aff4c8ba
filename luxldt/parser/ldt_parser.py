"""
EULUMDAT (.ldt) decoder.

The file is a fixed sequence of lines, one value per line, described by
luxldt.parser.schema.LDT_SCHEMA. Block sizes depend on values read earlier
in the same file: the lamp blocks on the number of lamp sets, the angle
blocks on Mc/Ng, and the intensity block on the stored C-plane range that
the symmetry indicator selects (resolved right after Mc is read).

Failure tiers:
- fatal (source unreadable, stream ends early, invalid symmetry): decoding
  stops and no record is returned
- non-fatal (a numeric line does not convert): the field keeps its zero
  default and one aggregate warning is returned with the record
"""

from __future__ import annotations

import io
import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import IO, List, Optional, Union

from luxldt.models.record import LDTRecord
from luxldt.models.result import LDTError, LDTWarning, LoadResult
from luxldt.parser.options import DEFAULT_OPTIONS, CodecOptions
from luxldt.parser.schema import LDT_SCHEMA, LDTField, block_length
from luxldt.photometry.symmetry import InvalidSymmetryCode, PlaneRange, resolve_plane_range


logger = logging.getLogger(__name__)

LDTSource = Union[str, "os.PathLike[str]", IO[str], IO[bytes]]

UNPARSEABLE_MESSAGE = "Some values could not be read"


class _LineCursor:
    """Hands out one line at a time; None once the stream is exhausted."""

    def __init__(self, stream: Union[IO[str], IO[bytes]], options: CodecOptions):
        self._stream = stream
        self._options = options
        self.line_no = 0

    def next_line(self) -> Optional[str]:
        raw = self._stream.readline()
        if not raw:
            return None
        self.line_no += 1
        if isinstance(raw, bytes):
            raw = raw.decode(self._options.encoding, self._options.errors)
        return raw.rstrip("\r\n")


@dataclass
class _UnparseableTally:
    field: Optional[str] = None
    line_no: int = 0
    count: int = 0

    def note(self, label: str, line_no: int) -> None:
        if self.field is None:
            self.field = label
            self.line_no = line_no
        self.count += 1

    def to_warning(self) -> Optional[LDTWarning]:
        if self.field is None:
            return None
        return LDTWarning(UNPARSEABLE_MESSAGE, field=self.field, line_no=self.line_no, count=self.count)


def _parse_number(text: str, f: LDTField, options: CodecOptions) -> Optional[Union[int, float]]:
    s = text.strip().replace(",", ".")
    try:
        if f.kind == "float":
            return options.to_float(float(s))
        try:
            value = int(s)
        except ValueError:
            v = float(s)
            if not math.isfinite(v):
                return None
            value = int(v)
    except ValueError:
        return None
    if f.kind == "count" and value < 0:
        return None
    return value


def _convert(f: LDTField, line: str, line_no: int, options: CodecOptions, tally: _UnparseableTally) -> object:
    if f.kind == "str":
        return line
    value = _parse_number(line, f, options)
    if value is None:
        logger.debug("Line %d: cannot read <%s> from %r", line_no, f.label, line)
        tally.note(f.label, line_no)
        return 0.0 if f.kind == "float" else 0
    return value


def _truncated(f: LDTField, cursor: _LineCursor, index: int = 0, total: int = 1) -> LoadResult:
    message = f"Error reading <{f.label}> property"
    if f.is_block:
        message += f" (value {index + 1} of {total})"
    return LoadResult(
        record=None,
        error=LDTError("TRUNCATED_INPUT", message, field=f.label, line_no=cursor.line_no + 1),
    )


def _decode(cursor: _LineCursor, options: CodecOptions, source_name: str) -> LoadResult:
    record = LDTRecord()
    tally = _UnparseableTally()
    planes: Optional[PlaneRange] = None

    for f in LDT_SCHEMA:
        if not f.is_block:
            line = cursor.next_line()
            if line is None:
                return _truncated(f, cursor)
            setattr(record, f.attr, _convert(f, line, cursor.line_no, options, tally))

            if f.resolves_planes:
                try:
                    planes = resolve_plane_range(record.symmetry_code, record.plane_count)
                except InvalidSymmetryCode as exc:
                    return LoadResult(
                        record=None,
                        error=LDTError("INVALID_SYMMETRY_CODE", f"Error reading light symmetry: {exc}", field="Symmetry"),
                    )
                logger.debug(
                    "%s: symmetry %d, Mc=%d -> stored planes %d..%d",
                    source_name, record.symmetry_code, record.plane_count, planes.low, planes.high,
                )
            continue

        assert planes is not None
        total = block_length(f, record, planes)
        values: List[object] = []
        for i in range(total):
            line = cursor.next_line()
            if line is None:
                return _truncated(f, cursor, index=i, total=total)
            values.append(_convert(f, line, cursor.line_no, options, tally))

        if f.block == "lamps":
            for lamp_set, value in zip(record.lamp_sets, values):
                setattr(lamp_set, f.attr, value)
        else:
            setattr(record, f.attr, values)

    warning = tally.to_warning()
    if warning is not None:
        logger.warning("%s: %s", source_name, warning)
    return LoadResult(record=record, warning=warning)


def load_ldt(source: LDTSource, options: Optional[CodecOptions] = None) -> LoadResult:
    """
    Decode one EULUMDAT record.

    Args:
        source: path to an .ldt file, or an open text/binary stream. Streams
            are read line by line and left open.
        options: encoding and float width; defaults to utf-8 / float64.

    Returns:
        LoadResult with the record (None on a fatal error), the fatal error
        if any, and the aggregate unparseable-values warning if any.
    """
    opts = options or DEFAULT_OPTIONS

    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        try:
            stream = path.open("r", encoding=opts.encoding, errors=opts.errors, newline="")
        except OSError as exc:
            return LoadResult(
                record=None,
                error=LDTError("SOURCE_UNREADABLE", f"Failed reading file: {path} ({exc.strerror or exc})"),
            )
        with stream:
            return _read_stream(stream, opts, str(path))

    return _read_stream(source, opts, str(getattr(source, "name", "<stream>")))


def _read_stream(stream: Union[IO[str], IO[bytes]], options: CodecOptions, source_name: str) -> LoadResult:
    cursor = _LineCursor(stream, options)
    try:
        return _decode(cursor, options, source_name)
    except OSError as exc:
        return LoadResult(
            record=None,
            error=LDTError(
                "SOURCE_UNREADABLE",
                f"Failed reading {source_name}: {exc}",
                line_no=cursor.line_no + 1,
            ),
        )
    except UnicodeError as exc:
        # text streams decode ahead in chunks, so no reliable line number
        return LoadResult(
            record=None,
            error=LDTError(
                "SOURCE_UNREADABLE",
                f"Failed decoding {source_name} as {options.encoding}: {exc}",
            ),
        )


def parse_ldt_text(text: str, options: Optional[CodecOptions] = None) -> LoadResult:
    """Decode EULUMDAT content already held in memory."""
    return load_ldt(io.StringIO(text), options)
