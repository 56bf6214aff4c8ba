from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO, List, Optional, Union

from luxldt.models.record import LDTRecord
from luxldt.models.result import LDTError, WriteResult
from luxldt.parser.options import DEFAULT_OPTIONS, CodecOptions, FloatWidth, max_round_trip_digits
from luxldt.parser.schema import LDT_SCHEMA, LDTField, record_values


logger = logging.getLogger(__name__)

LDTDestination = Union[str, "os.PathLike[str]", IO[str]]


def _format_value(f: LDTField, value: object, precision: int) -> str:
    if f.kind == "str":
        return str(value)
    if f.kind == "float":
        return f"{float(value):.{precision}g}"
    return str(int(value))


def format_ldt(record: LDTRecord, precision: Optional[int] = None, dtype: FloatWidth = "float64") -> str:
    """
    Serialise a record to EULUMDAT text, one value per line in schema order.

    Floats are written with `precision` significant digits; the default is
    the round-trip digit count of `dtype`. Array and lamp-set lengths are
    taken from the record as they are.
    """
    digits = max_round_trip_digits(dtype) if precision is None else int(precision)
    if digits < 1:
        raise ValueError(f"precision must be a positive digit count, got {precision}")

    lines: List[str] = []
    for f in LDT_SCHEMA:
        for value in record_values(f, record):
            lines.append(_format_value(f, value, digits))
    return "\n".join(lines) + "\n"


def _encode(text: str, options: CodecOptions) -> bytes:
    """Encode output text; characters the encoding cannot hold are replaced only when `errors` allows it."""
    try:
        return text.encode(options.encoding)
    except UnicodeEncodeError as exc:
        if options.errors == "strict":
            raise
        logger.warning(
            "Characters not representable in %s were written with errors=%r (first at offset %d)",
            options.encoding, options.errors, exc.start,
        )
        return text.encode(options.encoding, options.errors)


def write_ldt(
    destination: LDTDestination,
    record: LDTRecord,
    precision: Optional[int] = None,
    options: Optional[CodecOptions] = None,
) -> WriteResult:
    """
    Write a record to a path (created or truncated) or to an open text stream.

    The text is formatted and encoded before the destination is touched, so
    a failed write never leaves a half-formatted file behind. With
    errors="strict" an unencodable character fails the write.
    """
    opts = options or DEFAULT_OPTIONS
    digits = precision if precision is not None else opts.resolved_precision()
    text = format_ldt(record, precision=digits, dtype=opts.dtype)

    if isinstance(destination, (str, os.PathLike)):
        path = Path(destination)
        try:
            data = _encode(text, opts)
        except UnicodeEncodeError as exc:
            return WriteResult(
                ok=False,
                error=LDTError("DESTINATION_UNWRITABLE", f"Cannot encode output for {path} as {opts.encoding}: {exc}"),
            )
        try:
            path.write_bytes(data)
        except OSError as exc:
            return WriteResult(
                ok=False,
                error=LDTError("DESTINATION_UNWRITABLE", f"Failed writing file: {path} ({exc.strerror or exc})"),
            )
        logger.info("Wrote %s (%d lines)", path, text.count("\n"))
        return WriteResult(ok=True)

    try:
        destination.write(text)
    except (OSError, UnicodeError) as exc:
        return WriteResult(ok=False, error=LDTError("DESTINATION_UNWRITABLE", f"Failed writing stream: {exc}"))
    return WriteResult(ok=True)
