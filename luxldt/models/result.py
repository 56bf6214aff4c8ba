from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from luxldt.models.record import LDTRecord


ErrorKind = Literal[
    "SOURCE_UNREADABLE",
    "TRUNCATED_INPUT",
    "INVALID_SYMMETRY_CODE",
    "DESTINATION_UNWRITABLE",
]


@dataclass(frozen=True)
class LDTError:
    """Fatal condition; the operation that produced it did not complete."""
    kind: ErrorKind
    message: str
    field: Optional[str] = None
    line_no: Optional[int] = None

    def __str__(self) -> str:
        if self.line_no is None:
            return self.message
        return f"Line {self.line_no}: {self.message}"


@dataclass(frozen=True)
class LDTWarning:
    """
    Some numeric lines could not be converted. Affected fields hold their
    zero default; `field`/`line_no` point at the first offender.
    """
    message: str
    field: str
    line_no: int
    count: int = 1

    def __str__(self) -> str:
        return f"{self.message} ({self.count} value(s), first: <{self.field}> on line {self.line_no})"


@dataclass
class LDTParseError(Exception):
    error: LDTError

    def __str__(self) -> str:
        return str(self.error)


@dataclass(frozen=True)
class LoadResult:
    record: Optional[LDTRecord]
    error: Optional[LDTError] = None
    warning: Optional[LDTWarning] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> LDTRecord:
        if self.error is not None or self.record is None:
            raise LDTParseError(self.error or LDTError("SOURCE_UNREADABLE", "No record was decoded"))
        return self.record


@dataclass(frozen=True)
class WriteResult:
    ok: bool
    error: Optional[LDTError] = None

    def __bool__(self) -> bool:
        return self.ok
