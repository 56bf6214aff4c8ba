from __future__ import annotations

import codecs
import math
from dataclasses import dataclass
from typing import Literal, Optional

import numpy as np


FloatWidth = Literal["float64", "float32"]

_DTYPES = {"float64": np.float64, "float32": np.float32}


def max_round_trip_digits(dtype: FloatWidth = "float64") -> int:
    """Significant digits needed to round-trip any value of the float width (17 / 9)."""
    info = np.finfo(_numpy_dtype(dtype))
    return int(math.ceil(1 + (info.nmant + 1) * math.log10(2)))


def _numpy_dtype(dtype: str):
    try:
        return _DTYPES[dtype]
    except KeyError:
        raise ValueError(f"Unsupported float width: {dtype!r} (expected float64 or float32)") from None


@dataclass(frozen=True)
class CodecOptions:
    encoding: str = "utf-8"
    errors: str = "replace"
    dtype: FloatWidth = "float64"
    precision: Optional[int] = None

    def __post_init__(self) -> None:
        _numpy_dtype(self.dtype)
        try:
            codecs.lookup(self.encoding)
            codecs.lookup_error(self.errors)
        except LookupError as exc:
            raise ValueError(f"Unsupported text codec setting: {exc}") from None
        if self.precision is not None and int(self.precision) < 1:
            raise ValueError(f"precision must be a positive digit count, got {self.precision}")

    def resolved_precision(self) -> int:
        if self.precision is not None:
            return int(self.precision)
        return max_round_trip_digits(self.dtype)

    def to_float(self, value: float) -> float:
        """Round a parsed value to the configured float width."""
        if self.dtype == "float32":
            return float(np.float32(value))
        return float(value)


DEFAULT_OPTIONS = CodecOptions()
