from __future__ import annotations

from typing import Any

from luxldt.photometry.symmetry import InvalidSymmetryCode, PlaneRange, resolve_plane_range

__all__ = [
    "InvalidSymmetryCode",
    "PlaneRange",
    "resolve_plane_range",
    "LDTPhotometry",
    "photometry_from_record",
    "verify_ldt_file",
    "LDTVerifyResult",
]


def __getattr__(name: str) -> Any:
    if name in {"LDTPhotometry", "photometry_from_record"}:
        from luxldt.photometry.model import LDTPhotometry, photometry_from_record
        return {
            "LDTPhotometry": LDTPhotometry,
            "photometry_from_record": photometry_from_record,
        }[name]
    if name in {"verify_ldt_file", "LDTVerifyResult"}:
        from luxldt.photometry.verify import LDTVerifyResult, verify_ldt_file
        return {
            "verify_ldt_file": verify_ldt_file,
            "LDTVerifyResult": LDTVerifyResult,
        }[name]
    raise AttributeError(name)
