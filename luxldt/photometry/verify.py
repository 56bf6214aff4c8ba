from __future__ import annotations

import hashlib
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from luxldt.models.record import DIRECT_RATIO_COUNT, LDTRecord
from luxldt.parser.ldt_parser import load_ldt
from luxldt.parser.options import CodecOptions
from luxldt.photometry.symmetry import InvalidSymmetryCode


def sha256_file(path: str) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


@dataclass(frozen=True)
class LDTVerifyResult:
    file: str
    file_hash_sha256: str
    manufacturer: str
    luminaire_name: str
    type_code: int
    symmetry_code: int
    stored_planes: Dict[str, int]
    counts: Dict[str, int]
    angle_ranges_deg: Dict[str, float]
    intensity_stats: Dict[str, float]
    sanity: Dict[str, bool]
    warnings: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _non_decreasing(values: np.ndarray) -> bool:
    return bool(values.size < 2 or np.all(np.diff(values) >= 0.0))


def _range(values: np.ndarray, lo: str, hi: str) -> Dict[str, float]:
    return {
        lo: float(np.min(values)) if values.size else 0.0,
        hi: float(np.max(values)) if values.size else 0.0,
    }


def summarise_record(record: LDTRecord, path: Path, file_hash: str, decode_warnings: List[str]) -> LDTVerifyResult:
    try:
        planes = record.plane_range
        low, high, stored = planes.low, planes.high, planes.count
    except InvalidSymmetryCode:
        low, high, stored = 0, 0, 0

    c_angles = np.array(record.angles_c, dtype=float)
    g_angles = np.array(record.angles_g, dtype=float)
    intensity = np.array(record.intensities, dtype=float)

    warnings = list(decode_warnings)
    if record.absolute_photometry:
        warnings.append("Negative lamp count: intensities are absolute, not per 1000 lm.")
    if intensity.size and float(np.max(intensity)) == 0.0:
        warnings.append("All intensity values are zero.")

    sanity = {
        "angles_c_match_mc": len(record.angles_c) == record.plane_count,
        "angles_g_match_ng": len(record.angles_g) == record.sample_count,
        "intensities_match_planes": len(record.intensities) == stored * record.sample_count,
        "direct_ratios_complete": len(record.direct_ratios) == DIRECT_RATIO_COUNT,
        "angles_c_non_decreasing": _non_decreasing(c_angles),
        "angles_g_non_decreasing": _non_decreasing(g_angles),
        "intensity_has_nan_or_inf": bool(intensity.size and not np.all(np.isfinite(intensity))),
    }

    return LDTVerifyResult(
        file=str(path),
        file_hash_sha256=file_hash,
        manufacturer=record.manufacturer,
        luminaire_name=record.luminaire_name,
        type_code=record.type_code,
        symmetry_code=record.symmetry_code,
        stored_planes={"low": low, "high": high, "count": stored},
        counts={
            "num_c": record.plane_count,
            "num_gamma": record.sample_count,
            "num_lamp_sets": record.lamp_set_count,
            "num_intensities": len(record.intensities),
        },
        angle_ranges_deg={**_range(c_angles, "c_min", "c_max"), **_range(g_angles, "gamma_min", "gamma_max")},
        intensity_stats={
            "min_cd_klm": float(np.min(intensity)) if intensity.size else 0.0,
            "max_cd_klm": float(np.max(intensity)) if intensity.size else 0.0,
            "mean_cd_klm": float(np.mean(intensity)) if intensity.size else 0.0,
        },
        sanity=sanity,
        warnings=warnings,
    )


def verify_ldt_file(path: str, options: Optional[CodecOptions] = None) -> LDTVerifyResult:
    p = Path(path).expanduser().resolve()
    if not p.exists() or not p.is_file():
        raise FileNotFoundError(f"EULUMDAT file not found: {p}")

    result = load_ldt(p, options)
    record = result.unwrap()
    decode_warnings = [str(result.warning)] if result.warning is not None else []
    return summarise_record(record, p, sha256_file(str(p)), decode_warnings)
