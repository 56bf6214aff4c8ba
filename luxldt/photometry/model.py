from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional

import numpy as np

from luxldt.models.record import LDTRecord


Symmetry = Literal["NONE", "VERTICAL_AXIS", "C0_C180", "C90_C270", "BOTH_PLANES"]

_SYMMETRY_LABELS: Dict[int, Symmetry] = {
    0: "NONE",
    1: "VERTICAL_AXIS",
    2: "C0_C180",
    3: "C90_C270",
    4: "BOTH_PLANES",
}


@dataclass(frozen=True)
class LDTPhotometry:
    """Intensity table of the stored C-planes only; symmetric planes are not rebuilt."""
    c_angles_deg: np.ndarray  # stored planes, file order
    gamma_angles_deg: np.ndarray
    intensity: np.ndarray  # shape: [num_stored_c][num_gamma], cd/klm
    symmetry: Symmetry
    plane_low: int
    plane_high: int
    total_flux_lm: Optional[float] = None

    @property
    def peak(self) -> float:
        return float(np.max(self.intensity)) if self.intensity.size else 0.0


def photometry_from_record(record: LDTRecord) -> LDTPhotometry:
    planes = record.plane_range
    ng = int(record.sample_count)

    expected = planes.count * ng
    if len(record.intensities) != expected:
        raise ValueError(
            f"Intensity table has {len(record.intensities)} values, expected {expected} "
            f"({planes.count} stored planes x {ng} samples)"
        )
    if len(record.angles_c) != record.plane_count:
        raise ValueError(f"Expected {record.plane_count} C angles, got {len(record.angles_c)}")
    if len(record.angles_g) != ng:
        raise ValueError(f"Expected {ng} G angles, got {len(record.angles_g)}")

    c_all = np.array(record.angles_c, dtype=float)
    idx = planes.plane_indices(record.plane_count)
    if idx:
        c_angles = c_all[idx]
    else:
        # no C angles in the file: the stored planes start at C0
        c_angles = np.zeros(max(planes.count, 0), dtype=float)
    if c_angles.size != planes.count:
        raise ValueError("C-plane angles are missing for the stored plane range")

    intensity = np.array(record.intensities, dtype=float).reshape(planes.count, ng)

    flux = float(sum(ls.total_flux for ls in record.lamp_sets))
    return LDTPhotometry(
        c_angles_deg=c_angles,
        gamma_angles_deg=np.array(record.angles_g, dtype=float),
        intensity=intensity,
        symmetry=_SYMMETRY_LABELS[record.symmetry_code],
        plane_low=planes.low,
        plane_high=planes.high,
        total_flux_lm=flux if flux > 0 else None,
    )
