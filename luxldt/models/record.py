from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from luxldt.photometry.symmetry import PlaneRange, resolve_plane_range


DIRECT_RATIO_COUNT = 10

TYPE_CODES: Dict[int, str] = {
    0: "point source with no symmetry",
    1: "symmetry about the vertical axis",
    2: "linear luminaire",
    3: "point source with any other symmetry",
}

SYMMETRY_CODES: Dict[int, str] = {
    0: "no symmetry",
    1: "symmetry about the vertical axis",
    2: "symmetry to plane C0-C180",
    3: "symmetry to plane C90-C270",
    4: "symmetry to plane C0-C180 and to plane C90-C270",
}


def _zero_direct_ratios() -> List[float]:
    return [0.0] * DIRECT_RATIO_COUNT


@dataclass
class LDTLampSet:
    """One standard set of lamps (lines 26a-26f of the file)."""
    lamp_count: int = 0  # negative: absolute photometry
    lamp_type: str = ""
    total_flux: int = 0  # lm
    color_temperature: int = 0
    color_rendering_group: int = 0
    wattage: float = 0.0  # W, including ballast

    @property
    def absolute_photometry(self) -> bool:
        return self.lamp_count < 0


@dataclass
class LDTRecord:
    """
    Complete EULUMDAT description of one luminaire.

    Attribute order follows the line order of the file. Array lengths are
    whatever the record holds; the decoder sizes them exactly, the encoder
    writes them as-is.
    """
    manufacturer: str = ""
    type_code: int = 0
    symmetry_code: int = 0
    plane_count: int = 0  # Mc
    plane_spacing: float = 0.0  # Dc, deg (0 for non-equidistant planes)
    sample_count: int = 0  # Ng
    sample_spacing: float = 0.0  # Dg, deg (0 for non-equidistant samples)

    report_number: str = ""
    luminaire_name: str = ""
    luminaire_number: str = ""
    file_name: str = ""
    date_user: str = ""

    # mm
    length_luminaire: int = 0
    width_luminaire: int = 0
    height_luminaire: int = 0
    length_luminous_area: int = 0
    width_luminous_area: int = 0
    height_luminous_area_c0: int = 0
    height_luminous_area_c90: int = 0
    height_luminous_area_c180: int = 0
    height_luminous_area_c270: int = 0

    downward_flux_fraction: float = 0.0  # %
    light_output_ratio: float = 0.0  # %
    conversion_factor: float = 0.0
    tilt: int = 0

    lamp_sets: List[LDTLampSet] = field(default_factory=list)
    direct_ratios: List[float] = field(default_factory=_zero_direct_ratios)
    angles_c: List[float] = field(default_factory=list)
    angles_g: List[float] = field(default_factory=list)
    intensities: List[float] = field(default_factory=list)  # cd/klm, stored planes x samples

    @property
    def lamp_set_count(self) -> int:
        return len(self.lamp_sets)

    @lamp_set_count.setter
    def lamp_set_count(self, n: int) -> None:
        n = max(int(n), 0)
        if n <= len(self.lamp_sets):
            del self.lamp_sets[n:]
        else:
            self.lamp_sets.extend(LDTLampSet() for _ in range(n - len(self.lamp_sets)))

    @property
    def plane_range(self) -> PlaneRange:
        """Stored C-plane range for the current codes; raises InvalidSymmetryCode."""
        return resolve_plane_range(self.symmetry_code, self.plane_count)

    @property
    def absolute_photometry(self) -> bool:
        return any(ls.absolute_photometry for ls in self.lamp_sets)
