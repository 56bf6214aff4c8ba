"""
Ordered line schema of an EULUMDAT file.

Both the decoder and the encoder walk LDT_SCHEMA front to back, so the
meaning of every line is defined once. Scalars take one line; blocks take
one line per value:

- lamps:         one line per lamp set, for each of the six lamp attributes
- direct_ratios: 10 lines (room indices k = 0.6 ... 5)
- angles_c:      Mc lines
- angles_g:      Ng lines
- intensities:   (Mc2 - Mc1 + 1) * Ng lines, stored planes outer, samples inner
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Tuple

from luxldt.models.record import DIRECT_RATIO_COUNT, LDTRecord
from luxldt.photometry.symmetry import PlaneRange


FieldKind = Literal["str", "int", "count", "float"]
FieldBlock = Literal["scalar", "lamps", "direct_ratios", "angles_c", "angles_g", "intensities"]


@dataclass(frozen=True)
class LDTField:
    label: str
    attr: str
    kind: FieldKind
    block: FieldBlock = "scalar"
    resolves_planes: bool = False

    @property
    def is_block(self) -> bool:
        return self.block != "scalar"


LDT_SCHEMA: Tuple[LDTField, ...] = (
    LDTField("Manufacturer", "manufacturer", "str"),
    LDTField("Type", "type_code", "int"),
    LDTField("Symmetry", "symmetry_code", "int"),
    LDTField("Mc", "plane_count", "count", resolves_planes=True),
    LDTField("Dc", "plane_spacing", "float"),
    LDTField("Ng", "sample_count", "count"),
    LDTField("Dg", "sample_spacing", "float"),
    LDTField("Measurement report number", "report_number", "str"),
    LDTField("Luminaire name", "luminaire_name", "str"),
    LDTField("Luminaire number", "luminaire_number", "str"),
    LDTField("File name", "file_name", "str"),
    LDTField("Date/user", "date_user", "str"),
    LDTField("Length/diameter of luminaire", "length_luminaire", "int"),
    LDTField("Width of luminaire", "width_luminaire", "int"),
    LDTField("Height of luminaire", "height_luminaire", "int"),
    LDTField("Length/diameter of luminous area", "length_luminous_area", "int"),
    LDTField("Width of luminous area", "width_luminous_area", "int"),
    LDTField("Height of luminous area C0-plane", "height_luminous_area_c0", "int"),
    LDTField("Height of luminous area C90-plane", "height_luminous_area_c90", "int"),
    LDTField("Height of luminous area C180-plane", "height_luminous_area_c180", "int"),
    LDTField("Height of luminous area C270-plane", "height_luminous_area_c270", "int"),
    LDTField("Downward flux fraction", "downward_flux_fraction", "float"),
    LDTField("Light output ratio luminaire", "light_output_ratio", "float"),
    LDTField("Conversion factor for luminous intensities", "conversion_factor", "float"),
    LDTField("Tilt of luminaire during measurement", "tilt", "int"),
    LDTField("Number of standard sets of lamps", "lamp_set_count", "count"),
    LDTField("Number of lamps", "lamp_count", "int", block="lamps"),
    LDTField("Type of lamps", "lamp_type", "str", block="lamps"),
    LDTField("Total luminous flux", "total_flux", "int", block="lamps"),
    LDTField("Color appearance", "color_temperature", "int", block="lamps"),
    LDTField("Color rendering group", "color_rendering_group", "int", block="lamps"),
    LDTField("Wattage including ballast", "wattage", "float", block="lamps"),
    LDTField("Direct ratios for room indices k = 0.6 ... 5", "direct_ratios", "float", block="direct_ratios"),
    LDTField("Angles C", "angles_c", "float", block="angles_c"),
    LDTField("Angles G", "angles_g", "float", block="angles_g"),
    LDTField("Luminous intensity distribution", "intensities", "float", block="intensities"),
)


def block_length(f: LDTField, record: LDTRecord, planes: PlaneRange) -> int:
    """Number of lines the decoder consumes for a block, given what has been read so far."""
    if f.block == "scalar":
        return 1
    if f.block == "lamps":
        return record.lamp_set_count
    if f.block == "direct_ratios":
        return DIRECT_RATIO_COUNT
    if f.block == "angles_c":
        return max(record.plane_count, 0)
    if f.block == "angles_g":
        return max(record.sample_count, 0)
    if f.block == "intensities":
        return max(planes.count, 0) * max(record.sample_count, 0)
    raise ValueError(f"Unknown schema block: {f.block}")


def record_values(f: LDTField, record: LDTRecord) -> List[object]:
    """
    Values the encoder writes for a schema entry.

    Everything is taken from the record as-is except the direct ratios,
    which are always written as exactly DIRECT_RATIO_COUNT lines.
    """
    if f.block == "scalar":
        return [getattr(record, f.attr)]
    if f.block == "lamps":
        return [getattr(ls, f.attr) for ls in record.lamp_sets]
    if f.block == "direct_ratios":
        # fixed-size table on the wire: pad with zeros or cut
        ratios = list(record.direct_ratios)[:DIRECT_RATIO_COUNT]
        return ratios + [0.0] * (DIRECT_RATIO_COUNT - len(ratios))
    return list(getattr(record, f.attr))
