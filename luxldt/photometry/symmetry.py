from __future__ import annotations

from dataclasses import dataclass
from typing import List


class InvalidSymmetryCode(ValueError):
    def __init__(self, symmetry_code: int):
        super().__init__(f"Invalid symmetry indicator: {symmetry_code} (expected 0-4)")
        self.symmetry_code = symmetry_code


@dataclass(frozen=True)
class PlaneRange:
    """Inclusive, 1-based range of C-planes whose intensities are stored in the file."""
    low: int
    high: int

    @property
    def count(self) -> int:
        return self.high - self.low + 1

    def plane_indices(self, plane_count: int) -> List[int]:
        """
        0-based indices into the C-angle list for each stored plane.

        Symmetry 3 stores C90..C270 through C0, so the range runs past Mc and
        wraps back to the first plane.
        """
        if plane_count <= 0:
            return []
        return [(i - 1) % plane_count for i in range(self.low, self.high + 1)]


def _div(a: int, b: int) -> int:
    """Integer division truncating toward zero (// floors for negative operands)."""
    q = abs(a) // b
    return q if a >= 0 else -q


def resolve_plane_range(symmetry_code: int, plane_count: int) -> PlaneRange:
    """
    Map a symmetry indicator and the number of C-planes (Mc) to the stored
    plane range (Mc1, Mc2). Integer division truncates toward zero.

    Raises InvalidSymmetryCode for anything outside 0..4.
    """
    mc = int(plane_count)
    if symmetry_code == 0:
        return PlaneRange(1, mc)
    if symmetry_code == 1:
        return PlaneRange(1, 1)
    if symmetry_code == 2:
        return PlaneRange(1, _div(mc, 2) + 1)
    if symmetry_code == 3:
        low = _div(3 * mc, 4) + 1
        return PlaneRange(low, low + _div(mc, 2))
    if symmetry_code == 4:
        return PlaneRange(1, _div(mc, 4) + 1)
    raise InvalidSymmetryCode(symmetry_code)
