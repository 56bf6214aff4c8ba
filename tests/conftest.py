from __future__ import annotations

from typing import Callable, List, Optional

import pytest

from luxldt.photometry.symmetry import resolve_plane_range


def build_ldt_lines(
    symmetry: int = 0,
    mc: int = 24,
    ng: int = 19,
    lamp_sets: int = 1,
    stored_planes: Optional[int] = None,
) -> List[str]:
    """
    Lines of a synthetic EULUMDAT file. Intensity values encode their position
    as plane * 1000 + sample so row-major order can be checked.
    """
    if stored_planes is None:
        stored_planes = resolve_plane_range(symmetry, mc).count
    dc = 360.0 / mc if mc else 0.0
    dg = 180.0 / (ng - 1) if ng > 1 else 0.0

    lines = [
        "ACME Lighting",
        "1",
        str(symmetry),
        str(mc),
        f"{dc:g}",
        str(ng),
        f"{dg:g}",
        "RPT-42",
        "Acme Downlight",
        "AD-200",
        "acme.ldt",
        "2024-05-01 QA",
        "200", "0", "60", "150", "0", "0", "0", "0", "0",
        "98.5",
        "72.25",
        "1",
        "0",
        str(lamp_sets),
    ]
    lines += [str(i + 1) for i in range(lamp_sets)]
    lines += [f"LED module {i}" for i in range(lamp_sets)]
    lines += [str(1000 * (i + 1)) for i in range(lamp_sets)]
    lines += ["3000" for _ in range(lamp_sets)]
    lines += ["1" for _ in range(lamp_sets)]
    lines += [f"{10.5 + i:g}" for i in range(lamp_sets)]
    lines += [f"{0.4 + 0.05 * i:g}" for i in range(10)]
    lines += [f"{i * dc:g}" for i in range(mc)]
    lines += [f"{j * dg:g}" for j in range(ng)]
    lines += [str(p * 1000 + j) for p in range(stored_planes) for j in range(ng)]
    return lines


@pytest.fixture
def ldt_lines() -> Callable[..., List[str]]:
    return build_ldt_lines


@pytest.fixture
def ldt_text() -> Callable[..., str]:
    def _text(**kwargs) -> str:
        return "\n".join(build_ldt_lines(**kwargs)) + "\n"

    return _text
