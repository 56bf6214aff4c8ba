from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

import matplotlib
matplotlib.use("Agg")  # headless-safe for servers/CI
import matplotlib.pyplot as plt  # noqa: E402

from luxldt.models.record import LDTRecord  # noqa: E402
from luxldt.photometry.model import LDTPhotometry, photometry_from_record  # noqa: E402


@dataclass(frozen=True)
class PlotPaths:
    intensity_png: Path
    polar_png: Path


def _choose_plane_indices(num_planes: int, max_planes: int = 4) -> List[int]:
    """
    Pick up to max_planes stored planes spaced across the table.
    Deterministic: first, last, and evenly spaced in-between.
    """
    if num_planes <= max_planes:
        return list(range(num_planes))
    idxs = [0]
    for k in range(1, max_planes - 1):
        idxs.append(round(k * (num_planes - 1) / (max_planes - 1)))
    idxs.append(num_planes - 1)
    return sorted(set(int(i) for i in idxs))


def _selected(phot: LDTPhotometry, plane_indices: Optional[Iterable[int]]) -> List[int]:
    n = int(phot.intensity.shape[0])
    if plane_indices is None:
        return _choose_plane_indices(n)
    return [i for i in plane_indices if 0 <= i < n]


def plot_intensity_curves(record: LDTRecord, outpath: Path, plane_indices: Optional[Iterable[int]] = None) -> Path:
    """
    Save a line plot of cd/klm vs gamma angle for selected stored C-planes.
    """
    phot = photometry_from_record(record)
    g = phot.gamma_angles_deg

    fig = plt.figure()
    ax = fig.add_subplot(111)
    for ci in _selected(phot, plane_indices):
        ax.plot(g, phot.intensity[ci], label=f"C{phot.c_angles_deg[ci]:g}")

    ax.set_xlabel("Gamma angle (deg)")
    ax.set_ylabel("Intensity (cd/klm)")
    ax.set_title(record.luminaire_name or "Intensity curves")
    if phot.intensity.shape[0]:
        ax.legend(loc="best")
    fig.tight_layout()
    fig.savefig(outpath, dpi=200)
    plt.close(fig)
    return outpath


def plot_polar(record: LDTRecord, outpath: Path, plane_indices: Optional[Iterable[int]] = None) -> Path:
    """
    Save a polar plot with theta = gamma angle, nadir at the bottom.
    """
    phot = photometry_from_record(record)
    theta = [math.radians(x) for x in phot.gamma_angles_deg]

    fig = plt.figure()
    ax = fig.add_subplot(111, projection="polar")
    ax.set_theta_zero_location("S")
    for ci in _selected(phot, plane_indices):
        ax.plot(theta, phot.intensity[ci], label=f"C{phot.c_angles_deg[ci]:g}")

    ax.set_title("Polar intensity (cd/klm)")
    if phot.intensity.shape[0]:
        ax.legend(loc="best", bbox_to_anchor=(1.15, 1.05))
    fig.tight_layout()
    fig.savefig(outpath, dpi=200)
    plt.close(fig)
    return outpath


def save_default_plots(record: LDTRecord, outdir: Path, stem: str = "luxldt_view") -> PlotPaths:
    outdir.mkdir(parents=True, exist_ok=True)
    intensity_png = outdir / f"{stem}_intensity.png"
    polar_png = outdir / f"{stem}_polar.png"

    plot_intensity_curves(record, intensity_png)
    plot_polar(record, polar_png)

    return PlotPaths(intensity_png=intensity_png, polar_png=polar_png)
