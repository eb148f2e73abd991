from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import BACKENDS, DUPLICATE_MODES, Settings, settings as default_settings
from .geom import Pt, Pt2, unique_points
from .hull import convex_hull_2d
from .io import Record, emit, read_points, write_raw, PathLike
from .mesh import Triangulation, checked_point_set, triangulate
from .project import project

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MeshResult:
    """
    points        — усі точки в порядку лоадера (разом із відкинутими дублікатами);
    triangulation — трикутники як індекси у points (через Pt2.src), тож
                    emit(triangulation, points) дає ті самі координати, що й records().
    """
    points: List[Pt]
    triangulation: Triangulation

    def records(self) -> List[Record]:
        return emit(self.triangulation, self.points)


def mesh_from_points(
    points: Iterable[Tuple[float, float, float]],
    backend: str = "internal",
    duplicates: str = "drop",
) -> MeshResult:
    """
    Повний пайплайн у пам'яті:
      - проєкція на XY (кожна Pt2 пам'ятає індекс своєї Pt);
      - duplicates="drop": не тріангулює Pt2 з уже баченою проєкцією (x, y), лишає першу;
        duplicates="error": DuplicatePointError з тріангулятора;
      - 2D Делоне: наш Delaunay2D (backend="internal") або SciPy/Qhull (backend="scipy");
      - індекси трикутників переводяться назад у індекси points через Pt2.src.
    """
    if duplicates not in DUPLICATE_MODES:
        raise ValueError(f"Unknown duplicates mode: {duplicates!r} (expected one of {DUPLICATE_MODES})")
    if backend not in BACKENDS:
        raise ValueError(f"Unknown backend: {backend!r} (expected one of {BACKENDS})")

    pts: List[Pt] = [p if isinstance(p, Pt) else Pt(*p) for p in points]
    planar = project(pts)
    if duplicates == "drop":
        keep = unique_points(planar)
        if len(keep) != len(planar):
            logger.warning("Dropped %d point(s) repeating an earlier (x, y)", len(planar) - len(keep))
            planar = [planar[i] for i in keep]

    if backend == "scipy":
        local = _scipy_triangulate(planar)
    else:
        local = triangulate(planar)

    # індекси у planar -> індекси у pts через Pt2.src
    tri = Triangulation.from_triangles(
        [tuple(planar[i].src for i in t) for t in local],
        [(p.x, p.y) for p in pts],
    )
    logger.info("Triangulated %d point(s) into %d triangle(s) [%s]", len(planar), len(tri), backend)
    return MeshResult(pts, tri)


def _scipy_triangulate(planar: Sequence[Pt2]) -> Triangulation:
    """Той самий контракт, що й triangulate(), але через scipy.spatial.Delaunay."""
    xy = checked_point_set(planar)
    if len(convex_hull_2d(xy)) < 3:
        logger.warning("All %d points are collinear: triangulation is empty", len(xy))
        return Triangulation()
    try:
        import numpy as np
        from scipy.spatial import Delaunay
    except ImportError as e:
        raise RuntimeError(
            "backend='scipy', але SciPy не встановлено. "
            "Встанови scipy або використай backend='internal'."
        ) from e

    arr = np.array(xy, dtype=float)
    dela = Delaunay(arr)  # Qhull під капотом
    return Triangulation.from_triangles(dela.simplices.tolist(), xy)


def convert_file(
    in_path: PathLike,
    out_path: PathLike,
    config: Optional[Settings] = None,
) -> MeshResult:
    """CSV точок -> raw-сітка. Повертає MeshResult для подальшої статистики."""
    cfg = config or default_settings
    pts = read_points(in_path, delimiter=cfg.delimiter, header=cfg.header)
    logger.info("Read %d point(s) from %s", len(pts), in_path)

    result = mesh_from_points(pts, backend=cfg.backend, duplicates=cfg.duplicates)
    write_raw(out_path, result.records())
    logger.info("Wrote %d triangle(s) to %s", len(result.triangulation), out_path)
    return result
