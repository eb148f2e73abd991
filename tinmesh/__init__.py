"""
tinmesh — хмара точок (x, y, z) -> трикутна поверхня рельєфу (TIN).
Ядро: інкрементальна 2D Делоне (Bowyer–Watson) з точними предикатами.
"""

__version__ = "0.1.0"

from tinmesh.geom import Pt, Pt2, unique_points
from tinmesh.predicates import orient2d, incircle, orient2d_sign, incircle_sign
from tinmesh.errors import (
    TriangulationError, InsufficientPointsError, DuplicatePointError, InternalInvariantError,
)
from tinmesh.mesh import Delaunay2D, Triangulation, triangulate
from tinmesh.project import project
from tinmesh.io import parse_points, read_points, emit, format_raw, write_raw
from tinmesh.pipeline import MeshResult, mesh_from_points, convert_file

__all__ = [
    "Pt", "Pt2", "unique_points",
    "orient2d", "incircle", "orient2d_sign", "incircle_sign",
    "TriangulationError", "InsufficientPointsError", "DuplicatePointError", "InternalInvariantError",
    "Delaunay2D", "Triangulation", "triangulate",
    "project",
    "parse_points", "read_points", "emit", "format_raw", "write_raw",
    "MeshResult", "mesh_from_points", "convert_file",
    "__version__",
]
