# examples/demo_square.py
from tinmesh.mesh import Delaunay2D
from tinmesh.pipeline import mesh_from_points
from tinmesh.io import format_raw

if __name__ == "__main__":
    # квадрат з різними висотами в кутах + точка в центрі
    raw = [
        (0, 0, 5), (1, 0, 7), (1, 1, 9), (0, 1, 11),
        (0.5, 0.5, 8),
    ]

    d2 = Delaunay2D([(x, y) for x, y, _ in raw])
    d2.build()
    print("VALIDATION:", d2.mesh.validate())

    result = mesh_from_points(raw)
    print("triangles:", result.triangulation.triangles)
    print(format_raw(result.records()))
