# examples/demo_terrain.py
import math
import random

from tinmesh.io import write_raw
from tinmesh.pipeline import mesh_from_points

if __name__ == "__main__":
    # «зйомка» пагорба: випадкові пікети з висотою за гаусоїдою
    rnd = random.Random(7)
    pts = []
    for _ in range(500):
        x = rnd.uniform(0, 100)
        y = rnd.uniform(0, 100)
        z = 20.0 * math.exp(-((x - 50) ** 2 + (y - 50) ** 2) / 800.0)
        pts.append((round(x, 3), round(y, 3), round(z, 3)))

    result = mesh_from_points(pts)                       # або backend="scipy"
    print("Vertices:", len(result.points))
    print("Triangles:", len(result.triangulation))
    print("Boundary edges:", len(result.triangulation.boundary_edges()))

    write_raw("terrain.raw", result.records())
    print("Wrote terrain.raw — імпортуй у Blender (Import-Export: Raw Mesh).")
