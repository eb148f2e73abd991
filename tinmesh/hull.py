from __future__ import annotations
from typing import List, Sequence, Tuple

from .geom import polygon_area
from .predicates import orient2d_sign

XY = Tuple[float, float]


def convex_hull_2d(points: Sequence[XY]) -> List[int]:
    """
    Опукла оболонка на площині (монотонний ланцюг Ендрю).
    Повертає індекси вершин оболонки проти годинникової стрілки, без колінеарних
    проміжних точок. Для вироджених наборів (< 3 різних точок або всі на одній
    прямій) лише крайні точки.
    """
    order = sorted(range(len(points)), key=lambda i: (points[i][0], points[i][1]))
    if len(order) < 3:
        return order

    def half(idx: List[int]) -> List[int]:
        chain: List[int] = []
        for i in idx:
            while len(chain) >= 2 and orient2d_sign(points[chain[-2]], points[chain[-1]], points[i]) <= 0:
                chain.pop()
            chain.append(i)
        return chain

    lower = half(order)
    upper = half(order[::-1])
    # кінці ланцюгів спільні
    return lower[:-1] + upper[:-1]


def hull_area(points: Sequence[XY]) -> float:
    """Площа опуклої оболонки (0 для вироджених наборів)."""
    ring = convex_hull_2d(points)
    if len(ring) < 3:
        return 0.0
    return polygon_area([points[i] for i in ring])
