from __future__ import annotations
from typing import List, Sequence

from .geom import Pt, Pt2


def project(points: Sequence[Pt]) -> List[Pt2]:
    """Проєкція на XY: порядок зберігається, кожна Pt2 пам'ятає індекс своєї Pt."""
    return [Pt2(p.x, p.y, i) for i, p in enumerate(points)]
