from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple


@dataclass(frozen=True)
class Pt:
    """Точка хмари (x, y, z). Незмінна після завантаження."""
    x: float
    y: float
    z: float
    def __iter__(self):
        yield self.x; yield self.y; yield self.z

@dataclass(frozen=True)
class Pt2:
    """
    Проєкція Pt на площину XY.
    src — індекс вихідної Pt у послідовності лоадера (лише посилання, не копія).
    Ітерується як пара (x, y), тож розпаковка `x, y = p` працює і для кортежів.
    """
    x: float
    y: float
    src: int = -1
    def __iter__(self):
        yield self.x; yield self.y

XY = Tuple[float, float]

def sub(a: XY, b: XY) -> XY:
    return (a[0] - b[0], a[1] - b[1])

def cross(u: XY, v: XY) -> float:
    return u[0]*v[1] - u[1]*v[0]

def polygon_area(poly: Sequence[XY]) -> float:
    """Знакова площа многокутника (формула шнурка), > 0 для обходу проти годинникової."""
    n = len(poly)
    if n < 3:
        return 0.0
    # відносно першої вершини: великі геодезичні координати
    o = poly[0]
    s = 0.0
    for i in range(1, n - 1):
        s += cross(sub(poly[i], o), sub(poly[i + 1], o))
    return 0.5 * s

def unique_points(points: Iterable[XY]) -> List[int]:
    """
    Дедуплікація за точним збігом (x, y): повертає індекси ПЕРШИХ входжень
    у вихідному порядку. Приймає пари або Pt2. z не враховується: дві точки
    з однаковою проєкцією дали б трикутник нульової площі.
    """
    seen: dict[XY, int] = {}
    keep: List[int] = []
    for i, p in enumerate(points):
        x, y = p
        key = (float(x), float(y))
        if key not in seen:
            seen[key] = i
            keep.append(i)
    return keep
