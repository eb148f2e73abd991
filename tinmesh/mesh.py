# tinmesh/mesh.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from math import isfinite
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from .errors import DuplicatePointError, InsufficientPointsError, InternalInvariantError
from .predicates import orient2d, orient2d_sign, incircle_sign, strictly_between

logger = logging.getLogger(__name__)

GHOST = -1                      # вершина «на нескінченності» для ghost-трикутників
Edge = Tuple[int, int]          # орієнтоване ребро (u, v)
Tri3 = Tuple[int, int, int]
XY = Tuple[float, float]


@dataclass
class Tri:
    """
    Трикутник сітки.
    v: вершини проти годинникової стрілки. У ghost-трикутника GHOST завжди стоїть у v[2],
       а (v[0], v[1]) — ребро опуклої оболонки, зовнішність якого лежить ЛІВОРУЧ.
    Локальні ребра: 0:(a,b), 1:(b,c), 2:(c,a).
    """
    v: Tri3
    alive: bool = True

    def edge(self, i: int) -> Edge:
        a, b, c = self.v
        if i == 0:
            return (a, b)
        if i == 1:
            return (b, c)
        return (c, a)

    @property
    def is_ghost(self) -> bool:
        return self.v[2] == GHOST


class TriMesh:
    """
    Мінімальна структура 2D трикутної сітки:
      - points: список (x, y)
      - tris: масив Tri (мертві не ущільнюємо — id стабільні)
      - edgemap: орієнтоване ребро (u, v) -> id живого трикутника, що його містить.
    Сусід через ребро (u, v) — власник ребра-близнюка (v, u). Разом із ghost-трикутниками
    поверхня замкнена: у кожного живого ребра є рівно один близнюк.
    """
    def __init__(self, points: Sequence[XY]):
        self.points: List[XY] = list(points)
        self.tris: List[Tri] = []
        self.edgemap: Dict[Edge, int] = {}

    def add_tri(self, a: int, b: int, c: int) -> int:
        # ghost-вершину завжди переносимо на третє місце (циклічний зсув зберігає орієнтацію)
        if a == GHOST:
            a, b, c = b, c, a
        elif b == GHOST:
            a, b, c = c, a, b
        tid = len(self.tris)
        t = Tri((a, b, c))
        for i in range(3):
            e = t.edge(i)
            if e in self.edgemap:
                raise InternalInvariantError(
                    "Directed edge is already owned by another triangle",
                    len(self.points), {"edge": e, "owner": self.edgemap[e], "new": t.v},
                )
        self.tris.append(t)
        for i in range(3):
            self.edgemap[t.edge(i)] = tid
        return tid

    def remove_tri(self, tid: int) -> None:
        """Позначити трикутник мертвим і прибрати його ребра з edgemap."""
        t = self.tris[tid]
        if not t.alive:
            return
        t.alive = False
        for i in range(3):
            e = t.edge(i)
            if self.edgemap.get(e) == tid:
                del self.edgemap[e]

    def neighbor(self, tid: int, i: int) -> Optional[int]:
        u, v = self.tris[tid].edge(i)
        return self.edgemap.get((v, u))

    def solid_triangles(self) -> List[Tri3]:
        return [t.v for t in self.tris if t.alive and not t.is_ghost]

    # ---------- locate ----------
    def locate(self, p: XY, start_tid: Optional[int]) -> Optional[int]:
        """
        Видимісний «walking» від start_tid до трикутника, що містить p (замкнений),
        або до ghost-трикутника, ребро якого p бачить ззовні.
        None, якщо старт недійсний або обхід зациклився.
        """
        cur = start_tid
        visited: Set[int] = set()
        while cur is not None and cur not in visited:
            visited.add(cur)
            t = self.tris[cur]
            if not t.alive:
                return None
            if t.is_ghost:
                return cur
            nxt = None
            for i in range(3):
                u, v = t.edge(i)
                if orient2d_sign(self.points[u], self.points[v], p) < 0:
                    nxt = self.neighbor(cur, i)
                    break
            if nxt is None:
                return cur
            cur = nxt
        return None

    # ---------- валідація сітки ----------
    def validate(self) -> dict:
        """
        Перевірка коректності сітки:
          - у кожного живого орієнтованого ребра є живий близнюк (многовид);
          - усі справжні трикутники мають додатну орієнтацію (ненульова площа);
          - локальна умова Делоне на кожному внутрішньому ребрі;
          - оболонка (ланцюг ghost-ребер) опукла.
        Повертає словник із діагностикою (порожні списки = все ок).
        """
        P = self.points
        bad_edges: List[Edge] = []
        bad_orientation: List[int] = []
        non_delaunay: List[Tuple[int, int]] = []
        bad_hull: List[int] = []

        alive = [i for i, t in enumerate(self.tris) if t.alive]
        for tid in alive:
            t = self.tris[tid]
            for i in range(3):
                nb = self.neighbor(tid, i)
                if nb is None or not self.tris[nb].alive:
                    bad_edges.append(t.edge(i))
            if t.is_ghost:
                # наступне ghost-ребро по оболонці: (b, c) після (a, b), поворот не ліворуч
                nb = self.neighbor(tid, 1)
                if nb is not None and self.tris[nb].is_ghost:
                    a, b = t.v[0], t.v[1]
                    c = self.tris[nb].v[1]
                    if orient2d_sign(P[a], P[b], P[c]) > 0:
                        bad_hull.append(tid)
                continue
            a, b, c = t.v
            if orient2d_sign(P[a], P[b], P[c]) <= 0:
                bad_orientation.append(tid)
                continue
            for i in range(3):
                nb = self.neighbor(tid, i)
                if nb is None or self.tris[nb].is_ghost:
                    continue
                w = _opposite(self.tris[nb], t.edge(i))
                if incircle_sign(P[a], P[b], P[c], P[w]) > 0:
                    non_delaunay.append((tid, w))

        return {
            "triangles": sum(1 for i in alive if not self.tris[i].is_ghost),
            "bad_edges": bad_edges,
            "bad_orientation": bad_orientation,
            "non_delaunay": non_delaunay,
            "bad_hull": bad_hull,
        }


class Delaunay2D:
    """
    Інкрементальна 2D Делоне (Bowyer–Watson) з ghost-трикутниками.

    Замість великого супер-трикутника стартуємо з трьох перших неколінеарних точок
    (у лексикографічному порядку) і замикаємо сітку трьома ghost-трикутниками.
    Для ghost-трикутника (a, b, GHOST) «описане коло» — відкрита півплощина ліворуч
    від a->b разом із відкритим відрізком ab. Тоді точки поза оболонкою вставляються
    тим самим кроком, що й внутрішні, а результат покриває рівно опуклу оболонку.
    """
    def __init__(self, points: Sequence[XY]):
        self.mesh = TriMesh(checked_point_set(points))
        self._last: Optional[int] = None  # останній створений справжній трикутник, старт для locate
        self._max_cavity = 0
        self.built = False

    # ---- конфлікт «точка в описаному колі» ----
    def _in_conflict(self, tid: int, p: XY) -> bool:
        a, b, c = self.mesh.tris[tid].v
        P = self.mesh.points
        if c == GHOST:
            s = orient2d_sign(P[a], P[b], p)
            return s > 0 or (s == 0 and strictly_between(P[a], P[b], p))
        return incircle_sign(P[a], P[b], P[c], p) > 0

    # ---- стартовий трикутник ----
    def _seed_triangle(self, order: List[int]) -> Optional[Tri3]:
        P = self.mesh.points
        a, b = order[0], order[1]
        for k in order[2:]:
            s = orient2d_sign(P[a], P[b], P[k])
            if s == 0:
                continue
            tri = (a, b, k) if s > 0 else (a, k, b)
            self._last = self.mesh.add_tri(*tri)
            # замкнути сітку: по ghost-трикутнику на кожне ребро
            for u, v in ((tri[0], tri[1]), (tri[1], tri[2]), (tri[2], tri[0])):
                self.mesh.add_tri(v, u, GHOST)
            return tri
        return None

    # ---- вставка однієї точки ----
    def insert(self, p_idx: int) -> None:
        P = self.mesh.points
        p = P[p_idx]

        # 1) locate
        tid = self.mesh.locate(p, self._last)
        if tid is None or not self._in_conflict(tid, p):
            # fallback: перебір (на коректній сітці Делоне сюди не потрапляємо)
            tid = next((i for i, t in enumerate(self.mesh.tris)
                        if t.alive and self._in_conflict(i, p)), None)
        if tid is None:
            raise InternalInvariantError("No triangle conflicts with inserted point",
                                         len(P), {"point": p_idx})

        # 2) cavity: зв'язна множина трикутників, у чиєму колі лежить p
        cavity: Set[int] = set()
        stack = [tid]
        while stack:
            cur = stack.pop()
            if cur in cavity:
                continue
            if not self._in_conflict(cur, p):
                continue
            cavity.add(cur)
            for i in range(3):
                nb = self.mesh.neighbor(cur, i)
                if nb is None:
                    raise InternalInvariantError("Open edge in closed mesh", len(P),
                                                 {"triangle": self.mesh.tris[cur].v, "edge": i})
                if nb not in cavity:
                    stack.append(nb)
        self._max_cavity = max(self._max_cavity, len(cavity))

        # 3) межа cavity: ребра, по той бік яких трикутник не в cavity
        boundary: List[Edge] = []
        for ct in sorted(cavity):
            t = self.mesh.tris[ct]
            for i in range(3):
                if self.mesh.neighbor(ct, i) not in cavity:
                    boundary.append(t.edge(i))

        # 4) знести cavity
        for ct in cavity:
            self.mesh.remove_tri(ct)

        # 5) віяло з p на кожне ребро межі
        for u, v in boundary:
            if GHOST not in (u, v) and orient2d_sign(P[u], P[v], p) <= 0:
                raise InternalInvariantError("Cavity is not star-shaped from inserted point",
                                             len(P), {"point": p_idx, "edge": (u, v)})
            nt = self.mesh.add_tri(u, v, p_idx)
            if GHOST not in (u, v):
                self._last = nt

    def build(self) -> None:
        """Побудувати тріангуляцію: сортування, стартовий трикутник, вставка решти точок."""
        P = self.mesh.points
        # лексикографічно (x, потім y); без нічиїх, бо дублікатів немає
        order = sorted(range(len(P)), key=lambda i: P[i])
        seed = self._seed_triangle(order)
        if seed is None:
            logger.warning("All %d points are collinear: triangulation is empty", len(P))
            self.built = True
            return

        used = set(seed)
        for vi in order:
            if vi not in used:
                self.insert(vi)
        self.built = True

        report = self.mesh.validate()
        problems = {k: v for k, v in report.items() if k != "triangles" and v}
        if problems:
            raise InternalInvariantError("Triangulation failed validation", len(P), problems)
        logger.debug("Delaunay2D: %d points, %d triangles, largest cavity %d",
                     len(P), report["triangles"], self._max_cavity)

    def triangulation(self) -> Triangulation:
        if not self.built:
            raise RuntimeError("build() has not been called")
        return Triangulation.from_triangles(self.mesh.solid_triangles(), self.mesh.points)


@dataclass(frozen=True)
class Triangulation:
    """
    Незмінний результат: трикутники як індекси точок, кожен проти годинникової
    стрілки і циклічно зсунутий так, що найменший індекс перший; список відсортований.
    """
    triangles: Tuple[Tri3, ...] = ()

    @classmethod
    def from_triangles(cls, tris: Sequence[Sequence[int]], points: Sequence[XY]) -> Triangulation:
        out: List[Tri3] = []
        for tri in tris:
            a, b, c = (int(i) for i in tri)
            s = orient2d_sign(points[a], points[b], points[c])
            if s == 0:
                raise InternalInvariantError("Zero-area triangle", len(points), {"triangle": (a, b, c)})
            if s < 0:
                b, c = c, b
            out.append(_canonical((a, b, c)))
        return cls(tuple(sorted(out)))

    def __len__(self) -> int:
        return len(self.triangles)

    def __iter__(self) -> Iterator[Tri3]:
        return iter(self.triangles)

    @property
    def is_empty(self) -> bool:
        return not self.triangles

    def edges(self) -> Set[Edge]:
        """Усі неорієнтовані ребра (min, max)."""
        out: Set[Edge] = set()
        for a, b, c in self.triangles:
            for u, v in ((a, b), (b, c), (c, a)):
                out.add((min(u, v), max(u, v)))
        return out

    def boundary_edges(self) -> List[Edge]:
        """Орієнтовані ребра без близнюка — межа опуклої оболонки (проти годинникової)."""
        directed = {e for a, b, c in self.triangles for e in ((a, b), (b, c), (c, a))}
        return sorted((u, v) for u, v in directed if (v, u) not in directed)

    def area(self, points: Sequence[XY]) -> float:
        total = 0.0
        for a, b, c in self.triangles:
            total += 0.5 * orient2d(points[a], points[b], points[c])
        return total


def checked_point_set(points: Sequence[XY]) -> List[XY]:
    """
    Вхідний контракт тріангулятора: >= 3 точок, скінченні координати, без дублікатів (x, y).
    Повертає точки як пари float у тому ж порядку.
    """
    n = len(points)
    if n < 3:
        raise InsufficientPointsError(n)
    pts: List[XY] = []
    seen: Dict[XY, int] = {}
    for i, p in enumerate(points):
        x, y = p
        xy = (float(x), float(y))
        if not (isfinite(xy[0]) and isfinite(xy[1])):
            raise ValueError(f"Point {i} has a non-finite coordinate: {xy!r}")
        first = seen.setdefault(xy, i)
        if first != i:
            raise DuplicatePointError(first, i, xy)
        pts.append(xy)
    return pts


def triangulate(points: Sequence[XY]) -> Triangulation:
    """
    Делоне-тріангуляція опуклої оболонки points (пари (x, y) або Pt2).
    < 3 точок -> InsufficientPointsError; дублікати (x, y) -> DuplicatePointError;
    усі колінеарні -> порожня Triangulation.
    """
    d2 = Delaunay2D(points)
    d2.build()
    return d2.triangulation()


# ---------- утиліти ----------
def _opposite(t: Tri, edge: Edge) -> int:
    for w in t.v:
        if w not in edge:
            return w
    raise InternalInvariantError("Triangle has no vertex opposite to edge", details={"triangle": t.v, "edge": edge})

def _canonical(tri: Tri3) -> Tri3:
    a, b, c = tri
    if b < a and b < c:
        return (b, c, a)
    if c < a and c < b:
        return (c, a, b)
    return tri
