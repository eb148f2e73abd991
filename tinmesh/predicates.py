# tinmesh/predicates.py
"""
Геометричні предикати на площині.

orient2d / incircle — «сирі» детермінанти у float (для площ і діагностики).
orient2d_sign / incircle_sign — знак, який приймає рішення в топології:
спершу швидкий float-фільтр з апріорною оцінкою похибки (межі Shewchuk),
і лише якщо знак непевний — точне обчислення у Fraction. Усі рішення
тріангулятора ухвалюються ТІЛЬКИ через *_sign.
"""
from __future__ import annotations
from fractions import Fraction
from typing import Tuple

XY = Tuple[float, float]

# половина ulp одиниці для IEEE double
_EPSILON = 2.0 ** -53
_CCW_ERRBOUND = (3.0 + 16.0 * _EPSILON) * _EPSILON
_ICC_ERRBOUND = (10.0 + 96.0 * _EPSILON) * _EPSILON


def _sign(v) -> int:
    return (v > 0) - (v < 0)


def orient2d(a: XY, b: XY, c: XY) -> float:
    """Подвоєна знакова площа (a,b,c): > 0 якщо обхід проти годинникової стрілки."""
    return (a[0] - c[0]) * (b[1] - c[1]) - (a[1] - c[1]) * (b[0] - c[0])


def incircle(a: XY, b: XY, c: XY, d: XY) -> float:
    """
    Детермінант тесту «чи лежить d у колі через a,b,c».
    Для a,b,c проти годинникової: > 0 всередині, < 0 зовні, 0 на колі.
    """
    adx = a[0] - d[0]; ady = a[1] - d[1]
    bdx = b[0] - d[0]; bdy = b[1] - d[1]
    cdx = c[0] - d[0]; cdy = c[1] - d[1]
    alift = adx*adx + ady*ady
    blift = bdx*bdx + bdy*bdy
    clift = cdx*cdx + cdy*cdy
    return (alift * (bdx*cdy - cdx*bdy)
            + blift * (cdx*ady - adx*cdy)
            + clift * (adx*bdy - bdx*ady))


def orient2d_sign(a: XY, b: XY, c: XY) -> int:
    """Точний знак orient2d: +1, -1 або 0 (колінеарні)."""
    detleft = (a[0] - c[0]) * (b[1] - c[1])
    detright = (a[1] - c[1]) * (b[0] - c[0])
    det = detleft - detright
    errbound = _CCW_ERRBOUND * (abs(detleft) + abs(detright))
    if abs(det) > errbound:
        return _sign(det)
    return _sign(_orient2d_exact(a, b, c))


def incircle_sign(a: XY, b: XY, c: XY, d: XY) -> int:
    """Точний знак incircle для a,b,c проти годинникової: +1 всередині, -1 зовні, 0 на колі."""
    adx = a[0] - d[0]; ady = a[1] - d[1]
    bdx = b[0] - d[0]; bdy = b[1] - d[1]
    cdx = c[0] - d[0]; cdy = c[1] - d[1]

    bdxcdy = bdx * cdy; cdxbdy = cdx * bdy
    cdxady = cdx * ady; adxcdy = adx * cdy
    adxbdy = adx * bdy; bdxady = bdx * ady
    alift = adx*adx + ady*ady
    blift = bdx*bdx + bdy*bdy
    clift = cdx*cdx + cdy*cdy

    det = (alift * (bdxcdy - cdxbdy)
           + blift * (cdxady - adxcdy)
           + clift * (adxbdy - bdxady))
    permanent = ((abs(bdxcdy) + abs(cdxbdy)) * alift
                 + (abs(cdxady) + abs(adxcdy)) * blift
                 + (abs(adxbdy) + abs(bdxady)) * clift)
    if abs(det) > _ICC_ERRBOUND * permanent:
        return _sign(det)
    return _sign(_incircle_exact(a, b, c, d))


def strictly_between(a: XY, b: XY, p: XY) -> bool:
    """Для колінеарних a,b,p: чи лежить p строго всередині відрізка ab."""
    if a[0] != b[0]:
        return min(a[0], b[0]) < p[0] < max(a[0], b[0])
    return min(a[1], b[1]) < p[1] < max(a[1], b[1])


# ---------- точні версії (раціональна арифметика) ----------
def _orient2d_exact(a: XY, b: XY, c: XY) -> Fraction:
    ax, ay = Fraction(a[0]), Fraction(a[1])
    bx, by = Fraction(b[0]), Fraction(b[1])
    cx, cy = Fraction(c[0]), Fraction(c[1])
    return (ax - cx) * (by - cy) - (ay - cy) * (bx - cx)


def _incircle_exact(a: XY, b: XY, c: XY, d: XY) -> Fraction:
    dx, dy = Fraction(d[0]), Fraction(d[1])
    adx = Fraction(a[0]) - dx; ady = Fraction(a[1]) - dy
    bdx = Fraction(b[0]) - dx; bdy = Fraction(b[1]) - dy
    cdx = Fraction(c[0]) - dx; cdy = Fraction(c[1]) - dy
    alift = adx*adx + ady*ady
    blift = bdx*bdx + bdy*bdy
    clift = cdx*cdx + cdy*cdy
    return (alift * (bdx*cdy - cdx*bdy)
            + blift * (cdx*ady - adx*cdy)
            + clift * (adx*bdy - bdx*ady))
