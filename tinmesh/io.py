# tinmesh/io.py
"""
Введення/виведення навколо ядра.

Лоадер: CSV з точками (x, y, z у перших трьох колонках), опційний рядок заголовка.
Рядки, де бракує хоч однієї координати або її не розпізнано, відкидаються.

Емітер: «raw»-формат (Blender raw importer) — по трикутнику на рядок,
`x0 y0 z0 x1 y1 z1 x2 y2 z2`, рядки через '\\n' без завершального переводу рядка.
"""
from __future__ import annotations
import csv
import logging
from decimal import Decimal
from math import isfinite
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .geom import Pt

logger = logging.getLogger(__name__)

Record = Tuple[float, float, float, float, float, float, float, float, float]
PathLike = Union[str, Path]


# ---------------- лоадер ----------------
def _coord(field: str) -> Optional[float]:
    s = field.strip()
    if not s:
        return None  # порожнє поле: координати немає (не нуль)
    try:
        v = float(s)
    except ValueError:
        return None
    return v if isfinite(v) else None


def parse_points(text: str, delimiter: str = ",", header: bool = True) -> List[Pt]:
    """
    Розбирає CSV-текст у список Pt. Будь-які переводи рядка (\\r\\n, \\n, \\r).
    Зайві колонки ігноруються, порожні рядки пропускаються мовчки.
    """
    lines = text.splitlines()
    if header and lines:
        lines = lines[1:]

    points: List[Pt] = []
    dropped = 0
    for row in csv.reader(lines, delimiter=delimiter, skipinitialspace=True):
        if not any(f.strip() for f in row):
            continue
        coords = [_coord(f) for f in row[:3]]
        if len(coords) < 3 or any(c is None for c in coords):
            dropped += 1
            continue
        points.append(Pt(*coords))

    if dropped:
        logger.warning("Dropped %d row(s) with missing or unparseable coordinates", dropped)
    logger.debug("Parsed %d point(s)", len(points))
    return points


def read_points(path: PathLike, delimiter: str = ",", header: bool = True) -> List[Pt]:
    # utf-8-sig: експорт з AutoCAD/Excel часто має BOM
    text = Path(path).read_text(encoding="utf-8-sig")
    return parse_points(text, delimiter=delimiter, header=header)


# ---------------- емітер ----------------
def emit(triangulation: Iterable[Tuple[int, int, int]], points: Sequence[Pt]) -> List[Record]:
    """Індекси трикутників -> 9 координат у канонічному порядку вершин."""
    out: List[Record] = []
    for tri in triangulation:
        rec = tuple(c for i in tri for c in points[i])
        if len(rec) != 9:
            raise ValueError(f"Triangle {tri!r} does not resolve to three 3D points")
        out.append(rec)
    return out


def format_number(v: float) -> str:
    """
    Найкоротше точне десяткове подання числа, як його друкує JavaScript
    (Number.prototype.toString): 5 замість 5.0, 0.00001 без експоненти, 1e-7, 1e+21.
    """
    if v == 0:
        return "0"
    sign = "-" if v < 0 else ""
    d = Decimal(repr(abs(float(v)))).normalize()
    _, digit_tuple, exp = d.as_tuple()
    digits = "".join(str(x) for x in digit_tuple)
    k = len(digits)
    n = exp + k  # значення = 0.digits * 10**n

    if k <= n <= 21:
        s = digits + "0" * (n - k)
    elif 0 < n <= 21:
        s = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        s = "0." + "0" * (-n) + digits
    else:
        e = n - 1
        mant = digits if k == 1 else digits[0] + "." + digits[1:]
        s = f"{mant}e{'+' if e > 0 else '-'}{abs(e)}"
    return sign + s


def format_raw(records: Iterable[Sequence[float]]) -> str:
    return "\n".join(" ".join(format_number(c) for c in rec) for rec in records)


def write_raw(path: PathLike, records: Iterable[Sequence[float]]) -> None:
    # лише \n між рядками на будь-якій ОС
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(format_raw(records))
