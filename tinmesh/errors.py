"""Винятки тріангулятора. Усі походять від TriangulationError."""
from __future__ import annotations
from typing import Any, Optional, Tuple


class TriangulationError(Exception):
    """Базовий виняток пакета."""


class InsufficientPointsError(TriangulationError, ValueError):
    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Need at least 3 points, got {count}")


class DuplicatePointError(TriangulationError, ValueError):
    def __init__(self, first: int, duplicate: int, xy: Tuple[float, float]):
        self.first = first
        self.duplicate = duplicate
        self.xy = xy
        super().__init__(
            f"Points {first} and {duplicate} share the same projection "
            f"(x={xy[0]!r}, y={xy[1]!r})"
        )


class InternalInvariantError(TriangulationError, RuntimeError):
    """
    Порушення внутрішнього інваріанта (немноговидна сітка, вироджений трикутник).
    Сигналізує дефект алгоритму/предикатів, а не поганий вхід.
    """
    def __init__(self, message: str, count: Optional[int] = None, details: Any = None):
        self.count = count
        self.details = details
        text = message
        if count is not None:
            text += f" (points: {count})"
        if details is not None:
            text += f": {details}"
        super().__init__(text)
