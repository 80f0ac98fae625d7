"""
Пакет построения изолиний.
Реэкспорт API графа изолиний.
"""

from __future__ import annotations

from .graph import ContourGraph as ContourGraph
from .levels import FixedLevelGenerator as FixedLevelGenerator
from .levels import IntervalLevelGenerator as IntervalLevelGenerator
from .line import ContourLine as ContourLine
from .segment import ContourSegment as ContourSegment
from .square import ContourSquare as ContourSquare
