"""
Модуль подготовки DEM (Digital Elevation Model) для построения изолиний.

Загрузка матрицы высот и оценка набора уровней.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from dem.grid import ElevationGrid

if TYPE_CHECKING:
    from contours.levels import ContourLevelGenerator
    from geo.coordinates import Coordinates

logger = logging.getLogger(__name__)


def load_dem_grid(
    path: str | Path,
    start: Coordinates,
    end: Coordinates,
    *,
    north_up: bool = False,
) -> ElevationGrid:
    """
    Загружает матрицу высот из .npy файла.

    Args:
        path: Путь к файлу numpy
        start: Юго-западный угол
        end: Северо-восточный угол
        north_up: Первая строка массива соответствует северному краю

    Returns:
        Сетка высот

    """
    p = Path(path)
    if not p.exists():
        msg = f'DEM не найден: {p}'
        raise FileNotFoundError(msg)
    dem = np.load(p, allow_pickle=False)
    logger.info('DEM loaded: %s shape=%s dtype=%s', p, dem.shape, dem.dtype)
    if north_up:
        return ElevationGrid.from_north_up(dem, start, end)
    return ElevationGrid(dem, start, end)


def compute_elevation_levels(
    dem: np.ndarray,
    generator: ContourLevelGenerator,
) -> tuple[list[float], float, float]:
    """
    Вычисляет уровни изолиний для DEM.

    Args:
        dem: Матрица высот
        generator: Политика уровней (шаг или явный список)

    Returns:
        (список уровней, min высота, max высота)

    """
    valid_mask = np.isfinite(dem)
    if not np.any(valid_mask):
        return [], 0.0, 0.0

    mn = float(np.min(dem[valid_mask]))
    mx = float(np.max(dem[valid_mask]))

    levels = list(generator.levels(mn, mx))
    return levels, mn, mx
