# Модуль сетки высот DEM
from dem.builder import compute_elevation_levels, load_dem_grid
from dem.grid import DemDataPoint, DemGrid, ElevationGrid

__all__ = [
    'DemDataPoint',
    'DemGrid',
    'ElevationGrid',
    'compute_elevation_levels',
    'load_dem_grid',
]
