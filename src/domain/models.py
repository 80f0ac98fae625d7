from pydantic import BaseModel, field_validator

from contours.levels import (
    ContourLevelGenerator,
    FixedLevelGenerator,
    IntervalLevelGenerator,
)
from shared.constants import (
    CONTOUR_BASE_M,
    CONTOUR_INTERVAL_M,
    CONTOUR_PARALLEL_WORKERS,
    DEFAULT_THRESHOLD_SQUARED,
    NO_ROUNDING,
)


class ContourSettings(BaseModel):
    """Параметры построения изолиний, загружаемые из профиля."""

    model_config = {
        'extra': 'ignore',  # игнорировать лишние поля из профилей
    }

    # Шаг изолиний (м) и базовая высота отсчёта
    interval_m: float = CONTOUR_INTERVAL_M
    base_m: float = CONTOUR_BASE_M
    # Явный список уровней; если задан, шаг не используется
    levels: list[float] | None = None

    # Квадрат допуска совпадения точек
    threshold_squared: float = DEFAULT_THRESHOLD_SQUARED

    # Замыкать линии, выходящие на край сетки
    close_lines: bool = False
    # Склеивать оставшиеся открытые линии после прохода
    simplify: bool = False
    # Число знаков округления координат полигонов (-1 — без округления)
    rounding: int = NO_ROUNDING
    # Количество воркеров для обработки уровней
    parallel_workers: int = CONTOUR_PARALLEL_WORKERS

    @field_validator('interval_m', 'threshold_squared')
    @classmethod
    def validate_positive(cls, v: float | str) -> float:
        v = float(v)
        if not v > 0:
            msg = 'Значение должно быть больше нуля'
            raise ValueError(msg)
        return v

    @field_validator('rounding')
    @classmethod
    def validate_rounding(cls, v: int) -> int:
        if v < NO_ROUNDING:
            msg = f'Округление должно быть >= {NO_ROUNDING}'
            raise ValueError(msg)
        return v

    @field_validator('parallel_workers')
    @classmethod
    def validate_workers(cls, v: int) -> int:
        if v < 1:
            msg = 'Нужен хотя бы один воркер'
            raise ValueError(msg)
        return v

    def level_generator(self) -> ContourLevelGenerator:
        if self.levels:
            return FixedLevelGenerator(self.levels)
        return IntervalLevelGenerator(self.interval_m, self.base_m)
