import threading
import sys

# --- Допуски сравнения координат
# Квадрат допустимого расстояния между точками, которые считаются совпадающими
# (в единицах координат сетки; 1e-7 градуса ≈ 1 см на местности)
DEFAULT_THRESHOLD_SQUARED = 1e-14

# --- Уровни изолиний
# Шаг изолиний по умолчанию (метры)
CONTOUR_INTERVAL_M = 10.0
# Базовая высота, от которой отсчитываются уровни (метры)
CONTOUR_BASE_M = 0.0
# Квантование уровня при построении ключа словаря (1000 => миллиметры)
LEVEL_KEY_SCALE = 1000

# --- Построение графа изолиний
# Сколько раз повторно пытаемся пристроить неопределённые сегменты в ряду
SCAN_RETRY_PASSES = 3
# Максимум углов сетки, которые можно обойти при замыкании линии по краю
BOUNDARY_MAX_ROTATIONS = 4
# Количество параллельных воркеров для очистки/упрощения по уровням
CONTOUR_PARALLEL_WORKERS = 4
# Минимальный размер DEM-сетки (строк и столбцов)
MIN_GRID_SIZE = 2

# --- Полигоны
# Округление координат не выполняется
NO_ROUNDING = -1
# Минимальное число различных точек для кольца полигона
MIN_RING_POINTS = 3

# Вес для усреднения четырёх значений в ячейке (1/4) в алгоритме marching squares
MARCHING_SQUARES_CENTER_WEIGHT = 0.25

# Marching Squares — именованные маски и группы случаев
# Битовая раскладка (по часовой стрелке, начиная с верхнего левого):
# b0: TL (NW), b1: TR (NE), b2: BR (SE), b3: BL (SW)
MS_MASK_EMPTY = 0  # 0b0000 — все ниже уровня
MS_MASK_FULL = 15  # 0b1111 — все выше уровня

# Одиночные углы
MS_MASK_TL = 1
MS_MASK_TR = 2
MS_MASK_BR = 4
MS_MASK_BL = 8

# Диагональные (седловые) случаи — неоднозначны без разрешения через центр
MS_MASK_TL_BR = 5  # 0b0101 — TL+BR
MS_MASK_TR_BL = 10  # 0b1010 — TR+BL

# Случаи, когда изолиния в клетке отсутствует
MS_NO_CONTOUR_CASES = {MS_MASK_EMPTY, MS_MASK_FULL}
MS_AMBIGUOUS_CASES = (MS_MASK_TL_BR, MS_MASK_TR_BL)

# --- Журналирование
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class SingleLineRenderer:
    """Потокобезопасный рендерер для вывода в одну строку."""

    def __init__(self) -> None:
        self._last_len = 0
        self._lock = threading.Lock()

    def clear_line(self) -> None:
        """Полностью очистить текущую строку прогресса."""
        with self._lock:
            if self._last_len > 0:
                sys.stderr.write('\r' + ' ' * self._last_len + '\r')
                sys.stderr.flush()
                self._last_len = 0

    def write_line(self, msg: str) -> None:
        """Перерисовать текущую строку прогресса."""
        with self._lock:
            pad = max(0, self._last_len - len(msg))
            sys.stderr.write('\r' + msg + (' ' * pad))
            sys.stderr.flush()
            self._last_len = len(msg)


# Экземпляр по умолчанию (можно передать свой при создании классов)
DEFAULT_WRITER = SingleLineRenderer()
