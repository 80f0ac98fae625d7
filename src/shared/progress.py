import logging
import time

from shared.constants import DEFAULT_WRITER, SingleLineRenderer

logger = logging.getLogger(__name__)


class ConsoleProgress:
    """
    Прогресс-бар для пошаговых операций.

    Экземпляр можно передать как колбэк процентов (``progress(percent)``)
    в ContourGraph.add / ContourGraph.to_polygons.
    """

    def __init__(
        self,
        total: int = 100,
        label: str = 'Прогресс',
        writer: SingleLineRenderer | None = None,
    ) -> None:
        self.total = max(1, int(total))
        self.done = 0
        self.start = time.monotonic()
        self.label = label
        self._writer = writer or DEFAULT_WRITER
        self._writer.clear_line()
        self._render()  # показать 0%

    def _format_eta(self, remaining: float) -> str:
        if remaining is None or remaining == float('inf'):
            return '--:--'
        m, s = divmod(int(remaining), 60)
        h, m = divmod(m, 60)
        if h > 0:
            return f'{h:02d}:{m:02d}:{s:02d}'
        return f'{m:02d}:{s:02d}'

    def _render(self) -> None:
        elapsed = max(1e-6, time.monotonic() - self.start)
        rps = self.done / elapsed
        remaining = (self.total - self.done) / rps if rps > 0 else float('inf')
        bar_len = 30
        filled = int(bar_len * self.done / self.total)
        bar = '█' * filled + '░' * (bar_len - filled)
        msg = (
            f'{self.label}: [{bar}] {self.done}/{self.total} | {rps:4.1f}/s | ETA'
            f' {self._format_eta(remaining)}'
        )
        self._writer.write_line(msg)

    def report(self, value: float) -> None:
        """Абсолютное обновление; прогресс не откатывается назад."""
        done = min(self.total, max(self.done, int(value)))
        if done != self.done:
            self.done = done
            self._render()

    def __call__(self, value: float) -> None:
        self.report(value)

    def close(self) -> None:
        self._writer.clear_line()
        logger.debug('%s: done %s/%s', self.label, self.done, self.total)
