import logging
from pathlib import Path

import tomlkit

from domain.models import ContourSettings

logger = logging.getLogger(__name__)


def load_profile(path: str | Path) -> ContourSettings:
    """Загрузка и валидация профиля TOML -> ContourSettings."""
    p = Path(path)
    if not p.exists():
        msg = f'Профиль не найден: {p}'
        raise FileNotFoundError(msg)
    data = tomlkit.parse(p.read_text(encoding='utf-8'))
    settings = ContourSettings.model_validate(data.unwrap())
    logger.info('Profile loaded: %s (%s)', p, settings)
    return settings


def save_profile(path: str | Path, settings: ContourSettings) -> Path:
    """Сохранение профиля в TOML (без атомарности и бэкапов)."""
    p = Path(path)
    data = settings.model_dump(exclude_none=True)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(tomlkit.dumps(data), encoding='utf-8')
    return p
