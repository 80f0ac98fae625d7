"""Command-line entry point: DEM array -> contour GeoJSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from contours.export import lines_to_feature_collection, polygons_to_feature_collection
from contours.graph import ContourGraph
from dem.builder import compute_elevation_levels, load_dem_grid
from domain.models import ContourSettings
from domain.profiles import load_profile
from geo.coordinates import Coordinates
from shared.constants import LOG_FORMAT
from shared.diagnostics import log_comprehensive_diagnostics, log_memory_usage
from shared.progress import ConsoleProgress

logger = logging.getLogger(__name__)


def setup_logging(level: str = 'INFO', log_file: str | Path | None = None) -> None:
    """Configure application logging to stderr and an optional file."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(path), encoding='utf-8'))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='dem-contours',
        description='Построение изолиний и полигонов высот по матрице DEM (.npy)',
    )
    parser.add_argument('input', help='Матрица высот в формате .npy')
    parser.add_argument('--south', type=float, required=True, help='Широта южного края')
    parser.add_argument('--west', type=float, required=True, help='Долгота западного края')
    parser.add_argument('--north', type=float, required=True, help='Широта северного края')
    parser.add_argument('--east', type=float, required=True, help='Долгота восточного края')
    parser.add_argument(
        '--north-up',
        action='store_true',
        help='Первая строка массива соответствует северному краю',
    )
    parser.add_argument('--profile', help='TOML профиль с настройками изолиний')
    parser.add_argument('--interval', type=float, help='Шаг изолиний (м)')
    parser.add_argument('--close-lines', action='store_true', help='Замыкать линии по краю сетки')
    parser.add_argument('--simplify', action='store_true', help='Склеивать открытые линии')
    parser.add_argument('--rounding', type=int, help='Знаков округления координат полигонов')
    parser.add_argument('--lines', action='store_true', help='Выводить линии вместо полигонов')
    parser.add_argument('--output', '-o', help='Файл GeoJSON (по умолчанию stdout)')
    parser.add_argument('--no-progress', action='store_true', help='Не показывать прогресс')
    parser.add_argument('--log-level', default='INFO', help='Уровень журналирования')
    parser.add_argument('--log-file', help='Файл журнала')
    return parser


def resolve_settings(args: argparse.Namespace) -> ContourSettings:
    settings = load_profile(args.profile) if args.profile else ContourSettings()
    overrides: dict[str, object] = {}
    if args.interval is not None:
        overrides['interval_m'] = args.interval
    if args.close_lines:
        overrides['close_lines'] = True
    if args.simplify:
        overrides['simplify'] = True
    if args.rounding is not None:
        overrides['rounding'] = args.rounding
    if overrides:
        settings = ContourSettings.model_validate({**settings.model_dump(), **overrides})
    return settings


def run(args: argparse.Namespace) -> dict:
    settings = resolve_settings(args)
    grid = load_dem_grid(
        args.input,
        Coordinates(args.south, args.west),
        Coordinates(args.north, args.east),
        north_up=args.north_up,
    )
    generator = settings.level_generator()
    levels, mn, mx = compute_elevation_levels(grid.data, generator)
    logger.info('Elevation range %.2f..%.2f m, %s levels from %r', mn, mx, len(levels), generator)

    graph = ContourGraph(settings.threshold_squared, settings.parallel_workers)
    progress = None if args.no_progress else ConsoleProgress(100, 'Изолинии')
    graph.add(
        grid,
        generator,
        close_lines=settings.close_lines,
        simplify=settings.simplify,
        progress=progress,
    )
    if progress is not None:
        progress.close()
    log_memory_usage('after contour scan')

    if args.lines:
        return lines_to_feature_collection(graph)
    progress = None if args.no_progress else ConsoleProgress(100, 'Полигоны')
    result = polygons_to_feature_collection(graph, settings.rounding, progress)
    if progress is not None:
        progress.close()
    return result


def main(argv: list[str] | None = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    log_comprehensive_diagnostics('contours_startup', level=logging.DEBUG)

    try:
        collection = run(args)
        text = json.dumps(collection, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(text, encoding='utf-8')
            logger.info('Written %s features to %s', len(collection['features']), args.output)
        else:
            sys.stdout.write(text + '\n')
    except (OSError, ValueError) as e:
        logger.error('Failed to build contours: %s', e, exc_info=True)
        log_comprehensive_diagnostics('contours_error')
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
