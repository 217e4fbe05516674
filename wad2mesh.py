"""
Wad2Mesh reads a Doom format .wad and rebuilds the floor, ceiling and wall
geometry of its maps along with the composited wall textures and flats,
ready to be handed over to a renderer or asset pipeline.
"""

from typing import Final, Optional, Sequence
import sys
from pathlib import Path
import logging
from logutil import setup_logger, shutdown_logger, app_dir
from configutil import ConfigUtil
from formats import InvalidFormatException
from formats.export import process_wad

logger = logging.getLogger(__name__)

RUNNING_AS_EXE: Final[bool] = getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS')


class InvalidFileException(Exception):
    pass


def main(config: ConfigUtil) -> int:
    if not config.input:
        config.argparser.print_help()
        return 2

    filepath = Path(config.input)
    if filepath.suffix == '' and not filepath.exists():
        filepath = filepath.with_suffix('.wad')

    if not filepath.exists():
        logger.error(f"Input file {filepath} not found")
        return 2

    if filepath.suffix.lower() != '.wad':
        raise InvalidFileException(
            f"Invalid file type. Must be .wad, but was {filepath.suffix}")

    logger.info(filepath.name)

    outputdir = filepath.parent / config.output_dir

    result = process_wad(
        filepath, outputdir,
        maps=config.maps,
        extract_textures=config.extract_textures,
        extract_flats=config.extract_flats,
        image_format=config.image_format,
    )

    for name, level in result.levels.items():
        logger.info(f"{name}: {len(level.floors)} floors, {len(level.ceilings)} "\
                    f"ceilings, {len(level.walls)} walls")
    logger.info(f"Finished {filepath.name}: {len(result.levels)} maps, "\
                f"{len(result.textures)} textures, {len(result.flats)} flats")
    return 0


def cli(argv: Optional[Sequence[str]] = None) -> int:
    try:
        config = ConfigUtil(app_dir() / 'config.ini', argv)
    except Exception:
        setup_logger(log_dir=app_dir() / 'logs')
        logger.exception('Config file parsing failed.')
        shutdown_logger(logger)
        return 2

    setup_logger(config.debug, app_dir() / 'logs')
    status = 0
    try:
        status = main(config)
    except InvalidFormatException as e:
        logger.error(str(e))
        status = 1
    except Exception as e:
        logger.exception(str(e))
        status = 1
    finally:
        if RUNNING_AS_EXE and not config.autoexit:
            input('Press Enter to exit...')
        shutdown_logger(logger)
    return status


if __name__ == '__main__':
    sys.exit(cli())
