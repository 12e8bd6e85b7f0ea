"""
Logging for the radixfft package.

Library modules log through ``logging.getLogger(__name__)`` and never attach
handlers; scripts call ``setup_logging`` (or ``setup_logging_from_config``)
once to route the ``radixfft`` logger to the console and an optional file.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, Optional, Union

PACKAGE_LOGGER = 'radixfft'
LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'


def resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        return resolved
    return level


def setup_logging(
    log_file: Optional[str] = None,
    level: Union[int, str] = logging.INFO,
    name: str = PACKAGE_LOGGER,
    console_level: Union[int, str] = logging.WARNING
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        log_file: Path to log file (if None, only console output)
        level: Level of the logger and of the file handler
        name: Logger to configure; submodule loggers propagate to it
        console_level: Console threshold (rich tables carry the main display)

    Returns:
        Configured logger
    """
    level = resolve_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Repeated setup replaces handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(resolve_level(console_level))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def setup_logging_from_config(config, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger from a RadixFFTConfig; ``log_file`` overrides the config."""
    return setup_logging(
        log_file=log_file if log_file is not None else config.log_file,
        level=config.log_level,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Package logger, or a child of it for unqualified names ("bench" -> "radixfft.bench")."""
    if not name:
        return logging.getLogger(PACKAGE_LOGGER)
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{PACKAGE_LOGGER}.{name}')


def log_cache_stats(logger: logging.Logger, stats: Dict, level: int = logging.INFO):
    """Write one cache's ``stats()`` mapping as a single line."""
    fields = ', '.join(
        f"{key}={value / 1024:.1f}KB" if key == 'bytes' else f"{key}={value}"
        for key, value in stats.items() if key != 'name'
    )
    logger.log(level, "%s: %s", stats.get('name', 'cache'), fields)
