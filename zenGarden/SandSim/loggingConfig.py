# -- Logging Configuration -- #

'''
Sets up the 'zenGarden' logger used by every garden module.

Modules log through logging.getLogger(__name__); this attaches the
console handler (and an optional file handler) once, at program start.
'''

from __future__ import annotations

import logging
import sys


def setupLogging(level: int = logging.INFO, logFile: str | None = None) -> logging.Logger:
    '''
    Configure the package logger.

    Parameters:
    -----------
    level : int
        Logging level (e.g. logging.DEBUG, logging.INFO)
    logFile : str | None
        Optional path to also write logs to

    Returns:
    --------
    logging.Logger : The configured 'zenGarden' logger
    '''
    logger = logging.getLogger('zenGarden')
    logger.setLevel(level)

    # Avoid duplicate handlers when called again (e.g. a second run in one process)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S',
    )

    consoleHandler = logging.StreamHandler(sys.stdout)
    consoleHandler.setLevel(level)
    consoleHandler.setFormatter(formatter)
    logger.addHandler(consoleHandler)

    if logFile:
        fileHandler = logging.FileHandler(logFile, mode='w', encoding='utf-8')
        fileHandler.setLevel(level)
        fileHandler.setFormatter(formatter)
        logger.addHandler(fileHandler)

    logger.debug('Logging initialized.')
    return logger
