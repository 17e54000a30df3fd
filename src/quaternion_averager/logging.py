"""Define utility functions to log messages and errors from the averaging library."""

import logging

logger = logging.getLogger("quaternion_averager")


def log_debug(message: str) -> None:
    """Log a message useful only while debugging numerical behavior.

    :param message: Message to be logged at debug level
    """
    logger.debug(message)


def log_info(message: str) -> None:
    """Log a message to the available information output channels.

    :param message: Message to be logged as information
    """
    logger.info(message)


def log_error(message: str) -> None:
    """Log a message to the available error output channels.

    :param message: Message to be logged as an error
    """
    logger.error(message)
