"""Logger naming for steamauth modules."""

import logging

PACKAGE_LOGGER = 'steamauth'


def get_logger(name: str) -> logging.Logger:
    """
    Logger under the ``steamauth`` namespace.
    
    Module names (``__name__``) are used as-is; any other name is nested
    below the package logger so one level setting covers every module.
    
    Args:
        name: Logger name (typically __name__)
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + '.'):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


# Silent unless the application configures logging
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())
