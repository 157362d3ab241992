import logging


def setup_logging(log_level=None):
    """
    Console logging for the HTTP service and the console.

    Library modules only call logging.getLogger(__name__); nothing is
    configured until an entry point calls this.

    Args:
        log_level: a logging level int or name. Defaults to
                   settings.LOG_LEVEL (HEXROUTE_LOG_LEVEL).
    """
    if log_level is None:
        from nav import settings
        log_level = settings.LOG_LEVEL
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    root_logger.addHandler(console_handler)
    return root_logger
