import logging

logger = logging.getLogger("copilot_chat")


def setup_logger(
    level: int = logging.INFO,
    log_format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s",
    propagate: bool = False,
    handler: logging.Handler | None = None,
) -> None:
    """Configure the library logger.

    Args:
        level: Logging level for the copilot_chat logger.
        log_format: Format string used when no custom handler is given.
        propagate: Whether records also propagate to the root logger.
        handler: Optional handler replacing the default stream handler.

    """
    logger.setLevel(level)
    logger.propagate = propagate

    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(log_format))

    logger.addHandler(handler)
