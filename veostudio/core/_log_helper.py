import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def setup_logging(
    level: str = "INFO",
    file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Configure loguru sinks.

    Args:
        level: Minimum level for all sinks.
        file: Optional log file path.
        rotation: Rotation policy of the file sink.
        retention: Retention policy of the file sink.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
    if file:
        logger.add(
            file,
            level=level.upper(),
            rotation=rotation,
            retention=retention,
            encoding="utf-8",
            enqueue=True,
        )


def warn(message: str, *args: object) -> None:
    logger.opt(depth=1).warning(message, *args)
