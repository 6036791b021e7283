"""geocalib: render-space to geographic calibration engine.

Learns a per-axis similarity transform between a client render space
(pixel-like x/y) and latitude/longitude from observed correspondence
points, and converts positions in both directions.
"""

__version__ = "0.1.0"
__author__ = "geocalib Team"

from loguru import logger

LEVEL_COLORS = {
    "INFO": "<blue>",
    "DEBUG": "<yellow>",
    "WARNING": "<light-red>",
    "ERROR": "<red>"
}


def format_record(record):
    level = record["level"].name
    color = LEVEL_COLORS.get(level, "<white>")

    return (
        f"<green>{record['time']:YYYY-MM-DD HH:mm:ss}</green> | "
        f"{color}{level: <8}</> | "
        "{message}\n"
    )


def configure_logging(log_level: str = "info"):
    """Configure logger level based on config.

    Replaces every loguru handler, including any the host application added.
    Importing geocalib calls this once with "info"; add application sinks
    after the import.
    """
    logger.remove()  # Remove all handlers
    logger.add(
        lambda msg: print(msg, end=""),
        level=log_level.upper(),
        format=format_record,
        colorize=True,
    )


# Clean default handler for library and CLI use
configure_logging("info")

__all__ = ["__version__", "__author__", "logger", "configure_logging"]
