"""Logging configuration for the portfolio rebalancer.

Log records go to stderr so the order table printed on stdout stays clean.
Context fields are appended as ``key=value`` pairs, with money values rounded
to cents.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

if TYPE_CHECKING:
    from rebalancer.portfolio.base import Order
    from rebalancer.utils.config import Config

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "INFO",
    log_format: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure the root logger.

    Args:
        level: Logging level name. Unknown names fall back to INFO.
        log_format: Format string, DEFAULT_LOG_FORMAT when None
        stream: Output stream, stderr when None

    Example:
        >>> setup_logging(level="DEBUG")
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format=log_format or DEFAULT_LOG_FORMAT,
        stream=stream or sys.stderr,
        force=True,
    )


def setup_logging_from_config(config: "Config") -> None:
    """Configure logging from the ``logging`` section of a Config."""
    setup_logging(
        level=str(config.get("logging.level", "INFO")),
        log_format=config.get("logging.format"),
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def format_context(**context: Any) -> str:
    """Render context as ``key=value`` pairs, floats rounded to 2 places."""
    return " ".join(
        f"{key}={round(value, 2) if isinstance(value, float) else value}"
        for key, value in context.items()
    )


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: Any,
) -> None:
    """Log a message with structured context.

    Example:
        >>> log_with_context(logger, "info", "Orders calculated", order_count=3, limit=5000.0)
        # Logs: "Orders calculated | order_count=3 limit=5000.0"
    """
    log_func = getattr(logger, level.lower())

    if context:
        log_func(f"{message} | {format_context(**context)}")
    else:
        log_func(message)


def log_order(logger: logging.Logger, order: "Order", level: str = "debug") -> None:
    """Log a single calculated order with its pricing."""
    log_with_context(
        logger,
        level,
        "Order",
        symbol=order.symbol,
        side=order.side.value,
        amount=order.amount,
        limit_price=order.limit_price,
        value=order.value,
    )
