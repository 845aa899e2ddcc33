#!/usr/bin/env python3
"""
Logging and metrics for the quantity scaling engine.
Structured logging via structlog and processing counters via prometheus_client.
"""

import logging
import os
import sys
from typing import Optional

import structlog
from prometheus_client import Counter, Histogram
from structlog.stdlib import LoggerFactory


class MonitoringConfig:
    """Configuration for logging."""

    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
    LOG_FORMAT = os.getenv("LOG_FORMAT", "text")  # json or text


config = MonitoringConfig()

# Prometheus Metrics
QUANTITIES_DETECTED = Counter(
    'recipe_quantities_detected_total', 'Quantity tokens detected', ['format_kind']
)
QUANTITIES_CHANGED = Counter(
    'recipe_quantities_changed_total', 'Quantity tokens whose value changed on scaling'
)
BLOCK_PROCESSING_TIME = Histogram(
    'recipe_block_scaling_duration_seconds', 'Time to scale one text block'
)


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None,
                      force: bool = False):
    """
    Configure structured logging with structlog.

    Args:
        level: Log level name, defaults to LOG_LEVEL
        log_format: "json" or "text", defaults to LOG_FORMAT
        force: Replace handlers already installed on the root logger
    """
    level = (level or config.LOG_LEVEL).upper()
    log_format = log_format or config.LOG_FORMAT

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level, logging.WARNING),
        force=force,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    return structlog.get_logger(name)


configure_logging()


def record_block(result, duration: float):
    """Record processing metrics for one scaled block."""
    BLOCK_PROCESSING_TIME.observe(duration)
    for token in result.tokens:
        QUANTITIES_DETECTED.labels(format_kind=token.format_kind.value).inc()
        if token.changed:
            QUANTITIES_CHANGED.inc()
