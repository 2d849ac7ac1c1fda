"""structlog setup and the structured log helpers used across ingresstree."""

import logging
import os
import sys
from typing import Any, Optional

import structlog

LOG_FORMATS = ("console", "json")


def _resolve_level(verbose: bool) -> str:
    """DEBUG when verbose, else LOG_LEVEL, falling back to INFO for unknown names."""
    if verbose:
        return "DEBUG"
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    return level if isinstance(logging.getLevelName(level), int) else "INFO"


def _resolve_format(log_format: Optional[str]) -> str:
    chosen = (log_format or os.getenv("LOG_FORMAT", "console")).lower()
    return chosen if chosen in LOG_FORMATS else "console"


def setup_logging(verbose: bool = False, log_format: Optional[str] = None) -> None:
    """Route structlog through stdlib logging on stderr.

    stdout is left to command output such as ``read -o json``.

    Args:
        verbose: Force DEBUG level.
        log_format: ``console`` or ``json``; overrides LOG_FORMAT.
    """
    level = _resolve_level(verbose)
    renderer_name = _resolve_format(log_format)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=getattr(logging, level), force=True)

    if renderer_name == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False, exception_formatter=structlog.dev.plain_traceback)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    get_logger(__name__).debug("Logging configured", log_level=level, log_format=renderer_name)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def log_function_entry(logger: structlog.stdlib.BoundLogger, func_name: str, **kwargs: Any) -> None:
    logger.debug("Function entry", function=func_name, **kwargs)


def log_function_exit(logger: structlog.stdlib.BoundLogger, func_name: str, **kwargs: Any) -> None:
    logger.debug("Function exit", function=func_name, **kwargs)


def log_api_request(logger: structlog.stdlib.BoundLogger, method: str, path: str, **kwargs: Any) -> None:
    logger.info("API request", method=method, path=path, **kwargs)


def log_api_response(logger: structlog.stdlib.BoundLogger, method: str, path: str, status_code: int, **kwargs: Any) -> None:
    logger.info("API response", method=method, path=path, status_code=status_code, **kwargs)


def log_k8s_operation(logger: structlog.stdlib.BoundLogger, operation: str, cluster: str, **kwargs: Any) -> None:
    """Debug-level record of a Kubernetes API call against ``cluster``."""
    logger.debug("Kubernetes operation", operation=operation, cluster=cluster, **kwargs)


def log_read_event(logger: structlog.stdlib.BoundLogger, event_type: str, **kwargs: Any) -> None:
    """Log the outcome of an ingress read (found, not_found)."""
    logger.info("Read event", event_type=event_type, **kwargs)
