"""structlog setup: coloured console lines plus one JSON object per line in output/logs/app.jsonl."""

import logging
from typing import Any

import structlog

from rfp_desk.config import LOG_FILE, LOG_LEVEL, VERBOSE_LOGGING

BoundLogger = structlog.stdlib.BoundLogger

# imaplib/smtplib are quiet; HTTP clients used by the LLM SDK are not
_QUIET_LOGGERS = ("httpx", "httpcore", "openai", "urllib3", "sqlalchemy.engine")

_configured = False


def _handler(handler: logging.Handler, renderer: Any, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.add_log_level,
                structlog.processors.TimeStamper(fmt="iso", utc=True),
            ],
        )
    )
    return handler


def _configure_logging() -> None:
    global _configured
    level = logging.DEBUG if VERBOSE_LOGGING else getattr(logging, LOG_LEVEL, logging.INFO)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(_handler(logging.StreamHandler(), structlog.dev.ConsoleRenderer(colors=True), level))
    root.addHandler(
        _handler(logging.FileHandler(LOG_FILE, encoding="utf-8"), structlog.processors.JSONRenderer(), level)
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str = "rfp_desk", **bindings: Any) -> BoundLogger:
    """Logger named after the module; event names are dotted (poller.scan_complete)."""
    if not _configured:
        _configure_logging()
    logger = structlog.get_logger(name)
    return logger.bind(**bindings) if bindings else logger


def bind_context(**context: Any) -> None:
    """Attach keys (e.g. scan_trigger) to every entry logged from the current task."""
    structlog.contextvars.bind_contextvars(**context)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


def log_agent_step(agent_name: str, step: str, data: Any = None) -> None:
    """One entry per LLM agent step on the rfp_desk.agents logger; data goes to DEBUG when verbose."""
    logger = get_logger("rfp_desk.agents", agent=agent_name)
    if data is None:
        logger.info(step)
    elif VERBOSE_LOGGING:
        logger.debug(step, data=data)
    else:
        logger.info(step, data=data)
