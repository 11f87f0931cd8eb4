"""Structured logging for the SkillSwap API.

structlog events and plain stdlib records (uvicorn, httpx) go through one
handler on the root logger, so every line of output has the same shape.
"""

import logging
import sys

import structlog

HANDLER_NAME = "skillswap"


def _shared_processors(service: str) -> list:
    def add_service(_logger, _method_name, event_dict):
        event_dict["service"] = service
        return event_dict

    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_service,
    ]


def setup_logging(service: str = "skillswap-api", level: str = "info", json_output: bool = True, stream=None) -> None:
    """Install the SkillSwap handler on the root logger and configure structlog.

    Calling it again replaces the previous handler instead of stacking a
    second one. ``json_output=False`` renders for a terminal.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_shared_processors(service),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    for old in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(log_level)

    structlog.configure(
        processors=[structlog.stdlib.filter_by_level]
        + _shared_processors(service)
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
