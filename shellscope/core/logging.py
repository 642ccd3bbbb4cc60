"""Structured logging via structlog.

Configures structlog once at service startup. The analysis pipeline itself
logs through stdlib ``logging.getLogger(__name__)``; the stdlib bridge at
the bottom of `configure_structlog` routes those records to stdout too.

Renderer selection:
  debug=True  - `ConsoleRenderer` with colours for local development.
  debug=False - `JSONRenderer` for machine-parseable logs in production.

The `request_id` from `shellscope.core.middleware` is injected into every
structlog event emitted inside a request.
"""

from __future__ import annotations

import logging
import sys

import structlog

from shellscope.core.middleware import get_request_id


def _inject_request_id(
    logger: logging.Logger,
    method: str,
    event_dict: dict,
) -> dict:
    """Structlog processor: inject request_id from the ContextVar."""
    request_id = get_request_id()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def configure_structlog(debug: bool = True) -> None:
    """Configure structlog for the application lifetime.

    Call once from `create_app()` before any routes log anything.
    Calling it multiple times is safe.
    """
    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _inject_request_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )
