"""structlog setup for haccpctl.

All log output goes to stderr so stdout stays reserved for results:
console-rendered by default, one JSON object per line with ``--log-json``.
Stdlib loggers under ``haccpctl`` share the same pipeline. When a tenant
is given it is bound into every event, since each run acts for one tenant.
"""

from __future__ import annotations

import logging
import sys

import structlog


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    tenant: str | None = None,
) -> None:
    """Route structlog and stdlib logging to stderr.

    Args:
        verbose: ``haccpctl`` loggers emit DEBUG; otherwise WARNING and up.
        log_json: Render JSON lines instead of console text.
        tenant: Bound as ``tenant`` on every event when set.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    structlog.contextvars.clear_contextvars()
    if tenant:
        structlog.contextvars.bind_contextvars(tenant=tenant)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("haccpctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    # Engine and pool chatter stays hidden even under -v.
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
