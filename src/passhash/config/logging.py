"""Log routing for the passhash CLI.

Everything goes to stderr so stdout stays reserved for the derived password,
the fill script, or the ``--json`` payload.  Session events are emitted by
name (``fill.skipped``, ``tag.recalled``) and rendered either for a terminal
or, with ``--log-json``, as one JSON object per line.

Log events never carry the master key or a derived password.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Loggers held at WARNING even under --verbose.
_QUIET_LOGGERS = ("asyncio",)


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors shared by structlog events and plain stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Install the single stderr handler used by every passhash command.

    Safe to call once per CLI invocation; earlier handlers are replaced.

    Args:
        verbose: Let ``passhash.*`` loggers through at DEBUG. Otherwise only
            warnings (failed stores, failed injections) are shown.
        log_json: Render JSON lines instead of the console format.
    """
    pre_chain = _pre_chain()
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("passhash").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
