"""structlog setup for fmd.

Everything is written to stderr so stdout stays a clean path list. Modules
log through stdlib ``logging.getLogger(__name__)``; the records are
rendered by structlog, as colored console lines by default or as JSON
lines with ``--log-json``.

Per-file diagnostics (unreadable files, malformed frontmatter) are logged
at WARNING. The ``fmd`` logger sits at ERROR unless ``--verbose`` lowers
it to DEBUG, so those diagnostics only show up in verbose runs.
"""

from __future__ import annotations

import logging
import sys

import structlog

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route stdlib and structlog loggers to a single stderr handler.

    Safe to call more than once; each call replaces the root handler.

    Args:
        verbose: Lower the ``fmd`` logger to DEBUG (default: ERROR).
        log_json: Render JSON lines instead of console output.
    """
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_PRE_CHAIN,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger("fmd").setLevel(logging.DEBUG if verbose else logging.ERROR)
