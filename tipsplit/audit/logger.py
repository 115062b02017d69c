"""
Change Logger

DESIGN DECISION: Every applied ledger write is logged.
This provides:
1. Traceability of how a total was reached
2. Debugging capability for the tip synchronization rules

The change logger:
- Is synchronous, the ledger has no suspension points
- Logs edits at info and recomputations at debug
- Supports a session ID to group the events of one UI session
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from tipsplit.core.ledger import Ledger
from tipsplit.models.audit import LedgerEvent


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through the stdlib root logger at the given level."""
    logging.basicConfig(format="%(message)s", level=level.upper())
    logging.getLogger().setLevel(level.upper())


class ChangeLogger:
    """
    Logs ledger events to the structured local log.

    Attach it to a ledger to log every write as it settles.
    """

    def __init__(self, logger=None):
        """
        Initialize change logger.

        Args:
            logger: structlog-compatible logger.
                    If None, the module logger is used.
        """
        self._logger = logger or structlog.get_logger(__name__)

    def log(self, event: LedgerEvent) -> None:
        log_dict = event.to_log_dict()

        if event.is_recompute:
            self._logger.debug("ledger_event", **log_dict)
        else:
            self._logger.info("ledger_event", **log_dict)

    def attach(self, ledger: Ledger) -> None:
        """Subscribe to a ledger's events."""
        ledger.subscribe(self.log)

    def detach(self, ledger: Ledger) -> None:
        ledger.unsubscribe(self.log)

    def log_session_started(self, session_id: UUID, ledger: Ledger) -> None:
        self._logger.info(
            "session_started",
            session_id=str(session_id),
            **{k: str(v) for k, v in ledger.state().model_dump().items()},
        )

    def log_error(
        self,
        error_type: str,
        error_message: str,
        session_id: Optional[UUID] = None,
    ) -> None:
        """Log a rejected edit or other failure reported by the presentation layer."""
        self._logger.error(
            "ledger_error",
            error_type=error_type,
            error_message=error_message,
            session_id=str(session_id) if session_id else None,
        )


def create_session_id() -> UUID:
    """
    Create a new session ID for grouping ledger events.

    Use this once per UI session and pass it to the ledger.
    """
    return uuid4()
