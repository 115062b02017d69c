"""
Change Event Models for Tip 'n Split

Every write a ledger applies is described by one LedgerEvent.
This provides:
1. A notification the presentation layer can react to
2. Structured log records of each edit and its recomputation
3. A way to assert in tests that a guarded write did not happen

DESIGN DECISION: Events are only created for writes that change a value.
Re-submitting the value a field already holds produces no event.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from tipsplit.models.split import LedgerField


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LedgerEventType(str, Enum):
    """
    Kinds of ledger writes.

    FIELD_EDITED is the value a caller supplied.
    FIELD_RECOMPUTED is a value the ledger derived to stay consistent.
    """
    FIELD_EDITED = "field_edited"
    FIELD_RECOMPUTED = "field_recomputed"


class LedgerEvent(BaseModel):
    """A single applied write to a ledger field."""

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the write was applied (UTC)"
    )

    # Event classification
    event_type: LedgerEventType = Field(
        ...,
        description="Type of write"
    )
    field: LedgerField = Field(
        ...,
        description="Field that was written"
    )
    trigger: Optional[LedgerField] = Field(
        default=None,
        description="Edited field that caused a recompute"
    )

    # Values
    old_value: Any = None
    new_value: Any = None

    # Correlation - ties events to one UI session
    session_id: Optional[UUID] = Field(
        default=None,
        description="Session that owns the ledger"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    @property
    def is_recompute(self) -> bool:
        return self.event_type == LedgerEventType.FIELD_RECOMPUTED

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.

        Decimals are rendered as strings so no precision is lost in JSON.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "field": self.field.value,
            "trigger": self.trigger.value if self.trigger else None,
            "old_value": _render(self.old_value),
            "new_value": _render(self.new_value),
            "session_id": str(self.session_id) if self.session_id else None,
            "description": self.description,
        }


def _render(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    return value


class LedgerEventBuilder:
    """
    Helper class to build ledger events with common patterns.

    Usage:
        event = LedgerEventBuilder.field_edited(LedgerField.TAX, old, new)
        event = LedgerEventBuilder.field_recomputed(
            LedgerField.TIP_AMOUNT, old, new, trigger=LedgerField.TAX
        )
    """

    @staticmethod
    def field_edited(
        field: LedgerField,
        old_value: Any,
        new_value: Any,
        session_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.FIELD_EDITED,
            field=field,
            old_value=old_value,
            new_value=new_value,
            session_id=session_id,
            description=f"{field.value} set to {new_value}",
        )

    @staticmethod
    def field_recomputed(
        field: LedgerField,
        old_value: Any,
        new_value: Any,
        trigger: LedgerField,
        session_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.FIELD_RECOMPUTED,
            field=field,
            old_value=old_value,
            new_value=new_value,
            trigger=trigger,
            session_id=session_id,
            description=f"{field.value} recomputed to {new_value} after {trigger.value} changed",
        )
