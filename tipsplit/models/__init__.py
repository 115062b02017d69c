"""
Data Models Package

This package contains all Pydantic models used in Tip 'n Split.
Everything the engine hands to the presentation layer conforms to these schemas.
"""

from tipsplit.models.split import (
    LedgerField,
    LedgerState,
    Settlement,
    SplitSnapshot,
)
from tipsplit.models.audit import (
    LedgerEvent,
    LedgerEventBuilder,
    LedgerEventType,
)

__all__ = [
    # Split models
    "LedgerField",
    "LedgerState",
    "Settlement",
    "SplitSnapshot",
    # Event models
    "LedgerEvent",
    "LedgerEventBuilder",
    "LedgerEventType",
]
