"""
Core Data Models for Tip 'n Split

These models define the read-only views the presentation layer consumes.
They are designed to:
1. Be recomputed from the ledger, never edited in place
2. Carry Decimal amounts so cents survive every step
3. Be serializable for logging

DESIGN DECISION: Snapshots are frozen Pydantic models.
A stale snapshot can be read but never mutated back into the ledger.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class LedgerField(str, Enum):
    """The user-editable inputs held by a ledger."""
    SUBTOTAL = "subtotal"
    TAX = "tax"
    TIP_ON_TAX = "tip_on_tax"
    TIP_PERCENTAGE = "tip_percentage"
    TIP_AMOUNT = "tip_amount"
    SPLIT_COUNT = "split_count"


class Settlement(str, Enum):
    """
    How the rounded per-person shares compare to the true total.

    OVERPAY means the party collectively hands over more than the check.
    """
    EXACT = "exact"
    OVERPAY = "overpay"
    UNDERPAY = "underpay"


# =============================================================================
# LEDGER STATE
# =============================================================================

class LedgerState(BaseModel):
    """Raw inputs of a ledger at one point in time."""
    model_config = ConfigDict(frozen=True)

    subtotal: Decimal
    tax: Decimal
    tip_on_tax: bool
    tip_percentage: Decimal
    tip_amount: Decimal
    split_count: int = Field(ge=1)


# =============================================================================
# DERIVED SNAPSHOT
# =============================================================================

class SplitSnapshot(LedgerState):
    """
    Everything computed from a ledger.

    Per-person components are each rounded to cents independently, so
    split_count * per_person_total may miss the total by a few cents.
    That gap is reported as rounding_error and never corrected.
    """

    tip_base: Decimal = Field(
        ...,
        description="Amount the tip percentage applies to"
    )
    total: Decimal = Field(
        ...,
        description="Subtotal + tax + tip"
    )
    tax_rate: Decimal = Field(
        ...,
        description="Tax as a fraction of the subtotal (0 when subtotal is 0)"
    )

    per_person_subtotal: Decimal
    per_person_tax: Decimal
    per_person_tip: Decimal
    per_person_total: Decimal

    rounding_error: Decimal = Field(
        ...,
        description="Signed cents: positive overpays the check, negative underpays"
    )

    @property
    def is_split(self) -> bool:
        """More than one person is paying."""
        return self.split_count > 1

    @property
    def settlement(self) -> Settlement:
        if self.rounding_error > 0:
            return Settlement.OVERPAY
        if self.rounding_error < 0:
            return Settlement.UNDERPAY
        return Settlement.EXACT

    @property
    def discrepancy(self) -> Decimal:
        """Size of the rounding error regardless of direction."""
        return abs(self.rounding_error)
