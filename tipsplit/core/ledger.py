"""
Ledger - the editable inputs of one bill.

Tip percentage and tip amount are two views of one quantity. Each setter
writes its own field and then recomputes the other view inline:

    set_subtotal / set_tax / set_tip_on_tax / set_tip_percentage
        -> tip_amount = round2(tip_percentage * tip_base)
    set_tip_amount
        -> tip_percentage = round2(tip_amount / tip_base)   (0 if base is 0)

Every write is compared with the stored value first. An equal value is
neither stored nor announced, so re-submitting a field is a no-op and a
recompute never bounces back into the field that triggered it.

Listeners registered with subscribe() receive the applied events after the
whole edit has settled, never halfway through.
"""

from decimal import Decimal
from typing import Callable, Optional
from uuid import UUID

from tipsplit.config.settings import DEFAULT_TIP_PRESETS, LedgerDefaults
from tipsplit.core.money import Amount, round2, safe_divide, to_decimal
from tipsplit.core.splitter import derive
from tipsplit.models.audit import LedgerEvent, LedgerEventBuilder
from tipsplit.models.split import LedgerField, LedgerState, SplitSnapshot


TIP_PERCENTAGE_PRESETS = tuple(DEFAULT_TIP_PRESETS)

LedgerListener = Callable[[LedgerEvent], None]


class Ledger:
    """
    Mutable bill inputs for a single UI session.

    Monetary inputs are stored in cents. Tip percentage is stored as given.
    The starting tip amount is derived from the tip percentage.
    Not thread-safe: owned by one UI thread.
    """

    def __init__(
        self,
        subtotal: Amount = Decimal("10"),
        tax: Amount = Decimal("2"),
        tip_on_tax: bool = False,
        tip_percentage: Amount = Decimal("0.20"),
        split_count: int = 1,
        session_id: Optional[UUID] = None,
    ):
        self._subtotal = round2(subtotal)
        self._tax = round2(tax)
        self._tip_on_tax = bool(tip_on_tax)
        self._tip_percentage = to_decimal(tip_percentage)
        self._tip_amount = round2(self._tip_percentage * self.tip_base)
        self._split_count = _check_split_count(split_count)
        self._session_id = session_id
        self._listeners: list[LedgerListener] = []

    @classmethod
    def from_settings(
        cls,
        defaults: LedgerDefaults,
        session_id: Optional[UUID] = None,
    ) -> "Ledger":
        return cls(
            subtotal=defaults.subtotal,
            tax=defaults.tax,
            tip_on_tax=defaults.tip_on_tax,
            tip_percentage=defaults.tip_percentage,
            split_count=defaults.split_count,
            session_id=session_id,
        )

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def subtotal(self) -> Decimal:
        return self._subtotal

    @property
    def tax(self) -> Decimal:
        return self._tax

    @property
    def tip_on_tax(self) -> bool:
        return self._tip_on_tax

    @property
    def tip_percentage(self) -> Decimal:
        return self._tip_percentage

    @property
    def tip_amount(self) -> Decimal:
        return self._tip_amount

    @property
    def split_count(self) -> int:
        return self._split_count

    @property
    def tip_base(self) -> Decimal:
        """Amount the tip percentage applies to."""
        if self._tip_on_tax:
            return self._subtotal + self._tax
        return self._subtotal

    @property
    def session_id(self) -> Optional[UUID]:
        return self._session_id

    def state(self) -> LedgerState:
        return LedgerState(
            subtotal=self._subtotal,
            tax=self._tax,
            tip_on_tax=self._tip_on_tax,
            tip_percentage=self._tip_percentage,
            tip_amount=self._tip_amount,
            split_count=self._split_count,
        )

    def derive(self) -> SplitSnapshot:
        """Compute a fresh snapshot. Never cached."""
        return derive(self.state())

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def subscribe(self, listener: LedgerListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: LedgerListener) -> None:
        self._listeners.remove(listener)

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    def set_subtotal(self, value: Amount) -> list[LedgerEvent]:
        """Store the subtotal; tip amount follows the tip percentage."""
        events = self._edit(LedgerField.SUBTOTAL, round2(value))
        events += self._sync_tip_amount(LedgerField.SUBTOTAL)
        return self._publish(events)

    def set_tax(self, value: Amount) -> list[LedgerEvent]:
        """Store the tax; tip amount follows the tip percentage."""
        events = self._edit(LedgerField.TAX, round2(value))
        events += self._sync_tip_amount(LedgerField.TAX)
        return self._publish(events)

    def set_tip_on_tax(self, flag: bool) -> list[LedgerEvent]:
        events = self._edit(LedgerField.TIP_ON_TAX, bool(flag))
        events += self._sync_tip_amount(LedgerField.TIP_ON_TAX)
        return self._publish(events)

    def set_tip_percentage(self, value: Amount) -> list[LedgerEvent]:
        events = self._edit(LedgerField.TIP_PERCENTAGE, to_decimal(value))
        events += self._sync_tip_amount(LedgerField.TIP_PERCENTAGE)
        return self._publish(events)

    def set_tip_amount(self, value: Amount) -> list[LedgerEvent]:
        """
        Store the tip amount and re-derive the tip percentage from it.

        The percentage is rounded to two places. With a zero tip base the
        percentage becomes 0.
        """
        events = self._edit(LedgerField.TIP_AMOUNT, round2(value))
        events += self._sync_tip_percentage(LedgerField.TIP_AMOUNT)
        return self._publish(events)

    def set_split_count(self, count: int) -> list[LedgerEvent]:
        """
        Store the number of people. Nothing else depends on it.

        Raises:
            ValueError: count is not an integer of at least 1.
        """
        events = self._edit(LedgerField.SPLIT_COUNT, _check_split_count(count))
        return self._publish(events)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _sync_tip_amount(self, trigger: LedgerField) -> list[LedgerEvent]:
        update = round2(self._tip_percentage * self.tip_base)
        return self._recompute(LedgerField.TIP_AMOUNT, update, trigger)

    def _sync_tip_percentage(self, trigger: LedgerField) -> list[LedgerEvent]:
        update = round2(safe_divide(self._tip_amount, self.tip_base))
        return self._recompute(LedgerField.TIP_PERCENTAGE, update, trigger)

    def _edit(self, field: LedgerField, value) -> list[LedgerEvent]:
        old = self._write(field, value)
        if old is _UNCHANGED:
            return []
        return [LedgerEventBuilder.field_edited(
            field, old, value, session_id=self._session_id,
        )]

    def _recompute(
        self,
        field: LedgerField,
        value,
        trigger: LedgerField,
    ) -> list[LedgerEvent]:
        old = self._write(field, value)
        if old is _UNCHANGED:
            return []
        return [LedgerEventBuilder.field_recomputed(
            field, old, value, trigger, session_id=self._session_id,
        )]

    def _write(self, field: LedgerField, value):
        attr = f"_{field.value}"
        old = getattr(self, attr)
        if old == value:
            return _UNCHANGED
        setattr(self, attr, value)
        return old

    def _publish(self, events: list[LedgerEvent]) -> list[LedgerEvent]:
        for event in events:
            for listener in list(self._listeners):
                listener(event)
        return events

    def __repr__(self) -> str:
        return (
            f"<Ledger subtotal={self._subtotal} tax={self._tax} "
            f"tip={self._tip_amount} ({self._tip_percentage}) "
            f"tip_on_tax={self._tip_on_tax} split={self._split_count}>"
        )


_UNCHANGED = object()


def _check_split_count(count: int) -> int:
    if isinstance(count, bool) or not isinstance(count, int):
        raise ValueError(f"Split count must be an integer, got {count!r}")
    if count < 1:
        raise ValueError(f"Split count must be at least 1, got {count}")
    return count
