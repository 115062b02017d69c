"""
Splitter - pure derivation of totals and per-person shares.

Subtotal, tax and tip are each divided by the split count and rounded to
cents on their own. Their sum is what each person pays. Because of the
three independent roundings the party can collectively over- or
under-collect; the gap is returned as rounding_error and left for the
presentation layer to warn about.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, Union

from tipsplit.core.money import round2, safe_divide
from tipsplit.models.split import LedgerState, SplitSnapshot

if TYPE_CHECKING:
    from tipsplit.core.ledger import Ledger


def derive(ledger: Union["Ledger", LedgerState]) -> SplitSnapshot:
    """
    Compute a snapshot from a Ledger or a LedgerState.

    Side-effect free; call it again after every edit.
    """
    state = ledger if isinstance(ledger, LedgerState) else ledger.state()

    split_count = Decimal(state.split_count)
    tip_base = state.subtotal + state.tax if state.tip_on_tax else state.subtotal
    total = state.subtotal + state.tax + state.tip_amount

    per_person_subtotal = round2(state.subtotal / split_count)
    per_person_tax = round2(state.tax / split_count)
    per_person_tip = round2(state.tip_amount / split_count)
    per_person_total = per_person_subtotal + per_person_tax + per_person_tip

    rounding_error = round2(split_count * per_person_total - total)

    return SplitSnapshot(
        **state.model_dump(),
        tip_base=tip_base,
        total=total,
        tax_rate=safe_divide(state.tax, state.subtotal),
        per_person_subtotal=per_person_subtotal,
        per_person_tax=per_person_tax,
        per_person_tip=per_person_tip,
        per_person_total=per_person_total,
        rounding_error=rounding_error,
    )
