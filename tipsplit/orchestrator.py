"""
Main Orchestrator for Tip 'n Split

This module ties together the components one UI session needs:
1. A ledger seeded from configuration
2. A focus navigator for the numeric inputs
3. A change logger attached to the ledger

DESIGN DECISION: The presentation layer talks to a SplitSession only.
It writes raw inputs through edit() and reads results through snapshot();
it never recomputes anything itself.
"""

from typing import Any, Callable, Optional
from uuid import UUID

from tipsplit.audit import ChangeLogger, configure_logging, create_session_id
from tipsplit.config import Settings, get_settings
from tipsplit.core import Ledger
from tipsplit.models.audit import LedgerEvent
from tipsplit.models.split import LedgerField, SplitSnapshot
from tipsplit.navigation import FocusedField, FocusNavigator


# Inputs reachable through keyboard focus, mapped to the ledger field they edit
FOCUS_TARGETS: dict[FocusedField, LedgerField] = {
    FocusedField.SUBTOTAL: LedgerField.SUBTOTAL,
    FocusedField.TAX: LedgerField.TAX,
    FocusedField.TIP_PERCENTAGE: LedgerField.TIP_PERCENTAGE,
    FocusedField.TIP_AMOUNT: LedgerField.TIP_AMOUNT,
}


class SplitSession:
    """
    One user's bill, from first keystroke to the per-person breakdown.

    Owned by a single UI thread.
    """

    def __init__(
        self,
        ledger: Ledger,
        navigator: Optional[FocusNavigator] = None,
        change_logger: Optional[ChangeLogger] = None,
        session_id: Optional[UUID] = None,
    ):
        self.ledger = ledger
        self.navigator = navigator or FocusNavigator()
        self.change_logger = change_logger
        self.session_id = session_id or ledger.session_id or create_session_id()

        if self.change_logger:
            self.change_logger.attach(self.ledger)

    def _setter(self, field: LedgerField) -> Callable[[Any], list[LedgerEvent]]:
        return {
            LedgerField.SUBTOTAL: self.ledger.set_subtotal,
            LedgerField.TAX: self.ledger.set_tax,
            LedgerField.TIP_ON_TAX: self.ledger.set_tip_on_tax,
            LedgerField.TIP_PERCENTAGE: self.ledger.set_tip_percentage,
            LedgerField.TIP_AMOUNT: self.ledger.set_tip_amount,
            LedgerField.SPLIT_COUNT: self.ledger.set_split_count,
        }[field]

    def edit(self, field: LedgerField, value: Any) -> list[LedgerEvent]:
        """
        Write a raw input into the ledger.

        Returns the events applied (empty if nothing changed).
        Invalid values (ValueError, or decimal.InvalidOperation for
        non-numeric input) are logged and re-raised.
        """
        try:
            return self._setter(field)(value)
        except (ValueError, ArithmeticError) as e:
            if self.change_logger:
                self.change_logger.log_error(
                    error_type=f"invalid_{field.value}",
                    error_message=str(e),
                    session_id=self.session_id,
                )
            raise

    def edit_focused(self, value: Any) -> list[LedgerEvent]:
        """
        Write a value into whichever input has keyboard focus.

        Returns no events when nothing is focused.
        """
        focused = self.navigator.current
        if focused is None:
            return []
        return self.edit(FOCUS_TARGETS[focused], value)

    def snapshot(self) -> SplitSnapshot:
        return self.ledger.derive()


def create_app_components(settings: Optional[Settings] = None) -> SplitSession:
    """
    Create a session wired from configuration.

    Configures log level, seeds the ledger with the configured defaults
    and attaches a change logger.
    """
    settings = settings or get_settings()

    configure_logging(settings.app.effective_log_level)

    session_id = create_session_id()
    ledger = Ledger.from_settings(settings.ledger, session_id=session_id)
    change_logger = ChangeLogger()
    change_logger.log_session_started(session_id, ledger)

    return SplitSession(
        ledger=ledger,
        navigator=FocusNavigator(),
        change_logger=change_logger,
        session_id=session_id,
    )
