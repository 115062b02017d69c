"""
Tests for the ledger's tip synchronization rules.
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from tipsplit.config import LedgerDefaults
from tipsplit.core import TIP_PERCENTAGE_PRESETS, Ledger, round2
from tipsplit.models.audit import LedgerEventType
from tipsplit.models.split import LedgerField


class TestRound2:
    """round2 rounds half away from zero."""

    @pytest.mark.parametrize("value, expected", [
        ("0.125", "0.13"),
        ("-0.125", "-0.13"),
        ("0.124", "0.12"),
        ("3.33666", "3.34"),
        (2.675, "2.68"),
        (7, "7.00"),
    ])
    def test_round2(self, value, expected):
        assert round2(value) == Decimal(expected)


class TestLedgerDefaults:

    def test_defaults(self):
        """Test a fresh ledger starts from the documented defaults."""
        ledger = Ledger()
        assert ledger.subtotal == Decimal("10")
        assert ledger.tax == Decimal("2")
        assert ledger.tip_on_tax is False
        assert ledger.tip_percentage == Decimal("0.20")
        assert ledger.tip_amount == Decimal("2.00")
        assert ledger.split_count == 1

    def test_presets(self):
        assert TIP_PERCENTAGE_PRESETS == (
            Decimal("0"), Decimal("0.15"), Decimal("0.18"),
            Decimal("0.20"), Decimal("0.25"),
        )

    def test_monetary_inputs_are_stored_in_cents(self):
        ledger = Ledger(subtotal=10.005, tax="1.234")
        assert ledger.subtotal == Decimal("10.01")
        assert ledger.tax == Decimal("1.23")
        assert ledger.tip_amount == Decimal("2.00")

    @pytest.mark.parametrize("kwargs, expected_tip", [
        ({"subtotal": 0, "tax": 0}, Decimal("0.00")),
        ({"subtotal": "40"}, Decimal("8.00")),
        ({"subtotal": "40", "tip_percentage": "0.15"}, Decimal("6.00")),
        ({"subtotal": "40", "tax": "3.20", "tip_on_tax": True}, Decimal("8.64")),
        ({"subtotal": "33.33", "tip_percentage": "0.18"}, Decimal("6.00")),
    ])
    def test_constructor_tip_follows_percentage(self, kwargs, expected_tip):
        """A new ledger already satisfies tip_amount == round2(pct * base)."""
        ledger = Ledger(**kwargs)
        assert ledger.tip_amount == expected_tip
        assert ledger.tip_amount == round2(ledger.tip_percentage * ledger.tip_base)

    def test_from_settings(self):
        defaults = LedgerDefaults(subtotal=Decimal("40"), split_count=4)
        ledger = Ledger.from_settings(defaults)
        assert ledger.subtotal == Decimal("40.00")
        assert ledger.split_count == 4
        assert ledger.tip_amount == Decimal("8.00")
        assert ledger.tip_amount == round2(ledger.tip_percentage * ledger.tip_base)

    def test_from_settings_with_tip_on_tax(self):
        defaults = LedgerDefaults(
            subtotal=Decimal("50"),
            tax=Decimal("5"),
            tip_on_tax=True,
            tip_percentage=Decimal("0.18"),
        )
        ledger = Ledger.from_settings(defaults)
        assert ledger.tip_amount == Decimal("9.90")
        assert ledger.tip_amount == round2(ledger.tip_percentage * ledger.tip_base)

    def test_tip_base(self):
        ledger = Ledger()
        assert ledger.tip_base == Decimal("10.00")
        ledger.set_tip_on_tax(True)
        assert ledger.tip_base == Decimal("12.00")


class TestAmountEdits:
    """Subtotal and tax edits pull the tip amount along."""

    def test_set_subtotal_recomputes_tip(self):
        ledger = Ledger()
        events = ledger.set_subtotal(20)

        assert ledger.subtotal == Decimal("20.00")
        assert ledger.tip_amount == Decimal("4.00")
        assert [e.field for e in events] == [LedgerField.SUBTOTAL, LedgerField.TIP_AMOUNT]
        assert events[0].event_type == LedgerEventType.FIELD_EDITED
        assert events[1].event_type == LedgerEventType.FIELD_RECOMPUTED
        assert events[1].trigger == LedgerField.SUBTOTAL

    def test_set_tax_without_tip_on_tax_leaves_tip(self):
        """Tax is outside the tip base, so only the tax event is applied."""
        ledger = Ledger()
        events = ledger.set_tax(5)
        assert ledger.tax == Decimal("5.00")
        assert ledger.tip_amount == Decimal("2.00")
        assert [e.field for e in events] == [LedgerField.TAX]

    def test_set_tax_with_tip_on_tax(self):
        ledger = Ledger()
        ledger.set_tip_on_tax(True)
        ledger.set_tax(5)
        assert ledger.tip_amount == Decimal("3.00")

    def test_tip_amount_rounded_to_cents(self):
        ledger = Ledger()
        ledger.set_subtotal("33.33")
        # 0.20 * 33.33 = 6.666
        assert ledger.tip_amount == Decimal("6.67")


class TestTipSynchronization:
    """Tip percentage and tip amount follow each other."""

    def test_set_tip_percentage(self):
        ledger = Ledger()
        events = ledger.set_tip_percentage(Decimal("0.15"))

        assert ledger.tip_percentage == Decimal("0.15")
        assert ledger.tip_amount == Decimal("1.50")
        assert len(events) == 2
        assert events[1].old_value == Decimal("2.00")
        assert events[1].new_value == Decimal("1.50")

    def test_set_tip_amount(self):
        ledger = Ledger()
        events = ledger.set_tip_amount(3)

        assert ledger.tip_amount == Decimal("3.00")
        assert ledger.tip_percentage == Decimal("0.30")
        assert [e.field for e in events] == [LedgerField.TIP_AMOUNT, LedgerField.TIP_PERCENTAGE]

    def test_set_tip_amount_rounds_percentage_only(self):
        """The entered amount is kept even when the rounded percentage implies another."""
        ledger = Ledger()
        ledger.set_tip_amount("3.33")
        assert ledger.tip_percentage == Decimal("0.33")
        assert ledger.tip_amount == Decimal("3.33")

    def test_set_tip_on_tax(self):
        ledger = Ledger()
        events = ledger.set_tip_on_tax(True)

        assert ledger.tip_on_tax is True
        assert ledger.tip_amount == Decimal("2.40")
        assert [e.field for e in events] == [LedgerField.TIP_ON_TAX, LedgerField.TIP_AMOUNT]

    def test_tip_on_tax_with_zero_tax_only_flips_flag(self):
        """Base is unchanged, so the guard skips the tip write."""
        ledger = Ledger(tax=0)
        events = ledger.set_tip_on_tax(True)
        assert [e.field for e in events] == [LedgerField.TIP_ON_TAX]

    def test_zero_tip_base(self):
        """Dividing by a zero tip base defines the percentage as 0."""
        ledger = Ledger(subtotal=0, tax=0)
        ledger.set_tip_amount(5)

        assert ledger.tip_percentage == 0
        assert ledger.tip_amount == Decimal("5.00")
        assert ledger.derive().total == Decimal("5.00")

    def test_zero_tip_base_with_tip_on_tax(self):
        ledger = Ledger(subtotal=0, tax=0, tip_on_tax=True)
        ledger.set_tip_amount("1.25")
        assert ledger.tip_percentage == 0

    @pytest.mark.parametrize("percentage", ["0", "0.15", "0.18", "0.20", "0.25", "0.175"])
    @pytest.mark.parametrize("subtotal, tax", [
        ("0", "0"),
        ("10", "2"),
        ("33.33", "2.67"),
        ("47.89", "4.19"),
        ("123.45", "0"),
    ])
    @pytest.mark.parametrize("tip_on_tax", [False, True])
    def test_tip_amount_follows_percentage(self, percentage, subtotal, tax, tip_on_tax):
        ledger = Ledger()
        ledger.set_subtotal(subtotal)
        ledger.set_tax(tax)
        ledger.set_tip_on_tax(tip_on_tax)
        ledger.set_tip_percentage(percentage)

        base = Decimal(subtotal) + Decimal(tax) if tip_on_tax else Decimal(subtotal)
        snapshot = ledger.derive()
        assert snapshot.tip_amount == round2(Decimal(percentage) * base)

    @pytest.mark.parametrize("amount", ["0", "1.50", "2.00", "7.77", "19.99"])
    @pytest.mark.parametrize("subtotal", ["10", "33.33", "88.20"])
    def test_percentage_follows_tip_amount(self, amount, subtotal):
        ledger = Ledger()
        ledger.set_subtotal(subtotal)
        ledger.set_tip_amount(amount)

        snapshot = ledger.derive()
        assert snapshot.tip_percentage == round2(Decimal(amount) / Decimal(subtotal))


class TestIdempotence:
    """Re-submitting a value applies nothing."""

    @pytest.mark.parametrize("setter, value", [
        ("set_subtotal", "25.50"),
        ("set_tax", "3.10"),
        ("set_tip_on_tax", True),
        ("set_tip_percentage", "0.18"),
        ("set_tip_amount", "4.44"),
        ("set_split_count", 4),
    ])
    def test_second_call_is_noop(self, setter, value):
        ledger = Ledger()
        getattr(ledger, setter)(value)
        before = ledger.state()

        assert getattr(ledger, setter)(value) == []
        assert ledger.state() == before

    def test_equal_decimal_is_not_a_change(self):
        ledger = Ledger()
        assert ledger.set_subtotal("10.0") == []
        assert ledger.set_tip_percentage("0.2") == []

    def test_default_state_is_settled(self):
        """Re-entering the default tip amount does not move the percentage."""
        ledger = Ledger()
        assert ledger.set_tip_amount("2.00") == []


class TestSplitCount:

    def test_set_split_count(self):
        ledger = Ledger()
        events = ledger.set_split_count(3)
        assert ledger.split_count == 3
        assert [e.field for e in events] == [LedgerField.SPLIT_COUNT]

    def test_split_count_does_not_touch_tip(self):
        ledger = Ledger()
        ledger.set_split_count(7)
        assert ledger.tip_amount == Decimal("2.00")
        assert ledger.tip_percentage == Decimal("0.20")

    @pytest.mark.parametrize("count", [0, -1, 2.5, "3", True])
    def test_invalid_split_count(self, count):
        ledger = Ledger()
        with pytest.raises(ValueError):
            ledger.set_split_count(count)
        assert ledger.split_count == 1

    def test_constructor_rejects_invalid_split_count(self):
        with pytest.raises(ValueError, match="at least 1"):
            Ledger(split_count=0)


class TestListeners:
    """Listeners see events after the edit has settled."""

    def test_listener_receives_events(self):
        ledger = Ledger()
        received = []
        ledger.subscribe(received.append)

        events = ledger.set_subtotal(30)

        assert received == events

    def test_listener_sees_settled_state(self):
        ledger = Ledger()
        seen_tips = []
        ledger.subscribe(lambda event: seen_tips.append(ledger.tip_amount))

        ledger.set_subtotal(30)

        assert seen_tips == [Decimal("6.00"), Decimal("6.00")]

    def test_no_events_no_notification(self):
        ledger = Ledger()
        received = []
        ledger.subscribe(received.append)

        ledger.set_subtotal(10)

        assert received == []

    def test_unsubscribe(self):
        ledger = Ledger()
        received = []
        ledger.subscribe(received.append)
        ledger.unsubscribe(received.append)

        ledger.set_tax(4)

        assert received == []

    def test_events_carry_session_id(self):
        session_id = uuid4()
        ledger = Ledger(session_id=session_id)
        events = ledger.set_tip_on_tax(True)
        assert len(events) == 2
        assert all(e.session_id == session_id for e in events)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
