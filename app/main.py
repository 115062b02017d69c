"""
Streamlit Frontend for Tip 'n Split

The form a diner fills in at the table.

DESIGN PRINCIPLES:
1. Every widget writes a raw value into the session and nothing else
2. Every displayed number comes from a fresh snapshot
3. Rounding discrepancies are shown, never silently absorbed

Widgets are keyed; after each edit the callback copies the ledger back into
the widget keys so the tip percentage and tip amount fields stay in step.
"""

from decimal import Decimal

import streamlit as st

from tipsplit.config import get_settings, validate_all_settings
from tipsplit.models.split import LedgerField, Settlement, SplitSnapshot
from tipsplit.orchestrator import SplitSession, create_app_components


st.set_page_config(
    page_title="Tip 'n Split",
    page_icon="🧾",
    layout="centered",
)

st.markdown("""
<style>
    .total-box {
        padding: 20px;
        background-color: #28a745;
        color: white;
        border-radius: 10px;
        margin: 10px 0;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
    }
</style>
""", unsafe_allow_html=True)


WIDGET_KEYS = {
    LedgerField.SUBTOTAL: "subtotal_input",
    LedgerField.TAX: "tax_input",
    LedgerField.TIP_ON_TAX: "tip_on_tax_input",
    LedgerField.TIP_PERCENTAGE: "tip_percentage_input",
    LedgerField.TIP_AMOUNT: "tip_amount_input",
    LedgerField.SPLIT_COUNT: "split_count_input",
}


def format_currency(amount: Decimal, currency_code: str) -> str:
    return f"{amount:,.2f} {currency_code}"


def format_percent(fraction: Decimal) -> str:
    return f"{fraction * 100:.0f}%"


def split_label(count: int) -> str:
    return "Just myself" if count == 1 else f"{count} people"


def sync_widgets(snapshot: SplitSnapshot) -> None:
    """Copy ledger inputs into the widget state."""
    st.session_state[WIDGET_KEYS[LedgerField.SUBTOTAL]] = float(snapshot.subtotal)
    st.session_state[WIDGET_KEYS[LedgerField.TAX]] = float(snapshot.tax)
    st.session_state[WIDGET_KEYS[LedgerField.TIP_ON_TAX]] = snapshot.tip_on_tax
    st.session_state[WIDGET_KEYS[LedgerField.TIP_PERCENTAGE]] = float(snapshot.tip_percentage * 100)
    st.session_state[WIDGET_KEYS[LedgerField.TIP_AMOUNT]] = float(snapshot.tip_amount)
    st.session_state[WIDGET_KEYS[LedgerField.SPLIT_COUNT]] = snapshot.split_count


def get_session() -> SplitSession:
    """Get or create this browser session's ledger."""
    if "split_session" not in st.session_state:
        st.session_state.split_session = create_app_components()
        sync_widgets(st.session_state.split_session.snapshot())
    return st.session_state.split_session


def on_edit(field: LedgerField) -> None:
    session = st.session_state.split_session
    raw = st.session_state[WIDGET_KEYS[field]]

    if field == LedgerField.TIP_PERCENTAGE:
        # Widget shows whole percent, ledger stores a fraction
        raw = Decimal(str(raw)) / 100

    session.edit(field, raw)
    sync_widgets(session.snapshot())


def on_preset(preset: Decimal) -> None:
    session = st.session_state.split_session
    session.edit(LedgerField.TIP_PERCENTAGE, preset)
    sync_widgets(session.snapshot())


SETTINGS_SECTIONS = [
    ("Ledger defaults", "ledger"),
    ("App settings", "app"),
]


def check_settings():
    """Stop the page if any configuration section fails to load."""
    status = validate_all_settings()

    failed = False
    for name, key in SETTINGS_SECTIONS:
        if not status.get(key, False):
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")
            failed = True

    if failed:
        st.stop()


def main():
    """Main application entry point."""
    check_settings()

    settings = get_settings()
    app_settings = settings.app
    session = get_session()
    currency = app_settings.currency_code

    st.title("🧾 Tip 'n Split")

    # Bill
    snapshot = session.snapshot()

    st.number_input(
        "Subtotal",
        key=WIDGET_KEYS[LedgerField.SUBTOTAL],
        min_value=0.0,
        step=0.01,
        format="%.2f",
        on_change=on_edit,
        args=(LedgerField.SUBTOTAL,),
    )
    st.number_input(
        f"Tax ({format_percent(snapshot.tax_rate)})",
        key=WIDGET_KEYS[LedgerField.TAX],
        min_value=0.0,
        step=0.01,
        format="%.2f",
        on_change=on_edit,
        args=(LedgerField.TAX,),
    )
    st.selectbox(
        "Split Between",
        options=list(range(1, app_settings.max_split_count + 1)),
        format_func=split_label,
        key=WIDGET_KEYS[LedgerField.SPLIT_COUNT],
        on_change=on_edit,
        args=(LedgerField.SPLIT_COUNT,),
    )

    # Tip
    st.markdown("---")
    st.subheader(f"Tip Amount for {format_currency(session.ledger.tip_base, currency)}")

    presets = settings.ledger.tip_presets
    for column, preset in zip(st.columns(len(presets)), presets):
        column.button(
            format_percent(preset),
            key=f"preset_{preset}",
            on_click=on_preset,
            args=(preset,),
            use_container_width=True,
        )

    st.number_input(
        "Tip Percentage",
        key=WIDGET_KEYS[LedgerField.TIP_PERCENTAGE],
        min_value=0.0,
        step=1.0,
        format="%.0f",
        on_change=on_edit,
        args=(LedgerField.TIP_PERCENTAGE,),
    )
    st.toggle(
        "Tip on Tax",
        key=WIDGET_KEYS[LedgerField.TIP_ON_TAX],
        on_change=on_edit,
        args=(LedgerField.TIP_ON_TAX,),
    )
    st.number_input(
        "Tip Amount",
        key=WIDGET_KEYS[LedgerField.TIP_AMOUNT],
        min_value=0.0,
        step=0.01,
        format="%.2f",
        on_change=on_edit,
        args=(LedgerField.TIP_AMOUNT,),
    )

    # Results
    snapshot = session.snapshot()
    render_total(snapshot, currency)
    if snapshot.is_split:
        render_split(snapshot, currency)


def render_total(snapshot: SplitSnapshot, currency: str):
    st.markdown(f"""
    <div class="total-box">
        <h4>Total</h4>
        <div class="big-number">{format_currency(snapshot.total, currency)}</div>
    </div>
    """, unsafe_allow_html=True)


def render_split(snapshot: SplitSnapshot, currency: str):
    """Render the per-person breakdown and any rounding warning."""
    if snapshot.settlement != Settlement.EXACT:
        st.warning(
            f"⚠️ This split will {snapshot.settlement.value} the check by "
            f"{format_currency(snapshot.discrepancy, currency)}"
        )

    st.subheader(f"Split {snapshot.split_count} Ways")
    st.metric("Each Pays", format_currency(snapshot.per_person_total, currency))

    col1, col2, col3 = st.columns(3)
    col1.metric("Subtotal", format_currency(snapshot.per_person_subtotal, currency))
    col2.metric("Tax", format_currency(snapshot.per_person_tax, currency))
    col3.metric("Tip", format_currency(snapshot.per_person_tip, currency))


if __name__ == "__main__":
    main()
