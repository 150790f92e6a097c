"""
Streamlit Frontend for Bill Splitter

One screen with three cards:
1. Participants - add and remove people
2. Transaction form - compose a new bill or edit an existing one
3. Summary - balances per person and the list of all bills

The page holds no state of its own. Every widget callback calls one
LedgerStateManager method; before the widgets are drawn, their values
are copied from the ledger so the form always shows the current draft.

Run with:
    streamlit run app/main.py
"""

import streamlit as st

from bill_splitter.config import get_settings
from bill_splitter.formatting import html_text, markdown_text, resolve_currency
from bill_splitter.ledger import LedgerError, LedgerStateManager
from bill_splitter.models.ledger import DraftField
from bill_splitter.orchestrator import create_ledger


# Page configuration
st.set_page_config(
    page_title="Bill Splitter",
    page_icon="🧾",
    layout="centered",
    initial_sidebar_state="collapsed",
)

# Custom CSS for balance colors and list rows
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .row-box {
        padding: 8px 12px;
        background-color: #f3f4f6;
        border-radius: 6px;
        margin: 4px 0;
    }
    .balance-positive {
        color: #16a34a;
        font-weight: 600;
    }
    .balance-negative {
        color: #dc2626;
        font-weight: 600;
    }
</style>
""", unsafe_allow_html=True)


# Widget keys
NEW_PARTICIPANT_KEY = "new_participant_name"
TITLE_KEY = "draft_title"
AMOUNT_KEY = "draft_amount"
PAYER_KEY = "draft_payer"
SPLIT_KEY = "draft_split"
ERROR_KEY = "flash_error"


def contribution_key(participant_id: str) -> str:
    return f"contribution_{participant_id}"


def get_ledger() -> LedgerStateManager:
    """Get or create this session's ledger."""
    if "ledger" not in st.session_state:
        st.session_state.ledger = create_ledger(use_storage=True)
    return st.session_state.ledger


# =============================================================================
# CALLBACKS - one ledger operation each
# =============================================================================

def on_add_participant():
    ledger = get_ledger()
    ledger.add_participant(st.session_state.get(NEW_PARTICIPANT_KEY, ""))
    st.session_state[NEW_PARTICIPANT_KEY] = ""


def on_remove_participant(participant_id: str):
    get_ledger().remove_participant(participant_id)
    st.session_state.pop(contribution_key(participant_id), None)


def on_field_change(field: DraftField, widget_key: str):
    get_ledger().update_field(field, st.session_state.get(widget_key) or "")


def on_contribution_change(participant_id: str):
    value = st.session_state.get(contribution_key(participant_id)) or ""
    get_ledger().update_contribution(participant_id, value)


def on_toggle_split():
    get_ledger().toggle_split_bill()


def on_submit():
    get_ledger().submit()


def on_cancel_edit():
    get_ledger().cancel_edit()


def on_edit(transaction_id: str):
    try:
        get_ledger().edit(transaction_id)
    except LedgerError as e:
        st.session_state[ERROR_KEY] = str(e)


def on_delete(transaction_id: str):
    get_ledger().delete(transaction_id)


# =============================================================================
# RENDERING
# =============================================================================

def sync_widgets(ledger: LedgerStateManager):
    """Copy the draft into the form widgets before they are drawn."""
    draft = ledger.draft
    participant_ids = {p.id for p in ledger.participants}

    st.session_state[TITLE_KEY] = draft.title
    st.session_state[AMOUNT_KEY] = draft.amount
    st.session_state[PAYER_KEY] = draft.payer if draft.payer in participant_ids else ""
    st.session_state[SPLIT_KEY] = draft.is_split_bill

    for participant_id in participant_ids:
        st.session_state[contribution_key(participant_id)] = (
            draft.contributions.get(participant_id, "")
        )


def render_participants(ledger: LedgerStateManager):
    """Render the participants card."""
    st.subheader("👥 Participants")

    col1, col2 = st.columns([4, 1])
    with col1:
        st.text_input(
            "Participant name",
            key=NEW_PARTICIPANT_KEY,
            placeholder="Enter participant name",
            label_visibility="collapsed",
        )
    with col2:
        st.button("➕ Add", on_click=on_add_participant, type="primary")

    for participant in ledger.participants:
        col1, col2 = st.columns([6, 1])
        with col1:
            st.markdown(
                f'<div class="row-box">{html_text(participant.name)}</div>',
                unsafe_allow_html=True,
            )
        with col2:
            st.button(
                "🗑️",
                key=f"remove_{participant.id}",
                on_click=on_remove_participant,
                args=(participant.id,),
                help=f"Remove {markdown_text(participant.name)}",
            )


def render_transaction_form(ledger: LedgerStateManager):
    """Render the new/edit transaction card."""
    currency = resolve_currency()
    participants = ledger.participants
    names = {p.id: p.name for p in participants}

    st.subheader("✏️ Edit Transaction" if ledger.is_editing else "🧾 New Transaction")

    col1, col2 = st.columns(2)
    with col1:
        st.text_input(
            "Title",
            key=TITLE_KEY,
            placeholder="Transaction title",
            on_change=on_field_change,
            args=(DraftField.TITLE, TITLE_KEY),
        )
    with col2:
        st.text_input(
            f"Amount ({currency.code})",
            key=AMOUNT_KEY,
            placeholder="Amount",
            on_change=on_field_change,
            args=(DraftField.AMOUNT, AMOUNT_KEY),
        )

    st.selectbox(
        "Payer",
        options=[""] + [p.id for p in participants],
        format_func=lambda pid: names.get(pid, "Select payer"),
        key=PAYER_KEY,
        on_change=on_field_change,
        args=(DraftField.PAYER, PAYER_KEY),
    )

    st.checkbox(
        "Split bill equally",
        key=SPLIT_KEY,
        on_change=on_toggle_split,
    )

    st.markdown("**Contributions**")
    draft = ledger.draft
    for participant in participants:
        st.text_input(
            markdown_text(participant.name),
            key=contribution_key(participant.id),
            placeholder="Contribution amount",
            disabled=draft.is_split_bill,
            on_change=on_contribution_change,
            args=(participant.id,),
        )

    summary = ledger.validation_summary()
    if summary:
        st.error(summary)

    col1, col2 = st.columns([3, 1])
    with col1:
        st.button(
            f"{ledger.submit_label} Transaction",
            on_click=on_submit,
            type="primary",
        )
    if ledger.is_editing:
        with col2:
            st.button("Cancel", on_click=on_cancel_edit)


def render_summary(ledger: LedgerStateManager):
    """Render balances and the transaction list."""
    st.subheader("📊 Summary")

    st.markdown("#### Balance")
    for row in ledger.balance_rows():
        css = "balance-positive" if row.is_positive else "balance-negative"
        st.markdown(
            f'<div class="row-box">{html_text(row.name)} '
            f'<span style="float:right" class="{css}">{row.formatted}</span></div>',
            unsafe_allow_html=True,
        )

    st.markdown("#### All Transactions")
    rows = ledger.transaction_rows()
    if not rows:
        st.info("No transactions yet. Use the form above to add one.")

    for row in rows:
        with st.container(border=True):
            col1, col2 = st.columns([3, 1])
            with col1:
                st.markdown(f"**{markdown_text(row.title)}**")
                st.caption(f"Payer: {markdown_text(row.payer_name)}")
                st.caption(row.split_label)
            with col2:
                st.markdown(f"**{row.formatted_amount}**")
                st.button(
                    "✏️ Edit",
                    key=f"edit_{row.transaction_id}",
                    on_click=on_edit,
                    args=(row.transaction_id,),
                )
                st.button(
                    "🗑️ Delete",
                    key=f"delete_{row.transaction_id}",
                    on_click=on_delete,
                    args=(row.transaction_id,),
                )


def render_sidebar():
    """Render configuration status in the sidebar."""
    from bill_splitter.config import validate_all_settings

    st.sidebar.title("🧾 Bill Splitter")
    st.sidebar.markdown("---")
    st.sidebar.markdown("### Configuration")

    status = validate_all_settings()

    sections = [
        ("Local storage", "storage"),
        ("Currency", "currency"),
        ("Logging", "app"),
    ]

    for name, key in sections:
        if status.get(key, False):
            st.sidebar.success(f"✅ {name}")
        else:
            error = status.get(f"{key}_error", "Invalid")
            st.sidebar.error(f"❌ {name} - {markdown_text(error)}")

    if status.get("storage", False):
        st.sidebar.caption(f"Participants are saved to `{get_settings().storage.path}`")

    st.sidebar.markdown("---")
    st.sidebar.markdown(
        """
        **How to use:**
        1. Add everyone who shares the bills
        2. Enter each bill and who paid it
        3. Split equally or type each share
        4. Check the balances below
        """
    )


def main():
    """Main application entry point."""
    ledger = get_ledger()

    render_sidebar()
    st.title("🧾 Bill Splitter")

    error = st.session_state.pop(ERROR_KEY, None)
    if error:
        st.error(error)

    sync_widgets(ledger)

    render_participants(ledger)
    st.markdown("---")
    render_transaction_form(ledger)
    st.markdown("---")
    render_summary(ledger)


if __name__ == "__main__":
    main()
