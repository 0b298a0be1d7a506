import logging

import streamlit as st

from config import LOG_LEVEL
from errors import LedgerError
from ledger import Ledger
from report import (balances_frame, expenses_frame, format_money, group_summary,
                    settlements_frame)

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("split_app")

st.set_page_config(page_title="Split App", layout="wide")

# The ledger lives for the browser session only
if "ledger" not in st.session_state:
    st.session_state.ledger = Ledger()
if "paid_transfers" not in st.session_state:
    st.session_state.paid_transfers = set()
ledger: Ledger = st.session_state.ledger


def reset_paid_marks():
    # Transfers are recomputed after every change, old ticks no longer line up
    st.session_state.paid_transfers = set()


st.title("Split App: Split Bills in Seconds")
if ledger.expenses:
    st.caption(f"Total Expenses: {format_money(ledger.total_expenses())}")

# Sidebar: Participants
st.sidebar.header("Who's joining the split?")
with st.sidebar.form("add_participant_form", clear_on_submit=True):
    new_name = st.text_input("Enter a name (e.g., Sam)")
    if st.form_submit_button("Add"):
        try:
            person = ledger.add_participant(new_name)
        except LedgerError as e:
            logger.warning("Rejected participant %r: %s", new_name, e)
            st.warning(str(e))
        else:
            reset_paid_marks()
            st.success(f"Added {person.name}!")
            st.rerun()

participant_dict = ledger.participant_names()
if participant_dict:
    st.sidebar.write(f"### Current Participants ({len(participant_dict)}):")
    for pid, name in participant_dict.items():
        col1, col2 = st.sidebar.columns([3, 1])
        col1.write(f"👤 {name}")
        if col2.button("Remove", key=f"remove_{pid}"):
            try:
                dropped = ledger.remove_participant(pid)
            except LedgerError as e:
                logger.warning("Could not remove participant %s: %s", pid, e)
                st.sidebar.warning(str(e))
            else:
                reset_paid_marks()
                if dropped:
                    st.sidebar.warning(f"Removed {name} and {len(dropped)} expense(s) they were part of.")
                st.rerun()
else:
    st.sidebar.info("No people added yet. Add people to start splitting expenses!")

# Main: Add a Bill
st.header("Add a Bill or Expense")
if not participant_dict:
    st.info("Add everyone in the sidebar first.")
else:
    with st.form("add_expense_form", clear_on_submit=True):
        desc = st.text_input("What was the bill for? (e.g., Pizza)")
        amt = st.text_input("How much was it?", placeholder="0.00")
        payer = st.selectbox("Who paid?", options=list(participant_dict.keys()), format_func=lambda x: participant_dict[x])
        involved = st.multiselect(
            "Who shared this?",
            options=list(participant_dict.keys()),
            default=list(participant_dict.keys()),
            format_func=lambda x: participant_dict[x],
        )
        if st.form_submit_button("Split this bill"):
            try:
                ledger.add_expense(desc, amt, payer, involved)
            except LedgerError as e:
                logger.warning("Rejected expense %r: %s", desc, e)
                st.error(str(e))
            else:
                reset_paid_marks()
                st.success("Bill added and split!")
                st.rerun()

# Expenses list, newest first
if ledger.expenses:
    st.subheader("All Bills & Expenses")
    st.dataframe(expenses_frame(reversed(ledger.expenses), participant_dict), use_container_width=True)
    for expense in reversed(ledger.expenses):
        col1, col2 = st.columns([4, 1])
        col1.write(
            f"**{expense.description}**: {participant_dict.get(expense.paid_by)} paid "
            f"{format_money(expense.amount)} ({format_money(expense.share)} each)"
        )
        if col2.button("Delete", key=f"delete_{expense.id}"):
            try:
                ledger.remove_expense(expense.id)
            except LedgerError as e:
                logger.warning("Could not delete expense %s: %s", expense.id, e)
                st.warning(str(e))
            else:
                reset_paid_marks()
                st.success("Expense deleted!")
                st.rerun()
else:
    st.info("No bills yet. Add your first one above!")

# Summary
st.header("Who Owes What? 🧾")
balances = ledger.balances()
if balances and ledger.expenses:
    bal_df = balances_frame(balances, participant_dict)

    # Use color for balances: positive = green, negative = red
    def color_bal(val):
        color = 'green' if val >= 0 else 'red'
        return f'color: {color}'

    st.dataframe(
        bal_df.style
            .map(color_bal, subset=["Balance"])
            .format({"Balance": "{:.2f}"}),
        use_container_width=True,
    )

    st.subheader("Settle Up")
    settlements = ledger.settlements()
    if settlements:
        st.dataframe(settlements_frame(settlements), use_container_width=True)
        for index, s in enumerate(settlements):
            label = f"{s.from_name} ➔ {s.to_name}: {format_money(s.amount)}"
            checked = index in st.session_state.paid_transfers
            if st.checkbox(label, value=checked, key=f"settle_{index}_{s.from_id}_{s.to_id}"):
                st.session_state.paid_transfers.add(index)
            else:
                st.session_state.paid_transfers.discard(index)
    else:
        st.success("All settled up!")

    st.code(group_summary(ledger, st.session_state.paid_transfers), language="")
else:
    st.info("Add everyone and a bill to see who owes what.")
