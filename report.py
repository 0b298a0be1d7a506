from decimal import ROUND_HALF_UP, Decimal
from typing import Container, Iterable, Mapping, Sequence

import pandas as pd

from config import CURRENCY_SYMBOL, UNKNOWN_NAME
from logic import compute_balances, compute_settlements
from models import Expense, Settlement

CENT = Decimal("0.01")


def to_cents(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal) -> str:
    cents = to_cents(amount)
    sign = "-" if cents < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(cents):.2f}"


def format_signed(amount: Decimal) -> str:
    cents = to_cents(amount)
    return format_money(cents) if cents < 0 else "+" + format_money(cents)


def balances_frame(balances: Mapping[str, Decimal], participant_names: Mapping[str, str]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"Participant": participant_names.get(pid, UNKNOWN_NAME), "Balance": float(to_cents(amt))}
            for pid, amt in balances.items()
        ],
        columns=["Participant", "Balance"],
    )


def settlements_frame(settlements: Iterable[Settlement]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"From": s.from_name, "To": s.to_name, "Amount": float(to_cents(s.amount))} for s in settlements],
        columns=["From", "To", "Amount"],
    )


def expenses_frame(expenses: Iterable[Expense], participant_names: Mapping[str, str]) -> pd.DataFrame:
    rows = []
    for e in expenses:
        rows.append({
            "Description": e.description,
            "Amount": float(to_cents(e.amount)),
            "Paid by": participant_names.get(e.paid_by, UNKNOWN_NAME),
            "Split between": ", ".join(participant_names.get(pid, UNKNOWN_NAME) for pid in e.split_between),
            "Date": e.timestamp.strftime("%Y-%m-%d"),
        })
    return pd.DataFrame(rows, columns=["Description", "Amount", "Paid by", "Split between", "Date"])


def group_summary(ledger, paid: Container[int] = ()) -> str:
    """Plain-text recap of the group, formatted to paste into a chat.

    ``paid`` holds the indexes of settlements already marked as paid; they get a
    check mark next to them.
    """
    participants, expenses = ledger.snapshot()
    names = {p.id: p.name for p in participants}
    balances = compute_balances(participants, expenses)
    settlements: Sequence[Settlement] = compute_settlements(balances, names)

    expense_lines = ["*Expenses:*"]
    for e in expenses:
        involved = ", ".join(names.get(pid, UNKNOWN_NAME) for pid in e.split_between)
        expense_lines.append(
            f"- {e.description}: {format_money(e.amount)}\n"
            f"  Paid by: {names.get(e.paid_by, UNKNOWN_NAME)}\n"
            f"  Split among: {involved}"
        )
    if len(expense_lines) == 1:
        expense_lines.append("No expenses recorded.")

    balance_lines = ["*Balances:*"]
    for pid, amt in balances.items():
        balance_lines.append(f"{names.get(pid, UNKNOWN_NAME)}: {format_signed(amt)}")

    settle_lines = ["*Settle Up:*"]
    for index, s in enumerate(settlements):
        label = f"{s.from_name} ➔ {s.to_name}: {format_money(s.amount)}"
        if index in paid:
            label += " ✅"
        settle_lines.append(label)
    if not settlements:
        settle_lines.append("All settled!")

    return "\n\n".join([
        "\n".join(expense_lines),
        "\n".join(balance_lines),
        "\n".join(settle_lines),
    ])
