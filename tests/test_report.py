from decimal import Decimal

import pytest

from report import (balances_frame, expenses_frame, format_money, format_signed,
                    group_summary, settlements_frame)


@pytest.mark.parametrize("amount, expected", [
    (Decimal("12.5"), "₹12.50"),
    (Decimal("0.005"), "₹0.01"),
    (Decimal("-33.333333"), "-₹33.33"),
    (Decimal("1E-26"), "₹0.00"),
])
def test_format_money(amount, expected):
    assert format_money(amount) == expected


def test_format_signed():
    assert format_signed(Decimal("45")) == "+₹45.00"
    assert format_signed(Decimal("-45")) == "-₹45.00"
    assert format_signed(Decimal("-1E-26")) == "+₹0.00"


def test_frames(ledger, abc):
    a, b, c = abc
    ledger.add_expense("Dinner", 100, a.id, [a.id, b.id, c.id])
    names = ledger.participant_names()

    bal = balances_frame(ledger.balances(), names)
    assert list(bal["Participant"]) == ["A", "B", "C"]
    assert list(bal["Balance"]) == [66.67, -33.33, -33.33]

    settle = settlements_frame(ledger.settlements())
    assert settle.to_dict("records") == [
        {"From": "B", "To": "A", "Amount": 33.33},
        {"From": "C", "To": "A", "Amount": 33.33},
    ]

    exp = expenses_frame(ledger.expenses, names)
    assert exp.to_dict("records") == [{
        "Description": "Dinner",
        "Amount": 100.0,
        "Paid by": "A",
        "Split between": "A, B, C",
        "Date": "2024-05-01",
    }]


def test_empty_frames_keep_columns():
    assert list(settlements_frame([]).columns) == ["From", "To", "Amount"]
    assert balances_frame({}, {}).empty


def test_group_summary(ledger, abc):
    a, b, c = abc
    ledger.add_expense("Dinner", 300, a.id, [a.id, b.id, c.id])

    summary = group_summary(ledger, paid={1})

    assert summary == (
        "*Expenses:*\n"
        "- Dinner: ₹300.00\n"
        "  Paid by: A\n"
        "  Split among: A, B, C\n"
        "\n"
        "*Balances:*\n"
        "A: +₹200.00\n"
        "B: -₹100.00\n"
        "C: -₹100.00\n"
        "\n"
        "*Settle Up:*\n"
        "B ➔ A: ₹100.00\n"
        "C ➔ A: ₹100.00 ✅"
    )


def test_group_summary_when_empty(ledger):
    ledger.add_participant("Solo")
    summary = group_summary(ledger)

    assert "No expenses recorded." in summary
    assert "Solo: +₹0.00" in summary
    assert summary.endswith("All settled!")


def test_group_summary_reads_one_snapshot(ledger, abc, monkeypatch):
    a, b, _ = abc
    ledger.add_expense("Coffee", 8, a.id, [a.id, b.id])

    def fail():
        raise AssertionError("summary must not re-read the ledger")

    for name in ("balances", "settlements", "participant_names"):
        monkeypatch.setattr(ledger, name, fail)

    assert group_summary(ledger).endswith("B ➔ A: ₹4.00")


def test_group_summary_at_largest_amount(ledger, abc):
    a, b, c = abc
    ledger.add_expense("Island", "1000000000000", a.id, [a.id, b.id, c.id])

    assert "A: +₹666666666666.67" in group_summary(ledger)
