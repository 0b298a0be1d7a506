import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List, Mapping

from config import MAX_AMOUNT, SETTLE_EPSILON, UNKNOWN_NAME
from errors import ValidationError
from models import Expense, Participant, Settlement

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def parse_amount(value) -> Decimal:
    # Floats go through str() so 0.1 stays 0.1 rather than its binary expansion
    if isinstance(value, bool):
        raise ValidationError(f"Amount must be a number, got {value!r}")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError(f"Amount must be a number, got {value!r}") from None
    if not amount.is_finite():
        raise ValidationError("Amount must be a finite number.")
    if amount <= 0:
        raise ValidationError("Amount must be greater than zero.")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"Amount must not exceed {MAX_AMOUNT:,f}.")
    return amount


def compute_balances(participants: Iterable[Participant], expenses: Iterable[Expense]) -> Dict[str, Decimal]:
    # Returns {participant_id: net_balance}, positive means the others owe them
    balances = {p.id: ZERO for p in participants}
    for expense in expenses:
        balances[expense.paid_by] = balances.get(expense.paid_by, ZERO) + expense.amount
        share = expense.share
        for pid in expense.split_between:
            balances[pid] = balances.get(pid, ZERO) - share
    return balances


def compute_settlements(balances: Mapping[str, Decimal], participant_names: Mapping[str, str]) -> List[Settlement]:
    """Greedily match the largest debtor with the largest creditor.

    Both sides are sorted by amount, largest first. ``sorted`` is stable, so
    equal amounts keep the order of ``balances`` (participant insertion order).
    The result has at most ``len(creditors) + len(debtors) - 1`` transfers and
    every participant ends within ``SETTLE_EPSILON`` of zero once they are paid.
    """
    creditors = [[pid, bal] for pid, bal in balances.items() if bal > SETTLE_EPSILON]
    debtors = [[pid, -bal] for pid, bal in balances.items() if bal < -SETTLE_EPSILON]
    creditors = sorted(creditors, key=lambda x: x[1], reverse=True)
    debtors = sorted(debtors, key=lambda x: x[1], reverse=True)

    def name(pid):
        return participant_names.get(pid, UNKNOWN_NAME)

    transfers = []
    i = j = 0
    while i < len(creditors) and j < len(debtors):
        creditor, debtor = creditors[i], debtors[j]
        amt = min(creditor[1], debtor[1])
        if amt > SETTLE_EPSILON:
            transfers.append(Settlement(
                from_id=debtor[0],
                from_name=name(debtor[0]),
                to_id=creditor[0],
                to_name=name(creditor[0]),
                amount=amt,
            ))
        creditor[1] -= amt
        debtor[1] -= amt
        if creditor[1] < SETTLE_EPSILON:
            i += 1
        if debtor[1] < SETTLE_EPSILON:
            j += 1

    logger.debug("Resolved %d creditors and %d debtors into %d transfers",
                 len(creditors), len(debtors), len(transfers))
    return transfers


def total_expenses(expenses: Iterable[Expense]) -> Decimal:
    return sum((e.amount for e in expenses), ZERO)
